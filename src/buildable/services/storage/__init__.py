from .category_repository import CategoryRepository
from .project_repository import ProjectRepository
from .rating_repository import RatingRepository
from .store import ShowcaseStore
from .user_repository import UserRepository

__all__ = [
    "CategoryRepository",
    "ProjectRepository",
    "RatingRepository",
    "ShowcaseStore",
    "UserRepository",
]
