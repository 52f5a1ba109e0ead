from .category import Category, ProjectCategory
from .project import Project
from .rating import Rating
from .user import User

__all__ = ["Category", "Project", "ProjectCategory", "Rating", "User"]
