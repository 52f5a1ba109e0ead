import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

DEFAULT_CATEGORY_COLOR = "#6b66da"
DEFAULT_CATEGORY_ICON = "🚀"


class Category(SQLModel, table=True):
    """A project category shown on explore pages."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(unique=True, index=True)
    color: str = DEFAULT_CATEGORY_COLOR
    icon: str = DEFAULT_CATEGORY_ICON


class ProjectCategory(SQLModel, table=True):
    """Join row linking a project to one of its categories."""

    __table_args__ = (UniqueConstraint("project_id", "category_id"),)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    project_id: str = Field(foreign_key="project.id", index=True)
    category_id: str = Field(foreign_key="category.id", index=True)
