import uuid
from datetime import datetime

from sqlalchemy import Column
from sqlmodel import JSON, Field, SQLModel

from .timestamps import UTCTimestamp, utc_now


class Project(SQLModel, table=True):
    """A submitted showcase project."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str
    description: str
    category: str = Field(index=True)
    status: str = "completed"  # "completed", "in-progress", "prototype"
    tech_stack: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    images: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    github_url: str | None = None
    demo_url: str | None = None
    author_id: str = Field(foreign_key="user.id", index=True)
    featured: bool = False
    published: bool = True
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp)
