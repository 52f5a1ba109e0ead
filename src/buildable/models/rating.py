import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from .timestamps import UTCTimestamp, utc_now

MIN_STARS = 1
MAX_STARS = 5
MAX_COMMENT_LENGTH = 500


class Rating(SQLModel, table=True):
    """A 1-5 star rating a developer gave a project. One per (user, project)."""

    __table_args__ = (
        UniqueConstraint("user_id", "project_id"),
        CheckConstraint(f"rating >= {MIN_STARS} AND rating <= {MAX_STARS}"),
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    project_id: str = Field(foreign_key="project.id", index=True)
    rating: int
    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp)
