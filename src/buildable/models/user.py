"""Developer account model."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from .timestamps import UTCTimestamp, utc_now


class User(SQLModel, table=True):
    """A registered developer. Email is stored lower-cased so it is unique case-insensitively."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str | None = None
    bio: str | None = None
    avatar: str | None = None
    github: str | None = None
    website: str | None = None
    twitter: str | None = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp, index=True)
