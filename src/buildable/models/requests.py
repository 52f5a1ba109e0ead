"""Request records validated at the write boundary."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError, field_validator

from buildable.core.errors import BadRequestError

from .category import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON
from .rating import MAX_COMMENT_LENGTH, MAX_STARS, MIN_STARS

ProjectKind = Literal[
    "web-app",
    "mobile-app",
    "desktop-app",
    "library",
    "tool",
    "game",
    "ai-ml",
    "blockchain",
    "other",
]

RequestT = TypeVar("RequestT", bound=BaseModel)


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class RatingCreate(_Request):
    rating: int = Field(..., ge=MIN_STARS, le=MAX_STARS, strict=True)
    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class RatingUpdate(_Request):
    rating: int | None = Field(default=None, ge=MIN_STARS, le=MAX_STARS, strict=True)
    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class CategoryCreate(_Request):
    name: str = Field(..., min_length=2, max_length=50)
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: str = Field(default=DEFAULT_CATEGORY_ICON, max_length=10)


class UserCreate(_Request):
    name: str = Field(..., min_length=2, max_length=50)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password_hash: str | None = None
    bio: str | None = Field(default=None, max_length=500)
    avatar: str | None = None
    github: str | None = None
    website: str | None = None
    twitter: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ProjectCreate(_Request):
    """Project submission payload.

    ``tech_stack`` and ``images`` are real ordered lists, stored as JSON columns.
    """

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    category: ProjectKind
    status: Literal["completed", "in-progress", "prototype"] = "completed"
    tech_stack: list[str] = Field(default_factory=list, max_length=20)
    images: list[HttpUrl] = Field(default_factory=list, max_length=10)
    github_url: HttpUrl | None = None
    demo_url: HttpUrl | None = None
    categories: list[str] = Field(default_factory=list)
    featured: bool = False
    published: bool = True

    @field_validator("tech_stack")
    @classmethod
    def validate_tech_stack(cls, v: list[str]) -> list[str]:
        for tech in v:
            if not tech or len(tech) > 50:
                msg = "Each tech stack entry must be 1-50 characters"
                raise ValueError(msg)
        return v

    @field_validator("github_url", "demo_url", mode="before")
    @classmethod
    def blank_url_is_none(cls, v: object) -> object:
        return None if v == "" else v


def parse_request(model: type[RequestT], payload: Mapping[str, Any] | RequestT) -> RequestT:
    """Validate a loosely-typed payload into a request record.

    Raises:
        BadRequestError: Carrying the first validation message.
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        message = f"{location}: {first['msg']}" if location else first["msg"]
        raise BadRequestError(message) from e
