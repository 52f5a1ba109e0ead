"""Input records shared by the aggregation and ranking functions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Rated(Protocol):
    """Anything carrying a validated 1-5 ``rating`` value.

    Table rows, pydantic records and simple dataclasses all satisfy this.
    """

    rating: int


RatingLike = int | Rated


def star_values(ratings: Sequence[RatingLike]) -> list[int]:
    """Extract the star values from ratings or bare integers."""
    return [r if isinstance(r, int) else r.rating for r in ratings]


@dataclass
class ProjectRatings:
    """A project together with the star values it received.

    Attributes:
        id: Project identifier.
        title: Project title.
        ratings: Star values, possibly pre-filtered to a time window.
        author_id: Owning developer.
        author_name: Display name of the owning developer.
        categories: Category names linked to the project.
        category: Project kind, e.g. "web-app".
        status: Development status.
        featured: Shown in featured listings.
        published: Visible to the public.
        created_at: Submission time.
    """

    id: str
    title: str
    ratings: list[int] = field(default_factory=list)
    author_id: str = ""
    author_name: str | None = None
    categories: list[str] = field(default_factory=list)
    category: str = ""
    status: str = "completed"
    featured: bool = False
    published: bool = True
    created_at: datetime | None = None

    @property
    def total_ratings(self) -> int:
        return len(self.ratings)


@dataclass
class DeveloperStats:
    """A developer with the ratings received by each of their projects.

    Attributes:
        id: User identifier.
        name: Display name.
        project_ratings: One list of star values per owned project.
        ratings_given: Ratings this developer gave to others.
    """

    id: str
    name: str
    project_ratings: list[list[int]] = field(default_factory=list)
    ratings_given: int = 0
    avatar: str | None = None
    bio: str | None = None

    @property
    def total_projects(self) -> int:
        return len(self.project_ratings)

    @property
    def total_ratings_received(self) -> int:
        return sum(len(ratings) for ratings in self.project_ratings)


@dataclass
class CategoryUsage:
    """A category with the star values of each published project in it."""

    id: str
    name: str
    color: str = ""
    icon: str = ""
    project_ratings: list[list[int]] = field(default_factory=list)

    @property
    def total_projects(self) -> int:
        return len(self.project_ratings)

    @property
    def total_ratings(self) -> int:
        return sum(len(ratings) for ratings in self.project_ratings)
