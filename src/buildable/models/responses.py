"""Response records serialized into JSON envelopes.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StarBucket(_Response):
    """Histogram entry for one star value."""

    stars: int
    count: int
    percentage: str


class RatingStatistics(_Response):
    total: int
    average: float
    distribution: list[StarBucket]


class Pagination(_Response):
    current: int
    total: int
    has_next: bool
    has_prev: bool
    total_items: int

    @classmethod
    def build(cls, page: int, limit: int, total_items: int) -> Pagination:
        """Compute page metadata for a 1-based page of ``limit`` items."""
        total_pages = math.ceil(total_items / limit) if limit else 0
        return cls(
            current=page,
            total=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
            total_items=total_items,
        )


class RatingView(_Response):
    id: str
    user_id: str
    project_id: str
    rating: int
    comment: str | None = None
    created_at: datetime
    updated_at: datetime


class ProjectRatingsPage(_Response):
    ratings: list[RatingView]
    statistics: RatingStatistics
    pagination: Pagination


class RatingsPage(_Response):
    ratings: list[RatingView]
    pagination: Pagination


class DeveloperStatsView(_Response):
    total_projects: int
    total_ratings: int
    ratings_given: int
    average_rating: float


class LeaderboardEntry(_Response):
    id: str
    name: str
    avatar: str | None = None
    bio: str | None = None
    stats: DeveloperStatsView
    score: float
    rank: int


class Leaderboard(_Response):
    leaderboard: list[LeaderboardEntry]
    period: str
    generated_at: datetime


class TopRatedProject(_Response):
    id: str
    title: str
    avg_rating: float
    total_ratings: int


class PlatformOverview(_Response):
    total_users: int
    total_projects: int
    total_ratings: int
    total_categories: int
    featured_projects: int
    recent_projects: int


class PlatformStats(_Response):
    overview: PlatformOverview
    top_rated_projects: list[TopRatedProject]
    generated_at: datetime


class CategoryStatsView(_Response):
    total_projects: int
    total_ratings: int
    average_rating: float


class CategoryStats(_Response):
    id: str
    name: str
    color: str
    icon: str
    stats: CategoryStatsView


class RecentStats(_Response):
    recent_ratings: int
    avg_recent_rating: float


class TrendingProject(_Response):
    id: str
    title: str
    author_id: str
    author_name: str | None = None
    categories: list[str] = Field(default_factory=list)
    trending_score: float
    recent_stats: RecentStats


class TrendingReport(_Response):
    projects: list[TrendingProject]
    period: str
    generated_at: datetime


class ActivitySummary(_Response):
    total_user_registrations: int
    total_project_creations: int
    total_ratings_given: int


class ActivitySeries(_Response):
    user_registrations: dict[str, int]
    project_creations: dict[str, int]
    ratings_given: dict[str, int]


class ActivityReport(_Response):
    activity: ActivitySeries
    period: str
    group_by: str
    summary: ActivitySummary
    generated_at: datetime


class ProjectCard(_Response):
    """A project listed with its display-rounded average rating."""

    id: str
    title: str
    category: str
    status: str
    categories: list[str] = Field(default_factory=list)
    featured: bool
    published: bool
    created_at: datetime | None = None
    avg_rating: float
    total_ratings: int


class ProjectDetail(ProjectCard):
    description: str
    tech_stack: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    github_url: str | None = None
    demo_url: str | None = None
    author_id: str
    author_name: str | None = None
    updated_at: datetime | None = None


class ProfileStats(_Response):
    total_projects: int
    total_ratings_given: int
    total_ratings_received: int
    average_rating: float
    projects: list[ProjectCard] = Field(default_factory=list)


class DashboardStats(_Response):
    total_projects: int
    published_projects: int
    featured_projects: int
    total_ratings_received: int
    total_ratings_given: int
    average_rating: float
    projects: list[ProjectCard] = Field(default_factory=list)


def envelope(data: BaseModel | list[BaseModel] | None = None, message: str | None = None) -> dict:
    """Wrap a response record in the ``{success, data}`` body."""
    body: dict[str, Any] = {"success": True}
    if isinstance(data, list):
        body["data"] = [item.model_dump(mode="json", by_alias=True) for item in data]
    elif data is not None:
        body["data"] = data.model_dump(mode="json", by_alias=True)
    if message:
        body["message"] = message
    return body
