"""Composite scores and orderings for leaderboards and listings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from buildable.ranking.aggregator import (
    RECENCY_BOOST,
    TRENDING_MIN_RATINGS,
    average_rating,
    qualifies_for_trending,
    trending_score,
)
from buildable.ranking.base import CategoryUsage, DeveloperStats, ProjectRatings

PROJECT_WEIGHT = 10.0
RATING_WEIGHT = 5.0
QUALITY_WEIGHT = 20.0
TOP_RATED_MIN_RATINGS = 3


@dataclass
class RankedDeveloper:
    """A developer's leaderboard position.

    Attributes:
        developer: Input record.
        average_rating: Unrounded mean of the rated projects' averages.
        score: Unrounded leaderboard score.
        rank: 1-based position.
    """

    developer: DeveloperStats
    average_rating: float
    score: float
    rank: int


@dataclass
class ScoredProject:
    """A project with its unrounded average and optional trending score."""

    project: ProjectRatings
    average_rating: float
    score: float = 0.0


def mean_of_project_averages(project_ratings: Sequence[Sequence[int]]) -> float:
    """Mean of per-project averages, counting only projects with ratings.

    Returns 0.0 when no project has been rated.
    """
    averages = [average_rating(ratings) for ratings in project_ratings if ratings]
    if not averages:
        return 0.0
    return sum(averages) / len(averages)


def leaderboard_score_for_developer(
    dev: DeveloperStats,
    project_weight: float = PROJECT_WEIGHT,
    rating_weight: float = RATING_WEIGHT,
    quality_weight: float = QUALITY_WEIGHT,
) -> float:
    """Weighted sum of project count, ratings received and average quality.

    ``totalProjects*10 + totalRatingsReceived*5 + averageRatingAcrossProjects*20``
    with the default weights.
    """
    return (
        dev.total_projects * project_weight
        + dev.total_ratings_received * rating_weight
        + mean_of_project_averages(dev.project_ratings) * quality_weight
    )


def rank_developers(
    developers: Sequence[DeveloperStats],
    limit: int | None = None,
    project_weight: float = PROJECT_WEIGHT,
    rating_weight: float = RATING_WEIGHT,
    quality_weight: float = QUALITY_WEIGHT,
) -> list[RankedDeveloper]:
    """Build the developer leaderboard.

    Developers without projects are left out. Ties keep their input order.

    Args:
        developers: Candidate developers.
        limit: Maximum entries to return, or None for all.
        project_weight: Points per project.
        rating_weight: Points per rating received.
        quality_weight: Points per star of average rating.

    Returns:
        Ranked entries sorted by score descending, ranks starting at 1.
    """
    scored = [
        (
            dev,
            mean_of_project_averages(dev.project_ratings),
            leaderboard_score_for_developer(dev, project_weight, rating_weight, quality_weight),
        )
        for dev in developers
        if dev.total_projects > 0
    ]
    scored.sort(key=lambda x: x[2], reverse=True)
    if limit is not None:
        scored = scored[:limit]
    return [
        RankedDeveloper(developer=dev, average_rating=avg, score=score, rank=i)
        for i, (dev, avg, score) in enumerate(scored, 1)
    ]


def rank_projects_by_rating_then_volume(
    projects: Sequence[ProjectRatings],
    min_ratings: int = TOP_RATED_MIN_RATINGS,
    limit: int | None = None,
) -> list[ScoredProject]:
    """Order projects for "top rated" listings.

    Projects with fewer than ``min_ratings`` ratings are excluded so a single
    5-star rating cannot top the board. Sorted by unrounded average descending,
    then by rating count descending.
    """
    eligible = [
        ScoredProject(project=p, average_rating=average_rating(p.ratings))
        for p in projects
        if p.total_ratings >= min_ratings
    ]
    eligible.sort(key=lambda s: (s.average_rating, s.project.total_ratings), reverse=True)
    return eligible[:limit] if limit is not None else eligible


def rank_trending(
    projects: Sequence[ProjectRatings],
    min_ratings: int = TRENDING_MIN_RATINGS,
    recency_boost: float = RECENCY_BOOST,
    limit: int | None = None,
) -> list[ScoredProject]:
    """Order projects by trending score.

    ``projects`` must carry only the ratings inside the trending window.
    Projects below the minimum recent sample are excluded, not scored zero.
    """
    trending = [
        ScoredProject(
            project=p,
            average_rating=average_rating(p.ratings),
            score=trending_score(p.ratings, recency_boost),
        )
        for p in projects
        if qualifies_for_trending(p.ratings, min_ratings)
    ]
    trending.sort(key=lambda s: s.score, reverse=True)
    return trending[:limit] if limit is not None else trending


def rank_categories_by_usage(categories: Sequence[CategoryUsage]) -> list[CategoryUsage]:
    """Order categories by project count descending; ties keep input order."""
    return sorted(categories, key=lambda c: c.total_projects, reverse=True)
