"""Ranking module for Buildable.

Pure aggregation (averages, histograms, activity buckets) and ranking
(leaderboard, top rated, trending, category usage) over fetched records.
"""

from __future__ import annotations

from buildable.ranking.aggregator import (
    average_rating,
    bucket_by_period,
    qualifies_for_trending,
    rating_distribution,
    rating_statistics,
    round_rating,
    trending_score,
)
from buildable.ranking.base import CategoryUsage, DeveloperStats, ProjectRatings, Rated
from buildable.ranking.ranker import (
    RankedDeveloper,
    ScoredProject,
    leaderboard_score_for_developer,
    mean_of_project_averages,
    rank_categories_by_usage,
    rank_developers,
    rank_projects_by_rating_then_volume,
    rank_trending,
)

__all__ = [
    "CategoryUsage",
    "DeveloperStats",
    "ProjectRatings",
    "RankedDeveloper",
    "Rated",
    "ScoredProject",
    "average_rating",
    "bucket_by_period",
    "leaderboard_score_for_developer",
    "mean_of_project_averages",
    "qualifies_for_trending",
    "rank_categories_by_usage",
    "rank_developers",
    "rank_projects_by_rating_then_volume",
    "rank_trending",
    "rating_distribution",
    "rating_statistics",
    "round_rating",
    "trending_score",
]
