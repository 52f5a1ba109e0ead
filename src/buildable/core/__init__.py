"""Core configuration and utilities for Buildable."""

from buildable.core.config import (
    ACTIVITY_PERIODS,
    LEADERBOARD_PERIODS,
    TRENDING_PERIODS,
    AnalyticsConfig,
    RankingConfig,
    ShowcaseConfig,
    activity_granularity,
    load_config,
    period_start,
)
from buildable.core.errors import (
    BadRequestError,
    ConfigurationError,
    DatabaseURLError,
    ForbiddenError,
    InvalidPeriodError,
    NotFoundError,
    ShowcaseError,
)

__all__ = [
    "ACTIVITY_PERIODS",
    "LEADERBOARD_PERIODS",
    "TRENDING_PERIODS",
    "AnalyticsConfig",
    "RankingConfig",
    "ShowcaseConfig",
    "activity_granularity",
    "load_config",
    "period_start",
    "BadRequestError",
    "ConfigurationError",
    "DatabaseURLError",
    "ForbiddenError",
    "InvalidPeriodError",
    "NotFoundError",
    "ShowcaseError",
]
