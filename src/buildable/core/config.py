"""Configuration schemas and loading for Buildable."""

from __future__ import annotations

import os
import re
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_DATABASE_URL = "duckdb:///buildable.duckdb"
DATABASE_URL_ENV = "BUILDABLE_DATABASE_URL"

Period = Literal["day", "week", "month", "year", "all"]
Granularity = Literal["day", "month"]

# Window length per named period. "all" has no lower bound.
PERIOD_DAYS: dict[str, int] = {
    "day": 1,
    "week": 7,
    "month": 30,
    "year": 365,
}

TRENDING_PERIODS = ("day", "week", "month")
ACTIVITY_PERIODS = ("week", "month", "year")
LEADERBOARD_PERIODS = ("week", "month", "year", "all")


class RankingConfig(BaseModel):
    """Scoring weights and minimum sample sizes for rankings.

    Attributes:
        top_rated_min_ratings: Ratings a project needs before it may appear in
            "top rated" listings.
        trending_min_ratings: Recent ratings a project needs to be trending.
        recency_boost: Fixed multiplier applied to the trending score.
        project_weight: Leaderboard points per published project.
        rating_weight: Leaderboard points per rating received.
        quality_weight: Leaderboard points per star of average rating.
    """

    top_rated_min_ratings: int = Field(default=3, ge=1)
    trending_min_ratings: int = Field(default=2, ge=1)
    recency_boost: float = Field(default=1.5, gt=0)
    project_weight: float = 10.0
    rating_weight: float = 5.0
    quality_weight: float = 20.0


class AnalyticsConfig(BaseModel):
    """Default limits for analytics listings."""

    top_rated_limit: int = Field(default=3, ge=1)
    trending_limit: int = Field(default=10, ge=1)
    leaderboard_limit: int = Field(default=10, ge=1)
    recent_days: int = Field(default=30, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)


class ShowcaseConfig(BaseModel):
    """Complete application configuration."""

    database_url: str = DEFAULT_DATABASE_URL
    timezone: Literal["UTC"] = "UTC"
    echo_sql: bool = False
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Require an SQLAlchemy-style URL with a driver scheme."""
        if not re.match(r"^[a-z][a-z0-9+_]*://", v):
            msg = f"database_url must look like '<dialect>://...', got {v!r}"
            raise ValueError(msg)
        return v

    def resolve_database_url(self) -> str:
        """Get database URL, preferring the environment override."""
        return os.environ.get(DATABASE_URL_ENV) or self.database_url


def load_config(path: str | Path | None = None) -> ShowcaseConfig:
    """Load and validate configuration from a YAML file.

    A missing path yields the default configuration. Variables from a local
    ``.env`` file are loaded first so ``BUILDABLE_DATABASE_URL`` can be set there.

    Args:
        path: Path to YAML configuration file, or None for defaults.

    Returns:
        Validated ShowcaseConfig instance.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ValidationError: If config is invalid.
    """
    load_dotenv()
    if path is None:
        return ShowcaseConfig()

    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    return ShowcaseConfig.model_validate(data)


def period_start(period: Period, now: datetime | None = None) -> datetime | None:
    """Get the lower bound of a named period window in UTC.

    Args:
        period: One of day/week/month/year/all.
        now: Reference time (defaults to current UTC time).

    Returns:
        Start of the window, or None for "all".
    """
    if period == "all":
        return None
    now = now or datetime.now(UTC)
    return now - timedelta(days=PERIOD_DAYS[period])


def activity_granularity(period: str) -> Granularity:
    """Bucket width used for activity charts of a period."""
    return "month" if period == "year" else "day"
