"""Summary statistics over rating rows.

Every function here is pure and total over its input: empty lists produce
the documented degenerate values instead of raising.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from buildable.models.rating import MAX_STARS, MIN_STARS
from buildable.models.responses import RatingStatistics, StarBucket
from buildable.ranking.base import RatingLike, star_values

RECENCY_BOOST = 1.5
TRENDING_MIN_RATINGS = 2


def average_rating(ratings: Sequence[RatingLike]) -> float:
    """Arithmetic mean of the star values.

    Returns 0.0 for an empty list, which means "unrated" rather than zero stars.
    The result is unrounded; use :func:`round_rating` for display only.
    """
    stars = star_values(ratings)
    if not stars:
        return 0.0
    return sum(stars) / len(stars)


def round_rating(value: float) -> float:
    """Round to one decimal place, halves away from zero (``round(x*10)/10``)."""
    return math.floor(value * 10 + 0.5) / 10


def share_percentage(count: int, total: int) -> Decimal:
    """Percentage of ``count`` in ``total`` to one decimal, exact halves rounded up."""
    if not total:
        return Decimal("0.0")
    return (Decimal(count * 100) / Decimal(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def rating_distribution(ratings: Sequence[RatingLike]) -> list[StarBucket]:
    """Histogram of star values 1..5, ascending.

    Args:
        ratings: Ratings or bare star values.

    Returns:
        One bucket per star value with its count and its share of the total,
        formatted to one decimal ("0.0" for every bucket when there are no ratings).
    """
    stars = star_values(ratings)
    total = len(stars)
    counts = Counter(stars)
    buckets = []
    for star in range(MIN_STARS, MAX_STARS + 1):
        count = counts.get(star, 0)
        percentage = str(share_percentage(count, total))
        buckets.append(StarBucket(stars=star, count=count, percentage=percentage))
    return buckets


def rating_statistics(ratings: Sequence[RatingLike]) -> RatingStatistics:
    """Total, display-rounded average and distribution for a project's ratings."""
    return RatingStatistics(
        total=len(ratings),
        average=round_rating(average_rating(ratings)),
        distribution=rating_distribution(ratings),
    )


def bucket_key(timestamp: datetime, granularity: Literal["day", "month"]) -> str:
    """Bucket label for a timestamp, after normalizing it to UTC.

    Naive timestamps are taken to be UTC already.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(UTC)
    if granularity == "day":
        return timestamp.strftime("%Y-%m-%d")
    return timestamp.strftime("%Y-%m")


def bucket_by_period(
    timestamps: Iterable[datetime],
    granularity: Literal["day", "month"],
) -> dict[str, int]:
    """Count timestamps per day (``YYYY-MM-DD``) or month (``YYYY-MM``) bucket.

    Key order is unspecified; sort the keys if a chronological series is needed.
    """
    return dict(Counter(bucket_key(ts, granularity) for ts in timestamps))


def trending_score(
    recent_ratings: Sequence[RatingLike],
    recency_boost: float = RECENCY_BOOST,
) -> float:
    """Recent rating count times recent average times the recency boost."""
    return len(recent_ratings) * average_rating(recent_ratings) * recency_boost


def qualifies_for_trending(
    recent_ratings: Sequence[RatingLike],
    min_ratings: int = TRENDING_MIN_RATINGS,
) -> bool:
    """Whether a project has enough recent ratings to be listed as trending."""
    return len(recent_ratings) >= min_ratings
