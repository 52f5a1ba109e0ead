"""Tests for rating aggregation."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

import pytest

from buildable.ranking.aggregator import (
    average_rating,
    bucket_by_period,
    qualifies_for_trending,
    rating_distribution,
    rating_statistics,
    round_rating,
    trending_score,
)


@dataclass
class _Row:
    rating: int


class TestAverageRating:
    """Tests for the arithmetic mean."""

    def test_empty_is_zero(self):
        """Test an unrated list averages to 0.0."""
        assert average_rating([]) == 0.0

    def test_mixed_values(self):
        """Test mean of [5, 4, 5, 3, 5]."""
        assert average_rating([5, 4, 5, 3, 5]) == pytest.approx(4.4)

    def test_accepts_rows_with_rating_attribute(self):
        """Test objects exposing ``rating`` are averaged like ints."""
        assert average_rating([_Row(2), _Row(3)]) == pytest.approx(2.5)

    def test_unrounded(self):
        """Test the mean keeps full precision."""
        assert average_rating([5, 4, 4]) == pytest.approx(13 / 3)

    @pytest.mark.parametrize("ratings", [[1], [5], [1, 5], [2, 3, 4, 5, 1, 1]])
    def test_within_star_range(self, ratings):
        """Test non-empty averages stay within [1, 5]."""
        assert 1.0 <= average_rating(ratings) <= 5.0

    def test_extra_five_star_never_lowers_average(self):
        """Test adding a 5-star rating is monotone non-decreasing."""
        for ratings in ([1, 2], [5, 5], [3], [4, 5, 2]):
            assert average_rating([*ratings, 5]) >= average_rating(ratings)


class TestRoundRating:
    """Tests for display rounding."""

    def test_one_decimal(self):
        assert round_rating(13 / 3) == 4.3

    def test_half_rounds_up(self):
        """Test halves round up like round(x*10)/10."""
        assert round_rating(4.25) == 4.3
        assert round_rating(2.75) == 2.8

    def test_zero(self):
        assert round_rating(0.0) == 0.0


class TestRatingDistribution:
    """Tests for the star histogram."""

    def test_scenario_mixed(self):
        """Test [5, 4, 5, 3, 5] produces the expected counts and shares."""
        buckets = rating_distribution([5, 4, 5, 3, 5])

        assert [b.stars for b in buckets] == [1, 2, 3, 4, 5]
        assert [b.count for b in buckets] == [0, 0, 1, 1, 3]
        assert [b.percentage for b in buckets] == ["0.0", "0.0", "20.0", "20.0", "60.0"]

    def test_empty(self):
        """Test an empty list yields zero counts and "0.0" shares."""
        buckets = rating_distribution([])

        assert [b.count for b in buckets] == [0] * 5
        assert all(b.percentage == "0.0" for b in buckets)

    def test_counts_sum_to_total(self):
        ratings = [1, 1, 2, 3, 3, 3, 4, 5, 5]
        assert sum(b.count for b in rating_distribution(ratings)) == len(ratings)

    def test_percentages_sum_to_hundred(self):
        """Test shares add up to 100 within rounding tolerance."""
        ratings = [1, 2, 2, 3, 5, 5, 5]
        total = sum(float(b.percentage) for b in rating_distribution(ratings))
        assert total == pytest.approx(100.0, abs=0.5)

    def test_one_decimal_formatting(self):
        buckets = rating_distribution([1, 2, 2])
        assert buckets[0].percentage == "33.3"
        assert buckets[1].percentage == "66.7"

    def test_exact_halves_round_up(self):
        """Test 1.25% shows as 1.3, not the half-even 1.2."""
        buckets = rating_distribution([1] + [5] * 79)
        assert buckets[0].percentage == "1.3"
        assert buckets[4].percentage == "98.8"

        buckets = rating_distribution([2] + [4] * 15)
        assert buckets[1].percentage == "6.3"
        assert buckets[3].percentage == "93.8"

    def test_whole_share(self):
        assert rating_distribution([3, 3])[2].percentage == "100.0"

    def test_idempotent(self):
        """Test repeated calls return identical output."""
        ratings = [5, 4, 5, 3, 5]
        assert rating_distribution(ratings) == rating_distribution(ratings)
        assert average_rating(ratings) == average_rating(ratings)


class TestRatingStatistics:
    def test_summary(self):
        stats = rating_statistics([5, 4, 5, 3, 5])

        assert stats.total == 5
        assert stats.average == 4.4
        assert stats.distribution[4].count == 3

    def test_empty_summary(self):
        stats = rating_statistics([])

        assert stats.total == 0
        assert stats.average == 0.0


class TestBucketByPeriod:
    """Tests for activity bucketing."""

    def test_day_buckets(self):
        timestamps = [
            datetime(2024, 3, 1, 9, 0),
            datetime(2024, 3, 1, 23, 59),
            datetime(2024, 3, 2, 0, 1),
        ]
        assert bucket_by_period(timestamps, "day") == {"2024-03-01": 2, "2024-03-02": 1}

    def test_month_buckets_zero_padded(self):
        timestamps = [datetime(2024, 1, 31), datetime(2024, 2, 1), datetime(2024, 2, 15)]
        assert bucket_by_period(timestamps, "month") == {"2024-01": 1, "2024-02": 2}

    def test_aware_timestamps_normalized_to_utc(self):
        """Test events just before and after UTC midnight land in separate days."""
        plus_two = timezone(timedelta(hours=2))
        timestamps = [
            datetime(2024, 3, 2, 1, 50, tzinfo=plus_two),  # 23:50 UTC on the 1st
            datetime(2024, 3, 2, 0, 10, tzinfo=UTC),
        ]
        assert bucket_by_period(timestamps, "day") == {"2024-03-01": 1, "2024-03-02": 1}

    def test_empty(self):
        assert bucket_by_period([], "day") == {}


class TestTrendingScore:
    """Tests for the trending score and its minimum sample."""

    def test_two_five_star_ratings(self):
        """Test [5, 5] scores 2 * 5.0 * 1.5 = 15.0."""
        assert trending_score([5, 5]) == pytest.approx(15.0)
        assert qualifies_for_trending([5, 5])

    def test_single_rating_does_not_qualify(self):
        assert not qualifies_for_trending([5])

    def test_custom_boost(self):
        assert trending_score([4, 2, 3], recency_boost=2.0) == pytest.approx(18.0)

    def test_empty_scores_zero(self):
        assert trending_score([]) == 0.0
        assert not qualifies_for_trending([])
