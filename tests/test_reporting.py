"""Tests for Markdown and JSON report rendering."""

import json
from datetime import datetime

from buildable.models.responses import (
    ActivityReport,
    ActivitySeries,
    ActivitySummary,
    CategoryStats,
    CategoryStatsView,
    DeveloperStatsView,
    Leaderboard,
    LeaderboardEntry,
    ProfileStats,
    ProjectCard,
    ProjectDetail,
    RecentStats,
    TrendingProject,
    TrendingReport,
)
from buildable.ranking import rating_statistics
from buildable.services.reporting import (
    activity_markdown,
    categories_markdown,
    leaderboard_markdown,
    profile_markdown,
    project_markdown,
    statistics_markdown,
    to_json,
    trending_markdown,
)

GENERATED_AT = datetime(2024, 6, 15, 12, 0)


def _leaderboard() -> Leaderboard:
    return Leaderboard(
        leaderboard=[
            LeaderboardEntry(
                id="u1",
                name="Ada",
                stats=DeveloperStatsView(
                    total_projects=2, total_ratings=10, ratings_given=0, average_rating=4.5
                ),
                score=160.0,
                rank=1,
            )
        ],
        period="all",
        generated_at=GENERATED_AT,
    )


def _cells(text: str, marker: str) -> list[str]:
    """Stripped cell values of the first table row containing ``marker``."""
    row = next(line for line in text.splitlines() if marker in line and line.startswith("|"))
    return [cell.strip() for cell in row.strip("|").split("|")]


class TestMarkdown:
    def test_leaderboard(self):
        text = leaderboard_markdown(_leaderboard())

        assert text.startswith("# Leaderboard (all)")
        assert "Rank" in text
        assert _cells(text, "Ada") == ["1", "Ada", "2", "10", "4.5", "160.0"]

    def test_trending_falls_back_to_author_id(self):
        report = TrendingReport(
            projects=[
                TrendingProject(
                    id="p1",
                    title="Lighthouse",
                    author_id="u9",
                    trending_score=15.0,
                    recent_stats=RecentStats(recent_ratings=2, avg_recent_rating=5.0),
                )
            ],
            period="week",
            generated_at=GENERATED_AT,
        )

        text = trending_markdown(report)

        assert "# Trending (week)" in text
        assert _cells(text, "Lighthouse") == ["1", "Lighthouse", "u9", "2", "5.0", "15.0"]

    def test_activity_rows_are_chronological(self):
        report = ActivityReport(
            activity=ActivitySeries(
                user_registrations={"2024-03-02": 1, "2024-03-01": 2},
                project_creations={"2024-03-03": 1},
                ratings_given={},
            ),
            period="week",
            group_by="day",
            summary=ActivitySummary(
                total_user_registrations=3, total_project_creations=1, total_ratings_given=0
            ),
            generated_at=GENERATED_AT,
        )

        text = activity_markdown(report)

        assert text.index("2024-03-01") < text.index("2024-03-02") < text.index("2024-03-03")
        assert "UTC" in text

    def test_whole_averages_keep_one_decimal(self):
        categories = [
            CategoryStats(
                id="c1",
                name="Tools",
                color="#000000",
                icon="🔧",
                stats=CategoryStatsView(total_projects=3, total_ratings=6, average_rating=4.0),
            )
        ]

        assert _cells(categories_markdown(categories), "Tools") == ["🔧 Tools", "3", "6", "4.0"]

    def test_project_detail(self):
        project = ProjectDetail(
            id="p1",
            title="Lighthouse",
            description="A static site generator.",
            category="tool",
            status="completed",
            categories=["Developer Tools"],
            tech_stack=["Python", "DuckDB"],
            featured=False,
            published=True,
            author_id="u1",
            author_name="Ada",
            avg_rating=4.0,
            total_ratings=3,
        )

        text = project_markdown(project)

        assert text.startswith("# Lighthouse")
        assert _cells(text, "Avg rating") == ["Avg rating", "4.0"]
        assert _cells(text, "Tech stack") == ["Tech stack", "Python, DuckDB"]

    def test_profile_cards(self):
        profile = ProfileStats(
            total_projects=2,
            total_ratings_given=1,
            total_ratings_received=4,
            average_rating=4.3,
            projects=[
                ProjectCard(
                    id="p1",
                    title="Lighthouse",
                    category="tool",
                    status="completed",
                    featured=False,
                    published=True,
                    avg_rating=5.0,
                    total_ratings=4,
                )
            ],
        )

        text = profile_markdown("Ada", profile)

        assert "2 projects, 4 ratings received, 1 given, average 4.3" in text
        assert _cells(text, "Lighthouse") == ["Lighthouse", "tool", "completed", "yes", "5.0", "4"]

    def test_statistics(self):
        text = statistics_markdown("Lighthouse", rating_statistics([5, 4, 5, 3, 5]))

        assert "5 ratings, average 4.4" in text
        assert "60.0%" in text


class TestJson:
    def test_envelope_is_camel_case(self):
        body = json.loads(to_json(_leaderboard()))

        assert body["success"] is True
        entry = body["data"]["leaderboard"][0]
        assert entry["stats"]["totalProjects"] == 2
        assert entry["stats"]["averageRating"] == 4.5
        assert body["data"]["generatedAt"] == "2024-06-15T12:00:00"

    def test_message(self):
        body = json.loads(to_json(_leaderboard(), "done"))
        assert body["message"] == "done"
