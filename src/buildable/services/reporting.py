"""Report rendering for Buildable analytics."""

from __future__ import annotations

import json

from tabulate import tabulate

from buildable.models.responses import (
    ActivityReport,
    CategoryStats,
    DashboardStats,
    Leaderboard,
    PlatformStats,
    ProfileStats,
    ProjectCard,
    ProjectDetail,
    RatingStatistics,
    TrendingReport,
    envelope,
)


def _document(title: str, table: str, description: str | None = None) -> str:
    lines = [f"# {title}", ""]
    if description:
        lines.extend([description, ""])
    lines.append(table)
    return "\n".join(lines)


def leaderboard_markdown(board: Leaderboard) -> str:
    """Render the developer leaderboard as a Markdown table."""
    rows = [
        (
            e.rank,
            e.name,
            e.stats.total_projects,
            e.stats.total_ratings,
            e.stats.average_rating,
            e.score,
        )
        for e in board.leaderboard
    ]
    headers = ("Rank", "Developer", "Projects", "Ratings", "Avg Rating", "Score")
    return _document(
        f"Leaderboard ({board.period})",
        tabulate(rows, headers=headers, tablefmt="github", floatfmt=".1f"),
    )


def trending_markdown(report: TrendingReport) -> str:
    rows = [
        (
            i,
            p.title,
            p.author_name or p.author_id,
            p.recent_stats.recent_ratings,
            p.recent_stats.avg_recent_rating,
            p.trending_score,
        )
        for i, p in enumerate(report.projects, 1)
    ]
    headers = ("#", "Project", "Author", "Recent Ratings", "Recent Avg", "Score")
    return _document(
        f"Trending ({report.period})",
        tabulate(rows, headers=headers, tablefmt="github", floatfmt=".1f"),
    )


def categories_markdown(categories: list[CategoryStats]) -> str:
    rows = [
        (
            f"{c.icon} {c.name}",
            c.stats.total_projects,
            c.stats.total_ratings,
            c.stats.average_rating,
        )
        for c in categories
    ]
    headers = ("Category", "Projects", "Ratings", "Avg Rating")
    return _document(
        "Categories",
        tabulate(rows, headers=headers, tablefmt="github", floatfmt=".1f"),
    )


def platform_markdown(stats: PlatformStats) -> str:
    """Render overview counters followed by the top rated projects."""
    overview = stats.overview
    counters = tabulate(
        [
            ("Developers", overview.total_users),
            ("Published projects", overview.total_projects),
            ("Ratings", overview.total_ratings),
            ("Categories", overview.total_categories),
            ("Featured projects", overview.featured_projects),
            ("New projects (recent)", overview.recent_projects),
        ],
        headers=("Metric", "Value"),
        tablefmt="github",
    )
    top = tabulate(
        [(p.title, p.avg_rating, p.total_ratings) for p in stats.top_rated_projects],
        headers=("Project", "Avg Rating", "Ratings"),
        tablefmt="github",
        floatfmt=".1f",
    )
    return "\n".join([_document("Platform", counters), "", "## Top Rated", "", top])


def activity_markdown(report: ActivityReport) -> str:
    """Render activity buckets in chronological order, one row per bucket."""
    series = report.activity
    keys = sorted(
        set(series.user_registrations) | set(series.project_creations) | set(series.ratings_given)
    )
    rows = [
        (
            key,
            series.user_registrations.get(key, 0),
            series.project_creations.get(key, 0),
            series.ratings_given.get(key, 0),
        )
        for key in keys
    ]
    headers = (report.group_by.title(), "Registrations", "Projects", "Ratings")
    return _document(
        f"Activity ({report.period})",
        tabulate(rows, headers=headers, tablefmt="github"),
        description="Buckets are UTC calendar days or months.",
    )


def statistics_markdown(title: str, stats: RatingStatistics) -> str:
    rows = [(f"{b.stars}★", b.count, f"{b.percentage}%") for b in stats.distribution]
    return _document(
        title,
        tabulate(rows, headers=("Stars", "Count", "Share"), tablefmt="github"),
        description=f"{stats.total} ratings, average {stats.average:.1f}",
    )


def _cards_table(cards: list[ProjectCard]) -> str:
    rows = [
        (
            c.title,
            c.category,
            c.status,
            "yes" if c.published else "no",
            c.avg_rating,
            c.total_ratings,
        )
        for c in cards
    ]
    headers = ("Project", "Category", "Status", "Published", "Avg Rating", "Ratings")
    return tabulate(rows, headers=headers, tablefmt="github", floatfmt=".1f")


def project_markdown(project: ProjectDetail) -> str:
    """Render one project with its author and rating summary."""
    facts = tabulate(
        [
            ("Author", project.author_name or project.author_id),
            ("Category", project.category),
            ("Status", project.status),
            ("Categories", ", ".join(project.categories) or "-"),
            ("Tech stack", ", ".join(project.tech_stack) or "-"),
            ("Avg rating", f"{project.avg_rating:.1f}"),
            ("Ratings", str(project.total_ratings)),
        ],
        headers=("Field", "Value"),
        tablefmt="github",
        disable_numparse=True,
    )
    return _document(project.title, facts, description=project.description)


def profile_markdown(name: str, profile: ProfileStats) -> str:
    description = (
        f"{profile.total_projects} projects, {profile.total_ratings_received} ratings received, "
        f"{profile.total_ratings_given} given, average {profile.average_rating:.1f}"
    )
    return _document(name, _cards_table(profile.projects), description=description)


def dashboard_markdown(dashboard: DashboardStats) -> str:
    description = (
        f"{dashboard.total_projects} projects ({dashboard.published_projects} published, "
        f"{dashboard.featured_projects} featured), {dashboard.total_ratings_received} ratings "
        f"received, average {dashboard.average_rating:.1f}"
    )
    return _document("Dashboard", _cards_table(dashboard.projects), description=description)


def to_json(data, message: str | None = None) -> str:
    """Serialize a response record (or list of records) in the success envelope."""
    return json.dumps(envelope(data, message), indent=2, ensure_ascii=False)
