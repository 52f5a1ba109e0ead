"""Analytics service: platform stats, leaderboards, trending and activity."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import structlog

from buildable.core.config import (
    ACTIVITY_PERIODS,
    LEADERBOARD_PERIODS,
    TRENDING_PERIODS,
    ShowcaseConfig,
    activity_granularity,
    period_start,
)
from buildable.core.errors import InvalidPeriodError, NotFoundError
from buildable.models.responses import (
    ActivityReport,
    ActivitySeries,
    ActivitySummary,
    CategoryStats,
    CategoryStatsView,
    DashboardStats,
    DeveloperStatsView,
    Leaderboard,
    LeaderboardEntry,
    PlatformOverview,
    PlatformStats,
    ProfileStats,
    ProjectCard,
    ProjectDetail,
    RecentStats,
    TopRatedProject,
    TrendingProject,
    TrendingReport,
)
from buildable.ranking import (
    ProjectRatings,
    average_rating,
    bucket_by_period,
    mean_of_project_averages,
    rank_categories_by_usage,
    rank_developers,
    rank_projects_by_rating_then_volume,
    rank_trending,
    round_rating,
)
from buildable.services.storage import ShowcaseStore

logger = structlog.get_logger()


def _check_period(period: str, allowed: tuple[str, ...]) -> None:
    if period not in allowed:
        raise InvalidPeriodError(period, allowed)


def project_card(project: ProjectRatings) -> ProjectCard:
    """List entry for a project with its rounded average and rating count."""
    return ProjectCard(
        id=project.id,
        title=project.title,
        category=project.category,
        status=project.status,
        categories=project.categories,
        featured=project.featured,
        published=project.published,
        created_at=project.created_at,
        avg_rating=round_rating(average_rating(project.ratings)),
        total_ratings=project.total_ratings,
    )


class AnalyticsService:
    """Read-side statistics built from store rows and the ranking functions.

    Independent store reads are issued concurrently; none of them depends on
    another's result.
    """

    def __init__(self, config: ShowcaseConfig, store: ShowcaseStore) -> None:
        """Initialize analytics service."""
        self.config = config
        self.store = store

    async def platform_stats(self, now: datetime | None = None) -> PlatformStats:
        """Overview counters plus the top rated projects."""
        now = now or datetime.now(UTC)
        recent_since = now - timedelta(days=self.config.analytics.recent_days)
        (
            total_users,
            total_projects,
            total_ratings,
            total_categories,
            featured_projects,
            recent_projects,
            projects,
        ) = await asyncio.gather(
            self.store.users.count(),
            self.store.projects.count(published=True),
            self.store.ratings.count(),
            self.store.categories.count(),
            self.store.projects.count(published=True, featured=True),
            self.store.projects.count(published=True, created_since=recent_since),
            self.store.projects.with_ratings(),
        )

        top_rated = rank_projects_by_rating_then_volume(
            projects,
            min_ratings=self.config.ranking.top_rated_min_ratings,
            limit=self.config.analytics.top_rated_limit,
        )
        return PlatformStats(
            overview=PlatformOverview(
                total_users=total_users,
                total_projects=total_projects,
                total_ratings=total_ratings,
                total_categories=total_categories,
                featured_projects=featured_projects,
                recent_projects=recent_projects,
            ),
            top_rated_projects=[
                TopRatedProject(
                    id=s.project.id,
                    title=s.project.title,
                    avg_rating=round_rating(s.average_rating),
                    total_ratings=s.project.total_ratings,
                )
                for s in top_rated
            ],
            generated_at=now,
        )

    async def category_stats(self) -> list[CategoryStats]:
        """Per-category project and rating counts, most used first."""
        categories = rank_categories_by_usage(await self.store.categories.usage())
        return [
            CategoryStats(
                id=c.id,
                name=c.name,
                color=c.color,
                icon=c.icon,
                stats=CategoryStatsView(
                    total_projects=c.total_projects,
                    total_ratings=c.total_ratings,
                    average_rating=round_rating(mean_of_project_averages(c.project_ratings)),
                ),
            )
            for c in categories
        ]

    async def trending(
        self,
        period: str = "week",
        limit: int | None = None,
        now: datetime | None = None,
    ) -> TrendingReport:
        """Projects with the most, and best, ratings inside the period window.

        Raises:
            InvalidPeriodError: If ``period`` is not day/week/month.
        """
        _check_period(period, TRENDING_PERIODS)
        now = now or datetime.now(UTC)
        limit = limit or self.config.analytics.trending_limit
        projects = await self.store.projects.with_ratings(ratings_since=period_start(period, now))

        ranked = rank_trending(
            projects,
            min_ratings=self.config.ranking.trending_min_ratings,
            recency_boost=self.config.ranking.recency_boost,
            limit=limit,
        )
        logger.info("trending_built", period=period, candidates=len(projects), listed=len(ranked))
        return TrendingReport(
            projects=[
                TrendingProject(
                    id=s.project.id,
                    title=s.project.title,
                    author_id=s.project.author_id,
                    author_name=s.project.author_name,
                    categories=s.project.categories,
                    trending_score=s.score,
                    recent_stats=RecentStats(
                        recent_ratings=s.project.total_ratings,
                        avg_recent_rating=round_rating(s.average_rating),
                    ),
                )
                for s in ranked
            ],
            period=period,
            generated_at=now,
        )

    async def activity(self, period: str = "month", now: datetime | None = None) -> ActivityReport:
        """Registrations, project submissions and ratings bucketed by day or month.

        Buckets are UTC calendar days/months.

        Raises:
            InvalidPeriodError: If ``period`` is not week/month/year.
        """
        _check_period(period, ACTIVITY_PERIODS)
        now = now or datetime.now(UTC)
        since = period_start(period, now)
        group_by = activity_granularity(period)

        registrations, creations, ratings = await asyncio.gather(
            self.store.users.created_since(since),
            self.store.projects.created_since(since),
            self.store.ratings.created_since(since),
        )
        return ActivityReport(
            activity=ActivitySeries(
                user_registrations=bucket_by_period(registrations, group_by),
                project_creations=bucket_by_period(creations, group_by),
                ratings_given=bucket_by_period(ratings, group_by),
            ),
            period=period,
            group_by=group_by,
            summary=ActivitySummary(
                total_user_registrations=len(registrations),
                total_project_creations=len(creations),
                total_ratings_given=len(ratings),
            ),
            generated_at=now,
        )

    async def leaderboard(
        self,
        period: str = "all",
        limit: int | None = None,
        now: datetime | None = None,
    ) -> Leaderboard:
        """Developers ranked by the composite leaderboard score.

        Raises:
            InvalidPeriodError: If ``period`` is not week/month/year/all.
        """
        _check_period(period, LEADERBOARD_PERIODS)
        now = now or datetime.now(UTC)
        limit = limit or self.config.analytics.leaderboard_limit
        developers = await self.store.users.developer_stats(since=period_start(period, now))

        weights = self.config.ranking
        ranked = rank_developers(
            developers,
            limit=limit,
            project_weight=weights.project_weight,
            rating_weight=weights.rating_weight,
            quality_weight=weights.quality_weight,
        )
        logger.info("leaderboard_built", period=period, entries=len(ranked))
        return Leaderboard(
            leaderboard=[
                LeaderboardEntry(
                    id=r.developer.id,
                    name=r.developer.name,
                    avatar=r.developer.avatar,
                    bio=r.developer.bio,
                    stats=DeveloperStatsView(
                        total_projects=r.developer.total_projects,
                        total_ratings=r.developer.total_ratings_received,
                        ratings_given=r.developer.ratings_given,
                        average_rating=round_rating(r.average_rating),
                    ),
                    score=round_rating(r.score),
                    rank=r.rank,
                )
                for r in ranked
            ],
            period=period,
            generated_at=now,
        )

    async def project_detail(self, project_id: str) -> ProjectDetail:
        """A project with its author and display-rounded rating summary.

        Unpublished projects are returned as well; visibility is left to the
        caller, who knows whether the viewer owns the project.
        """
        project = await self.store.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project")
        author, stars, categories = await asyncio.gather(
            self.store.users.get(project.author_id),
            self.store.ratings.stars_for_project(project_id),
            self.store.projects.category_names(project_id),
        )
        return ProjectDetail(
            id=project.id,
            title=project.title,
            description=project.description,
            category=project.category,
            status=project.status,
            categories=categories,
            tech_stack=project.tech_stack,
            images=project.images,
            github_url=project.github_url,
            demo_url=project.demo_url,
            featured=project.featured,
            published=project.published,
            author_id=project.author_id,
            author_name=author.name if author else None,
            created_at=project.created_at,
            updated_at=project.updated_at,
            avg_rating=round_rating(average_rating(stars)),
            total_ratings=len(stars),
        )

    async def profile_stats(self, user_id: str) -> ProfileStats:
        """Public profile counters for one developer.

        ``total_projects`` counts every project the developer owns, but only
        published ones are listed. The average covers every rating received
        on any of their projects and is not a mean of per-project averages.
        """
        user = await self.store.users.get(user_id)
        if user is None:
            raise NotFoundError("User")
        projects, published, ratings_given, received = await asyncio.gather(
            self.store.projects.list_by_author(user_id),
            self.store.projects.with_ratings(author_id=user_id),
            self.store.ratings.count(user_id=user_id),
            self.store.ratings.stars_received_by(user_id),
        )
        return ProfileStats(
            total_projects=len(projects),
            total_ratings_given=ratings_given,
            total_ratings_received=len(received),
            average_rating=round_rating(average_rating(received)),
            projects=[project_card(p) for p in published],
        )

    async def dashboard(self, user_id: str) -> DashboardStats:
        """Private dashboard counters for the signed-in developer."""
        projects, ratings_given, received = await asyncio.gather(
            self.store.projects.with_ratings(author_id=user_id, published_only=False),
            self.store.ratings.count(user_id=user_id),
            self.store.ratings.stars_received_by(user_id),
        )
        return DashboardStats(
            total_projects=len(projects),
            published_projects=sum(1 for p in projects if p.published),
            featured_projects=sum(1 for p in projects if p.featured),
            total_ratings_received=len(received),
            total_ratings_given=ratings_given,
            average_rating=round_rating(average_rating(received)),
            projects=[project_card(p) for p in projects],
        )
