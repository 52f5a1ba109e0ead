"""Database persistence for projects and their category links."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlmodel import Session, col, select

from buildable.core.errors import NotFoundError
from buildable.models import Category, Project, ProjectCategory, Rating, User
from buildable.models.requests import ProjectCreate
from buildable.ranking.base import ProjectRatings

from .repository import AsyncRepository, window_bound

if TYPE_CHECKING:
    from sqlalchemy import Engine


def category_names_by_project(session: Session, project_ids: list[str]) -> dict[str, list[str]]:
    """Map project id to the names of its linked categories."""
    names: dict[str, list[str]] = defaultdict(list)
    if not project_ids:
        return names
    statement = (
        select(ProjectCategory.project_id, Category.name)
        .join(Category, col(Category.id) == col(ProjectCategory.category_id))
        .where(col(ProjectCategory.project_id).in_(project_ids))
        .order_by(col(Category.name))
    )
    for project_id, name in session.exec(statement).all():
        names[project_id].append(name)
    return names


def stars_by_project(
    session: Session,
    project_ids: list[str],
    since: datetime | None = None,
) -> dict[str, list[int]]:
    """Map project id to its star values, optionally only those rated since ``since``."""
    stars: dict[str, list[int]] = defaultdict(list)
    if not project_ids:
        return stars
    statement = select(Rating.project_id, Rating.rating).where(
        col(Rating.project_id).in_(project_ids)
    )
    if since is not None:
        statement = statement.where(col(Rating.created_at) >= since)
    for project_id, rating in session.exec(statement).all():
        stars[project_id].append(rating)
    return stars


class ProjectRepository(AsyncRepository):
    """Persist and query showcase projects."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def create(self, author_id: str, data: ProjectCreate) -> Project:
        """Insert a project and link it to the named categories.

        Raises:
            NotFoundError: If the author or any named category does not exist.
        """

        def _save(session: Session) -> Project:
            if session.get(User, author_id) is None:
                raise NotFoundError("User")

            categories = []
            for name in data.categories:
                category = session.exec(select(Category).where(Category.name == name)).first()
                if category is None:
                    raise NotFoundError(f"Category '{name}'")
                categories.append(category)

            fields = data.model_dump(mode="json", exclude={"categories"})
            project = Project(author_id=author_id, **fields)
            session.add(project)
            session.flush()
            for category in categories:
                session.add(ProjectCategory(project_id=project.id, category_id=category.id))
            session.commit()
            session.refresh(project)
            return project

        return await self._run_session(_save)

    async def get(self, project_id: str) -> Project | None:
        return await self._run_session(lambda session: session.get(Project, project_id))

    async def delete(self, project_id: str) -> bool:
        """Delete a project along with its ratings and category links.

        The child rows are committed away first: DuckDB checks foreign keys
        against the state at transaction start, so deleting the parent in the
        same transaction would still see them.
        """

        def _delete(session: Session) -> bool:
            if session.get(Project, project_id) is None:
                return False
            for rating in session.exec(select(Rating).where(Rating.project_id == project_id)).all():
                session.delete(rating)
            for link in session.exec(
                select(ProjectCategory).where(ProjectCategory.project_id == project_id)
            ).all():
                session.delete(link)
            session.commit()

            session.delete(session.get(Project, project_id))
            session.commit()
            return True

        return await self._run_session(_delete)

    async def category_names(self, project_id: str) -> list[str]:
        """Get the names of the categories a project is linked to, by name."""

        def _get(session: Session) -> list[str]:
            return category_names_by_project(session, [project_id]).get(project_id, [])

        return await self._run_session(_get)

    async def list_by_author(self, author_id: str) -> list[Project]:
        """Get all projects of a developer, newest first, published or not."""

        def _get(session: Session) -> list[Project]:
            statement = (
                select(Project)
                .where(Project.author_id == author_id)
                .order_by(col(Project.created_at).desc())
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def count(
        self,
        published: bool | None = None,
        featured: bool | None = None,
        created_since: datetime | None = None,
    ) -> int:
        bound = window_bound(created_since)

        def _count(session: Session) -> int:
            statement = select(func.count(Project.id))
            if published is not None:
                statement = statement.where(Project.published == published)
            if featured is not None:
                statement = statement.where(Project.featured == featured)
            if bound is not None:
                statement = statement.where(col(Project.created_at) >= bound)
            return session.exec(statement).one()

        return await self._run_session(_count)

    async def created_since(self, since: datetime) -> list[datetime]:
        """Get creation timestamps of projects inside a window."""
        bound = window_bound(since)

        def _get(session: Session) -> list[datetime]:
            statement = select(Project.created_at).where(col(Project.created_at) >= bound)
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def with_ratings(
        self,
        author_id: str | None = None,
        ratings_since: datetime | None = None,
        published_only: bool = True,
    ) -> list[ProjectRatings]:
        """Load projects with their star values for ranking.

        Args:
            author_id: Restrict to one developer's projects.
            ratings_since: Only keep ratings created inside this window, and
                only projects with at least one such rating.
            published_only: Skip unpublished projects.

        Returns:
            One ProjectRatings per project, newest project first.
        """
        bound = window_bound(ratings_since)

        def _get(session: Session) -> list[ProjectRatings]:
            statement = (
                select(Project, User.name)
                .join(User, col(User.id) == col(Project.author_id))
                .order_by(col(Project.created_at).desc())
            )
            if published_only:
                statement = statement.where(Project.published == True)  # noqa: E712
            if author_id is not None:
                statement = statement.where(Project.author_id == author_id)
            rows = session.exec(statement).all()

            ids = [project.id for project, _ in rows]
            stars = stars_by_project(session, ids, bound)
            categories = category_names_by_project(session, ids)

            results = []
            for project, author_name in rows:
                if bound is not None and not stars.get(project.id):
                    continue
                results.append(
                    ProjectRatings(
                        id=project.id,
                        title=project.title,
                        ratings=stars.get(project.id, []),
                        author_id=project.author_id,
                        author_name=author_name,
                        categories=categories.get(project.id, []),
                        category=project.category,
                        status=project.status,
                        featured=project.featured,
                        published=project.published,
                        created_at=project.created_at,
                    )
                )
            return results

        return await self._run_session(_get)
