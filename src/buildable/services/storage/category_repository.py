"""Database persistence for categories."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlmodel import Session, col, select

from buildable.core.errors import BadRequestError
from buildable.models import Category, Project, ProjectCategory
from buildable.models.requests import CategoryCreate
from buildable.ranking.base import CategoryUsage

from .project_repository import stars_by_project
from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


class CategoryRepository(AsyncRepository):
    """Persist and query categories."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def create(self, data: CategoryCreate) -> Category:
        """Insert a category.

        Raises:
            BadRequestError: If a category with the same name exists.
        """

        def _save(session: Session) -> Category:
            existing = session.exec(select(Category).where(Category.name == data.name)).first()
            if existing is not None:
                raise BadRequestError("Category with this name already exists")
            category = Category(**data.model_dump())
            session.add(category)
            session.commit()
            session.refresh(category)
            return category

        return await self._run_session(_save)

    async def list_all(self) -> list[Category]:
        """Get all categories ordered by name."""

        def _get(session: Session) -> list[Category]:
            return list(session.exec(select(Category).order_by(col(Category.name))).all())

        return await self._run_session(_get)

    async def count(self) -> int:
        return await self._run_session(
            lambda session: session.exec(select(func.count(Category.id))).one()
        )

    async def usage(self) -> list[CategoryUsage]:
        """Load every category with the star values of its published projects."""

        def _get(session: Session) -> list[CategoryUsage]:
            categories = session.exec(select(Category).order_by(col(Category.name))).all()
            links = session.exec(
                select(ProjectCategory.category_id, ProjectCategory.project_id)
                .join(Project, col(Project.id) == col(ProjectCategory.project_id))
                .where(Project.published == True)  # noqa: E712
            ).all()

            projects_by_category: dict[str, list[str]] = defaultdict(list)
            for category_id, project_id in links:
                projects_by_category[category_id].append(project_id)

            stars = stars_by_project(session, sorted({project_id for _, project_id in links}))
            return [
                CategoryUsage(
                    id=category.id,
                    name=category.name,
                    color=category.color,
                    icon=category.icon,
                    project_ratings=[
                        stars.get(project_id, []) for project_id in projects_by_category[category.id]
                    ],
                )
                for category in categories
            ]

        return await self._run_session(_get)
