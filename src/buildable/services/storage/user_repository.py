"""Database persistence for developer accounts."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlmodel import Session, col, select

from buildable.core.errors import BadRequestError
from buildable.models import Project, Rating, User
from buildable.models.requests import UserCreate
from buildable.ranking.base import DeveloperStats

from .project_repository import stars_by_project
from .repository import AsyncRepository, window_bound

if TYPE_CHECKING:
    from sqlalchemy import Engine


class UserRepository(AsyncRepository):
    """Persist and query developers."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def create(self, data: UserCreate) -> User:
        """Insert a developer; email uniqueness is case-insensitive.

        Raises:
            BadRequestError: If the email is already registered.
        """

        def _save(session: Session) -> User:
            existing = session.exec(select(User).where(User.email == data.email)).first()
            if existing is not None:
                raise BadRequestError("User already exists with this email")
            user = User(**data.model_dump())
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

        return await self._run_session(_save)

    async def get(self, user_id: str) -> User | None:
        return await self._run_session(lambda session: session.get(User, user_id))

    async def get_by_email(self, email: str) -> User | None:
        def _get(session: Session) -> User | None:
            return session.exec(select(User).where(User.email == email.lower())).first()

        return await self._run_session(_get)

    async def count(self) -> int:
        return await self._run_session(lambda session: session.exec(select(func.count(User.id))).one())

    async def created_since(self, since: datetime) -> list[datetime]:
        """Get registration timestamps inside a window."""
        bound = window_bound(since)

        def _get(session: Session) -> list[datetime]:
            statement = select(User.created_at).where(col(User.created_at) >= bound)
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def developer_stats(self, since: datetime | None = None) -> list[DeveloperStats]:
        """Load leaderboard inputs for every developer.

        Args:
            since: When set, only published projects created in the window count,
                and only ratings given in the window count toward ``ratings_given``.
                Ratings received are counted over all time for the counted projects.

        Returns:
            One DeveloperStats per user, in registration order.
        """
        bound = window_bound(since)

        def _get(session: Session) -> list[DeveloperStats]:
            users = session.exec(select(User).order_by(col(User.created_at))).all()

            project_statement = select(Project.id, Project.author_id).where(
                Project.published == True  # noqa: E712
            )
            if bound is not None:
                project_statement = project_statement.where(col(Project.created_at) >= bound)
            projects = session.exec(project_statement).all()

            projects_by_author: dict[str, list[str]] = defaultdict(list)
            for project_id, author_id in projects:
                projects_by_author[author_id].append(project_id)
            stars = stars_by_project(session, [project_id for project_id, _ in projects])

            given_statement = select(Rating.user_id, func.count(Rating.id)).group_by(
                col(Rating.user_id)
            )
            if bound is not None:
                given_statement = given_statement.where(col(Rating.created_at) >= bound)
            given = dict(session.exec(given_statement).all())

            return [
                DeveloperStats(
                    id=user.id,
                    name=user.name,
                    avatar=user.avatar,
                    bio=user.bio,
                    project_ratings=[
                        stars.get(project_id, []) for project_id in projects_by_author[user.id]
                    ],
                    ratings_given=given.get(user.id, 0),
                )
                for user in users
            ]

        return await self._run_session(_get)
