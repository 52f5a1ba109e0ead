"""Database persistence for rating records."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from buildable.core.errors import BadRequestError, NotFoundError
from buildable.models import Project, Rating
from buildable.models.requests import RatingCreate, RatingUpdate
from buildable.models.timestamps import utc_now

from .repository import AsyncRepository, page_offset, window_bound

if TYPE_CHECKING:
    from sqlalchemy import Engine

DUPLICATE_RATING_MESSAGE = "You have already rated this project. Use update to change your rating."


class RatingRepository(AsyncRepository):
    """Persist and query rating records."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def get(self, rating_id: str) -> Rating | None:
        return await self._run_session(lambda session: session.get(Rating, rating_id))

    async def find(self, user_id: str, project_id: str) -> Rating | None:
        """Get the rating a user gave a project, if any."""

        def _get(session: Session) -> Rating | None:
            statement = select(Rating).where(
                Rating.user_id == user_id,
                Rating.project_id == project_id,
            )
            return session.exec(statement).first()

        return await self._run_session(_get)

    async def create(self, user_id: str, project_id: str, data: RatingCreate) -> Rating:
        """Insert a new rating.

        The (user, project) unique constraint backs up the caller's own check.
        """

        def _save(session: Session) -> Rating:
            rating = Rating(user_id=user_id, project_id=project_id, **data.model_dump())
            session.add(rating)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise BadRequestError(DUPLICATE_RATING_MESSAGE) from e
            session.refresh(rating)
            return rating

        return await self._run_session(_save)

    async def update(self, rating_id: str, data: RatingUpdate) -> Rating:
        """Apply the provided fields of ``data`` to an existing rating in place."""

        def _save(session: Session) -> Rating:
            rating = session.get(Rating, rating_id)
            if rating is None:
                raise NotFoundError("Rating")
            for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(rating, key, value)
            rating.updated_at = utc_now()
            session.add(rating)
            session.commit()
            session.refresh(rating)
            return rating

        return await self._run_session(_save)

    async def delete(self, rating_id: str) -> bool:
        def _delete(session: Session) -> bool:
            rating = session.get(Rating, rating_id)
            if rating is None:
                return False
            session.delete(rating)
            session.commit()
            return True

        return await self._run_session(_delete)

    async def page_for_project(
        self, project_id: str, page: int, limit: int
    ) -> tuple[list[Rating], int]:
        """Get one page of a project's ratings, newest first, plus the total count."""

        def _get(session: Session) -> tuple[list[Rating], int]:
            statement = (
                select(Rating)
                .where(Rating.project_id == project_id)
                .order_by(col(Rating.created_at).desc())
                .offset(page_offset(page, limit))
                .limit(limit)
            )
            total = session.exec(
                select(func.count(Rating.id)).where(Rating.project_id == project_id)
            ).one()
            return list(session.exec(statement).all()), total

        return await self._run_session(_get)

    async def page_for_user(self, user_id: str, page: int, limit: int) -> tuple[list[Rating], int]:
        """Get one page of the ratings a user gave, newest first, plus the total count."""

        def _get(session: Session) -> tuple[list[Rating], int]:
            statement = (
                select(Rating)
                .where(Rating.user_id == user_id)
                .order_by(col(Rating.created_at).desc())
                .offset(page_offset(page, limit))
                .limit(limit)
            )
            total = session.exec(
                select(func.count(Rating.id)).where(Rating.user_id == user_id)
            ).one()
            return list(session.exec(statement).all()), total

        return await self._run_session(_get)

    async def stars_for_project(self, project_id: str) -> list[int]:
        """Get every star value a project received."""

        def _get(session: Session) -> list[int]:
            statement = select(Rating.rating).where(Rating.project_id == project_id)
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def stars_received_by(self, author_id: str) -> list[int]:
        """Get every star value given to any project of ``author_id``."""

        def _get(session: Session) -> list[int]:
            statement = (
                select(Rating.rating)
                .join(Project, col(Project.id) == col(Rating.project_id))
                .where(Project.author_id == author_id)
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def count(self, user_id: str | None = None) -> int:
        def _count(session: Session) -> int:
            statement = select(func.count(Rating.id))
            if user_id is not None:
                statement = statement.where(Rating.user_id == user_id)
            return session.exec(statement).one()

        return await self._run_session(_count)

    async def created_since(self, since: datetime) -> list[datetime]:
        """Get creation timestamps of ratings inside a window."""
        bound = window_bound(since)

        def _get(session: Session) -> list[datetime]:
            statement = select(Rating.created_at).where(col(Rating.created_at) >= bound)
            return list(session.exec(statement).all())

        return await self._run_session(_get)
