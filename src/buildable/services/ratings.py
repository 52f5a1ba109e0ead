"""Rating write boundary and project rating pages."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from buildable.core.config import ShowcaseConfig
from buildable.core.errors import BadRequestError, ForbiddenError, NotFoundError
from buildable.models import Rating
from buildable.models.requests import RatingCreate, RatingUpdate, parse_request
from buildable.models.responses import Pagination, ProjectRatingsPage, RatingsPage, RatingView
from buildable.ranking import rating_statistics
from buildable.services.storage import ShowcaseStore
from buildable.services.storage.rating_repository import DUPLICATE_RATING_MESSAGE

logger = structlog.get_logger()


def to_view(rating: Rating) -> RatingView:
    return RatingView.model_validate(rating, from_attributes=True)


class RatingService:
    """Create, change and list ratings on behalf of an authenticated user."""

    def __init__(self, config: ShowcaseConfig, store: ShowcaseStore) -> None:
        self.config = config
        self.store = store

    async def rate_project(
        self,
        user_id: str,
        project_id: str,
        payload: Mapping[str, Any] | RatingCreate,
    ) -> RatingView:
        """Rate a project for the first time.

        Raises:
            BadRequestError: Invalid payload, own project, or already rated.
            NotFoundError: Unknown project.
        """
        data = parse_request(RatingCreate, payload)
        project = await self.store.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project")
        if project.author_id == user_id:
            raise BadRequestError("You cannot rate your own project")
        if await self.store.ratings.find(user_id, project_id) is not None:
            raise BadRequestError(DUPLICATE_RATING_MESSAGE)

        rating = await self.store.ratings.create(user_id, project_id, data)
        logger.info("rating_created", project_id=project_id, user_id=user_id, stars=rating.rating)
        return to_view(rating)

    async def update_rating(
        self,
        user_id: str,
        rating_id: str,
        payload: Mapping[str, Any] | RatingUpdate,
    ) -> RatingView:
        """Change the stars or comment of the caller's own rating."""
        data = parse_request(RatingUpdate, payload)
        await self._owned_rating(user_id, rating_id, "update")
        rating = await self.store.ratings.update(rating_id, data)
        logger.info("rating_updated", rating_id=rating_id, stars=rating.rating)
        return to_view(rating)

    async def delete_rating(self, user_id: str, rating_id: str) -> None:
        await self._owned_rating(user_id, rating_id, "delete")
        await self.store.ratings.delete(rating_id)
        logger.info("rating_deleted", rating_id=rating_id)

    async def _owned_rating(self, user_id: str, rating_id: str, action: str) -> Rating:
        rating = await self.store.ratings.get(rating_id)
        if rating is None:
            raise NotFoundError("Rating")
        if rating.user_id != user_id:
            raise ForbiddenError(f"Not authorized to {action} this rating")
        return rating

    async def project_ratings(
        self,
        project_id: str,
        page: int = 1,
        limit: int | None = None,
    ) -> ProjectRatingsPage:
        """Get one page of a project's ratings with statistics over all of them."""
        limit = limit or self.config.analytics.page_size
        if page < 1 or limit < 1:
            raise BadRequestError("page and limit must be positive")
        if await self.store.projects.get(project_id) is None:
            raise NotFoundError("Project")

        (ratings, total), stars = await asyncio.gather(
            self.store.ratings.page_for_project(project_id, page, limit),
            self.store.ratings.stars_for_project(project_id),
        )
        return ProjectRatingsPage(
            ratings=[to_view(r) for r in ratings],
            statistics=rating_statistics(stars),
            pagination=Pagination.build(page, limit, total),
        )

    async def my_ratings(self, user_id: str, page: int = 1, limit: int | None = None) -> RatingsPage:
        """Get one page of the ratings the caller gave."""
        limit = limit or self.config.analytics.page_size
        if page < 1 or limit < 1:
            raise BadRequestError("page and limit must be positive")
        ratings, total = await self.store.ratings.page_for_user(user_id, page, limit)
        return RatingsPage(
            ratings=[to_view(r) for r in ratings],
            pagination=Pagination.build(page, limit, total),
        )
