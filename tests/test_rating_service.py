"""Tests for the rating write boundary and rating pages."""

import pytest

from buildable.core.errors import BadRequestError, ForbiddenError, NotFoundError
from buildable.models.requests import RatingCreate
from buildable.services import RatingService


@pytest.fixture
def service(config, store):
    return RatingService(config, store)


@pytest.fixture
def showcase(rows):
    """An author with one project and two would-be raters."""
    author = rows.user("Ada Author")
    alice = rows.user("Alice")
    bob = rows.user("Bob")
    project = rows.project(author, "Lighthouse")
    return author, alice, bob, project


class TestRateProject:
    """Tests for creating ratings."""

    async def test_creates_rating(self, service, showcase):
        _, alice, _, project = showcase

        view = await service.rate_project(alice.id, project.id, {"rating": 4, "comment": "Neat"})

        assert view.rating == 4
        assert view.comment == "Neat"
        assert view.user_id == alice.id
        assert view.project_id == project.id

    async def test_own_project_rejected(self, service, showcase):
        author, _, _, project = showcase

        with pytest.raises(BadRequestError, match="cannot rate your own project"):
            await service.rate_project(author.id, project.id, {"rating": 5})

    async def test_second_rating_rejected(self, service, showcase):
        """Test one rating per (user, project) pair."""
        _, alice, _, project = showcase
        await service.rate_project(alice.id, project.id, {"rating": 4})

        with pytest.raises(BadRequestError, match="already rated"):
            await service.rate_project(alice.id, project.id, {"rating": 5})

    async def test_unknown_project(self, service, showcase):
        _, alice, _, _ = showcase

        with pytest.raises(NotFoundError, match="Project not found") as exc_info:
            await service.rate_project(alice.id, "missing", {"rating": 4})
        assert exc_info.value.status_code == 404

    async def test_out_of_range_rejected_before_lookup(self, service, showcase):
        _, alice, _, _ = showcase

        with pytest.raises(BadRequestError, match="rating"):
            await service.rate_project(alice.id, "missing", {"rating": 9})

    async def test_repository_constraint_backs_up_check(self, store, showcase):
        """Test the unique constraint rejects a duplicate that skips the service."""
        _, alice, _, project = showcase
        await store.ratings.create(alice.id, project.id, RatingCreate(rating=3))

        with pytest.raises(BadRequestError, match="already rated"):
            await store.ratings.create(alice.id, project.id, RatingCreate(rating=5))


class TestUpdateAndDelete:
    """Tests for ownership-checked rating changes."""

    async def test_update_stars_keeps_comment(self, service, showcase):
        _, alice, _, project = showcase
        created = await service.rate_project(alice.id, project.id, {"rating": 2, "comment": "Meh"})

        updated = await service.update_rating(alice.id, created.id, {"rating": 5})

        assert updated.rating == 5
        assert updated.comment == "Meh"
        assert updated.updated_at >= created.updated_at

    async def test_update_by_other_user_forbidden(self, service, showcase):
        _, alice, bob, project = showcase
        created = await service.rate_project(alice.id, project.id, {"rating": 2})

        with pytest.raises(ForbiddenError, match="Not authorized to update") as exc_info:
            await service.update_rating(bob.id, created.id, {"rating": 5})
        assert exc_info.value.status_code == 403

    async def test_update_missing(self, service, showcase):
        _, alice, _, _ = showcase

        with pytest.raises(NotFoundError, match="Rating not found"):
            await service.update_rating(alice.id, "missing", {"rating": 5})

    async def test_delete(self, service, store, showcase):
        _, alice, _, project = showcase
        created = await service.rate_project(alice.id, project.id, {"rating": 2})

        await service.delete_rating(alice.id, created.id)

        assert await store.ratings.get(created.id) is None
        # the pair may be rated again once the old rating is gone
        again = await service.rate_project(alice.id, project.id, {"rating": 4})
        assert again.rating == 4

    async def test_delete_by_other_user_forbidden(self, service, showcase):
        _, alice, bob, project = showcase
        created = await service.rate_project(alice.id, project.id, {"rating": 2})

        with pytest.raises(ForbiddenError, match="Not authorized to delete"):
            await service.delete_rating(bob.id, created.id)


class TestProjectRatings:
    """Tests for the paged rating listing with statistics."""

    async def test_statistics_cover_all_pages(self, service, rows):
        author = rows.user("Ada Author")
        project = rows.project(author, "Lighthouse")
        raters = rows.raters(5)
        for days_ago, (rater, stars) in enumerate(zip(raters, [5, 4, 5, 3, 5], strict=True)):
            rows.rating(rater, project, stars, days_ago=days_ago)

        page = await service.project_ratings(project.id, page=1, limit=2)

        assert [r.rating for r in page.ratings] == [5, 4]
        assert page.statistics.total == 5
        assert page.statistics.average == 4.4
        assert [b.count for b in page.statistics.distribution] == [0, 0, 1, 1, 3]
        assert page.pagination.total == 3
        assert page.pagination.has_next is True
        assert page.pagination.has_prev is False
        assert page.pagination.total_items == 5

    async def test_unrated_project(self, service, rows):
        author = rows.user("Ada Author")
        project = rows.project(author, "Lighthouse")

        page = await service.project_ratings(project.id)

        assert page.ratings == []
        assert page.statistics.average == 0.0
        assert all(b.percentage == "0.0" for b in page.statistics.distribution)

    async def test_unknown_project(self, service):
        with pytest.raises(NotFoundError):
            await service.project_ratings("missing")

    async def test_bad_page(self, service, showcase):
        *_, project = showcase

        with pytest.raises(BadRequestError):
            await service.project_ratings(project.id, page=0)

    async def test_my_ratings(self, service, rows):
        author = rows.user("Ada Author")
        alice = rows.user("Alice")
        first = rows.project(author, "First")
        second = rows.project(author, "Second")
        rows.rating(alice, first, 3, days_ago=2)
        rows.rating(alice, second, 5, days_ago=1)

        page = await service.my_ratings(alice.id)

        assert [r.project_id for r in page.ratings] == [second.id, first.id]
        assert page.pagination.total_items == 2
