"""Shared fixtures: an SQLite-backed store and row builders."""

from datetime import timedelta

import pytest
from sqlmodel import Session, create_engine

from buildable.core.config import ShowcaseConfig
from buildable.models import Category, Project, ProjectCategory, Rating, User
from buildable.models.timestamps import utc_now
from buildable.services.storage import ShowcaseStore


@pytest.fixture
def config() -> ShowcaseConfig:
    return ShowcaseConfig(database_url="sqlite://")


@pytest.fixture
async def store(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'showcase.db'}",
        connect_args={"check_same_thread": False},
    )
    showcase_store = ShowcaseStore(engine)
    showcase_store.create_tables()
    yield showcase_store
    await showcase_store.close()


class RowBuilder:
    """Insert rows directly, with explicit timestamps where tests need them."""

    def __init__(self, store: ShowcaseStore) -> None:
        self.store = store
        self.now = utc_now()

    def _add(self, *rows):
        with Session(self.store.engine) as session:
            for row in rows:
                session.add(row)
            session.commit()
            for row in rows:
                session.refresh(row)
        return rows[0] if len(rows) == 1 else rows

    def user(self, name: str, days_ago: float = 0, **kwargs) -> User:
        email = kwargs.pop("email", f"{name.lower().replace(' ', '.')}@example.com")
        return self._add(
            User(name=name, email=email, created_at=self.now - timedelta(days=days_ago), **kwargs)
        )

    def project(
        self,
        author: User,
        title: str,
        days_ago: float = 0,
        categories: tuple[Category, ...] = (),
        **kwargs,
    ) -> Project:
        project = self._add(
            Project(
                title=title,
                description=f"{title} is a sample project used in tests.",
                category=kwargs.pop("category", "web-app"),
                author_id=author.id,
                created_at=self.now - timedelta(days=days_ago),
                **kwargs,
            )
        )
        for category in categories:
            self._add(ProjectCategory(project_id=project.id, category_id=category.id))
        return project

    def category(self, name: str, **kwargs) -> Category:
        return self._add(Category(name=name, **kwargs))

    def rating(self, user: User, project: Project, stars: int, days_ago: float = 0) -> Rating:
        return self._add(
            Rating(
                user_id=user.id,
                project_id=project.id,
                rating=stars,
                created_at=self.now - timedelta(days=days_ago),
            )
        )

    def raters(self, count: int, prefix: str = "Rater") -> list[User]:
        return [self.user(f"{prefix} {i}") for i in range(count)]


@pytest.fixture
def rows(store: ShowcaseStore) -> RowBuilder:
    return RowBuilder(store)
