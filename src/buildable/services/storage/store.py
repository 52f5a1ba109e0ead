"""Showcase storage layer bundling the per-entity repositories."""

from __future__ import annotations

import gc
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import ArgumentError, NoSuchModuleError
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from buildable.core.config import ShowcaseConfig
from buildable.core.errors import DatabaseURLError

from .category_repository import CategoryRepository
from .project_repository import ProjectRepository
from .rating_repository import RatingRepository
from .user_repository import UserRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = structlog.get_logger()


class ShowcaseStore:
    """Persistence for users, projects, categories and ratings.

    One store is built at startup and handed to every service; nothing reaches
    for a module-level database client.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the store on an existing engine.

        Args:
            engine: SQLAlchemy engine for the relational database.
        """
        self._engine: Engine | None = engine
        self.users = UserRepository(engine)
        self.projects = ProjectRepository(engine)
        self.categories = CategoryRepository(engine)
        self.ratings = RatingRepository(engine)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            msg = "Store is closed"
            raise RuntimeError(msg)
        return self._engine

    @classmethod
    def from_config(cls, config: ShowcaseConfig) -> ShowcaseStore:
        """Create an engine from configuration and wrap it in a store.

        Raises:
            DatabaseURLError: If the URL or its driver is unusable.
        """
        url = config.resolve_database_url()
        try:
            # NullPool avoids holding DuckDB file locks between worker threads
            engine = create_engine(url, poolclass=NullPool, echo=config.echo_sql)
        except (ArgumentError, NoSuchModuleError) as e:
            raise DatabaseURLError(url, str(e)) from e
        logger.info("store_init", dialect=engine.dialect.name)
        return cls(engine)

    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        SQLModel.metadata.create_all(self.engine)

    def reset_tables(self) -> None:
        """Drop and recreate every table, discarding all data."""
        SQLModel.metadata.drop_all(self.engine)
        SQLModel.metadata.create_all(self.engine)
        logger.warning("tables_reset")

    async def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
        gc.collect()
