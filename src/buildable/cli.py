"""CLI for Buildable."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any, TypeVar

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from buildable import __version__
from buildable.core.config import ShowcaseConfig, load_config
from buildable.core.errors import ConfigurationError, ShowcaseError
from buildable.services import AnalyticsService, RatingService, seed_store
from buildable.services.reporting import (
    activity_markdown,
    categories_markdown,
    dashboard_markdown,
    leaderboard_markdown,
    platform_markdown,
    profile_markdown,
    project_markdown,
    statistics_markdown,
    to_json,
    trending_markdown,
)
from buildable.services.storage import ShowcaseStore

T = TypeVar("T")

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="buildable",
    help="Buildable - project showcase ratings, leaderboards and analytics",
    add_completion=False,
)
console = Console()

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the JSON response envelope")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"buildable v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Buildable CLI."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load(config_path: Path | None) -> ShowcaseConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _run(config: ShowcaseConfig, work: Callable[[ShowcaseStore], Awaitable[T]]) -> T:
    """Open a store, run ``work`` against it and close it, mapping errors to exit codes."""

    async def _go() -> T:
        store = ShowcaseStore.from_config(config)
        try:
            return await work(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_go())
    except ShowcaseError as e:
        console.print_json(data=e.to_envelope())
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e


def _emit(data: Any, markdown: str, as_json: bool, message: str | None = None) -> None:
    if as_json:
        console.print_json(to_json(data, message))
    else:
        console.print(Markdown(markdown))


@app.command("init-db")
def init_db(config_path: ConfigOption = None) -> None:
    """Create the database tables."""
    config = _load(config_path)

    async def _work(store: ShowcaseStore) -> None:
        store.create_tables()

    _run(config, _work)
    console.print("[green]Tables created.[/green]")


@app.command()
def seed(
    config_path: ConfigOption = None,
    reset: Annotated[bool, typer.Option("--reset", help="Drop all data first")] = False,
    random_seed: Annotated[int, typer.Option("--seed", help="Random seed for ratings")] = 42,
) -> None:
    """Fill the database with sample developers, projects and ratings."""
    config = _load(config_path)

    async def _work(store: ShowcaseStore):
        if reset:
            store.reset_tables()
        else:
            store.create_tables()
        return await seed_store(store, seed=random_seed)

    summary = _run(config, _work)
    console.print(
        f"[green]Seeded[/green] {summary.categories} categories, {summary.users} developers, "
        f"{summary.projects} projects, {summary.ratings} ratings"
    )


@app.command()
def stats(config_path: ConfigOption = None, as_json: JsonOption = False) -> None:
    """Show platform overview counters and top rated projects."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).platform_stats())
    _emit(result, platform_markdown(result), as_json)


@app.command()
def categories(config_path: ConfigOption = None, as_json: JsonOption = False) -> None:
    """Show category usage statistics."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).category_stats())
    _emit(result, categories_markdown(result), as_json)


@app.command()
def trending(
    config_path: ConfigOption = None,
    period: Annotated[str, typer.Option("--period", help="day, week or month")] = "week",
    limit: Annotated[int | None, typer.Option("--limit", min=1)] = None,
    as_json: JsonOption = False,
) -> None:
    """Show trending projects."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).trending(period, limit))
    _emit(result, trending_markdown(result), as_json)


@app.command()
def activity(
    config_path: ConfigOption = None,
    period: Annotated[str, typer.Option("--period", help="week, month or year")] = "month",
    as_json: JsonOption = False,
) -> None:
    """Show registrations, submissions and ratings over time."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).activity(period))
    _emit(result, activity_markdown(result), as_json)


@app.command()
def leaderboard(
    config_path: ConfigOption = None,
    period: Annotated[str, typer.Option("--period", help="week, month, year or all")] = "all",
    limit: Annotated[int | None, typer.Option("--limit", min=1)] = None,
    as_json: JsonOption = False,
) -> None:
    """Show the developer leaderboard."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).leaderboard(period, limit))
    _emit(result, leaderboard_markdown(result), as_json)


@app.command()
def ratings(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    config_path: ConfigOption = None,
    page: Annotated[int, typer.Option("--page", min=1)] = 1,
    limit: Annotated[int | None, typer.Option("--limit", min=1)] = None,
    as_json: JsonOption = False,
) -> None:
    """Show a project's ratings and rating distribution."""
    config = _load(config_path)
    result = _run(
        config,
        lambda store: RatingService(config, store).project_ratings(project_id, page, limit),
    )
    _emit(result, statistics_markdown(f"Ratings for {project_id}", result.statistics), as_json)


@app.command()
def project(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    config_path: ConfigOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a project with its average rating and rating count."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).project_detail(project_id))
    _emit(result, project_markdown(result), as_json)


@app.command()
def profile(
    user_id: Annotated[str, typer.Argument(help="Developer ID")],
    config_path: ConfigOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a developer's public profile counters and published projects."""
    config = _load(config_path)

    async def _work(store: ShowcaseStore):
        stats = await AnalyticsService(config, store).profile_stats(user_id)
        user = await store.users.get(user_id)
        return user.name, stats

    name, result = _run(config, _work)
    _emit(result, profile_markdown(name, result), as_json)


@app.command()
def dashboard(
    user_id: Annotated[str, typer.Argument(help="Developer ID")],
    config_path: ConfigOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a developer's dashboard, unpublished projects included."""
    config = _load(config_path)
    result = _run(config, lambda store: AnalyticsService(config, store).dashboard(user_id))
    _emit(result, dashboard_markdown(result), as_json)


@app.command()
def rate(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    user_id: Annotated[str, typer.Option("--user", help="ID of the rating developer")],
    stars: Annotated[int, typer.Option("--stars", help="1 to 5")],
    comment: Annotated[str | None, typer.Option("--comment")] = None,
    config_path: ConfigOption = None,
) -> None:
    """Rate a project on behalf of a developer."""
    config = _load(config_path)
    payload: dict[str, Any] = {"rating": stars}
    if comment is not None:
        payload["comment"] = comment
    result = _run(
        config,
        lambda store: RatingService(config, store).rate_project(user_id, project_id, payload),
    )
    console.print_json(to_json(result, "Rating submitted successfully"))


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without touching the database."""
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Database: {config.resolve_database_url()}")
        console.print(f"  Top rated minimum ratings: {config.ranking.top_rated_min_ratings}")
        console.print(f"  Trending minimum ratings: {config.ranking.trending_min_ratings}")
        console.print(f"  Recency boost: {config.ranking.recency_boost}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
