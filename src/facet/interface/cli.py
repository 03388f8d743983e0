"""Facet CLI: analytics commands, live mastery update, config and server."""

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer

from facet.application.analytics import AnalyticsService, suggestion
from facet.application.config import AppConfig, resolve_config
from facet.application.factory import get_event_log
from facet.application.mastery import record_review
from facet.domain.constants import MAX_WINDOW_DAYS
from facet.domain.errors import DomainError
from facet.domain.numeric import round_half_up
from facet.domain.values import Difficulty, Dimension, MasteryScore, ReviewRating

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="facet: per-dimension mastery tracking and review analytics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage facet configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

EventLogArg = Annotated[
    Path | None,
    typer.Argument(help="Event log file (.json, .jsonl, .yaml). Defaults to 'event_log' in config."),
]
DaysOpt = Annotated[
    int | None,
    typer.Option("--days", "-d", min=1, max=MAX_WINDOW_DAYS, help="Trailing window in days."),
]


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def _build_service(config: AppConfig, path: Path | None) -> AnalyticsService:
    return AnalyticsService(
        get_event_log(config, path),
        params=config.to_parameters(),
        recent_limit=config.recent_limit,
    )


def _run(path: Path | None, job: Callable[[AnalyticsService], Awaitable[T]]) -> T:
    """Resolve config, build the service and run one async job, exiting 1 on domain errors."""
    try:
        config = resolve_config()
        service = _build_service(config, path)
        return asyncio.run(job(service))
    except DomainError as e:
        logger.debug("Command failed", exc_info=True)
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _days(days: int | None) -> int:
    return days if days is not None else resolve_config().default_days


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for facet."""
    ctx.ensure_object(dict)
    level = max(verbose, resolve_config().verbose)
    ctx.obj["verbose"] = level
    logging.getLogger().setLevel(LOG_LEVELS.get(level, logging.DEBUG))


# ---------------------------------------------------------------------------
# Analytics commands
# ---------------------------------------------------------------------------


@app.command()
def timeline(path: EventLogArg = None, days: DaysOpt = None):
    """Per-day, per-dimension [bold]mastery timeline[/bold] (accuracy, speed, combined)."""
    window = _days(days)
    entries = _run(path, lambda s: s.mastery_timeline(window))
    _echo_json([e.to_dict() for e in entries])


@app.command()
def distribution(path: EventLogArg = None):
    """Review rating counts per dimension."""
    entries = _run(path, lambda s: s.review_distribution())
    _echo_json([e.to_dict() for e in entries])


@app.command("response-times")
def response_times(path: EventLogArg = None):
    """Response-time statistics per difficulty level."""
    entries = _run(path, lambda s: s.response_time_stats())
    _echo_json([e.to_dict() for e in entries])


@app.command()
def heatmap(path: EventLogArg = None, days: DaysOpt = None):
    """Weakness severity per day and dimension."""
    window = _days(days)
    entries = _run(path, lambda s: s.weakness_heatmap(window))
    _echo_json([e.to_dict() for e in entries])


@app.command()
def profile(path: EventLogArg = None):
    """Current mastery profile rebuilt from the event log."""
    result = _run(path, lambda s: s.mastery_profile())
    _echo_json(result.to_dict())


@app.command()
def weaknesses(path: EventLogArg = None):
    """Weak and fragile dimensions, with a study suggestion."""
    report = _run(path, lambda s: s.weakness_report())
    _echo_json({**report.to_dict(), "suggestion": suggestion(report)})


# ---------------------------------------------------------------------------
# Live update
# ---------------------------------------------------------------------------


@app.command()
def update(
    rating: Annotated[str, typer.Option(help="Review result: again, hard, good, easy.")],
    response_time_ms: Annotated[int, typer.Option(help="Response time in milliseconds.")],
    difficulty: Annotated[int, typer.Option(help="Difficulty level 1-5.")] = 3,
    dimension: Annotated[
        str | None, typer.Option(help="Dimension reviewed; uses its own target time.")
    ] = None,
    accuracy_ewma: Annotated[float, typer.Option(help="Prior accuracy EWMA.")] = 0.5,
    speed_ewma: Annotated[float, typer.Option(help="Prior speed EWMA.")] = 0.5,
    count: Annotated[int, typer.Option(help="Prior review count.")] = 0,
):
    """Fold one review into a prior mastery score and print the new score."""
    try:
        params = resolve_config().to_parameters()
        prior = MasteryScore.create(accuracy_ewma, speed_ewma, count)
        updated = record_review(
            prior,
            ReviewRating.parse(rating),
            response_time_ms,
            Difficulty.create(difficulty),
            dimension=Dimension.parse(dimension) if dimension else None,
            params=params,
        )
    except DomainError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e

    combined = params.combine(updated.accuracy_ewma, updated.speed_ewma)
    _echo_json(
        {
            **updated.to_props(),
            "combined": combined,
            "level": params.level_for(combined).value,
            "percentage": round_half_up(combined * 100),
        }
    )


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port.")] = None,
):
    """Start the HTTP analytics server."""
    import uvicorn

    config = resolve_config({"host": host, "port": port})
    uvicorn.run("facet.server:app", host=config.host, port=config.port)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main() -> None:
    app()
