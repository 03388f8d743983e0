import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from facet.application.analytics import AnalyticsService, suggestion
from facet.application.config import resolve_config
from facet.application.factory import get_event_log
from facet.application.mastery import record_review
from facet.consts import VERSION
from facet.domain.constants import MAX_WINDOW_DAYS
from facet.domain.errors import ValidationError
from facet.domain.numeric import round_half_up
from facet.domain.values import Difficulty, Dimension, MasteryScore, ReviewRating

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("facet.server")

T = TypeVar("T")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Facet Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("Facet Server shutting down...")


app = FastAPI(
    title="Facet Server",
    description="Mastery analytics over a learner's review event log.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


def _service() -> AnalyticsService:
    """Service over the configured event log; clients cannot pick another file."""
    config = resolve_config()
    return AnalyticsService(
        get_event_log(config),
        params=config.to_parameters(),
        recent_limit=config.recent_limit,
    )


async def _handle(name: str, job: Callable[[], Awaitable[T]]) -> T:
    """Map domain validation failures to 400 and everything else to 500."""
    try:
        return await job()
    except ValidationError as e:
        logger.warning(f"{name} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"{name} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


@app.get("/analytics/timeline")
async def get_timeline(
    days: int | None = Query(default=None, ge=1, le=MAX_WINDOW_DAYS)
) -> list[dict[str, Any]]:
    """Per-day, per-dimension mastery for the trailing window."""

    async def job():
        service = _service()
        window = days or resolve_config().default_days
        return [e.to_dict() for e in await service.mastery_timeline(window)]

    return await _handle("Timeline", job)


@app.get("/analytics/distribution")
async def get_distribution() -> list[dict[str, Any]]:
    async def job():
        return [e.to_dict() for e in await _service().review_distribution()]

    return await _handle("Distribution", job)


@app.get("/analytics/response-times")
async def get_response_times() -> list[dict[str, Any]]:
    async def job():
        return [e.to_dict() for e in await _service().response_time_stats()]

    return await _handle("Response times", job)


@app.get("/analytics/heatmap")
async def get_heatmap(
    days: int | None = Query(default=None, ge=1, le=MAX_WINDOW_DAYS)
) -> list[dict[str, Any]]:
    async def job():
        service = _service()
        window = days or resolve_config().default_days
        return [e.to_dict() for e in await service.weakness_heatmap(window)]

    return await _handle("Heatmap", job)


# ---------------------------------------------------------------------------
# Mastery
# ---------------------------------------------------------------------------


@app.get("/mastery/profile")
async def get_profile() -> dict[str, Any]:
    async def job():
        return (await _service().mastery_profile()).to_dict()

    return await _handle("Profile", job)


@app.get("/mastery/weaknesses")
async def get_weaknesses() -> dict[str, Any]:
    async def job():
        report = await _service().weakness_report()
        return {**report.to_dict(), "suggestion": suggestion(report)}

    return await _handle("Weakness report", job)


class PriorScore(BaseModel):
    accuracy_ewma: float = 0.5
    speed_ewma: float = 0.5
    recent_count: int = 0


# Request model for a live mastery update
class UpdateRequest(BaseModel):
    prior: PriorScore = Field(default_factory=PriorScore)
    rating: str
    response_time_ms: int
    difficulty: int = 3
    dimension: str | None = None  # dimension-specific target time when set


class UpdateResponse(BaseModel):
    accuracy_ewma: float
    speed_ewma: float
    recent_count: int
    combined: float
    level: str
    percentage: int


@app.post("/mastery/update", response_model=UpdateResponse)
async def update_mastery(req: UpdateRequest):
    """
    Fold one review into a prior score. Nothing is persisted.
    """

    async def job():
        params = resolve_config().to_parameters()
        updated = record_review(
            MasteryScore.from_props(req.prior.model_dump()),
            ReviewRating.parse(req.rating),
            req.response_time_ms,
            Difficulty.create(req.difficulty),
            dimension=Dimension.parse(req.dimension) if req.dimension else None,
            params=params,
        )
        combined = params.combine(updated.accuracy_ewma, updated.speed_ewma)
        return UpdateResponse(
            **updated.to_props(),
            combined=combined,
            level=params.level_for(combined).value,
            percentage=round_half_up(combined * 100),
        )

    return await _handle("Mastery update", job)
