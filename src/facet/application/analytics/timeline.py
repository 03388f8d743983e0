"""
Temporal aggregator: replays the event log into a day-bucketed mastery timeline.

Each day's snapshot is an EWMA recomputed from scratch over every observation
seen so far (not carried forward from the previous day), using the timeline
alpha of 0.3 rather than the live-update alpha of 0.15.

This is a pure computation module with no I/O.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, timedelta

from facet.domain.analytics import MasterySnapshot, MasteryTimelineEntry
from facet.domain.constants import NEUTRAL_SCORE, TIMELINE_EWMA_ALPHA
from facet.domain.events import ReviewEvent, sort_chronologically
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import Dimension, warn_unknown_dimensions

from ..mastery.updater import speed_score

logger = logging.getLogger(__name__)


def ewma_from_list(values: Sequence[float], alpha: float = TIMELINE_EWMA_ALPHA) -> float:
    """
    EWMA over a whole series.

    The first value seeds the average; each later value folds in as
    alpha * x + (1 - alpha) * prev. An empty series is neutral (0.5).
    """
    if not values:
        return NEUTRAL_SCORE

    ewma = values[0]
    for value in values[1:]:
        ewma = alpha * value + (1 - alpha) * ewma
    return ewma


def neutral_snapshot() -> MasterySnapshot:
    return MasterySnapshot(accuracy=NEUTRAL_SCORE, speed=NEUTRAL_SCORE, combined=NEUTRAL_SCORE)


def utc_today() -> date:
    return datetime.now(UTC).date()


def date_window(days: int, today: date | None = None) -> list[date]:
    """
    Contiguous ascending UTC dates for the trailing window, inclusive of today.

    The window never reaches back past date.min.
    """
    end = today or utc_today()
    days = min(days, (end - date.min).days + 1)
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def group_by_day(events: Iterable[ReviewEvent]) -> dict[date, list[ReviewEvent]]:
    groups: dict[date, list[ReviewEvent]] = defaultdict(list)
    for event in events:
        groups[event.day].append(event)
    return groups


def mastery_timeline(
    events: Iterable[ReviewEvent],
    days: int,
    params: MasteryParameters = DEFAULT_PARAMETERS,
    today: date | None = None,
) -> list[MasteryTimelineEntry]:
    """
    Build the per-day, per-dimension mastery timeline.

    Args:
        events: Review events in any order; they are re-sorted oldest first.
        days: Length of the trailing window, today included.
        params: Supplies the timeline alpha, combined-score weights and
            per-difficulty target times.
        today: End of the window (UTC). Defaults to the current UTC date.

    Returns:
        One entry per day in the window, oldest first. Dimensions without any
        observation so far report the neutral 0.5 snapshot.
    """
    window = date_window(days, today)
    if not window:
        return []

    by_day = group_by_day(sort_chronologically(events))

    # Raw observations per dimension; grows across the whole replay.
    accuracy_history: dict[Dimension, list[float]] = {d: [] for d in Dimension.all()}
    speed_history: dict[Dimension, list[float]] = {d: [] for d in Dimension.all()}

    timeline: list[MasteryTimelineEntry] = []
    replayed = 0
    unknown: set[str] = set()

    for day in window:
        for event in by_day.get(day, []):
            dimension = Dimension.coerce(event.dimension, unknown)
            target = params.target_time_ms(event.difficulty)
            accuracy_history[dimension].append(event.rating.to_score())
            speed_history[dimension].append(speed_score(target, event.response_time_ms))
            replayed += 1

        snapshots: dict[Dimension, MasterySnapshot] = {}
        for dimension in Dimension.all():
            if not accuracy_history[dimension]:
                snapshots[dimension] = neutral_snapshot()
                continue

            accuracy = ewma_from_list(accuracy_history[dimension], params.timeline_alpha)
            speed = ewma_from_list(speed_history[dimension], params.timeline_alpha)
            snapshots[dimension] = MasterySnapshot(
                accuracy=accuracy,
                speed=speed,
                combined=params.combine(accuracy, speed),
            )

        timeline.append(MasteryTimelineEntry(date=day.isoformat(), dimensions=snapshots))

    warn_unknown_dimensions(unknown, logger)
    logger.debug(f"Timeline over {len(window)} days replayed {replayed} events")
    return timeline
