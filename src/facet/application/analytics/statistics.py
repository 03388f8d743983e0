"""
Statistics engine: non-temporal aggregates over the full event log.

Every function is total: empty inputs produce zero counts, zero statistics
or neutral scores rather than errors. Pure computation, no I/O.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from facet.domain.analytics import (
    MasteryDTO,
    MasteryProfile,
    MasteryTimelineEntry,
    ResponseTimeStatsEntry,
    ReviewDistributionEntry,
    WeaknessHeatmapEntry,
)
from facet.domain.constants import MAX_DIFFICULTY, MIN_DIFFICULTY
from facet.domain.events import ReviewEvent
from facet.domain.numeric import round_half_up
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import (
    Dimension,
    MasteryScore,
    ReviewRating,
    WeaknessSeverity,
    warn_unknown_dimensions,
)

from .timeline import mastery_timeline

logger = logging.getLogger(__name__)


# ---------- Review distribution ----------


def review_distribution(events: Iterable[ReviewEvent]) -> list[ReviewDistributionEntry]:
    """Count of events per (dimension, rating); all six dimensions, zeros included."""
    counts: dict[Dimension, dict[ReviewRating, int]] = {
        d: {r: 0 for r in ReviewRating.all()} for d in Dimension.all()
    }
    unknown: set[str] = set()
    for event in events:
        counts[Dimension.coerce(event.dimension, unknown)][event.rating] += 1
    warn_unknown_dimensions(unknown, logger)

    return [
        ReviewDistributionEntry(
            dimension=dimension,
            again=by_rating[ReviewRating.AGAIN],
            hard=by_rating[ReviewRating.HARD],
            good=by_rating[ReviewRating.GOOD],
            easy=by_rating[ReviewRating.EASY],
        )
        for dimension, by_rating in counts.items()
    ]


# ---------- Response times ----------


def median(values: Sequence[float]) -> float:
    """Middle element, or the mean of the two middle elements. Empty -> 0."""
    if not values:
        return 0

    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def response_time_stats(events: Iterable[ReviewEvent]) -> list[ResponseTimeStatsEntry]:
    """
    Min, max, mean, median and count of response times per difficulty 1-5.

    A level without events reports all zeros. Events whose difficulty lies
    outside 1-5 are not counted.
    """
    times: dict[int, list[int]] = defaultdict(list)
    for event in events:
        times[int(event.difficulty)].append(event.response_time_ms)

    stats: list[ResponseTimeStatsEntry] = []
    for difficulty in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1):
        level_times = times.get(difficulty, [])
        if not level_times:
            stats.append(ResponseTimeStatsEntry(difficulty=difficulty))
            continue

        stats.append(
            ResponseTimeStatsEntry(
                difficulty=difficulty,
                min=min(level_times),
                max=max(level_times),
                avg=round_half_up(sum(level_times) / len(level_times)),
                median=median(level_times),
                count=len(level_times),
            )
        )

    ignored = sum(len(v) for k, v in times.items() if not MIN_DIFFICULTY <= k <= MAX_DIFFICULTY)
    if ignored:
        logger.warning(f"Ignored {ignored} events with a difficulty outside 1-5")
    return stats


# ---------- Weakness heatmap ----------


def classify_severity(
    combined: float, params: MasteryParameters = DEFAULT_PARAMETERS
) -> WeaknessSeverity:
    """<0.4 critical, <0.55 moderate, <0.7 mild, otherwise none."""
    return params.severity_for(combined)


def heatmap_from_timeline(
    timeline: Iterable[MasteryTimelineEntry],
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> list[WeaknessHeatmapEntry]:
    return [
        WeaknessHeatmapEntry(
            date=entry.date,
            dimensions={
                dimension: classify_severity(snapshot.combined, params)
                for dimension, snapshot in entry.dimensions.items()
            },
        )
        for entry in timeline
    ]


def weakness_heatmap(
    events: Iterable[ReviewEvent],
    days: int,
    params: MasteryParameters = DEFAULT_PARAMETERS,
    today: date | None = None,
) -> list[WeaknessHeatmapEntry]:
    """Severity per day and dimension, classified from the mastery timeline."""
    return heatmap_from_timeline(mastery_timeline(events, days, params, today), params)


# ---------- Mastery profile ----------


def mastery_profile(
    scores: Mapping[Dimension, MasteryScore],
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> MasteryProfile:
    """
    Cross-sectional summary of current per-dimension mastery.

    Dimensions are scanned in enumeration order; any missing from `scores`
    count as MasteryScore.initial(). The overall score is the unweighted mean
    of the combined scores. Weakest and strongest use strict comparisons, so
    the first dimension encountered wins a tie.
    """
    dimensions: list[MasteryDTO] = []
    weakest: Dimension | None = None
    strongest: Dimension | None = None
    min_score = float("inf")
    max_score = float("-inf")
    total = 0.0

    for dimension in Dimension.all():
        score = scores.get(dimension, MasteryScore.initial())
        combined = params.combine(score.accuracy_ewma, score.speed_ewma)
        total += combined

        dimensions.append(
            MasteryDTO(
                dimension=dimension,
                accuracy_ewma=score.accuracy_ewma,
                speed_ewma=score.speed_ewma,
                count=score.recent_count,
                combined=combined,
                level=params.level_for(combined),
            )
        )

        if combined < min_score:
            min_score = combined
            weakest = dimension
        if combined > max_score:
            max_score = combined
            strongest = dimension

    return MasteryProfile(
        dimensions=dimensions,
        overall_score=total / len(dimensions),
        weakest_dimension=weakest,
        strongest_dimension=strongest,
    )
