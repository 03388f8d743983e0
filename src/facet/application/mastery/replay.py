"""
Derive current per-dimension mastery by replaying the live update rule.

Used when no external mastery store is attached: the event log alone is
enough to rebuild every dimension's live record.
"""

import logging
from collections.abc import Iterable

from facet.domain.events import ReviewEvent, sort_chronologically
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import Dimension, MasteryScore, warn_unknown_dimensions

from .updater import record_review

logger = logging.getLogger(__name__)


def current_scores(
    events: Iterable[ReviewEvent],
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> dict[Dimension, MasteryScore]:
    """
    Fold every event, oldest first, into its dimension's score.

    Returns:
        A score for each of the six dimensions; unreviewed ones stay at
        MasteryScore.initial().
    """
    scores = {dimension: MasteryScore.initial() for dimension in Dimension.all()}
    unknown: set[str] = set()

    for event in sort_chronologically(events):
        dimension = Dimension.coerce(event.dimension, unknown)
        scores[dimension] = record_review(
            scores[dimension],
            event.rating,
            event.response_time_ms,
            event.difficulty,
            dimension=dimension,
            params=params,
        )

    warn_unknown_dimensions(unknown, logger)
    logger.debug(f"Replayed {sum(s.recent_count for s in scores.values())} reviews")
    return scores
