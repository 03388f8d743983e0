"""
Mastery update engine.

Folds one review observation into a prior MasteryScore using an EWMA:

    new = (1 - alpha) * old + alpha * observed

This is a pure computation module with no I/O. Out-of-range inputs are
clamped, never rejected.
"""

import logging

from facet.domain.constants import LIVE_EWMA_ALPHA
from facet.domain.numeric import clamp
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import Difficulty, Dimension, MasteryScore, ReviewRating

logger = logging.getLogger(__name__)


def update_ewma(current: float, observed: float, alpha: float = LIVE_EWMA_ALPHA) -> float:
    """Single EWMA step with every input and the result clamped to [0, 1]."""
    a = clamp(alpha)
    return clamp((1 - a) * clamp(current) + a * clamp(observed))


def speed_score(target_ms: float, response_time_ms: float) -> float:
    """
    Speed score of one response: min(1, target / actual).

    Answering at or under target scores 1.0. A non-positive response time
    is treated as instantaneous.
    """
    if response_time_ms <= 0:
        return 1.0
    return min(1.0, target_ms / response_time_ms)


def update(
    prior: MasteryScore,
    observed_accuracy: float,
    observed_speed: float,
    alpha: float = LIVE_EWMA_ALPHA,
) -> MasteryScore:
    """
    Advance a mastery score on both axes from one review.

    Args:
        prior: Score before the review.
        observed_accuracy: Accuracy observation, clamped to [0, 1].
        observed_speed: Speed observation, clamped to [0, 1].
        alpha: Smoothing factor, clamped to [0, 1].

    Returns:
        A new MasteryScore with recent_count incremented by one.
    """
    return prior.with_updated_both(observed_accuracy, observed_speed, alpha)


def update_accuracy(
    prior: MasteryScore, observed: float, alpha: float = LIVE_EWMA_ALPHA
) -> MasteryScore:
    return prior.with_updated_accuracy(observed, alpha)


def update_speed(prior: MasteryScore, observed: float, alpha: float = LIVE_EWMA_ALPHA) -> MasteryScore:
    return prior.with_updated_speed(observed, alpha)


def record_review(
    prior: MasteryScore,
    rating: ReviewRating,
    response_time_ms: int,
    difficulty: Difficulty | int,
    dimension: Dimension | None = None,
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> MasteryScore:
    """
    Common path: fold a fresh review into the live score for its dimension.

    Accuracy comes from the rating's score. Speed compares the response time
    against the dimension's own target for the difficulty when a dimension is
    given, otherwise against the fixed per-difficulty target.
    """
    level = int(difficulty)
    if dimension is not None:
        target = dimension.target_time_ms(level)
    else:
        target = params.target_time_ms(level)

    accuracy = rating.to_score()
    speed = speed_score(target, response_time_ms)
    updated = update(prior, accuracy, speed, params.live_alpha)

    logger.debug(
        f"Recorded {rating.value} ({response_time_ms}ms vs {target}ms target): "
        f"{prior.combined:.3f} -> {updated.combined:.3f}"
    )
    return updated
