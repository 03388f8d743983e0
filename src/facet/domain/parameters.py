"""
Tunable parameters for the mastery engines.

Every engine takes a MasteryParameters instance explicitly; there is no
process-wide settings cache. The application layer builds one from AppConfig.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from . import constants as c
from .levels import MasteryLevel, WeaknessSeverity
from .numeric import clamp, round_half_up


@dataclass(frozen=True)
class MasteryParameters:
    """
    Alphas, weights and thresholds used by the update, timeline and statistics engines.

    Attributes:
        live_alpha: Smoothing factor when advancing one live MasteryScore.
        timeline_alpha: Smoothing factor for the historical timeline replay.
        accuracy_weight / speed_weight: Blend used for the combined score.
        developing_threshold / strong_threshold / mastered_threshold:
            Lower bounds of the mastery levels above "weak".
        critical_threshold / moderate_threshold / weakness_threshold:
            Exclusive upper bounds of the weakness severities.
        target_times_ms: Target response time per difficulty level. Stored as
            a read-only copy of whatever mapping is passed in.
    """

    live_alpha: float = c.LIVE_EWMA_ALPHA
    timeline_alpha: float = c.TIMELINE_EWMA_ALPHA

    accuracy_weight: float = c.ACCURACY_WEIGHT
    speed_weight: float = c.SPEED_WEIGHT

    developing_threshold: float = c.DEVELOPING_THRESHOLD
    strong_threshold: float = c.STRONG_THRESHOLD
    mastered_threshold: float = c.MASTERED_THRESHOLD

    critical_threshold: float = c.CRITICAL_THRESHOLD
    moderate_threshold: float = c.MODERATE_THRESHOLD
    weakness_threshold: float = c.WEAKNESS_THRESHOLD

    target_times_ms: Mapping[int, int] = field(
        default_factory=lambda: dict(c.TARGET_TIMES_MS), hash=False
    )

    def __post_init__(self):
        object.__setattr__(self, "target_times_ms", MappingProxyType(dict(self.target_times_ms)))

    def combine(self, accuracy: float, speed: float) -> float:
        return self.accuracy_weight * accuracy + self.speed_weight * speed

    def level_for(self, combined: float) -> MasteryLevel:
        if combined < self.developing_threshold:
            return MasteryLevel.WEAK
        if combined < self.strong_threshold:
            return MasteryLevel.DEVELOPING
        if combined < self.mastered_threshold:
            return MasteryLevel.STRONG
        return MasteryLevel.MASTERED

    def severity_for(self, combined: float) -> WeaknessSeverity:
        if combined < self.critical_threshold:
            return WeaknessSeverity.CRITICAL
        if combined < self.moderate_threshold:
            return WeaknessSeverity.MODERATE
        if combined < self.weakness_threshold:
            return WeaknessSeverity.MILD
        return WeaknessSeverity.NONE

    def target_time_ms(self, difficulty: float) -> int:
        """Target response time for a difficulty, clamped into the 1-5 range."""
        level = int(clamp(round_half_up(difficulty), c.MIN_DIFFICULTY, c.MAX_DIFFICULTY))
        return self.target_times_ms.get(level, c.TARGET_TIMES_MS[level])


DEFAULT_PARAMETERS = MasteryParameters()
