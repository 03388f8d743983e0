"""
MasteryScore value object.

A learner's competence on one dimension: accuracy and speed EWMAs plus the
number of observations folded into them. Instances are immutable; every
update returns a new score.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from ..constants import (
    FRAGILE_ACCURACY_FLOOR,
    FRAGILE_SPEED_CEILING,
    LIVE_EWMA_ALPHA,
    NEUTRAL_SCORE,
    SCORE_EPSILON,
)
from ..errors import ValidationError
from ..levels import MasteryLevel
from ..numeric import clamp, round_half_up
from ..parameters import DEFAULT_PARAMETERS


def _check_unit_interval(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ValidationError(f"{name} must be a number, got: {value!r}", field=name, value=value)
    if value < 0 or value > 1:
        raise ValidationError(f"{name} must be between 0 and 1, got: {value}", field=name, value=value)
    return float(value)


def _check_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"recent_count must be a non-negative integer, got: {value!r}",
            field="recent_count",
            value=value,
        )
    if value < 0 or not float(value).is_integer():
        raise ValidationError(
            f"recent_count must be a non-negative integer, got: {value}",
            field="recent_count",
            value=value,
        )
    return int(value)


@dataclass(frozen=True, eq=False)
class MasteryScore:
    """
    Attributes:
        accuracy_ewma: EWMA of rating scores, in [0, 1].
        speed_ewma: EWMA of speed scores, in [0, 1].
        recent_count: Number of reviews folded in so far.
    """

    accuracy_ewma: float
    speed_ewma: float
    recent_count: int

    # ---------- Factories ----------

    @classmethod
    def create(cls, accuracy_ewma: float, speed_ewma: float, recent_count: int) -> MasteryScore:
        """
        Validating factory.

        Raises:
            ValidationError: If an EWMA is outside [0, 1] or the count is not a
                non-negative integer.
        """
        return cls(
            _check_unit_interval("accuracy_ewma", accuracy_ewma),
            _check_unit_interval("speed_ewma", speed_ewma),
            _check_count(recent_count),
        )

    @classmethod
    def from_props(cls, props: dict[str, Any]) -> MasteryScore:
        """Validating factory for a plain {accuracy_ewma, speed_ewma, recent_count} record."""
        missing = [k for k in ("accuracy_ewma", "speed_ewma", "recent_count") if k not in props]
        if missing:
            raise ValidationError(f"Missing mastery fields: {', '.join(missing)}", field=missing[0])
        return cls.create(props["accuracy_ewma"], props["speed_ewma"], props["recent_count"])

    @classmethod
    def of(cls, accuracy_ewma: float, speed_ewma: float, recent_count: int) -> MasteryScore:
        """Trusted factory; skips validation."""
        return cls(accuracy_ewma, speed_ewma, recent_count)

    @classmethod
    def initial(cls) -> MasteryScore:
        """Score of a never-reviewed dimension."""
        return cls(NEUTRAL_SCORE, NEUTRAL_SCORE, 0)

    # ---------- Derived attributes ----------

    @property
    def combined(self) -> float:
        return DEFAULT_PARAMETERS.combine(self.accuracy_ewma, self.speed_ewma)

    @property
    def level(self) -> MasteryLevel:
        return DEFAULT_PARAMETERS.level_for(self.combined)

    @property
    def is_weak(self) -> bool:
        return self.combined < DEFAULT_PARAMETERS.weakness_threshold

    @property
    def is_fragile(self) -> bool:
        """Accurate but slow: knows the material without automaticity."""
        return self.accuracy_ewma > FRAGILE_ACCURACY_FLOOR and self.speed_ewma < FRAGILE_SPEED_CEILING

    @property
    def percentage(self) -> int:
        return round_half_up(self.combined * 100)

    # ---------- Copy-on-write updates ----------

    def with_updated_accuracy(self, observed: float, alpha: float = LIVE_EWMA_ALPHA) -> MasteryScore:
        a = clamp(alpha)
        accuracy = (1 - a) * self.accuracy_ewma + a * clamp(observed)
        return MasteryScore(clamp(accuracy), self.speed_ewma, self.recent_count + 1)

    def with_updated_speed(self, observed: float, alpha: float = LIVE_EWMA_ALPHA) -> MasteryScore:
        a = clamp(alpha)
        speed = (1 - a) * self.speed_ewma + a * clamp(observed)
        return MasteryScore(self.accuracy_ewma, clamp(speed), self.recent_count + 1)

    def with_updated_both(
        self, accuracy: float, speed: float, alpha: float = LIVE_EWMA_ALPHA
    ) -> MasteryScore:
        a = clamp(alpha)
        new_accuracy = (1 - a) * self.accuracy_ewma + a * clamp(accuracy)
        new_speed = (1 - a) * self.speed_ewma + a * clamp(speed)
        return MasteryScore(clamp(new_accuracy), clamp(new_speed), self.recent_count + 1)

    # ---------- Serialization ----------

    def to_props(self) -> dict[str, Any]:
        return {
            "accuracy_ewma": self.accuracy_ewma,
            "speed_ewma": self.speed_ewma,
            "recent_count": self.recent_count,
        }

    # ---------- Equality ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MasteryScore):
            return NotImplemented
        return (
            abs(self.accuracy_ewma - other.accuracy_ewma) < SCORE_EPSILON
            and abs(self.speed_ewma - other.speed_ewma) < SCORE_EPSILON
            and self.recent_count == other.recent_count
        )

    # Only the exact field can take part in the hash under tolerant equality.
    def __hash__(self) -> int:
        return hash(self.recent_count)

    def __str__(self) -> str:
        return (
            f"MasteryScore(accuracy={self.accuracy_ewma:.2f}, speed={self.speed_ewma:.2f}, "
            f"combined={self.combined:.2f}, level={self.level.value})"
        )
