"""
Output DTOs for mastery analytics.

These are pure data structures consumed by presentation layers (CLI, HTTP).
Each exposes `to_dict()` with enum members flattened to their string values.
"""

from dataclasses import dataclass, field
from typing import Any

from ..levels import MasteryLevel, WeaknessSeverity
from ..values.dimension import Dimension


@dataclass(frozen=True)
class MasterySnapshot:
    """Accuracy, speed and combined score of one dimension at a point in time."""

    accuracy: float
    speed: float
    combined: float

    def to_dict(self) -> dict[str, float]:
        return {"accuracy": self.accuracy, "speed": self.speed, "combined": self.combined}


@dataclass(frozen=True)
class MasteryTimelineEntry:
    date: str  # ISO calendar day, e.g. "2026-01-16"
    dimensions: dict[Dimension, MasterySnapshot]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "dimensions": {d.value: snap.to_dict() for d, snap in self.dimensions.items()},
        }


@dataclass(frozen=True)
class ReviewDistributionEntry:
    dimension: Dimension
    again: int = 0
    hard: int = 0
    good: int = 0
    easy: int = 0

    @property
    def total(self) -> int:
        return self.again + self.hard + self.good + self.easy

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension.value,
            "again": self.again,
            "hard": self.hard,
            "good": self.good,
            "easy": self.easy,
        }


@dataclass(frozen=True)
class ResponseTimeStatsEntry:
    difficulty: int
    min: int = 0
    max: int = 0
    avg: int = 0
    median: float = 0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
            "median": self.median,
            "count": self.count,
        }


@dataclass(frozen=True)
class WeaknessHeatmapEntry:
    date: str
    dimensions: dict[Dimension, WeaknessSeverity]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "dimensions": {d.value: sev.value for d, sev in self.dimensions.items()},
        }


@dataclass(frozen=True)
class MasteryDTO:
    dimension: Dimension
    accuracy_ewma: float
    speed_ewma: float
    count: int
    combined: float
    level: MasteryLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension.value,
            "accuracy_ewma": self.accuracy_ewma,
            "speed_ewma": self.speed_ewma,
            "count": self.count,
            "combined": self.combined,
            "level": self.level.value,
        }


@dataclass(frozen=True)
class MasteryProfile:
    dimensions: list[MasteryDTO]
    overall_score: float
    weakest_dimension: Dimension | None = None
    strongest_dimension: Dimension | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimensions": [m.to_dict() for m in self.dimensions],
            "overall_score": self.overall_score,
            "weakest_dimension": self.weakest_dimension.value if self.weakest_dimension else None,
            "strongest_dimension": (
                self.strongest_dimension.value if self.strongest_dimension else None
            ),
        }


@dataclass(frozen=True)
class Weakness:
    dimension: Dimension
    severity: WeaknessSeverity
    combined_score: float
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension.value,
            "severity": self.severity.value,
            "combined_score": self.combined_score,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class WeaknessReport:
    """
    Cross-sectional weakness analysis of a learner's current mastery.

    Attributes:
        weaknesses: Weak dimensions, most severe first.
        primary_weakness: First entry of `weaknesses`, if any.
        fragile_dimensions: Accurate-but-slow dimensions.
        is_dodging_pattern: Strong definitions but weak everywhere else.
        overall_health: "poor", "fair", "good" or "excellent".
    """

    weaknesses: list[Weakness] = field(default_factory=list)
    primary_weakness: Weakness | None = None
    fragile_dimensions: list[Dimension] = field(default_factory=list)
    is_dodging_pattern: bool = False
    overall_health: str = "fair"

    def to_dict(self) -> dict[str, Any]:
        return {
            "weaknesses": [w.to_dict() for w in self.weaknesses],
            "primary_weakness": self.primary_weakness.to_dict() if self.primary_weakness else None,
            "fragile_dimensions": [d.value for d in self.fragile_dimensions],
            "is_dodging_pattern": self.is_dodging_pattern,
            "overall_health": self.overall_health,
        }
