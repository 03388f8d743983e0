"""
Cognitive dimensions a concept can be reviewed under.

The set is closed: six members, fixed enumeration order, never extended at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..constants import DIFFICULTY_MULTIPLIERS, MAX_DIFFICULTY, MIN_DIFFICULTY
from ..errors import ValidationError
from ..numeric import clamp, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimensionMetadata:
    display_name: str
    description: str
    base_target_time_ms: int
    action_verb: str
    long_name: str  # spelling used by the event store


class Dimension(str, Enum):
    """One of the six cognitive-testing categories."""

    DEFINITION = "definition"
    PARAPHRASE = "paraphrase"
    EXAMPLE = "example"
    SCENARIO = "scenario"
    DISCRIMINATION = "discrimination"
    CLOZE = "cloze"

    @classmethod
    def all(cls) -> list[Dimension]:
        """All dimensions in enumeration order."""
        return list(cls)

    @classmethod
    def parse(cls, value: str) -> Dimension:
        """
        Validating factory.

        Accepts the short value ("cloze") or the storage name ("cloze_fill"),
        case-insensitive, surrounding whitespace ignored.

        Raises:
            ValidationError: If the value names no dimension.
        """
        if isinstance(value, Dimension):
            return value

        normalized = str(value).strip().lower()
        dimension = _LOOKUP.get(normalized)
        if dimension is None:
            valid = ", ".join(d.value for d in cls)
            raise ValidationError(
                f'Invalid dimension: "{value}". Valid dimensions are: {valid}',
                field="dimension",
                value=value,
            )
        return dimension

    @classmethod
    def coerce(cls, value: str | Dimension, unknown: set[str] | None = None) -> Dimension:
        """
        Permissive factory used while aggregating stored events.

        Unknown values fall back to DEFINITION so one bad row cannot fail a
        whole analytics run. They are added to `unknown` when given, so the
        caller can warn once per run instead of once per event.
        """
        if isinstance(value, Dimension):
            return value
        dimension = _LOOKUP.get(str(value).strip().lower())
        if dimension is None:
            if unknown is not None:
                unknown.add(str(value))
            logger.debug(f"Unknown dimension {value!r}, counting it as {cls.DEFINITION.value}")
            return cls.DEFINITION
        return dimension

    @property
    def metadata(self) -> DimensionMetadata:
        return _METADATA[self]

    @property
    def display_name(self) -> str:
        return _METADATA[self].display_name

    @property
    def description(self) -> str:
        return _METADATA[self].description

    @property
    def base_target_time_ms(self) -> int:
        return _METADATA[self].base_target_time_ms

    @property
    def action_verb(self) -> str:
        return _METADATA[self].action_verb

    @property
    def long_name(self) -> str:
        return _METADATA[self].long_name

    def target_time_ms(self, difficulty: float) -> int:
        """
        Target response time for this dimension at a difficulty.

        The difficulty is rounded and clamped to 1-5, then the base target
        time is scaled by that level's multiplier.
        """
        level = int(clamp(round_half_up(difficulty), MIN_DIFFICULTY, MAX_DIFFICULTY))
        multiplier = DIFFICULTY_MULTIPLIERS[level - 1]
        return round_half_up(self.base_target_time_ms * multiplier)

    def __str__(self) -> str:
        return self.value


def warn_unknown_dimensions(unknown: set[str], log: logging.Logger) -> None:
    """Single warning listing every unknown dimension seen during one aggregation."""
    if unknown:
        names = ", ".join(repr(name) for name in sorted(unknown))
        log.warning(f"Counted unknown dimensions as {Dimension.DEFINITION.value}: {names}")


_METADATA: dict[Dimension, DimensionMetadata] = {
    Dimension.DEFINITION: DimensionMetadata(
        display_name="Definition Recall",
        description="Recall the exact definition when shown the term",
        base_target_time_ms=5000,
        action_verb="Recall",
        long_name="definition_recall",
    ),
    Dimension.PARAPHRASE: DimensionMetadata(
        display_name="Paraphrase Recognition",
        description="Recognize correct restatements of the definition",
        base_target_time_ms=8000,
        action_verb="Recognize",
        long_name="paraphrase_recognition",
    ),
    Dimension.EXAMPLE: DimensionMetadata(
        display_name="Example Classification",
        description="Correctly identify examples and non-examples of the concept",
        base_target_time_ms=10000,
        action_verb="Classify",
        long_name="example_classification",
    ),
    Dimension.SCENARIO: DimensionMetadata(
        display_name="Scenario Application",
        description="Apply the concept to novel real-world scenarios",
        base_target_time_ms=15000,
        action_verb="Apply",
        long_name="scenario_application",
    ),
    Dimension.DISCRIMINATION: DimensionMetadata(
        display_name="Discrimination",
        description="Distinguish this concept from similar or related concepts",
        base_target_time_ms=12000,
        action_verb="Distinguish",
        long_name="discrimination",
    ),
    Dimension.CLOZE: DimensionMetadata(
        display_name="Cloze Fill",
        description="Complete sentences with missing key terms",
        base_target_time_ms=6000,
        action_verb="Complete",
        long_name="cloze_fill",
    ),
}

_LOOKUP: dict[str, Dimension] = {
    **{d.value: d for d in Dimension},
    **{meta.long_name: d for d, meta in _METADATA.items()},
}
