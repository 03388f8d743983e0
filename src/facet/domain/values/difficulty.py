from __future__ import annotations

from dataclasses import dataclass

from ..constants import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_LABELS,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    TARGET_TIMES_MS,
)
from ..errors import ValidationError
from ..numeric import clamp, round_half_up


def target_time_for_level(difficulty: float) -> int:
    """Fixed target response time (ms) for a difficulty, clamped into 1-5."""
    level = int(clamp(round_half_up(difficulty), MIN_DIFFICULTY, MAX_DIFFICULTY))
    return TARGET_TIMES_MS[level]


@dataclass(frozen=True, order=True)
class Difficulty:
    """
    Difficulty level of a review, an integer from 1 (very easy) to 5 (very hard).

    Use `create` for untrusted input and `of` when the level is already known
    to be valid (e.g. loaded from storage).
    """

    level: int

    @classmethod
    def create(cls, value: float) -> Difficulty:
        """
        Validating factory. Rounds half-up before checking the range.

        Raises:
            ValidationError: If the rounded value is outside 1-5.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"Difficulty must be a number, got: {value!r}", field="difficulty", value=value
            )
        # Same bounds as rounding first; NaN and infinities fail the comparison.
        if not MIN_DIFFICULTY - 0.5 <= value < MAX_DIFFICULTY + 0.5:
            raise ValidationError(
                f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got: {value}",
                field="difficulty",
                value=value,
            )
        return cls(round_half_up(value))

    @classmethod
    def of(cls, level: int) -> Difficulty:
        return cls(level)

    @classmethod
    def default(cls) -> Difficulty:
        return cls(DEFAULT_DIFFICULTY)

    @classmethod
    def easiest(cls) -> Difficulty:
        return cls(MIN_DIFFICULTY)

    @classmethod
    def hardest(cls) -> Difficulty:
        return cls(MAX_DIFFICULTY)

    @classmethod
    def all(cls) -> list[Difficulty]:
        return [cls(level) for level in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)]

    @property
    def target_time_ms(self) -> int:
        return TARGET_TIMES_MS[self.level]

    @property
    def label(self) -> str:
        return DIFFICULTY_LABELS[self.level]

    def is_harder_than(self, other: Difficulty) -> bool:
        return self.level > other.level

    def is_easier_than(self, other: Difficulty) -> bool:
        return self.level < other.level

    def harder(self) -> Difficulty:
        """One level up, saturating at the hardest level."""
        if self.level >= MAX_DIFFICULTY:
            return self
        return Difficulty(self.level + 1)

    def easier(self) -> Difficulty:
        """One level down, saturating at the easiest level."""
        if self.level <= MIN_DIFFICULTY:
            return self
        return Difficulty(self.level - 1)

    def __int__(self) -> int:
        return self.level

    def __str__(self) -> str:
        return str(self.level)
