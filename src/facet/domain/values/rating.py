from __future__ import annotations

from enum import Enum

from ..errors import ValidationError


class ReviewRating(str, Enum):
    """The learner's self-assessed recall outcome for one review."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def all(cls) -> list[ReviewRating]:
        return list(cls)

    @classmethod
    def parse(cls, value: str) -> ReviewRating:
        """
        Validating factory (case-insensitive, whitespace ignored).

        Raises:
            ValidationError: If the value names no rating.
        """
        if isinstance(value, ReviewRating):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValidationError(
                f'Invalid review result: "{value}". Valid results are: {valid}',
                field="rating",
                value=value,
            ) from None

    def to_score(self) -> float:
        """Accuracy score fed into the EWMA."""
        return _SCORES[self]

    def is_pass(self) -> bool:
        return self in (ReviewRating.GOOD, ReviewRating.EASY)

    def is_failure(self) -> bool:
        return self is ReviewRating.AGAIN

    def is_struggle(self) -> bool:
        return self in (ReviewRating.AGAIN, ReviewRating.HARD)

    def __str__(self) -> str:
        return self.value


_SCORES: dict[ReviewRating, float] = {
    ReviewRating.AGAIN: 0.0,
    ReviewRating.HARD: 0.4,
    ReviewRating.GOOD: 0.7,
    ReviewRating.EASY: 1.0,
}
