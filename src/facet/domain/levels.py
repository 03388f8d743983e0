"""Classification enums derived from a combined mastery score."""

from enum import Enum


class MasteryLevel(str, Enum):
    """Mastery band of a combined score."""

    WEAK = "weak"  # < 0.5
    DEVELOPING = "developing"  # 0.5 - 0.7
    STRONG = "strong"  # 0.7 - 0.85
    MASTERED = "mastered"  # >= 0.85

    @property
    def display_name(self) -> str:
        return self.value.title()


class WeaknessSeverity(str, Enum):
    """How far a combined score falls below the weakness threshold."""

    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Sort key, most severe first."""
        return {
            WeaknessSeverity.CRITICAL: 0,
            WeaknessSeverity.MODERATE: 1,
            WeaknessSeverity.MILD: 2,
            WeaknessSeverity.NONE: 3,
        }[self]
