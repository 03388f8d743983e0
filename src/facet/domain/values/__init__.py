# Domain Value Objects Package
from ..levels import MasteryLevel, WeaknessSeverity
from .difficulty import Difficulty, target_time_for_level
from .dimension import Dimension, warn_unknown_dimensions
from .identifiers import ConceptId, EventId
from .mastery_score import MasteryScore
from .rating import ReviewRating

__all__ = [
    "ConceptId",
    "Difficulty",
    "Dimension",
    "EventId",
    "MasteryLevel",
    "MasteryScore",
    "ReviewRating",
    "WeaknessSeverity",
    "target_time_for_level",
    "warn_unknown_dimensions",
]
