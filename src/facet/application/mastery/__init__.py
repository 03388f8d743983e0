# Application Mastery Package
from .replay import current_scores
from .updater import record_review, speed_score, update, update_accuracy, update_ewma, update_speed

__all__ = [
    "current_scores",
    "record_review",
    "speed_score",
    "update",
    "update_accuracy",
    "update_ewma",
    "update_speed",
]
