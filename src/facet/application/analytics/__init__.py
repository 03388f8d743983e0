# Application Analytics Package
from .service import AnalyticsService
from .statistics import (
    classify_severity,
    heatmap_from_timeline,
    mastery_profile,
    median,
    response_time_stats,
    review_distribution,
    weakness_heatmap,
)
from .timeline import date_window, ewma_from_list, mastery_timeline
from .weakness import analyze_weaknesses, suggestion

__all__ = [
    "AnalyticsService",
    "analyze_weaknesses",
    "classify_severity",
    "date_window",
    "ewma_from_list",
    "heatmap_from_timeline",
    "mastery_profile",
    "mastery_timeline",
    "median",
    "response_time_stats",
    "review_distribution",
    "suggestion",
    "weakness_heatmap",
]
