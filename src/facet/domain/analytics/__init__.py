# Domain Analytics Package
from .models import (
    MasteryDTO,
    MasteryProfile,
    MasterySnapshot,
    MasteryTimelineEntry,
    ResponseTimeStatsEntry,
    ReviewDistributionEntry,
    Weakness,
    WeaknessHeatmapEntry,
    WeaknessReport,
)

__all__ = [
    "MasteryDTO",
    "MasteryProfile",
    "MasterySnapshot",
    "MasteryTimelineEntry",
    "ResponseTimeStatsEntry",
    "ReviewDistributionEntry",
    "Weakness",
    "WeaknessHeatmapEntry",
    "WeaknessReport",
]
