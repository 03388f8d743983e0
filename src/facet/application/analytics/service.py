"""
Analytics Service: application layer orchestrator.

Coordinates fetching a snapshot of the event log and handing it to the pure
timeline, statistics and weakness engines.
"""

import logging
from datetime import date

from facet.domain.analytics import (
    MasteryProfile,
    MasteryTimelineEntry,
    ResponseTimeStatsEntry,
    ReviewDistributionEntry,
    WeaknessHeatmapEntry,
    WeaknessReport,
)
from facet.domain.constants import RECENT_EVENT_LIMIT
from facet.domain.events import EventLog, ReviewEvent
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import Dimension, MasteryScore

from ..mastery.replay import current_scores
from . import statistics, timeline, weakness

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Application service for mastery analytics.

    Follows Dependency Inversion: depends on the EventLog abstraction,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        event_log: EventLog,
        params: MasteryParameters | None = None,
        recent_limit: int = RECENT_EVENT_LIMIT,
    ):
        """
        Args:
            event_log: The port for reading review events.
            params: Engine parameters; defaults are used if not provided.
            recent_limit: How many of the most recent events to analyse.
        """
        self._log = event_log
        self._params = params or DEFAULT_PARAMETERS
        self._limit = recent_limit

    @property
    def params(self) -> MasteryParameters:
        return self._params

    async def fetch_events(self) -> list[ReviewEvent]:
        """Snapshot of the most recent events, in the order the log returns them."""
        events = await self._log.fetch_recent(self._limit)
        logger.debug(f"Fetched {len(events)} events (limit {self._limit})")
        return events

    async def mastery_timeline(
        self, days: int, today: date | None = None
    ) -> list[MasteryTimelineEntry]:
        events = await self.fetch_events()
        return timeline.mastery_timeline(events, days, self._params, today)

    async def review_distribution(self) -> list[ReviewDistributionEntry]:
        return statistics.review_distribution(await self.fetch_events())

    async def response_time_stats(self) -> list[ResponseTimeStatsEntry]:
        return statistics.response_time_stats(await self.fetch_events())

    async def weakness_heatmap(
        self, days: int, today: date | None = None
    ) -> list[WeaknessHeatmapEntry]:
        events = await self.fetch_events()
        return statistics.weakness_heatmap(events, days, self._params, today)

    async def current_scores(self) -> dict[Dimension, MasteryScore]:
        return current_scores(await self.fetch_events(), self._params)

    async def mastery_profile(self) -> MasteryProfile:
        return statistics.mastery_profile(await self.current_scores(), self._params)

    async def weakness_report(self) -> WeaknessReport:
        return weakness.analyze_weaknesses(await self.current_scores(), params=self._params)
