"""In-memory EventLog, for already-fetched events and tests."""

from collections.abc import Iterable

from facet.domain.events import EventLog, ReviewEvent


class InMemoryEventLog(EventLog):
    """Serves a fixed list of events, most recent first."""

    def __init__(self, events: Iterable[ReviewEvent] = ()):
        self._events = list(events)

    async def fetch_recent(self, limit: int) -> list[ReviewEvent]:
        ordered = sorted(self._events, key=lambda e: e.occurred_at_utc, reverse=True)
        return ordered[:limit]
