"""
Domain model for review events.

These are pure data structures with no I/O or external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from ..values.dimension import Dimension
from ..values.identifiers import ConceptId, EventId
from ..values.rating import ReviewRating


@dataclass(frozen=True)
class ReviewEvent:
    """
    A single, immutable review observation from the event log.

    Attributes:
        dimension: Dimension reviewed. Raw strings from storage are allowed and
            resolved permissively when aggregating.
        difficulty: Difficulty level (1-5) of the variant shown.
        rating: Self-assessed outcome.
        response_time_ms: Time taken to answer, in milliseconds.
        occurred_at: When the review happened. Naive datetimes are read as UTC.
        event_id: Store identifier, if known.
        concept_id: Concept reviewed, if known.
    """

    dimension: Dimension | str
    difficulty: int
    rating: ReviewRating
    response_time_ms: int
    occurred_at: datetime
    event_id: EventId | None = None
    concept_id: ConceptId | None = None

    @property
    def occurred_at_utc(self) -> datetime:
        if self.occurred_at.tzinfo is None:
            return self.occurred_at.replace(tzinfo=UTC)
        return self.occurred_at.astimezone(UTC)

    @property
    def day(self) -> date:
        """Calendar day (UTC) the event falls on."""
        return self.occurred_at_utc.date()


def sort_chronologically(events: Iterable[ReviewEvent]) -> list[ReviewEvent]:
    """
    Oldest-first copy of the events.

    Event stores commonly return most-recent-first; replaying in that order
    would silently corrupt every cumulative EWMA. The sort is stable, so
    same-instant events keep their relative order.
    """
    return sorted(events, key=lambda e: e.occurred_at_utc)
