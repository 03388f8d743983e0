"""
Ports (interfaces) for event retrieval.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import ReviewEvent


class EventLog(ABC):
    """
    Port for reading the append-only review event log.

    Implementations:
        - InMemoryEventLog: Wraps an already-fetched list.
        - FileEventLog: Reads a JSON, JSON Lines or YAML export.
    """

    @abstractmethod
    async def fetch_recent(self, limit: int) -> list[ReviewEvent]:
        """
        Fetch the most recent events.

        Args:
            limit: Maximum number of events to return.

        Returns:
            List of ReviewEvent objects, most recent first.
        """
        pass
