"""
Event Log Factory
Centralizes the logic for selecting the appropriate EventLog adapter.
"""

from pathlib import Path

from facet.application.config import AppConfig
from facet.domain.errors import EventLogError
from facet.domain.events import EventLog
from facet.infrastructure.adapters.events.file_log import FileEventLog


def get_event_log(config: AppConfig, path: Path | None = None) -> EventLog:
    """
    Returns the EventLog for an explicit path, or the one named in config.

    Raises:
        EventLogError: If neither names an event log.
    """
    source = path or config.event_log
    if source is None:
        raise EventLogError(
            "No event log configured. Pass a path or set FACET_EVENT_LOG / event_log in config.toml."
        )
    return FileEventLog(Path(source))
