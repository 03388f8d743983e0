"""
File Event Log: infrastructure adapter for exported review events.

Implements EventLog by reading a JSON array, a JSON Lines file or a YAML
list. The file is re-read on every fetch; nothing is ever written back.
"""

import json
import logging
import math
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import yaml

from facet.domain.errors import EventLogError, ValidationError
from facet.domain.events import EventLog, ReviewEvent
from facet.domain.values import ConceptId, Difficulty, Dimension, EventId, ReviewRating

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
JSONL_SUFFIXES = {".jsonl", ".ndjson"}
YAML_SUFFIXES = {".yaml", ".yml"}

# Storage exports use a few alternative key names.
KEY_ALIASES = {
    "rating": ("rating", "result"),
    "response_time_ms": ("response_time_ms", "time_ms", "responseTimeMs", "timeMs"),
    "occurred_at": ("occurred_at", "created_at", "occurredAt", "createdAt"),
    "concept_id": ("concept_id", "conceptId"),
    "difficulty": ("difficulty", "difficulty_level", "difficultyLevel"),
}


def _pick(record: dict[str, Any], field: str) -> Any:
    for key in KEY_ALIASES.get(field, (field,)):
        if key in record:
            return record[key]
    raise ValidationError(f"Missing field: {field}", field=field)


def parse_timestamp(value: Any) -> datetime:
    """
    Accepts a datetime, a date, an ISO-8601 string or epoch milliseconds.
    Naive values are read as UTC; the result is always in UTC.

    Raises:
        ValidationError: If the value is not a timestamp or lies outside the
            range a datetime can hold.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(
                f"Timestamp out of range: {value!r}", field="occurred_at", value=value
            ) from None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(
                f"Invalid timestamp: {value!r}", field="occurred_at", value=value
            ) from None
    else:
        raise ValidationError(f"Invalid timestamp: {value!r}", field="occurred_at", value=value)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        raise ValidationError(
            f"Timestamp out of range: {value!r}", field="occurred_at", value=value
        ) from None


def parse_event(record: dict[str, Any]) -> ReviewEvent:
    """
    Build a ReviewEvent from one exported record.

    Unknown dimension strings are kept as-is and resolved permissively at
    aggregation time; every other invalid field raises ValidationError.
    """
    if not isinstance(record, dict):
        raise ValidationError(f"Expected a mapping, got {type(record).__name__}")

    raw_dimension = _pick(record, "dimension")
    try:
        dimension: Dimension | str = Dimension.parse(raw_dimension)
    except ValidationError:
        dimension = str(raw_dimension)

    response_time = _pick(record, "response_time_ms")
    if isinstance(response_time, bool) or not isinstance(response_time, (int, float)):
        raise ValidationError(
            f"response_time_ms must be a number, got: {response_time!r}",
            field="response_time_ms",
            value=response_time,
        )
    if isinstance(response_time, float) and not math.isfinite(response_time):
        raise ValidationError(
            f"response_time_ms must be finite, got: {response_time}",
            field="response_time_ms",
            value=response_time,
        )
    if response_time <= 0:
        raise ValidationError(
            f"response_time_ms must be positive, got: {response_time}",
            field="response_time_ms",
            value=response_time,
        )

    event_id = record.get("id")
    concept_id = next((record[k] for k in KEY_ALIASES["concept_id"] if k in record), None)

    return ReviewEvent(
        dimension=dimension,
        difficulty=Difficulty.create(_pick(record, "difficulty")).level,
        rating=ReviewRating.parse(_pick(record, "rating")),
        response_time_ms=int(response_time),
        occurred_at=parse_timestamp(_pick(record, "occurred_at")),
        event_id=EventId.parse(event_id) if event_id is not None else None,
        concept_id=ConceptId.parse(concept_id) if concept_id is not None else None,
    )


class FileEventLog(EventLog):
    """
    Reads review events from an exported file.

    Malformed records are skipped with a warning; an unreadable or
    structurally invalid file raises EventLogError.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def fetch_recent(self, limit: int) -> list[ReviewEvent]:
        """
        Fetch the most recent events from the file.
        """
        events = self.load_all()
        events.sort(key=lambda e: e.occurred_at_utc, reverse=True)
        return events[:limit]

    def load_all(self) -> list[ReviewEvent]:
        records = self._read_records()

        events: list[ReviewEvent] = []
        for index, record in enumerate(records, start=1):
            try:
                events.append(parse_event(record))
            except ValidationError as e:
                logger.warning(f"Skipping record #{index} in {self.path.name}: {e}")

        logger.info(f"Loaded {len(events)}/{len(records)} events from {self.path}")
        return events

    def _read_records(self) -> list[Any]:
        if not self.path.exists():
            raise EventLogError(f"Event log not found: {self.path}")

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise EventLogError(f"Could not read event log {self.path}: {e}") from e

        suffix = self.path.suffix.lower()
        try:
            if suffix in JSONL_SUFFIXES:
                return [json.loads(line) for line in text.splitlines() if line.strip()]
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(text)
            elif suffix in JSON_SUFFIXES:
                data = json.loads(text)
            else:
                raise EventLogError(
                    f"Unsupported event log format '{suffix}'. "
                    "Use .json, .jsonl, .ndjson, .yaml or .yml."
                )
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise EventLogError(f"Could not parse event log {self.path}: {e}") from e

        if data is None:
            return []
        if isinstance(data, dict) and "events" in data:
            data = data["events"]
        if not isinstance(data, list):
            raise EventLogError(
                f"Event log {self.path} must contain a list of events, got {type(data).__name__}"
            )
        return data
