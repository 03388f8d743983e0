from datetime import UTC, date, datetime, time

import pytest

from facet.domain.events import ReviewEvent
from facet.domain.values import Dimension, ReviewRating

TODAY = date(2026, 1, 16)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's ~/.facet.toml and FACET_* variables out of every test."""
    monkeypatch.setattr("facet.application.config.CONFIG_FILES", [tmp_path / "missing.toml"])
    for var in (
        "FACET_EVENT_LOG",
        "FACET_RECENT_LIMIT",
        "FACET_DEFAULT_DAYS",
        "FACET_LIVE_ALPHA",
        "FACET_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_event():
    """Factory for review events; `day` is the calendar day, `at` the time of day."""

    def _make(
        dimension=Dimension.DEFINITION,
        rating=ReviewRating.GOOD,
        response_time_ms=5000,
        difficulty=1,
        day=TODAY,
        at=time(12, 0),
    ):
        return ReviewEvent(
            dimension=dimension,
            difficulty=difficulty,
            rating=rating,
            response_time_ms=response_time_ms,
            occurred_at=datetime.combine(day, at, tzinfo=UTC),
        )

    return _make
