import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from facet.consts import VERSION
from facet.server import app

client = TestClient(app)


@pytest.fixture
def event_log(tmp_path, monkeypatch):
    now = datetime.now(UTC).isoformat()
    records = [
        {"dimension": "scenario", "difficulty": 2, "rating": "hard", "response_time_ms": 9000, "occurred_at": now},
        {"dimension": "scenario", "difficulty": 2, "rating": "good", "response_time_ms": 7000, "occurred_at": now},
    ]
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records))
    monkeypatch.setenv("FACET_EVENT_LOG", str(path))
    return path


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION


def test_get_version():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": VERSION}


# --- Analytics ---


def test_timeline_endpoint(event_log):
    response = client.get("/analytics/timeline", params={"days": 7})

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 7
    assert data[-1]["dimensions"]["scenario"]["accuracy"] == pytest.approx(0.3 * 0.7 + 0.7 * 0.4)


def test_timeline_uses_default_days(event_log):
    response = client.get("/analytics/timeline")
    assert response.status_code == 200
    assert len(response.json()) == 30


def test_timeline_rejects_non_positive_days(event_log):
    assert client.get("/analytics/timeline", params={"days": 0}).status_code == 422


def test_oversized_window_is_rejected(event_log):
    assert client.get("/analytics/timeline", params={"days": 800_000}).status_code == 422
    assert client.get("/analytics/heatmap", params={"days": 800_000}).status_code == 422


def test_distribution_endpoint(event_log):
    response = client.get("/analytics/distribution")
    assert response.status_code == 200
    scenario = next(e for e in response.json() if e["dimension"] == "scenario")
    assert (scenario["hard"], scenario["good"]) == (1, 1)


def test_response_times_endpoint(event_log):
    response = client.get("/analytics/response-times")
    assert response.status_code == 200
    level_two = response.json()[1]
    assert level_two == {"difficulty": 2, "min": 7000, "max": 9000, "avg": 8000, "median": 8000, "count": 2}


def test_heatmap_endpoint(event_log):
    response = client.get("/analytics/heatmap", params={"days": 2})
    assert response.status_code == 200
    assert response.json()[-1]["dimensions"]["scenario"] == "mild"


def test_client_cannot_choose_event_log(tmp_path):
    path = tmp_path / "other.json"
    path.write_text("[]")
    response = client.get("/analytics/distribution", params={"event_log": str(path)})
    assert response.status_code == 500
    assert "No event log configured" in response.json()["detail"]


def test_missing_event_log_is_500():
    response = client.get("/mastery/profile")
    assert response.status_code == 500
    assert "No event log configured" in response.json()["detail"]


# --- Mastery ---


def test_profile_endpoint(event_log):
    response = client.get("/mastery/profile")
    assert response.status_code == 200
    data = response.json()
    assert len(data["dimensions"]) == 6
    assert data["strongest_dimension"] == "scenario"
    assert data["weakest_dimension"] == "definition"


def test_weaknesses_endpoint(event_log):
    response = client.get("/mastery/weaknesses")
    assert response.status_code == 200
    data = response.json()
    assert data["overall_health"] == "fair"
    assert "suggestion" in data


def test_update_endpoint():
    response = client.post(
        "/mastery/update", json={"rating": "good", "response_time_ms": 25000, "difficulty": 3}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["accuracy_ewma"] == pytest.approx(0.53)
    assert data["speed_ewma"] == pytest.approx(0.545)
    assert data["recent_count"] == 1
    assert data["combined"] == pytest.approx(0.5345)
    assert data["level"] == "developing"
    assert data["percentage"] == 53


def test_update_endpoint_with_prior():
    response = client.post(
        "/mastery/update",
        json={
            "prior": {"accuracy_ewma": 0.2, "speed_ewma": 0.2, "recent_count": 9},
            "rating": "again",
            "response_time_ms": 5000,
            "dimension": "definition",
        },
    )
    assert response.status_code == 200
    assert response.json()["recent_count"] == 10
    assert response.json()["level"] == "weak"


@pytest.mark.parametrize(
    "body",
    [
        {"rating": "perfect", "response_time_ms": 1000},
        {"rating": "good", "response_time_ms": 1000, "difficulty": 0},
        {"rating": "good", "response_time_ms": 1000, "dimension": "synthesis"},
        {"rating": "good", "response_time_ms": 1000, "prior": {"accuracy_ewma": 2.0}},
    ],
)
def test_update_validation_errors_are_400(body):
    response = client.post("/mastery/update", json=body)
    assert response.status_code == 400
    assert response.json()["detail"]


@patch("facet.server.AnalyticsService.mastery_profile", new_callable=AsyncMock)
def test_unexpected_error_is_500(mock_profile, event_log):
    mock_profile.side_effect = Exception("Boom")

    response = client.get("/mastery/profile")

    assert response.status_code == 500
    assert "Boom" in response.json()["detail"]
