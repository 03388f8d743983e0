import logging
from datetime import timedelta

import pytest

from facet.application.analytics import (
    classify_severity,
    heatmap_from_timeline,
    mastery_profile,
    median,
    response_time_stats,
    review_distribution,
    weakness_heatmap,
)
from facet.domain.analytics import MasterySnapshot, MasteryTimelineEntry
from facet.domain.values import (
    Dimension,
    MasteryLevel,
    MasteryScore,
    ReviewRating,
    WeaknessSeverity,
)

# --- Review distribution ---


def test_distribution_counts_per_dimension_and_rating(make_event):
    events = [
        make_event(rating=ReviewRating.AGAIN),
        make_event(rating=ReviewRating.GOOD),
        make_event(rating=ReviewRating.GOOD),
        make_event(dimension=Dimension.CLOZE, rating=ReviewRating.EASY),
        make_event(dimension="cloze_fill", rating=ReviewRating.HARD),
    ]
    entries = {e.dimension: e for e in review_distribution(events)}

    definition = entries[Dimension.DEFINITION]
    assert (definition.again, definition.hard, definition.good, definition.easy) == (1, 0, 2, 0)
    assert entries[Dimension.CLOZE].to_dict() == {
        "dimension": "cloze",
        "again": 0,
        "hard": 1,
        "good": 0,
        "easy": 1,
    }


def test_distribution_empty_log_reports_zeros():
    entries = review_distribution([])
    assert [e.dimension for e in entries] == Dimension.all()
    assert all(e.total == 0 for e in entries)


def test_distribution_total_matches_event_count(make_event):
    events = [make_event(dimension=d) for d in Dimension.all()] * 3
    assert sum(e.total for e in review_distribution(events)) == 18


def test_distribution_warns_once_per_unknown_dimension(make_event, caplog):
    events = [make_event(dimension="synthesis") for _ in range(50)] + [make_event(dimension="recall")]

    with caplog.at_level(logging.WARNING):
        entries = review_distribution(events)

    assert entries[0].total == 51
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "'recall', 'synthesis'" in warnings[0].getMessage()


# --- Response times ---


@pytest.mark.parametrize(
    "values, expected",
    [([10, 20, 30, 40], 25), ([10, 20, 30], 20), ([], 0), ([30, 10, 20], 20), ([7], 7)],
)
def test_median(values, expected):
    assert median(values) == expected


def test_response_time_stats(make_event):
    events = [
        make_event(difficulty=2, response_time_ms=1000),
        make_event(difficulty=2, response_time_ms=2000),
        make_event(difficulty=2, response_time_ms=4000),
        make_event(difficulty=2, response_time_ms=2001),
        make_event(difficulty=5, response_time_ms=30000),
    ]
    stats = {s.difficulty: s for s in response_time_stats(events)}

    assert list(stats) == [1, 2, 3, 4, 5]
    assert stats[2].to_dict() == {
        "difficulty": 2,
        "min": 1000,
        "max": 4000,
        "avg": 2250,
        "median": 2000.5,
        "count": 4,
    }
    assert stats[5].count == 1
    assert stats[5].median == 30000


def test_response_time_average_rounds_half_up(make_event):
    events = [make_event(difficulty=3, response_time_ms=t) for t in (1000, 1001)]
    assert response_time_stats(events)[2].avg == 1001


def test_response_time_empty_level_is_zero():
    for entry in response_time_stats([]):
        assert (entry.min, entry.max, entry.avg, entry.median, entry.count) == (0, 0, 0, 0, 0)


def test_response_time_ignores_out_of_range_difficulty(make_event, caplog):
    with caplog.at_level(logging.WARNING):
        stats = response_time_stats([make_event(difficulty=7, response_time_ms=100)])
    assert all(s.count == 0 for s in stats)
    assert "outside 1-5" in caplog.text


# --- Weakness heatmap ---


@pytest.mark.parametrize(
    "combined, severity",
    [
        (0.0, WeaknessSeverity.CRITICAL),
        (0.39, WeaknessSeverity.CRITICAL),
        (0.39999, WeaknessSeverity.CRITICAL),
        (0.4, WeaknessSeverity.MODERATE),
        (0.54, WeaknessSeverity.MODERATE),
        (0.55, WeaknessSeverity.MILD),
        (0.69, WeaknessSeverity.MILD),
        (0.70, WeaknessSeverity.NONE),
        (1.0, WeaknessSeverity.NONE),
    ],
)
def test_classify_severity(combined, severity):
    assert classify_severity(combined) is severity


def test_heatmap_from_timeline():
    snapshots = {d: MasterySnapshot(0.5, 0.5, 0.5) for d in Dimension.all()}
    snapshots[Dimension.SCENARIO] = MasterySnapshot(0.2, 0.2, 0.2)
    timeline = [MasteryTimelineEntry(date="2026-01-16", dimensions=snapshots)]

    (entry,) = heatmap_from_timeline(timeline)
    assert entry.date == "2026-01-16"
    assert entry.dimensions[Dimension.SCENARIO] is WeaknessSeverity.CRITICAL
    assert entry.dimensions[Dimension.DEFINITION] is WeaknessSeverity.MODERATE


def test_weakness_heatmap_follows_timeline(make_event, today):
    events = [
        make_event(rating=ReviewRating.EASY, response_time_ms=1000, day=today - timedelta(days=1)),
        make_event(rating=ReviewRating.AGAIN, response_time_ms=60000, dimension=Dimension.CLOZE),
    ]
    heatmap = weakness_heatmap(events, days=2, today=today)

    assert [e.date for e in heatmap] == ["2026-01-15", "2026-01-16"]
    assert heatmap[0].dimensions[Dimension.DEFINITION] is WeaknessSeverity.NONE
    assert heatmap[0].dimensions[Dimension.CLOZE] is WeaknessSeverity.MODERATE  # neutral 0.5
    assert heatmap[1].dimensions[Dimension.CLOZE] is WeaknessSeverity.CRITICAL
    assert heatmap[1].to_dict()["dimensions"]["cloze"] == "critical"


# --- Mastery profile ---


def test_profile_levels_and_overall():
    scores = {d: MasteryScore.initial() for d in Dimension.all()}
    scores[Dimension.EXAMPLE] = MasteryScore.of(1.0, 1.0, 10)
    scores[Dimension.CLOZE] = MasteryScore.of(0.1, 0.1, 10)

    profile = mastery_profile(scores)

    assert [m.dimension for m in profile.dimensions] == Dimension.all()
    assert profile.strongest_dimension is Dimension.EXAMPLE
    assert profile.weakest_dimension is Dimension.CLOZE
    assert profile.overall_score == pytest.approx((0.5 * 4 + 1.0 + 0.1) / 6)

    by_dimension = {m.dimension: m for m in profile.dimensions}
    assert by_dimension[Dimension.EXAMPLE].level is MasteryLevel.MASTERED
    assert by_dimension[Dimension.EXAMPLE].count == 10
    assert by_dimension[Dimension.CLOZE].level is MasteryLevel.WEAK


def test_profile_tie_goes_to_first_dimension():
    scores = {d: MasteryScore.of(0.6, 0.6, 3) for d in Dimension.all()}
    scores[Dimension.PARAPHRASE] = MasteryScore.of(0.2, 0.2, 3)
    scores[Dimension.DISCRIMINATION] = MasteryScore.of(0.2, 0.2, 3)
    scores[Dimension.EXAMPLE] = MasteryScore.of(0.9, 0.9, 3)
    scores[Dimension.CLOZE] = MasteryScore.of(0.9, 0.9, 3)

    profile = mastery_profile(scores)

    assert profile.weakest_dimension is Dimension.PARAPHRASE
    assert profile.strongest_dimension is Dimension.EXAMPLE


def test_profile_all_equal_picks_definition_for_both():
    profile = mastery_profile({})
    assert profile.weakest_dimension is Dimension.DEFINITION
    assert profile.strongest_dimension is Dimension.DEFINITION
    assert profile.overall_score == pytest.approx(0.5)


def test_profile_to_dict():
    data = mastery_profile({}).to_dict()
    assert data["weakest_dimension"] == "definition"
    assert data["dimensions"][0] == {
        "dimension": "definition",
        "accuracy_ewma": 0.5,
        "speed_ewma": 0.5,
        "count": 0,
        "combined": pytest.approx(0.5),
        "level": "developing",
    }
