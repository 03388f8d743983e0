import pytest

from facet.domain.levels import MasteryLevel, WeaknessSeverity
from facet.domain.numeric import clamp, round_half_up
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters


def test_combine_default_weights():
    assert DEFAULT_PARAMETERS.combine(1.0, 0.0) == pytest.approx(0.7)
    assert DEFAULT_PARAMETERS.combine(0.0, 1.0) == pytest.approx(0.3)
    assert DEFAULT_PARAMETERS.combine(0.53, 0.545) == pytest.approx(0.5345)


@pytest.mark.parametrize(
    "combined, level",
    [
        (0.0, MasteryLevel.WEAK),
        (0.4999, MasteryLevel.WEAK),
        (0.5, MasteryLevel.DEVELOPING),
        (0.6999, MasteryLevel.DEVELOPING),
        (0.7, MasteryLevel.STRONG),
        (0.8499, MasteryLevel.STRONG),
        (0.85, MasteryLevel.MASTERED),
        (1.0, MasteryLevel.MASTERED),
    ],
)
def test_level_boundaries_are_inclusive_lower(combined, level):
    assert DEFAULT_PARAMETERS.level_for(combined) is level


@pytest.mark.parametrize(
    "combined, severity",
    [
        (0.39, WeaknessSeverity.CRITICAL),
        (0.39999, WeaknessSeverity.CRITICAL),
        (0.4, WeaknessSeverity.MODERATE),
        (0.54, WeaknessSeverity.MODERATE),
        (0.55, WeaknessSeverity.MILD),
        (0.69, WeaknessSeverity.MILD),
        (0.70, WeaknessSeverity.NONE),
    ],
)
def test_severity_boundaries(combined, severity):
    assert DEFAULT_PARAMETERS.severity_for(combined) is severity


def test_severity_rank_orders_most_severe_first():
    ordered = sorted(WeaknessSeverity, key=lambda s: s.rank)
    assert ordered == [
        WeaknessSeverity.CRITICAL,
        WeaknessSeverity.MODERATE,
        WeaknessSeverity.MILD,
        WeaknessSeverity.NONE,
    ]


def test_target_time_uses_override_table():
    params = MasteryParameters(target_times_ms={1: 1000, 2: 2000, 3: 3000, 4: 4000, 5: 5000})
    assert params.target_time_ms(2) == 2000
    assert params.target_time_ms(0) == 1000
    assert params.target_time_ms(8) == 5000


def test_numeric_helpers():
    assert clamp(-0.2) == 0.0
    assert clamp(1.3) == 1.0
    assert clamp(7, 1, 5) == 5
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -2


def test_parameters_are_hashable_and_read_only():
    source = {1: 1000, 2: 2000, 3: 3000, 4: 4000, 5: 5000}
    params = MasteryParameters(target_times_ms=source)
    source[3] = 1

    assert params.target_time_ms(3) == 3000
    assert hash(params) == hash(MasteryParameters(target_times_ms=dict(params.target_times_ms)))
    assert hash(DEFAULT_PARAMETERS) == hash(MasteryParameters())
    with pytest.raises(TypeError):
        DEFAULT_PARAMETERS.target_times_ms[3] = 1
