import logging

import pytest

from facet.domain.errors import ValidationError
from facet.domain.values import Dimension


def test_all_is_fixed_order():
    assert Dimension.all() == [
        Dimension.DEFINITION,
        Dimension.PARAPHRASE,
        Dimension.EXAMPLE,
        Dimension.SCENARIO,
        Dimension.DISCRIMINATION,
        Dimension.CLOZE,
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("definition", Dimension.DEFINITION),
        ("  Cloze ", Dimension.CLOZE),
        ("scenario_application", Dimension.SCENARIO),
        ("PARAPHRASE_RECOGNITION", Dimension.PARAPHRASE),
        (Dimension.EXAMPLE, Dimension.EXAMPLE),
    ],
)
def test_parse_accepts_short_and_storage_names(raw, expected):
    assert Dimension.parse(raw) is expected


def test_parse_rejects_unknown():
    with pytest.raises(ValidationError) as exc:
        Dimension.parse("synthesis")

    assert exc.value.field == "dimension"
    assert exc.value.code == "VALIDATION_ERROR"
    assert "definition, paraphrase" in str(exc.value)


def test_coerce_falls_back_to_definition(caplog):
    unknown = set()
    with caplog.at_level(logging.WARNING):
        assert Dimension.coerce("synthesis", unknown) is Dimension.DEFINITION
    assert unknown == {"synthesis"}
    assert caplog.text == ""


def test_coerce_known_value_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING):
        assert Dimension.coerce("cloze_fill") is Dimension.CLOZE
    assert caplog.text == ""


def test_metadata():
    assert Dimension.DEFINITION.display_name == "Definition Recall"
    assert Dimension.SCENARIO.base_target_time_ms == 15000
    assert Dimension.CLOZE.long_name == "cloze_fill"
    assert Dimension.DISCRIMINATION.action_verb == "Distinguish"
    assert str(Dimension.EXAMPLE) == "example"


def test_identity_semantics():
    assert Dimension.parse("definition") is Dimension.DEFINITION
    assert Dimension.DEFINITION != Dimension.CLOZE
    assert len(set(Dimension.all())) == 6


@pytest.mark.parametrize(
    "difficulty, expected",
    [(1, 2500), (2, 3750), (3, 5000), (4, 7500), (5, 10000), (0, 2500), (9, 10000), (2.5, 5000)],
)
def test_target_time_scales_with_difficulty(difficulty, expected):
    assert Dimension.DEFINITION.target_time_ms(difficulty) == expected


def test_target_time_per_dimension():
    assert Dimension.SCENARIO.target_time_ms(3) == 15000
    assert Dimension.CLOZE.target_time_ms(4) == 9000
