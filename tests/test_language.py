import pytest

from judgerun.language import Language


@pytest.mark.parametrize("language", list(Language))
def test_variant_name_round_trip(language):
    assert Language.from_variant_name(language.variant_name()) is language


def test_variant_names_are_distinct():
    names = [
        Language.RUST1_82.variant_name(),
        Language.GO1_23.variant_name(),
        Language.PYTHON3_13.variant_name(),
    ]
    assert len(set(names)) == 3


def test_variant_names_start_lower_case():
    names = [
        Language.RUST1_82.variant_name(),
        Language.GO1_23.variant_name(),
        Language.PYTHON3_13.variant_name(),
    ]
    assert [name[0] for name in names] == [name[0].lower() for name in names]
    assert [name[0] for name in names] == ["r", "g", "p"]


def test_python_variant_name():
    assert Language.PYTHON3_13.variant_name() == "python3_13"


def test_wire_values_match_declaration():
    assert [Language(1), Language(2), Language(3)] == [
        Language.RUST1_82,
        Language.GO1_23,
        Language.PYTHON3_13,
    ]


def test_lookup_by_value():
    assert Language(2) is Language.GO1_23


def test_unknown_value_raises():
    with pytest.raises(ValueError):
        Language(99)


def test_unknown_variant_name_raises():
    with pytest.raises(ValueError):
        Language.from_variant_name("cobol")


def test_ordering_follows_value():
    assert sorted([Language(3), Language(1), Language(2)]) == [
        Language.RUST1_82,
        Language.GO1_23,
        Language.PYTHON3_13,
    ]