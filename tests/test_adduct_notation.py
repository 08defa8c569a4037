import pytest

from lipidannot.adducts import (
    AdductHypothesis,
    AdductNotationError,
    DEFAULT_REFERENCE_TABLE,
    extract_charge,
    extract_multimer,
    is_well_formed,
    validate_notation,
)


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("[M+H]+", 1),
        ("[M+2H]2+", 2),
        ("[M+3H]3+", 3),
        ("[M-H]-", 1),
        ("[M-2H]2-", 2),
        ("[M+H+NH4]2+", 2),
        ("[2M+Na]+", 1),
    ],
)
def test_extract_charge(notation, expected):
    assert extract_charge(notation) == expected


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("[M+H]+", 1),
        ("[2M+Na]+", 2),
        ("[2M-H]-", 2),
        ("[10M+H]+", 10),
        ("[M+2H]2+", 1),
    ],
)
def test_extract_multimer(notation, expected):
    assert extract_multimer(notation) == expected


@pytest.mark.parametrize("notation", ["", "M+H", "garbage", "[M+H]", "2M+Na+", "[xM+H]+"])
def test_malformed_notation_defaults_to_one(notation):
    """Extraction is permissive: malformed input parses as charge=1, multimer=1."""
    assert extract_charge(notation) == 1
    assert extract_multimer(notation) == 1


def test_only_first_bracket_counts_for_multimer():
    assert extract_multimer("[3M+H]+ [2M+H]+") == 3


@pytest.mark.parametrize("notation", ["M+H", "[M+H]", "[M+H]+ ", "[0M+H]+", "[M+H]0+", "[M+h]+"])
def test_strict_validation_rejects_what_extraction_accepts(notation):
    # Divergence between permissive parsing and strict validation is intentional.
    assert extract_charge(notation) >= 1
    with pytest.raises(AdductNotationError):
        validate_notation(notation)


@pytest.mark.parametrize("notation", DEFAULT_REFERENCE_TABLE.notations())
def test_default_table_notations_are_well_formed(notation):
    assert validate_notation(notation) == notation


def test_hypothesis_from_notation_uses_table_shift():
    hyp = AdductHypothesis.from_notation("[2M+Na]+", DEFAULT_REFERENCE_TABLE)

    assert hyp.notation == "[2M+Na]+"
    assert hyp.multimer == 2
    assert hyp.charge == 1
    assert hyp.mass_shift == pytest.approx(-22.989218)


def test_hypothesis_is_frozen():
    hyp = AdductHypothesis.from_shift("[M+H]+", -1.007276)
    with pytest.raises(AttributeError):
        hyp.charge = 2


def test_zero_counts_fall_back_to_one():
    assert extract_multimer("[0M+H]+") == 1
    assert extract_charge("[M+H]0+") == 1


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("[M+H]+", True),
        ("[M+HCOOH-H]-", True),
        ("[M+H-H2O]+", True),
        ("[M]+", True),
        ("[M-H]−", False),
        ("[M+h]+", False),
        ("[M+H]", False),
        ("M+H+", False),
    ],
)
def test_is_well_formed(notation, expected):
    assert is_well_formed(notation) is expected


def test_unicode_minus_is_not_a_polarity_sign():
    # Only ASCII "+" and "-" terminate a notation; "−" (U+2212) falls back to charge 1.
    assert extract_charge("[M-2H]2−") == 1
    with pytest.raises(AdductNotationError):
        validate_notation("[M-2H]2−")
