import numpy as np
import pytest

from lipidannot.adducts import (
    DEFAULT_REFERENCE_TABLE,
    AdductHypothesis,
    AdductNotFoundError,
    AdductReferenceTable,
    mass_from_mz,
    mz_from_mass,
    ppm_error,
    ppm_to_delta,
)


@pytest.mark.parametrize(
    "adduct, expected_mz",
    [
        ("[M+H]+", 701.007276),
        ("[M+2H]2+", 351.007276),
        ("[2M+Na]+", 1422.989218),
        ("[M-H]-", 698.992724),
        ("[M-2H]2-", 348.992724),
    ],
)
def test_worked_examples(adduct, expected_mz):
    assert mz_from_mass(700.0, adduct) == pytest.approx(expected_mz, abs=1e-9)
    assert mass_from_mz(expected_mz, adduct) == pytest.approx(700.0, abs=1e-9)


@pytest.mark.parametrize("adduct", DEFAULT_REFERENCE_TABLE.notations())
@pytest.mark.parametrize("mass", [150.0, 700.0, 1234.5678])
def test_round_trip(adduct, mass):
    mz = mz_from_mass(mass, adduct)

    assert mass_from_mz(mz, adduct) == pytest.approx(mass, rel=1e-12)
    assert mz_from_mass(mass_from_mz(mz, adduct), adduct) == pytest.approx(mz, rel=1e-12)


def test_multimer_with_multiple_charges():
    table = AdductReferenceTable({"[2M+2H]2+": -1.007276, "[3M+2H]2+": -1.007276}, {})

    # ((mz + shift) * charge) / multimer
    assert mass_from_mz(701.007276, "[2M+2H]2+", table) == pytest.approx(700.0)
    assert mass_from_mz(1051.007276, "[3M+2H]2+", table) == pytest.approx(700.0)
    assert mz_from_mass(700.0, "[3M+2H]2+", table) == pytest.approx(1051.007276)


def test_accepts_resolved_hypothesis():
    hyp = AdductHypothesis(notation="[M+X]+", multimer=1, charge=1, mass_shift=-10.0)
    assert mz_from_mass(100.0, hyp) == pytest.approx(110.0)
    assert mass_from_mz(110.0, hyp) == pytest.approx(100.0)


def test_unknown_adduct_propagates_not_found():
    with pytest.raises(AdductNotFoundError):
        mass_from_mz(500.0, "[M+Xe]+")
    with pytest.raises(AdductNotFoundError):
        mz_from_mass(500.0, "[M+Xe]+")


def test_substitute_table_is_used():
    table = AdductReferenceTable({"[M+H]+": -1.0}, {})
    assert mz_from_mass(100.0, "[M+H]+", table) == pytest.approx(101.0)


def test_vectorised_conversion():
    masses = np.array([300.0, 700.0, 900.0])

    mz = mz_from_mass(masses, "[M+2H]2+")

    np.testing.assert_allclose(mz, masses / 2 + 1.007276)
    np.testing.assert_allclose(mass_from_mz(mz, "[M+2H]2+"), masses)


def test_ppm_error_rounds_to_integer():
    assert ppm_error(700.0035, 700.0) == 5
    assert ppm_error(700.0, 700.0) == 0
    assert isinstance(ppm_error(700.0035, 700.0), int)


def test_ppm_error_is_sign_independent():
    assert ppm_error(700.0 + 0.0049, 700.0) == ppm_error(700.0 - 0.0049, 700.0) == 7


def test_ppm_error_vectorised():
    errors = ppm_error(np.array([500.001, 500.0025]), 500.0)
    assert errors.tolist() == [2, 5]


def test_ppm_to_delta():
    assert ppm_to_delta(700.0, 10) == pytest.approx(0.007)
    assert ppm_to_delta(-700.0, 10) == pytest.approx(0.007)
    assert ppm_to_delta(700.0, 0) == 0


def test_ppm_to_delta_is_monotonic():
    masses = np.linspace(100.0, 2000.0, 50)
    ppms = np.linspace(0.0, 50.0, 50)

    assert np.all(np.diff(ppm_to_delta(masses, 10.0)) >= 0)
    assert np.all(np.diff(ppm_to_delta(700.0, ppms)) >= 0)


@pytest.mark.parametrize(
    "experimental, theoretical, message",
    [
        (700.0, 0.0, "theoretical mass of 0"),
        (700.0, float("nan"), "finite"),
        (float("inf"), 700.0, "finite"),
        (np.array([500.0, 700.0]), np.array([500.0, 0.0]), "theoretical mass of 0"),
    ],
)
def test_ppm_error_rejects_degenerate_masses(experimental, theoretical, message):
    with pytest.raises(ValueError, match=message):
        ppm_error(experimental, theoretical)
