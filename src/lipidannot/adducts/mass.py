"""Mass arithmetic for adduct hypotheses.

Converts between observed m/z and neutral monoisotopic mass under a given adduct
(charge, multimer count and mass shift), plus the ppm helpers used when comparing masses.

All conversions work elementwise on numpy arrays as well as on plain floats.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from .notation import AdductHypothesis
from .reference_table import DEFAULT_REFERENCE_TABLE, AdductReferenceTable

ArrayLike = Union[float, np.ndarray]
AdductLike = Union[str, AdductHypothesis]

PPM = 1e6


def resolve_adduct(
    adduct: AdductLike, reference_table: Optional[AdductReferenceTable] = None
) -> AdductHypothesis:
    """Return *adduct* as a hypothesis, looking up its shift when given a notation string."""
    if isinstance(adduct, AdductHypothesis):
        return adduct
    table = reference_table if reference_table is not None else DEFAULT_REFERENCE_TABLE
    return AdductHypothesis.from_notation(adduct, table)


def mass_from_mz(
    mz: ArrayLike,
    adduct: AdductLike,
    reference_table: Optional[AdductReferenceTable] = None,
) -> ArrayLike:
    """
    Neutral monoisotopic mass implied by an observed m/z under *adduct*.

    Parameters
    ----------
    mz : float or np.ndarray
        Observed mass-to-charge ratio(s).
    adduct : str or AdductHypothesis
        Adduct notation (``[M+H]+``, ``[2M+Na]+``, ``[M+2H]2+``...) or a resolved hypothesis.
    reference_table : AdductReferenceTable, optional
        Table used to resolve a notation string; defaults to the built-in table.

    Returns
    -------
    float or np.ndarray
        Neutral mass M.

    Raises
    ------
    AdductNotFoundError
        If *adduct* is a notation absent from the reference table.
    """
    hyp = resolve_adduct(adduct, reference_table)
    charge, multimer = hyp.charge, hyp.multimer

    if charge == 1 and multimer == 1:
        return mz + hyp.mass_shift
    if charge > 1 and multimer == 1:
        return (mz + hyp.mass_shift) * charge
    if charge == 1 and multimer > 1:
        return (mz + hyp.mass_shift) / multimer
    return ((mz + hyp.mass_shift) * charge) / multimer


def mz_from_mass(
    mass: ArrayLike,
    adduct: AdductLike,
    reference_table: Optional[AdductReferenceTable] = None,
) -> ArrayLike:
    """
    Expected m/z of a neutral *mass* ionized as *adduct*.

    Exact inverse of :func:`mass_from_mz` for the same hypothesis.
    """
    hyp = resolve_adduct(adduct, reference_table)
    charge, multimer = hyp.charge, hyp.multimer

    if charge == 1 and multimer == 1:
        return mass - hyp.mass_shift
    if charge > 1 and multimer == 1:
        return mass / charge - hyp.mass_shift
    if charge == 1 and multimer > 1:
        return mass * multimer - hyp.mass_shift
    return (mass * multimer) / charge - hyp.mass_shift


def ppm_error(experimental: ArrayLike, theoretical: ArrayLike) -> Union[int, np.ndarray]:
    """Absolute mass error in ppm of *experimental* against *theoretical*, rounded half up.

    Raises
    ------
    ValueError
        If *theoretical* is zero, or either mass is not finite.
    """
    experimental_arr = np.asarray(experimental, dtype=float)
    theoretical_arr = np.asarray(theoretical, dtype=float)
    if not np.all(np.isfinite(experimental_arr)) or not np.all(np.isfinite(theoretical_arr)):
        raise ValueError("ppm_error requires finite experimental and theoretical masses")
    if np.any(theoretical_arr == 0):
        raise ValueError("ppm_error is undefined for a theoretical mass of 0")

    raw = np.abs((experimental_arr - theoretical_arr) * PPM / theoretical_arr)
    rounded = np.floor(raw + 0.5)
    if np.ndim(rounded) == 0:
        return int(rounded)
    return rounded.astype(int)


def ppm_to_delta(mass: ArrayLike, ppm: float) -> ArrayLike:
    """Absolute mass window (Da) corresponding to *ppm* at *mass*."""
    return np.abs(mass * ppm / PPM)


__all__ = [
    "PPM",
    "mass_from_mz",
    "mz_from_mass",
    "ppm_error",
    "ppm_to_delta",
    "resolve_adduct",
]
