"""Adduct reference data, notation parsing and mass arithmetic."""

from .mass import mass_from_mz, mz_from_mass, ppm_error, ppm_to_delta, resolve_adduct
from .notation import (
    AdductHypothesis,
    AdductNotationError,
    extract_charge,
    extract_multimer,
    is_well_formed,
    validate_notation,
)
from .reference_table import (
    DEFAULT_REFERENCE_TABLE,
    AdductNotFoundError,
    AdductReferenceTable,
    ReferenceTableError,
    load_reference_table_csv,
)

__all__ = [
    "AdductHypothesis",
    "AdductNotFoundError",
    "AdductNotationError",
    "AdductReferenceTable",
    "DEFAULT_REFERENCE_TABLE",
    "ReferenceTableError",
    "extract_charge",
    "extract_multimer",
    "is_well_formed",
    "load_reference_table_csv",
    "mass_from_mz",
    "mz_from_mass",
    "ppm_error",
    "ppm_to_delta",
    "resolve_adduct",
    "validate_notation",
]
