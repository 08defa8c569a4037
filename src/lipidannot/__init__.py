"""
lipidannot: adduct inference for lipidomics annotations

Converts observed m/z values to neutral monoisotopic masses (and back) under adduct
hypotheses, and infers the adduct of an annotated signal from its co-eluting peaks.
"""

__version__ = "1.0.0"

from .adducts import (
    DEFAULT_REFERENCE_TABLE,
    AdductHypothesis,
    AdductNotationError,
    AdductNotFoundError,
    AdductReferenceTable,
    ReferenceTableError,
    extract_charge,
    extract_multimer,
    load_reference_table_csv,
    mass_from_mz,
    mz_from_mass,
    ppm_error,
    ppm_to_delta,
)
from .annotation import (
    AdductMatch,
    AdductMatcher,
    Annotation,
    IonizationMode,
    Lipid,
    Peak,
    PeakSet,
)
from .config import MatcherConfig, MatcherConfigError
from .utils import annotations_to_frame

__all__ = [
    "DEFAULT_REFERENCE_TABLE",
    "AdductHypothesis",
    "AdductMatch",
    "AdductMatcher",
    "AdductNotFoundError",
    "AdductNotationError",
    "AdductReferenceTable",
    "Annotation",
    "IonizationMode",
    "Lipid",
    "MatcherConfig",
    "MatcherConfigError",
    "Peak",
    "PeakSet",
    "ReferenceTableError",
    "annotations_to_frame",
    "extract_charge",
    "extract_multimer",
    "load_reference_table_csv",
    "mass_from_mz",
    "mz_from_mass",
    "ppm_error",
    "ppm_to_delta",
]
