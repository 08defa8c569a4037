"""Annotation model and adduct inference."""

from .adduct_matcher import DEFAULT_MATCHER, DEFAULT_PPM_TOLERANCE, AdductMatch, AdductMatcher
from .annotation import Annotation
from .models import IonizationMode, Lipid, Peak, PeakSet

__all__ = [
    "AdductMatch",
    "AdductMatcher",
    "Annotation",
    "DEFAULT_MATCHER",
    "DEFAULT_PPM_TOLERANCE",
    "IonizationMode",
    "Lipid",
    "Peak",
    "PeakSet",
]
