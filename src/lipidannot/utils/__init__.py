"""Shared utilities (tabular export)."""

from .tables import ANNOTATION_COLUMNS, annotations_to_frame  # noqa: F401

__all__ = [
    "ANNOTATION_COLUMNS",
    "annotations_to_frame",
]
