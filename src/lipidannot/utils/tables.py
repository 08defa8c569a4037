"""Tabular views of annotation batches."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np
import pandas as pd

from ..annotation.annotation import Annotation

ANNOTATION_COLUMNS: List[str] = [
    "compound_id",
    "lipid",
    "mz",
    "rt_min",
    "intensity",
    "ionization_mode",
    "adduct",
    "peak_adduct",
    "peak_mz",
    "mass_error_ppm",
    "n_grouped_peaks",
    "score",
    "scores_applied",
    "normalized_score",
]


def annotations_to_frame(annotations: Iterable[Annotation]) -> pd.DataFrame:
    """One row per annotation with its adduct evidence and score.

    Unresolved adducts and unscored annotations show up as missing values.
    """
    rows = []
    for ann in annotations:
        match = ann.adduct_match
        rows.append(
            {
                "compound_id": ann.lipid.compound_id,
                "lipid": ann.lipid.name,
                "mz": ann.mz,
                "rt_min": ann.rt_min,
                "intensity": ann.intensity,
                "ionization_mode": ann.ionization_mode.value,
                "adduct": ann.adduct,
                "peak_adduct": match.peak_adduct if match is not None else None,
                "peak_mz": match.peak.mz if match is not None else np.nan,
                "mass_error_ppm": (
                    match.mass_delta * 1e6 / match.annotation_mass
                    if match is not None and match.annotation_mass != 0
                    else np.nan
                ),
                "n_grouped_peaks": len(ann.grouped_peaks),
                "score": ann.score,
                "scores_applied": ann.scores_applied,
                "normalized_score": ann.normalized_score,
            }
        )
    return pd.DataFrame(rows, columns=ANNOTATION_COLUMNS)


__all__ = ["ANNOTATION_COLUMNS", "annotations_to_frame"]
