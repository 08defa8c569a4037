"""
Adduct inference from grouped peaks.

An annotated m/z is assigned the first adduct hypothesis (positive table, then negative
table, each in table order) whose implied neutral mass is corroborated by at least one
grouped peak read under any adduct in either table. Corroboration means the two neutral
masses agree within a ppm window computed at the annotation's candidate mass.

The search is exhaustive. Peak neutral masses do not depend on the annotation candidate,
so they are computed once as a (n_peaks, n_adducts) grid; scanning that grid in row-major
order visits peaks in ascending m/z and, per peak, adducts in table order, so the first hit
is the same one a nested loop would find.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

import numpy as np

from ..adducts.mass import mass_from_mz, ppm_to_delta
from ..adducts.notation import AdductHypothesis
from ..adducts.reference_table import DEFAULT_REFERENCE_TABLE, AdductReferenceTable
from .models import Peak, PeakSet

if TYPE_CHECKING:
    from ..config import MatcherConfig

logger = logging.getLogger(__name__)

DEFAULT_PPM_TOLERANCE = 10.0


@dataclass(frozen=True)
class AdductMatch:
    """The corroborating pair behind an adduct assignment."""

    adduct: str  # hypothesis assigned to the annotation
    peak: Peak
    peak_adduct: str  # hypothesis under which the peak agrees
    annotation_mass: float
    peak_mass: float
    mass_delta: float  # |annotation_mass - peak_mass| in Da
    tolerance: float  # allowed window in Da


class AdductMatcher:
    """
    Assigns an adduct to an annotated m/z using its grouped peaks.

    Parameters
    ----------
    reference_table : AdductReferenceTable, optional
        Adducts to search; defaults to the built-in table.
    ppm_tolerance : float
        Agreement window between neutral masses, in ppm of the annotation's mass.
    """

    def __init__(
        self,
        reference_table: Optional[AdductReferenceTable] = None,
        ppm_tolerance: float = DEFAULT_PPM_TOLERANCE,
    ):
        if not np.isfinite(ppm_tolerance) or ppm_tolerance < 0:
            raise ValueError(f"ppm_tolerance must be a non-negative number, got {ppm_tolerance!r}")

        self.reference_table = (
            reference_table if reference_table is not None else DEFAULT_REFERENCE_TABLE
        )
        self.ppm_tolerance = float(ppm_tolerance)

        self._positive: List[AdductHypothesis] = [
            AdductHypothesis.from_shift(notation, shift)
            for notation, shift in self.reference_table.positive.items()
        ]
        self._negative: List[AdductHypothesis] = [
            AdductHypothesis.from_shift(notation, shift)
            for notation, shift in self.reference_table.negative.items()
        ]

    @classmethod
    def from_config(cls, config: "MatcherConfig") -> "AdductMatcher":
        return cls(
            reference_table=config.load_reference_table(),
            ppm_tolerance=config.ppm_tolerance,
        )

    @property
    def hypotheses(self) -> List[AdductHypothesis]:
        """Every hypothesis in search order (positive table first)."""
        return self._positive + self._negative

    def peak_mass_grid(self, peaks: PeakSet) -> np.ndarray:
        """Neutral mass of every peak under every hypothesis, shape (n_peaks, n_adducts)."""
        hypotheses = self.hypotheses
        if len(peaks) == 0 or not hypotheses:
            return np.empty((len(peaks), len(hypotheses)), dtype=float)
        peak_mz = peaks.mz
        return np.column_stack([mass_from_mz(peak_mz, hyp) for hyp in hypotheses])

    def match(self, mz: float, peaks: Iterable[Peak]) -> Optional[AdductMatch]:
        """
        Find the adduct of an annotation at *mz* corroborated by *peaks*.

        Parameters
        ----------
        mz : float
            Observed m/z of the annotation.
        peaks : Iterable[Peak]
            Grouped peaks; a plain iterable is wrapped in a :class:`PeakSet`.

        Returns
        -------
        AdductMatch or None
            The first corroborated hypothesis, or ``None`` when every candidate is
            exhausted without agreement.
        """
        peak_set = peaks if isinstance(peaks, PeakSet) else PeakSet(peaks)
        if len(peak_set) == 0:
            logger.debug("No grouped peaks for m/z %.6f; adduct left unresolved", mz)
            return None

        hypotheses = self.hypotheses
        grid = self.peak_mass_grid(peak_set)
        n_adducts = grid.shape[1]

        for candidate in hypotheses:
            candidate_mass = float(mass_from_mz(mz, candidate))
            tolerance = float(ppm_to_delta(candidate_mass, self.ppm_tolerance))

            hits = np.abs(candidate_mass - grid) <= tolerance
            if not hits.any():
                continue

            flat = int(np.argmax(hits.ravel()))
            peak_idx, adduct_idx = divmod(flat, n_adducts)
            peak_mass = float(grid[peak_idx, adduct_idx])
            result = AdductMatch(
                adduct=candidate.notation,
                peak=peak_set[peak_idx],
                peak_adduct=hypotheses[adduct_idx].notation,
                annotation_mass=candidate_mass,
                peak_mass=peak_mass,
                mass_delta=abs(candidate_mass - peak_mass),
                tolerance=tolerance,
            )
            logger.debug(
                "Adduct match: annotation %.6f as %s ~ peak %.6f as %s "
                "(M %.6f vs %.6f, delta %.6f <= %.6f Da)",
                mz,
                result.adduct,
                result.peak.mz,
                result.peak_adduct,
                result.annotation_mass,
                result.peak_mass,
                result.mass_delta,
                result.tolerance,
            )
            return result

        logger.debug("No adduct pair within %.1f ppm for m/z %.6f", self.ppm_tolerance, mz)
        return None

    def detect_adduct(self, mz: float, peaks: Iterable[Peak]) -> Optional[str]:
        """Notation of the matched adduct, or ``None`` when unresolved."""
        result = self.match(mz, peaks)
        return result.adduct if result is not None else None


DEFAULT_MATCHER = AdductMatcher()


__all__ = [
    "AdductMatch",
    "AdductMatcher",
    "DEFAULT_MATCHER",
    "DEFAULT_PPM_TOLERANCE",
]
