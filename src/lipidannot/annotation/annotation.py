"""Annotation of a lipid at a given m/z and retention time."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from .adduct_matcher import DEFAULT_MATCHER, AdductMatch, AdductMatcher
from .models import DedupPolicy, IonizationMode, Lipid, Peak, PeakSet

logger = logging.getLogger(__name__)


class Annotation:
    """
    A candidate lipid identification for one observed signal.

    The adduct is inferred from ``grouped_peaks`` when the annotation is constructed; it
    stays ``None`` when no adduct pair agrees. Scores are folded in afterwards by scoring
    rules through :meth:`apply_score`.

    Two annotations are equal when lipid, m/z and retention time are equal; the adduct and
    the score do not take part in identity.

    Parameters
    ----------
    lipid : Lipid
        Candidate identity.
    mz : float
        Observed m/z.
    intensity : float
        Intensity of the annotated signal.
    rt_min : float
        Retention time in minutes.
    ionization_mode : IonizationMode
        Acquisition polarity.
    grouped_peaks : Iterable[Peak]
        Co-eluting peaks believed to come from the same molecule.
    matcher : AdductMatcher, optional
        Adduct matcher to use; defaults to the built-in table at 10 ppm.
    keep : {"first", "last"}
        Dedup policy for peaks sharing an m/z.
    """

    def __init__(
        self,
        lipid: Lipid,
        mz: float,
        intensity: float,
        rt_min: float,
        ionization_mode: IonizationMode,
        grouped_peaks: Iterable[Peak] = (),
        *,
        matcher: Optional[AdductMatcher] = None,
        keep: DedupPolicy = "first",
    ):
        self._lipid = lipid
        self._mz = float(mz)
        self._intensity = float(intensity)
        self._rt_min = float(rt_min)
        self._ionization_mode = IonizationMode(ionization_mode)
        self._grouped_peaks = PeakSet(grouped_peaks, keep=keep)
        self._matcher = matcher if matcher is not None else DEFAULT_MATCHER

        self.adduct: Optional[str] = None
        self.adduct_match: Optional[AdductMatch] = None
        self._score = 0
        self._scores_applied = 0

        self.detect_adduct_from_peaks()

    @property
    def lipid(self) -> Lipid:
        return self._lipid

    @property
    def mz(self) -> float:
        return self._mz

    @property
    def intensity(self) -> float:
        return self._intensity

    @property
    def rt_min(self) -> float:
        return self._rt_min

    @property
    def ionization_mode(self) -> IonizationMode:
        return self._ionization_mode

    @property
    def grouped_peaks(self) -> PeakSet:
        return self._grouped_peaks

    def detect_adduct_from_peaks(self) -> Optional[str]:
        """Run adduct inference over the grouped peaks and store the outcome."""
        self.adduct_match = self._matcher.match(self._mz, self._grouped_peaks)
        self.adduct = self.adduct_match.adduct if self.adduct_match is not None else None
        if self.adduct is None and len(self._grouped_peaks) > 0:
            logger.debug(
                "Adduct unresolved for %s at m/z %.4f (%d grouped peaks)",
                self._lipid.name,
                self._mz,
                len(self._grouped_peaks),
            )
        return self.adduct

    # Scoring

    @property
    def score(self) -> int:
        return self._score

    @score.setter
    def score(self, value: int) -> None:
        # Overwrites the running total only; the applied-rule count is left as is.
        self._score = int(value)

    @property
    def scores_applied(self) -> int:
        return self._scores_applied

    @property
    def has_score(self) -> bool:
        return self._scores_applied > 0

    def apply_score(self, delta: int) -> None:
        """Fold one scoring rule's signed contribution into the annotation."""
        self._score += int(delta)
        self._scores_applied += 1

    @property
    def normalized_score(self) -> float:
        """Accumulated score divided by the number of rules applied; ``nan`` if none were."""
        if self._scores_applied == 0:
            return math.nan
        return self._score / self._scores_applied

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Annotation):
            return NotImplemented
        return (
            self._mz == other._mz
            and self._rt_min == other._rt_min
            and self._lipid == other._lipid
        )

    def __hash__(self) -> int:
        return hash((self._lipid, self._mz, self._rt_min))

    def __repr__(self) -> str:
        return (
            f"Annotation({self._lipid.name}, mz={self._mz:.4f}, RT={self._rt_min:.2f}, "
            f"adduct={self.adduct}, intensity={self._intensity:.1f}, score={self._score})"
        )


__all__ = ["Annotation"]
