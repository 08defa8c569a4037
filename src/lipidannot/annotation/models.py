"""Value objects shared by the annotation code: lipids, ionization mode and peaks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Literal, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DedupPolicy = Literal["first", "last"]


class IonizationMode(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Lipid:
    """Identity of a candidate lipid; only used for annotation equality and reporting."""

    compound_id: int
    name: str
    formula: Optional[str] = None
    lipid_type: Optional[str] = None
    carbon_count: int = 0
    double_bonds_count: int = 0


@dataclass(frozen=True)
class Peak:
    """A single detected signal."""

    mz: float
    intensity: float


class PeakSet:
    """
    Grouped peaks ordered by ascending m/z and unique by m/z.

    Two peaks with equal m/z collapse into one regardless of intensity. Which one survives
    is set by ``keep``: ``"first"`` keeps the peak seen first, ``"last"`` the one seen last.
    Dropping a peak with a different intensity is logged as a warning.

    Parameters
    ----------
    peaks : Iterable[Peak]
        Peaks in any order.
    keep : {"first", "last"}
        Duplicate m/z resolution policy.
    """

    __slots__ = ("_peaks",)

    def __init__(self, peaks: Iterable[Peak] = (), keep: DedupPolicy = "first"):
        if keep not in ("first", "last"):
            raise ValueError(f"keep must be 'first' or 'last', got {keep!r}")

        by_mz: Dict[float, Peak] = {}
        for peak in peaks:
            if not isinstance(peak, Peak):
                raise TypeError(f"PeakSet accepts Peak instances, got {type(peak).__name__}")
            current = by_mz.get(peak.mz)
            if current is None:
                by_mz[peak.mz] = peak
                continue
            kept, dropped = (current, peak) if keep == "first" else (peak, current)
            if dropped.intensity != kept.intensity:
                logger.warning(
                    "Dropping peak at m/z %.6f (intensity %.1f); keeping intensity %.1f",
                    dropped.mz,
                    dropped.intensity,
                    kept.intensity,
                )
            by_mz[peak.mz] = kept

        self._peaks: Tuple[Peak, ...] = tuple(by_mz[mz] for mz in sorted(by_mz))

    @property
    def mz(self) -> np.ndarray:
        """Peak m/z values in ascending order."""
        return np.array([peak.mz for peak in self._peaks], dtype=float)

    @property
    def intensity(self) -> np.ndarray:
        return np.array([peak.intensity for peak in self._peaks], dtype=float)

    def most_intense(self) -> Optional[Peak]:
        if not self._peaks:
            return None
        return max(self._peaks, key=lambda peak: peak.intensity)

    def __iter__(self) -> Iterator[Peak]:
        return iter(self._peaks)

    def __len__(self) -> int:
        return len(self._peaks)

    def __contains__(self, peak: object) -> bool:
        return peak in self._peaks

    def __getitem__(self, index: int) -> Peak:
        return self._peaks[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PeakSet):
            return NotImplemented
        return self._peaks == other._peaks

    def __hash__(self) -> int:
        return hash(self._peaks)

    def __repr__(self) -> str:
        return f"PeakSet({list(self._peaks)!r})"


__all__ = [
    "DedupPolicy",
    "IonizationMode",
    "Lipid",
    "Peak",
    "PeakSet",
]
