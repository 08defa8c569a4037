"""Adduct reference table.

Maps adduct notation strings to signed mass shifts, split by polarity. The shift is the
value *added* to an observed m/z to recover the (charge-scaled) neutral mass, so proton
adducts carry a negative shift and deprotonated ions a positive one.

Iteration order of each mapping is the priority order used by the adduct matcher; it is
the insertion order of the source mapping (or row order of the source CSV).
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping

import pandas as pd

from .notation import AdductNotationError, polarity_sign, validate_notation

logger = logging.getLogger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"
REQUIRED_COLUMNS = ("adduct", "mass_shift", "polarity")


class AdductNotFoundError(KeyError):
    """Raised when an adduct notation is absent from both polarity tables."""

    def __init__(self, notation: str):
        super().__init__(notation)
        self.notation = notation

    def __str__(self) -> str:
        return f"Adduct not found: {self.notation}"


class ReferenceTableError(ValueError):
    """Raised when reference data cannot be turned into a valid table."""


POSITIVE_ADDUCT_SHIFTS: Dict[str, float] = {
    "[M+H]+": -1.007276,
    "[M+2H]2+": -1.007276,
    "[M+Na]+": -22.989218,
    "[M+K]+": -38.963158,
    "[M+NH4]+": -18.033823,
    "[M+H-H2O]+": 17.0032882,
    "[M+H+NH4]2+": -9.52055,
    "[2M+H]+": -1.007276,
    "[2M+Na]+": -22.989218,
}

NEGATIVE_ADDUCT_SHIFTS: Dict[str, float] = {
    "[M-H]-": 1.007276,
    "[M-2H]2-": 1.007276,
    "[M+Cl]-": -34.969402,
    "[M+HCOOH-H]-": -44.998201,
    "[M-H-H2O]-": 19.0178,
    "[2M-H]-": 1.007276,
    "[M+CH3COO]-": -59.013851,
}


class AdductReferenceTable:
    """Immutable positive/negative adduct → mass-shift mappings.

    Parameters
    ----------
    positive : Mapping[str, float]
        Positive-mode adducts in priority order.
    negative : Mapping[str, float]
        Negative-mode adducts in priority order.
    """

    __slots__ = ("_positive", "_negative")

    def __init__(self, positive: Mapping[str, float], negative: Mapping[str, float]):
        self._positive = MappingProxyType({str(k): float(v) for k, v in positive.items()})
        self._negative = MappingProxyType({str(k): float(v) for k, v in negative.items()})

    @classmethod
    def from_mappings(
        cls, positive: Mapping[str, float], negative: Mapping[str, float]
    ) -> "AdductReferenceTable":
        """Build a table after validating every notation and shift."""
        for polarity, mapping in ((POSITIVE, positive), (NEGATIVE, negative)):
            for notation, shift in mapping.items():
                _check_entry(notation, shift, polarity)
        return cls(positive, negative)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "AdductReferenceTable":
        """Build a table from a frame with ``adduct``, ``mass_shift`` and ``polarity`` columns.

        Row order is kept as the priority order within each polarity.
        """
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ReferenceTableError(f"Adduct table is missing required columns: {missing}")

        tables: Dict[str, Dict[str, float]] = {POSITIVE: {}, NEGATIVE: {}}
        for row in df.loc[:, list(REQUIRED_COLUMNS)].itertuples(index=False):
            notation = str(row.adduct).strip()
            polarity = str(row.polarity).strip().lower()
            if polarity not in tables:
                raise ReferenceTableError(
                    f"Unknown polarity {row.polarity!r} for adduct {notation!r}; "
                    f"expected '{POSITIVE}' or '{NEGATIVE}'"
                )
            try:
                shift = float(row.mass_shift)
            except (TypeError, ValueError) as err:
                raise ReferenceTableError(
                    f"Mass shift for {notation!r} is not numeric: {row.mass_shift!r}"
                ) from err
            _check_entry(notation, shift, polarity)
            if notation in tables[polarity]:
                raise ReferenceTableError(f"Duplicate {polarity} adduct: {notation!r}")
            tables[polarity][notation] = shift

        logger.info(
            "Loaded adduct table: %d positive, %d negative",
            len(tables[POSITIVE]),
            len(tables[NEGATIVE]),
        )
        return cls(tables[POSITIVE], tables[NEGATIVE])

    @property
    def positive(self) -> Mapping[str, float]:
        return self._positive

    @property
    def negative(self) -> Mapping[str, float]:
        return self._negative

    def shift_of(self, notation: str) -> float:
        """Return the mass shift for *notation*, positive table first.

        Raises
        ------
        AdductNotFoundError
            If *notation* is in neither table.
        """
        if notation in self._positive:
            return self._positive[notation]
        if notation in self._negative:
            return self._negative[notation]
        raise AdductNotFoundError(notation)

    def notations(self) -> List[str]:
        """All notations, positive table first, each in priority order."""
        return [*self._positive, *self._negative]

    def __contains__(self, notation: object) -> bool:
        return notation in self._positive or notation in self._negative

    def __len__(self) -> int:
        return len(self._positive) + len(self._negative)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdductReferenceTable):
            return NotImplemented
        return list(self._positive.items()) == list(other._positive.items()) and list(
            self._negative.items()
        ) == list(other._negative.items())

    def __hash__(self) -> int:
        return hash((tuple(self._positive.items()), tuple(self._negative.items())))

    def __repr__(self) -> str:
        return (
            f"AdductReferenceTable(positive={len(self._positive)}, "
            f"negative={len(self._negative)})"
        )


def _check_entry(notation: str, shift: float, polarity: str) -> None:
    try:
        validate_notation(notation)
    except AdductNotationError as err:
        raise ReferenceTableError(str(err)) from err
    if not math.isfinite(float(shift)):
        raise ReferenceTableError(f"Mass shift for {notation!r} must be finite, got {shift!r}")
    sign = polarity_sign(notation)
    expected = 1 if polarity == POSITIVE else -1
    if sign != expected:
        logger.warning("Adduct %s is listed under %s polarity", notation, polarity)


def load_reference_table_csv(path: Path, *, sep: str = ",") -> AdductReferenceTable:
    """Load an adduct table from CSV (columns ``adduct``, ``mass_shift``, ``polarity``)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Adduct table not found: {path}")
    df = pd.read_csv(path, sep=sep, dtype={"adduct": str, "polarity": str})
    return AdductReferenceTable.from_frame(df)


DEFAULT_REFERENCE_TABLE = AdductReferenceTable(POSITIVE_ADDUCT_SHIFTS, NEGATIVE_ADDUCT_SHIFTS)


__all__ = [
    "AdductNotFoundError",
    "AdductReferenceTable",
    "DEFAULT_REFERENCE_TABLE",
    "NEGATIVE",
    "NEGATIVE_ADDUCT_SHIFTS",
    "POSITIVE",
    "POSITIVE_ADDUCT_SHIFTS",
    "ReferenceTableError",
    "load_reference_table_csv",
]
