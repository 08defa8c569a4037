"""Adduct notation parsing.

Adducts are written in the usual bracketed form, e.g. ``[M+H]+``, ``[2M+Na]+`` or
``[M+2H]2+``. Two pieces of information are read straight from the text:

- the multimer count, the digits between the opening bracket and ``M`` (``[2M`` -> 2)
- the charge, the digits right before the terminal polarity sign (``]2+`` -> 2)

Extraction is permissive: anything that does not match falls back to 1 instead of
raising. Use :func:`validate_notation` where a hard failure on malformed input is wanted
(the reference-table loaders do this).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_MULTIMER_RE = re.compile(r"\[([0-9]*)M")
_CHARGE_RE = re.compile(r"([0-9]*)([+\-])\]?$")
_STRICT_RE = re.compile(
    r"^\[(?P<multimer>[0-9]*)M"
    r"(?P<species>(?:[+\-][0-9]*[A-Z][A-Za-z0-9]*)*)"
    r"\](?P<charge>[0-9]*)(?P<sign>[+\-])$"
)


class AdductNotationError(ValueError):
    """Raised when an adduct notation does not follow the bracketed grammar."""


def extract_multimer(notation: str) -> int:
    """Return the number of molecule copies encoded in *notation* (default 1)."""
    match = _MULTIMER_RE.search(notation)
    if match and match.group(1):
        return max(int(match.group(1)), 1)
    return 1


def extract_charge(notation: str) -> int:
    """Return the absolute charge encoded in *notation* (default 1)."""
    match = _CHARGE_RE.search(notation)
    if match and match.group(1):
        return max(int(match.group(1)), 1)
    return 1


def is_well_formed(notation: str) -> bool:
    return bool(_STRICT_RE.match(notation))


def validate_notation(notation: str) -> str:
    """Check *notation* against the strict adduct grammar and return it unchanged.

    Raises
    ------
    AdductNotationError
        If the string is not of the form ``[nM(+/-species)*]z(+/-)``, or if it encodes a
        zero multimer or zero charge.
    """
    if not isinstance(notation, str):
        raise AdductNotationError(f"Adduct notation must be a string, got {type(notation).__name__}")

    match = _STRICT_RE.match(notation)
    if match is None:
        raise AdductNotationError(f"Malformed adduct notation: {notation!r}")
    if match.group("multimer") and int(match.group("multimer")) == 0:
        raise AdductNotationError(f"Multimer count must be >= 1 in {notation!r}")
    if match.group("charge") and int(match.group("charge")) == 0:
        raise AdductNotationError(f"Charge must be >= 1 in {notation!r}")
    return notation


def polarity_sign(notation: str) -> int:
    """Return +1 or -1 from the terminal polarity sign, 0 when there is none."""
    match = _CHARGE_RE.search(notation)
    if match is None:
        return 0
    return 1 if match.group(2) == "+" else -1


@dataclass(frozen=True)
class AdductHypothesis:
    """An adduct notation decomposed into the quantities used by the mass arithmetic."""

    notation: str
    multimer: int
    charge: int
    mass_shift: float

    @classmethod
    def from_notation(cls, notation: str, reference_table: Any) -> "AdductHypothesis":
        """Resolve *notation* against *reference_table* (anything exposing ``shift_of``)."""
        return cls(
            notation=notation,
            multimer=extract_multimer(notation),
            charge=extract_charge(notation),
            mass_shift=float(reference_table.shift_of(notation)),
        )

    @classmethod
    def from_shift(cls, notation: str, mass_shift: float) -> "AdductHypothesis":
        return cls(
            notation=notation,
            multimer=extract_multimer(notation),
            charge=extract_charge(notation),
            mass_shift=float(mass_shift),
        )


__all__ = [
    "AdductHypothesis",
    "AdductNotationError",
    "extract_charge",
    "extract_multimer",
    "is_well_formed",
    "polarity_sign",
    "validate_notation",
]
