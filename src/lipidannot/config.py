"""Matcher configuration.

Settings are kept in a small frozen dataclass so they can be written next to results as
``config.json`` and loaded back for a reproducible run.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .adducts.reference_table import (
    DEFAULT_REFERENCE_TABLE,
    AdductReferenceTable,
    load_reference_table_csv,
)

logger = logging.getLogger(__name__)


class MatcherConfigError(ValueError):
    """Raised when matcher settings are missing or invalid."""


@dataclass(frozen=True)
class MatcherConfig:
    """Settings for adduct inference.

    Attributes
    ----------
    ppm_tolerance : float
        Neutral-mass agreement window in ppm.
    reference_table_csv : Path, optional
        CSV with ``adduct``, ``mass_shift`` and ``polarity`` columns. The built-in table is
        used when unset.
    """

    ppm_tolerance: float = 10.0
    reference_table_csv: Optional[Path] = None

    def __post_init__(self) -> None:
        try:
            tolerance = float(self.ppm_tolerance)
        except (TypeError, ValueError) as err:
            raise MatcherConfigError(f"ppm_tolerance must be numeric, got {self.ppm_tolerance!r}") from err
        if not math.isfinite(tolerance) or tolerance < 0:
            raise MatcherConfigError(f"ppm_tolerance must be finite and >= 0, got {tolerance}")
        object.__setattr__(self, "ppm_tolerance", tolerance)
        if self.reference_table_csv is not None:
            object.__setattr__(self, "reference_table_csv", Path(self.reference_table_csv))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MatcherConfig":
        unknown = set(data) - {"ppm_tolerance", "reference_table_csv"}
        if unknown:
            raise MatcherConfigError(f"Unknown matcher config keys: {sorted(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_json(cls, path: Path) -> "MatcherConfig":
        """Load settings from a JSON file; relative table paths resolve against its folder."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as err:
            raise MatcherConfigError(f"Invalid JSON in {path}: {err}") from err
        if not isinstance(data, dict):
            raise MatcherConfigError(f"{path} must contain a JSON object")

        table = data.get("reference_table_csv")
        if table is not None and not Path(table).is_absolute():
            data["reference_table_csv"] = path.parent / table
        return cls.from_mapping(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ppm_tolerance": self.ppm_tolerance,
            "reference_table_csv": (
                str(self.reference_table_csv) if self.reference_table_csv is not None else None
            ),
        }

    def write_json(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path

    def load_reference_table(self) -> AdductReferenceTable:
        if self.reference_table_csv is None:
            return DEFAULT_REFERENCE_TABLE
        logger.info("Loading adduct reference table from %s", self.reference_table_csv)
        return load_reference_table_csv(self.reference_table_csv)


__all__ = ["MatcherConfig", "MatcherConfigError"]
