"""Enums for the hotelcost domain models."""

from __future__ import annotations

from enum import StrEnum


class Brand(StrEnum):
    """Hotel brands with reference cost data."""

    HOME2 = "Home2"
    TRU = "Tru"
    HAMPTON = "Hampton"
    LIVSMART = "LivSmart"


class InputBasis(StrEnum):
    """Unit of measure an assembly's quantity is derived from.

    The assembly CSV carries free text in its basis column ("% GSF",
    "% of Units", "Constrant", ...). ``classify`` maps that text onto
    one of these members by substring, in the order below.
    """

    GSF = "gsf"
    UNITS = "units"
    FLOORS = "floors"
    CONSTANT = "constant"
    LUMP_SUM = "lump_sum"

    @classmethod
    def classify(cls, raw: str) -> InputBasis:
        basis = raw.lower()
        if "gsf" in basis:
            return cls.GSF
        if "units" in basis:
            return cls.UNITS
        if "floors" in basis:
            return cls.FLOORS
        # "constrant" is a spelling that appears in the source workbook
        if "constant" in basis or "constrant" in basis:
            return cls.CONSTANT
        return cls.LUMP_SUM

    @property
    def unit(self) -> str:
        """Unit label reported for quantities on this basis."""
        if self is InputBasis.GSF:
            return "SF"
        if self is InputBasis.LUMP_SUM:
            return "LS"
        return "EA"

    @property
    def is_percentage(self) -> bool:
        """True when the input value is a percentage of a project statistic."""
        return self in (InputBasis.GSF, InputBasis.UNITS, InputBasis.FLOORS)
