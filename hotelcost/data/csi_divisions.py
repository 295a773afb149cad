"""Standard CSI MasterFormat divisions as they appear in the cost table.

The cost table has one dollar column per division, labelled with the
division number first (``"03_Concrete"``), plus a few non-numbered
cost columns such as ``"Charges_Fees"``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CSIDivision:
    """A CSI MasterFormat division with its number and name."""

    number: str
    name: str


CSI_DIVISIONS: list[CSIDivision] = [
    CSIDivision("01", "General Requirements"),
    CSIDivision("02", "Existing Conditions"),
    CSIDivision("03", "Concrete"),
    CSIDivision("04", "Masonry"),
    CSIDivision("05", "Metals"),
    CSIDivision("06", "Wood, Plastics & Composites"),
    CSIDivision("07", "Thermal & Moisture Protection"),
    CSIDivision("08", "Openings"),
    CSIDivision("09", "Finishes"),
    CSIDivision("10", "Specialties"),
    CSIDivision("11", "Equipment"),
    CSIDivision("12", "Furnishings"),
    CSIDivision("13", "Special Construction"),
    CSIDivision("14", "Conveying Equipment"),
    CSIDivision("21", "Fire Suppression"),
    CSIDivision("22", "Plumbing"),
    CSIDivision("23", "HVAC"),
    CSIDivision("26", "Electrical"),
    CSIDivision("27", "Communications"),
    CSIDivision("28", "Electronic Safety & Security"),
    CSIDivision("31", "Earthwork"),
    CSIDivision("32", "Exterior Improvements"),
    CSIDivision("33", "Utilities"),
]

DIVISION_NAMES: dict[str, str] = {d.number: d.name for d in CSI_DIVISIONS}

# Cost columns without a division number, read after the numbered ones.
NAMED_COST_COLUMNS: tuple[str, ...] = ("Charges_Fees",)

_NUMBER_PREFIX = re.compile(r"^\s*(\d{2})(?!\d)")


def division_number(label: str) -> str | None:
    """Return the two-digit division number a column label starts with."""
    match = _NUMBER_PREFIX.match(label)
    if match is None:
        return None
    number = match.group(1)
    return number if number in DIVISION_NAMES else None


def division_name(label: str) -> str:
    """Display name for a cost column label."""
    number = division_number(label)
    if number is not None:
        return DIVISION_NAMES[number]
    return label.replace("_", " ").strip()


def find_division_columns(headers: list[str]) -> list[str]:
    """Select the cost columns from a header row, in division order.

    For each division number the first header starting with that
    number wins; named columns follow when present.
    """
    columns: list[str] = []
    for division in CSI_DIVISIONS:
        for header in headers:
            if header.strip().startswith(division.number):
                columns.append(header)
                break
    stripped = {h.strip(): h for h in headers}
    for name in NAMED_COST_COLUMNS:
        if name in stripped:
            columns.append(stripped[name])
    return columns
