"""Assembly library: parsing the semi-structured CSV and pricing line items.

The assemblies file interleaves division header rows with line-item
rows and has no column saying which is which, so rows are classified
by shape::

    03_Concrete,Concrete,,,100%                       <- header
    Slab on Grade,4in SOG,% GSF,25%,40%               <- line item
    Plumbing,Plumbing,,,                              <- header (name == description)

Line items are indexed under their division's normalized name, so
``"03_Concrete"`` in the assemblies file and ``"Concrete"`` from a
caller land on the same key.
"""

from __future__ import annotations

import csv
import logging
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hotelcost.exceptions import DataLoadError
from hotelcost.formatting import round_half_up
from hotelcost.models.assembly import AssemblyDefinition, AssemblyResult, ProjectStats
from hotelcost.models.diagnostics import IndexStatus
from hotelcost.models.enums import InputBasis

if TYPE_CHECKING:
    from pathlib import Path

    from hotelcost.data.diagnostics import ZeroMatchLog

logger = logging.getLogger(__name__)

# Lines before the first header/data row in the assemblies file.
PREAMBLE_LINES = 5

_LEADING_SECTION = re.compile(r"^[0-9_.\s]+")


def normalize_division(label: str) -> str:
    """Normalize a division label for indexing and lookup.

    Strips a leading run of digits, underscores, periods and spaces,
    turns the remaining underscores into spaces, trims, lower-cases.
    """
    return _LEADING_SECTION.sub("", label).replace("_", " ").strip().lower()


# ---------------------------------------------------------------------------
# Row classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeaderRow:
    """Starts a new division. ``name`` may be empty."""

    name: str


@dataclass(frozen=True)
class DataRow:
    """One line item, with numbers already parsed."""

    name: str
    description: str
    input_basis: str
    input_value: float
    pct_price: float


@dataclass(frozen=True)
class SkipRow:
    """Neither a header nor a usable line item."""

    reason: str


ParsedRow = HeaderRow | DataRow | SkipRow


def _cell(values: Sequence[str], index: int) -> str:
    return values[index].strip() if index < len(values) and values[index] else ""


def _numeric_cell(values: Sequence[str], index: int) -> str:
    return _cell(values, index).replace("%", "").replace(",", "").strip()


def classify_row(values: Sequence[str]) -> ParsedRow:
    """Classify one CSV row of the assemblies file.

    Columns: name/division, description, input basis, input value,
    percent of division price.

    A header has an empty basis and either a price of exactly 100 or
    a name equal to its description. A line item has basis, value and
    price all present, with value and price numeric; the price is
    returned as a 0-1 fraction.
    """
    name = _cell(values, 0)
    description = _cell(values, 1)
    basis = _cell(values, 2)
    value = _numeric_cell(values, 3)
    price = _numeric_cell(values, 4)

    if not basis and (price == "100" or (name and name == description)):
        return HeaderRow(name=name)

    if not (basis and value and price):
        return SkipRow(reason="incomplete")

    try:
        input_value = float(value)
        pct = float(price)
    except ValueError:
        return SkipRow(reason="non-numeric")
    # float() also accepts "nan" and "inf"
    if not (math.isfinite(input_value) and math.isfinite(pct)):
        return SkipRow(reason="non-numeric")

    return DataRow(
        name=name or description or "Unknown Assembly",
        description=description,
        input_basis=basis,
        input_value=input_value,
        pct_price=pct / 100,
    )


def parse_assembly_rows(
    rows: Iterable[Sequence[str]],
) -> dict[str, list[AssemblyDefinition]]:
    """Build the division index from classified rows.

    Line items seen before the first named header are dropped.
    """
    index: dict[str, list[AssemblyDefinition]] = {}
    current_division = ""

    for values in rows:
        parsed = classify_row(values)
        if isinstance(parsed, HeaderRow):
            if parsed.name:
                current_division = parsed.name
            continue
        if isinstance(parsed, SkipRow) or not current_division:
            continue

        definition = AssemblyDefinition(
            division=current_division,
            name=parsed.name,
            description=parsed.description,
            input_basis=parsed.input_basis,
            input_value=parsed.input_value,
            pct_price=parsed.pct_price,
        )
        index.setdefault(normalize_division(current_division), []).append(definition)

    return index


def read_assemblies(path: Path) -> dict[str, list[AssemblyDefinition]]:
    """Read and index the assemblies CSV at ``path``.

    Raises:
        DataLoadError: If the file is missing or unreadable.
    """
    if not path.is_file():
        msg = f"Assemblies file not found: {path}"
        raise DataLoadError(msg)
    try:
        lines = path.read_text(encoding="utf-8-sig").splitlines()
        rows = (r for r in csv.reader(lines[PREAMBLE_LINES:]) if any(c.strip() for c in r))
        return parse_assembly_rows(rows)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        msg = f"Could not read assemblies file {path}: {exc}"
        raise DataLoadError(msg) from exc


# ---------------------------------------------------------------------------
# Quantity derivation
# ---------------------------------------------------------------------------


def derive_quantity(definition: AssemblyDefinition, stats: ProjectStats) -> tuple[int, str]:
    """Physical quantity and unit for one line item on a given project.

    Percentage bases scale a project statistic; constant and lump-sum
    items take the input value as-is. Quantities are rounded and never
    below 1.
    """
    basis = definition.basis
    if basis.is_percentage:
        base = {
            InputBasis.GSF: stats.gsf,
            InputBasis.UNITS: stats.total_units,
            InputBasis.FLOORS: stats.floors,
        }[basis]
        quantity = base * (definition.input_value / 100)
    else:
        quantity = definition.input_value

    return max(1, round_half_up(quantity)), basis.unit


def price_assembly(
    definition: AssemblyDefinition,
    division_total_cost: float,
    stats: ProjectStats,
) -> AssemblyResult:
    """Allocate the division's dollars to one line item."""
    quantity, unit = derive_quantity(definition, stats)
    total_cost = division_total_cost * definition.pct_price
    return AssemblyResult(
        name=definition.name,
        description=definition.description,
        quantity=quantity,
        unit=unit,
        unit_cost=total_cost / quantity if quantity > 0 else 0.0,
        total_cost=total_cost,
    )


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DivisionLookup:
    """Result of resolving a division label against the index."""

    key: str
    definitions: list[AssemblyDefinition]
    via_alias: bool
    mapped: bool


class AssemblyIndex:
    """Division-name index over the assembly library.

    Args:
        index: Pre-built mapping of normalized division name to line
            items. When given, the index is ready without ``load``.
        path: CSV file read by ``load``.
        zero_matches: Optional tally for lookups that find nothing.
    """

    name = "assemblies"

    def __init__(
        self,
        index: Mapping[str, list[AssemblyDefinition]] | None = None,
        *,
        path: Path | None = None,
        zero_matches: ZeroMatchLog | None = None,
    ) -> None:
        self._path = path
        self._index: dict[str, list[AssemblyDefinition]] = (
            {k: list(v) for k, v in index.items()} if index is not None else {}
        )
        self._loaded = index is not None
        self._error: str | None = None
        self._zero_matches = zero_matches

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[str]],
        zero_matches: ZeroMatchLog | None = None,
    ) -> AssemblyIndex:
        """Build a ready index from already-split CSV rows (no preamble)."""
        return cls(parse_assembly_rows(rows), zero_matches=zero_matches)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def total_assemblies(self) -> int:
        return sum(len(v) for v in self._index.values())

    def attach_zero_match_log(self, zero_matches: ZeroMatchLog) -> None:
        self._zero_matches = zero_matches

    def divisions(self) -> list[str]:
        return sorted(self._index)

    def load(self) -> int:
        """Parse the configured CSV into the index.

        A missing or unreadable file is logged and leaves the index
        unloaded. Returns the number of line items indexed.
        """
        if self._path is None:
            self._loaded = True
            return self.total_assemblies

        try:
            self._index = read_assemblies(self._path)
        except DataLoadError as exc:
            logger.error("%s; assembly breakdowns will be empty", exc)
            self._index = {}
            self._error = str(exc)
            self._loaded = False
            return 0

        self._loaded = True
        self._error = None
        logger.info(
            "Loaded %d assemblies across %d divisions from %s",
            self.total_assemblies,
            len(self._index),
            self._path,
        )
        return self.total_assemblies

    def _alias(self, key: str) -> tuple[bool, list[AssemblyDefinition]]:
        # The cost table and the assembly library name some divisions
        # differently; extend these rules when a new mismatch shows up.
        if "thermal" in key:
            return True, self._index.get("protection", [])
        if "plumbing" in key:
            return True, self._index.get("plumbing", [])
        if key.startswith("wood"):
            for indexed_key, definitions in self._index.items():
                if indexed_key.startswith("wood"):
                    return True, definitions
            return True, []
        return False, []

    def lookup(self, division_label: str) -> DivisionLookup:
        """Resolve a division label by direct key, then alias rules."""
        key = normalize_division(division_label)
        direct = self._index.get(key, [])
        if direct:
            return DivisionLookup(key=key, definitions=list(direct), via_alias=False, mapped=True)

        rule_matched, aliased = self._alias(key)
        return DivisionLookup(
            key=key,
            definitions=list(aliased),
            via_alias=rule_matched,
            mapped=rule_matched or key in self._index,
        )

    def get_assemblies(
        self,
        division_label: str,
        division_total_cost: float,
        stats: ProjectStats,
    ) -> list[AssemblyResult]:
        """Priced line items for one division of a project.

        Returns an empty list (never raises) when the index is not
        loaded or the division has no line items.
        """
        if not self._loaded:
            logger.warning("Assembly index not initialized; no line items for %r", division_label)
            return []

        found = self.lookup(division_label)
        if not found.definitions:
            if not found.mapped and self._index:
                logger.warning(
                    "Unmapped division %r (normalized %r); add an alias rule if "
                    "the assembly library names it differently",
                    division_label,
                    found.key,
                )
                if self._zero_matches is not None:
                    self._zero_matches.unmapped_division(division_label)
            else:
                logger.debug("No assemblies for division %r", division_label)
                if self._zero_matches is not None:
                    self._zero_matches.empty_division(division_label)
            return []

        if found.via_alias:
            logger.debug(
                "Division %r resolved by alias rule to %d assemblies",
                division_label,
                len(found.definitions),
            )
        return [price_assembly(d, division_total_cost, stats) for d in found.definitions]

    def status(self) -> IndexStatus:
        return IndexStatus(
            name=self.name,
            loaded=self._loaded,
            records=self.total_assemblies,
            source=str(self._path) if self._path is not None else None,
            error=self._error,
        )
