"""Brand cost table: loading and nearest-match lookup."""

from __future__ import annotations

import csv
import logging
import math
from typing import TYPE_CHECKING

from hotelcost.data.brands import normalize_brand
from hotelcost.data.csi_divisions import find_division_columns
from hotelcost.exceptions import DataLoadError
from hotelcost.models.cost_table import ROOM_MIX_COLUMNS, CostTableRow
from hotelcost.models.diagnostics import IndexStatus
from hotelcost.models.estimate import BuildingOption

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

BRAND_COLUMN = "Brand"
ROOMS_COLUMN = "Rooms"
FLOORS_COLUMN = "Floors"
GSF_COLUMN = "Total Building GSF"


def parse_amount(value: str | None) -> float | None:
    """Parse a number that may carry '$', ',' or '%' characters.

    Returns None for blank, unparseable, or non-finite ("nan", "inf")
    cells.
    """
    if value is None:
        return None
    cleaned = value.replace("$", "").replace(",", "").replace("%", "").strip()
    if not cleaned:
        return None
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def _parse_count(value: str | None) -> int:
    amount = parse_amount(value)
    return max(int(amount), 0) if amount is not None else 0


def parse_cost_row(record: dict[str, str], division_columns: list[str]) -> CostTableRow | None:
    """Build a CostTableRow from one CSV record.

    Returns None for records without a brand. Numeric fields that fail
    to parse, or are negative, read as zero; division amounts that fail
    to parse, or are not positive, are left out.
    """
    brand = (record.get(BRAND_COLUMN) or "").strip()
    if not brand:
        return None

    divisions: dict[str, float] = {}
    for column in division_columns:
        amount = parse_amount(record.get(column))
        if amount is not None and amount > 0:
            divisions[column.strip()] = amount

    return CostTableRow(
        brand=brand,
        rooms=_parse_count(record.get(ROOMS_COLUMN)),
        floors=_parse_count(record.get(FLOORS_COLUMN)),
        gsf=max(parse_amount(record.get(GSF_COLUMN)) or 0.0, 0.0),
        room_mix={col: _parse_count(record.get(col)) for col in ROOM_MIX_COLUMNS},
        division_costs=divisions,
    )


def read_cost_table(path: Path) -> list[CostTableRow]:
    """Read the cost table CSV at ``path``.

    Raises:
        DataLoadError: If the file is missing or unreadable.
    """
    if not path.is_file():
        msg = f"Cost table not found: {path}"
        raise DataLoadError(msg)

    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f)
            headers = [h.strip() for h in next(reader, [])]
            division_columns = find_division_columns(headers)
            rows: list[CostTableRow] = []
            for values in reader:
                if not any(v.strip() for v in values):
                    continue
                record = {h: v.strip() for h, v in zip(headers, values)}
                row = parse_cost_row(record, division_columns)
                if row is not None:
                    rows.append(row)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        msg = f"Could not read cost table {path}: {exc}"
        raise DataLoadError(msg) from exc

    return rows


class CostTableIndex:
    """In-memory brand cost table with nearest-neighbor lookup.

    Lookups always snap to one real reference row; costs are never
    interpolated between rows.

    Args:
        rows: Pre-built rows. When given, the index is ready without
            calling ``load``.
        path: CSV file read by ``load``.
    """

    name = "cost_table"

    def __init__(
        self,
        rows: Iterable[CostTableRow] | None = None,
        *,
        path: Path | None = None,
    ) -> None:
        self._path = path
        self._rows: list[CostTableRow] = list(rows) if rows is not None else []
        self._loaded = rows is not None
        self._error: str | None = None

    @property
    def rows(self) -> list[CostTableRow]:
        return list(self._rows)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> int:
        """Load rows from the configured CSV.

        A missing or unreadable file is logged and leaves the index
        empty. Returns the number of rows loaded.
        """
        if self._path is None:
            self._loaded = True
            return len(self._rows)

        try:
            self._rows = read_cost_table(self._path)
        except DataLoadError as exc:
            logger.error("%s; continuing with an empty cost table", exc)
            self._rows = []
            self._error = str(exc)
            self._loaded = False
            return 0

        self._loaded = True
        self._error = None
        logger.info("Loaded %d cost records from %s", len(self._rows), self._path)
        return len(self._rows)

    def rows_for_brand(self, brand: str) -> list[CostTableRow]:
        key = normalize_brand(brand)
        return [r for r in self._rows if r.brand == key]

    def find_best_match(self, brand: str, floors: int, rooms: int) -> CostTableRow | None:
        """Find the reference row closest to the requested size.

        1. Keep rows for the normalized brand (None if there are none).
        2. Prefer rows with the exact floor count; fall back to all
           brand rows when none match.
        3. Pick the smallest room-count difference. Ties go to the
           smaller floor-count difference, then the larger room count,
           then file order.
        """
        brand_rows = self.rows_for_brand(brand)
        if not brand_rows:
            return None

        floor_rows = [r for r in brand_rows if r.floors == floors]
        candidates = floor_rows or brand_rows

        return min(
            candidates,
            key=lambda r: (abs(r.rooms - rooms), abs(r.floors - floors), -r.rooms),
        )

    def brands(self) -> list[str]:
        return sorted({r.brand for r in self._rows})

    def options(self, brand: str) -> list[BuildingOption]:
        """Distinct rooms/floors pairs for a brand, sorted by rooms then floors."""
        pairs = {
            (r.rooms, r.floors)
            for r in self.rows_for_brand(brand)
            if r.rooms > 0 and r.floors > 0
        }
        return [BuildingOption(rooms=rooms, floors=floors) for rooms, floors in sorted(pairs)]

    def status(self) -> IndexStatus:
        return IndexStatus(
            name=self.name,
            loaded=self._loaded,
            records=len(self._rows),
            source=str(self._path) if self._path is not None else None,
            error=self._error,
        )
