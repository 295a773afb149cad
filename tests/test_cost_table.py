"""Tests for the brand cost table and brand normalization."""

from __future__ import annotations

from pathlib import Path

import pytest

from hotelcost.data.brands import normalize_brand
from hotelcost.data.cost_table import CostTableIndex, parse_amount, read_cost_table
from hotelcost.data.csi_divisions import division_name, division_number, find_division_columns
from hotelcost.exceptions import DataLoadError
from hotelcost.models.cost_table import CostTableRow
from hotelcost.models.estimate import BuildingOption


@pytest.fixture()
def table(cost_table_path: Path) -> CostTableIndex:
    idx = CostTableIndex(path=cost_table_path)
    idx.load()
    return idx


def _row(rooms: int, floors: int, brand: str = "Home2") -> CostTableRow:
    return CostTableRow(brand=brand, rooms=rooms, floors=floors, gsf=rooms * 450.0)


# ---------------------------------------------------------------------------
# Brand normalization
# ---------------------------------------------------------------------------


class TestNormalizeBrand:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Home2 Suites", "Home2"),
            ("home2 suites", "Home2"),
            ("HOME2 SUITES BY HILTON", "Home2"),
            ("Hampton Inn & Suites", "Hampton"),
            ("Tru by Hilton", "Tru"),
            ("LivSmart", "LivSmart"),
            ("livsmart studios", "LivSmart"),
        ],
    )
    def test_known_aliases(self, raw: str, expected: str) -> None:
        assert normalize_brand(raw) == expected

    def test_unknown_brand_is_returned_unchanged(self) -> None:
        assert normalize_brand("Canopy") == "Canopy"

    def test_normalized_keys_are_stable(self) -> None:
        for key in ("Home2", "Tru", "Hampton", "LivSmart"):
            assert normalize_brand(key) == key


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("$1,234", 1234.0), ("1234", 1234.0), (" 45,000 ", 45000.0), ("12%", 12.0)],
    )
    def test_parse_amount(self, raw: str, expected: float) -> None:
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", "$"])
    def test_parse_amount_invalid(self, raw: str | None) -> None:
        assert parse_amount(raw) is None

    @pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-inf", "$Infinity"])
    def test_parse_amount_non_finite(self, raw: str) -> None:
        assert parse_amount(raw) is None

    def test_bad_gsf_reads_as_zero(self, tmp_path: Path) -> None:
        path = tmp_path / "costs.csv"
        path.write_text(
            "Brand,Rooms,Floors,Total Building GSF,03_Concrete\n"
            'Home2,100,4,NaN,"$400,000"\n'
            'Home2,120,4,"-45,000","$450,000"\n'
            'Tru,-98,4,inf,"$338,000"\n'
        )
        rows = read_cost_table(path)
        assert [r.gsf for r in rows] == [0.0, 0.0, 0.0]
        assert rows[2].rooms == 0
        assert rows[1].division_costs == {"03_Concrete": 450_000.0}

    def test_reads_all_brand_rows(self, cost_table_path: Path) -> None:
        rows = read_cost_table(cost_table_path)
        assert len(rows) == 6
        assert {r.brand for r in rows} == {"Home2", "Tru", "Hampton"}

    def test_header_whitespace_is_ignored(self, cost_table_path: Path) -> None:
        rows = read_cost_table(cost_table_path)
        assert rows[1].gsf == 45_000.0

    def test_division_costs_in_division_order(self, cost_table_path: Path) -> None:
        row = read_cost_table(cost_table_path)[1]
        assert list(row.division_costs) == [
            "01_General_Requirements",
            "03_Concrete",
            "07_Thermal_Moisture",
            "14_Conveying_Equipment",
            "22_Plumbing",
            "Charges_Fees",
        ]
        assert row.division_costs["03_Concrete"] == 400_000.0

    def test_unparseable_and_zero_amounts_are_dropped(self, cost_table_path: Path) -> None:
        tru = next(r for r in read_cost_table(cost_table_path) if r.brand == "Tru")
        assert "14_Conveying_Equipment" not in tru.division_costs
        assert "22_Plumbing" not in tru.division_costs
        assert "Charges_Fees" not in tru.division_costs

    def test_room_mix(self, cost_table_path: Path) -> None:
        row = read_cost_table(cost_table_path)[1]
        assert row.room_mix == {"KS": 30, "QQ": 50, "K1": 15, "ADA": 5}
        assert row.classified_rooms == 100
        assert row.room_ratio("QQ") == pytest.approx(0.5)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DataLoadError):
            read_cost_table(tmp_path / "nope.csv")

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "costs.csv"
        path.write_bytes(b"Brand,Rooms\n\xff\xfe\xfa\n")
        with pytest.raises(DataLoadError, match="Could not read"):
            read_cost_table(path)


class TestDivisionColumns:
    def test_first_header_per_division_wins(self) -> None:
        headers = ["Brand", "03_Concrete", "03_Concrete_Alt", "26_Electrical", "Charges_Fees"]
        assert find_division_columns(headers) == ["03_Concrete", "26_Electrical", "Charges_Fees"]

    def test_division_number_and_name(self) -> None:
        assert division_number("07_Thermal_Moisture") == "07"
        assert division_name("07_Thermal_Moisture") == "Thermal & Moisture Protection"
        assert division_number("Charges_Fees") is None
        assert division_name("Charges_Fees") == "Charges Fees"
        assert division_number("99_Unknown") is None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoad:
    def test_load_counts_rows(self, cost_table_path: Path) -> None:
        idx = CostTableIndex(path=cost_table_path)
        assert idx.load() == 6
        assert idx.loaded
        assert idx.status().records == 6

    def test_missing_file_degrades_to_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        idx = CostTableIndex(path=tmp_path / "missing.csv")
        with caplog.at_level("ERROR"):
            assert idx.load() == 0
        assert idx.rows == []
        assert not idx.loaded
        assert "empty cost table" in caplog.text
        assert idx.find_best_match("Home2", 4, 100) is None


# ---------------------------------------------------------------------------
# Nearest match
# ---------------------------------------------------------------------------


class TestFindBestMatch:
    def test_nearest_room_count(self) -> None:
        idx = CostTableIndex([_row(80, 4), _row(100, 4), _row(150, 4)])
        match = idx.find_best_match("Home2", 4, 95)
        assert match is not None
        assert match.rooms == 100

    def test_brand_is_normalized(self, table: CostTableIndex) -> None:
        match = table.find_best_match("home2 suites", 4, 100)
        assert match is not None
        assert match.brand == "Home2"
        assert match.rooms == 100

    def test_unknown_brand_returns_none(self, table: CostTableIndex) -> None:
        assert table.find_best_match("Canopy", 4, 100) is None

    def test_exact_floor_match_is_preferred(self, table: CostTableIndex) -> None:
        match = table.find_best_match("Home2", 6, 150)
        assert match is not None
        assert (match.rooms, match.floors) == (100, 6)

    def test_falls_back_to_all_floors(self, table: CostTableIndex) -> None:
        match = table.find_best_match("Home2", 5, 140)
        assert match is not None
        assert (match.rooms, match.floors) == (150, 4)

    def test_room_tie_prefers_larger_room_count(self, table: CostTableIndex) -> None:
        match = table.find_best_match("Home2", 4, 90)
        assert match is not None
        assert match.rooms == 100

    def test_room_tie_prefers_closer_floor_count(self) -> None:
        idx = CostTableIndex([_row(100, 2), _row(100, 6), _row(100, 5)])
        match = idx.find_best_match("Home2", 4, 100)
        assert match is not None
        assert match.floors == 5

    def test_full_tie_keeps_file_order(self) -> None:
        first = CostTableRow(brand="Home2", rooms=100, floors=4, gsf=1.0)
        second = CostTableRow(brand="Home2", rooms=100, floors=4, gsf=2.0)
        match = CostTableIndex([first, second]).find_best_match("Home2", 4, 100)
        assert match is first

    def test_never_interpolates(self, table: CostTableIndex) -> None:
        match = table.find_best_match("Home2", 4, 125)
        assert match is not None
        assert match.rooms in {100, 150}
        assert match.gsf in {45_000.0, 62_000.0}


class TestCatalog:
    def test_brands_sorted(self, table: CostTableIndex) -> None:
        assert table.brands() == ["Hampton", "Home2", "Tru"]

    def test_options_sorted_and_unique(self) -> None:
        idx = CostTableIndex(
            [_row(120, 4), _row(80, 3), _row(120, 4), _row(120, 3), _row(0, 4), _row(90, 4, "Tru")]
        )
        assert idx.options("Home2 Suites") == [
            BuildingOption(rooms=80, floors=3),
            BuildingOption(rooms=120, floors=3),
            BuildingOption(rooms=120, floors=4),
        ]
