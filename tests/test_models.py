"""Tests for the hotelcost pydantic models and enums."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hotelcost.models.assembly import AssemblyDefinition, ProjectStats
from hotelcost.models.cost_table import CostTableRow
from hotelcost.models.diagnostics import DataCompletenessReport, IndexStatus
from hotelcost.models.enums import Brand, InputBasis
from hotelcost.models.estimate import DerivedCostBreakdown, EstimateRequest, RoomMix
from hotelcost.models.location import LocationFactor


class TestInputBasis:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("% GSF", InputBasis.GSF),
            ("% of Units", InputBasis.UNITS),
            ("% Floors", InputBasis.FLOORS),
            ("Constant", InputBasis.CONSTANT),
            ("Constrant", InputBasis.CONSTANT),
            ("Lump Sum", InputBasis.LUMP_SUM),
            ("", InputBasis.LUMP_SUM),
        ],
    )
    def test_classify(self, raw: str, expected: InputBasis) -> None:
        assert InputBasis.classify(raw) is expected

    def test_units(self) -> None:
        assert InputBasis.GSF.unit == "SF"
        assert InputBasis.UNITS.unit == "EA"
        assert InputBasis.FLOORS.unit == "EA"
        assert InputBasis.CONSTANT.unit == "EA"
        assert InputBasis.LUMP_SUM.unit == "LS"

    def test_is_percentage(self) -> None:
        assert InputBasis.FLOORS.is_percentage
        assert not InputBasis.CONSTANT.is_percentage

    def test_definition_basis(self) -> None:
        defn = AssemblyDefinition(
            division="Concrete",
            name="Slab",
            input_basis="% GSF",
            input_value=25.0,
            pct_price=0.4,
        )
        assert defn.basis is InputBasis.GSF


class TestBrand:
    def test_values(self) -> None:
        assert [b.value for b in Brand] == ["Home2", "Tru", "Hampton", "LivSmart"]


class TestLocationFactor:
    def test_label(self) -> None:
        loc = LocationFactor(id="1", name="Baltimore", state="MD", cost_factor=0.95)
        assert loc.label == "Baltimore, MD"
        assert not loc.has_coordinates

    def test_factor_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LocationFactor(id="1", name="X", state="XX", cost_factor=0)

    def test_latitude_range(self) -> None:
        with pytest.raises(ValidationError):
            LocationFactor(id="1", name="X", state="XX", cost_factor=1.0, lat=91.0, lng=0.0)


class TestEstimateRequest:
    def test_minimal(self) -> None:
        req = EstimateRequest(brand="Tru", rooms=98, floors=4)
        assert req.lat is None
        assert req.zip_code is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"brand": "", "rooms": 100, "floors": 4},
            {"brand": "Tru", "rooms": 0, "floors": 4},
            {"brand": "Tru", "rooms": 100, "floors": -1},
        ],
    )
    def test_invalid(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            EstimateRequest(**kwargs)  # type: ignore[arg-type]


class TestCostTableRow:
    def test_room_ratio_without_mix(self) -> None:
        row = CostTableRow(brand="Tru", rooms=98, floors=4, gsf=50_200.0)
        assert row.classified_rooms == 0
        assert row.room_ratio("QQ") == 0.0

    def test_frozen(self) -> None:
        row = CostTableRow(brand="Tru")
        with pytest.raises(ValidationError):
            row.rooms = 5  # type: ignore[misc]


class TestProjectStats:
    def test_rejects_negative(self) -> None:
        with pytest.raises(ValidationError):
            ProjectStats(gsf=-1.0, floors=4, total_units=100)


class TestDerivedCostBreakdown:
    def test_empty(self) -> None:
        result = DerivedCostBreakdown.empty(1.1, "tst-tx", "Testville, TX")
        assert result.total_local == 0
        assert result.breakdown == []
        assert result.room_mix == RoomMix()
        assert result.location_factor == 1.1
        assert result.location_label == "Testville, TX"
        assert not result.has_data

    def test_defaults_to_national_average(self) -> None:
        result = DerivedCostBreakdown.empty()
        assert result.location_id == "N/A"
        assert result.location_label == "National Average"

    def test_json_round_trip(self) -> None:
        result = DerivedCostBreakdown.empty()
        assert DerivedCostBreakdown.model_validate_json(result.model_dump_json()) == result

    def test_room_mix_total(self) -> None:
        assert RoomMix(king_suite=30, double_queen=50, king_one=15, ada=5).total == 100


class TestDataCompletenessReport:
    def test_complete_needs_every_index(self) -> None:
        loaded = IndexStatus(name="cost_table", loaded=True, records=6)
        empty = IndexStatus(name="assemblies", loaded=True, records=0)
        assert DataCompletenessReport(initialized=True, indexes=[loaded]).is_complete
        assert not DataCompletenessReport(initialized=True, indexes=[loaded, empty]).is_complete
        assert not DataCompletenessReport(initialized=False, indexes=[loaded]).is_complete
