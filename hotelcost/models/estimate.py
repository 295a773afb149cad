"""Estimate request and output models for the hotelcost engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hotelcost.models.assembly import AssemblyResult  # noqa: TCH001 (pydantic resolves at runtime)

NATIONAL_AVERAGE_LABEL = "National Average"


class EstimateRequest(BaseModel):
    """Inputs for one parametric hotel estimate.

    Location is resolved from ``location_name`` + ``region`` when both
    are given, otherwise from ``lat`` + ``lng``. ``zip_code`` is carried
    for the HTTP contract but not used for lookup.
    """

    brand: str = Field(min_length=1)
    rooms: int = Field(gt=0)
    floors: int = Field(gt=0)
    location_name: str | None = None
    region: str | None = None
    lat: float | None = None
    lng: float | None = None
    zip_code: str | None = None


class BuildingOption(BaseModel):
    """A rooms/floors combination available in the reference data."""

    rooms: int
    floors: int


class RoomMix(BaseModel):
    """Room-type counts scaled to the requested room count.

    Each type is rounded on its own, so the counts may not add up to
    the requested total exactly.
    """

    king_suite: int = 0
    double_queen: int = 0
    king_one: int = 0
    ada: int = 0
    queen: int = 0

    @property
    def total(self) -> int:
        return self.king_suite + self.double_queen + self.king_one + self.ada + self.queen


class DivisionBreakdown(BaseModel):
    """Location-adjusted cost of one construction division."""

    label: str
    csi_division: str | None = None
    division_name: str
    local_cost: float
    pct_of_total: float
    assemblies: list[AssemblyResult] = Field(default_factory=list)

    @property
    def assemblies_total(self) -> float:
        return sum(a.total_cost for a in self.assemblies)


class DerivedCostBreakdown(BaseModel):
    """Complete output of one estimate request.

    Division totals come from the matched reference row; line-item
    quantities come from the requested size.
    """

    total_local: float
    cost_per_sf: float
    cost_per_key: float
    gsf: int
    building_length: int
    building_width: int
    room_mix: RoomMix = Field(default_factory=RoomMix)
    breakdown: list[DivisionBreakdown] = Field(default_factory=list)
    location_factor: float = 1.0
    location_id: str = "N/A"
    location_label: str = NATIONAL_AVERAGE_LABEL
    matched_rooms: int = 0
    matched_floors: int = 0

    @classmethod
    def empty(
        cls,
        location_factor: float = 1.0,
        location_id: str = "N/A",
        location_label: str = NATIONAL_AVERAGE_LABEL,
    ) -> DerivedCostBreakdown:
        """Zeroed result returned when no reference data matches."""
        return cls(
            total_local=0.0,
            cost_per_sf=0.0,
            cost_per_key=0.0,
            gsf=0,
            building_length=0,
            building_width=0,
            location_factor=location_factor,
            location_id=location_id,
            location_label=location_label,
        )

    @property
    def has_data(self) -> bool:
        return bool(self.breakdown)

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict for frontend consumption.

        Returns a dict with formatted strings for direct display.
        """
        from hotelcost.formatting import format_compact_currency, format_currency

        top_drivers = sorted(self.breakdown, key=lambda d: d.local_cost, reverse=True)[:3]

        return {
            "has_data": self.has_data,
            "total_cost_formatted": format_currency(self.total_local),
            "total_cost_compact": format_compact_currency(self.total_local),
            "cost_per_sf_formatted": format_currency(self.cost_per_sf),
            "cost_per_key_formatted": format_currency(self.cost_per_key),
            "gsf_formatted": f"{self.gsf:,} SF",
            "location": self.location_label,
            "location_factor": self.location_factor,
            "matched_reference": (
                f"{self.matched_rooms} rooms / {self.matched_floors} floors"
                if self.has_data
                else None
            ),
            "num_divisions": len(self.breakdown),
            "num_assemblies": sum(len(d.assemblies) for d in self.breakdown),
            "top_cost_drivers": [
                {
                    "division_name": d.division_name,
                    "cost_formatted": format_compact_currency(d.local_cost),
                    "pct_of_total": round(d.pct_of_total, 1),
                }
                for d in top_drivers
            ],
        }
