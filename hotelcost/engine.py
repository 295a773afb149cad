"""Cost derivation engine for parametric hotel estimates.

The engine answers "what would a hotel of brand B, R rooms, F floors,
at location L cost?" from reference data only:

1. **Location factor**: Resolve the place to a cost multiplier
   (national average 1.00 when nothing matches).
2. **Reference match**: Snap to the closest real cost-table row for
   the brand; rows are never blended.
3. **Division costs**: Multiply each positive division amount in the
   matched row by the location factor and total them.
4. **Line items**: Split each division's dollars into assemblies whose
   quantities follow the *requested* rooms and floors and the matched
   row's gross area.
5. **Room mix and footprint**: Scale the matched row's room-type
   ratios to the requested room count and estimate a footprint from a
   fixed building width.

Missing data at any step degrades to zeros and empty lists.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hotelcost.data.brands import normalize_brand
from hotelcost.data.csi_divisions import division_name, division_number
from hotelcost.formatting import round_half_up
from hotelcost.models.assembly import ProjectStats
from hotelcost.models.estimate import (
    NATIONAL_AVERAGE_LABEL,
    DerivedCostBreakdown,
    DivisionBreakdown,
    RoomMix,
)

if TYPE_CHECKING:
    from hotelcost.data.assemblies import AssemblyIndex
    from hotelcost.data.cost_table import CostTableIndex
    from hotelcost.data.diagnostics import ZeroMatchLog
    from hotelcost.data.locations import LocationFactorIndex
    from hotelcost.models.cost_table import CostTableRow
    from hotelcost.models.estimate import EstimateRequest

logger = logging.getLogger(__name__)

# Double-loaded corridor building width in feet.
ASSUMED_BUILDING_WIDTH_FT = 65

# Requested rooms are never used to scale reference costs.
_SIZE_RATIO = 1.0


class CostDerivationEngine:
    """Turns an EstimateRequest into a DerivedCostBreakdown.

    Args:
        cost_table: Brand cost table with nearest-match lookup.
        locations: Location cost factors.
        assemblies: Assembly library for line-item breakdowns.
        zero_matches: Optional tally of brand and location misses.

    Example::

        engine = CostDerivationEngine(cost_table, locations, assemblies)
        result = engine.estimate(EstimateRequest(brand="Home2", rooms=100, floors=4))
    """

    def __init__(
        self,
        cost_table: CostTableIndex,
        locations: LocationFactorIndex,
        assemblies: AssemblyIndex,
        zero_matches: ZeroMatchLog | None = None,
    ) -> None:
        self._cost_table = cost_table
        self._locations = locations
        self._assemblies = assemblies
        self._zero_matches = zero_matches

    def estimate(self, request: EstimateRequest) -> DerivedCostBreakdown:
        """Produce a cost breakdown for one request. Never raises for missing data."""
        # 1. Location factor
        factor = 1.0
        location_id = "N/A"
        location_label = NATIONAL_AVERAGE_LABEL
        location = self._locations.find_best_match(
            lat=request.lat,
            lng=request.lng,
            name=request.location_name,
            region=request.region,
        )
        if location is not None:
            factor = location.cost_factor
            location_id = location.id
            location_label = location.label
        elif self._wants_location(request) and self._zero_matches is not None:
            self._zero_matches.location_miss()

        # 2. Reference row
        row = self._cost_table.find_best_match(request.brand, request.floors, request.rooms)
        if row is None:
            logger.warning(
                "No cost data for brand %r (normalized %r)",
                request.brand,
                normalize_brand(request.brand),
            )
            if self._zero_matches is not None:
                self._zero_matches.brand_miss(request.brand)
            return DerivedCostBreakdown.empty(factor, location_id, location_label)

        if row.rooms != request.rooms or row.floors != request.floors:
            logger.debug(
                "Snapped %d rooms / %d floors to reference %d rooms / %d floors",
                request.rooms,
                request.floors,
                row.rooms,
                row.floors,
            )

        # 3-5. Division costs with line items
        gsf = row.gsf * _SIZE_RATIO
        stats = ProjectStats(gsf=gsf, floors=request.floors, total_units=request.rooms)
        breakdown, total_local = self._division_breakdown(row, factor, stats)

        # 6. Room mix
        room_mix = self._room_mix(row, request.rooms)

        # 7. Footprint
        footprint = gsf / request.floors if request.floors > 0 else 0.0
        length = footprint / ASSUMED_BUILDING_WIDTH_FT

        return DerivedCostBreakdown(
            total_local=total_local,
            cost_per_sf=total_local / gsf if gsf > 0 else 0.0,
            cost_per_key=total_local / request.rooms if request.rooms > 0 else 0.0,
            gsf=round_half_up(gsf),
            building_length=round_half_up(length),
            building_width=ASSUMED_BUILDING_WIDTH_FT,
            room_mix=room_mix,
            breakdown=breakdown,
            location_factor=factor,
            location_id=location_id,
            location_label=location_label,
            matched_rooms=row.rooms,
            matched_floors=row.floors,
        )

    @staticmethod
    def _wants_location(request: EstimateRequest) -> bool:
        has_name = bool(request.location_name and request.region)
        has_coords = request.lat is not None and request.lng is not None
        return has_name or has_coords

    def _division_breakdown(
        self,
        row: CostTableRow,
        factor: float,
        stats: ProjectStats,
    ) -> tuple[list[DivisionBreakdown], float]:
        """Location-adjusted division costs with their line items.

        Percent of total is filled in after every division is summed.
        Returns (breakdown, total_local).
        """
        local_costs: list[tuple[str, float]] = []
        total_local = 0.0
        for label, base_cost in row.division_costs.items():
            if base_cost <= 0:
                continue
            local_cost = base_cost * factor * _SIZE_RATIO
            total_local += local_cost
            local_costs.append((label, local_cost))

        breakdown = [
            DivisionBreakdown(
                label=label,
                csi_division=division_number(label),
                division_name=division_name(label),
                local_cost=local_cost,
                pct_of_total=local_cost / total_local * 100.0 if total_local > 0 else 0.0,
                assemblies=self._assemblies.get_assemblies(label, local_cost, stats),
            )
            for label, local_cost in local_costs
        ]
        return breakdown, total_local

    @staticmethod
    def _room_mix(row: CostTableRow, rooms: int) -> RoomMix:
        """Scale the reference row's room-type ratios to ``rooms``."""
        return RoomMix(
            king_suite=round_half_up(rooms * row.room_ratio("KS")),
            double_queen=round_half_up(rooms * row.room_ratio("QQ")),
            king_one=round_half_up(rooms * row.room_ratio("K1")),
            ada=round_half_up(rooms * row.room_ratio("ADA")),
        )
