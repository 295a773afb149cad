"""Domain models for the hotelcost estimator."""

from hotelcost.models.assembly import AssemblyDefinition, AssemblyResult, ProjectStats
from hotelcost.models.cost_table import ROOM_MIX_COLUMNS, CostTableRow
from hotelcost.models.diagnostics import DataCompletenessReport, IndexStatus
from hotelcost.models.enums import Brand, InputBasis
from hotelcost.models.estimate import (
    NATIONAL_AVERAGE_LABEL,
    BuildingOption,
    DerivedCostBreakdown,
    DivisionBreakdown,
    EstimateRequest,
    RoomMix,
)
from hotelcost.models.location import LocationFactor, LocationSearchResult, ZipFactor

__all__ = [
    "NATIONAL_AVERAGE_LABEL",
    "ROOM_MIX_COLUMNS",
    "AssemblyDefinition",
    "AssemblyResult",
    "Brand",
    "BuildingOption",
    "CostTableRow",
    "DataCompletenessReport",
    "DerivedCostBreakdown",
    "DivisionBreakdown",
    "EstimateRequest",
    "IndexStatus",
    "InputBasis",
    "LocationFactor",
    "LocationSearchResult",
    "ProjectStats",
    "RoomMix",
    "ZipFactor",
]
