"""Parametric hotel construction cost estimator.

Usage::

    from hotelcost import create_default_service, EstimateRequest

    service = create_default_service()
    await service.initialize()
    result = await service.get_cost_data(
        EstimateRequest(brand="Home2 Suites", rooms=100, floors=4, lat=39.29, lng=-76.61)
    )
"""

from hotelcost.data.assemblies import AssemblyIndex
from hotelcost.data.cost_table import CostTableIndex
from hotelcost.data.locations import LocationFactorIndex
from hotelcost.engine import CostDerivationEngine
from hotelcost.factory import create_default_service
from hotelcost.models.assembly import AssemblyDefinition, AssemblyResult, ProjectStats
from hotelcost.models.cost_table import CostTableRow
from hotelcost.models.diagnostics import DataCompletenessReport
from hotelcost.models.enums import Brand, InputBasis
from hotelcost.models.estimate import (
    BuildingOption,
    DerivedCostBreakdown,
    DivisionBreakdown,
    EstimateRequest,
    RoomMix,
)
from hotelcost.models.location import LocationFactor
from hotelcost.service import HotelCostService

__all__ = [
    "AssemblyDefinition",
    "AssemblyIndex",
    "AssemblyResult",
    "Brand",
    "BuildingOption",
    "CostDerivationEngine",
    "CostTableIndex",
    "CostTableRow",
    "DataCompletenessReport",
    "DerivedCostBreakdown",
    "DivisionBreakdown",
    "EstimateRequest",
    "HotelCostService",
    "InputBasis",
    "LocationFactor",
    "LocationFactorIndex",
    "ProjectStats",
    "RoomMix",
    "create_default_service",
]
