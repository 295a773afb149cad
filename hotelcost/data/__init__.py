"""Reference data layer for the hotelcost estimator."""

from hotelcost.data.assemblies import AssemblyIndex, classify_row, normalize_division
from hotelcost.data.brands import normalize_brand
from hotelcost.data.cost_table import CostTableIndex
from hotelcost.data.locations import (
    CsvLocationSource,
    LocationFactorIndex,
    SupabaseLocationSource,
)

__all__ = [
    "AssemblyIndex",
    "CostTableIndex",
    "CsvLocationSource",
    "LocationFactorIndex",
    "SupabaseLocationSource",
    "classify_row",
    "normalize_brand",
    "normalize_division",
]
