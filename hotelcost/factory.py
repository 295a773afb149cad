"""Factory functions for creating pre-configured HotelCostService instances."""

from __future__ import annotations

import logging

from hotelcost.config import Settings
from hotelcost.data.assemblies import AssemblyIndex
from hotelcost.data.cost_table import CostTableIndex
from hotelcost.data.locations import (
    CsvLocationSource,
    LocationFactorIndex,
    LocationSource,
    SupabaseLocationSource,
)
from hotelcost.service import HotelCostService

logger = logging.getLogger(__name__)


def create_location_source(settings: Settings) -> LocationSource:
    """Pick the location store: Supabase when credentials are set, else CSV."""
    if settings.has_location_store:
        return SupabaseLocationSource(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.cities_table,
        )
    logger.warning(
        "Supabase credentials missing; reading location factors from %s",
        settings.cities_path,
    )
    return CsvLocationSource(settings.cities_path)


def create_default_service(settings: Settings | None = None) -> HotelCostService:
    """Create a HotelCostService wired to the configured reference data.

    This is the recommended way to create the service. Indexes are not
    loaded until ``await service.initialize()``.

    Example::

        from hotelcost import create_default_service, EstimateRequest

        service = create_default_service()
        await service.initialize()
        result = await service.get_cost_data(
            EstimateRequest(brand="Home2 Suites", rooms=100, floors=4)
        )
    """
    settings = settings or Settings.from_env()
    return HotelCostService(
        cost_table=CostTableIndex(path=settings.cost_table_path),
        locations=LocationFactorIndex(source=create_location_source(settings)),
        assemblies=AssemblyIndex(path=settings.assemblies_path),
    )
