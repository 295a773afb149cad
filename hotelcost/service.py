"""Hotel cost service: owns the reference indexes and their lifecycle."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hotelcost.data.diagnostics import ZeroMatchLog
from hotelcost.engine import CostDerivationEngine
from hotelcost.models.diagnostics import DataCompletenessReport
from hotelcost.models.location import ZipFactor

if TYPE_CHECKING:
    from hotelcost.data.assemblies import AssemblyIndex
    from hotelcost.data.cost_table import CostTableIndex
    from hotelcost.data.locations import LocationFactorIndex
    from hotelcost.models.estimate import BuildingOption, DerivedCostBreakdown, EstimateRequest
    from hotelcost.models.location import LocationSearchResult

logger = logging.getLogger(__name__)


class HotelCostService:
    """Entry point for the HTTP layer.

    Indexes are loaded once by ``initialize``; repeated calls are
    no-ops. Startup I/O failures leave the affected index empty rather
    than stopping the process. After startup every call is a read-only,
    in-memory computation.
    """

    def __init__(
        self,
        cost_table: CostTableIndex,
        locations: LocationFactorIndex,
        assemblies: AssemblyIndex,
    ) -> None:
        self._cost_table = cost_table
        self._locations = locations
        self._assemblies = assemblies
        self._zero_matches = ZeroMatchLog()
        self._assemblies.attach_zero_match_log(self._zero_matches)
        self._engine = CostDerivationEngine(
            cost_table, locations, assemblies, zero_matches=self._zero_matches
        )
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Load every index. Safe to call more than once."""
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            logger.info("Initializing hotel cost service")
            self._cost_table.load()
            await self._locations.load()
            self._assemblies.load()
            self._initialized = True

    async def get_cost_data(self, request: EstimateRequest) -> DerivedCostBreakdown:
        """Estimate one hotel, initializing first if needed."""
        if not self._initialized:
            await self.initialize()
        return self._engine.estimate(request)

    async def brands_available(self) -> list[str]:
        if not self._initialized:
            await self.initialize()
        return self._cost_table.brands()

    async def available_options(self, brand: str) -> list[BuildingOption]:
        """Rooms/floors combinations with reference data for ``brand``."""
        if not self._initialized:
            await self.initialize()
        return self._cost_table.options(brand)

    def search_locations(self, query: str, limit: int = 10) -> list[LocationSearchResult]:
        """Location autocomplete. Empty until the service is initialized."""
        if not self._initialized:
            return []
        return self._locations.search(query, limit)

    def zip_factor(self, zip_code: str) -> ZipFactor:
        """Best-effort factor for a ZIP code.

        There is no ZIP-level table; callers should send coordinates.
        """
        return ZipFactor(factor=1.0, zip_code=zip_code, city_state_zip="N/A")

    def diagnostics(self) -> DataCompletenessReport:
        """Which reference data is loaded and which lookups came back empty."""
        return DataCompletenessReport(
            initialized=self._initialized,
            indexes=[
                self._cost_table.status(),
                self._locations.status(),
                self._assemblies.status(),
            ],
            brands=self._cost_table.brands(),
            divisions=self._assemblies.divisions(),
            **self._zero_matches.snapshot(),
        )
