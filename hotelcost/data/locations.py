"""Location cost factors: sources, loading, and matching.

Factors come from one of two sources:

- ``CsvLocationSource`` reads a local CSV (id, name, state,
  cost_factor, lat, lng).
- ``SupabaseLocationSource`` reads the ``cities`` table of a Supabase
  project over its REST interface.

Either way the index is built once at startup and never refreshed.
"""

from __future__ import annotations

import csv
import logging
import math
from typing import TYPE_CHECKING, Any, Protocol

import httpx
from pydantic import ValidationError

from hotelcost.data.geo import haversine_miles
from hotelcost.exceptions import DataLoadError, LocationStoreError
from hotelcost.models.diagnostics import IndexStatus
from hotelcost.models.location import LocationFactor, LocationSearchResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)


class LocationSource(Protocol):
    """Anything that can produce raw location records."""

    description: str

    async def fetch(self) -> list[dict[str, Any]]: ...


class CsvLocationSource:
    """Location records from a local CSV file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.description = str(path)

    async def fetch(self) -> list[dict[str, Any]]:
        if not self._path.is_file():
            msg = f"Location file not found: {self._path}"
            raise DataLoadError(msg)
        try:
            with self._path.open(newline="", encoding="utf-8-sig") as f:
                return [
                    {k.strip(): (v or "").strip() for k, v in record.items() if k}
                    for record in csv.DictReader(f)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            msg = f"Could not read location file {self._path}: {exc}"
            raise DataLoadError(msg) from exc


class SupabaseLocationSource:
    """Location records from a Supabase table via PostgREST.

    Args:
        url: Project URL, e.g. ``https://xyz.supabase.co``.
        key: Anon or service key.
        table: Table holding the location rows.
        client: Optional pre-built client (tests inject a mock transport).
    """

    def __init__(
        self,
        url: str,
        key: str,
        table: str = "cities",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self._key = key
        self._client = client
        self.description = f"supabase:{table}"

    async def fetch(self) -> list[dict[str, Any]]:
        headers = {"apikey": self._key, "Authorization": f"Bearer {self._key}"}
        params = {"select": "*"}
        try:
            if self._client is not None:
                response = await self._client.get(self._endpoint, headers=headers, params=params)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(self._endpoint, headers=headers, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            msg = f"Failed to load locations from {self.description}: {exc}"
            raise LocationStoreError(msg) from exc

        try:
            data = response.json()
        except ValueError as exc:
            msg = f"Invalid JSON from {self.description}: {exc}"
            raise LocationStoreError(msg) from exc
        if not isinstance(data, list):
            msg = f"Unexpected response from {self.description}: expected a list of rows"
            raise LocationStoreError(msg)
        return data


def _to_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_location(record: dict[str, Any]) -> LocationFactor | None:
    """Build a LocationFactor from a raw record.

    Coordinates that are missing, unparseable or out of range are
    dropped (the location can still match by name). A missing or zero
    factor reads as the national average; records that still fail
    validation are skipped.
    """
    lat = _to_float(record.get("lat"))
    lng = _to_float(record.get("lng"))
    if lat is None or lng is None or not (-90 <= lat <= 90 and -180 <= lng <= 180):
        lat = lng = None

    factor = _to_float(record.get("cost_factor"))
    try:
        return LocationFactor(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or "").strip(),
            state=str(record.get("state") or "").strip(),
            cost_factor=factor or 1.0,
            lat=lat,
            lng=lng,
        )
    except ValidationError:
        logger.debug("Skipping invalid location record: %r", record)
        return None


class LocationFactorIndex:
    """Resolves a place to its construction cost multiplier.

    Args:
        locations: Pre-built locations. When given, the index is ready
            without calling ``load``.
        source: Source read by ``load``. With no source the index stays
            empty and every lookup falls back to the national average.
    """

    name = "locations"

    def __init__(
        self,
        locations: Iterable[LocationFactor] | None = None,
        *,
        source: LocationSource | None = None,
    ) -> None:
        self._source = source
        self._locations: list[LocationFactor] = list(locations) if locations is not None else []
        self._loaded = locations is not None
        self._error: str | None = None

    @property
    def locations(self) -> list[LocationFactor]:
        return list(self._locations)

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> int:
        """Fetch and parse all location records from the source.

        Source failures are logged and leave the index empty.
        Returns the number of locations loaded.
        """
        if self._source is None:
            if not self._loaded:
                logger.warning(
                    "No location source configured; using national average factors only"
                )
            return len(self._locations)

        try:
            records = await self._source.fetch()
        except DataLoadError as exc:
            logger.error("%s; continuing without location factors", exc)
            self._locations = []
            self._error = str(exc)
            self._loaded = False
            return 0

        skipped = sum(1 for r in records if not isinstance(r, dict))
        if skipped:
            logger.warning(
                "Skipped %d non-object records from %s", skipped, self._source.description
            )
        parsed = (parse_location(r) for r in records if isinstance(r, dict))
        self._locations = [loc for loc in parsed if loc is not None]
        self._loaded = True
        self._error = None
        logger.info(
            "Loaded %d locations from %s", len(self._locations), self._source.description
        )
        return len(self._locations)

    def find_by_name(self, name: str, region: str) -> LocationFactor | None:
        """Exact case-insensitive match on name and region."""
        name_lower = name.strip().lower()
        region_lower = region.strip().lower()
        for loc in self._locations:
            if loc.name.lower() == name_lower and loc.state.lower() == region_lower:
                return loc
        return None

    def find_nearest(self, lat: float, lng: float) -> LocationFactor | None:
        """Closest location with coordinates, by great-circle distance.

        No distance cap: the nearest location is returned however far
        away it is.
        """
        closest: LocationFactor | None = None
        min_distance = float("inf")
        for loc in self._locations:
            if not loc.has_coordinates:
                continue
            distance = haversine_miles(lat, lng, loc.lat, loc.lng)  # type: ignore[arg-type]
            if distance < min_distance:
                min_distance = distance
                closest = loc
        return closest

    def find_best_match(
        self,
        lat: float | None = None,
        lng: float | None = None,
        name: str | None = None,
        region: str | None = None,
    ) -> LocationFactor | None:
        """Resolve a location from a name/region pair or coordinates.

        An explicit name and region take priority over geography.
        Returns None when neither yields a match.
        """
        if not self._locations:
            return None

        if name and region:
            match = self.find_by_name(name, region)
            if match is not None:
                return match

        if lat is not None and lng is not None:
            return self.find_nearest(lat, lng)

        return None

    def search(self, query: str, limit: int = 10) -> list[LocationSearchResult]:
        """Case-insensitive substring search on name or state."""
        q = query.strip().lower()
        hits = [
            loc
            for loc in self._locations
            if q in loc.name.lower() or q in loc.state.lower()
        ]
        return [
            LocationSearchResult(
                zip_code=loc.id,
                city_state_zip=loc.label,
                factor=loc.cost_factor,
            )
            for loc in hits[: max(limit, 0)]
        ]

    def status(self) -> IndexStatus:
        return IndexStatus(
            name=self.name,
            loaded=self._loaded,
            records=len(self._locations),
            source=self._source.description if self._source is not None else None,
            error=self._error,
        )
