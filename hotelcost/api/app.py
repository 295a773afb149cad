"""FastAPI application: create_app factory with /api/hilton endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import AliasChoices, BaseModel, Field

from hotelcost.models.estimate import EstimateRequest

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from hotelcost.config import Settings
    from hotelcost.service import HotelCostService

API_VERSION = "0.1.0"


class CalculateBody(BaseModel):
    """Request body for POST /api/hilton/calculate.

    Everything is optional here so missing required fields can be
    answered with a 400 rather than a validation error.
    """

    brand: str | None = None
    # Checked by the calculate endpoint, which answers 400 for bad sizes
    rooms: Any = None
    floors: Any = None
    location_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("locationName", "location_name", "city"),
    )
    region: str | None = Field(default=None, validation_alias=AliasChoices("region", "state"))
    lat: float | None = None
    lng: float | None = None
    zip_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("zipCode", "zip_code"),
    )


def _positive_int(value: Any) -> int | None:
    """Whole number above zero from a JSON number or numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        return int(value) if value.isdigit() and int(value) > 0 else None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return None


def create_app(
    *,
    service: HotelCostService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    service
        Optional pre-built service for dependency injection (e.g. tests).
        If not provided, one is created with ``create_default_service``.
    settings
        Optional settings used for the default service and CORS origins.
        Read from the environment when not provided.
    """
    if settings is None:
        from hotelcost.config import Settings

        settings = Settings.from_env()

    if service is None:
        from hotelcost.factory import create_default_service

        service = create_default_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.service.initialize()
        yield

    app = FastAPI(title="Hotel Cost Estimator", version=API_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject fakes
    app.state.service = service

    def _get_service() -> HotelCostService:
        svc: HotelCostService = app.state.service
        return svc

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": API_VERSION,
            "initialized": _get_service().is_initialized,
        }

    # ------------------------------------------------------------------
    # POST /api/hilton/calculate
    # ------------------------------------------------------------------

    @app.post("/api/hilton/calculate")
    async def calculate(body: CalculateBody) -> dict[str, Any]:
        if not body.brand or not body.rooms or not body.floors:
            raise HTTPException(
                status_code=400,
                detail="Missing required fields: brand, rooms, floors",
            )
        rooms = _positive_int(body.rooms)
        floors = _positive_int(body.floors)
        if rooms is None or floors is None:
            raise HTTPException(
                status_code=400,
                detail="rooms and floors must be positive integers",
            )

        request = EstimateRequest(
            brand=body.brand,
            rooms=rooms,
            floors=floors,
            location_name=body.location_name,
            region=body.region,
            lat=body.lat,
            lng=body.lng,
            zip_code=body.zip_code,
        )
        result = await _get_service().get_cost_data(request)

        payload = result.model_dump(mode="json")
        payload["summary"] = result.to_summary_dict()
        return payload

    # ------------------------------------------------------------------
    # Location lookups
    # ------------------------------------------------------------------

    @app.get("/api/hilton/zip/search/{query}")
    def search_zip(query: str, limit: int = 10) -> list[dict[str, Any]]:
        results = _get_service().search_locations(query, limit)
        return [r.model_dump(mode="json") for r in results]

    @app.get("/api/hilton/zip/{zip_code}")
    def zip_factor(zip_code: str) -> dict[str, Any]:
        return _get_service().zip_factor(zip_code).model_dump(mode="json")

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    @app.get("/api/hilton/brands")
    async def brands() -> list[str]:
        return await _get_service().brands_available()

    @app.get("/api/hilton/options/{brand}")
    async def options(brand: str) -> list[dict[str, int]]:
        opts = await _get_service().available_options(brand)
        return [o.model_dump() for o in opts]

    @app.get("/api/hilton/diagnostics")
    def diagnostics() -> dict[str, Any]:
        return _get_service().diagnostics().model_dump(mode="json")

    return app
