"""Location cost factor models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LocationFactor(BaseModel):
    """A construction cost multiplier tied to a named place.

    Factors are relative to the national average (1.00).
    """

    id: str
    name: str
    state: str
    cost_factor: float = Field(gt=0)
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)

    model_config = {"frozen": True}

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @property
    def label(self) -> str:
        return f"{self.name}, {self.state}"


class LocationSearchResult(BaseModel):
    """A location matched by free-text search, shaped for autocomplete."""

    zip_code: str
    city_state_zip: str
    factor: float


class ZipFactor(BaseModel):
    """Cost factor resolved for a ZIP code."""

    factor: float
    zip_code: str
    city_state_zip: str
