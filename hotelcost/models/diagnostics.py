"""Data completeness report models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexStatus(BaseModel):
    """Load state of one reference data index."""

    name: str
    loaded: bool
    records: int
    source: str | None = None
    error: str | None = None


class DataCompletenessReport(BaseModel):
    """What reference data is loaded, and which lookups came back empty.

    Missing data never fails a request; this report is how operators
    see the gaps that were silently degraded around.
    """

    initialized: bool
    indexes: list[IndexStatus] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    divisions: list[str] = Field(default_factory=list)
    brand_misses: dict[str, int] = Field(default_factory=dict)
    unmapped_divisions: dict[str, int] = Field(default_factory=dict)
    empty_divisions: dict[str, int] = Field(default_factory=dict)
    location_misses: int = 0

    @property
    def is_complete(self) -> bool:
        return self.initialized and all(i.loaded and i.records > 0 for i in self.indexes)
