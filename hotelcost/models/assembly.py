"""Assembly (line item) models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hotelcost.models.enums import InputBasis


class ProjectStats(BaseModel):
    """Project statistics that turn input-basis values into quantities."""

    gsf: float = Field(ge=0)
    floors: int = Field(ge=0)
    total_units: int = Field(ge=0)


class AssemblyDefinition(BaseModel):
    """One priceable line item within a construction division.

    ``input_basis`` keeps the raw text from the source file;
    ``pct_price`` is the item's share of the division cost as a 0-1
    fraction. Shares within a division are not required to sum to 1.
    """

    division: str
    name: str
    description: str = ""
    input_basis: str
    input_value: float
    pct_price: float

    model_config = {"frozen": True}

    @property
    def basis(self) -> InputBasis:
        return InputBasis.classify(self.input_basis)


class AssemblyResult(BaseModel):
    """A priced line item derived for a specific project."""

    name: str
    description: str
    quantity: int
    unit: str
    unit_cost: float
    total_cost: float
