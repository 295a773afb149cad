"""Reference cost records loaded from the brand cost table."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Room-type columns in the cost table, in display order.
ROOM_MIX_COLUMNS: tuple[str, ...] = ("KS", "QQ", "K1", "ADA")


class CostTableRow(BaseModel):
    """One historical cost record for a brand and size combination.

    ``division_costs`` maps the cost table's own column label
    (e.g. ``"03_Concrete"``) to the dollar amount for that division.
    Only divisions with a parseable, positive amount are present.
    """

    brand: str
    rooms: int = 0
    floors: int = 0
    gsf: float = 0.0
    room_mix: dict[str, int] = Field(default_factory=dict)
    division_costs: dict[str, float] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def classified_rooms(self) -> int:
        """Rooms accounted for by the room-type columns."""
        return sum(self.room_mix.values())

    def room_ratio(self, column: str) -> float:
        """Share of classified rooms that belong to one room type."""
        total = self.classified_rooms
        if total <= 0:
            return 0.0
        return self.room_mix.get(column, 0) / total
