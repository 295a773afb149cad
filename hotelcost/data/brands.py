"""Brand name normalization.

Brand names arrive as free text from forms and voice transcription
("Home2 Suites by Hilton", "tru"). The cost table uses short keys.
"""

from __future__ import annotations

from hotelcost.models.enums import Brand

# Checked in order; first substring hit wins.
_BRAND_ALIASES: tuple[tuple[str, Brand], ...] = (
    ("home2", Brand.HOME2),
    ("tru", Brand.TRU),
    ("hampton", Brand.HAMPTON),
    ("livsmart", Brand.LIVSMART),
)


def normalize_brand(brand: str) -> str:
    """Map free-text brand input to the cost table's brand key.

    Unknown brands are returned unchanged.
    """
    lowered = brand.lower()
    for alias, key in _BRAND_ALIASES:
        if alias in lowered:
            return key.value
    return brand
