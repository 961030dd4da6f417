"""
UI/view constants centralized for reuse across view modules.

Categories are stored as free-form strings; this closed list only drives the
picker, colors and icons. Unknown categories fall back to
`UNKNOWN_CATEGORY_COLOR` and `UNKNOWN_CATEGORY_ICON`.
"""

from __future__ import annotations

from enum import Enum


class PlaceCategory(str, Enum):
    """Categories offered by the place picker."""

    FOOD = "Food"
    SHOP = "Shop"
    MUSEUM = "Museum"
    NEIGHBORHOOD = "Neighborhood"
    FITNESS = "Fitness"


CATEGORY_COLORS: dict[PlaceCategory, str] = {
    PlaceCategory.FOOD: "#FF9500",  # orange
    PlaceCategory.SHOP: "#AF52DE",  # purple
    PlaceCategory.MUSEUM: "#007AFF",  # blue
    PlaceCategory.NEIGHBORHOOD: "#34C759",  # green
    PlaceCategory.FITNESS: "#FF3B30",  # red
}
UNKNOWN_CATEGORY_COLOR: str = "#8E8E93"  # gray

CATEGORY_ICONS: dict[PlaceCategory, str] = {
    PlaceCategory.FOOD: "fork.knife",
    PlaceCategory.SHOP: "bag",
    PlaceCategory.MUSEUM: "building.columns",
    PlaceCategory.NEIGHBORHOOD: "house",
    PlaceCategory.FITNESS: "figure.strengthtraining.traditional",
}
UNKNOWN_CATEGORY_ICON: str = "mappin"


def parse_category(value: str) -> PlaceCategory | None:
    """Map a stored category string to a known category (case-insensitive)."""
    needle = (value or "").strip().lower()
    for cat in PlaceCategory:
        if cat.value.lower() == needle:
            return cat
    return None


def category_color(value: str) -> str:
    """Return the display color for a stored category string."""
    cat = parse_category(value)
    return CATEGORY_COLORS[cat] if cat is not None else UNKNOWN_CATEGORY_COLOR


def category_icon(value: str) -> str:
    """Return the symbol name for a stored category string."""
    cat = parse_category(value)
    return CATEGORY_ICONS[cat] if cat is not None else UNKNOWN_CATEGORY_ICON
