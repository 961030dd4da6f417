"""Lightweight view model wrapper around `Place`."""

from __future__ import annotations

from dataclasses import dataclass

from app.views.constants import category_color, category_icon, parse_category
from core.models import Place
from core.services.itinerary_service import effective_day


@dataclass
class PlaceVM:
    """Expose convenient properties for bindings/templates."""

    record: Place

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def category(self) -> str:
        """Stored category text, unchanged even when unknown."""
        return self.record.category

    @property
    def is_known_category(self) -> bool:
        return parse_category(self.record.category) is not None

    @property
    def color(self) -> str:
        """Hex color for the category badge."""
        return category_color(self.record.category)

    @property
    def icon(self) -> str:
        return category_icon(self.record.category)

    @property
    def day(self) -> int:
        """Day the place is shown on (0 when unassigned)."""
        return effective_day(self.record)

    @property
    def has_location(self) -> bool:
        return self.record.coordinate is not None
