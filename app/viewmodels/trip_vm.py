from __future__ import annotations

from dataclasses import dataclass

from core.models import Trip
from core.services.itinerary_service import day_count


@dataclass
class TripVM:
    record: Trip
    is_active: bool = False

    @property
    def title(self) -> str:
        return self.record.city

    @property
    def date_range(self) -> str:
        """Short range label such as `Jun 1 - Jun 5, 2025`."""
        start, end = self.record.start_date, self.record.end_date
        if start.year == end.year:
            return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
        return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"

    @property
    def day_count(self) -> int:
        return day_count(self.record)
