"""Day-by-day itinerary helpers for a trip's places.

Places without an assigned day are shown on the first day (day 0). Day
indices are positions in `trip_days(trip)`.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

from core.models import Place, Trip


def trip_days(trip: Trip) -> list[date]:
    """Return one calendar date per trip day, start and end inclusive."""
    start = trip.start_date.date()
    end = trip.end_date.date()
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def day_count(trip: Trip) -> int:
    return len(trip_days(trip))


def effective_day(place: Place) -> int:
    """Day a place is shown on; unassigned places land on day 0."""
    return place.assigned_day if place.assigned_day is not None else 0


def places_for_day(places: list[Place], day: int) -> list[Place]:
    """Places shown on `day`, keeping collection order."""
    return [p for p in places if effective_day(p) == day]


def group_by_day(trip: Trip, places: list[Place]) -> dict[int, list[Place]]:
    """Map every trip day index to its places.

    Places assigned beyond the last day (e.g. after the trip was shortened)
    are kept under their own index so nothing disappears from the itinerary.
    """
    grouped: dict[int, list[Place]] = {i: [] for i in range(day_count(trip))}
    for place in places:
        grouped.setdefault(effective_day(place), []).append(place)
    return dict(sorted(grouped.items()))


def with_assigned_day(place: Place, day: int | None) -> Place:
    """Return a copy of `place` assigned to `day`."""
    if day is not None and day < 0:
        raise ValueError(f"Day index must not be negative: {day}")
    return replace(place, assigned_day=day)
