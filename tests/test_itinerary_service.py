from datetime import date

import pytest

from core.models import Place
from core.services.itinerary_service import (
    day_count,
    group_by_day,
    places_for_day,
    trip_days,
    with_assigned_day,
)


def test_trip_days_inclusive(lisbon):
    days = trip_days(lisbon)
    assert days[0] == date(2025, 6, 1)
    assert days[-1] == date(2025, 6, 5)
    assert day_count(lisbon) == 5


def test_unassigned_places_show_on_day_zero():
    a = Place(name="A", category="Food")
    b = Place(name="B", category="Shop", assigned_day=0)
    c = Place(name="C", category="Museum", assigned_day=2)
    assert places_for_day([a, b, c], 0) == [a, b]
    assert places_for_day([a, b, c], 2) == [c]
    assert places_for_day([a, b, c], 1) == []


def test_group_by_day_keeps_out_of_range(lisbon):
    late = Place(name="Late", category="Food", assigned_day=9)
    first = Place(name="First", category="Food")
    grouped = group_by_day(lisbon, [late, first])
    assert list(grouped) == [0, 1, 2, 3, 4, 9]
    assert grouped[0] == [first]
    assert grouped[9] == [late]


def test_with_assigned_day_copies():
    place = Place(name="A", category="Food")
    moved = with_assigned_day(place, 3)
    assert moved.assigned_day == 3
    assert moved.id == place.id
    assert place.assigned_day is None
    assert with_assigned_day(moved, None).assigned_day is None
    with pytest.raises(ValueError):
        with_assigned_day(place, -1)
