from datetime import datetime, timezone

import pytest

from core.models import Coordinate, Place, Trip
from infrastructure.active_session import ActiveSession
from infrastructure.file_store import FileStore
from infrastructure.trip_archive import TripArchive


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    return FileStore(tmp_path / "VoyA")


@pytest.fixture
def archive(store):
    return TripArchive(store)


@pytest.fixture
def session(store, archive):
    s = ActiveSession(store, archive)
    s.load()
    return s


@pytest.fixture
def lisbon():
    return Trip(
        city="Lisbon",
        start_date=utc(2025, 6, 1),
        end_date=utc(2025, 6, 5),
        hotel_address="Rua A, 12",
    )


@pytest.fixture
def porto():
    return Trip(
        city="Porto",
        start_date=utc(2025, 7, 10),
        end_date=utc(2025, 7, 12),
        hotel_address="Av. dos Aliados 1",
        hotel_coordinate=Coordinate(41.1496, -8.6109),
    )


@pytest.fixture
def market():
    return Place(name="Time Out Market", category="Food")
