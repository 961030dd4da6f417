"""Per-trip folder archive.

Every trip owns one folder under ``<root>/Trips`` named
``<city>-<startYYYYMMDD>``, holding its own ``trip.json`` and ``places.json``.
Two trips with the same city and start date share a folder; the last writer
wins.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from core.models import Place, Trip
from core.services.interfaces import IFileStore, SaveResult
from infrastructure.json_codec import decode_places, decode_trip, encode_places, encode_trip
from infrastructure.utils import folder_date_stamp, safe_folder_name

TRIPS_DIR = "Trips"
TRIP_FILE = "trip.json"
PLACES_FILE = "places.json"


class TripArchive:
    """Durable record of all trips, independent of which one is active."""

    def __init__(self, store: IFileStore) -> None:
        self._store = store

    @property
    def trips_root(self) -> Path:
        return Path(TRIPS_DIR)

    def folder_for(self, trip: Trip) -> Path:
        """Return the archive folder of `trip` (relative to the store root)."""
        name = f"{trip.city}-{folder_date_stamp(trip.start_date)}"
        return self.trips_root / safe_folder_name(name)

    def save(self, trip: Trip) -> SaveResult:
        """Write `trip.json` into the trip folder; `places.json` is left alone."""
        folder = self.folder_for(trip)
        self._store.ensure_directory(folder)
        return SaveResult([self._store.write_all(folder / TRIP_FILE, encode_trip(trip))])

    def save_all(self, trip: Trip, places: list[Place]) -> SaveResult:
        """Write both the trip record and its full place collection."""
        result = self.save(trip)
        return result.extend(self.save_places_bytes(trip, encode_places(places)))

    def save_places_bytes(self, trip: Trip, data: bytes) -> SaveResult:
        folder = self.folder_for(trip)
        self._store.ensure_directory(folder)
        return SaveResult([self._store.write_all(folder / PLACES_FILE, data)])

    def load_all_trips(self) -> list[Trip]:
        """Return decodable archived trips ordered by start date, most recent first.

        Folders with a missing or corrupt `trip.json` are skipped. Ties keep
        the name order of the folder listing.
        """
        trips: list[Trip] = []
        for child in self._store.list_children(self.trips_root):
            if not child.is_dir():
                continue
            trip_path = child / TRIP_FILE
            trip = decode_trip(self._store.read_all(trip_path), source=str(trip_path))
            if trip is None:
                logger.debug("Skipping archive folder without a readable trip: {}", child)
                continue
            trips.append(trip)
        return sorted(trips, key=lambda t: t.start_date, reverse=True)

    def has_record(self, trip: Trip) -> bool:
        """True when the trip folder holds a readable `trip.json`."""
        path = self.folder_for(trip) / TRIP_FILE
        return decode_trip(self._store.read_all(path), source=str(path)) is not None

    def load_places(self, trip: Trip) -> list[Place]:
        """Return the archived places of `trip`, or [] when absent or corrupt."""
        path = self.folder_for(trip) / PLACES_FILE
        places = decode_places(self._store.read_all(path), source=str(path))
        return places if places is not None else []

    def delete(self, trip: Trip) -> SaveResult:
        """Remove the trip folder recursively; already-absent folders succeed."""
        return SaveResult([self._store.remove(self.folder_for(trip))])
