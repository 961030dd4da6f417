"""The active session: current trip, its places, and the global outfits.

One `ActiveSession` instance is created at startup and handed to every UI
collaborator. Each mutation is persisted synchronously before the method
returns. Place mutations are written twice with identical bytes: once to
``<root>/places.json`` and once to the active trip's archive folder (skipped
when no trip is active). Outfits live only in ``<root>/outfits.json``.

Every mutating method returns a `SaveResult` so callers can decide whether to
retry, log or ignore a failed write; the in-memory state always reflects the
attempted change.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from core.models import Outfit, Place, Trip
from core.services.interfaces import IFileStore, ITripArchive, SaveResult
from core.services.itinerary_service import with_assigned_day
from infrastructure.json_codec import (
    decode_outfits,
    decode_places,
    decode_trip,
    encode_outfits,
    encode_places,
    encode_trip,
)
from infrastructure.trip_archive import TRIPS_DIR, TripArchive

CURRENT_TRIP_FILE = "trip.json"
CURRENT_PLACES_FILE = "places.json"
CURRENT_OUTFITS_FILE = "outfits.json"


class ActiveSession:
    """Single mutable "current" view kept in sync with the trip archive."""

    def __init__(self, store: IFileStore, archive: ITripArchive | None = None) -> None:
        """Create a session.

        Args:
            store: File primitives scoped to the application root.
            archive: Trip archive (defaults to a `TripArchive` over `store`).
        """
        self._store = store
        self._archive = archive or TripArchive(store)
        self._trip: Trip | None = None
        self._places: list[Place] = []
        self._outfits: list[Outfit] = []

    @property
    def archive(self) -> ITripArchive:
        return self._archive

    def load(self) -> None:
        """Read the current files; absent or corrupt ones start empty."""
        self._store.ensure_directory()
        self._store.ensure_directory(TRIPS_DIR)
        self._trip = decode_trip(
            self._store.read_all(CURRENT_TRIP_FILE), source=CURRENT_TRIP_FILE
        )
        places = decode_places(
            self._store.read_all(CURRENT_PLACES_FILE), source=CURRENT_PLACES_FILE
        )
        self._places = places if places is not None else []
        outfits = decode_outfits(
            self._store.read_all(CURRENT_OUTFITS_FILE), source=CURRENT_OUTFITS_FILE
        )
        self._outfits = outfits if outfits is not None else []
        logger.info(
            "Session loaded: trip={} places={} outfits={}",
            self._trip.city if self._trip else None,
            len(self._places),
            len(self._outfits),
        )

    # Trip

    def get_active_trip(self) -> Trip | None:
        return self._trip

    def current_trip_folder(self) -> Path | None:
        """Archive folder of the active trip, or None when no trip is active."""
        return self._archive.folder_for(self._trip) if self._trip else None

    def set_active_trip(self, trip: Trip) -> SaveResult:
        """Replace the active trip wholesale.

        With the same id this is an edit: the trip is re-persisted and the
        place collection is untouched. A different id (or no active trip)
        is a switch, see `switch_to_trip`.
        """
        previous = self._trip
        if previous is None or previous.id != trip.id:
            return self.switch_to_trip(trip)
        self._trip = trip
        result = self._write_current_trip()
        if self._archive.folder_for(previous) != self._archive.folder_for(trip):
            # City or start date changed: move the places into the new folder
            logger.info(
                "Trip folder moved: {} -> {}",
                self._archive.folder_for(previous),
                self._archive.folder_for(trip),
            )
            result.extend(self._archive.save_all(trip, self._places))
            result.extend(self._archive.delete(previous))
        else:
            result.extend(self._archive.save(trip))
        return result

    def create_trip(self, trip: Trip) -> SaveResult:
        """Make a brand-new trip active with an empty place collection.

        Passing the active trip again is treated as an edit and keeps its places.
        """
        if self._trip is not None and self._trip.id == trip.id:
            return self.set_active_trip(trip)
        result = SaveResult()
        if self._trip is not None:
            result.extend(self._archive.save_all(self._trip, self._places))
        self._trip = trip
        self._places = []
        result.extend(self._write_current_trip())
        result.extend(self._archive.save_all(trip, self._places))
        result.writes.append(self._store.write_all(CURRENT_PLACES_FILE, encode_places([])))
        logger.info("Created trip {} ({})", trip.city, trip.id)
        return result

    def clear_active_trip(self) -> SaveResult:
        """Unset the active trip; its archive folder is kept."""
        self._trip = None
        return SaveResult([self._store.remove(CURRENT_TRIP_FILE)])

    def switch_to_trip(self, trip: Trip) -> SaveResult:
        """Activate `trip` and replace the places with its archived collection."""
        result = SaveResult()
        outgoing = self._trip
        if outgoing is not None and outgoing.id != trip.id:
            result.extend(self._archive.save_all(outgoing, self._places))
        self._trip = trip
        self._places = self._archive.load_places(trip)
        result.extend(self._write_current_trip())
        result.extend(self._archive.save(trip))
        result.extend(self._persist_places())
        logger.info("Switched to trip {} with {} places", trip.city, len(self._places))
        return result

    def update_trip(self, trip: Trip) -> SaveResult:
        """Persist an edited trip, whether or not it is the active one."""
        if self._trip is not None and self._trip.id == trip.id:
            return self.set_active_trip(trip)
        previous = next((t for t in self._archive.load_all_trips() if t.id == trip.id), None)
        if previous is None or self._archive.folder_for(previous) == self._archive.folder_for(trip):
            return self._archive.save(trip)
        result = self._archive.save_all(trip, self._archive.load_places(previous))
        return result.extend(self._archive.delete(previous))

    def list_all_trips(self) -> list[Trip]:
        return self._archive.load_all_trips()

    def delete_trip(self, trip: Trip) -> SaveResult:
        """Delete a trip's archive folder; deleting the active trip also unsets it."""
        result = self._archive.delete(trip)
        if self._trip is not None and self._trip.id == trip.id:
            self._trip = None
            self._places = []
            result.writes.append(self._store.remove(CURRENT_TRIP_FILE))
            result.extend(self._persist_places())
        logger.info("Deleted trip {} ({})", trip.city, trip.id)
        return result

    # Places

    def get_places(self) -> list[Place]:
        return list(self._places)

    def add_place(self, place: Place) -> SaveResult:
        self._places.append(place)
        return self._persist_places()

    def update_place(self, place: Place) -> SaveResult:
        """Replace the place with the same id."""
        for i, existing in enumerate(self._places):
            if existing.id == place.id:
                self._places[i] = place
                return self._persist_places()
        logger.warning("Place {} not found, update skipped", place.id)
        return SaveResult()

    def remove_places(self, ids: Iterable[str]) -> SaveResult:
        removed = set(ids)
        kept = [p for p in self._places if p.id not in removed]
        if len(kept) == len(self._places):
            return SaveResult()
        self._places = kept
        return self._persist_places()

    def remove_places_at(self, indices: Iterable[int]) -> SaveResult:
        """Remove places by position in the current collection."""
        drop = set(indices)
        out_of_range = [i for i in drop if not 0 <= i < len(self._places)]
        if out_of_range:
            logger.warning("Ignoring out-of-range place indices: {}", sorted(out_of_range))
        kept = [p for i, p in enumerate(self._places) if i not in drop]
        if len(kept) == len(self._places):
            return SaveResult()
        self._places = kept
        return self._persist_places()

    def assign_day(self, place_id: str, day: int | None) -> SaveResult:
        """Move a place to `day` (None unassigns it)."""
        for place in self._places:
            if place.id == place_id:
                return self.update_place(with_assigned_day(place, day))
        logger.warning("Place {} not found, day assignment skipped", place_id)
        return SaveResult()

    # Outfits

    def get_outfits(self) -> list[Outfit]:
        return list(self._outfits)

    def add_outfit(self, outfit: Outfit) -> SaveResult:
        self._outfits.append(outfit)
        return self._persist_outfits()

    def update_outfit(self, outfit: Outfit) -> SaveResult:
        for i, existing in enumerate(self._outfits):
            if existing.id == outfit.id:
                self._outfits[i] = outfit
                return self._persist_outfits()
        logger.warning("Outfit {} not found, update skipped", outfit.id)
        return SaveResult()

    def remove_outfit(self, outfit_id: str) -> SaveResult:
        kept = [o for o in self._outfits if o.id != outfit_id]
        if len(kept) == len(self._outfits):
            return SaveResult()
        self._outfits = kept
        return self._persist_outfits()

    # Persistence helpers

    def _write_current_trip(self) -> SaveResult:
        if self._trip is None:
            return SaveResult([self._store.remove(CURRENT_TRIP_FILE)])
        return SaveResult([self._store.write_all(CURRENT_TRIP_FILE, encode_trip(self._trip))])

    def _persist_places(self) -> SaveResult:
        data = encode_places(self._places)
        result = SaveResult([self._store.write_all(CURRENT_PLACES_FILE, data)])
        if self._trip is not None:
            if not self._archive.has_record(self._trip):
                # Archive folder lost its trip.json; restore it so the trip stays listed
                result.extend(self._archive.save(self._trip))
            result.extend(self._archive.save_places_bytes(self._trip, data))
        return result

    def _persist_outfits(self) -> SaveResult:
        data = encode_outfits(self._outfits)
        return SaveResult([self._store.write_all(CURRENT_OUTFITS_FILE, data)])
