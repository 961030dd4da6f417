"""ViewModel for the trip picker, itinerary, and outfit screens."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.viewmodels.outfit_vm import OutfitVM
from app.viewmodels.place_vm import PlaceVM
from app.viewmodels.trip_vm import TripVM
from core.models import Trip
from core.services.interfaces import SaveResult
from core.services.itinerary_service import group_by_day, places_for_day
from infrastructure.active_session import ActiveSession
from infrastructure.export_service import ExportService
from infrastructure.image_service import ImageService


class MainVM:
    """Main application view-model.

    Mediates between the `ActiveSession` and UI models. It holds no state of
    its own beyond the last trip listing; all data comes from the session.
    """

    def __init__(
        self,
        session: ActiveSession,
        exporter: ExportService | None = None,
        image_service: ImageService | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            session: The application's single active session.
            exporter: Itinerary exporter (defaults to `ExportService`).
            image_service: Thumbnail provider for outfits.
        """
        self._session = session
        self._exporter = exporter or ExportService()
        self._images = image_service or ImageService()
        self.trips: list[TripVM] = []

    @property
    def session(self) -> ActiveSession:
        return self._session

    def refresh_trips(self) -> list[TripVM]:
        """Reload the archived trips for the trip picker, most recent first."""
        active = self._session.get_active_trip()
        active_id = active.id if active else None
        self.trips = [
            TripVM(record=t, is_active=(t.id == active_id))
            for t in self._session.list_all_trips()
        ]
        logger.info("Trip list refreshed: {} trips", len(self.trips))
        return self.trips

    def select_trip(self, trip: Trip) -> SaveResult:
        """Make `trip` active and refresh the picker check marks."""
        result = self._session.switch_to_trip(trip)
        self.refresh_trips()
        return result

    def places(self) -> list[PlaceVM]:
        return [PlaceVM(p) for p in self._session.get_places()]

    def places_for_day(self, day: int) -> list[PlaceVM]:
        return [PlaceVM(p) for p in places_for_day(self._session.get_places(), day)]

    def itinerary(self) -> dict[int, list[PlaceVM]]:
        """Places per day for the active trip; empty when no trip is active."""
        trip = self._session.get_active_trip()
        if trip is None:
            return {}
        grouped = group_by_day(trip, self._session.get_places())
        return {day: [PlaceVM(p) for p in items] for day, items in grouped.items()}

    def outfits(self) -> list[OutfitVM]:
        return [OutfitVM(o, self._images) for o in self._session.get_outfits()]

    def export_itinerary(self) -> str | None:
        """Markdown itinerary of the active trip, or None without one."""
        trip = self._session.get_active_trip()
        if trip is None:
            return None
        return self._exporter.export_itinerary(trip, self._session.get_places())

    def export_html(self, path: str | Path) -> bool:
        """Write the active trip's HTML itinerary to `path`.

        Returns False without an active trip or when the file cannot be written.
        """
        trip = self._session.get_active_trip()
        if trip is None:
            logger.warning("HTML export skipped: no active trip")
            return False
        out = Path(path)
        data = self._exporter.export_html(trip, self._session.get_places())
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(data)
        except OSError as ex:
            logger.error("Itinerary export failed for {}: {}", out, ex)
            return False
        logger.info("Itinerary exported: {}", out)
        return True
