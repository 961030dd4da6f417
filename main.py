from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.viewmodels.main_vm import MainVM
from infrastructure.active_session import ActiveSession
from infrastructure.file_store import FileStore
from infrastructure.image_service import ImageService
from infrastructure.logging import get_log_directory, init_logging
from infrastructure.settings import JsonSettings, StorageSettings


BASE_DIR = Path(__file__).parent


def build_session(settings: JsonSettings | None) -> ActiveSession:
    """Create the file store and session for `settings` and load current data."""
    storage = StorageSettings.from_settings(settings)
    store = FileStore.from_settings(storage)
    session = ActiveSession(store)
    session.load()
    return session


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    storage = StorageSettings.from_settings(settings)
    log_dir = settings.get("logging.dir") or get_log_directory(storage.root_dir)
    init_logging(str(log_dir), level=str(settings.get("logging.level", "INFO")))
    logger.info("Data root: {}", storage.root_dir)

    session = build_session(settings)
    vm = MainVM(session, image_service=ImageService(settings))

    trips = vm.refresh_trips()
    if not trips:
        print("No trips yet.")
    for t in trips:
        marker = "*" if t.is_active else " "
        print(f"{marker} {t.title:<20} {t.date_range} ({t.day_count} days)")

    text = vm.export_itinerary()
    if text:
        print()
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
