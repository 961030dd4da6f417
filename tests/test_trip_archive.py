import json
from pathlib import Path

from conftest import utc

from core.models import Trip
from infrastructure.json_codec import encode_trip
from infrastructure.utils import safe_folder_name


def test_folder_for_is_deterministic(archive, lisbon):
    first = archive.folder_for(lisbon)
    assert first == Path("Trips/Lisbon-20250601")
    assert archive.folder_for(lisbon) == first
    twin = Trip(city="Lisbon", start_date=utc(2025, 6, 1), end_date=utc(2025, 6, 9))
    assert archive.folder_for(twin) == first


def test_save_writes_trip_only(archive, store, lisbon):
    assert archive.save(lisbon).success
    folder = archive.folder_for(lisbon)
    assert store.read_all(folder / "trip.json") == encode_trip(lisbon)
    assert store.read_all(folder / "places.json") is None


def test_save_all_writes_places(archive, store, lisbon, market):
    result = archive.save_all(lisbon, [market])
    assert result.success
    assert len(result.writes) == 2
    assert archive.load_places(lisbon) == [market]


def test_load_places_absent_or_corrupt_is_empty(archive, store, lisbon):
    assert archive.load_places(lisbon) == []
    store.write_all(archive.folder_for(lisbon) / "places.json", b"[{broken")
    assert archive.load_places(lisbon) == []


def test_load_all_trips_sorted_and_skips_bad_folders(archive, store, lisbon, porto):
    older = Trip(city="Madrid", start_date=utc(2024, 3, 1), end_date=utc(2024, 3, 2))
    for trip in (lisbon, older, porto):
        archive.save(trip)
    store.ensure_directory("Trips/Empty-20240101")
    store.write_all("Trips/Broken-20240101/trip.json", b"not json")
    store.write_all("Trips/stray.txt", b"x")

    trips = archive.load_all_trips()
    assert [t.city for t in trips] == ["Porto", "Lisbon", "Madrid"]


def test_load_all_trips_without_root(archive):
    assert archive.load_all_trips() == []


def test_delete_removes_folder_and_is_idempotent(archive, store, lisbon, market):
    archive.save_all(lisbon, [market])
    assert archive.delete(lisbon).success
    assert not store.resolve(archive.folder_for(lisbon)).exists()
    assert archive.delete(lisbon).success
    assert archive.load_all_trips() == []


def test_folder_collision_last_writer_wins(archive, store, lisbon):
    twin = Trip(city="Lisbon", start_date=utc(2025, 6, 1), end_date=utc(2025, 6, 2))
    archive.save(lisbon)
    archive.save(twin)
    data = json.loads(store.read_all(archive.folder_for(lisbon) / "trip.json"))
    assert data["id"] == twin.id
    assert [t.id for t in archive.load_all_trips()] == [twin.id]


def test_lisbon_scenario_files(archive, store, lisbon):
    archive.save_all(lisbon, [])
    folder = store.root / "Trips" / "Lisbon-20250601"
    trip_json = json.loads((folder / "trip.json").read_text(encoding="utf-8"))
    assert "hotelLatitude" not in trip_json
    assert "hotelLongitude" not in trip_json
    assert trip_json["hotelAddress"] == "Rua A, 12"
    assert (folder / "places.json").read_bytes() == b"[]"
    assert archive.load_places(lisbon) == []


def test_safe_folder_name_keeps_a_single_component():
    assert safe_folder_name("Lisbon-20250601") == "Lisbon-20250601"
    assert safe_folder_name("Rio / Búzios-20250601") == "Rio _ Búzios-20250601"
    assert safe_folder_name("..\\..\\x") == "_.._x"
    assert safe_folder_name("../../escaped") == "_.._escaped"
    assert safe_folder_name("..") == "_"
    assert safe_folder_name("a\x00b") == "a_b"


def test_city_with_separators_stays_under_trips(archive, store):
    trip = Trip(city="../../escaped", start_date=utc(2025, 6, 1), end_date=utc(2025, 6, 2))
    folder = archive.folder_for(trip)
    assert folder.parent == Path("Trips")
    assert folder == archive.folder_for(trip)
    assert archive.save(trip).success
    assert (store.root / folder / "trip.json").is_file()
    assert [t.id for t in archive.load_all_trips()] == [trip.id]

    nested = Trip(city="Rio / Búzios", start_date=utc(2025, 6, 1), end_date=utc(2025, 6, 2))
    archive.save(nested)
    assert archive.folder_for(nested) == Path("Trips/Rio _ Búzios-20250601")
    assert {t.city for t in archive.load_all_trips()} == {"../../escaped", "Rio / Búzios"}


def test_has_record(archive, store, lisbon):
    assert not archive.has_record(lisbon)
    archive.save(lisbon)
    assert archive.has_record(lisbon)
    store.write_all(archive.folder_for(lisbon) / "trip.json", b"{broken")
    assert not archive.has_record(lisbon)
