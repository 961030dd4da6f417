import os

import pytest

from core.services.interfaces import StorageWriteError
from infrastructure.file_store import FileStore


def test_root_is_created_lazily(tmp_path):
    root = tmp_path / "root"
    store = FileStore(root)
    assert not root.exists()
    store.ensure_directory()
    store.ensure_directory()
    assert root.is_dir()


def test_read_missing_returns_none(store):
    assert store.read_all("nope.json") is None
    assert store.read_all("Trips") is None


def test_write_then_read(store):
    result = store.write_all("a/b/c.json", b"[1]")
    assert result.success
    assert store.read_all("a/b/c.json") == b"[1]"


def test_write_replaces_and_leaves_no_temp_files(store):
    store.write_all("x.json", b"old")
    store.write_all("x.json", b"new content")
    assert store.read_all("x.json") == b"new content"
    assert [p.name for p in store.list_children("")] == ["x.json"]


def test_failed_write_keeps_previous_content(store, monkeypatch):
    store.write_all("x.json", b"previous")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    result = store.write_all("x.json", b"half")
    assert not result.success
    assert "disk full" in result.reason
    monkeypatch.undo()
    assert store.read_all("x.json") == b"previous"
    assert [p.name for p in store.list_children("")] == ["x.json"]


def test_raise_policy_propagates(tmp_path, monkeypatch):
    store = FileStore(tmp_path, write_failure_policy="raise")

    def boom(src, dst):
        raise PermissionError("denied")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(StorageWriteError):
        store.write_all("x.json", b"{}")


def test_unknown_policy_rejected(tmp_path):
    with pytest.raises(ValueError):
        FileStore(tmp_path, write_failure_policy="retry")


def test_remove_is_idempotent_and_recursive(store):
    store.write_all("Trips/Lisbon-20250601/trip.json", b"{}")
    store.write_all("Trips/Lisbon-20250601/places.json", b"[]")
    assert store.remove("Trips/Lisbon-20250601").success
    assert not store.resolve("Trips/Lisbon-20250601").exists()
    assert store.remove("Trips/Lisbon-20250601").success
    assert store.remove("missing.json").success


def test_remove_uses_recycle_bin_when_configured(tmp_path, monkeypatch):
    sent = []
    monkeypatch.setattr("infrastructure.file_store.send2trash", sent.append)
    store = FileStore(tmp_path, use_recycle_bin=True)
    store.write_all("t/trip.json", b"{}")
    assert store.remove("t").success
    assert sent == [str(tmp_path / "t")]


def test_list_children_sorted_or_empty(store):
    assert store.list_children("Trips") == []
    for name in ("b", "a", "c"):
        store.ensure_directory(f"Trips/{name}")
    assert [p.name for p in store.list_children("Trips")] == ["a", "b", "c"]


def test_absolute_paths_are_kept(store):
    target = store.root / "abs.json"
    store.write_all(target, b"1")
    assert store.read_all("abs.json") == b"1"
