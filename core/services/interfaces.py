"""Core service interfaces and shared data structures.

This module defines the result dataclasses returned by storage operations and
the protocols the session depends on, so the core never imports a concrete
storage backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from core.models import Place, Trip


class StorageWriteError(OSError):
    """Raised for write failures when the write-failure policy is `raise`."""


@dataclass
class WriteResult:
    """Outcome of a single write or delete.

    Attributes:
        path: Target path of the operation.
        success: Whether the target now holds the requested state.
        reason: Failure description when `success` is False.
    """

    path: str
    success: bool
    reason: str = ""


@dataclass
class SaveResult:
    """Aggregated outcome of every write performed by one mutation.

    Attributes:
        writes: Results in the order the writes were attempted.
    """

    writes: list[WriteResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when every write succeeded (vacuously true for no writes)."""
        return all(w.success for w in self.writes)

    @property
    def failed(self) -> list[WriteResult]:
        """Writes that did not succeed."""
        return [w for w in self.writes if not w.success]

    def extend(self, other: SaveResult) -> SaveResult:
        """Append the writes of `other` and return self."""
        self.writes.extend(other.writes)
        return self


class IFileStore(Protocol):
    """Byte-level storage scoped to one private root directory."""

    def ensure_directory(self, path: str | Path = "") -> None:
        """Create `path` and its ancestors; never raise."""
        raise NotImplementedError

    def read_all(self, path: str | Path) -> bytes | None:
        """Return file bytes or None when missing or unreadable."""
        raise NotImplementedError

    def write_all(self, path: str | Path, data: bytes) -> WriteResult:
        """Atomically replace the file at `path` with `data`."""
        raise NotImplementedError

    def remove(self, path: str | Path) -> WriteResult:
        """Remove a file or directory tree; absence is success."""
        raise NotImplementedError

    def list_children(self, path: str | Path = "") -> list[Path]:
        """Return immediate children of `path`, or an empty list."""
        raise NotImplementedError


class ITripArchive(Protocol):
    """Durable record of all trips, independent of the active one."""

    def folder_for(self, trip: Trip) -> Path:
        """Return the archive folder for `trip`."""
        raise NotImplementedError

    def save(self, trip: Trip) -> SaveResult:
        """Write the trip record into its folder."""
        raise NotImplementedError

    def save_all(self, trip: Trip, places: list[Place]) -> SaveResult:
        """Write the trip record and its full place collection."""
        raise NotImplementedError

    def save_places_bytes(self, trip: Trip, data: bytes) -> SaveResult:
        """Write an already-encoded place collection into the trip folder."""
        raise NotImplementedError

    def load_all_trips(self) -> list[Trip]:
        """Return every decodable archived trip, most recent first."""
        raise NotImplementedError

    def has_record(self, trip: Trip) -> bool:
        """Return True when the trip folder holds a readable trip record."""
        raise NotImplementedError

    def load_places(self, trip: Trip) -> list[Place]:
        """Return the archived places of `trip`, or an empty list."""
        raise NotImplementedError

    def delete(self, trip: Trip) -> SaveResult:
        """Remove the trip folder entirely."""
        raise NotImplementedError
