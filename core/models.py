"""Core domain models for trips, places, and outfits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import uuid


def new_id() -> str:
    """Return a fresh opaque record identifier."""
    return str(uuid.uuid4()).upper()


def as_utc(value: datetime | date) -> datetime:
    """Normalize `value` to an aware UTC datetime.

    Naive datetimes and plain dates are taken to already be in UTC.
    Microseconds are dropped to match the stored form.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True)
class Coordinate:
    """A geographic (latitude, longitude) pair."""

    latitude: float
    longitude: float


@dataclass
class Trip:
    """A single trip: destination, date range and accommodation."""

    city: str
    start_date: datetime
    end_date: datetime
    hotel_address: str = ""
    hotel_coordinate: Coordinate | None = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.start_date = as_utc(self.start_date)
        self.end_date = as_utc(self.end_date)
        if self.end_date < self.start_date:
            raise ValueError(
                f"Trip end date {self.end_date} is before start date {self.start_date}"
            )


@dataclass
class Place:
    """A place to visit, owned by exactly one trip."""

    name: str
    category: str
    notes: str = ""
    url: str | None = None
    coordinate: Coordinate | None = None
    # Day index within the owning trip; None shows on day 0
    assigned_day: int | None = None
    id: str = field(default_factory=new_id)


@dataclass
class Outfit:
    """Outfit inspiration; not scoped to any trip."""

    image_file_name: str = ""
    caption: str = ""
    pinterest_url: str | None = None
    image_data: bytes | None = None
    id: str = field(default_factory=new_id)
