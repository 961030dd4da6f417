"""JSON persistence codec for trips, places, and outfits.

Field names and order are fixed so that files written by one version stay
readable by later ones. Optional values that are absent are omitted instead of
being written as null; collections are always written, even when empty. The
optional coordinate is flattened into two scalar fields only here.

Decoders never raise: a malformed payload is logged and returned as `None`,
leaving the caller to choose between "absent" and an empty default.
"""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
import json
from typing import Any

from loguru import logger

from core.models import Coordinate, Outfit, Place, Trip
from infrastructure.utils import format_iso_datetime, parse_iso_datetime

# RecursionError: deeply nested arrays or objects in a corrupt file
_DECODE_ERRORS = (ValueError, TypeError, KeyError, binascii.Error, RecursionError)


def _dumps(payload: Any) -> bytes:
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def _loads(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))


def _require_str(obj: dict, key: str) -> str:
    value = obj[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _optional_str(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _optional_number(obj: dict, key: str) -> float | None:
    value = obj.get(key)
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _read_coordinate(obj: dict, lat_key: str, lon_key: str) -> Coordinate | None:
    """Return a coordinate only when both halves are present."""
    lat = _optional_number(obj, lat_key)
    lon = _optional_number(obj, lon_key)
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


def _require_datetime(obj: dict, key: str) -> datetime:
    dt = parse_iso_datetime(obj[key])
    if dt is None:
        raise ValueError(f"{key} is not an ISO-8601 timestamp: {obj[key]!r}")
    return dt


def _require_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def _require_array(payload: Any) -> list:
    if not isinstance(payload, list):
        raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
    return payload


# Trip


def trip_to_dict(trip: Trip) -> dict[str, Any]:
    """Map a `Trip` onto its stable JSON field set."""
    out: dict[str, Any] = {
        "id": trip.id,
        "city": trip.city,
        "startDate": format_iso_datetime(trip.start_date),
        "endDate": format_iso_datetime(trip.end_date),
        "hotelAddress": trip.hotel_address,
    }
    if trip.hotel_coordinate is not None:
        out["hotelLatitude"] = float(trip.hotel_coordinate.latitude)
        out["hotelLongitude"] = float(trip.hotel_coordinate.longitude)
    return out


def trip_from_dict(obj: dict) -> Trip:
    """Build a `Trip` from its JSON object; raises on malformed input."""
    obj = _require_object(obj)
    return Trip(
        id=_require_str(obj, "id"),
        city=_require_str(obj, "city"),
        start_date=_require_datetime(obj, "startDate"),
        end_date=_require_datetime(obj, "endDate"),
        hotel_address=_require_str(obj, "hotelAddress"),
        hotel_coordinate=_read_coordinate(obj, "hotelLatitude", "hotelLongitude"),
    )


# Place


def place_to_dict(place: Place) -> dict[str, Any]:
    """Map a `Place` onto its stable JSON field set."""
    out: dict[str, Any] = {"id": place.id, "name": place.name}
    if place.url is not None:
        out["url"] = place.url
    out["category"] = place.category
    out["notes"] = place.notes
    if place.assigned_day is not None:
        out["assignedDay"] = int(place.assigned_day)
    if place.coordinate is not None:
        out["latitude"] = float(place.coordinate.latitude)
        out["longitude"] = float(place.coordinate.longitude)
    return out


def place_from_dict(obj: dict) -> Place:
    """Build a `Place` from its JSON object; raises on malformed input."""
    obj = _require_object(obj)
    day = obj.get("assignedDay")
    if day is not None and (isinstance(day, bool) or not isinstance(day, int)):
        raise TypeError(f"assignedDay must be an integer, got {day!r}")
    return Place(
        id=_require_str(obj, "id"),
        name=_require_str(obj, "name"),
        url=_optional_str(obj, "url"),
        category=_require_str(obj, "category"),
        notes=_require_str(obj, "notes"),
        coordinate=_read_coordinate(obj, "latitude", "longitude"),
        assigned_day=day,
    )


# Outfit


def outfit_to_dict(outfit: Outfit) -> dict[str, Any]:
    """Map an `Outfit` onto its stable JSON field set; image bytes as base64."""
    out: dict[str, Any] = {
        "id": outfit.id,
        "imageFileName": outfit.image_file_name,
        "caption": outfit.caption,
    }
    if outfit.pinterest_url is not None:
        out["pinterestURL"] = outfit.pinterest_url
    if outfit.image_data is not None:
        out["imageData"] = base64.b64encode(outfit.image_data).decode("ascii")
    return out


def outfit_from_dict(obj: dict) -> Outfit:
    """Build an `Outfit` from its JSON object; raises on malformed input."""
    obj = _require_object(obj)
    raw = _optional_str(obj, "imageData")
    return Outfit(
        id=_require_str(obj, "id"),
        image_file_name=_require_str(obj, "imageFileName"),
        caption=_require_str(obj, "caption"),
        pinterest_url=_optional_str(obj, "pinterestURL"),
        image_data=base64.b64decode(raw, validate=True) if raw is not None else None,
    )


# Public byte-level API


def encode_trip(trip: Trip) -> bytes:
    return _dumps(trip_to_dict(trip))


def decode_trip(data: bytes | None, source: str = "") -> Trip | None:
    """Decode a trip record; `None` if `data` is absent or malformed."""
    if data is None:
        return None
    try:
        return trip_from_dict(_loads(data))
    except _DECODE_ERRORS as ex:
        logger.warning("Trip decode failed {}: {}", source or "<bytes>", ex)
        return None


def encode_place(place: Place) -> bytes:
    return _dumps(place_to_dict(place))


def decode_place(data: bytes | None, source: str = "") -> Place | None:
    if data is None:
        return None
    try:
        return place_from_dict(_loads(data))
    except _DECODE_ERRORS as ex:
        logger.warning("Place decode failed {}: {}", source or "<bytes>", ex)
        return None


def encode_places(places: list[Place]) -> bytes:
    return _dumps([place_to_dict(p) for p in places])


def decode_places(data: bytes | None, source: str = "") -> list[Place] | None:
    """Decode a place array; one bad element makes the whole file unreadable."""
    if data is None:
        return None
    try:
        return [place_from_dict(item) for item in _require_array(_loads(data))]
    except _DECODE_ERRORS as ex:
        logger.warning("Places decode failed {}: {}", source or "<bytes>", ex)
        return None


def encode_outfit(outfit: Outfit) -> bytes:
    return _dumps(outfit_to_dict(outfit))


def decode_outfit(data: bytes | None, source: str = "") -> Outfit | None:
    if data is None:
        return None
    try:
        return outfit_from_dict(_loads(data))
    except _DECODE_ERRORS as ex:
        logger.warning("Outfit decode failed {}: {}", source or "<bytes>", ex)
        return None


def encode_outfits(outfits: list[Outfit]) -> bytes:
    return _dumps([outfit_to_dict(o) for o in outfits])


def decode_outfits(data: bytes | None, source: str = "") -> list[Outfit] | None:
    if data is None:
        return None
    try:
        return [outfit_from_dict(item) for item in _require_array(_loads(data))]
    except _DECODE_ERRORS as ex:
        logger.warning("Outfits decode failed {}: {}", source or "<bytes>", ex)
        return None
