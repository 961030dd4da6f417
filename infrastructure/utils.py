"""Utilities for timestamp parsing/formatting and folder-name stamps.

This module centralizes date handling so the codec and the trip archive share
a single behavior. Parsing is best-effort and will not raise; callers should
expect `None` when a value cannot be read.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from loguru import logger

from core.models import as_utc

ISO_DT_FMT = "%Y-%m-%dT%H:%M:%SZ"
FOLDER_DATE_FMT = "%Y%m%d"


def parse_iso_datetime(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime; None on failure."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    try:
        return datetime.strptime(text, ISO_DT_FMT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass
    # Accept offsets and fractional seconds written by other tools
    try:
        return as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError as ex:
        logger.debug("Invalid ISO timestamp {!r}: {}", value, ex)
        return None


def format_iso_datetime(dt: datetime | date) -> str:
    """Format `dt` as a sortable UTC timestamp with second precision."""
    return as_utc(dt).strftime(ISO_DT_FMT)


def folder_date_stamp(dt: datetime | date) -> str:
    """Return the `yyyyMMdd` stamp used in archive folder names."""
    return as_utc(dt).strftime(FOLDER_DATE_FMT)


def safe_folder_name(name: str) -> str:
    """Make `name` usable as a single folder name below the archive root.

    Path separators and NUL become `_` and leading dots and spaces are stripped,
    so the result never nests or escapes its parent.
    """
    text = name
    for sep in ("/", "\\", "\x00"):
        text = text.replace(sep, "_")
    text = text.strip().lstrip(". ")
    return text or "_"
