"""Outfit image decoding, thumbnailing, and caching utilities.

Outfits embed raw image bytes. Decoding is deferred until a view asks for a
thumbnail and the result is kept in a small in-memory LRU cache keyed by the
content hash and requested size.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import hashlib
import io
from typing import Any

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError
from pillow_heif import register_heif_opener

# Photos picked on iPhones are usually HEIC
register_heif_opener()

DEFAULT_THUMB_SIZE = 512


def _compute_cache_key(data: bytes, size_key: int) -> str:
    """Compute a stable cache key from the image content and requested side."""
    h = hashlib.sha1(data)
    h.update(f"|{int(size_key)}".encode("ascii"))
    return h.hexdigest()


@dataclass
class _MemCacheItem:
    key: str
    image: Image.Image


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> Image.Image | None:
        """Return cached image for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: Image.Image) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = _MemCacheItem(key, image)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class ImageService:
    """Decode embedded outfit images into bounded thumbnails."""

    def __init__(self, settings: Any | None = None) -> None:
        """Initialize the memory cache and default size from settings."""
        self._mem_cap = 128
        self.default_size = DEFAULT_THUMB_SIZE
        if settings is not None:
            try:
                self._mem_cap = int(settings.get("images.mem_cache", 128) or 128)
                self.default_size = int(
                    settings.get("images.thumbnail_size", DEFAULT_THUMB_SIZE) or DEFAULT_THUMB_SIZE
                )
            except (ValueError, TypeError):
                self._mem_cap = 128
                self.default_size = DEFAULT_THUMB_SIZE
        self._mem_cache = _LRUCache(self._mem_cap)

    @property
    def cached_count(self) -> int:
        return len(self._mem_cache)

    def get_thumbnail(self, data: bytes | None, size: int | None = None) -> Image.Image | None:
        """Return a thumbnail bounded by `size`, or None if `data` is not an image."""
        if not data:
            return None
        side = int(size or self.default_size)
        key = _compute_cache_key(data, side)
        img = self._mem_cache.get(key)
        if img is not None:
            return img
        img = self._load_via_pillow(data, side)
        if img is not None:
            self._mem_cache.put(key, img)
        return img

    def _load_via_pillow(self, data: bytes, requested_side: int) -> Image.Image | None:
        try:
            with Image.open(io.BytesIO(data)) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                im = im.copy()
            if requested_side > 0:
                im.thumbnail((requested_side, requested_side), Image.Resampling.LANCZOS)
            return im
        except (UnidentifiedImageError, OSError, ValueError) as ex:
            logger.debug("Pillow decode failed ({} bytes): {}", len(data), ex)
            return None
