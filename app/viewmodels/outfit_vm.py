"""View model for an outfit with lazily decoded image."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.models import Outfit
from infrastructure.image_service import ImageService


@dataclass
class OutfitVM:
    """Expose display properties; the image is decoded on first access only."""

    record: Outfit
    image_service: ImageService
    _decoded: bool = field(default=False, init=False, repr=False)
    _thumbnail: Any = field(default=None, init=False, repr=False)

    @property
    def caption(self) -> str:
        return self.record.caption

    @property
    def has_image(self) -> bool:
        return bool(self.record.image_data)

    @property
    def link(self) -> str | None:
        """External Pinterest link, if any."""
        return self.record.pinterest_url or None

    @property
    def thumbnail(self) -> Any:
        """Pillow image for the embedded bytes, or None."""
        if not self._decoded:
            self._thumbnail = self.image_service.get_thumbnail(self.record.image_data)
            self._decoded = True
        return self._thumbnail
