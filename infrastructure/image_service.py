"""Preview loading with a small in-memory cache.

Decoding is delegated entirely to Qt's `QImageReader`; formats Qt cannot read
(most camera raw files) simply yield no preview.
"""

from __future__ import annotations

from collections import OrderedDict
import os

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QImage, QImageReader
from loguru import logger


def _cache_key(path: str, side: int) -> tuple[str, int, int, int]:
    """Key previews by path, mtime, size and requested side."""
    try:
        st = os.stat(path)
        return (path, int(st.st_mtime_ns), int(st.st_size), int(side))
    except OSError:
        return (path, 0, 0, int(side))


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[tuple[str, int, int, int], QImage] = OrderedDict()

    def get(self, key: tuple[str, int, int, int]) -> QImage | None:
        """Return cached image for key, moving it to the MRU position."""
        image = self._data.get(key)
        if image is None:
            return None
        self._data.move_to_end(key)
        return image

    def put(self, key: tuple[str, int, int, int], image: QImage) -> None:
        """Insert or update `key`, evicting LRU entries when over capacity."""
        self._data[key] = image
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class ImageService:
    """Loads scaled previews for the review window."""

    def __init__(self, settings: object | None = None) -> None:
        """Read `preview.max_side` and `preview.cache_size` from settings."""
        self.max_side = 2400
        cache_size = 16
        if settings is not None:
            try:
                self.max_side = int(settings.get("preview.max_side", 2400) or 2400)
                cache_size = int(settings.get("preview.cache_size", 16) or 16)
            except (ValueError, TypeError):
                logger.warning("Invalid preview settings, using defaults")
        self._cache = _LRUCache(cache_size)

    def get_preview(self, path: str, max_side: int | None = None) -> QImage | None:
        """Return a preview bounded by `max_side`, or None if Qt cannot decode it."""
        side = int(max_side or self.max_side)
        key = _cache_key(path, side)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        image = self._load(path, side)
        if image is not None:
            self._cache.put(key, image)
        return image

    def _load(self, path: str, side: int) -> QImage | None:
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        size = reader.size()
        if side > 0 and size.isValid():
            w, h = size.width(), size.height()
            if w > side or h > side:
                reader.setScaledSize(QSize(w, h).scaled(side, side, Qt.KeepAspectRatio))
        image = reader.read()
        if image.isNull():
            logger.debug("No preview for {}: {}", path, reader.errorString())
            return None
        return image
