from __future__ import annotations

from pathlib import Path
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap, QResizeEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QVBoxLayout, QWidget
from loguru import logger


class PreviewPane(QWidget):
    """Shows the current photo fitted to the available space, or a message."""

    def __init__(self, parent: QWidget | None, image_service: Any | None = None) -> None:
        super().__init__(parent)
        self._img = image_service
        self._pixmap: QPixmap | None = None

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignCenter)
        self._image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self._image_label.setMinimumSize(200, 200)
        root.addWidget(self._image_label, 1)

        self._message_label = QLabel()
        self._message_label.setAlignment(Qt.AlignCenter)
        self._message_label.setVisible(False)
        root.addWidget(self._message_label)

    # Public API
    def show_image(self, path: str) -> None:
        """Display `path`, or an "unavailable" note when it cannot be decoded."""
        image = None
        if self._img is not None:
            try:
                image = self._img.get_preview(path)
            except OSError as ex:
                logger.warning("Preview failed for {}: {}", path, ex)
        if image is None:
            self._pixmap = None
            self._image_label.clear()
            self.show_message(f"Preview unavailable: {Path(path).suffix.lower()}")
            return

        self._pixmap = QPixmap.fromImage(image)
        self._message_label.setVisible(False)
        self.refit()

    def show_message(self, text: str) -> None:
        if not text:
            self._message_label.setVisible(False)
            return
        self._message_label.setText(text)
        self._message_label.setVisible(True)

    def clear(self) -> None:
        self._pixmap = None
        self._image_label.clear()
        self._message_label.setVisible(False)

    def refit(self) -> None:
        """Scale the current pixmap to the label size, keeping aspect ratio."""
        if self._pixmap is None or self._pixmap.isNull():
            return
        size = self._image_label.size()
        self._image_label.setPixmap(
            self._pixmap.scaled(size, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.refit()
