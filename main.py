from __future__ import annotations

import os
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.review_vm import ReviewVM
from app.views.main_window import ReviewWindow
from core.services.catalog import SUPPORTED_EXTENSIONS, normalize_extensions
from core.services.review_session import ReviewSession
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.move_service import MoveService
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def _parse_extensions(settings: JsonSettings) -> frozenset[str]:
    # Expect a list like: [".jpg", ".png", "cr2", ...]
    raw = settings.get("catalog.extensions", [])
    if isinstance(raw, list):
        extensions = normalize_extensions(str(item) for item in raw)
        if extensions:
            return extensions
    logger.warning("catalog.extensions missing or invalid, using built-in list")
    return SUPPORTED_EXTENSIONS


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = init_logging(
        settings.get("logging.dir"), str(settings.get("logging.level", "INFO") or "INFO")
    )
    logger.info("Starting Photo Culler | settings={}", settings.path)

    app = QApplication(sys.argv)

    session = ReviewSession(MoveService(), extensions=_parse_extensions(settings))
    vm = ReviewVM(session)
    win = ReviewWindow(
        vm=vm, image_service=ImageService(settings), settings=settings, log_dir=str(log_dir)
    )

    args = app.arguments()[1:]
    if args and os.path.isdir(args[0]):
        win.open_folder(args[0])

    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
