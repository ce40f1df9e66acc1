from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from core.services.review_session import ReviewSession
from infrastructure.move_service import MoveService


def write_files(folder: Path, *names: str) -> list[Path]:
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = folder / name
        path.write_bytes(f"image:{name}".encode("utf-8"))
        paths.append(path)
    return paths


@pytest.fixture
def make_files() -> Callable[..., list[Path]]:
    return write_files


@pytest.fixture
def session() -> ReviewSession:
    return ReviewSession(MoveService())
