"""Ordered catalog of reviewable images in one folder, with a cursor.

The catalog knows nothing about moving files: it only tracks which entries
are still under review and which one is current. Ordering is a
case-insensitive ordinal comparison on the upper-cased path, with the raw
path as a tie-breaker so the result is deterministic across platforms.
"""

from __future__ import annotations

from collections.abc import Iterable
import os

from core.errors import FolderNotFoundError
from core.models import CatalogEntry

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".cr2",
        ".cr3",
        ".nef",
        ".arw",
        ".dng",
        ".raf",
        ".rw2",
        ".orf",
        ".srw",
        ".pef",
        ".sr2",
        ".nrw",
        ".rwl",
        ".x3f",
        ".3fr",
        ".mef",
        ".mos",
        ".kdc",
        ".erf",
        ".raw",
    }
)

NO_CURSOR = -1


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions and make sure each starts with a dot."""
    result: set[str] = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        result.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(result)


def _fold_case(path: str) -> str:
    # one character at a time; "ß" stays "ß" instead of becoming "SS"
    return "".join(c.upper() if len(c.upper()) == 1 else c for c in path)


def path_sort_key(path: str) -> tuple[str, str]:
    """Sort key: ordinal ignore-case first, raw ordinal as tie-breaker."""
    return (_fold_case(path), path)


class Catalog:
    """Ordered, duplicate-free list of catalog entries plus a cursor."""

    def __init__(self, folder: str | None = None, paths: Iterable[str] = ()) -> None:
        self.folder = folder
        self._entries: list[CatalogEntry] = []
        seen: set[str] = set()
        for p in paths:
            if p in seen:
                continue
            seen.add(p)
            self._entries.append(CatalogEntry(p))
        self._cursor = 0 if self._entries else NO_CURSOR

    @classmethod
    def build(
        cls, folder_path: str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS
    ) -> Catalog:
        """Scan `folder_path` (non-recursively) for files with allowed extensions.

        Args:
            folder_path: Directory to scan.
            extensions: Accepted extensions, matched case-insensitively.

        Raises:
            FolderNotFoundError: If the path is missing, not a directory or cannot
                be listed.
        """
        folder = os.path.abspath(folder_path)
        if not os.path.isdir(folder):
            raise FolderNotFoundError(f"Folder not found: {folder_path}", path=folder_path)

        allowed = normalize_extensions(extensions)
        paths: list[str] = []
        try:
            with os.scandir(folder) as it:
                for entry in it:
                    try:
                        if not entry.is_file():
                            continue
                    except OSError:
                        continue
                    if os.path.splitext(entry.name)[1].lower() in allowed:
                        paths.append(os.path.join(folder, entry.name))
        except OSError as ex:
            raise FolderNotFoundError(
                f"Cannot read folder: {folder_path}: {ex}", path=folder_path
            ) from ex

        paths.sort(key=path_sort_key)
        return cls(folder, paths)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        """Current index, or -1 when the catalog is empty."""
        return self._cursor

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def paths(self) -> list[str]:
        """Entry paths in catalog order (a copy)."""
        return [e.path for e in self._entries]

    def current(self) -> str | None:
        """Return the path under the cursor, or None when empty."""
        if self._cursor == NO_CURSOR:
            return None
        return self._entries[self._cursor].path

    def index_of(self, path: str) -> int:
        """Return the index of `path`, or -1 if it is not in the catalog."""
        for i, entry in enumerate(self._entries):
            if entry.path == path:
                return i
        return NO_CURSOR

    def advance(self) -> bool:
        """Step the cursor forward; return False at the last entry or when empty."""
        if self._cursor == NO_CURSOR or self._cursor >= len(self._entries) - 1:
            return False
        self._cursor += 1
        return True

    def remove_at(self, index: int) -> None:
        """Remove the entry at `index` and clamp the cursor into range.

        The cursor keeps its numeric value, so after removing the current
        entry it points at the one that shifted into its place.
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"catalog index out of range: {index}")
        del self._entries[index]
        if self._cursor >= len(self._entries):
            self._cursor = len(self._entries) - 1  # -1 when empty

    def insert_at(self, index: int, path: str) -> int:
        """Insert `path` at `index` (clamped) and make it current.

        Returns:
            The index the path now occupies. An already present path is not
            inserted twice; the cursor moves to the existing entry instead.
        """
        existing = self.index_of(path)
        if existing != NO_CURSOR:
            self._cursor = existing
            return existing
        position = max(0, min(index, len(self._entries)))
        self._entries.insert(position, CatalogEntry(path))
        self._cursor = position
        return position
