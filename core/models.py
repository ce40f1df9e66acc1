"""Core domain models for the review catalog, undo history and view state."""

from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class CatalogEntry:
    """A file believed to be a reviewable image, identified by absolute path."""

    path: str

    @property
    def name(self) -> str:
        """Base name of the file path."""
        return os.path.basename(self.path)


@dataclass(frozen=True)
class MoveRecord:
    """A completed rejection: where the file came from and where it went."""

    original_path: str
    moved_path: str
    original_index: int


@dataclass(frozen=True)
class ViewState:
    """Snapshot of what the shell should display after every operation.

    Attributes:
        total_count: Entries currently in the catalog.
        position: 1-based cursor position, or 0 when the catalog is empty.
        current_path: Path under the cursor, if any.
        can_undo: Whether the undo history holds at least one record.
        is_empty: Whether the catalog has no entries left.
        initial_count: Entries found when the folder was opened.
    """

    total_count: int
    position: int
    current_path: str | None
    can_undo: bool
    is_empty: bool
    initial_count: int = 0

    @property
    def current_name(self) -> str:
        """Base name of the current file, empty when nothing is selected."""
        return os.path.basename(self.current_path) if self.current_path else ""

    @property
    def status_text(self) -> str:
        return f"{self.position} / {self.total_count}"
