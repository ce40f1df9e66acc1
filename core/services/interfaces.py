"""Core service interfaces and shared data structures.

This module defines the outcome value returned by every review operation and
the file-moving collaborator the session depends on, so that the core stays
independent of the infrastructure and UI layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from core.errors import ReviewError
from core.models import MoveRecord, ViewState


class OutcomeKind(str, Enum):
    """Kind of result produced by a review operation."""

    OK = "ok"
    FOLDER_NOT_FOUND = "folder-not-found"
    MOVE_FAILED = "move-failed"
    RESTORE_TARGET_MISSING = "restore-target-missing"
    NAME_SPACE_EXHAUSTED = "name-space-exhausted"


@dataclass
class ReviewOutcome:
    """Outcome of a single session call.

    Attributes:
        view: Freshly derived view state after the call.
        kind: Whether the call succeeded and, if not, why.
        error: The error instance for non-OK outcomes.
        pruned: Catalog paths dropped because their files vanished.
        record: The move record created by a reject or consumed by an undo.
        restored_path: Where an undo put the file back, when it succeeded.
    """

    view: ViewState
    kind: OutcomeKind = OutcomeKind.OK
    error: ReviewError | None = None
    pruned: list[str] = field(default_factory=list)
    record: MoveRecord | None = None
    restored_path: str | None = None

    @property
    def ok(self) -> bool:
        """True when the call did not fail."""
        return self.kind is OutcomeKind.OK


class FileMover(Protocol):
    """Moves a single file, raising `OSError` on any failure."""

    def move(self, source: str, destination: str) -> None:
        """Move `source` to `destination`; `destination` must not exist."""
        ...
