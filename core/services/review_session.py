"""Review session: keep/reject/undo over a folder catalog.

The session owns the catalog, the undo history and the reject directory. It
performs no logging and never raises for expected filesystem conditions;
every public operation returns a `ReviewOutcome` whose view state is derived
freshly from the catalog and history.
"""

from __future__ import annotations

from collections.abc import Iterable
import os

from core.errors import (
    FolderNotFoundError,
    MoveFailedError,
    NameSpaceExhaustedError,
    RestoreTargetMissingError,
)
from core.models import MoveRecord, ViewState
from core.services.catalog import SUPPORTED_EXTENSIONS, Catalog
from core.services.interfaces import FileMover, OutcomeKind, ReviewOutcome

REJECT_DIR_NAME = "_rejected"
MAX_UNIQUE_ATTEMPTS = 9999


def unique_path(candidate: str) -> str:
    """Return `candidate` if free, else the first free `{stem}_{i}{ext}` sibling.

    Raises:
        NameSpaceExhaustedError: If `_1` .. `_9999` are all taken.
    """
    if not os.path.exists(candidate):
        return candidate

    directory, name = os.path.split(candidate)
    stem, ext = os.path.splitext(name)
    for i in range(1, MAX_UNIQUE_ATTEMPTS + 1):
        path = os.path.join(directory, f"{stem}_{i}{ext}")
        if not os.path.exists(path):
            return path

    raise NameSpaceExhaustedError(f"Could not create a unique file name for {candidate}", candidate)


class ReviewSession:
    """State machine behind the review window.

    Only one caller drives a session; operations are synchronous and each
    runs to completion before the next starts.
    """

    def __init__(
        self,
        mover: FileMover,
        extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
    ) -> None:
        """Create an idle session with an empty catalog.

        Args:
            mover: Collaborator that performs the actual file moves.
            extensions: Accepted image extensions used when opening folders.
        """
        self._mover = mover
        self._extensions = frozenset(extensions)
        self._catalog = Catalog()
        self._history: list[MoveRecord] = []
        self._folder: str | None = None
        self._reject_dir: str | None = None
        self._initial_count = 0

    # Queries

    @property
    def folder(self) -> str | None:
        return self._folder

    @property
    def reject_dir(self) -> str | None:
        """`<folder>/_rejected`; may not exist until the first reject."""
        return self._reject_dir

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        """Undo history, oldest first."""
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def view(self) -> ViewState:
        """Derive the current view state."""
        cursor = self._catalog.cursor
        return ViewState(
            total_count=len(self._catalog),
            position=cursor + 1 if cursor >= 0 else 0,
            current_path=self._catalog.current(),
            can_undo=self.can_undo,
            is_empty=self._catalog.is_empty,
            initial_count=self._initial_count,
        )

    # Operations

    def open(self, folder_path: str) -> ReviewOutcome:
        """Scan `folder_path` and start a fresh review, discarding history."""
        try:
            catalog = Catalog.build(folder_path, self._extensions)
        except FolderNotFoundError as ex:
            return self._outcome(OutcomeKind.FOLDER_NOT_FOUND, error=ex)

        self._catalog = catalog
        self._history.clear()
        self._folder = catalog.folder
        self._reject_dir = os.path.join(catalog.folder or folder_path, REJECT_DIR_NAME)
        self._initial_count = len(catalog)
        return self._outcome(pruned=self._prune_missing_current())

    def keep(self) -> ReviewOutcome:
        """Leave the current file in place and advance to the next one."""
        if self._catalog.is_empty:
            return self._outcome()
        self._catalog.advance()
        return self._outcome(pruned=self._prune_missing_current())

    def reject(self) -> ReviewOutcome:
        """Move the current file into the reject directory."""
        current = self._catalog.current()
        if current is None or self._reject_dir is None:
            return self._outcome()

        index = self._catalog.cursor
        if not os.path.isfile(current):
            self._catalog.remove_at(index)
            pruned = [current] + self._prune_missing_current()
            return self._outcome(pruned=pruned)

        try:
            os.makedirs(self._reject_dir, exist_ok=True)
            destination = unique_path(os.path.join(self._reject_dir, os.path.basename(current)))
        except NameSpaceExhaustedError as ex:
            return self._outcome(OutcomeKind.NAME_SPACE_EXHAUSTED, error=ex)
        except OSError as ex:
            error = MoveFailedError(current, self._reject_dir, ex)
            return self._outcome(OutcomeKind.MOVE_FAILED, error=error)

        try:
            self._mover.move(current, destination)
        except OSError as ex:
            error = MoveFailedError(current, destination, ex)
            return self._outcome(OutcomeKind.MOVE_FAILED, error=error)

        record = MoveRecord(original_path=current, moved_path=destination, original_index=index)
        self._history.append(record)
        self._catalog.remove_at(index)
        return self._outcome(record=record, pruned=self._prune_missing_current())

    def undo(self) -> ReviewOutcome:
        """Move the most recently rejected file back and make it current.

        The history record is consumed whether or not the restore succeeds.
        """
        if not self._history:
            return self._outcome()

        record = self._history.pop()
        if not os.path.isfile(record.moved_path):
            error = RestoreTargetMissingError(
                f"Rejected file not found: {record.moved_path}", record.moved_path
            )
            return self._outcome(OutcomeKind.RESTORE_TARGET_MISSING, error=error, record=record)

        try:
            restore_path = unique_path(record.original_path)
        except NameSpaceExhaustedError as ex:
            return self._outcome(OutcomeKind.NAME_SPACE_EXHAUSTED, error=ex, record=record)

        try:
            self._mover.move(record.moved_path, restore_path)
        except OSError as ex:
            error = MoveFailedError(record.moved_path, restore_path, ex)
            return self._outcome(OutcomeKind.MOVE_FAILED, error=error, record=record)

        self._catalog.insert_at(record.original_index, restore_path)
        return self._outcome(record=record, restored_path=restore_path)

    # Internal helpers

    def _prune_missing_current(self) -> list[str]:
        """Drop current entries whose files vanished until one exists or none remain."""
        pruned: list[str] = []
        current = self._catalog.current()
        while current is not None and not os.path.isfile(current):
            self._catalog.remove_at(self._catalog.cursor)
            pruned.append(current)
            current = self._catalog.current()
        return pruned

    def _outcome(self, kind: OutcomeKind = OutcomeKind.OK, **kwargs) -> ReviewOutcome:
        return ReviewOutcome(view=self.view(), kind=kind, **kwargs)
