"""ViewModel mediating between the review window and the review session."""

from __future__ import annotations

from loguru import logger

from core.errors import MoveFailedError
from core.models import ViewState
from core.services.interfaces import OutcomeKind, ReviewOutcome
from core.services.review_session import ReviewSession

EMPTY_FOLDER_MESSAGE = "No supported images in this folder."
ALL_REVIEWED_MESSAGE = "All photos reviewed."
NO_FOLDER_MESSAGE = "Select a folder to start reviewing."


class ReviewVM:
    """Review view-model.

    Holds the single session handle for the window. The window never keeps
    its own cursor or history; it re-renders from `view` after every call.
    """

    def __init__(self, session: ReviewSession) -> None:
        """Create a ReviewVM.

        Args:
            session: Session that performs the actual review operations.
        """
        self._session = session
        self.last_folder: str | None = None

    @property
    def session(self) -> ReviewSession:
        return self._session

    @property
    def view(self) -> ViewState:
        """Freshly derived view state."""
        return self._session.view()

    @property
    def has_folder(self) -> bool:
        return self._session.folder is not None

    @property
    def folder_text(self) -> str:
        return self._session.folder or ""

    @property
    def reject_dir_text(self) -> str:
        """Label describing where rejected files go."""
        reject_dir = self._session.reject_dir
        return f"Move to: {reject_dir}" if reject_dir else ""

    @property
    def status_text(self) -> str:
        return self.view.status_text

    @property
    def file_name(self) -> str:
        return self.view.current_name

    @property
    def empty_message(self) -> str:
        """Message to show when nothing is left to display."""
        if not self.has_folder:
            return NO_FOLDER_MESSAGE
        view = self.view
        if not view.is_empty:
            return ""
        return EMPTY_FOLDER_MESSAGE if view.initial_count == 0 else ALL_REVIEWED_MESSAGE

    def open_folder(self, path: str) -> ReviewOutcome:
        """Open `path` for review and remember it for the folder picker."""
        outcome = self._session.open(path)
        if outcome.ok:
            self.last_folder = self._session.folder
            logger.info(
                "Opened folder: {} | images={}", self._session.folder, outcome.view.total_count
            )
        self._log_outcome("open", outcome)
        return outcome

    def keep(self) -> ReviewOutcome:
        outcome = self._session.keep()
        self._log_outcome("keep", outcome)
        return outcome

    def reject(self) -> ReviewOutcome:
        outcome = self._session.reject()
        if outcome.ok and outcome.record is not None:
            logger.info(
                "Rejected: {} -> {}", outcome.record.original_path, outcome.record.moved_path
            )
        self._log_outcome("reject", outcome)
        return outcome

    def undo(self) -> ReviewOutcome:
        outcome = self._session.undo()
        if outcome.ok and outcome.restored_path is not None:
            logger.info("Restored: {}", outcome.restored_path)
        self._log_outcome("undo", outcome)
        return outcome

    def error_message(self, outcome: ReviewOutcome) -> str:
        """User-facing text for a failed outcome; empty for successful ones."""
        error = outcome.error
        if outcome.kind is OutcomeKind.OK or error is None:
            return ""
        if outcome.kind is OutcomeKind.FOLDER_NOT_FOUND:
            if error.__cause__ is not None:
                return str(error)
            return f"Folder not found: {error.path}"
        if outcome.kind is OutcomeKind.RESTORE_TARGET_MISSING:
            return "The rejected file could not be found, so it cannot be restored."
        if outcome.kind is OutcomeKind.NAME_SPACE_EXHAUSTED:
            return "Could not create a unique file name."
        if isinstance(error, MoveFailedError):
            action = "Restore" if outcome.record is not None else "Move"
            return f"{action} failed: {error.cause}"
        return str(error)

    def _log_outcome(self, action: str, outcome: ReviewOutcome) -> None:
        for path in outcome.pruned:
            logger.warning("{}: dropped missing file from review: {}", action, path)
        if not outcome.ok:
            logger.error("{} failed ({}): {}", action, outcome.kind.value, outcome.error)
