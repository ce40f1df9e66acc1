"""Error types reported by the review core.

The session never lets these escape its public operations: each one is
attached to a `ReviewOutcome` so the shell can branch on the outcome kind.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for review errors carrying the path involved."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class FolderNotFoundError(ReviewError):
    """The folder to review does not exist or is not a directory."""


class MoveFailedError(ReviewError):
    """A filesystem move failed; `cause` holds the underlying error."""

    def __init__(self, source: str, destination: str, cause: BaseException) -> None:
        super().__init__(f"Move failed: {source} -> {destination}: {cause}", path=source)
        self.source = source
        self.destination = destination
        self.cause = cause


class RestoreTargetMissingError(ReviewError):
    """The rejected file to restore is no longer where it was moved."""


class NameSpaceExhaustedError(ReviewError):
    """No free `{stem}_{i}{ext}` name could be found for a path."""
