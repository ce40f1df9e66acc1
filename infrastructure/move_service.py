"""File move service used for rejecting and restoring photos.

Moves are plain renames when source and destination share a volume. Across
volumes the file is copied to a temporary name next to the destination,
hard-linked into place (which fails if the name was taken meanwhile) and only
then removed from the source. Any failure rolls back so callers never see a
half-moved file.
"""

from __future__ import annotations

import contextlib
import errno
import os
import shutil
import uuid

from loguru import logger


class MoveService:
    """Moves single files without ever overwriting an existing destination."""

    def move(self, source: str, destination: str) -> None:
        """Move `source` to `destination`.

        Raises:
            FileExistsError: If `destination` already exists.
            OSError: For any other failure; the source is left in place.
        """
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, "Destination already exists", destination)

        try:
            os.rename(source, destination)
            logger.debug("Moved {} -> {}", source, destination)
            return
        except OSError as ex:
            if ex.errno != errno.EXDEV:
                raise
            logger.debug("Cross-device move for {}, falling back to copy", source)

        self._copy_then_delete(source, destination)

    def _copy_then_delete(self, source: str, destination: str) -> None:
        """Copy `source` next to `destination`, link into place, remove source."""
        directory, name = os.path.split(destination)
        temp_path = os.path.join(directory, f".{name}.{uuid.uuid4().hex}.partial")
        try:
            shutil.copy2(source, temp_path)
            os.link(temp_path, destination)
        except OSError:
            with contextlib.suppress(OSError):
                os.remove(temp_path)
            raise
        try:
            os.remove(temp_path)
        except OSError as ex:
            logger.warning("Could not remove temporary copy {}: {}", temp_path, ex)

        try:
            os.remove(source)
        except OSError as ex:
            logger.warning("Could not remove {} after copy, rolling back: {}", source, ex)
            with contextlib.suppress(OSError):
                os.remove(destination)
            raise
        logger.debug("Copied and removed {} -> {}", source, destination)
