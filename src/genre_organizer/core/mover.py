"""File operations for relocating tracks into their genre folders."""

import os
from pathlib import Path
import logging

from ..exceptions import FileOperationError
from ..models.placement import Placement

logger = logging.getLogger(__name__)


class FileMover:
    """Execute placements with a same-filesystem rename.

    There is no backup, retry or rollback: a failed rename leaves earlier
    moves of the run in place.
    """

    def move(self, placement: Placement) -> Path:
        """Rename placement.source to placement.destination."""
        try:
            os.rename(placement.source, placement.destination)
        except OSError as e:
            raise FileOperationError(
                f"Failed to move {placement.source} to {placement.destination}: {e}"
            ) from e

        logger.info(f"Moved {placement.source} -> {placement.destination}")
        return placement.destination
