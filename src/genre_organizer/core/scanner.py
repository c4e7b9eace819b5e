"""Library traversal: find the audio files that still need a genre folder."""

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional
import logging

from ..exceptions import TraversalError

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[TraversalError], None]


def _raise(error: TraversalError) -> None:
    raise error


class LibraryScanner:
    """Walk a library root and yield candidate audio files.

    Directories named ``reserved_dir`` are pruned so the output tree is never
    read back as input. Hidden files and unsupported extensions are skipped.
    Names are visited in sorted order, which makes "first file wins"
    reproducible between runs.
    """

    HIDDEN_PREFIX = "."

    def __init__(self, reserved_dir: str = "Genres",
                 extensions: Iterable[str] = (".mp3", ".flac")):
        self.reserved_dir = reserved_dir
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def is_candidate(self, path: Path) -> bool:
        """Check whether a file name passes the hidden/extension filter."""
        if path.name.startswith(self.HIDDEN_PREFIX):
            return False
        return path.suffix.lower() in self.extensions

    def scan(self, root: Path, on_error: Optional[ErrorHandler] = None) -> Iterator[Path]:
        """Lazily yield candidate files under root.

        Each folder's entries are visited in name order, files and
        subfolders interleaved, and a subfolder is descended into at its
        sorted position.

        Traversal errors are handed to ``on_error``; the default re-raises
        them, ending the walk. A handler that returns skips the unreadable
        directory and the walk goes on.
        """
        yield from self._walk(Path(root), on_error or _raise)

    def _walk(self, folder: Path, handler: ErrorHandler) -> Iterator[Path]:
        try:
            with os.scandir(folder) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            handler(TraversalError(f"Cannot read {folder}: {e.strerror or e}", path=folder))
            return

        for entry in entries:
            path = folder / entry.name
            if entry.is_dir(follow_symlinks=False):
                if entry.name == self.reserved_dir:
                    logger.debug(f"Skipping reserved folder {path}")
                    continue
                yield from self._walk(path, handler)
            elif self.is_candidate(path):
                yield path
            else:
                logger.debug(f"Skipping {path}")
