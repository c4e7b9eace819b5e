"""Placement resolution: decide which genre folder a track belongs in.

The filesystem is the only record of earlier placements. A track whose
file name already exists in its bucket is sent to the duplicate folder,
so the first file seen for a (bucket, name) pair keeps the primary slot.
File contents are never compared, and a later duplicate replaces an
earlier one of the same name in the duplicate folder.

Callers must not run two resolvers against the same tree concurrently;
bucket creation and the existence check are not atomic together.
"""

import os
import re
from pathlib import Path
from typing import List
import logging

from ..exceptions import FileOperationError, InvalidGenreError
from ..models.config import GenreNamePolicy
from ..models.placement import Placement, PlacementAction
from ..models.track import Track

logger = logging.getLogger(__name__)

NO_GENRE = "No Genre"
DUPLICATE = "Duplicate"

# First word character after start-of-string or any non-word character.
_WORD_START = re.compile(r'(^|\W)(\w)')

_REPLACEMENTS = {
    '/': '_',
    '\\': '_',
    ':': ' -',
    '|': '-',
    '"': "'",
    '?': '',
    '*': '',
    '<': '',
    '>': '',
}
_UNSAFE = re.compile('[' + re.escape(''.join(_REPLACEMENTS)) + '\x00]')


def title_case(text: str) -> str:
    """Uppercase the first letter of every word, leaving the rest alone.

    >>> title_case("hip hop")
    'Hip Hop'
    >>> title_case("r&b")
    'R&B'
    """
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), text)


class PlacementResolver:
    """Compute the destination of a track under the genres root."""

    def __init__(self, genres_root: Path,
                 name_policy: GenreNamePolicy = GenreNamePolicy.FLATTEN,
                 no_genre_dir: str = NO_GENRE,
                 duplicate_dir: str = DUPLICATE):
        self.genres_root = genres_root
        self.name_policy = name_policy
        self.no_genre_dir = no_genre_dir
        self.duplicate_dir = duplicate_dir

    @property
    def duplicate_folder(self) -> Path:
        return self.genres_root / self.duplicate_dir

    def normalize_genre(self, raw: str) -> str:
        """Title-case a raw genre tag; empty tags map to the no-genre bucket."""
        genre = (raw or "").strip()
        if not genre:
            return self.no_genre_dir
        return title_case(genre)

    def bucket_name(self, raw: str) -> str:
        """Folder name for a raw genre, after applying the name policy."""
        name = self.normalize_genre(raw)
        if not _UNSAFE.search(name):
            return self._checked(name, raw)

        if self.name_policy is GenreNamePolicy.REJECT:
            raise InvalidGenreError(f"Genre {raw!r} cannot be used as a folder name")

        cleaned = name.replace('\x00', '')
        for char, replacement in _REPLACEMENTS.items():
            cleaned = cleaned.replace(char, replacement)
        cleaned = re.sub(r'\s+', ' ', cleaned).strip()
        if not cleaned:
            return self.no_genre_dir
        return self._checked(cleaned, raw)

    def resolve(self, track: Track) -> Placement:
        """Decide where track goes, creating bucket folders as needed."""
        bucket = self.bucket_name(track.genre or "")
        bucket_path = self.genres_root / bucket
        created: List[Path] = []

        if self._ensure_folder(bucket_path):
            created.append(bucket_path)

        if not self._exists(bucket_path / track.filename):
            return Placement(
                source=track.path,
                destination=bucket_path / track.filename,
                bucket=bucket,
                action=PlacementAction.MOVE,
                created_folders=tuple(created),
            )

        if self._ensure_folder(self.duplicate_folder):
            created.append(self.duplicate_folder)

        destination = self.duplicate_folder / track.filename
        if self._exists(destination):
            logger.warning(f"Replacing earlier duplicate {destination} with {track.path}")

        logger.debug(f"{track.filename} already in {bucket_path}, routing to {self.duplicate_folder}")
        return Placement(
            source=track.path,
            destination=destination,
            bucket=bucket,
            action=PlacementAction.DUPLICATE,
            created_folders=tuple(created),
        )

    @staticmethod
    def _checked(name: str, raw: str) -> str:
        if set(name) == {'.'}:
            raise InvalidGenreError(f"Genre {raw!r} cannot be used as a folder name")
        return name

    @staticmethod
    def _ensure_folder(folder: Path) -> bool:
        """Create folder if missing; return True when it was created."""
        try:
            if folder.is_dir():
                return False
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create folder {folder}: {e}") from e
        logger.info(f"Created folder {folder}")
        return True

    @staticmethod
    def _exists(path: Path) -> bool:
        """Existence check that treats anything but "not found" as an error."""
        try:
            os.lstat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileOperationError(f"Failed to check {path}: {e}") from e
        return True
