"""Genre tag reading for MP3 and FLAC files using mutagen."""

from pathlib import Path
from typing import BinaryIO, Optional

from mutagen import File as MutagenFile
from mutagen.flac import FLAC
from mutagen.mp3 import MP3

from ..exceptions import MetadataError, TraversalError
from ..models.track import Track


class TagReader:
    """Read the genre of an audio file from its embedded tags."""

    def read_genre(self, handle: BinaryIO) -> str:
        """Return the genre stored in an open audio file, or "" if none.

        Raises:
            MetadataError: If the container is unknown or cannot be parsed.
        """
        name = getattr(handle, 'name', '<stream>')
        try:
            mutagen_file = MutagenFile(handle)
        except Exception as e:
            raise MetadataError(f"Failed to read tags from {name}: {e}") from e

        if mutagen_file is None:
            raise MetadataError(f"Unsupported file format: {name}")

        if isinstance(mutagen_file, FLAC):
            genre = TagReader._flac_genre(mutagen_file)
        elif isinstance(mutagen_file, MP3):
            genre = TagReader._id3_genre(mutagen_file)
        else:
            raise MetadataError(f"Unsupported file format: {name}")

        return genre or ""

    def genre_from_path(self, path: Path) -> str:
        """Open path and read its genre; the file is closed before returning."""
        try:
            with open(path, 'rb') as handle:
                return self.read_genre(handle)
        except OSError as e:
            raise TraversalError(f"Cannot open {path}: {e}", path=path) from e

    def read(self, path: Path) -> Track:
        """Open path, read its genre and return a classified Track."""
        track = Track(path=path)
        track.classify(self.genre_from_path(path))
        return track

    @staticmethod
    def _flac_genre(flac_file: FLAC) -> Optional[str]:
        """Genre from Vorbis comments."""
        if not flac_file.tags:
            return None
        values = flac_file.tags.get('GENRE')
        return values[0] if values else None

    @staticmethod
    def _id3_genre(mp3_file: MP3) -> Optional[str]:
        """Genre from the ID3 TCON frame, with ID3v1 numeric genres resolved."""
        if not mp3_file.tags:
            return None
        frame = mp3_file.tags.get('TCON')
        if frame is None:
            return None
        genres = frame.genres
        return genres[0] if genres else None
