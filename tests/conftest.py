"""Shared fixtures for genre organizer tests."""

from pathlib import Path

import pytest
from mutagen.flac import FLAC

from genre_organizer.core.metadata import TagReader
from genre_organizer.exceptions import MetadataError
from genre_organizer.models.config import OrganizerConfig

CORRUPT = b"corrupt"

# fLaC marker and a single STREAMINFO block: 44.1 kHz, 2 channels, 16 bit, no frames
FLAC_HEADER = (
    b"fLaC"
    b"\x80\x00\x00\x22"
    b"\x10\x00\x10\x00"
    b"\x00\x00\x00\x00\x00\x00"
    b"\x0a\xc4\x42\xf0"
    b"\x00\x00\x00\x00"
    + bytes(16)
)


class FakeTagReader(TagReader):
    """Tag reader that takes the genre from the file body.

    Test files are written as ``genre:<name>``; a body of ``corrupt``
    behaves like an unreadable tag container.
    """

    def __init__(self):
        self.seen = []

    def read_genre(self, handle) -> str:
        self.seen.append(Path(handle.name))
        data = handle.read()
        if data == CORRUPT:
            raise MetadataError(f"Failed to read tags from {handle.name}: bad header")
        return data.decode().partition("genre:")[2]


def make_track(path: Path, genre: str = "") -> Path:
    """Write a fake audio file carrying genre."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(f"genre:{genre}".encode())
    return path


def write_flac(path: Path, genre: str = None) -> Path:
    """Write a minimal real FLAC file, tagged with genre when given."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(FLAC_HEADER)
    if genre is not None:
        audio = FLAC(path)
        audio.add_tags()
        audio.tags["GENRE"] = genre
        audio.save()
    return path


@pytest.fixture
def library(tmp_path) -> Path:
    root = tmp_path / "Music"
    root.mkdir()
    return root


@pytest.fixture
def config(library) -> OrganizerConfig:
    return OrganizerConfig(library_root=library)


@pytest.fixture
def tag_reader() -> FakeTagReader:
    return FakeTagReader()
