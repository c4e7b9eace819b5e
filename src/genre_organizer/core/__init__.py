"""Core genre organizer modules."""

from .scanner import LibraryScanner
from .metadata import TagReader
from .resolver import PlacementResolver, title_case
from .mover import FileMover
from .organizer import GenreOrganizer

__all__ = [
    'LibraryScanner',
    'TagReader',
    'PlacementResolver',
    'title_case',
    'FileMover',
    'GenreOrganizer'
]
