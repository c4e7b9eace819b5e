"""Music Genre Organizer

Sort a music library into genre folders using the tags embedded in each file.
"""

__version__ = "0.1.0"

from .core.organizer import GenreOrganizer
from .core.resolver import PlacementResolver
from .core.metadata import TagReader
from .models.config import OrganizerConfig, ErrorPolicy, GenreNamePolicy
from .models.report import RunReport, TrackOutcome, OutcomeStatus

__all__ = [
    "GenreOrganizer",
    "PlacementResolver",
    "TagReader",
    "OrganizerConfig",
    "ErrorPolicy",
    "GenreNamePolicy",
    "RunReport",
    "TrackOutcome",
    "OutcomeStatus",
]
