"""Data models for genre organizer."""

from .track import Track, TrackState
from .placement import Placement, PlacementAction
from .report import OutcomeStatus, TrackOutcome, RunReport
from .config import OrganizerConfig, ErrorPolicy, GenreNamePolicy

__all__ = [
    "Track",
    "TrackState",
    "Placement",
    "PlacementAction",
    "OutcomeStatus",
    "TrackOutcome",
    "RunReport",
    "OrganizerConfig",
    "ErrorPolicy",
    "GenreNamePolicy",
]
