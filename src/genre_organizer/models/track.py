"""Track model representing a single audio file on its way to a genre folder."""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
from enum import Enum

from ..exceptions import GenreOrganizerError


class TrackState(Enum):
    """Lifecycle of a track within one run."""
    DISCOVERED = "discovered"
    CLASSIFIED = "classified"
    RELOCATED = "relocated"
    DUPLICATED = "duplicated"
    ABORTED = "aborted"


_TRANSITIONS = {
    TrackState.DISCOVERED: {TrackState.CLASSIFIED, TrackState.ABORTED},
    TrackState.CLASSIFIED: {TrackState.RELOCATED, TrackState.DUPLICATED, TrackState.ABORTED},
    TrackState.RELOCATED: set(),
    TrackState.DUPLICATED: set(),
    TrackState.ABORTED: set(),
}


@dataclass(slots=True)
class Track:
    """An audio file discovered under the library root."""

    path: Path
    genre: Optional[str] = None
    state: TrackState = TrackState.DISCOVERED

    @property
    def filename(self) -> str:
        """Get the filename without path."""
        return self.path.name

    def classify(self, genre: Optional[str]) -> None:
        """Record the genre read from the file's tags."""
        self._advance(TrackState.CLASSIFIED)
        self.genre = genre or ""

    def relocated(self, new_path: Path, duplicate: bool = False) -> None:
        """Mark the track as moved to new_path."""
        self._advance(TrackState.DUPLICATED if duplicate else TrackState.RELOCATED)
        self.path = new_path

    def abort(self) -> None:
        self._advance(TrackState.ABORTED)

    def _advance(self, state: TrackState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise GenreOrganizerError(
                f"Invalid transition for {self.filename}: {self.state.value} -> {state.value}"
            )
        self.state = state
