"""Per-file outcomes and the per-run report."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, List, Dict
from enum import Enum

from ..exceptions import GenreOrganizerError
from .placement import Placement


class OutcomeStatus(Enum):
    """Final status of one file."""
    RELOCATED = "relocated"
    DUPLICATED = "duplicated"
    FAILED = "failed"


@dataclass(slots=True)
class TrackOutcome:
    """Result of processing one file: a placement on success, an error otherwise."""

    path: Path
    status: OutcomeStatus
    placement: Optional[Placement] = None
    error: Optional[GenreOrganizerError] = None

    @classmethod
    def success(cls, path: Path, placement: Placement) -> "TrackOutcome":
        status = OutcomeStatus.DUPLICATED if placement.is_duplicate else OutcomeStatus.RELOCATED
        return cls(path=path, status=status, placement=placement)

    @classmethod
    def failure(cls, path: Path, error: GenreOrganizerError) -> "TrackOutcome":
        return cls(path=path, status=OutcomeStatus.FAILED, error=error)

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED

    @property
    def reason(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


@dataclass
class RunReport:
    """Ordered outcomes of a single organizer run."""

    outcomes: List[TrackOutcome] = field(default_factory=list)
    aborted: bool = False

    def add(self, outcome: TrackOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def relocated(self) -> int:
        return self.count(OutcomeStatus.RELOCATED)

    @property
    def duplicated(self) -> int:
        return self.count(OutcomeStatus.DUPLICATED)

    @property
    def failures(self) -> List[TrackOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def ok(self) -> bool:
        """True when the run finished and no file failed."""
        return not self.aborted and not self.failures

    def by_bucket(self) -> Dict[str, int]:
        """Count placed files per destination bucket."""
        counts: Dict[str, int] = {}
        for outcome in self.outcomes:
            if outcome.placement is None:
                continue
            name = outcome.placement.destination_folder.name
            counts[name] = counts.get(name, 0) + 1
        return counts
