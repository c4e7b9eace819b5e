"""Placement decisions produced by the resolver."""

from pathlib import Path
from dataclasses import dataclass
from typing import Tuple
from enum import Enum


class PlacementAction(Enum):
    """What the mover should do with a track."""
    MOVE = "move"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class Placement:
    """Where a track goes and why."""

    source: Path
    destination: Path
    bucket: str
    action: PlacementAction
    created_folders: Tuple[Path, ...] = ()

    @property
    def is_duplicate(self) -> bool:
        return self.action is PlacementAction.DUPLICATE

    @property
    def destination_folder(self) -> Path:
        return self.destination.parent
