"""Main orchestration logic for genre organization."""

from pathlib import Path
from typing import Callable, Optional
import logging

from ..models.config import OrganizerConfig, ErrorPolicy
from ..models.report import RunReport, TrackOutcome
from ..models.track import Track
from ..exceptions import GenreOrganizerError, ConfigurationError, TraversalError
from .metadata import TagReader
from .scanner import LibraryScanner
from .resolver import PlacementResolver
from .mover import FileMover

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[TrackOutcome], None]


class _AbortRun(Exception):
    """Internal signal to stop the walk under the abort policy."""


class GenreOrganizer:
    """Move every track under the library root into its genre folder.

    Files are handled strictly one at a time: open, read tag, resolve,
    move. Only one organizer may work on a library tree at a time.
    """

    def __init__(self, config: OrganizerConfig, tag_reader: Optional[TagReader] = None,
                 on_outcome: Optional[OutcomeCallback] = None):
        self.config = config
        self.tag_reader = tag_reader or TagReader()
        self.on_outcome = on_outcome
        self.scanner = LibraryScanner(
            reserved_dir=config.reserved_dir,
            extensions=config.extensions
        )
        self.resolver = PlacementResolver(
            config.genres_root,
            name_policy=config.genre_name_policy,
            no_genre_dir=config.no_genre_dir,
            duplicate_dir=config.duplicate_dir
        )
        self.file_mover = FileMover()

    @property
    def keep_going(self) -> bool:
        return self.config.error_policy is ErrorPolicy.CONTINUE

    def validate_root(self) -> Path:
        root = self.config.library_root
        if not root.exists():
            raise ConfigurationError(f"Directory does not exist: {root}")
        if not root.is_dir():
            raise ConfigurationError(f"Path is not a directory: {root}")
        return root

    def run(self) -> RunReport:
        """Organize the whole library and return the per-file report."""
        root = self.validate_root()
        report = RunReport()

        def record(outcome: TrackOutcome) -> None:
            report.add(outcome)
            if self.on_outcome:
                self.on_outcome(outcome)
            if outcome.failed and not self.keep_going:
                raise _AbortRun()

        def traversal_failed(error: TraversalError) -> None:
            logger.error(str(error))
            record(TrackOutcome.failure(error.path or root, error))

        logger.info(f"Organizing {root} into {self.config.genres_root}")
        try:
            for path in self.scanner.scan(root, on_error=traversal_failed):
                record(self.process(path))
        except _AbortRun:
            report.aborted = True
            logger.error("Stopping after first failure")

        logger.info(
            f"Relocated {report.relocated}, duplicates {report.duplicated}, "
            f"failed {len(report.failures)}"
        )
        return report

    def process(self, path: Path) -> TrackOutcome:
        """Classify and relocate a single file."""
        track = Track(path=path)
        try:
            track.classify(self.tag_reader.genre_from_path(path))
            placement = self.resolver.resolve(track)
            self.file_mover.move(placement)
            track.relocated(placement.destination, duplicate=placement.is_duplicate)
        except GenreOrganizerError as e:
            track.abort()
            logger.error(f"Failed to organize {path}: {e}")
            return TrackOutcome.failure(path, e)

        return TrackOutcome.success(path, placement)
