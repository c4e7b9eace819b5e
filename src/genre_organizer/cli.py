"""Command line interface for genre organizer."""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .core.metadata import TagReader
from .core.organizer import GenreOrganizer
from .core.resolver import PlacementResolver
from .models.config import (
    OrganizerConfig, ErrorPolicy, GenreNamePolicy, default_library_root, load_config
)
from .models.report import OutcomeStatus, RunReport, TrackOutcome
from .exceptions import GenreOrganizerError

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)]
    )


def print_banner() -> None:
    """Print the notice and usage instructions."""
    console.print("\n[red] 🎶Music Genre Organizer:[/red]\n")
    console.print("[bold magenta]Notice and Usage Instructions:[/bold magenta]")
    console.print("This program organizes a music library by grouping songs into genre-based folders.")
    console.print("Currently only MP3 & FLAC files are supported.")
    console.print("Songs with no genre information are moved to a separate 'No Genre' folder.")
    console.print("Duplicate songs found in the destination folders are moved to a 'Duplicate' folder.")
    console.print("\n[bold magenta]Usage Instructions:[/bold magenta]")
    console.print("1. Provide the path to the music library (defaults to $HOME/Music) when prompted.")
    console.print("2. The program scans the library, groups songs by genre and moves them to the genre folders.")
    console.print("3. Songs without a genre are moved to the 'No Genre' folder.")
    console.print("4. If duplicate songs are found, they are moved to the 'Duplicate' folder.")
    console.rule()


def prompt_library_root() -> Path:
    """Ask for the library path on stdin; empty input means <home>/Music."""
    default = default_library_root()
    try:
        answer = Prompt.ask(
            f"\n[red]Enter the music library path (leave empty for default {escape(str(default))})[/red]",
            default="",
            show_default=False,
            console=console
        )
    except EOFError:
        answer = ""
    answer = answer.strip()
    return Path(answer).expanduser() if answer else default


def print_outcome(outcome: TrackOutcome) -> None:
    """Print one progress line per relocated file."""
    placement = outcome.placement
    if placement is None:
        return

    name = escape(placement.source.name)
    if outcome.status is OutcomeStatus.DUPLICATED:
        console.print(
            f"Song {name} already exists in the destination folder. "
            f"Moved to {escape(str(placement.destination_folder))}",
            soft_wrap=True
        )
    else:
        console.print(
            f"Moved {name} from {escape(str(placement.source.parent))} "
            f"to {escape(str(placement.destination_folder))}",
            soft_wrap=True
        )


def print_report(report: RunReport) -> None:
    """Print per-bucket counts and failures."""
    results_table = Table(title="Results")
    results_table.add_column("Folder", style="cyan")
    results_table.add_column("Count", justify="right")

    for bucket, count in sorted(report.by_bucket().items()):
        results_table.add_row(escape(bucket), str(count))

    console.print()
    console.print(results_table)
    console.print(
        f"Relocated: {report.relocated}  Duplicates: {report.duplicated}  "
        f"Failed: {len(report.failures)}"
    )

    failures = report.failures
    if failures:
        console.print("\n[red]Errors encountered:[/red]")
        for outcome in failures[:10]:
            console.print(f"  • {escape(outcome.reason or '')}", soft_wrap=True)
        if len(failures) > 10:
            console.print(f"  ... and {len(failures) - 10} more errors")

    if report.aborted:
        console.print("\n[red]Stopped at the first error; remaining files were not processed.[/red]")


@click.group(invoke_without_command=True)
@click.version_option(__version__)
@click.pass_context
def cli(ctx):
    """Sort your music library into genre folders using embedded tags."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(organize)


@cli.command()
@click.argument('library_root', required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON configuration file'
)
@click.option(
    '--keep-going',
    is_flag=True,
    help='Record failing files and continue instead of stopping at the first error'
)
@click.option(
    '--reject-unsafe-genres',
    is_flag=True,
    help='Fail files whose genre contains path separators instead of flattening them'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def organize(
    library_root: Optional[Path],
    config: Optional[Path],
    keep_going: bool,
    reject_unsafe_genres: bool,
    verbose: bool
):
    """Move every MP3/FLAC under LIBRARY_ROOT into LIBRARY_ROOT/Genres/<genre>."""
    _configure_logging(verbose)
    print_banner()

    try:
        if config:
            cfg = load_config(config, library_root=library_root)
        else:
            cfg = OrganizerConfig(library_root=library_root or prompt_library_root())

        cfg = cfg.with_overrides(
            error_policy=ErrorPolicy.CONTINUE if keep_going else None,
            genre_name_policy=GenreNamePolicy.REJECT if reject_unsafe_genres else None
        )

        organizer = GenreOrganizer(cfg, on_outcome=print_outcome)
        report = organizer.run()

    except GenreOrganizerError as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc(), markup=False)
        sys.exit(1)

    print_report(report)
    if not report.ok:
        sys.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(file_path: Path):
    """Show the genre tag of FILE_PATH and the folder it would be sorted into."""

    try:
        track = TagReader().read(file_path)
        resolver = PlacementResolver(Path("Genres"))

        info_table = Table()
        info_table.add_column("Property", style="cyan")
        info_table.add_column("Value")

        info_table.add_row("File", escape(track.filename))
        info_table.add_row("Genre tag", escape(track.genre) if track.genre else "[dim](empty)[/dim]")
        info_table.add_row("Folder", escape(str(Path("Genres") / resolver.bucket_name(track.genre))))

        console.print(info_table)

    except GenreOrganizerError as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
