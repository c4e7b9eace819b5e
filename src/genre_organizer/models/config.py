"""Configuration model for genre organizer."""

from pathlib import Path
from typing import Dict, Any, Optional, Tuple
import json
from dataclasses import dataclass, fields, replace
from enum import Enum

from ..exceptions import ConfigurationError

MUSIC_DIR = "Music"


class ErrorPolicy(Enum):
    """What to do when a single file cannot be organized."""
    ABORT = "abort"
    CONTINUE = "continue"


class GenreNamePolicy(Enum):
    """How genres containing path separators or reserved characters are handled."""
    FLATTEN = "flatten"
    REJECT = "reject"


@dataclass
class OrganizerConfig:
    """Settings for one organizer run."""
    library_root: Path
    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    genre_name_policy: GenreNamePolicy = GenreNamePolicy.FLATTEN
    reserved_dir: str = "Genres"
    no_genre_dir: str = "No Genre"
    duplicate_dir: str = "Duplicate"
    extensions: Tuple[str, ...] = (".mp3", ".flac")

    @property
    def genres_root(self) -> Path:
        """Folder that receives every bucket; never scanned as input."""
        return self.library_root / self.reserved_dir

    def with_overrides(self, **overrides: Any) -> "OrganizerConfig":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def default_library_root() -> Path:
    """Return <home>/Music for the current user."""
    try:
        return Path.home() / MUSIC_DIR
    except (KeyError, RuntimeError) as e:
        raise ConfigurationError(f"Could not determine the home directory: {e}") from e


def _config_to_dict(config: OrganizerConfig) -> Dict[str, Any]:
    result = {}
    for f in fields(config):
        value = getattr(config, f.name)
        if isinstance(value, Path):
            value = str(value)
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        result[f.name] = value
    return result


def _dict_to_config(data: Dict[str, Any], library_root: Optional[Path] = None) -> OrganizerConfig:
    known = {f.name for f in fields(OrganizerConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    kwargs: Dict[str, Any] = dict(data)
    file_root = kwargs.pop('library_root', None)
    root = library_root if library_root is not None else file_root
    if root is None:
        raise ConfigurationError("No library_root configured")
    kwargs['library_root'] = Path(root).expanduser()

    try:
        if 'error_policy' in kwargs:
            kwargs['error_policy'] = ErrorPolicy(kwargs['error_policy'])
        if 'genre_name_policy' in kwargs:
            kwargs['genre_name_policy'] = GenreNamePolicy(kwargs['genre_name_policy'])
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e

    if 'extensions' in kwargs:
        kwargs['extensions'] = tuple(ext.lower() for ext in kwargs['extensions'])

    return OrganizerConfig(**kwargs)


def load_config(config_path: Path, library_root: Optional[Path] = None) -> OrganizerConfig:
    """Load configuration from JSON file.

    ``library_root``, when given, takes precedence over the root in the file.
    """
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a JSON object")

    return _dict_to_config(config_data, library_root)


def save_config(config: OrganizerConfig, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w') as f:
        json.dump(_config_to_dict(config), f, indent=2)
