"""Custom exceptions for genre organizer."""


class GenreOrganizerError(Exception):
    """Base exception for genre organizer errors."""
    pass


class ConfigurationError(GenreOrganizerError):
    """Raised when the configuration or library root cannot be resolved."""
    pass


class TraversalError(GenreOrganizerError):
    """Raised when a directory or file under the library cannot be read."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class MetadataError(GenreOrganizerError):
    """Raised when there's an error reading the tags of an audio file."""
    pass


class FileOperationError(GenreOrganizerError):
    """Raised when creating folders, checking for files or moving fails."""
    pass


class InvalidGenreError(GenreOrganizerError):
    """Raised when a genre cannot be used as a folder name."""
    pass
