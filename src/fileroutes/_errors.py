"""fileroutes error hierarchy.

All fileroutes-specific errors inherit from FileRoutesError for easy catching.
A missing routes directory is not an error: scanning it yields no routes.
"""

from pathlib import Path


class FileRoutesError(Exception):
    """Base error for all fileroutes operations."""


class ConfigError(FileRoutesError):
    """Invalid or missing configuration (including duplicate route paths)."""


class RoutePatternError(FileRoutesError):
    """A route file path cannot be translated into a route pattern."""


class _FileScopedError(FileRoutesError):
    """An error attributable to one file on disk."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class RouteParseError(_FileScopedError):
    """A route module's source could not be parsed for export analysis."""


class RouteWriteError(_FileScopedError):
    """The generated module could not be written to its output path."""


class RouteLoadError(_FileScopedError):
    """A route module failed to resolve or raised while being imported."""
