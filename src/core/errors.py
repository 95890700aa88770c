"""FilmSync exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class FilmSyncError(Exception):
    """Base exception for all FilmSync failures."""


class FilmSyncConfigError(FilmSyncError):
    """Raised for invalid runtime configuration."""


class SessionError(FilmSyncError):
    """Raised for browser launch, sign-in, navigation, and export failures."""


class ArchiveError(FilmSyncError):
    """Raised when the export archive cannot be opened or read."""


class ParseError(FilmSyncError):
    """Raised for malformed tabular export text."""


class PersistenceError(FilmSyncError):
    """Raised when the film store is unreachable or a statement fails."""


class StatementBuildError(FilmSyncError):
    """Raised when one record cannot be appended to an insert statement.

    Callers recover by dropping the record; it never escapes the store layer.
    """
