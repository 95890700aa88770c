"""Shared typed models.

This module defines immutable data models used by the session,
ingest, transform, and store layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

RawRow = Mapping[str, str | None]
ExportArchive = dict[str, str]


class FilmStatus(str, Enum):
    """Category a film record was exported under."""

    WATCHED = "watched"
    TOWATCH = "towatch"


class SyncStage(str, Enum):
    """Coarse stages of one sync run, in execution order."""

    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    EXPORT_TRIGGERED = "export_triggered"
    ARCHIVE_RETRIEVED = "archive_retrieved"
    EXTRACTED = "extracted"
    TRANSFORMED = "transformed"
    PERSISTED = "persisted"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionCredential:
    """Account credential for one export session.

    Attributes:
        username: Letterboxd username.
        password: Letterboxd password, excluded from repr.
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class FilmRecord:
    """Validated film entry from a diary or watchlist export.

    Attributes:
        name: Film title.
        year: Release year.
        link: Canonical Letterboxd URI identifying the film.
        status: Export category the record came from.
        date_updated: Watched date or watchlist date as exported.
        rating: Optional star rating.
    """

    name: str
    year: int | None
    link: str
    status: FilmStatus
    date_updated: str | None = None
    rating: float | None = None


@dataclass(frozen=True)
class EncodedBlob:
    """Transport form of a blob fetched inside the browser.

    Attributes:
        data_url: ``data:<mime>;base64,<payload>`` string.
        mime_type: Declared response content type.
    """

    data_url: str
    mime_type: str | None


@dataclass(frozen=True)
class ExportBlob:
    """Decoded export archive bytes.

    Attributes:
        buffer: Raw archive bytes.
        mime_type: Declared response content type.
    """

    buffer: bytes
    mime_type: str | None


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one sync run.

    Attributes:
        watched_count: Records kept from the diary export.
        towatch_count: Records kept from the watchlist export.
        stage: Final stage reached.
        persisted: Whether records were written to the store.
    """

    watched_count: int
    towatch_count: int
    stage: SyncStage
    persisted: bool

    @property
    def total_count(self) -> int:
        """Return the merged record count."""
        return self.watched_count + self.towatch_count
