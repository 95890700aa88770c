"""Export archive sources.

This module supplies the zipped export to the sync pipeline, either
from a live browser session or from an archive already on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol

from core.errors import ArchiveError
from core.logging_config import get_logger
from core.types import ExportBlob, SessionCredential, SyncStage
from session.automator import SessionAutomator

_LOGGER = get_logger(__name__)

_ZIP_MIME_TYPE = "application/zip"


class ArchiveSource(Protocol):
    """Provider of one export archive per call."""

    async def fetch_archive(self, report_stage: Callable[[SyncStage], None]) -> ExportBlob:
        """Return archive bytes, reporting stage changes along the way."""
        ...


class BrowserArchiveSource:
    """Downloads the archive through an authenticated browser session."""

    def __init__(self, automator: SessionAutomator, credential: SessionCredential) -> None:
        self._automator = automator
        self._credential = credential

    async def fetch_archive(self, report_stage: Callable[[SyncStage], None]) -> ExportBlob:
        return await self._automator.run_export_session(self._credential, report_stage)


class LocalArchiveSource:
    """Reads a previously downloaded export archive from disk."""

    def __init__(self, archive_path: Path) -> None:
        self._archive_path = archive_path

    async def fetch_archive(self, report_stage: Callable[[SyncStage], None]) -> ExportBlob:
        """Read the archive file.

        Raises:
            ArchiveError: If the file cannot be read.
        """
        try:
            buffer = self._archive_path.read_bytes()
        except OSError as error:
            raise ArchiveError(
                f"Failed to read export archive at {self._archive_path}: {error.strerror}. "
                "Provide the path of a downloaded Letterboxd export zip."
            ) from error
        _LOGGER.info("archive_loaded", path=str(self._archive_path), size_bytes=len(buffer))
        return ExportBlob(buffer=buffer, mime_type=_ZIP_MIME_TYPE)
