"""Export archive extraction.

This module opens a zipped export held in memory and decodes
every entry into text keyed by its path inside the archive.
"""

from __future__ import annotations

import io
import zipfile

from core.constants import ARCHIVE_TEXT_ENCODING
from core.errors import ArchiveError
from core.types import ExportArchive


def extract_archive(buffer: bytes) -> ExportArchive:
    """Decode every file entry of a zip archive.

    Args:
        buffer: Raw archive bytes.

    Returns:
        Mapping from entry path to decoded text.

    Raises:
        ArchiveError: If the buffer is not a readable zip container.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(buffer)) as archive:
            return {
                entry.filename: _read_entry_text(archive, entry)
                for entry in archive.infolist()
                if not entry.is_dir()
            }
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as error:
        raise ArchiveError(
            f"Failed to open export archive ({len(buffer)} bytes): {error}. "
            "Check that the export endpoint returned a zip file."
        ) from error


def _read_entry_text(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> str:
    """Read one entry, replacing undecodable bytes.

    Raises:
        ArchiveError: If the entry is corrupt or uses an unsupported compression.
    """
    try:
        payload = archive.read(entry)
    except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as error:
        raise ArchiveError(
            f"Failed to read archive entry '{entry.filename}': {error}."
        ) from error
    return payload.decode(ARCHIVE_TEXT_ENCODING, errors="replace")
