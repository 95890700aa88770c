"""Unit tests for export archive extraction."""

from __future__ import annotations

import io
import zipfile

import pytest

from core.errors import ArchiveError
from ingest.archive_reader import extract_archive
from tests.fixture_paths import build_zip


def test_extract_archive_returns_every_entry_text() -> None:
    """Extraction should return exactly the archived entries and their text."""
    entries = {
        "diary.csv": "Name,Year\nStalker,1979\n",
        "watchlist.csv": "Name,Year\nCléo from 5 to 7,1962\n",
    }

    extracted = extract_archive(build_zip(entries))

    assert extracted == entries


def test_extract_archive_skips_directory_entries() -> None:
    """Directory entries should not appear in the result."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("likes/", "")
        archive.writestr("likes/films.csv", "Name\n")

    extracted = extract_archive(buffer.getvalue())

    assert list(extracted) == ["likes/films.csv"]


def test_extract_archive_replaces_undecodable_bytes() -> None:
    """Invalid UTF-8 should decode with replacement characters."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("diary.csv", b"Name\n\xffbad\n")

    extracted = extract_archive(buffer.getvalue())

    assert extracted["diary.csv"] == "Name\n\ufffdbad\n"


@pytest.mark.parametrize("payload", [b"", b"<html>Sign In</html>"])
def test_extract_archive_raises_for_non_zip(payload: bytes) -> None:
    """Non-zip payloads should raise an archive error."""
    with pytest.raises(ArchiveError):
        extract_archive(payload)
