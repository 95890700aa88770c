"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.fixture_paths import build_zip, export_fixture_entries


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def export_zip_path(tmp_path: Path) -> Path:
    """Write the sample diary and watchlist export to a zip file."""
    archive_path = tmp_path / "letterboxd-export.zip"
    archive_path.write_bytes(build_zip(export_fixture_entries()))
    return archive_path
