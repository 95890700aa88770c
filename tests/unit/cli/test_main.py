"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

import cli.main as cli_main
from cli.main import main
from core.config import FilmSyncConfig
from core.types import SyncResult, SyncStage


def test_cli_sync_dry_run_prints_counts(
    export_zip_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Dry-run sync from a local archive should print per-status counts."""
    exit_code = main(["sync", "--archive", str(export_zip_path), "--dry-run"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "watched=2" in output and "towatch=2" in output and "persisted=false" in output


def test_cli_sync_returns_failure_for_missing_archive(tmp_path: Path) -> None:
    """Any pipeline error should map to a non-zero exit code."""
    exit_code = main(["sync", "--archive", str(tmp_path / "missing.zip"), "--dry-run"])

    assert exit_code == 1


def test_cli_sync_returns_failure_without_database(
    export_zip_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A persisting sync without a database URL should fail cleanly."""
    monkeypatch.delenv("FILMSYNC_DATABASE_URL", raising=False)

    exit_code = main(["sync", "--archive", str(export_zip_path)])

    assert exit_code == 1


def test_cli_env_file_error_fails_dry_run(
    tmp_path: Path,
    export_zip_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """An invalid value from --env-file should fail a dry run that would otherwise pass."""
    # set then delete so monkeypatch removes the value load_dotenv writes
    monkeypatch.setenv("FILMSYNC_SETTLE_SECONDS", "0")
    monkeypatch.delenv("FILMSYNC_SETTLE_SECONDS")
    env_file = tmp_path / ".env"
    env_file.write_text("FILMSYNC_SETTLE_SECONDS=not-a-number\n", encoding="utf-8")
    argv = ["sync", "--archive", str(export_zip_path), "--dry-run"]

    assert main(argv) == 0
    assert main(["--env-file", str(env_file), *argv]) == 1


def test_cli_env_file_values_reach_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Values from --env-file should appear on the config passed to sync."""
    monkeypatch.setenv("FILMSYNC_DATABASE_URL", "unset")
    monkeypatch.delenv("FILMSYNC_DATABASE_URL")
    monkeypatch.setenv("FILMSYNC_SETTLE_SECONDS", "0")
    monkeypatch.delenv("FILMSYNC_SETTLE_SECONDS")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "FILMSYNC_DATABASE_URL=postgresql://films@db/films\nFILMSYNC_SETTLE_SECONDS=4.5\n",
        encoding="utf-8",
    )
    seen: list[FilmSyncConfig] = []

    async def recording_sync(config: FilmSyncConfig, **options: object) -> SyncResult:
        seen.append(config)
        return SyncResult(0, 0, SyncStage.DONE, persisted=True)

    monkeypatch.setattr(cli_main, "sync_films", recording_sync)

    assert main(["--env-file", str(env_file), "sync"]) == 0
    assert seen[0].database_url == "postgresql://films@db/films"
    assert seen[0].settle_seconds == 4.5
