"""Sync orchestration for the film export.

This module coordinates archive retrieval, extraction, transforms,
and the full-table replace against the film store.
"""

from __future__ import annotations

from pathlib import Path
from typing import cast

from core.config import FilmSyncConfig
from core.constants import DIARY_ENTRY_NAME, WATCHLIST_ENTRY_NAME
from core.errors import FilmSyncConfigError
from core.logging_config import get_logger
from core.types import ExportArchive, FilmRecord, FilmStatus, SyncResult, SyncStage
from ingest.archive_reader import extract_archive
from ingest.archive_source import ArchiveSource, BrowserArchiveSource, LocalArchiveSource
from ingest.csv_rows import parse_csv_rows
from session.automator import SessionAutomator
from store.film_gateway import FilmGateway
from store.postgres_store import PostgresFilmStore
from transforms.film_records import merge_film_records, transform_films

_LOGGER = get_logger(__name__)


class FilmSyncPipeline:
    """Single-run state machine from archive retrieval to persisted films.

    The first failure moves the run to ``failed`` and propagates; no
    stage is retried.
    """

    def __init__(
        self,
        source: ArchiveSource,
        gateway: FilmGateway | None,
        atomic_replace: bool = False,
        dry_run: bool = False,
    ) -> None:
        """Create a pipeline run.

        Args:
            source: Provider of the export archive.
            gateway: Film store; may be None only for dry runs.
            atomic_replace: Wrap delete-all and bulk-insert in a transaction.
            dry_run: Stop after transforms without touching the store.

        Raises:
            FilmSyncConfigError: If a persisting run has no gateway.
        """
        if gateway is None and not dry_run:
            raise FilmSyncConfigError("A film store is required unless dry_run is set.")
        self._source = source
        self._gateway = gateway
        self._atomic_replace = atomic_replace
        self._dry_run = dry_run
        self._stage = SyncStage.IDLE

    @property
    def stage(self) -> SyncStage:
        """Return the current run stage."""
        return self._stage

    async def run(self) -> SyncResult:
        """Execute the sync once.

        Returns:
            Counts per category and the final stage.

        Raises:
            SessionError: If the browser session fails.
            ArchiveError: If the archive cannot be read.
            ParseError: If an export payload is malformed.
            PersistenceError: If the store rejects the replace.
        """
        try:
            blob = await self._source.fetch_archive(self._advance)
            self._advance(SyncStage.ARCHIVE_RETRIEVED)
            _LOGGER.info("archive_extract_started", size_bytes=len(blob.buffer))
            archive = extract_archive(blob.buffer)
            self._advance(SyncStage.EXTRACTED)
            watched = _transform_entry(archive, DIARY_ENTRY_NAME, FilmStatus.WATCHED)
            towatch = _transform_entry(archive, WATCHLIST_ENTRY_NAME, FilmStatus.TOWATCH)
            records = merge_film_records(watched, towatch)
            self._advance(SyncStage.TRANSFORMED)
            if not self._dry_run:
                await self._replace_films(records)
                self._advance(SyncStage.PERSISTED)
            self._advance(SyncStage.DONE)
        except Exception as error:
            failed_stage = self._stage
            self._stage = SyncStage.FAILED
            _LOGGER.error(
                "sync_failed",
                stage=failed_stage.value,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise
        result = SyncResult(
            watched_count=len(watched),
            towatch_count=len(towatch),
            stage=self._stage,
            persisted=not self._dry_run,
        )
        _LOGGER.info(
            "sync_completed",
            watched_count=result.watched_count,
            towatch_count=result.towatch_count,
            persisted=result.persisted,
        )
        return result

    def _advance(self, stage: SyncStage) -> None:
        self._stage = stage
        _LOGGER.info("sync_stage_changed", stage=stage.value)

    async def _replace_films(self, records: list[FilmRecord]) -> None:
        """Delete every stored film, then insert the new set."""
        gateway = cast(FilmGateway, self._gateway)
        if not self._atomic_replace:
            # a failed insert leaves the table empty
            await gateway.delete_all()
            await gateway.bulk_insert(records)
            return
        async with gateway.transaction():
            await gateway.delete_all()
            await gateway.bulk_insert(records)


async def sync_films(
    config: FilmSyncConfig,
    archive_path: Path | None = None,
    dry_run: bool = False,
) -> SyncResult:
    """Run one sync with sources and store built from config.

    Args:
        config: Runtime configuration.
        archive_path: Optional local export zip used instead of the browser.
        dry_run: Skip the store entirely.

    Returns:
        Sync result summary.
    """
    source = _build_source(config, archive_path)
    if dry_run:
        return await FilmSyncPipeline(source, None, dry_run=True).run()
    async with PostgresFilmStore.from_config(config) as store:
        pipeline = FilmSyncPipeline(source, store, atomic_replace=config.atomic_replace)
        return await pipeline.run()


def _build_source(config: FilmSyncConfig, archive_path: Path | None) -> ArchiveSource:
    if archive_path is not None:
        return LocalArchiveSource(archive_path)
    return BrowserArchiveSource(SessionAutomator.from_config(config), config.credential)


def _transform_entry(
    archive: ExportArchive,
    entry_name: str,
    status: FilmStatus,
) -> list[FilmRecord]:
    """Parse and transform one named archive entry.

    A missing entry yields no records; the provider renaming its files
    is logged rather than raised.
    """
    text = archive.get(entry_name)
    if text is None:
        _LOGGER.warning(
            "archive_entry_missing",
            entry_name=entry_name,
            available_entries=sorted(archive),
        )
        return []
    _LOGGER.info("archive_entry_parsing", entry_name=entry_name, status=status.value)
    rows = parse_csv_rows(text, source_name=entry_name)
    return transform_films(rows, status)
