"""Public SDK surface for FilmSync.

This module provides a stable import path for library users.
It re-exports the pipeline, its collaborators, and typed models.
"""

from __future__ import annotations

from core.config import FilmSyncConfig
from core.types import FilmRecord, FilmStatus, SessionCredential, SyncResult, SyncStage
from ingest.archive_reader import extract_archive
from ingest.archive_source import BrowserArchiveSource, LocalArchiveSource
from ingest.csv_rows import parse_csv_rows
from ingest.pipeline import FilmSyncPipeline, sync_films
from session.automator import SessionAutomator
from store.postgres_store import PostgresFilmStore
from transforms.film_records import merge_film_records, transform_films

__all__ = [
    "BrowserArchiveSource",
    "FilmRecord",
    "FilmStatus",
    "FilmSyncConfig",
    "FilmSyncPipeline",
    "LocalArchiveSource",
    "PostgresFilmStore",
    "SessionAutomator",
    "SessionCredential",
    "SyncResult",
    "SyncStage",
    "extract_archive",
    "merge_film_records",
    "parse_csv_rows",
    "sync_films",
    "transform_films",
]
