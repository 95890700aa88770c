"""FilmSync CLI entry points.
This module exposes the sync command and maps it onto the pipeline.
It owns process bootstrap, .env loading, and exit codes.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Sequence

from dotenv import find_dotenv, load_dotenv

from core.config import FilmSyncConfig
from core.logging_config import get_logger
from ingest.pipeline import sync_films

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="filmsync", description="Letterboxd export sync")
    parser.add_argument("--env-file", help="Load environment variables from this .env file")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sync_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the FilmSync CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code: 0 on success, 1 on any failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _load_env_file(args.env_file)
    if args.command == "sync":
        return _run_sync_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _load_env_file(env_file: str | None) -> None:
    """Load a .env file without overriding variables already set."""
    dotenv_path = env_file or find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


def _run_sync_command(args: argparse.Namespace) -> int:
    """Handle sync command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    archive_path = Path(args.archive).expanduser() if args.archive else None
    _LOGGER.info("sync_started", dry_run=args.dry_run, archive=str(archive_path or "browser"))
    try:
        config = FilmSyncConfig.from_env()
        result = asyncio.run(sync_films(config, archive_path=archive_path, dry_run=args.dry_run))
    except Exception as error:
        _LOGGER.error(
            "sync_ended_on_error",
            error_type=type(error).__name__,
            error=str(error),
            exc_info=True,
        )
        return 1
    print(f"watched={result.watched_count}")
    print(f"towatch={result.towatch_count}")
    print(f"persisted={str(result.persisted).lower()}")
    return 0


def _add_sync_command(subparsers: Any) -> None:
    """Register sync subcommand."""
    parser = subparsers.add_parser(
        "sync",
        help="Download the Letterboxd export and replace the films table",
    )
    parser.add_argument(
        "--archive",
        help="Use a downloaded export zip instead of signing in with a browser",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and transform the export without writing to the database",
    )
