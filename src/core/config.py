"""Runtime configuration model for FilmSync.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_AUTH_PROBE,
    DEFAULT_BROWSER_PATH,
    DEFAULT_INSERT_BATCH_SIZE,
    DEFAULT_SETTLE_SECONDS,
    MAX_INSERT_BATCH_SIZE,
    SUPPORTED_AUTH_PROBES,
)
from core.errors import FilmSyncConfigError
from core.types import SessionCredential

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class FilmSyncConfig:
    """Validated runtime configuration.

    Attributes:
        credential: Letterboxd account used for the export session.
        database_url: Postgres DSN for the films table, if configured.
        browser_path: Chromium executable launched by Playwright.
        headless: Whether the browser runs without a window.
        settle_seconds: Delay between download and browser teardown.
        auth_probe: Name of the sign-in detection strategy.
        atomic_replace: Wrap delete-all and bulk-insert in one transaction.
        insert_batch_size: Maximum rows per INSERT statement.
    """

    credential: SessionCredential
    database_url: str | None
    browser_path: str
    headless: bool
    settle_seconds: float
    auth_probe: str
    atomic_replace: bool
    insert_batch_size: int

    @classmethod
    def from_env(cls) -> "FilmSyncConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FilmSyncConfigError: If environment values are invalid.
        """
        credential = SessionCredential(
            username=os.getenv("LETTERBOXD_USERNAME", ""),
            password=os.getenv("LETTERBOXD_KEY", ""),
        )
        return cls(
            credential=credential,
            database_url=os.getenv("FILMSYNC_DATABASE_URL") or None,
            browser_path=os.getenv("FILMSYNC_BROWSER_PATH", DEFAULT_BROWSER_PATH),
            headless=_parse_bool("FILMSYNC_HEADLESS", os.getenv("FILMSYNC_HEADLESS", "true")),
            settle_seconds=_parse_settle_seconds(
                os.getenv("FILMSYNC_SETTLE_SECONDS", str(DEFAULT_SETTLE_SECONDS))
            ),
            auth_probe=_parse_auth_probe(os.getenv("FILMSYNC_AUTH_PROBE", DEFAULT_AUTH_PROBE)),
            atomic_replace=_parse_bool(
                "FILMSYNC_ATOMIC_REPLACE", os.getenv("FILMSYNC_ATOMIC_REPLACE", "false")
            ),
            insert_batch_size=_parse_batch_size(
                os.getenv("FILMSYNC_INSERT_BATCH_SIZE", str(DEFAULT_INSERT_BATCH_SIZE))
            ),
        )


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        FilmSyncConfigError: If value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise FilmSyncConfigError(
        f"Invalid {name} value: expected one of {_TRUE_VALUES + _FALSE_VALUES}, "
        f"got '{raw_value}'. Set {name} to true or false."
    )


def _parse_settle_seconds(raw_value: str) -> float:
    """Parse the post-download settling delay.

    Raises:
        FilmSyncConfigError: If value is not a non-negative number.
    """
    try:
        seconds = float(raw_value)
    except ValueError as error:
        raise FilmSyncConfigError(
            "Invalid FILMSYNC_SETTLE_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set FILMSYNC_SETTLE_SECONDS to a numeric value."
        ) from error
    if seconds < 0:
        raise FilmSyncConfigError(
            f"Invalid FILMSYNC_SETTLE_SECONDS value: {seconds} is negative. "
            "Use zero or a positive delay."
        )
    return seconds


def _parse_auth_probe(raw_value: str) -> str:
    """Validate the auth probe name."""
    probe_name = raw_value.strip().lower()
    if probe_name not in SUPPORTED_AUTH_PROBES:
        raise FilmSyncConfigError(
            f"Unsupported FILMSYNC_AUTH_PROBE '{raw_value}'. "
            f"Choose one of: {', '.join(SUPPORTED_AUTH_PROBES)}."
        )
    return probe_name


def _parse_batch_size(raw_value: str) -> int:
    """Parse rows-per-statement for bulk inserts.

    Raises:
        FilmSyncConfigError: If value is not an integer within bounds.
    """
    try:
        batch_size = int(raw_value)
    except ValueError as error:
        raise FilmSyncConfigError(
            "Invalid FILMSYNC_INSERT_BATCH_SIZE value: "
            f"expected integer, got '{raw_value}'."
        ) from error
    if not 1 <= batch_size <= MAX_INSERT_BATCH_SIZE:
        raise FilmSyncConfigError(
            f"Invalid FILMSYNC_INSERT_BATCH_SIZE value: {batch_size}. "
            f"Use a value between 1 and {MAX_INSERT_BATCH_SIZE}."
        )
    return batch_size
