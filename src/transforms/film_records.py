"""Film record transform.

This module maps raw diary and watchlist rows into validated film
records and merges both categories into one ordered record set.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import (
    DATE_COLUMN,
    LINK_COLUMN,
    NAME_COLUMN,
    RATING_COLUMN,
    WATCHED_DATE_COLUMN,
    YEAR_COLUMN,
)
from core.logging_config import get_logger
from core.types import FilmRecord, FilmStatus, RawRow

_LOGGER = get_logger(__name__)


def transform_films(rows: Iterable[RawRow], status: FilmStatus) -> list[FilmRecord]:
    """Build film records from raw export rows.

    Rows missing a name, year, or link are dropped silently; exports
    routinely contain such rows and they are not treated as errors.

    Args:
        rows: Raw CSV rows from one export payload.
        status: Category attached to every record.

    Returns:
        Valid records in input order.
    """
    candidates = [_build_record(row, status) for row in rows]
    records = [record for record in candidates if _is_valid(record)]
    _LOGGER.debug(
        "films_transformed",
        status=status.value,
        input_count=len(candidates),
        output_count=len(records),
        dropped_count=len(candidates) - len(records),
    )
    return records


def merge_film_records(
    watched: Iterable[FilmRecord],
    towatch: Iterable[FilmRecord],
) -> list[FilmRecord]:
    """Concatenate watched records ahead of watchlist records.

    Args:
        watched: Diary records.
        towatch: Watchlist records.

    Returns:
        Merged record set with each category's order preserved.
    """
    return [*watched, *towatch]


def _build_record(row: RawRow, status: FilmStatus) -> FilmRecord:
    """Map one raw row onto the record fields."""
    return FilmRecord(
        name=row.get(NAME_COLUMN) or "",
        year=_parse_year(row.get(YEAR_COLUMN)),
        link=row.get(LINK_COLUMN) or "",
        status=status,
        # diary exports use "Watched Date", watchlist exports only "Date"
        date_updated=row.get(WATCHED_DATE_COLUMN) or row.get(DATE_COLUMN) or None,
        rating=_parse_rating(row.get(RATING_COLUMN)),
    )


def _is_valid(record: FilmRecord) -> bool:
    """Return whether a record has every required field."""
    return bool(record.name and record.year and record.link)


def _parse_year(raw_value: str | None) -> int | None:
    """Parse a release year, returning None for blank or non-numeric cells."""
    if not raw_value or not raw_value.strip():
        return None
    try:
        return int(raw_value.strip())
    except ValueError:
        return None


def _parse_rating(raw_value: str | None) -> float | None:
    """Parse a star rating, returning None for blank or non-numeric cells."""
    if not raw_value or not raw_value.strip():
        return None
    try:
        return float(raw_value.strip())
    except ValueError:
        return None
