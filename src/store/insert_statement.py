"""Multi-row INSERT statement building.

This module grows a parameterized INSERT one record fragment at a time.
Records whose fragment cannot be composed are logged and left out.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from core.constants import DEFAULT_INSERT_BATCH_SIZE, FILM_INSERT_COLUMNS, FILMS_TABLE_NAME
from core.errors import StatementBuildError
from core.logging_config import get_logger
from core.types import FilmRecord, FilmStatus

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class InsertStatement:
    """Executable INSERT with positional parameters.

    Attributes:
        sql: Statement text using ``$n`` placeholders.
        parameters: Flattened values in placeholder order.
        row_count: Number of value fragments in the statement.
    """

    sql: str
    parameters: tuple[object, ...]
    row_count: int


class InsertStatementBuilder:
    """Accumulates record fragments for one INSERT statement."""

    def __init__(
        self,
        table_name: str = FILMS_TABLE_NAME,
        columns: tuple[str, ...] = FILM_INSERT_COLUMNS,
    ) -> None:
        self._table_name = table_name
        self._columns = columns
        self._fragments: list[str] = []
        self._parameters: list[object] = []

    @property
    def row_count(self) -> int:
        """Return the number of fragments appended so far."""
        return len(self._fragments)

    def append(self, record: FilmRecord) -> None:
        """Append one record's value fragment.

        Args:
            record: Film record to insert.

        Raises:
            StatementBuildError: If a record value cannot be bound.
        """
        values = _fragment_values(record)
        offset = len(self._parameters)
        placeholders = ", ".join(f"${offset + index}" for index in range(1, len(values) + 1))
        self._fragments.append(f"({placeholders})")
        self._parameters.extend(values)

    def build(self) -> InsertStatement | None:
        """Return the composed statement, or None when nothing was appended."""
        if not self._fragments:
            return None
        sql = (
            f"INSERT INTO {self._table_name} ({', '.join(self._columns)}) "
            f"VALUES {', '.join(self._fragments)}"
        )
        return InsertStatement(
            sql=sql,
            parameters=tuple(self._parameters),
            row_count=len(self._fragments),
        )


def build_insert_statements(
    records: Iterable[FilmRecord],
    batch_size: int = DEFAULT_INSERT_BATCH_SIZE,
) -> list[InsertStatement]:
    """Compose batched INSERT statements for records.

    A record whose fragment fails to compose is dropped from its
    statement and logged; the rest of the batch is still built.

    Args:
        records: Records to insert, in order.
        batch_size: Maximum fragments per statement.

    Returns:
        Statements in record order. Empty when no record survived.
    """
    statements: list[InsertStatement] = []
    builder = InsertStatementBuilder()
    for record in records:
        try:
            builder.append(record)
        except StatementBuildError as error:
            _LOGGER.error("insert_fragment_dropped", record=repr(record), reason=str(error))
            continue
        if builder.row_count >= batch_size:
            _append_built(statements, builder)
            builder = InsertStatementBuilder()
    _append_built(statements, builder)
    return statements


def _append_built(statements: list[InsertStatement], builder: InsertStatementBuilder) -> None:
    statement = builder.build()
    if statement is not None:
        statements.append(statement)


def _fragment_values(record: FilmRecord) -> tuple[object, ...]:
    """Validate and order one record's column values.

    Raises:
        StatementBuildError: If any value has an unbindable type.
    """
    if not isinstance(record.name, str) or not record.name:
        raise StatementBuildError(f"name must be a non-empty string, got {record.name!r}")
    if not isinstance(record.link, str) or not record.link:
        raise StatementBuildError(f"link must be a non-empty string, got {record.link!r}")
    if record.year is not None and not _is_plain_int(record.year):
        raise StatementBuildError(f"year must be an integer, got {record.year!r}")
    if record.date_updated is not None and not isinstance(record.date_updated, str):
        raise StatementBuildError(f"date_updated must be a string, got {record.date_updated!r}")
    try:
        status = FilmStatus(record.status)
    except ValueError as error:
        raise StatementBuildError(f"unknown status {record.status!r}") from error
    return (
        record.name,
        record.year,
        record.link,
        status.value,
        record.date_updated,
        _rating_value(record.rating),
    )


def _rating_value(rating: object) -> float | None:
    if rating is None:
        return None
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise StatementBuildError(f"rating must be a number, got {rating!r}")
    if not math.isfinite(rating):
        raise StatementBuildError(f"rating must be a finite number, got {rating!r}")
    return float(rating)


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
