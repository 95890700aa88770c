"""Postgres-backed film store.

This module persists film records to one table over a single asyncpg
connection. Each sync run deletes every row and bulk-inserts the new set.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Sequence

import asyncpg

from core.config import FilmSyncConfig
from core.constants import DEFAULT_INSERT_BATCH_SIZE, FILMS_TABLE_NAME
from core.errors import FilmSyncConfigError, PersistenceError
from core.logging_config import get_logger
from core.types import FilmRecord
from store.insert_statement import build_insert_statements

_LOGGER = get_logger(__name__)

Connector = Callable[[str], Awaitable[Any]]

# No uniqueness on link: a diary lists the same film once per rewatch.
_CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {FILMS_TABLE_NAME} (
    name TEXT NOT NULL,
    year INTEGER,
    link TEXT NOT NULL,
    status TEXT NOT NULL,
    date_updated TEXT,
    rating REAL
)
"""

_DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


async def _asyncpg_connect(database_url: str) -> Any:
    return await asyncpg.connect(dsn=database_url)


class PostgresFilmStore:
    """Film gateway over one asyncpg connection.

    Use as an async context manager so the connection is closed on
    every exit path.
    """

    def __init__(
        self,
        database_url: str,
        insert_batch_size: int = DEFAULT_INSERT_BATCH_SIZE,
        connector: Connector = _asyncpg_connect,
    ) -> None:
        """Create an unconnected store.

        Args:
            database_url: Postgres DSN.
            insert_batch_size: Maximum rows per INSERT statement.
            connector: Coroutine factory opening a connection from a DSN.
        """
        self._database_url = database_url
        self._insert_batch_size = insert_batch_size
        self._connector = connector
        self._connection: Any = None

    @classmethod
    def from_config(cls, config: FilmSyncConfig) -> "PostgresFilmStore":
        """Build a store from runtime config.

        Raises:
            FilmSyncConfigError: If no database URL is configured.
        """
        if not config.database_url:
            raise FilmSyncConfigError(
                "FILMSYNC_DATABASE_URL is not set. "
                "Provide a Postgres DSN or run sync with --dry-run."
            )
        return cls(config.database_url, insert_batch_size=config.insert_batch_size)

    async def __aenter__(self) -> "PostgresFilmStore":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def connect(self) -> None:
        """Open the connection and create the films table if missing.

        Raises:
            PersistenceError: If the database is unreachable.
        """
        try:
            self._connection = await self._connector(self._database_url)
        except _DATABASE_ERRORS as error:
            raise PersistenceError(
                f"Failed to connect to film store: {error}. "
                "Check FILMSYNC_DATABASE_URL and that Postgres is reachable."
            ) from error
        await self.ensure_schema()

    async def close(self) -> None:
        """Close the connection if open."""
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        await connection.close()

    async def ensure_schema(self) -> None:
        """Create the films table when it does not exist."""
        await self._execute(_CREATE_TABLE_SQL)

    async def delete_all(self) -> None:
        """Remove every stored film record.

        Raises:
            PersistenceError: If the statement fails.
        """
        await self._execute(f"DELETE FROM {FILMS_TABLE_NAME}")
        _LOGGER.info("films_deleted", table=FILMS_TABLE_NAME)

    async def bulk_insert(self, records: Sequence[FilmRecord]) -> None:
        """Insert records with batched multi-row statements.

        Records whose value fragment fails to compose are skipped.

        Args:
            records: Records to insert.

        Raises:
            PersistenceError: If a statement fails.
        """
        statements = build_insert_statements(records, self._insert_batch_size)
        inserted_count = 0
        for statement in statements:
            await self._execute(statement.sql, *statement.parameters)
            inserted_count += statement.row_count
        _LOGGER.info(
            "films_inserted",
            table=FILMS_TABLE_NAME,
            record_count=len(records),
            inserted_count=inserted_count,
            statement_count=len(statements),
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the enclosed calls in one transaction.

        Raises:
            PersistenceError: If the transaction cannot start or commit.
        """
        connection = self._require_connection()
        try:
            transaction = connection.transaction()
            await transaction.start()
        except _DATABASE_ERRORS as error:
            raise PersistenceError(f"Failed to start transaction: {error}") from error
        try:
            yield
        except BaseException:
            await _rollback_quietly(transaction)
            raise
        try:
            await transaction.commit()
        except _DATABASE_ERRORS as error:
            raise PersistenceError(f"Failed to commit film replace: {error}") from error

    async def _execute(self, sql: str, *parameters: object) -> None:
        connection = self._require_connection()
        try:
            await connection.execute(sql, *parameters)
        except _DATABASE_ERRORS as error:
            raise PersistenceError(
                f"Film store statement failed: {error}. Statement: {sql[:120]}"
            ) from error

    def _require_connection(self) -> Any:
        if self._connection is None:
            raise PersistenceError("Film store is not connected. Call connect() first.")
        return self._connection


async def _rollback_quietly(transaction: Any) -> None:
    """Roll back without masking the error that caused the rollback."""
    try:
        await transaction.rollback()
    except _DATABASE_ERRORS as error:
        _LOGGER.error("transaction_rollback_failed", error=str(error))
