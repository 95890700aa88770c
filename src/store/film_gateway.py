"""Persistence gateway interface for film records.

This module defines the store operations the sync pipeline depends on.
A full replace is delete-all followed by one bulk insert.
"""

from __future__ import annotations

from typing import AsyncContextManager, Protocol, Sequence

from core.types import FilmRecord


class FilmGateway(Protocol):
    """Store accepting a full-table replace of film records."""

    async def delete_all(self) -> None:
        """Remove every stored film record."""
        ...

    async def bulk_insert(self, records: Sequence[FilmRecord]) -> None:
        """Insert records with multi-row statements."""
        ...

    def transaction(self) -> AsyncContextManager[None]:
        """Scope subsequent calls in one transaction, rolled back on error."""
        ...
