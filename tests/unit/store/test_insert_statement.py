"""Unit tests for multi-row INSERT building."""

from __future__ import annotations

import pytest

from core.errors import StatementBuildError
from core.types import FilmRecord, FilmStatus
from store.insert_statement import InsertStatementBuilder, build_insert_statements


def _record(name: str, **overrides: object) -> FilmRecord:
    fields: dict[str, object] = {
        "name": name,
        "year": 1979,
        "link": f"https://boxd.it/{name}",
        "status": FilmStatus.WATCHED,
        "date_updated": "2021-05-01",
        "rating": 4.5,
    }
    fields.update(overrides)
    return FilmRecord(**fields)  # type: ignore[arg-type]


def test_builder_numbers_placeholders_across_fragments() -> None:
    """Each fragment should continue the positional parameter numbering."""
    builder = InsertStatementBuilder()
    builder.append(_record("a"))
    builder.append(_record("b", status=FilmStatus.TOWATCH, rating=None))

    statement = builder.build()

    assert statement is not None
    assert statement.sql == (
        "INSERT INTO films (name, year, link, status, date_updated, rating) "
        "VALUES ($1, $2, $3, $4, $5, $6), ($7, $8, $9, $10, $11, $12)"
    )
    assert statement.parameters[6:] == (
        "b",
        1979,
        "https://boxd.it/b",
        "towatch",
        "2021-05-01",
        None,
    )


def test_builder_without_fragments_builds_nothing() -> None:
    """An empty builder should not produce a statement."""
    assert InsertStatementBuilder().build() is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"year": "1979"},
        {"year": True},
        {"rating": "five"},
        {"rating": float("nan")},
        {"status": "seen"},
        {"date_updated": 20210501},
        {"link": ""},
    ],
)
def test_builder_rejects_unbindable_values(overrides: dict[str, object]) -> None:
    """Malformed values should raise while appending the fragment."""
    builder = InsertStatementBuilder()

    with pytest.raises(StatementBuildError):
        builder.append(_record("bad", **overrides))

    assert builder.row_count == 0


def test_build_insert_statements_drops_bad_fragments_and_continues() -> None:
    """A bad record should be left out while the rest are still inserted."""
    records = [_record("a"), _record("bad", year="nineteen"), _record("c")]

    statements = build_insert_statements(records)

    assert len(statements) == 1
    assert statements[0].row_count == 2
    assert "bad" not in statements[0].parameters


def test_build_insert_statements_splits_batches() -> None:
    """Statements should hold at most batch_size fragments each."""
    records = [_record(str(index)) for index in range(5)]

    statements = build_insert_statements(records, batch_size=2)

    assert [statement.row_count for statement in statements] == [2, 2, 1]
    assert statements[1].parameters[0] == "2"


def test_build_insert_statements_returns_empty_for_no_records() -> None:
    """No records should produce no statements."""
    assert build_insert_statements([]) == []
