"""Tabular export parsing.

This module turns CSV-with-header text into raw row mappings.
Column names come from the first line of each payload.
"""

from __future__ import annotations

import csv
import io

from core.errors import ParseError
from core.types import RawRow


def parse_csv_rows(text: str, source_name: str = "<text>") -> list[RawRow]:
    """Parse CSV text into header-keyed rows.

    Args:
        text: Full CSV payload including its header line.
        source_name: Entry name used in error messages.

    Returns:
        Ordered rows. Cells missing from short lines are ``None``.

    Raises:
        ParseError: If the CSV is malformed.
    """
    if not text.strip():
        return []
    reader = csv.DictReader(io.StringIO(text, newline=""), strict=True)
    try:
        return [dict(row) for row in reader]
    except csv.Error as error:
        raise ParseError(
            f"Failed to parse {source_name} at line {reader.line_num}: {error}. "
            "The export format may have changed."
        ) from error
