from __future__ import annotations

from typing import Any, List, Optional, Sequence

HEADER_ROW = 1


def flatten_column(values: Sequence[Sequence[Any]]) -> List[str]:
    """
    Sheets API returns a single column as [["id"], ["a"], [], ["b"]];
    empty trailing cells come back as short (or empty) rows.
    """
    column = []
    for row in values or []:
        cell = row[0] if row else ""
        column.append("" if cell is None else str(cell))
    return column


def locate(column_values: Sequence[Optional[str]], target_id: str) -> Optional[int]:
    """
    Returns the 1-based row number of the first cell equal to target_id.

    A first match on the header row counts as "not found", as does an empty
    target: blank cells must never address a data row.
    """
    if not target_id:
        return None
    for idx, value in enumerate(column_values):
        if value == target_id:
            row_number = idx + 1
            return row_number if row_number > HEADER_ROW else None
    return None
