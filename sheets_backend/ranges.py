"""A1 notation helpers for Sheets v4 requests."""


def column_letter(idx: int) -> str:
    """Convert zero-based index to column letter (A, B, ..., AA, AB, ...)."""
    result = ""
    current = idx + 1
    while current > 0:
        current, remainder = divmod(current - 1, 26)
        result = chr(65 + remainder) + result
    return result


def quote_sheet_name(name: str) -> str:
    # Одинарные кавычки внутри имени листа удваиваются
    return "'" + name.replace("'", "''") + "'"


def qualify(sheet_name: str, range_spec: str) -> str:
    return f"{quote_sheet_name(sheet_name)}!{range_spec}"


def column_range(col_idx: int) -> str:
    letter = column_letter(col_idx)
    return f"{letter}:{letter}"


def open_range(width: int, start_row: int = 1) -> str:
    """Columns A..width from start_row down to the last filled row, e.g. A1:I."""
    return f"A{start_row}:{column_letter(width - 1)}"


def row_range(row_number: int, width: int) -> str:
    """Exactly one row, e.g. A5:I5."""
    return f"A{row_number}:{column_letter(width - 1)}{row_number}"


def cell_range(row_number: int, col_idx: int) -> str:
    """A single cell as a one-cell range, e.g. E5:E5."""
    letter = column_letter(col_idx)
    return f"{letter}{row_number}:{letter}{row_number}"
