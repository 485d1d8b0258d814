"""
Entry <-> spreadsheet row mapping.

The sheet keeps one entry per row in a fixed id-first layout (columns A..I).
Both directions are total: encoding always yields nine strings, decoding never
raises and degrades malformed cells to "unknown" values instead.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from app.schemas import CATEGORIES, FALLBACK_CATEGORY, VERBATIM_DATES, Category, Entry, EntryDraft
from app.utils.dates import serial_to_iso

HEADERS: Tuple[str, ...] = (
    "id",
    "product",
    "category",
    "date",
    "amount",
    "units",
    "cleanState",
    "skinState",
    "comments",
)
COLUMN_COUNT = len(HEADERS)
ID_COLUMN = HEADERS.index("id")
AMOUNT_COLUMN = HEADERS.index("amount")
# Свободный текст: при USER_ENTERED Sheets превратит "0012" в 12, а "=x" в формулу
TEXT_COLUMNS = tuple(HEADERS.index(name) for name in ("id", "product", "units", "comments"))
LITERAL_PREFIX = "'"

YES_TOKEN = "כן"
NO_TOKEN = "לא"

# Публичный CSV-экспорт заполняют руками, поэтому там принимаем больше вариантов
LENIENT_YES = {"true", "1", "yes", "y", YES_TOKEN}
LENIENT_NO = {"false", "0", "no", "n", NO_TOKEN}

Row = Tuple[str, ...]


def bool_to_cell(value: Optional[bool]) -> str:
    if value is True:
        return YES_TOKEN
    if value is False:
        return NO_TOKEN
    return ""


def cell_to_bool(cell: Any) -> Optional[bool]:
    text = _text(cell).strip()
    if text == YES_TOKEN:
        return True
    if text == NO_TOKEN:
        return False
    return None


def lenient_bool(cell: Any) -> Optional[bool]:
    text = _text(cell).strip().lower()
    if text in LENIENT_YES:
        return True
    if text in LENIENT_NO:
        return False
    return None


def amount_to_cell(amount: Optional[float]) -> str:
    if amount is None or math.isnan(amount):
        return ""
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def cell_to_amount(cell: Any) -> float:
    text = _text(cell).strip().replace(",", ".", 1)
    if not text or "_" in text:
        return math.nan
    try:
        value = float(text)
    except ValueError:
        return math.nan
    return value if math.isfinite(value) else math.nan


def cell_to_date(cell: Any) -> str:
    """Serial day numbers (UNFORMATTED_VALUE reads) become YYYY-MM-DD; text is kept verbatim."""
    if isinstance(cell, (int, float)) and not isinstance(cell, bool):
        return serial_to_iso(cell) if math.isfinite(cell) else ""
    return _text(cell).strip()


def cell_to_category(cell: Any) -> Category:
    text = _text(cell).strip()
    for category in CATEGORIES:
        if category.value == text:
            return category
    return FALLBACK_CATEGORY


def pad_row(cells: Sequence[Any]) -> Tuple[Any, ...]:
    """Fixed-width row: missing trailing cells become "", extra cells are dropped."""
    values = ["" if cell is None else cell for cell in list(cells)[:COLUMN_COUNT]]
    values.extend([""] * (COLUMN_COUNT - len(values)))
    return tuple(values)


def encode(entry: EntryDraft) -> Row:
    return (
        entry.id or "",
        entry.product or "",
        entry.category.value,
        entry.date or "",
        amount_to_cell(entry.amount),
        entry.units or "",
        bool_to_cell(entry.clean_state),
        bool_to_cell(entry.skin_state),
        entry.comments or "",
    )


def decode(cells: Sequence[Any]) -> Entry:
    row = pad_row(cells)
    return Entry.model_validate(
        {
            "id": _text(row[0]),
            "product": _text(row[1]),
            "category": cell_to_category(row[2]),
            "date": cell_to_date(row[3]),
            "amount": cell_to_amount(row[4]),
            "units": _text(row[5]),
            "clean_state": cell_to_bool(row[6]),
            "skin_state": cell_to_bool(row[7]),
            "comments": _text(row[8]),
        },
        context=VERBATIM_DATES,
    )


def decode_record(record: Mapping[str, Any]) -> Entry:
    """Decodes a header-keyed record such as a row of the public CSV export."""
    return Entry.model_validate(
        {
            "id": _text(record.get("id")),
            "product": _text(record.get("product")),
            "category": cell_to_category(record.get("category")),
            "date": cell_to_date(record.get("date")),
            "amount": cell_to_amount(record.get("amount")),
            "units": _text(record.get("units")),
            "clean_state": lenient_bool(record.get("cleanState")),
            "skin_state": lenient_bool(record.get("skinState")),
            "comments": _text(record.get("comments")),
        },
        context=VERBATIM_DATES,
    )


def _text(cell: Any) -> str:
    if cell is None:
        return ""
    return cell if isinstance(cell, str) else str(cell)


def quote_text_cells(row: Sequence[str]) -> Row:
    """
    Prefixes non-empty free-text cells with an apostrophe before a USER_ENTERED
    write. Sheets keeps such a cell as literal text and drops the apostrophe,
    so ids like "0012" and comments like "=2+2" read back unchanged.
    """
    return tuple(
        LITERAL_PREFIX + cell if idx in TEXT_COLUMNS and cell else cell
        for idx, cell in enumerate(row)
    )
