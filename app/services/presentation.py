from __future__ import annotations

import math
from typing import Dict, List, Sequence

from app.schemas import VERBATIM_DATES, Category, Entry, EntryGroup, GroupedEntry
from app.services.entry_codec import HEADERS
from app.utils.dates import format_date_ddmmyy

SORT_KEYS = ("product", "category", "date", "amount")
MEAT_ONLY_COLUMNS = ("cleanState", "skinState")


def columns_for(category: Category) -> List[str]:
    """Table columns for a category group; the clean/skin flags only make sense for meat."""
    columns = [name for name in HEADERS if name != "id"]
    if category is not Category.MEAT:
        columns = [name for name in columns if name not in MEAT_ONLY_COLUMNS]
    return columns


def group_by_category(entries: Sequence[Entry]) -> Dict[Category, List[Entry]]:
    groups: Dict[Category, List[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.category, []).append(entry)
    return groups


def sort_entries(entries: Sequence[Entry], key: str = "date", descending: bool = False) -> List[Entry]:
    """
    Stable sort by one column. Blank dates and unknown amounts always go last,
    whatever the direction.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {key}")

    def is_blank(entry: Entry) -> bool:
        if key == "amount":
            return math.isnan(entry.amount)
        if key == "date":
            return not entry.date
        return False

    def value(entry: Entry):
        if key == "category":
            return entry.category.value
        if key == "product":
            return entry.product.casefold()
        return getattr(entry, key)

    present = [e for e in entries if not is_blank(e)]
    blank = [e for e in entries if is_blank(e)]
    return sorted(present, key=value, reverse=descending) + blank


def with_display_date(entry: Entry) -> GroupedEntry:
    """Adds the DD/MM/YY form of the entry date shown in the table."""
    return GroupedEntry.model_validate(
        {**entry.model_dump(), "display_date": format_date_ddmmyy(entry.date)},
        context=VERBATIM_DATES,
    )


def build_groups(entries: Sequence[Entry], sort_key: str = "date", descending: bool = False) -> List[EntryGroup]:
    return [
        EntryGroup(
            category=category,
            columns=columns_for(category),
            entries=[with_display_date(e) for e in sort_entries(rows, sort_key, descending)],
        )
        for category, rows in group_by_category(entries).items()
    ]
