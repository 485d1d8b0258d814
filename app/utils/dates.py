from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

DISPLAY_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/(\d{2}|\d{4})$")

# День 0 у серийных дат Google Sheets
SHEETS_EPOCH = date(1899, 12, 30)


def serial_to_iso(serial: float) -> str:
    """Sheets SERIAL_NUMBER (days since 1899-12-30, time as fraction) -> YYYY-MM-DD."""
    return (SHEETS_EPOCH + timedelta(days=int(serial))).isoformat()


def format_date_ddmmyy(value: Optional[str]) -> str:
    """YYYY-MM-DD -> DD/MM/YY. Anything that is not three dash-separated parts is returned as is."""
    if not value:
        return ""
    parts = value.split("-")
    if len(parts) != 3 or not all(parts):
        return value
    year, month, day = parts
    return f"{day}/{month}/{year[-2:]}"


def parse_date_ddmmyy(value: Optional[str]) -> str:
    """DD/MM/YY or DD/MM/YYYY -> YYYY-MM-DD. Two-digit years are read as 20xx."""
    if not value:
        return ""
    parts = value.split("/")
    if len(parts) != 3:
        return value
    day, month, year = parts
    if len(year) == 2:
        year = f"20{year}"
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def normalize_date(value: str) -> str:
    # Только для ввода пользователя: форма ввода в формате DD/MM/YY
    text = (value or "").strip()
    if DISPLAY_DATE_RE.match(text):
        return parse_date_ddmmyy(text)
    return text
