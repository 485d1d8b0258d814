from __future__ import annotations

import logging
from typing import List

import pandas as pd

from app.schemas import Entry
from app.services.entry_codec import decode_record
from app.services.store_errors import StoreUnavailable
from sheets_backend.csv_export import load_csv_records

logger = logging.getLogger(__name__)


def read_public_entries(source) -> List[Entry]:
    """
    Read-only path through the sheet's published CSV export: no credentials,
    header-keyed columns, lenient boolean parsing.
    """
    try:
        records = load_csv_records(source)
    except (OSError, pd.errors.ParserError) as exc:
        logger.warning("CSV export unavailable: %s", exc)
        raise StoreUnavailable(f"Failed to read CSV export: {exc}") from exc
    return [decode_record(record) for record in records]
