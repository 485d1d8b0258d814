from typing import Dict, List
from urllib.parse import quote

import pandas as pd


def csv_export_url(spreadsheet_id: str, sheet_name: str) -> str:
    return (
        f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}"
        f"/gviz/tq?tqx=out:csv&sheet={quote(sheet_name)}"
    )


def load_csv_records(source) -> List[Dict[str, str]]:
    """
    Reads a published sheet as CSV (first row is the header).
    `source` is anything pandas.read_csv accepts: URL, path or file-like object.
    Keys and values are trimmed, fully empty rows are dropped.
    """
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        return []

    records = []
    for row in df.to_dict("records"):
        cleaned = {}
        for key, value in row.items():
            name = str(key if key is not None else "").strip()
            if name:
                cleaned[name] = str(value if value is not None else "").strip()
        if any(cleaned.values()):
            records.append(cleaned)
    return records
