from __future__ import annotations

import logging
import math
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from app.schemas import Entry, EntryDraft
from app.services import entry_codec, row_locator
from app.services.store_errors import (
    ContainerNotFound,
    EntryNotFound,
    StoreUnavailable,
    describe_transport_error,
)
from sheets_backend import ranges
from sheets_backend.client import SheetsBackend

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


@dataclass(frozen=True)
class StoreConfig:
    spreadsheet_id: str
    sheet_name: str
    credentials_path: str = ""


class EntryStore:
    """
    CRUD over the entries sheet.

    Row numbers are never cached: update and delete re-read the id column on
    every call, because deleting a row shifts every row below it. The window
    between locating a row and mutating it is not protected against other
    writers; the Sheets API offers no conditional row operation.
    """

    def __init__(self, config: StoreConfig, backend):
        self.config = config
        self.backend = backend

    @classmethod
    def from_config(cls, config: StoreConfig) -> "EntryStore":
        with _transport("connect to Google Sheets"):
            backend = SheetsBackend.from_credentials(config.credentials_path, config.spreadsheet_id)
        return cls(config, backend)

    @property
    def sheet_name(self) -> str:
        return self.config.sheet_name

    # --- reads ---

    def read_all(self) -> List[Entry]:
        with _transport("read entries"):
            values = self.backend.fetch_range(
                self.sheet_name, ranges.open_range(entry_codec.COLUMN_COUNT)
            )
        if not values:
            return []
        return [entry_codec.decode(row) for row in values[1:]]

    def get_container_id(self, name: Optional[str] = None) -> int:
        container_name = name or self.sheet_name
        with _transport("read spreadsheet metadata"):
            metadata = self.backend.get_container_metadata(container_name)
        if metadata is None:
            raise ContainerNotFound(container_name)
        return metadata["handle"]

    def locate_row(self, entry_id: str) -> int:
        if not entry_id:
            raise EntryNotFound(entry_id)
        with _transport("read id column"):
            values = self.backend.fetch_range(
                self.sheet_name, ranges.column_range(entry_codec.ID_COLUMN)
            )
        row_number = row_locator.locate(row_locator.flatten_column(values), entry_id)
        if row_number is None:
            logger.warning("Entry %s not found in sheet '%s'", entry_id, self.sheet_name)
            raise EntryNotFound(entry_id)
        return row_number

    # --- mutations ---

    def append(self, draft: EntryDraft) -> str:
        entry_id = draft.id or uuid.uuid4().hex
        entry = draft.model_copy(update={"id": entry_id})
        with _transport("append entry"):
            self.backend.append_row(
                self.sheet_name,
                ranges.open_range(entry_codec.COLUMN_COUNT),
                entry_codec.quote_text_cells(entry_codec.encode(entry)),
            )
        logger.info("Appended entry %s (%s)", entry_id, entry.product)
        return entry_id

    def update_by_id(self, entry_id: str, entry: EntryDraft) -> None:
        row_number = self.locate_row(entry_id)
        # id в строке всегда тот, по которому адресовались
        record = entry.model_copy(update={"id": entry_id})
        with _transport("update entry"):
            self.backend.overwrite_range(
                self.sheet_name,
                ranges.row_range(row_number, entry_codec.COLUMN_COUNT),
                entry_codec.quote_text_cells(entry_codec.encode(record)),
            )
        logger.info("Updated entry %s at row %s", entry_id, row_number)

    def delete_by_id(self, entry_id: str) -> None:
        sheet_id = self.get_container_id()
        row_number = self.locate_row(entry_id)
        with _transport("delete entry"):
            self.backend.remove_rows(sheet_id, start_index=row_number - 1, end_index=row_number)
        logger.info("Deleted entry %s from row %s", entry_id, row_number)

    def delete_many(self, entry_ids: Iterable[str]) -> int:
        deleted = 0
        for entry_id in entry_ids:
            self.delete_by_id(entry_id)
            deleted += 1
        return deleted

    def adjust_amount(self, entry_id: str, delta: float) -> Entry:
        current = next((e for e in self.read_all() if entry_id and e.id == entry_id), None)
        if current is None:
            raise EntryNotFound(entry_id)
        base = 0.0 if math.isnan(current.amount) else current.amount
        updated = current.model_copy(update={"amount": max(0.0, base + delta)})
        # Пишем только ячейку количества, остальные ячейки строки не трогаем
        row_number = self.locate_row(entry_id)
        with _transport("update amount"):
            self.backend.overwrite_range(
                self.sheet_name,
                ranges.cell_range(row_number, entry_codec.AMOUNT_COLUMN),
                [entry_codec.amount_to_cell(updated.amount)],
            )
        logger.info("Adjusted amount of entry %s at row %s", entry_id, row_number)
        return updated

    def ensure_header(self) -> bool:
        width = entry_codec.COLUMN_COUNT
        with _transport("read header row"):
            values = self.backend.fetch_range(self.sheet_name, ranges.row_range(1, width))
        first_row = values[0] if values else []
        if any(str(cell).strip() for cell in first_row):
            return False
        with _transport("write header row"):
            self.backend.overwrite_range(self.sheet_name, ranges.row_range(1, width), entry_codec.HEADERS)
        logger.info("Header row written to sheet '%s'", self.sheet_name)
        return True


@contextmanager
def _transport(action: str):
    try:
        yield
    except TRANSPORT_ERRORS as exc:
        message = describe_transport_error(exc)
        logger.warning("Failed to %s: %s", action, message)
        raise StoreUnavailable(f"Failed to {action}: {message}") from exc
