# tests/conftest.py

import os
import re

import pytest
from passlib.hash import pbkdf2_sha256

# Учётка владельца должна быть в окружении до импорта app.config
TEST_USER = "owner"
TEST_PASSWORD = "freezerpass"
os.environ["APP_USERNAME"] = TEST_USER
os.environ["APP_PASSWORD_HASH"] = pbkdf2_sha256.hash(TEST_PASSWORD)
os.environ["SECRET_KEY"] = "test-secret"

from fastapi.testclient import TestClient  # noqa: E402
from google.auth.exceptions import TransportError  # noqa: E402

from app.main import app  # noqa: E402
from app.services.entry_codec import HEADERS  # noqa: E402
from app.services.entry_store import EntryStore, StoreConfig  # noqa: E402
from app.store import get_entry_store  # noqa: E402

SHEET_NAME = "list"
SHEET_ID = 0

RANGE_RE = re.compile(r"^([A-Z]+)(\d*):([A-Z]+)(\d*)$")


def _user_entered(row_values):
    return [v[1:] if isinstance(v, str) and v.startswith("'") else v for v in row_values]


def _col_index(letters: str) -> int:
    idx = 0
    for ch in letters:
        idx = idx * 26 + (ord(ch) - 64)
    return idx - 1


class FakeSheetsBackend:
    """
    In-memory spreadsheet with the SheetsBackend interface.
    Trailing empty cells and trailing empty rows are trimmed on read, like the real API.
    Cells are returned unformatted, as stored. Writes drop a leading apostrophe the
    way USER_ENTERED does for quoted text.
    """

    def __init__(self, rows=None, sheets=None):
        self.rows = [list(row) for row in (rows or [])]
        self.sheets = sheets if sheets is not None else {SHEET_NAME: SHEET_ID}
        self.calls = []
        self.fail_with = None

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None:
            raise self.fail_with

    def _check_sheet(self, container_name):
        assert container_name in self.sheets, f"unknown sheet {container_name}"

    def _parse(self, range_spec):
        match = RANGE_RE.match(range_spec)
        assert match, f"unsupported range {range_spec}"
        start_col, start_row, end_col, end_row = match.groups()
        return (
            _col_index(start_col),
            int(start_row) if start_row else 1,
            _col_index(end_col),
            int(end_row) if end_row else None,
        )

    def fetch_range(self, container_name, range_spec):
        self._record("fetch_range", container_name, range_spec)
        self._check_sheet(container_name)
        start_col, start_row, end_col, end_row = self._parse(range_spec)
        last_row = len(self.rows) if end_row is None else min(end_row, len(self.rows))
        grid = []
        for row in self.rows[start_row - 1:last_row]:
            cells = list(row[start_col:end_col + 1])
            while cells and cells[-1] == "":
                cells.pop()
            grid.append(cells)
        while grid and not grid[-1]:
            grid.pop()
        return grid

    def append_row(self, container_name, range_spec, row_values):
        self._record("append_row", container_name, range_spec, list(row_values))
        self._check_sheet(container_name)
        self.rows.append(_user_entered(row_values))

    def overwrite_range(self, container_name, range_spec, row_values):
        self._record("overwrite_range", container_name, range_spec, list(row_values))
        self._check_sheet(container_name)
        start_col, start_row, end_col, end_row = self._parse(range_spec)
        assert start_row == end_row, "only single-row writes are expected"
        while len(self.rows) < start_row:
            self.rows.append([])
        row = self.rows[start_row - 1]
        width = end_col + 1
        row.extend([""] * (width - len(row)))
        row[start_col:width] = _user_entered(row_values)

    def remove_rows(self, container_handle, start_index, end_index, dimension="ROWS"):
        self._record("remove_rows", container_handle, start_index, end_index, dimension)
        assert container_handle in self.sheets.values()
        del self.rows[start_index:end_index]

    def get_container_metadata(self, container_name):
        self._record("get_container_metadata", container_name)
        if container_name not in self.sheets:
            return None
        return {"handle": self.sheets[container_name], "displayName": container_name}

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]


def sample_rows():
    return [
        list(HEADERS),
        ["a1", "שניצל", "בשר", "2025-01-05", "2", "קופסאות", "כן", "לא", ""],
        ["b2", "בורקס", "בצק", "2025-02-10", "1,5", "ק\"ג", "", "", "גבינה"],
        ["c3", "עוגת שוקולד", "עוגות", "", "", "", "", "", ""],
    ]


@pytest.fixture
def backend():
    return FakeSheetsBackend(sample_rows())


@pytest.fixture
def store(backend):
    return EntryStore(StoreConfig(spreadsheet_id="test-spreadsheet", sheet_name=SHEET_NAME), backend)


@pytest.fixture
def transport_error():
    return TransportError("connection reset by peer")


@pytest.fixture
def client(store):
    """TestClient с подменённым хранилищем и токеном владельца."""
    app.dependency_overrides[get_entry_store] = lambda: store
    bootstrap_client = TestClient(app)
    login_resp = bootstrap_client.post(
        "/auth/login",
        json={"user_name": TEST_USER, "password": TEST_PASSWORD},
    )
    assert login_resp.status_code == 200
    token = login_resp.json()["access_token"]

    class AuthedClient(TestClient):
        def __init__(self, application, token):
            super().__init__(application)
            self._token = token

        def request(self, method, url, **kwargs):  # type: ignore[override]
            headers = kwargs.pop("headers", {}) or {}
            if "Authorization" not in headers:
                headers["Authorization"] = f"Bearer {self._token}"
            return super().request(method, url, headers=headers, **kwargs)

    yield AuthedClient(app, token)
    app.dependency_overrides.clear()
