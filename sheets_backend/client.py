import json
import os
from typing import Any, Dict, List, Optional, Sequence

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from sheets_backend.ranges import qualify


SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
VALUE_INPUT_OPTION = "USER_ENTERED"
# Даты приходят серийными числами, а не строкой в локали таблицы
VALUE_RENDER_OPTION = "UNFORMATTED_VALUE"
DATE_TIME_RENDER_OPTION = "SERIAL_NUMBER"


def _load_credentials(creds_source: str) -> Credentials:
    """Path to a service-account key file, or the key JSON itself."""
    if os.path.isfile(creds_source):
        return Credentials.from_service_account_file(creds_source, scopes=SCOPES)
    try:
        data = json.loads(creds_source)
    except json.JSONDecodeError as exc:
        raise FileNotFoundError(f"Credentials file '{creds_source}' not found") from exc
    return Credentials.from_service_account_info(data, scopes=SCOPES)


def build_sheets_service(creds_source: str):
    creds = _load_credentials(creds_source)
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


class SheetsBackend:
    """
    Row-oriented view of one spreadsheet.

    Every method is a single blocking request; errors from googleapiclient and
    google.auth propagate unchanged so the caller decides how to report them.
    """

    def __init__(self, service, spreadsheet_id: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_credentials(cls, creds_source, spreadsheet_id: str) -> "SheetsBackend":
        return cls(build_sheets_service(creds_source), spreadsheet_id)

    def fetch_range(self, container_name: str, range_spec: str) -> List[List[Any]]:
        """Cells come back unformatted: numbers as numbers, dates as serial day counts."""
        response = (
            self.service.spreadsheets()
            .values()
            .get(
                spreadsheetId=self.spreadsheet_id,
                range=qualify(container_name, range_spec),
                valueRenderOption=VALUE_RENDER_OPTION,
                dateTimeRenderOption=DATE_TIME_RENDER_OPTION,
            )
            .execute()
        )
        return response.get("values") or []

    def append_row(self, container_name: str, range_spec: str, row_values: Sequence[str]) -> None:
        self.service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=qualify(container_name, range_spec),
            valueInputOption=VALUE_INPUT_OPTION,
            insertDataOption="INSERT_ROWS",
            body={"values": [list(row_values)]},
        ).execute()

    def overwrite_range(self, container_name: str, range_spec: str, row_values: Sequence[str]) -> None:
        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=qualify(container_name, range_spec),
            valueInputOption=VALUE_INPUT_OPTION,
            body={"majorDimension": "ROWS", "values": [list(row_values)]},
        ).execute()

    def remove_rows(self, container_handle: int, start_index: int, end_index: int, dimension: str = "ROWS") -> None:
        # deleteDimension: индексы с нуля, полуинтервал [start, end)
        request = {
            "requests": [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": container_handle,
                            "dimension": dimension,
                            "startIndex": start_index,
                            "endIndex": end_index,
                        }
                    }
                }
            ]
        }
        self.service.spreadsheets().batchUpdate(spreadsheetId=self.spreadsheet_id, body=request).execute()

    def get_container_metadata(self, container_name: str) -> Optional[Dict[str, Any]]:
        metadata = (
            self.service.spreadsheets()
            .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties")
            .execute()
        )
        for sheet in metadata.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == container_name and props.get("sheetId") is not None:
                return {"handle": props["sheetId"], "displayName": props["title"]}
        return None
