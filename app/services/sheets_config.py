from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from app import config
from app.services.entry_store import StoreConfig
from app.services.store_errors import StoreConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = Path(config.SHEETS_CONFIG_PATH) if config.SHEETS_CONFIG_PATH else PROJECT_ROOT / "sheets_config.json"


def _read_config() -> Dict[str, Any]:
    """
    sheets_config.json is optional; values missing from it fall back to the environment.
    """
    data: Dict[str, Any] = {}
    if CONFIG_PATH.exists():
        try:
            with CONFIG_PATH.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, OSError) as exc:
            raise StoreConfigurationError(f"Cannot read {CONFIG_PATH.name}: {exc}") from exc
    return {
        "SPREADSHEET_ID": data.get("SPREADSHEET_ID") or config.SPREADSHEET_ID or "",
        "SHEET_NAME": data.get("SHEET_NAME") or config.SHEET_NAME,
        "CREDENTIALS": data.get("CREDENTIALS") or config.GOOGLE_CREDENTIALS,
    }


def _resolve_path(path_value: str) -> Path:
    path = Path(path_value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def get_settings() -> Dict[str, str]:
    data = _read_config()
    return {
        "spreadsheet_id": data["SPREADSHEET_ID"],
        "sheet_name": data["SHEET_NAME"],
        "credentials_path": str(_resolve_path(data["CREDENTIALS"])),
    }


def get_store_config() -> StoreConfig:
    settings = get_settings()
    if not settings["spreadsheet_id"]:
        raise StoreConfigurationError("SPREADSHEET_ID is not set (.env or sheets_config.json)")
    if not settings["sheet_name"]:
        raise StoreConfigurationError("SHEET_NAME is not set")
    return StoreConfig(
        spreadsheet_id=settings["spreadsheet_id"],
        sheet_name=settings["sheet_name"],
        credentials_path=settings["credentials_path"],
    )
