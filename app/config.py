import os
from dotenv import load_dotenv

load_dotenv()


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_list(name: str, default: str) -> list[str]:
    raw = _read_env(name) or default
    return [part.strip() for part in raw.split(",") if part.strip()]


SPREADSHEET_ID = _read_env("SPREADSHEET_ID")
SHEET_NAME = _read_env("SHEET_NAME") or "list"
GOOGLE_CREDENTIALS = _read_env("GOOGLE_CREDENTIALS") or "credentials.json"
SHEETS_CONFIG_PATH = _read_env("SHEETS_CONFIG_PATH")

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
# 30 дней, как у прежней cookie-сессии
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 30)))
APP_USERNAME = (_read_env("APP_USERNAME") or "owner").lower()
APP_PASSWORD_HASH = _read_env("APP_PASSWORD_HASH")

CORS_ORIGINS = _read_list("CORS_ORIGINS", "*")
LOG_LEVEL = (_read_env("LOG_LEVEL") or "INFO").upper()
