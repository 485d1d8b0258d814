from functools import lru_cache

from app.services import sheets_config
from app.services.entry_store import EntryStore, StoreConfig
from sheets_backend.csv_export import csv_export_url


@lru_cache
def _store_for(store_config: StoreConfig) -> EntryStore:
    # Discovery-клиент дорогой, строим один раз на набор настроек
    return EntryStore.from_config(store_config)


def get_entry_store() -> EntryStore:
    return _store_for(sheets_config.get_store_config())


def get_public_source():
    store_config = sheets_config.get_store_config()
    return csv_export_url(store_config.spreadsheet_id, store_config.sheet_name)
