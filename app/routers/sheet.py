from fastapi import APIRouter, Depends

from app import schemas
from app.security import require_read_access
from app.services.entry_store import EntryStore
from app.store import get_entry_store

router = APIRouter(prefix="/api", tags=["Sheet"], dependencies=[Depends(require_read_access)])


@router.get("/sheet-id", response_model=schemas.SheetIdRead)
def read_sheet_id(store: EntryStore = Depends(get_entry_store)):
    return schemas.SheetIdRead(sheet_id=store.get_container_id())


@router.post("/sheet/header", response_model=schemas.HeaderResult)
def create_header_row(store: EntryStore = Depends(get_entry_store)):
    """
    Записывает названия колонок в первую строку, если она пустая.
    """
    return schemas.HeaderResult(created=store.ensure_header())
