from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app import schemas
from app.security import require_read_access
from app.services import presentation
from app.services.entry_store import EntryStore
from app.store import get_entry_store

router = APIRouter(prefix="/api/entries", tags=["Entries"], dependencies=[Depends(require_read_access)])


@router.get("", response_model=List[schemas.Entry])
def list_entries(store: EntryStore = Depends(get_entry_store)):
    return store.read_all()


@router.get("/grouped", response_model=List[schemas.EntryGroup])
def list_grouped_entries(
    sort: str = Query("date", description="product | category | date | amount"),
    descending: bool = Query(False),
    store: EntryStore = Depends(get_entry_store),
):
    """
    Записи, сгруппированные по категории в порядке первого появления,
    с набором колонок для каждой группы.
    """
    if sort not in presentation.SORT_KEYS:
        raise HTTPException(status_code=422, detail=f"Unsupported sort key: {sort}")
    return presentation.build_groups(store.read_all(), sort, descending)


@router.post("", response_model=schemas.EntryCreated)
def create_entry(draft: schemas.EntryDraft, store: EntryStore = Depends(get_entry_store)):
    return schemas.EntryCreated(id=store.append(draft))


@router.post("/bulk-delete", response_model=schemas.BulkDeleteResult)
def bulk_delete_entries(payload: schemas.BulkDeletePayload, store: EntryStore = Depends(get_entry_store)):
    return schemas.BulkDeleteResult(deleted=store.delete_many(payload.ids))


@router.put("/{entry_id}", response_model=schemas.OperationResult)
def update_entry(entry_id: str, entry: schemas.EntryDraft, store: EntryStore = Depends(get_entry_store)):
    store.update_by_id(entry_id, entry)
    return schemas.OperationResult()


@router.delete("/{entry_id}", response_model=schemas.OperationResult)
def delete_entry(entry_id: str, store: EntryStore = Depends(get_entry_store)):
    store.delete_by_id(entry_id)
    return schemas.OperationResult()


@router.post("/{entry_id}/adjust", response_model=schemas.Entry)
def adjust_entry_amount(entry_id: str, payload: schemas.AmountAdjust, store: EntryStore = Depends(get_entry_store)):
    return store.adjust_amount(entry_id, payload.delta)
