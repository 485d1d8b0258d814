from typing import List

from fastapi import APIRouter, Depends

from app import schemas
from app.services.public_reader import read_public_entries
from app.store import get_public_source

router = APIRouter(prefix="/public", tags=["Public"])


@router.get("/entries", response_model=List[schemas.Entry])
def list_public_entries(source=Depends(get_public_source)):
    return read_public_entries(source)
