from fastapi import APIRouter

from app import schemas

router = APIRouter(tags=["System"])


@router.get("/health", response_model=schemas.HealthStatus)
def read_health():
    return schemas.HealthStatus()
