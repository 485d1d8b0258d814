from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app import schemas
from app.security import authenticate, create_access_token, get_current_user_optional

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=schemas.Token)
async def login(payload: schemas.LoginRequest):
    user_name = authenticate(payload.user_name, payload.password)
    if not user_name:
        raise HTTPException(status_code=400, detail="Неверное имя пользователя или пароль")
    return schemas.Token(access_token=create_access_token({"sub": user_name}))


@router.get("/status", response_model=schemas.AuthStatus)
async def auth_status(current_user: Optional[str] = Depends(get_current_user_optional)):
    return schemas.AuthStatus(authenticated=current_user is not None, user_name=current_user)


@router.post("/logout", response_model=schemas.OperationResult)
async def logout():
    # Токен не хранится на сервере: клиенту достаточно его забыть
    return schemas.OperationResult()
