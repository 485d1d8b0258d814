import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import CORS_ORIGINS, LOG_LEVEL
from app.routers import auth, entries, public, sheet, system
from app.services.store_errors import (
    ContainerNotFound,
    EntryNotFound,
    StoreConfigurationError,
    StoreUnavailable,
)

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)

app = FastAPI(title="Freezer List API")
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EntryNotFound)
async def entry_not_found_handler(request: Request, exc: EntryNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ContainerNotFound)
async def container_not_found_handler(request: Request, exc: ContainerNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(StoreConfigurationError)
async def store_configuration_handler(request: Request, exc: StoreConfigurationError):
    logger.error("Store is not configured: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# подключаем роутеры
app.include_router(system.router)
app.include_router(auth.router)
app.include_router(sheet.router)
app.include_router(entries.router)
app.include_router(public.router)
