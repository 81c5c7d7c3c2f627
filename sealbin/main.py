"""sealbin FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sealbin import __version__
from sealbin.api.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from sealbin.api.routes import health, pastes
from sealbin.config.settings import settings
from sealbin.paste.reaper import ExpiredPasteReaper
from sealbin.store import get_store

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    reaper = None
    if settings.REAPER_INTERVAL_SECONDS > 0:
        reaper = ExpiredPasteReaper(get_store(), settings.REAPER_INTERVAL_SECONDS)
        reaper.start()
        logger.info("Expired paste reaper every %.0fs", settings.REAPER_INTERVAL_SECONDS)
    yield
    if reaper is not None:
        await reaper.stop()
    if settings.STORE_BACKEND == "sql":
        from sealbin.db import engine
        await engine.dispose()


app = FastAPI(
    title="sealbin",
    version=__version__,
    lifespan=lifespan,
)

# Outermost first: CORS -> logging -> rate limit.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pastes.router)


# --- Exception handlers ---

@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
