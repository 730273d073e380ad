# src/gridrr/main.py
"""Main entry point for the Gridrr application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gridrr.api.v1 import (
    auth_router,
    posts_router,
    profiles_router,
    system_router,
    verification_router,
)
from gridrr.core.errors import GridrrError, StorageUnavailableError
from gridrr.core.settings import settings
from gridrr.db.session import STORAGE_ERRORS, create_tables
from gridrr.services.verification_worker import VerificationSweepWorker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.auto_create_tables:
        create_tables()

    worker = VerificationSweepWorker()
    await worker.start()
    app.state.verification_worker = worker if worker.enabled else None
    try:
        yield
    finally:
        await worker.stop()


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social content API with a post feed and engagement ledger",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(verification_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.exception_handler(GridrrError)
async def handle_domain_error(request: Request, exc: GridrrError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    if isinstance(exc, STORAGE_ERRORS):
        logger.error("Storage unavailable during %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=StorageUnavailableError.status_code,
            content={"detail": "Storage unavailable"},
        )

    logger.exception("Unhandled database error during %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gridrr.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
