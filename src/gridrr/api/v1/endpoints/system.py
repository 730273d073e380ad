"""System health endpoints for the Gridrr API."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from gridrr.api.v1.dependencies import SessionDep
from gridrr.core.errors import StorageUnavailableError
from gridrr.core.settings import settings
from gridrr.db.session import ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
def get_health(db: SessionDep) -> dict[str, object]:
    """Report API and database status.

    Args:
        db: Database session

    Returns:
        Dictionary with overall status, component health, and version info
    """
    try:
        ping(db)
        db_status = "healthy"
    except StorageUnavailableError as e:
        logger.warning("Database health check failed: %s", e.__cause__ or e)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "api": "healthy",
            "database": db_status,
        },
        "version": settings.app_version,
    }
