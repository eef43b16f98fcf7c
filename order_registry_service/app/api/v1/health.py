import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...core.database import OrderRegistryDatabaseManager
from ..deps import DatabaseManagerDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    database_manager: OrderRegistryDatabaseManager = DatabaseManagerDep,
) -> JSONResponse:
    """Liveness plus a database round trip."""
    check_start = time.time()
    try:
        await database_manager.ping()
        database_check: Dict[str, Any] = {"status": "healthy"}
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        database_check = {"status": "unhealthy", "error": str(e)}
    database_check["duration_ms"] = round((time.time() - check_start) * 1000, 2)

    healthy = database_check["status"] == "healthy"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "service": "order-registry-service",
            "status": "healthy" if healthy else "unhealthy",
            "version": request.app.version,
            "checks": {"database": database_check},
            "timestamp": time.time(),
        },
    )
