"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable or the
      dog.ceo client was never initialized (readiness)
    - Every readiness response carries per-dependency checks

Design Decisions:
    - Readiness does not call dog.ceo: an upstream outage must not pull us out of
      rotation, since user CRUD still works. Only local client state is checked
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from dogproxy.infrastructure import database, dog_api_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "dogproxy-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity and upstream client state."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    client_ok = dog_api_client.dog_client is not None
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "dog_api_client": "initialized" if client_ok else "not_initialized",
    }
    if db_ok and client_ok:
        return {"status": "ready", "checks": checks}

    reason = "database_unavailable" if not db_ok else "dog_api_client_not_initialized"
    logger.warning(f"Readiness check failed: {reason}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, "checks": checks},
    )
