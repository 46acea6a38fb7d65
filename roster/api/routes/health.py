"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - An unreachable cache reports "degraded" but keeps 200: the cache is advisory

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Singletons looked up at call time so startup/test swaps are honored
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import roster.infrastructure.cache as cache_module
import roster.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "roster-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity plus cache status."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    cache_ok = await cache_module.list_cache.ping()
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "cache": "healthy" if cache_ok else "degraded",
        },
    }
