"""Health routes: liveness for the process, readiness for the dealership store.

GET /health/       -> 200 while the app can answer at all
GET /health/ready  -> 200 with per-dependency checks, 503 when the store is down
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from cardealer.config import get_settings
from cardealer.infrastructure import database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def liveness():
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


async def _store_reachable() -> bool:
    # db_manager is read at call time; init_db replaces it during lifespan
    manager = database.db_manager
    return manager is not None and await manager.health_check()


@router.get("/ready")
async def readiness():
    if await _store_reachable():
        return {"status": "ready", "checks": {"database": "healthy"}}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": "database_unavailable"},
    )
