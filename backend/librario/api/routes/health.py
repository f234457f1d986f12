"""Health Routes — liveness and the readiness checks Librario depends on.

Invariants:
    - GET /health/ answers 200 while the process runs, without touching the database
    - GET /health/ready is 200 only when the database answers, every ORM table
      exists and the cover directory is writable; otherwise 503 with the failing checks
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import librario.infrastructure.database as db_module
from librario.api.dependencies import get_cover_storage
from librario.core.errors import DatabaseError
from librario.infrastructure.cover_storage import CoverStorage

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "alive", "service": "librario-api"}


async def _schema_check() -> tuple[str, str]:
    manager = db_module.db_manager
    if manager is None or not await manager.health_check():
        return "unreachable", "unknown"
    try:
        missing = await manager.missing_tables()
    except DatabaseError:
        return "ok", "unknown"
    if missing:
        return "ok", "missing: " + ", ".join(missing)
    return "ok", "ok"


@router.get("/ready")
async def readiness(covers: CoverStorage = Depends(get_cover_storage)):
    database, schema = await _schema_check()
    checks = {
        "database": database,
        "schema": schema,
        "covers": "ok" if covers.is_writable() else "not_writable",
    }
    if any(value != "ok" for value in checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
