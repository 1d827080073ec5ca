"""Health Checks — liveness, and readiness gated on the database.

Invariants:
    - GET /api/health/ answers 200 whenever the process serves requests
    - GET /api/health/ready answers 503 until the database answers a query
    - Outlook configuration is reported but never makes the service unready

Design Decisions:
    - db_manager is looked up on the module per call: the lifespan assigns it
      after this router is imported
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from artist_crm.config import get_settings
from artist_crm.infrastructure import database

router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "artist-crm-api"
SERVICE_VERSION = "1.0.0"


def outlook_mode() -> str:
    settings = get_settings()
    if settings.outlook_access_token:
        return "static_token"
    if settings.outlook_connector_hostname and settings.outlook_connector_identity:
        return "connector"
    return "not_configured"


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "outlook": outlook_mode()},
    }
