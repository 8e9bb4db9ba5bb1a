"""
Health check API routes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import structlog

from rareplants.application.models import APIConfig, DependencyStatus, HealthResponse
from rareplants.infrastructure.database.config import DatabaseManager, get_database_manager

logger = structlog.get_logger(__name__)
router = APIRouter()


async def check_database_health(db_manager: DatabaseManager) -> DependencyStatus:
    """Check plant store connectivity."""
    result = await db_manager.health_check()
    if result["status"] != "healthy":
        logger.warning("Database unhealthy", error=result.get("error"))

    return DependencyStatus(
        name="Plant store",
        status=result["status"],
        response_time_ms=result["response_time_ms"],
        details={"pool": result["pool"]} if "pool" in result else None,
    )


@router.get("/", response_model=HealthResponse)
async def health(db_manager: DatabaseManager = Depends(get_database_manager)) -> JSONResponse:
    """Report service health and the status of its dependencies."""
    database = await check_database_health(db_manager)
    overall = "healthy" if database.status == "healthy" else "unhealthy"

    response = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=APIConfig().version,
        dependencies=[database],
    )
    status_code = status.HTTP_200_OK if overall == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))
