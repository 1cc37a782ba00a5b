from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette import status

from message_processor.core.config.settings import settings
from message_processor.core.logging import logger
from message_processor.infrastructure.database import check_database_health

router = APIRouter()


class LivenessResponse(BaseModel):
    status: str
    env: str
    version: str
    timestamp: datetime


class HealthReport(BaseModel):
    status: str
    details: Dict[str, Any]


@router.get("/health", response_model=LivenessResponse)
async def liveness():
    """
    Liveness probe. Does not touch the database.
    """
    return LivenessResponse(
        status="ok",
        env=settings.APP_ENV,
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/healthcheck",
    response_model=HealthReport,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthReport}},
)
async def health_check():
    """
    Readiness check verifying the database connection.

    Returns 200 with status ``Healthy`` when every dependency answers and 503
    with ``Unhealthy`` otherwise. Exempt from API key and rate limiting.
    """
    database = await check_database_health()
    healthy = database["status"] == "healthy"
    report = HealthReport(
        status="Healthy" if healthy else "Unhealthy",
        details={"database": database},
    )
    logger.info("health_check_executed", status=report.status)

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=report.model_dump(),
    )
