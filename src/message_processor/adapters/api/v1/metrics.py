"""Metrics endpoint for exposing application metrics.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from message_processor.core.config.settings import settings
from message_processor.core.metrics import metrics_collector

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_metrics():
    """Get application metrics.

    Exposes system metrics, per-endpoint request metrics, per-message-type
    outcomes and rate limit rejections. Only available in debug mode.

    Raises:
        HTTPException: 403 when debug mode is off.
    """
    if not settings.DEBUG:
        raise HTTPException(status_code=403, detail="Metrics are only available in debug mode")

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "metrics": metrics_collector.get_metrics(),
    }
