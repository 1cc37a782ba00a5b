"""Message ingestion endpoint."""

import asyncio
import time
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette import status

from message_processor.core.dependencies import get_message_processor
from message_processor.core.handlers import UNEXPECTED_ERROR_MESSAGE, error_body
from message_processor.core.logging import logger
from message_processor.domain.services import MessageProcessor

router = APIRouter()

STATUS_CLIENT_CLOSED_REQUEST = 499


class ProcessMessageResponse(BaseModel):
    success: bool
    message: str


def _result(status_code: int, success: bool, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ProcessMessageResponse(success=success, message=message).model_dump(),
    )


@router.post(
    "/process",
    response_model=ProcessMessageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ProcessMessageResponse},
        status.HTTP_401_UNAUTHORIZED: {"description": "API key is missing or invalid"},
        status.HTTP_429_TOO_MANY_REQUESTS: {"description": "Rate limit exceeded"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Unexpected server error"},
    },
)
async def process_message(
    request: Request,
    processor: Annotated[MessageProcessor, Depends(get_message_processor)],
):
    """
    Processes one JSON message.

    The body is routed on its ``messageType`` field, for example::

        {
          "id": "0BA545F1-64C8-487C-988F-1B466A06B30F",
          "messageType": "NewCompany",
          "companyName": "Acme Corporation",
          "companyCode": "ACME001",
          "licensing": "Standard",
          "devices": [{"orderNo": "ORDER-123", "type": "Standard", "address": "123 Main St"}]
        }

        {"messageType": "DeleteDevices", "serialNumbers": ["SN-1718000000000-4821"]}

    Responds 200 when the message was applied and 400 when it was rejected.
    """
    correlation_id = request.state.correlation_id
    started = time.perf_counter()

    try:
        body = (await request.body()).decode("utf-8", errors="replace")
        if not body.strip():
            logger.warning("Received empty message body")
            return _result(status.HTTP_400_BAD_REQUEST, False, "Message body is required")

        processed = await processor.process(body, correlation_id)
    except asyncio.CancelledError:
        logger.info(
            "Request processing was cancelled by the client",
            elapsed_ms=round((time.perf_counter() - started) * 1000),
        )
        return JSONResponse(status_code=STATUS_CLIENT_CLOSED_REQUEST, content=None)
    except Exception as exc:
        logger.error(
            "Unhandled exception in process_message endpoint",
            error=str(exc),
            error_type=type(exc).__name__,
            elapsed_ms=round((time.perf_counter() - started) * 1000),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(request, UNEXPECTED_ERROR_MESSAGE, exc),
        )

    logger.info(
        "Message processing completed",
        success=processed,
        elapsed_ms=round((time.perf_counter() - started) * 1000),
    )
    if processed:
        return _result(status.HTTP_200_OK, True, "Message processed successfully")
    return _result(status.HTTP_400_BAD_REQUEST, False, "Failed to process message")
