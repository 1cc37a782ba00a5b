"""Routes raw JSON messages to the handler registered for their type."""

import asyncio
import json
import time
from typing import Any, Dict, Iterable, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from structlog import get_logger

from message_processor.core.metrics import metrics_collector
from message_processor.domain.messages import MessageEnvelope, MessageType
from message_processor.domain.services.message_handlers import MessageHandler

logger = get_logger(__name__)

# Metric key shared by every unrecognised messageType
UNKNOWN_MESSAGE_TYPE = "unknown"


class MessageProcessor:
    """Decodes a payload, picks its handler by ``messageType`` and runs it.

    Every failure short of cancellation ends in ``False``: an empty payload,
    malformed JSON, a missing or unknown type, a payload that does not fit
    the type's shape, or an error raised by the handler. The processor keeps
    no per-call state and may serve concurrent calls.
    """

    def __init__(self, handlers: Iterable[MessageHandler]):
        self._handlers: Dict[MessageType, MessageHandler] = {
            handler.message_type: handler for handler in handlers
        }

    async def process(self, raw_message: Optional[str], correlation_id: str) -> bool:
        """Process one message.

        Args:
            raw_message: JSON text of the message.
            correlation_id: Request identifier bound to every log event of
                this call.

        Returns:
            Whether the message was applied.
        """
        with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
            if raw_message is None or not raw_message.strip():
                logger.error("Message is empty or null")
                return False

            try:
                payload = json.loads(raw_message)
                envelope = MessageEnvelope.model_validate(payload)
            except (ValueError, PydanticValidationError) as e:
                logger.error("Failed to deserialize message", error=str(e))
                return False

            if not envelope.message_type or not envelope.message_type.strip():
                logger.error("Message type is missing")
                return False

            logger.info(
                "Processing message",
                message_type=envelope.message_type,
                message_id=str(envelope.id) if envelope.id else None,
            )
            known_type = MessageType.lookup(envelope.message_type)
            metric_key = known_type.value if known_type else UNKNOWN_MESSAGE_TYPE
            started = time.perf_counter()
            outcome = "failed"
            try:
                processed = await self._dispatch(envelope.message_type, known_type, payload)
                outcome = "succeeded" if processed else "failed"
                return processed
            except asyncio.CancelledError:
                outcome = "cancelled"
                logger.warning("Message processing was cancelled", message_type=envelope.message_type)
                raise
            except Exception as e:
                logger.error(
                    "Unexpected error processing message",
                    message_type=envelope.message_type,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False
            finally:
                metrics_collector.record_message_metric(
                    metric_key, outcome, time.perf_counter() - started
                )

    async def _dispatch(
        self, message_type: str, known_type: Optional[MessageType], payload: Any
    ) -> bool:
        if known_type is None:
            logger.error("Unknown message type", message_type=message_type)
            return False

        handler = self._handlers.get(known_type)
        if handler is None:
            logger.error("No handler registered", message_type=known_type.value)
            return False

        try:
            message = handler.message_model.model_validate(payload)
        except PydanticValidationError as e:
            logger.error(
                "Failed to deserialize message to its type",
                message_type=known_type.value,
                error=str(e),
            )
            return False

        logger.debug("Dispatching message to handler", handler=type(handler).__name__)
        return await handler.handle(message)
