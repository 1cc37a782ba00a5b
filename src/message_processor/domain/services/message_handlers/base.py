"""Common contract for message handlers."""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Type, TypeVar

from message_processor.domain.messages import MessageEnvelope, MessageType

M = TypeVar("M", bound=MessageEnvelope)


class MessageHandler(ABC, Generic[M]):
    """Handles one message type.

    ``message_type`` selects the handler in the dispatcher and
    ``message_model`` is the shape the raw payload is decoded into before
    ``handle`` is called.
    """

    message_type: ClassVar[MessageType]
    message_model: ClassVar[Type[MessageEnvelope]]

    @abstractmethod
    async def handle(self, message: M) -> bool:
        """Apply the message.

        Returns:
            ``True`` when the message was applied, ``False`` when it was
            rejected or failed. Cancellation propagates.

        Raises:
            ValueError: If ``message`` is ``None``.
        """
        raise NotImplementedError
