from __future__ import annotations

"""Centralized, structured exception hierarchy for the message processor.

Each exception carries a machine-readable `code` for programmatic error
handling and a human-readable `message` for logging and client feedback.

Message handlers raise these internally and convert them to a ``False``
outcome at their own boundary; the HTTP layer maps the rest to status codes
(see ``message_processor.core.handlers``).
"""

from typing import Final, Optional

__all__: Final = [
    "MessageProcessorError",
    "ValidationError",
    "InvalidMessageError",
    "InvalidEnumValueError",
    "DuplicateCompanyError",
    "DuplicateSerialNumberError",
    "SerialNumberGenerationError",
    "RetryExhaustedError",
    "DatabaseError",
    "AuthenticationError",
    "MissingApiKeyError",
    "InvalidApiKeyError",
    "RateLimitExceededError",
]


class MessageProcessorError(Exception):
    """Base exception class for all custom errors in the application.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Message validation errors
# ---------------------------------------------------------------------------


class ValidationError(MessageProcessorError):
    """Raised when a message fails validation before any write happens."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


class InvalidMessageError(ValidationError):
    """Raised when a message lacks content its handler requires."""

    def __init__(self, message: str = "Invalid message payload", code: str = "invalid_message"):
        super().__init__(message, code)


class InvalidEnumValueError(ValidationError):
    """Raised when wire text does not name a member of the target enum."""

    def __init__(self, enum_name: str, value: object):
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"Invalid {enum_name} value: {value!r}", "invalid_enum_value")


class DuplicateCompanyError(ValidationError):
    """Raised when a company code is already registered."""

    def __init__(self, company_code: str):
        self.company_code = company_code
        super().__init__(
            f"Company with code {company_code} already exists", "duplicate_company"
        )


# ---------------------------------------------------------------------------
# Serial numbers and retries
# ---------------------------------------------------------------------------


class DuplicateSerialNumberError(MessageProcessorError):
    """Signals that a generated serial number collides with an existing device."""

    def __init__(self, serial_number: str):
        self.serial_number = serial_number
        super().__init__(
            f"Serial number {serial_number} already exists", "duplicate_serial_number"
        )


class RetryExhaustedError(MessageProcessorError):
    """Raised by the retry combinator once every attempt has been used."""

    def __init__(
        self,
        operation_name: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
    ):
        self.operation_name = operation_name
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation_name} failed after {attempts} attempts", "retry_exhausted"
        )


class SerialNumberGenerationError(MessageProcessorError):
    """Raised when no unique serial number could be generated."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Failed to generate unique serial number after {attempts} attempts",
            "serial_number_generation_exhausted",
        )


# ---------------------------------------------------------------------------
# Infrastructure errors
# ---------------------------------------------------------------------------


class DatabaseError(MessageProcessorError):
    """Raised for failures of the relational store."""

    def __init__(self, message: str = "A database error occurred", code: str = "database_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Ingress errors
# ---------------------------------------------------------------------------


class AuthenticationError(MessageProcessorError):
    """Raised when a request does not carry a valid API key."""

    def __init__(self, message: str, code: str = "authentication_error"):
        super().__init__(message, code)


class MissingApiKeyError(AuthenticationError):
    def __init__(self):
        super().__init__("API key is missing", "api_key_missing")


class InvalidApiKeyError(AuthenticationError):
    def __init__(self):
        super().__init__("Invalid API key", "api_key_invalid")


class RateLimitExceededError(MessageProcessorError):
    """Raised when a client exhausts its request budget for the current window."""

    def __init__(self, reset_seconds: int, limit: int):
        self.reset_seconds = reset_seconds
        self.limit = limit
        super().__init__("Rate limit exceeded", "rate_limit_exceeded")
