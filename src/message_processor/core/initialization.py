"""Application initialization and setup.

This module handles the initialization tasks required before the application starts,
including environment variable loading and logging configuration.
"""

from dotenv import load_dotenv

from message_processor.core.config.settings import settings
from message_processor.core.logging import configure_logging


def initialize_application() -> None:
    """Initialize the application with all necessary setup tasks.

    This function performs the following initialization tasks:
    1. Load environment variables
    2. Configure logging
    """
    load_dotenv(override=True)

    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
