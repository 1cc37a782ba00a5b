"""Main application entry point for the FastAPI application.

Run with ``uvicorn message_processor.main:app``.
"""

from message_processor.core.application import create_application
from message_processor.core.initialization import initialize_application

# Initialize the application
initialize_application()

# Create the FastAPI application
app = create_application()
