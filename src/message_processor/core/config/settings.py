"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, auth, rate limiting, message processing) into a single,
accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the application.

Environment Support:
- Development: Uses .env, debug mode enabled, API key optional
- Test: Uses .env.test, API key optional
- Staging: Uses .env.staging, API key required
- Production: Uses .env.production, API key required
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .message_processing import MessageProcessingSettings
from .rate_limit import RateLimitSettings

logger = logging.getLogger(__name__)

_RELAXED_ENVIRONMENTS = ("development", "test")


class Settings(
    AppSettings,
    DatabaseSettings,
    AuthSettings,
    RateLimitSettings,
    MessageProcessingSettings,
):
    """The main settings class that aggregates all application configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Security Note:
        - API_KEY and POSTGRES_PASSWORD are secrets; they are held as
          `SecretStr` and never logged.
    Usage:
        - Access settings via the singleton instance `settings` throughout the application.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="allow"
    )

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific configuration."""
        super().__init__(**kwargs)
        self._set_environment_defaults(self.APP_ENV)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env == "development" and "DEBUG" not in os.environ:
            self.DEBUG = True
            logger.info("Debug mode enabled for development environment")

        logger.info(f"Application running in {env} environment")

    def validate_required_fields(self) -> None:
        """Validates that all required environment variables are set.

        Raises:
            ValueError: If required fields are missing outside development and test.
        """
        required_fields = ["PROJECT_NAME", "DATABASE_URL", "API_KEY"]

        missing_fields = [field for field in required_fields if not getattr(self, field, None)]
        if missing_fields:
            error_msg = f"Missing required environment variables: {', '.join(missing_fields)}"
            if self.APP_ENV in _RELAXED_ENVIRONMENTS:
                logger.warning(f"{self.APP_ENV} mode: {error_msg}")
            else:
                logger.error(error_msg)
                raise ValueError(error_msg)
        else:
            logger.info("All required environment variables are set.")


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        settings_instance = Settings(_env_file=env_file)
    elif Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        settings_instance = Settings()
    else:
        logger.warning(f"No .env file found, using environment variables only (environment: {env})")
        settings_instance = Settings()

    return settings_instance


# Create a singleton instance of the settings to be used across the application.
settings = create_settings()
settings.validate_required_fields()
