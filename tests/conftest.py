import os

# Settings are read once at import time; configure the test environment first.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_ISOLATION_LEVEL", "")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from message_processor.core.application import create_application
from message_processor.core.config.settings import settings
from message_processor.core.metrics import metrics_collector
from message_processor.core.rate_limiting import RateLimiter
from tests.fakes import InMemoryUnitOfWork

API_KEY = "test-api-key"


@pytest.fixture(autouse=True)
def reset_metrics():
    yield
    metrics_collector.reset_metrics()


@pytest.fixture
def uow():
    """In-memory unit of work with snapshot rollback."""
    return InMemoryUnitOfWork()


@pytest.fixture
def rate_limiter():
    return RateLimiter(limit=100, window_seconds=60)


@pytest.fixture
def app(rate_limiter, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    application = create_application(rate_limiter=rate_limiter)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Provides a basic test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-API-Key": API_KEY}
