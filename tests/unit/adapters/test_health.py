from unittest.mock import AsyncMock

from message_processor.adapters.api.v1 import health


def test_healthcheck_reports_healthy(client, mocker):
    mocker.patch.object(health, "check_database_health", AsyncMock(return_value={"status": "healthy"}))

    response = client.get("/api/v1/healthcheck")

    assert response.status_code == 200
    assert response.json() == {"status": "Healthy", "details": {"database": {"status": "healthy"}}}


def test_healthcheck_reports_unhealthy_with_503(client, mocker):
    mocker.patch.object(
        health,
        "check_database_health",
        AsyncMock(return_value={"status": "unhealthy", "error": "connection refused"}),
    )

    response = client.get("/api/v1/healthcheck")

    assert response.status_code == 503
    assert response.json()["status"] == "Unhealthy"


def test_health_endpoints_need_no_api_key_and_are_not_rate_limited(client, mocker):
    mocker.patch.object(health, "check_database_health", AsyncMock(return_value={"status": "healthy"}))

    response = client.get("/api/v1/healthcheck")
    liveness = client.get("/api/v1/health")

    assert response.status_code == 200
    assert "X-Rate-Limit-Limit" not in response.headers
    assert liveness.status_code == 200
    assert liveness.json()["status"] == "ok"
    assert liveness.json()["env"] == "test"
