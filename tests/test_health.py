"""Tests for health, error and metrics endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from tests.conftest import make_settings


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"
    assert "version" in data


@pytest.mark.asyncio
async def test_detailed_health(client: AsyncClient) -> None:
    response = await client.get("/api/health/detailed")
    assert response.status_code == 200
    assert response.json()["storage"] == "healthy"
    assert response.json()["sessions"] == "healthy"


@pytest.mark.asyncio
async def test_ping(client: AsyncClient) -> None:
    response = await client.get("/api/ping")
    assert response.json() == {"message": "pong"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: AsyncClient) -> None:
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["path"] == "/api/nope"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient) -> None:
    await client.get("/api/ping")
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "http_request" in response.text


@pytest.mark.asyncio
async def test_several_apps_serve_in_one_process() -> None:
    """Each app instruments its own metrics without clashing with earlier apps."""
    for _ in range(2):
        app = create_app(settings=make_settings())
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            assert (await c.get("/api/ping")).status_code == 200
            assert (await c.get("/metrics")).status_code == 200
