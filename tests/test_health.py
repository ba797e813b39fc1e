"""Tests for health check endpoints."""

from product_management.infrastructure.config import settings


async def test_health_check(client) -> None:
    """Test health endpoint returns healthy status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "product-management"
    assert data["version"] == settings.api_version


async def test_health_is_public(client) -> None:
    """Health endpoints need no credentials."""
    response = await client.get("/health")
    assert response.status_code == 200


async def test_readiness_check(client) -> None:
    """Test readiness endpoint reports the database as reachable."""
    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}
