"""End-to-end tests running the application lifespan on SQLite."""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
import structlog
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client with lifespan management."""
    async with LifespanManager(app) as manager:
        async with AsyncClient(
            transport=ASGITransport(app=manager.app),
            base_url="http://test",
        ) as ac:
            yield ac
    structlog.reset_defaults()


@pytest.mark.asyncio
async def test_health_endpoint_returns_ok(client: AsyncClient) -> None:
    """Lifespan wires a working database engine."""
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "db": "connected", "vehicles": 0}


@pytest.mark.asyncio
async def test_vehicle_round_trip_and_tax(client: AsyncClient) -> None:
    """Create a vehicle, price its tax, then remove it."""
    create_response = await client.post(
        "/api/vehicles",
        json={"name": "Honda Vario 125", "type": "Matic", "assessed_value": 18000000},
    )
    assert create_response.status_code == 201
    vehicle_id = create_response.json()["id"]

    tax_response = await client.get(
        f"/api/vehicles/{vehicle_id}/tax", params={"ownership_rank": 3}
    )
    assert tax_response.status_code == 200
    assert Decimal(tax_response.json()["total_tax"]) == Decimal("915000")

    delete_response = await client.delete(f"/api/vehicles/{vehicle_id}")
    assert delete_response.status_code == 204


@pytest.mark.asyncio
async def test_health_reports_catalog_size(client: AsyncClient) -> None:
    """Health counts vehicles stored through the API."""
    for name in ("Honda Beat", "Yamaha NMAX"):
        response = await client.post(
            "/api/vehicles",
            json={"name": name, "type": "Matic", "assessed_value": 18000000},
        )
        assert response.status_code == 201

    response = await client.get("/api/health")
    assert response.json()["vehicles"] == 2

    for vehicle in (await client.get("/api/vehicles")).json():
        await client.delete(f"/api/vehicles/{vehicle['id']}")
