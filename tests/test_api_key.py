import pytest
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport

from autoinspect.main import app
from autoinspect.seed import SEED_VEHICLES


@pytest.mark.asyncio
async def test_health_is_public():
    """/health stays reachable while a key is configured."""
    with patch("autoinspect.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_open_when_no_key_configured():
    with patch("autoinspect.dependencies.settings") as mock_settings:
        mock_settings.api_key = ""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/vehicles")
        assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/api/v1/vehicles",
    f"/api/v1/vehicles/{SEED_VEHICLES[0]['id']}/preview",
    f"/api/v1/vehicles/{SEED_VEHICLES[0]['id']}/inspection",
    f"/api/v1/vehicles/{SEED_VEHICLES[0]['id']}/report.pdf",
])
@pytest.mark.parametrize("headers", [{}, {"X-API-Key": "wrong-key"}])
async def test_rejects_missing_or_wrong_key(path, headers):
    with patch("autoinspect.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(path, headers=headers)
        assert response.status_code == 403
        body = response.json()
        assert body["status"] == "error"
        assert "API key" in body["message"]


@pytest.mark.asyncio
async def test_accepts_correct_key():
    with patch("autoinspect.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                f"/api/v1/vehicles/{SEED_VEHICLES[0]['id']}",
                headers={"X-API-Key": "secret123"},
            )
        assert response.status_code == 200
        assert response.json()["data"]["plate"] == SEED_VEHICLES[0]["plate"]
