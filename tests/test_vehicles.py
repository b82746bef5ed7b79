import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from autoinspect.main import app
from autoinspect.seed import SEED_EQUIPMENT, SEED_VEHICLES


def _plate():
    return f"T-{uuid.uuid4().hex[:8]}"


async def _create_vehicle(client, **overrides):
    payload = {"brand": "Honda", "model": "Civic", "year": 2020, "mileage_km": 30000, "plate": _plate()}
    payload.update(overrides)
    response = await client.post("/api/v1/vehicles", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_list_vehicles_page_format():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    page = body["data"]
    assert page["page"] == 1
    assert page["page_size"] == 20
    assert page["total"] >= len(SEED_VEHICLES)
    assert isinstance(page["items"], list)
    item = page["items"][0]
    for key in ("id", "brand", "model", "year", "mileage_km", "status", "created_at"):
        assert key in item


@pytest.mark.asyncio
async def test_list_vehicles_pagination():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await _create_vehicle(client)
        first = (await client.get("/api/v1/vehicles", params={"page": 1, "page_size": 1})).json()["data"]
        second = (await client.get("/api/v1/vehicles", params={"page": 2, "page_size": 1})).json()["data"]

    assert len(first["items"]) == 1
    assert len(second["items"]) == 1
    assert first["items"][0]["id"] != second["items"][0]["id"]
    assert first["total"] == second["total"]


@pytest.mark.asyncio
async def test_create_vehicle_defaults_to_draft():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client, version="EX")
        fetched = await client.get(f"/api/v1/vehicles/{vehicle['id']}")

    assert vehicle["status"] == "draft"
    assert vehicle["version"] == "EX"
    assert fetched.status_code == 200
    assert fetched.json()["data"] == vehicle


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"brand": "", "model": "Civic", "year": 2020},
    {"brand": "Honda", "model": "", "year": 2020},
    {"brand": "Honda", "model": "Civic", "year": 1850},
    {"brand": "Honda", "model": "Civic", "year": 2101},
])
async def test_create_vehicle_rejects_invalid_input(payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/v1/vehicles", json=payload)

    assert response.status_code == 400
    assert response.json()["status"] == "error"


@pytest.mark.asyncio
async def test_create_vehicle_negative_mileage():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/api/v1/vehicles",
            json={"brand": "Honda", "model": "Civic", "year": 2020, "mileage_km": -1},
        )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_plate_conflict():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/api/v1/vehicles",
            json={"brand": "Honda", "model": "Fit", "year": 2019, "plate": SEED_VEHICLES[0]["plate"]},
        )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_get_unknown_vehicle():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles/nonexistent")

    assert response.status_code == 404
    assert response.json()["message"] == "Vehicle not found"


@pytest.mark.asyncio
async def test_update_vehicle_partial():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        response = await client.patch(
            f"/api/v1/vehicles/{vehicle['id']}",
            json={"mileage_km": 31000, "status": "review"},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["mileage_km"] == 31000
    assert data["status"] == "review"
    assert data["brand"] == "Honda"


@pytest.mark.asyncio
async def test_update_vehicle_rejects_bad_values():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        bad_year = await client.patch(f"/api/v1/vehicles/{vehicle['id']}", json={"year": 3000})
        bad_status = await client.patch(f"/api/v1/vehicles/{vehicle['id']}", json={"status": "sold"})
        empty_brand = await client.patch(f"/api/v1/vehicles/{vehicle['id']}", json={"brand": ""})

    assert bad_year.status_code == 400
    assert bad_status.status_code == 422
    assert empty_brand.status_code == 400


@pytest.mark.asyncio
async def test_delete_vehicle():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        await client.post(
            f"/api/v1/vehicles/{vehicle['id']}/equipment",
            json=[{"category": "safety", "feature_name": "ABS"}],
        )
        deleted = await client.delete(f"/api/v1/vehicles/{vehicle['id']}")
        fetched = await client.get(f"/api/v1/vehicles/{vehicle['id']}")
        again = await client.delete(f"/api/v1/vehicles/{vehicle['id']}")

    assert deleted.status_code == 200
    assert fetched.status_code == 404
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_publish_vehicle():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        response = await client.post(f"/api/v1/vehicles/{vehicle['id']}/publish")
        missing = await client.post("/api/v1/vehicles/nonexistent/publish")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "published"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_upsert_specs():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        created = await client.patch(
            f"/api/v1/vehicles/{vehicle['id']}/specs",
            json={"engine_cc": 1998, "fuel_type": "Gasoline"},
        )
        updated = await client.patch(
            f"/api/v1/vehicles/{vehicle['id']}/specs",
            json={"power_hp": 158.0},
        )

    assert created.status_code == 200
    assert updated.status_code == 200
    first, second = created.json()["data"], updated.json()["data"]
    assert first["id"] == second["id"]
    assert second["engine_cc"] == 1998
    assert second["fuel_type"] == "Gasoline"
    assert second["power_hp"] == 158.0


@pytest.mark.asyncio
async def test_add_equipment_validation():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        bad_category = await client.post(
            f"/api/v1/vehicles/{vehicle['id']}/equipment",
            json=[{"category": "engine", "feature_name": "Turbo"}],
        )
        empty_name = await client.post(
            f"/api/v1/vehicles/{vehicle['id']}/equipment",
            json=[{"category": "comfort", "feature_name": ""}],
        )
        unknown_vehicle = await client.post(
            "/api/v1/vehicles/nonexistent/equipment",
            json=[{"category": "comfort", "feature_name": "Sunroof"}],
        )

    assert bad_category.status_code == 422
    assert empty_name.status_code == 422
    assert unknown_vehicle.status_code == 404


@pytest.mark.asyncio
async def test_preview_of_seeded_vehicle():
    vehicle_id = SEED_VEHICLES[0]["id"]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"/api/v1/vehicles/{vehicle_id}/preview")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["vehicle"]["id"] == vehicle_id
    assert data["specs"]["engine_cc"] == 2487
    names = {e["feature_name"] for e in data["equipment"]}
    assert {name for _, name in SEED_EQUIPMENT} <= names


@pytest.mark.asyncio
async def test_preview_of_bare_vehicle():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        vehicle = await _create_vehicle(client)
        equipment = await client.post(
            f"/api/v1/vehicles/{vehicle['id']}/equipment",
            json=[
                {"category": "safety", "feature_name": "ABS"},
                {"category": "comfort", "feature_name": "Heated seats", "is_confirmed": True},
            ],
        )
        response = await client.get(f"/api/v1/vehicles/{vehicle['id']}/preview")

    assert equipment.status_code == 201
    assert [e["source"] for e in equipment.json()["data"]] == ["manual_input", "manual_input"]
    data = response.json()["data"]
    assert data["specs"] is None
    assert data["inspection"] is None
    assert [e["feature_name"] for e in data["equipment"]] == ["Heated seats", "ABS"]


@pytest.mark.asyncio
async def test_list_vehicles_clamps_paging():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/vehicles", params={"page": 0, "page_size": 500})

    page = response.json()["data"]
    assert page["page"] == 1
    assert page["page_size"] == 20
