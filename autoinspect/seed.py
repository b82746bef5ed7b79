"""Demo catalogue loaded into an empty database on startup."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.models.vehicle import Vehicle, VehicleEquipment, VehicleSpecs


SEED_VEHICLES = [
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "vehicle-demo-001")),
        "brand": "Toyota", "model": "RAV4", "version": "2.5 Hybrid", "year": 2021,
        "mileage_km": 38000, "plate": "ABC-123", "color_exterior": "Silver",
        "price_usd": 27500.0, "branch": "Downtown", "status": "review",
    },
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "vehicle-demo-002")),
        "brand": "Mercedes-Benz", "model": "Sprinter", "version": "316 CDI", "year": 2017,
        "mileage_km": 142000, "plate": "DEF-456", "color_exterior": "White",
        "price_usd": 31900.0, "branch": "Airport", "status": "draft",
    },
]

SEED_SPECS = {
    "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "specs-demo-001")),
    "vehicle_id": SEED_VEHICLES[0]["id"],
    "engine_type": "Inline-4 hybrid", "engine_cc": 2487, "engine_cylinders": 4,
    "power_hp": 219.0, "fuel_type": "Hybrid", "transmission_type": "e-CVT",
    "drivetrain": "AWD", "tire_size": "225/60 R18", "specs_source": "manual",
}

SEED_EQUIPMENT = [
    ("safety", "Lane departure alert"),
    ("safety", "Adaptive cruise control"),
    ("comfort", "Dual-zone climate control"),
    ("infotainment", "Apple CarPlay / Android Auto"),
]


async def seed_data(session: AsyncSession) -> None:
    result = await session.execute(select(Vehicle).limit(1))
    if result.scalars().first() is not None:
        return

    now = datetime.now(timezone.utc).isoformat()
    for v in SEED_VEHICLES:
        session.add(Vehicle(created_at=now, updated_at=now, **v))

    session.add(VehicleSpecs(**SEED_SPECS))
    for i, (category, name) in enumerate(SEED_EQUIPMENT):
        session.add(VehicleEquipment(
            id=str(uuid.uuid5(uuid.NAMESPACE_DNS, f"equipment-demo-{i}")),
            vehicle_id=SEED_VEHICLES[0]["id"],
            category=category,
            feature_name=name,
            is_standard=True,
            is_confirmed=False,
            source="factory_spec",
        ))

    await session.commit()
