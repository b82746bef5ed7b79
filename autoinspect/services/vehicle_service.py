import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.models.enums import VehicleStatus
from autoinspect.models.vehicle import Vehicle, VehicleEquipment, VehicleSpecs
from autoinspect.schemas.vehicle import (
    EquipmentCreate,
    EquipmentResponse,
    VehicleCreate,
    VehiclePreview,
    VehicleResponse,
    VehicleSpecsPayload,
    VehicleSpecsResponse,
    VehicleUpdate,
)
from autoinspect.services import inspection_service
from autoinspect.utils.exceptions import AppException, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _validate_year(year: int) -> None:
    if year < MIN_YEAR or year > MAX_YEAR:
        raise InvalidInputError("Invalid vehicle year")


async def _commit_vehicle(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise AppException("A vehicle with this plate already exists", status_code=409) from e


async def create_vehicle(db: AsyncSession, payload: VehicleCreate) -> Vehicle:
    if not payload.brand or not payload.model:
        raise InvalidInputError("Brand and model are required")
    _validate_year(payload.year)

    data = payload.model_dump(exclude={"status"})
    now = _now()
    vehicle = Vehicle(
        id=str(uuid.uuid4()),
        status=(payload.status or VehicleStatus.DRAFT).value,
        created_at=now,
        updated_at=now,
        **data,
    )
    db.add(vehicle)
    await _commit_vehicle(db)
    logger.info("Created vehicle %s (%s)", vehicle.id, vehicle.description)
    return vehicle


async def get_vehicle(db: AsyncSession, vehicle_id: str) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


def normalize_page(page: int, page_size: int) -> tuple[int, int]:
    if page < 1:
        page = 1
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


async def list_vehicles(db: AsyncSession, page: int, page_size: int) -> tuple[list[Vehicle], int]:
    page, page_size = normalize_page(page, page_size)

    total = (await db.execute(select(func.count()).select_from(Vehicle))).scalar_one()
    result = await db.execute(
        select(Vehicle)
        .order_by(Vehicle.created_at.desc(), Vehicle.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return list(result.scalars().all()), total


async def update_vehicle(db: AsyncSession, vehicle_id: str, payload: VehicleUpdate) -> Vehicle:
    vehicle = await get_vehicle(db, vehicle_id)
    changes = payload.model_dump(exclude_unset=True)

    if "year" in changes:
        if changes["year"] is None:
            raise InvalidInputError("Invalid vehicle year")
        _validate_year(changes["year"])
    for field in ("brand", "model"):
        if field in changes and not changes[field]:
            raise InvalidInputError("Brand and model are required")
    if "status" in changes:
        if changes["status"] is None:
            raise InvalidInputError("Invalid status value")
        changes["status"] = changes["status"].value
    if "mileage_km" in changes and changes["mileage_km"] is None:
        raise InvalidInputError("mileage_km cannot be null")

    for field, value in changes.items():
        setattr(vehicle, field, value)
    vehicle.updated_at = _now()
    await _commit_vehicle(db)
    return vehicle


async def delete_vehicle(db: AsyncSession, vehicle_id: str) -> None:
    vehicle = await get_vehicle(db, vehicle_id)
    await db.delete(vehicle)
    await db.commit()
    logger.info("Deleted vehicle %s", vehicle_id)


async def publish_vehicle(db: AsyncSession, vehicle_id: str) -> Vehicle:
    vehicle = await get_vehicle(db, vehicle_id)
    vehicle.status = VehicleStatus.PUBLISHED.value
    vehicle.updated_at = _now()
    await db.commit()
    return vehicle


async def get_specs(db: AsyncSession, vehicle_id: str) -> VehicleSpecs | None:
    result = await db.execute(select(VehicleSpecs).where(VehicleSpecs.vehicle_id == vehicle_id))
    return result.scalars().first()


async def upsert_specs(db: AsyncSession, vehicle_id: str, payload: VehicleSpecsPayload) -> VehicleSpecs:
    await get_vehicle(db, vehicle_id)
    specs = await get_specs(db, vehicle_id)
    if specs is None:
        specs = VehicleSpecs(id=str(uuid.uuid4()), vehicle_id=vehicle_id)
        db.add(specs)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(specs, field, value)
    await db.commit()
    return specs


async def list_equipment(db: AsyncSession, vehicle_id: str) -> list[VehicleEquipment]:
    result = await db.execute(
        select(VehicleEquipment)
        .where(VehicleEquipment.vehicle_id == vehicle_id)
        .order_by(VehicleEquipment.category, VehicleEquipment.feature_name)
    )
    return list(result.scalars().all())


async def add_equipment(
    db: AsyncSession, vehicle_id: str, items: list[EquipmentCreate]
) -> list[VehicleEquipment]:
    await get_vehicle(db, vehicle_id)
    rows = [
        VehicleEquipment(
            id=str(uuid.uuid4()),
            vehicle_id=vehicle_id,
            category=item.category.value,
            feature_name=item.feature_name,
            feature_description=item.feature_description,
            is_standard=item.is_standard,
            is_confirmed=item.is_confirmed,
            source=item.source.value,
        )
        for item in items
    ]
    db.add_all(rows)
    await db.commit()
    return rows


async def get_preview(db: AsyncSession, vehicle_id: str) -> VehiclePreview:
    vehicle = await get_vehicle(db, vehicle_id)
    specs = await get_specs(db, vehicle_id)
    equipment = await list_equipment(db, vehicle_id)
    inspection = await inspection_service.get_latest_inspection(db, vehicle_id)

    return VehiclePreview(
        vehicle=VehicleResponse.model_validate(vehicle),
        specs=VehicleSpecsResponse.model_validate(specs) if specs else None,
        equipment=[EquipmentResponse.model_validate(e) for e in equipment],
        inspection=await inspection_service.build_view(db, inspection) if inspection else None,
    )
