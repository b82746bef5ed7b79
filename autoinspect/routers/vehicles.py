from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.database import get_db
from autoinspect.schemas.vehicle import (
    EquipmentCreate,
    EquipmentResponse,
    VehicleCreate,
    VehicleResponse,
    VehicleSpecsPayload,
    VehicleSpecsResponse,
    VehicleUpdate,
)
from autoinspect.services import vehicle_service
from autoinspect.utils.response import page_response, success_response

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.post("", status_code=201)
async def create_vehicle(payload: VehicleCreate, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.create_vehicle(db, payload)
    return success_response(data=VehicleResponse.model_validate(vehicle).model_dump())


@router.get("")
async def list_vehicles(page: int = 1, page_size: int = 20, db: AsyncSession = Depends(get_db)):
    page, page_size = vehicle_service.normalize_page(page, page_size)
    vehicles, total = await vehicle_service.list_vehicles(db, page, page_size)
    items = [VehicleResponse.model_validate(v).model_dump() for v in vehicles]
    return page_response(items, total, page, page_size)


@router.get("/{vehicle_id}")
async def get_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.get_vehicle(db, vehicle_id)
    return success_response(data=VehicleResponse.model_validate(vehicle).model_dump())


@router.patch("/{vehicle_id}")
async def update_vehicle(vehicle_id: str, payload: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.update_vehicle(db, vehicle_id, payload)
    return success_response(data=VehicleResponse.model_validate(vehicle).model_dump())


@router.delete("/{vehicle_id}")
async def delete_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    await vehicle_service.delete_vehicle(db, vehicle_id)
    return success_response(message="Vehicle deleted")


@router.get("/{vehicle_id}/preview")
async def get_vehicle_preview(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    preview = await vehicle_service.get_preview(db, vehicle_id)
    return success_response(data=preview.model_dump())


@router.post("/{vehicle_id}/publish")
async def publish_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.publish_vehicle(db, vehicle_id)
    return success_response(data=VehicleResponse.model_validate(vehicle).model_dump())


@router.patch("/{vehicle_id}/specs")
async def update_specs(vehicle_id: str, payload: VehicleSpecsPayload, db: AsyncSession = Depends(get_db)):
    specs = await vehicle_service.upsert_specs(db, vehicle_id, payload)
    return success_response(data=VehicleSpecsResponse.model_validate(specs).model_dump())


@router.post("/{vehicle_id}/equipment", status_code=201)
async def add_equipment(vehicle_id: str, items: list[EquipmentCreate], db: AsyncSession = Depends(get_db)):
    rows = await vehicle_service.add_equipment(db, vehicle_id, items)
    return success_response(data=[EquipmentResponse.model_validate(r).model_dump() for r in rows])
