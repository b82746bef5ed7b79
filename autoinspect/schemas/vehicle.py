from pydantic import BaseModel, Field

from autoinspect.models.enums import EquipmentCategory, EquipmentSource, VehicleStatus
from autoinspect.schemas.inspection import InspectionView


class VehicleCreate(BaseModel):
    brand: str = ""
    model: str = ""
    year: int
    mileage_km: int = Field(default=0, ge=0)
    plate: str | None = None
    version: str | None = None
    trim: str | None = None
    color_exterior: str | None = None
    color_interior: str | None = None
    price_usd: float | None = None
    branch: str | None = None
    origin: str | None = None
    status: VehicleStatus | None = None


class VehicleUpdate(BaseModel):
    brand: str | None = None
    model: str | None = None
    year: int | None = None
    mileage_km: int | None = Field(default=None, ge=0)
    plate: str | None = None
    version: str | None = None
    trim: str | None = None
    color_exterior: str | None = None
    color_interior: str | None = None
    price_usd: float | None = None
    branch: str | None = None
    origin: str | None = None
    status: VehicleStatus | None = None


class VehicleResponse(BaseModel):
    id: str
    plate: str | None = None
    brand: str
    model: str
    version: str | None = None
    trim: str | None = None
    year: int
    mileage_km: int
    color_exterior: str | None = None
    color_interior: str | None = None
    price_usd: float | None = None
    branch: str | None = None
    origin: str | None = None
    status: str
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class VehicleSpecsPayload(BaseModel):
    engine_type: str | None = None
    engine_cc: int | None = None
    engine_cylinders: int | None = None
    power_hp: float | None = None
    power_kw: float | None = None
    torque_nm: int | None = None
    torque_rpm_range: str | None = None
    fuel_type: str | None = None
    fuel_system: str | None = None
    transmission_type: str | None = None
    transmission_gears: int | None = None
    drivetrain: str | None = None
    accel_0_100: float | None = None
    top_speed_kmh: int | None = None
    fuel_city_kml: float | None = None
    fuel_highway_kml: float | None = None
    fuel_combined_kml: float | None = None
    fuel_tank_liters: int | None = None
    length_mm: int | None = None
    width_mm: int | None = None
    height_mm: int | None = None
    wheelbase_mm: int | None = None
    cargo_liters: int | None = None
    cargo_max_liters: int | None = None
    curb_weight_kg: int | None = None
    tire_size: str | None = None
    spare_tire: str | None = None
    specs_source: str | None = None
    specs_confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class VehicleSpecsResponse(VehicleSpecsPayload):
    id: str
    vehicle_id: str
    enriched_at: str | None = None

    model_config = {"from_attributes": True}


class EquipmentCreate(BaseModel):
    category: EquipmentCategory
    feature_name: str = Field(min_length=1)
    feature_description: str | None = None
    is_standard: bool = True
    is_confirmed: bool = False
    source: EquipmentSource = EquipmentSource.MANUAL_INPUT


class EquipmentResponse(BaseModel):
    id: str
    vehicle_id: str
    category: str
    feature_name: str
    feature_description: str | None = None
    is_standard: bool
    is_confirmed: bool
    source: str

    model_config = {"from_attributes": True}


class VehiclePreview(BaseModel):
    vehicle: VehicleResponse
    specs: VehicleSpecsResponse | None = None
    equipment: list[EquipmentResponse] = Field(default_factory=list)
    inspection: InspectionView | None = None
