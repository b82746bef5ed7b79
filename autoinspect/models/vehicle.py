from sqlalchemy import Column, String, Integer, Float, Boolean, ForeignKey

from autoinspect.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String, primary_key=True)
    plate = Column(String, nullable=True, unique=True)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=False)
    version = Column(String, nullable=True)
    trim = Column(String, nullable=True)
    year = Column(Integer, nullable=False)
    mileage_km = Column(Integer, nullable=False, default=0)
    color_exterior = Column(String, nullable=True)
    color_interior = Column(String, nullable=True)
    price_usd = Column(Float, nullable=True)
    branch = Column(String, nullable=True)
    origin = Column(String, nullable=True)
    status = Column(String, nullable=False, default="draft")
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    @property
    def description(self) -> str:
        parts = [self.brand, self.model, self.version or "", str(self.year)]
        return " ".join(p for p in parts if p)


class VehicleSpecs(Base):
    __tablename__ = "vehicle_specs"

    id = Column(String, primary_key=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Engine
    engine_type = Column(String, nullable=True)
    engine_cc = Column(Integer, nullable=True)
    engine_cylinders = Column(Integer, nullable=True)
    power_hp = Column(Float, nullable=True)
    power_kw = Column(Float, nullable=True)
    torque_nm = Column(Integer, nullable=True)
    torque_rpm_range = Column(String, nullable=True)
    fuel_type = Column(String, nullable=True)
    fuel_system = Column(String, nullable=True)

    # Transmission
    transmission_type = Column(String, nullable=True)
    transmission_gears = Column(Integer, nullable=True)
    drivetrain = Column(String, nullable=True)

    # Performance
    accel_0_100 = Column(Float, nullable=True)
    top_speed_kmh = Column(Integer, nullable=True)

    # Fuel consumption
    fuel_city_kml = Column(Float, nullable=True)
    fuel_highway_kml = Column(Float, nullable=True)
    fuel_combined_kml = Column(Float, nullable=True)
    fuel_tank_liters = Column(Integer, nullable=True)

    # Dimensions
    length_mm = Column(Integer, nullable=True)
    width_mm = Column(Integer, nullable=True)
    height_mm = Column(Integer, nullable=True)
    wheelbase_mm = Column(Integer, nullable=True)
    cargo_liters = Column(Integer, nullable=True)
    cargo_max_liters = Column(Integer, nullable=True)
    curb_weight_kg = Column(Integer, nullable=True)

    # Tires
    tire_size = Column(String, nullable=True)
    spare_tire = Column(String, nullable=True)

    specs_source = Column(String, nullable=True)
    specs_confidence = Column(Float, nullable=True)
    enriched_at = Column(String, nullable=True)


class VehicleEquipment(Base):
    __tablename__ = "vehicle_equipment"

    id = Column(String, primary_key=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    category = Column(String, nullable=False)
    feature_name = Column(String, nullable=False)
    feature_description = Column(String, nullable=True)
    is_standard = Column(Boolean, nullable=False, default=True)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    source = Column(String, nullable=False, default="manual_input")
