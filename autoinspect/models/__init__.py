from autoinspect.models.vehicle import Vehicle, VehicleSpecs, VehicleEquipment
from autoinspect.models.inspection import Inspection, InspectionPhoto, InspectionFinding

__all__ = [
    "Vehicle",
    "VehicleSpecs",
    "VehicleEquipment",
    "Inspection",
    "InspectionPhoto",
    "InspectionFinding",
]
