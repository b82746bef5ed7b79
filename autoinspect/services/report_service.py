"""Printable inspection report: vehicle data, specs, equipment and findings."""
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.models.enums import EquipmentCategory, FindingSeverity
from autoinspect.models.inspection import Inspection, InspectionFinding
from autoinspect.models.vehicle import Vehicle, VehicleEquipment, VehicleSpecs
from autoinspect.services import inspection_service, vehicle_service
from autoinspect.services.storage import LocalStorage
from autoinspect.utils.exceptions import AppException, NotFoundError
from autoinspect.utils.pdf import PdfWriter

logger = logging.getLogger(__name__)

REPORT_TITLE = "Vehicle Inspection Report"
FOOTER = "Report generated by AutoInspect"
RULE = "=" * 60
SECTION_RULE = "-" * 40

EQUIPMENT_SECTIONS = [
    (EquipmentCategory.SAFETY, "Safety"),
    (EquipmentCategory.COMFORT, "Comfort"),
    (EquipmentCategory.INFOTAINMENT, "Infotainment & Connectivity"),
    (EquipmentCategory.EXTERIOR, "Exterior"),
    (EquipmentCategory.INTERIOR, "Interior"),
]


def report_path_for(vehicle_id: str) -> str:
    return f"reports/{vehicle_id}/inspection_report.pdf"


def _field(lines: list[str], label: str, value, width: int = 20, suffix: str = "") -> None:
    if value is None or value == "":
        return
    if isinstance(value, float):
        value = f"{value:.1f}"
    lines.append(f"  {label + ':':<{width}} {value}{suffix}")


def _format_timestamp(value: str) -> str:
    try:
        return datetime.fromisoformat(value).strftime("%d/%m/%Y %H:%M")
    except ValueError:
        return value


def cover_page(vehicle: Vehicle, inspection: Inspection) -> str:
    lines = [REPORT_TITLE, RULE, ""]
    lines.append(f"Vehicle: {vehicle.description}")
    if inspection.score_overall is not None:
        lines.append(f"OVERALL SCORE: {inspection.score_overall} / 100")

    lines += ["", "--- Vehicle Data ---"]
    _field(lines, "Brand", vehicle.brand)
    _field(lines, "Model", vehicle.model)
    _field(lines, "Year", vehicle.year)
    _field(lines, "Mileage", vehicle.mileage_km, suffix=" km")
    _field(lines, "Plate", vehicle.plate)
    _field(lines, "Color", vehicle.color_exterior)
    if vehicle.price_usd is not None:
        _field(lines, "Price", f"USD ${vehicle.price_usd:.0f}")
    _field(lines, "Branch", vehicle.branch)
    _field(lines, "Origin", vehicle.origin)

    lines += ["", "--- Inspection ---"]
    if inspection.inspector_name:
        lines.append(f"  Inspector: {inspection.inspector_name}")
    if inspection.inspected_at:
        lines.append(f"  Date: {_format_timestamp(inspection.inspected_at)}")
    lines.append(f"  Photos analysed: {inspection.photos_count}")
    lines.append(f"  Findings: {inspection.findings_count}")

    lines += ["", "--- Scores by Area ---"]
    for label, score in (
        ("Exterior", inspection.score_exterior),
        ("Interior", inspection.score_interior),
        ("Mechanical", inspection.score_mechanical),
        ("Tires", inspection.score_tires),
    ):
        if score is not None:
            lines.append(f"  {label + ':':<13} {score} / 10")

    return "\n".join(lines)


def specs_page(specs: VehicleSpecs) -> str:
    lines = ["TECHNICAL SPECIFICATIONS", RULE]

    def section(title: str, fields: list[tuple]) -> None:
        lines.extend(["", title, SECTION_RULE])
        for label, value, *suffix in fields:
            _field(lines, label, value, width=28, suffix=suffix[0] if suffix else "")

    section("Engine & Performance", [
        ("Engine type", specs.engine_type),
        ("Displacement", specs.engine_cc, " cc"),
        ("Cylinders", specs.engine_cylinders),
        ("Power", specs.power_hp, " HP"),
        ("Power", specs.power_kw, " kW"),
        ("Torque", specs.torque_nm, " Nm"),
        ("Torque RPM range", specs.torque_rpm_range),
        ("Fuel", specs.fuel_type),
        ("Fuel system", specs.fuel_system),
        ("0-100 km/h", specs.accel_0_100, " s"),
        ("Top speed", specs.top_speed_kmh, " km/h"),
    ])
    section("Transmission & Drivetrain", [
        ("Transmission", specs.transmission_type),
        ("Gears", specs.transmission_gears),
        ("Drivetrain", specs.drivetrain),
    ])
    section("Dimensions & Capacities", [
        ("Length", specs.length_mm, " mm"),
        ("Width", specs.width_mm, " mm"),
        ("Height", specs.height_mm, " mm"),
        ("Wheelbase", specs.wheelbase_mm, " mm"),
        ("Cargo", specs.cargo_liters, " liters"),
        ("Cargo max.", specs.cargo_max_liters, " liters"),
        ("Curb weight", specs.curb_weight_kg, " kg"),
        ("Tires", specs.tire_size),
        ("Spare tire", specs.spare_tire),
    ])
    section("Fuel Consumption", [
        ("City", specs.fuel_city_kml, " km/L"),
        ("Highway", specs.fuel_highway_kml, " km/L"),
        ("Combined", specs.fuel_combined_kml, " km/L"),
        ("Tank", specs.fuel_tank_liters, " liters"),
    ])
    return "\n".join(lines)


def equipment_page(equipment: list[VehicleEquipment]) -> str:
    lines = ["STANDARD EQUIPMENT", RULE]
    for category, title in EQUIPMENT_SECTIONS:
        items = [e for e in equipment if e.category == category.value]
        if not items:
            continue
        lines.extend(["", title, SECTION_RULE])
        for item in items:
            mark = "[OK*]" if item.is_confirmed else "[OK]"
            lines.append(f"  {mark} {item.feature_name}")
    return "\n".join(lines)


def findings_page(findings: list[InspectionFinding]) -> str:
    lines = ["VISUAL INSPECTION RESULTS", RULE]

    if not findings:
        lines += [
            "",
            "No significant findings.",
            "The vehicle is in excellent overall condition.",
        ]
    else:
        counts = {severity: 0 for severity in FindingSeverity}
        for f in findings:
            counts[FindingSeverity(f.severity)] += 1

        lines += ["", "Findings summary:"]
        for severity, label in (
            (FindingSeverity.MAJOR, "MAJOR:"),
            (FindingSeverity.MODERATE, "MODERATE:"),
            (FindingSeverity.MINOR, "MINOR:"),
        ):
            if counts[severity]:
                lines.append(f"  {label:<9} {counts[severity]} finding(s)")

        lines += ["", "Finding details:", "-" * 60]
        for i, f in enumerate(findings, start=1):
            lines.append("")
            lines.append(
                f"#{i} | Zone: {f.zone.upper()} | Type: {f.finding_type} | Severity: {f.severity.upper()}"
            )
            if f.ai_confidence is not None:
                lines.append(f"   AI confidence: {f.ai_confidence * 100:.0f}%")
            if f.description:
                lines.append(f"   {f.description}")
            if f.confirmed_by_human:
                lines.append("   [Confirmed by inspector]")

    lines += ["", "-" * 60, FOOTER]
    return "\n".join(lines)


def render_report(
    vehicle: Vehicle,
    specs: VehicleSpecs | None,
    equipment: list[VehicleEquipment],
    inspection: Inspection,
    findings: list[InspectionFinding],
) -> bytes:
    writer = PdfWriter()
    writer.add_page(cover_page(vehicle, inspection))
    if specs is not None:
        writer.add_page(specs_page(specs))
    if equipment:
        writer.add_page(equipment_page(equipment))
    writer.add_page(findings_page(findings))
    return writer.render()


async def generate_report(
    db: AsyncSession, vehicle_id: str, storage: LocalStorage
) -> tuple[str, bytes]:
    """Render the report for a vehicle's latest inspection and store it.

    A storage failure is logged and the bytes are still returned.
    """
    vehicle = await vehicle_service.get_vehicle(db, vehicle_id)
    inspection = await inspection_service.get_latest_inspection(db, vehicle_id)
    if inspection is None:
        raise NotFoundError("No inspection found for this vehicle")

    specs = await vehicle_service.get_specs(db, vehicle_id)
    equipment = await vehicle_service.list_equipment(db, vehicle_id)
    findings = await inspection_service.list_findings(db, inspection.id)

    pdf_bytes = render_report(vehicle, specs, equipment, inspection, findings)

    path = report_path_for(vehicle_id)
    try:
        storage.write(path, pdf_bytes)
    except AppException as e:
        logger.error("Failed to store report for vehicle %s: %s", vehicle_id, e.message)
    else:
        inspection.report_path = path
        await db.commit()

    logger.info("Generated report for vehicle %s (%d bytes)", vehicle_id, len(pdf_bytes))
    return path, pdf_bytes
