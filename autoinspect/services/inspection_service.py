import asyncio
import logging
import os
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.config import settings
from autoinspect.models.enums import (
    SEVERITY_RANK,
    FindingSeverity,
    InspectionStatus,
    PhotoZone,
    finding_zone_for,
)
from autoinspect.models.inspection import Inspection, InspectionFinding, InspectionPhoto
from autoinspect.models.vehicle import Vehicle
from autoinspect.schemas.inspection import (
    FindingResponse,
    FindingUpdate,
    InspectionResponse,
    InspectionView,
    PhotoResponse,
)
from autoinspect.schemas.vision import PhotoAnalysis
from autoinspect.services.scoring import aggregate_scores, mechanical_base_score
from autoinspect.services.storage import LocalStorage
from autoinspect.services.vision_service import PhotoAnalyzer
from autoinspect.utils.exceptions import InvalidInputError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def create_inspection(
    db: AsyncSession,
    vehicle_id: str,
    inspector_name: str | None = None,
    inspector_branch: str | None = None,
) -> Inspection:
    if await db.get(Vehicle, vehicle_id) is None:
        raise NotFoundError("Vehicle not found")

    now = _now()
    inspection = Inspection(
        id=str(uuid.uuid4()),
        vehicle_id=vehicle_id,
        inspector_name=inspector_name or None,
        inspector_branch=inspector_branch or None,
        photos_count=0,
        findings_count=0,
        status=InspectionStatus.PENDING.value,
        created_at=now,
        updated_at=now,
    )
    db.add(inspection)
    await db.commit()
    return inspection


async def get_inspection(db: AsyncSession, inspection_id: str) -> Inspection:
    inspection = await db.get(Inspection, inspection_id)
    if inspection is None:
        raise NotFoundError("Inspection not found")
    return inspection


async def get_latest_inspection(db: AsyncSession, vehicle_id: str) -> Inspection | None:
    """Latest inspection of a vehicle; older ones are kept but not used."""
    result = await db.execute(
        select(Inspection)
        .where(Inspection.vehicle_id == vehicle_id)
        .order_by(Inspection.created_at.desc())
        .limit(1)
    )
    return result.scalars().first()


async def list_photos(db: AsyncSession, inspection_id: str) -> list[InspectionPhoto]:
    result = await db.execute(
        select(InspectionPhoto)
        .where(InspectionPhoto.inspection_id == inspection_id)
        .order_by(InspectionPhoto.sort_order)
    )
    return list(result.scalars().all())


async def list_findings(db: AsyncSession, inspection_id: str) -> list[InspectionFinding]:
    """Findings ordered most severe first, then by zone."""
    result = await db.execute(
        select(InspectionFinding).where(InspectionFinding.inspection_id == inspection_id)
    )
    findings = list(result.scalars().all())
    findings.sort(key=lambda f: (SEVERITY_RANK[FindingSeverity(f.severity)], f.zone))
    return findings


async def build_view(db: AsyncSession, inspection: Inspection) -> InspectionView:
    findings = await list_findings(db, inspection.id)
    photos = await list_photos(db, inspection.id)
    return InspectionView(
        inspection=InspectionResponse.model_validate(inspection),
        findings=[FindingResponse.model_validate(f) for f in findings],
        photos=[PhotoResponse.model_validate(p) for p in photos],
    )


async def get_inspection_view(db: AsyncSession, inspection_id: str) -> InspectionView:
    return await build_view(db, await get_inspection(db, inspection_id))


async def get_latest_view_for_vehicle(db: AsyncSession, vehicle_id: str) -> InspectionView:
    if await db.get(Vehicle, vehicle_id) is None:
        raise NotFoundError("Vehicle not found")
    inspection = await get_latest_inspection(db, vehicle_id)
    if inspection is None:
        raise NotFoundError("No inspection found for this vehicle")
    return await build_view(db, inspection)


async def upload_photo(
    db: AsyncSession,
    storage: LocalStorage,
    inspection: Inspection,
    zone: PhotoZone,
    data: bytes,
    filename: str,
) -> InspectionPhoto:
    if not data:
        raise InvalidInputError("Photo file is empty")
    if len(data) > settings.max_photo_size_bytes:
        raise InvalidInputError(
            f"Photo exceeds the maximum size of {settings.max_photo_size_bytes} bytes"
        )

    photo_id = str(uuid.uuid4())
    safe_name = os.path.basename(filename or "") or "photo.jpg"
    storage_path = f"inspections/{inspection.id}/photos/{photo_id}_{safe_name}"
    storage.write(storage_path, data)

    result = await db.execute(
        select(func.count())
        .select_from(InspectionPhoto)
        .where(InspectionPhoto.inspection_id == inspection.id)
    )
    sort_order = result.scalar_one()

    photo = InspectionPhoto(
        id=photo_id,
        inspection_id=inspection.id,
        photo_path=storage_path,
        zone=zone.value,
        sort_order=sort_order,
        uploaded_at=_now(),
    )
    db.add(photo)
    inspection.photos_count = sort_order + 1
    inspection.updated_at = _now()
    await db.commit()

    logger.info("Stored photo %s (zone=%s) for inspection %s", photo_id, zone.value, inspection.id)
    return photo


async def update_finding(db: AsyncSession, finding_id: str, changes: FindingUpdate) -> InspectionFinding:
    finding = await db.get(InspectionFinding, finding_id)
    if finding is None:
        raise NotFoundError("Inspection finding not found")

    for field, value in changes.model_dump(exclude_unset=True).items():
        if field in ("zone", "finding_type", "severity"):
            if value is None:
                raise InvalidInputError(f"{field} cannot be null")
            value = value.value
        elif field == "confirmed_by_human" and value is None:
            raise InvalidInputError("confirmed_by_human cannot be null")
        setattr(finding, field, value)

    await db.commit()
    return finding


def build_findings(
    inspection_id: str,
    photo: InspectionPhoto,
    analysis: PhotoAnalysis,
) -> list[InspectionFinding]:
    zone = finding_zone_for(PhotoZone(photo.zone))
    findings = []
    for f in analysis.findings:
        description = f.description
        if f.location:
            description = f"{f.location} - {f.description}"
        findings.append(InspectionFinding(
            id=str(uuid.uuid4()),
            inspection_id=inspection_id,
            photo_path=photo.photo_path,
            zone=zone.value,
            finding_type=f.type.value,
            severity=f.severity.value,
            description=description,
            ai_confidence=f.confidence,
            confirmed_by_human=False,
        ))
    return findings


async def _analyze_photos(
    photos: list[InspectionPhoto],
    vehicle: Vehicle,
    analyzer: PhotoAnalyzer,
    storage: LocalStorage,
) -> list[tuple[InspectionPhoto, PhotoAnalysis]]:
    """Analyse photos concurrently; failed photos are logged and left out."""
    semaphore = asyncio.Semaphore(max(settings.vision_concurrency, 1))
    vehicle_description = vehicle.description

    async def _one(photo: InspectionPhoto) -> tuple[InspectionPhoto, PhotoAnalysis] | None:
        async with semaphore:
            try:
                zone = finding_zone_for(PhotoZone(photo.zone))
                image = await asyncio.to_thread(storage.read, photo.photo_path)
                analysis = await analyzer.analyze(image, zone, vehicle_description)
            except Exception as e:
                logger.error("Failed to analyze photo %s: %s", photo.id, e)
                return None
        return photo, analysis

    results = await asyncio.gather(*(_one(p) for p in photos))
    return [r for r in results if r is not None]


async def run_inspection(
    db: AsyncSession,
    vehicle: Vehicle,
    inspection_id: str,
    analyzer: PhotoAnalyzer,
    storage: LocalStorage,
) -> Inspection:
    """Analyse every photo of an inspection and store scores and findings.

    Pending, processing and completed inspections can be run; a rerun
    replaces the findings of earlier runs that no inspector confirmed.
    Approved inspections are frozen. Per-photo failures only shrink the
    result; a failure to store the final scores raises ``PersistenceError``
    and leaves the inspection in ``processing``.
    """
    inspection = await get_inspection(db, inspection_id)
    if inspection.status == InspectionStatus.APPROVED.value:
        raise InvalidInputError("Approved inspections cannot be re-run")
    photos = await list_photos(db, inspection_id)
    if not photos:
        raise InvalidInputError("No photos uploaded for this inspection")

    mechanical_default = mechanical_base_score(vehicle.year, vehicle.mileage_km)

    inspection.status = InspectionStatus.PROCESSING.value
    inspection.updated_at = _now()
    await db.commit()

    logger.info("Running vision inspection %s with %d photos", inspection_id, len(photos))

    analyzed = await _analyze_photos(photos, vehicle, analyzer, storage)

    scores = aggregate_scores(
        ((PhotoZone(photo.zone), analysis.score) for photo, analysis in analyzed),
        mechanical_default,
    )

    all_findings: list[InspectionFinding] = []
    for photo, analysis in analyzed:
        all_findings.extend(build_findings(inspection_id, photo, analysis))

    try:
        await _save_findings(db, inspection_id, all_findings)
    except SQLAlchemyError as e:
        logger.error("Failed to save findings for inspection %s: %s", inspection_id, e)
        await db.rollback()
        await db.refresh(inspection)

    inspection.score_overall = scores.overall
    inspection.score_exterior = scores.exterior
    inspection.score_interior = scores.interior
    inspection.score_mechanical = scores.mechanical
    inspection.score_tires = scores.tires
    inspection.findings_count = await _count_findings(db, inspection_id)
    inspection.photos_count = len(photos)
    inspection.status = InspectionStatus.COMPLETED.value
    inspection.inspected_at = _now()
    inspection.updated_at = inspection.inspected_at

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to update inspection %s results", inspection_id)
        raise PersistenceError("Failed to update inspection results") from e

    logger.info(
        "Inspection %s completed: score=%d, findings=%d, analyzed=%d/%d",
        inspection_id, scores.overall, inspection.findings_count, len(analyzed), len(photos),
    )
    return inspection


async def _save_findings(db: AsyncSession, inspection_id: str, findings: list[InspectionFinding]) -> None:
    """Swap the unconfirmed findings of earlier runs for this run's batch."""
    await db.execute(
        delete(InspectionFinding).where(
            InspectionFinding.inspection_id == inspection_id,
            InspectionFinding.confirmed_by_human.is_(False),
        )
    )
    db.add_all(findings)
    await db.commit()


async def _count_findings(db: AsyncSession, inspection_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(InspectionFinding)
        .where(InspectionFinding.inspection_id == inspection_id)
    )
    return result.scalar_one()
