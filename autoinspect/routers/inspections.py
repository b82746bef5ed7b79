from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from autoinspect.database import get_db
from autoinspect.models.enums import PhotoZone
from autoinspect.schemas.inspection import FindingResponse, FindingUpdate, PhotoResponse
from autoinspect.services import inspection_service, report_service, vehicle_service
from autoinspect.services.storage import LocalStorage, get_storage
from autoinspect.services.vision_service import get_analyzer
from autoinspect.utils.exceptions import NotFoundError
from autoinspect.utils.response import success_response

router = APIRouter(tags=["inspections"])


@router.post("/vehicles/{vehicle_id}/photos", status_code=201)
async def upload_photo(
    vehicle_id: str,
    photo: UploadFile = File(...),
    zone: PhotoZone = Form(PhotoZone.CLOSEUP),
    inspector_name: str = Form(""),
    inspector_branch: str = Form(""),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
):
    await vehicle_service.get_vehicle(db, vehicle_id)

    inspection = await inspection_service.get_latest_inspection(db, vehicle_id)
    if inspection is None:
        inspection = await inspection_service.create_inspection(
            db, vehicle_id, inspector_name, inspector_branch
        )

    content = await photo.read()
    stored = await inspection_service.upload_photo(
        db, storage, inspection, zone, content, photo.filename or ""
    )
    return success_response(data=PhotoResponse.model_validate(stored).model_dump())


@router.get("/vehicles/{vehicle_id}/inspection")
async def get_inspection(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    view = await inspection_service.get_latest_view_for_vehicle(db, vehicle_id)
    return success_response(data=view.model_dump())


@router.post("/vehicles/{vehicle_id}/inspect")
async def run_inspection(
    vehicle_id: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    analyzer=Depends(get_analyzer),
):
    vehicle = await vehicle_service.get_vehicle(db, vehicle_id)
    inspection = await inspection_service.get_latest_inspection(db, vehicle_id)
    if inspection is None:
        raise NotFoundError("No inspection found for this vehicle. Upload photos first.")

    await inspection_service.run_inspection(db, vehicle, inspection.id, analyzer, storage)

    view = await inspection_service.get_inspection_view(db, inspection.id)
    return success_response(data=view.model_dump())


@router.get("/vehicles/{vehicle_id}/report.pdf")
async def get_report(
    vehicle_id: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
):
    _, pdf_bytes = await report_service.generate_report(db, vehicle_id, storage)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline; filename=inspection_report.pdf"},
    )


@router.patch("/findings/{finding_id}")
async def update_finding(finding_id: str, payload: FindingUpdate, db: AsyncSession = Depends(get_db)):
    finding = await inspection_service.update_finding(db, finding_id, payload)
    return success_response(data=FindingResponse.model_validate(finding).model_dump())
