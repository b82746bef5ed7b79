from pydantic import BaseModel, Field

from autoinspect.models.enums import FindingSeverity, FindingType, FindingZone


class InspectionResponse(BaseModel):
    id: str
    vehicle_id: str
    inspector_name: str | None = None
    inspector_branch: str | None = None
    score_overall: int | None = None
    score_exterior: int | None = None
    score_interior: int | None = None
    score_mechanical: int | None = None
    score_tires: int | None = None
    photos_count: int
    findings_count: int
    status: str
    report_path: str | None = None
    inspected_at: str | None = None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class PhotoResponse(BaseModel):
    id: str
    inspection_id: str
    photo_path: str
    zone: str
    sort_order: int
    uploaded_at: str

    model_config = {"from_attributes": True}


class FindingResponse(BaseModel):
    id: str
    inspection_id: str
    photo_path: str | None = None
    zone: str
    finding_type: str
    severity: str
    description: str | None = None
    ai_confidence: float | None = None
    confirmed_by_human: bool

    model_config = {"from_attributes": True}


class FindingUpdate(BaseModel):
    """Reviewer edits; only the fields that are set get applied."""
    zone: FindingZone | None = None
    finding_type: FindingType | None = None
    severity: FindingSeverity | None = None
    description: str | None = None
    confirmed_by_human: bool | None = None


class InspectionView(BaseModel):
    inspection: InspectionResponse
    findings: list[FindingResponse] = Field(default_factory=list)
    photos: list[PhotoResponse] = Field(default_factory=list)
