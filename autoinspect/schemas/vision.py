"""Data contract returned by the image-analysis provider."""
from pydantic import BaseModel, Field

from autoinspect.models.enums import FindingSeverity, FindingType


class AnalyzedFinding(BaseModel):
    type: FindingType
    severity: FindingSeverity
    location: str = ""
    description: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class PhotoAnalysis(BaseModel):
    score: int = Field(ge=1, le=10)
    findings: list[AnalyzedFinding] = Field(default_factory=list)
