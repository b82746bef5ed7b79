from sqlalchemy import Column, String, Integer, Float, Boolean, ForeignKey

from autoinspect.database import Base


class Inspection(Base):
    __tablename__ = "inspections"

    id = Column(String, primary_key=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    inspector_name = Column(String, nullable=True)
    inspector_branch = Column(String, nullable=True)
    score_overall = Column(Integer, nullable=True)
    score_exterior = Column(Integer, nullable=True)
    score_interior = Column(Integer, nullable=True)
    score_mechanical = Column(Integer, nullable=True)
    score_tires = Column(Integer, nullable=True)
    photos_count = Column(Integer, nullable=False, default=0)
    findings_count = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="pending")
    report_path = Column(String, nullable=True)
    inspected_at = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)


class InspectionPhoto(Base):
    __tablename__ = "inspection_photos"

    id = Column(String, primary_key=True)
    inspection_id = Column(String, ForeignKey("inspections.id", ondelete="CASCADE"), nullable=False)
    photo_path = Column(String, nullable=False)
    zone = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False)
    uploaded_at = Column(String, nullable=False)


class InspectionFinding(Base):
    __tablename__ = "inspection_findings"

    id = Column(String, primary_key=True)
    inspection_id = Column(String, ForeignKey("inspections.id", ondelete="CASCADE"), nullable=False)
    photo_path = Column(String, nullable=True)
    zone = Column(String, nullable=False)
    finding_type = Column(String, nullable=False)
    severity = Column(String, nullable=False)
    description = Column(String, nullable=True)
    ai_confidence = Column(Float, nullable=True)
    confirmed_by_human = Column(Boolean, nullable=False, default=False)
