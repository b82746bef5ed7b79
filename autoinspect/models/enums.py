"""Closed vocabularies shared by the ORM rows, API schemas and scoring.

Values are stored as plain strings in the database; the enums are the
single place where the allowed values live.
"""
from enum import Enum


class VehicleStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"


class InspectionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    APPROVED = "approved"


class PhotoZone(str, Enum):
    """Capture zones a photo can be uploaded for."""
    FRONT = "front"
    REAR = "rear"
    LEFT = "left"
    RIGHT = "right"
    FRONT_LEFT = "front_left"
    REAR_RIGHT = "rear_right"
    INTERIOR_DRIVER = "interior_driver"
    INTERIOR_PASSENGER = "interior_passenger"
    INTERIOR_REAR = "interior_rear"
    DASHBOARD = "dashboard"
    INFOTAINMENT = "infotainment"
    ENGINE = "engine"
    TRUNK = "trunk"
    CLOSEUP = "closeup"


class FindingZone(str, Enum):
    """Coarser zones used when reporting findings."""
    FRONT = "front"
    REAR = "rear"
    LEFT = "left"
    RIGHT = "right"
    ROOF = "roof"
    INTERIOR_FRONT = "interior_front"
    INTERIOR_REAR = "interior_rear"
    ENGINE = "engine"
    TRUNK = "trunk"
    TIRES = "tires"


class FindingType(str, Enum):
    SCRATCH = "scratch"
    DENT = "dent"
    RUST = "rust"
    PAINT_MISMATCH = "paint_mismatch"
    WEAR = "wear"
    CRACK = "crack"
    STAIN = "stain"
    MISSING_PART = "missing_part"


class FindingSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class EquipmentCategory(str, Enum):
    SAFETY = "safety"
    COMFORT = "comfort"
    INFOTAINMENT = "infotainment"
    EXTERIOR = "exterior"
    INTERIOR = "interior"


class EquipmentSource(str, Enum):
    FACTORY_SPEC = "factory_spec"
    VISUAL_DETECTION = "visual_detection"
    MANUAL_INPUT = "manual_input"


class ScoreCategory(str, Enum):
    EXTERIOR = "exterior"
    INTERIOR = "interior"
    MECHANICAL = "mechanical"
    TIRES = "tires"


FINDING_ZONE_BY_PHOTO_ZONE: dict[PhotoZone, FindingZone] = {
    PhotoZone.FRONT: FindingZone.FRONT,
    PhotoZone.FRONT_LEFT: FindingZone.FRONT,
    PhotoZone.REAR: FindingZone.REAR,
    PhotoZone.REAR_RIGHT: FindingZone.REAR,
    PhotoZone.LEFT: FindingZone.LEFT,
    PhotoZone.RIGHT: FindingZone.RIGHT,
    PhotoZone.INTERIOR_DRIVER: FindingZone.INTERIOR_FRONT,
    PhotoZone.DASHBOARD: FindingZone.INTERIOR_FRONT,
    PhotoZone.INFOTAINMENT: FindingZone.INTERIOR_FRONT,
    PhotoZone.INTERIOR_PASSENGER: FindingZone.INTERIOR_REAR,
    PhotoZone.INTERIOR_REAR: FindingZone.INTERIOR_REAR,
    PhotoZone.ENGINE: FindingZone.ENGINE,
    PhotoZone.TRUNK: FindingZone.TRUNK,
    PhotoZone.CLOSEUP: FindingZone.FRONT,
}

# Trunk and closeup photos produce findings but feed no score bucket.
# Nothing feeds TIRES yet, so it always falls back to its default.
SCORE_CATEGORY_BY_PHOTO_ZONE: dict[PhotoZone, ScoreCategory] = {
    PhotoZone.FRONT: ScoreCategory.EXTERIOR,
    PhotoZone.REAR: ScoreCategory.EXTERIOR,
    PhotoZone.LEFT: ScoreCategory.EXTERIOR,
    PhotoZone.RIGHT: ScoreCategory.EXTERIOR,
    PhotoZone.FRONT_LEFT: ScoreCategory.EXTERIOR,
    PhotoZone.REAR_RIGHT: ScoreCategory.EXTERIOR,
    PhotoZone.INTERIOR_DRIVER: ScoreCategory.INTERIOR,
    PhotoZone.INTERIOR_PASSENGER: ScoreCategory.INTERIOR,
    PhotoZone.INTERIOR_REAR: ScoreCategory.INTERIOR,
    PhotoZone.DASHBOARD: ScoreCategory.INTERIOR,
    PhotoZone.INFOTAINMENT: ScoreCategory.INTERIOR,
    PhotoZone.ENGINE: ScoreCategory.MECHANICAL,
}

SEVERITY_RANK: dict[FindingSeverity, int] = {
    FindingSeverity.MAJOR: 0,
    FindingSeverity.MODERATE: 1,
    FindingSeverity.MINOR: 2,
}


def finding_zone_for(zone: PhotoZone) -> FindingZone:
    return FINDING_ZONE_BY_PHOTO_ZONE[zone]


def score_category_for(zone: PhotoZone) -> ScoreCategory | None:
    return SCORE_CATEGORY_BY_PHOTO_ZONE.get(zone)
