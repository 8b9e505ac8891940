import uuid
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional

from saferoute.schemas.route import Coordinate


RiskLevel = Literal["high", "medium", "low"]

IncidentType = Literal["dark_alley", "broken_light", "isolated_area", "harassment", "other"]

INCIDENT_LABELS: Dict[str, str] = {
    "dark_alley": "Dark Alley",
    "broken_light": "Broken Streetlight",
    "isolated_area": "Isolated Area",
    "harassment": "Harassment Incident",
    "other": "Other Concern",
}


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActiveHours(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, le=23)
    end: int = Field(..., ge=0, le=23)    # may be < start for overnight windows


class RiskZone(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    center: Coordinate
    radius: float = Field(..., gt=0, description="Radius in meters")
    risk_level: RiskLevel
    reason: str
    reported_at: datetime = Field(default_factory=_utcnow)
    active_hours: Optional[ActiveHours] = None


class IncidentReport(BaseModel):
    id: str = Field(default_factory=_new_id)
    type: IncidentType
    location: Coordinate
    description: Optional[str] = None
    reported_by: str = "current-user"
    reported_at: datetime = Field(default_factory=_utcnow)
    verified: bool = False
    upvotes: int = 0


class IncidentRequest(BaseModel):
    type: IncidentType
    location: Coordinate
    description: Optional[str] = Field(None, description="Free text shown as the zone reason")


class IncidentResponse(BaseModel):
    incident: IncidentReport
    zone: RiskZone


class LocateRequest(BaseModel):
    location: Coordinate


class ProximityRequest(BaseModel):
    position: Coordinate
    hour: Optional[int] = Field(None, ge=0, le=23)
    dismissed: List[str] = []


class ProximityResponse(BaseModel):
    warning: Optional[RiskZone] = None
