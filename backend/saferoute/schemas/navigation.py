from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from saferoute.schemas.route import Coordinate, Route
from saferoute.schemas.risk_zone import RiskZone


NavigationState = Literal["idle", "navigating", "arrived"]


class NavigationInstruction(BaseModel):
    id: str
    text: str
    distance_from_start: float = 0.0    # meters, straight line from the first waypoint
    coords: Coordinate
    announced: bool = False


class StartNavigationRequest(BaseModel):
    route: Route = Field(..., description="The route the walker selected")


class PositionRequest(BaseModel):
    position: Coordinate
    hour: Optional[int] = Field(None, ge=0, le=23)


class NavigationStatus(BaseModel):
    session_id: str
    route_id: str
    state: NavigationState
    voice_enabled: bool
    current_instruction: Optional[NavigationInstruction] = None
    instructions: List[NavigationInstruction] = []
    active_warning: Optional[RiskZone] = None
    spoken: List[str] = []


class PositionUpdateResponse(BaseModel):
    session_id: str
    state: NavigationState
    current_instruction: Optional[NavigationInstruction] = None
    spoken: List[str] = []              # utterances for the client to voice, oldest first
    warning: Optional[RiskZone] = None
    vibrate: List[int] = []             # haptic pattern in ms, empty when nothing new fired
    remaining_distance: float = 0.0     # meters
    remaining_time: float = 0.0         # seconds
    remaining_distance_text: str = ""
    remaining_time_text: str = ""
