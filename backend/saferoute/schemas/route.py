from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


RouteType = Literal["safest", "balanced", "fastest"]


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Route(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: RouteType
    safety_score: int = Field(..., ge=0, le=100)
    distance: int           # meters
    duration: int           # seconds, at walking pace
    coordinates: List[Coordinate]    # origin first, destination last
    warnings: List[str] = []


class RouteRequest(BaseModel):
    origin: Coordinate = Field(..., description="Current location of the walker")
    destination: Coordinate = Field(..., description="Selected destination coordinates")
    hour: Optional[int] = Field(None, ge=0, le=23, description="Hour of day to score for; defaults to server local time")
    seed: Optional[int] = Field(None, description="Pins the balanced route's jitter")


class RouteResponse(BaseModel):
    routes: List[Route]
    origin: Coordinate
    destination: Coordinate
    status: str = "success"
