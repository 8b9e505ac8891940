from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from saferoute.core.dependencies import get_zone_registry
from saferoute.schemas.risk_zone import (
    IncidentReport,
    IncidentRequest,
    IncidentResponse,
    LocateRequest,
    ProximityRequest,
    ProximityResponse,
    RiskZone,
)
from saferoute.services.risk_zones import RiskZoneRegistry, proximity_warning_check

router = APIRouter()


@router.get("/risk-zones", response_model=List[RiskZone])
def list_zones(registry: RiskZoneRegistry = Depends(get_zone_registry)):
    """All known risk zones, in the order they are evaluated."""
    return registry.all()


@router.post("/risk-zones", response_model=RiskZone, status_code=201)
def create_zone(zone: RiskZone, registry: RiskZoneRegistry = Depends(get_zone_registry)):
    try:
        return registry.add(zone)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/risk-zones/{zone_id}", response_model=RiskZone)
def replace_zone(
    zone_id: str,
    zone: RiskZone,
    registry: RiskZoneRegistry = Depends(get_zone_registry),
):
    """Replace a zone wholesale; zones are never patched field by field."""
    try:
        return registry.replace(zone.model_copy(update={"id": zone_id}))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Risk zone '{zone_id}' not found.")


@router.post("/risk-zones/locate", response_model=List[RiskZone])
def locate(request: LocateRequest, registry: RiskZoneRegistry = Depends(get_zone_registry)):
    """
    Report the walker's first known location.
    Demo zones still at their default seed are moved around it.
    """
    registry.locate(request.location)
    return registry.all()


@router.post("/incidents", response_model=IncidentResponse, status_code=201)
def report_incident(
    request: IncidentRequest,
    registry: RiskZoneRegistry = Depends(get_zone_registry),
):
    """Record an incident and add a risk zone around where it happened."""
    incident = IncidentReport(
        type=request.type,
        location=request.location,
        description=request.description or None,
    )
    zone = registry.report_incident(incident)
    return IncidentResponse(incident=incident, zone=zone)


@router.get("/incidents", response_model=List[IncidentReport])
def list_incidents(registry: RiskZoneRegistry = Depends(get_zone_registry)):
    return registry.incidents


@router.post("/proximity", response_model=ProximityResponse)
def proximity(request: ProximityRequest, registry: RiskZoneRegistry = Depends(get_zone_registry)):
    """Stateless check: which zone, if any, should warn a walker here."""
    hour = request.hour if request.hour is not None else datetime.now().hour
    warning = proximity_warning_check(request.position, registry.all(), hour, set(request.dismissed))
    return ProximityResponse(warning=warning)
