import random

from fastapi import APIRouter, Depends
from saferoute.core.dependencies import get_zone_registry
from saferoute.schemas.route import RouteRequest, RouteResponse
from saferoute.services.risk_zones import RiskZoneRegistry
from saferoute.services.route_synthesizer import synthesize_routes

router = APIRouter()


@router.post("/routes", response_model=RouteResponse)
def routes_endpoint(
    request: RouteRequest,
    registry: RiskZoneRegistry = Depends(get_zone_registry),
):
    """
    Compute the safest, balanced and fastest walking routes, in that order.
    Routes are scored against the current risk zones.

    Accepts optional 'hour' (0-23) to score for a given time of day, and
    'seed' to make the balanced route's jitter reproducible.
    """
    rng = random.Random(request.seed) if request.seed is not None else None
    routes = synthesize_routes(
        request.origin,
        request.destination,
        registry.all(),
        hour=request.hour,
        rng=rng,
    )
    return RouteResponse(routes=routes, origin=request.origin, destination=request.destination)
