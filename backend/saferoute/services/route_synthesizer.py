"""
Route Synthesizer: three candidate walking routes with heuristic safety scores.

Given an origin, a destination and the current risk zones, returns, in order:

    A. Safest   : each waypoint nudged to the least risky of six offsets
    B. Balanced : straight line with small random jitter
    C. Fastest  : straight line

Routes are straight-line sketches between interpolated waypoints; they never
snap to real streets.

Segment score starts at 100 and loses:
    high zone   -25
    medium zone -12
    low zone     -5
    night-time  -10   (21:00 to 05:59)
"""

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from saferoute.schemas.route import Coordinate, Route, RouteType
from saferoute.schemas.risk_zone import RiskZone
from saferoute.services.geo import distance, interpolate, midpoint, offset, round_half_up
from saferoute.services.risk_zones import is_inside

logger = logging.getLogger(__name__)

# ─── Tunables ────────────────────────────────────────────────────

ROUTE_TYPES: Tuple[RouteType, ...] = ("safest", "balanced", "fastest")

ROUTE_NAMES: Dict[str, str] = {
    "safest": "Safest Route",
    "balanced": "Balanced Route",
    "fastest": "Fastest Route",
}

WAYPOINT_SPACING_M = 200
MIN_WAYPOINTS = 2
MAX_WAYPOINTS = 6

SAFEST_OFFSET_DEG = 0.003      # ≈ 330 m
BALANCED_JITTER_DEG = 0.0015   # full width; each axis moves at most half of it
DIAGONAL_FACTOR = 0.7

# Cost of placing a candidate waypoint inside a zone
AVOIDANCE_COST: Dict[str, int] = {"high": 100, "medium": 50, "low": 25}

# Penalty applied once per zone touched by a segment
SEGMENT_PENALTY: Dict[str, int] = {"high": 25, "medium": 12, "low": 5}
WARNING_LEVELS = ("high", "medium")
NIGHT_PENALTY = 10

WALKING_SPEED_MPS = 1.2
MAX_ROUTE_WARNINGS = 3


def is_night(hour: int) -> bool:
    return hour >= 21 or hour <= 5


def score_band(score: float) -> str:
    """Colour band used when listing routes."""
    if score >= 80:
        return "safe"
    if score >= 60:
        return "caution"
    return "danger"


class SegmentSafety:
    """Score and warnings for one leg between consecutive waypoints."""

    __slots__ = ("score", "warnings", "zone_ids")

    def __init__(self, *, score: float, warnings: List[str], zone_ids: List[str]):
        self.score = score
        self.warnings = warnings
        self.zone_ids = zone_ids


# ─── Internal helpers ────────────────────────────────────────────

def _waypoint_count(direct_distance_m: float) -> int:
    n = round_half_up(direct_distance_m / WAYPOINT_SPACING_M)
    return max(MIN_WAYPOINTS, min(MAX_WAYPOINTS, n))


def _candidate_offsets() -> List[Tuple[float, float]]:
    v = SAFEST_OFFSET_DEG
    d = v * DIAGONAL_FACTOR
    return [
        (v, 0.0),
        (-v, 0.0),
        (0.0, v),
        (0.0, -v),
        (d, d),
        (-d, d),
    ]


def _avoidance_cost(point: Coordinate, risk_zones: Sequence[RiskZone]) -> int:
    return sum(
        AVOIDANCE_COST[zone.risk_level]
        for zone in risk_zones
        if distance(point, zone.center) < zone.radius
    )


def _least_risky_offset(base: Coordinate, risk_zones: Sequence[RiskZone]) -> Coordinate:
    """First candidate with the minimum cost; evaluation order breaks ties."""
    best: Optional[Coordinate] = None
    best_cost = float("inf")
    for dlat, dlng in _candidate_offsets():
        candidate = offset(base, dlat, dlng)
        cost = _avoidance_cost(candidate, risk_zones)
        if cost < best_cost:
            best, best_cost = candidate, cost
    return best if best is not None else base


def _jitter(base: Coordinate, rng: random.Random) -> Coordinate:
    return offset(
        base,
        (rng.random() - 0.5) * BALANCED_JITTER_DEG,
        (rng.random() - 0.5) * BALANCED_JITTER_DEG,
    )


def _adjust_score(route_type: RouteType, avg_safety: float) -> float:
    if route_type == "safest":
        adjusted = min(98, avg_safety + 15)
    elif route_type == "balanced":
        adjusted = max(50, min(85, avg_safety))
    else:
        adjusted = max(30, avg_safety - 10)
    return max(0.0, min(100.0, adjusted))


# ─── Public API ──────────────────────────────────────────────────

def generate_waypoints(
    origin: Coordinate,
    destination: Coordinate,
    route_type: RouteType,
    risk_zones: Sequence[RiskZone],
    rng: Optional[random.Random] = None,
) -> List[Coordinate]:
    """``[origin, *intermediates, destination]`` for one route type."""
    rng = rng or random.Random()
    n = _waypoint_count(distance(origin, destination))

    waypoints = [origin]
    for i in range(1, n + 1):
        point = interpolate(origin, destination, i / (n + 1))
        if route_type == "safest":
            point = _least_risky_offset(point, risk_zones)
        elif route_type == "balanced":
            point = _jitter(point, rng)
        waypoints.append(point)
    waypoints.append(destination)
    return waypoints


def segment_safety(
    start: Coordinate,
    end: Coordinate,
    risk_zones: Sequence[RiskZone],
    hour: int,
) -> SegmentSafety:
    """Score one leg by probing its endpoints and midpoint."""
    probes = (start, midpoint(start, end), end)
    penalty = 0
    warnings: List[str] = []
    zone_ids: List[str] = []

    for zone in risk_zones:
        if not any(is_inside(point, zone) for point in probes):
            continue
        # Each zone counts once per segment however many probes it covers
        penalty += SEGMENT_PENALTY[zone.risk_level]
        zone_ids.append(zone.id)
        if zone.risk_level in WARNING_LEVELS and zone.reason not in warnings:
            warnings.append(zone.reason)

    if is_night(hour):
        penalty += NIGHT_PENALTY

    return SegmentSafety(score=max(0, 100 - penalty), warnings=warnings, zone_ids=zone_ids)


def build_route(
    route_type: RouteType,
    waypoints: List[Coordinate],
    risk_zones: Sequence[RiskZone],
    hour: int,
) -> Route:
    total_distance = 0.0
    total_safety = 0.0
    all_warnings: List[str] = []

    for start, end in zip(waypoints, waypoints[1:]):
        total_distance += distance(start, end)
        seg = segment_safety(start, end, risk_zones, hour)
        total_safety += seg.score
        for warning in seg.warnings:
            if warning not in all_warnings:
                all_warnings.append(warning)

    avg_safety = total_safety / max(1, len(waypoints) - 1)
    final_score = round_half_up(_adjust_score(route_type, avg_safety))

    return Route(
        id=route_type,
        name=ROUTE_NAMES[route_type],
        type=route_type,
        safety_score=final_score,
        distance=round_half_up(total_distance),
        duration=round_half_up(total_distance / WALKING_SPEED_MPS),
        coordinates=waypoints,
        # The safest route is presented without warnings
        warnings=[] if route_type == "safest" else all_warnings[:MAX_ROUTE_WARNINGS],
    )


def synthesize_routes(
    origin: Coordinate,
    destination: Coordinate,
    risk_zones: Sequence[RiskZone],
    *,
    hour: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Route]:
    """
    Safest, balanced and fastest routes, always in that order.

    ``hour`` defaults to local wall-clock time.  Pass a seeded ``rng`` to make
    the balanced route reproducible; safest and fastest never depend on it.
    """
    if hour is None:
        hour = datetime.now().hour
    rng = rng or random.Random()
    zones = list(risk_zones)

    routes = []
    for route_type in ROUTE_TYPES:
        waypoints = generate_waypoints(origin, destination, route_type, zones, rng)
        routes.append(build_route(route_type, waypoints, zones, hour))

    logger.info(
        "Synthesized routes %.5f,%.5f -> %.5f,%.5f (%d zones, hour %d): %s",
        origin.lat, origin.lng, destination.lat, destination.lng, len(zones), hour,
        ", ".join(f"{r.type}={r.safety_score}" for r in routes),
    )
    return routes
