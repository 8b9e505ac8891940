"""
Geo math: spherical helpers shared by routing, guidance and alerting.

All inputs are WGS84 coordinates in degrees (anything with ``.lat`` and
``.lng``); distances are meters, bearings are compass degrees.
"""

import math
from typing import Literal

from saferoute.schemas.route import Coordinate

# ─── Public types ────────────────────────────────────────────────

EARTH_RADIUS_M = 6_371_000.0

TurnDirection = Literal[
    "continue straight",
    "bear right",
    "turn right",
    "make a sharp right",
    "bear left",
    "turn left",
    "make a sharp left",
]

STRAIGHT_THRESHOLD_DEG = 20.0
BEAR_THRESHOLD_DEG = 60.0
TURN_THRESHOLD_DEG = 120.0


def round_half_up(value: float) -> int:
    """Round .5 away from the floor, matching what the clients display."""
    return int(math.floor(value + 0.5))


# ─── Distances & bearings ────────────────────────────────────────

def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (Haversine) distance in meters."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(a: Coordinate, b: Coordinate) -> float:
    """
    Initial compass bearing from ``a`` to ``b`` in [0, 360).

    Identical points have no direction; 0.0 (north) is returned for them.
    """
    if a.lat == b.lat and a.lng == b.lng:
        return 0.0
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dlambda = math.radians(b.lng - a.lng)
    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def bearing_delta(prev_bearing: float, new_bearing: float) -> float:
    """Signed change of heading, normalised to (-180, 180]."""
    diff = (new_bearing - prev_bearing) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def turn_direction(prev_bearing: float, new_bearing: float) -> TurnDirection:
    """Bucket a change of heading into a spoken manoeuvre."""
    diff = bearing_delta(prev_bearing, new_bearing)

    if abs(diff) < STRAIGHT_THRESHOLD_DEG:
        return "continue straight"
    if 0 < diff < BEAR_THRESHOLD_DEG:
        return "bear right"
    if BEAR_THRESHOLD_DEG <= diff < TURN_THRESHOLD_DEG:
        return "turn right"
    if diff >= TURN_THRESHOLD_DEG:
        return "make a sharp right"
    if -BEAR_THRESHOLD_DEG < diff < 0:
        return "bear left"
    if -TURN_THRESHOLD_DEG < diff <= -BEAR_THRESHOLD_DEG:
        return "turn left"
    return "make a sharp left"


# ─── Planar helpers (short distances only) ───────────────────────

def interpolate(a: Coordinate, b: Coordinate, t: float) -> Coordinate:
    """Linear interpolation in degree space; t=0 is ``a``, t=1 is ``b``."""
    return Coordinate(lat=a.lat + (b.lat - a.lat) * t, lng=a.lng + (b.lng - a.lng) * t)


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    return Coordinate(lat=(a.lat + b.lat) / 2, lng=(a.lng + b.lng) / 2)


def offset(point: Coordinate, dlat: float, dlng: float) -> Coordinate:
    return Coordinate(lat=point.lat + dlat, lng=point.lng + dlng)


# ─── Formatting ──────────────────────────────────────────────────

def format_distance(meters: float, spoken: bool = False) -> str:
    """'1.2 km' / '350 m', or the spelled-out units when ``spoken``."""
    if meters >= 1000:
        unit = "kilometers" if spoken else "km"
        return f"{meters / 1000:.1f} {unit}"
    unit = "meters" if spoken else "m"
    return f"{round_half_up(meters)} {unit}"


def format_duration(seconds: float) -> str:
    mins = round_half_up(seconds / 60)
    if mins >= 60:
        return f"{mins // 60}h {mins % 60}m"
    return f"{mins} min"
