"""
Risk zones: circular geofences with a risk level and an optional
time-of-day window.

The registry keeps zones in insertion order.  Every "first match" policy in
the alerting path depends on that order, so zones are only ever appended or
replaced in place.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Set

from saferoute.schemas.route import Coordinate
from saferoute.schemas.risk_zone import (
    INCIDENT_LABELS,
    ActiveHours,
    IncidentReport,
    RiskZone,
)
from saferoute.services.geo import distance, offset

logger = logging.getLogger(__name__)

# A zone starts warning at 1.5x its radius, before the walker is inside it
APPROACH_FACTOR = 1.5
WARNING_LEVELS = ("high", "medium")

INCIDENT_ZONE_RADIUS_M = 50.0


# ─── Geometry & time gating ──────────────────────────────────────

def is_inside(point: Coordinate, zone: RiskZone) -> bool:
    return distance(point, zone.center) <= zone.radius


def is_active_now(zone: RiskZone, hour: int) -> bool:
    """Inclusive on both ends; ``start > end`` wraps past midnight (21 -> 6)."""
    if zone.active_hours is None:
        return True
    start, end = zone.active_hours.start, zone.active_hours.end
    if start > end:
        return hour >= start or hour <= end
    return start <= hour <= end


def proximity_warning_check(
    point: Optional[Coordinate],
    zones: Iterable[RiskZone],
    hour: int,
    dismissed: Optional[Set[str]] = None,
) -> Optional[RiskZone]:
    """
    First zone, in stored order, that should warn a walker at ``point``.

    Low-risk zones never warn.  The first qualifying zone wins even when a
    later one is closer.
    """
    if point is None:
        return None
    dismissed = dismissed or set()

    for zone in zones:
        if zone.id in dismissed:
            continue
        if distance(point, zone.center) > zone.radius * APPROACH_FACTOR:
            continue
        if not is_active_now(zone, hour):
            continue
        if zone.risk_level in WARNING_LEVELS:
            return zone
    return None


# ─── Seed data & incident conversion ─────────────────────────────

def generate_mock_risk_zones(center: Coordinate) -> List[RiskZone]:
    """Demo zones scattered within ~500 m of ``center``."""
    return [
        RiskZone(
            id="1",
            center=offset(center, 0.003, -0.002),
            radius=80,
            risk_level="high",
            reason="Multiple harassment reports after 9 PM",
            active_hours=ActiveHours(start=21, end=6),
        ),
        RiskZone(
            id="2",
            center=offset(center, -0.002, 0.003),
            radius=60,
            risk_level="medium",
            reason="Poor street lighting reported",
        ),
        RiskZone(
            id="3",
            center=offset(center, 0.001, 0.004),
            radius=50,
            risk_level="medium",
            reason="Isolated underpass - low foot traffic",
        ),
        RiskZone(
            id="4",
            center=offset(center, -0.004, -0.001),
            radius=40,
            risk_level="low",
            reason="Minor incident reported last week",
        ),
    ]


def risk_zone_from_incident(report: IncidentReport) -> RiskZone:
    """A reported incident becomes a small zone around where it was reported."""
    return RiskZone(
        center=report.location,
        radius=INCIDENT_ZONE_RADIUS_M,
        risk_level="high" if report.type == "harassment" else "medium",
        reason=report.description or INCIDENT_LABELS[report.type],
        reported_at=report.reported_at,
    )


# ─── Registry ────────────────────────────────────────────────────

class RiskZoneRegistry:
    """Insertion-ordered, session-lived collection of risk zones."""

    def __init__(self, zones: Optional[Iterable[RiskZone]] = None):
        self._zones: List[RiskZone] = list(zones or [])
        self.incidents: List[IncidentReport] = []
        self._holds_default_seed = False

    @classmethod
    def seeded(cls, center: Coordinate) -> "RiskZoneRegistry":
        registry = cls(generate_mock_risk_zones(center))
        registry._holds_default_seed = True
        return registry

    def __iter__(self) -> Iterator[RiskZone]:
        return iter(list(self._zones))

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: str) -> bool:
        return self.get(zone_id) is not None

    def all(self) -> List[RiskZone]:
        return list(self._zones)

    def get(self, zone_id: str) -> Optional[RiskZone]:
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None

    def add(self, zone: RiskZone) -> RiskZone:
        if zone.id in self:
            raise ValueError(f"Risk zone '{zone.id}' already exists.")
        self._zones.append(zone)
        self._holds_default_seed = False
        logger.info("Risk zone %s added (%s): %s", zone.id, zone.risk_level, zone.reason)
        return zone

    def replace(self, zone: RiskZone) -> RiskZone:
        """Swap a zone for a new version with the same id, keeping its position."""
        for index, existing in enumerate(self._zones):
            if existing.id == zone.id:
                self._zones[index] = zone
                self._holds_default_seed = False
                logger.info("Risk zone %s replaced", zone.id)
                return zone
        raise KeyError(zone.id)

    def report_incident(self, report: IncidentReport) -> RiskZone:
        """Keep the report and add the zone derived from it."""
        zone = self.add(risk_zone_from_incident(report))
        self.incidents.append(report)
        return zone

    def locate(self, location: Coordinate) -> bool:
        """
        Re-seed the demo zones around the walker's first known location.

        Only happens while the registry still holds the untouched default
        seed; returns whether it did.
        """
        if not self._holds_default_seed:
            return False
        self._zones = generate_mock_risk_zones(location)
        self._holds_default_seed = False
        logger.info("Seeded demo risk zones around %.5f, %.5f", location.lat, location.lng)
        return True
