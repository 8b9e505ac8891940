"""
Proximity alerting: warns the walker when approaching an active risk zone.

A dismissed zone stays silent for the rest of the session, even if the
walker walks back into it.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set

from saferoute.schemas.route import Coordinate
from saferoute.schemas.risk_zone import RiskZone
from saferoute.services.risk_zones import proximity_warning_check

logger = logging.getLogger(__name__)

WARNING_VIBRATION_MS = [100, 50, 100]


class NullHaptics:
    """No vibration motor available."""

    def vibrate(self, pattern: List[int]) -> None:
        pass


class RecordingHaptics(NullHaptics):
    """Keeps the last pattern so it can be handed to a remote client."""

    def __init__(self):
        self.pattern: List[int] = []

    def vibrate(self, pattern: List[int]) -> None:
        self.pattern = list(pattern)

    def drain(self) -> List[int]:
        pattern, self.pattern = self.pattern, []
        return pattern


class ProximityAlerter:
    def __init__(self, haptics: Optional[NullHaptics] = None):
        self.haptics = haptics or NullHaptics()
        self.dismissed: Set[str] = set()
        self.active_warning: Optional[RiskZone] = None

    def evaluate(
        self,
        position: Optional[Coordinate],
        zones: Iterable[RiskZone],
        hour: Optional[int] = None,
    ) -> Optional[RiskZone]:
        """
        Check one location sample; returns the zone currently warned about.

        Samples that qualify no zone leave an earlier warning up until it is
        dismissed.  Haptics fire only when the warned zone changes.
        """
        if position is None:
            return self.active_warning
        if hour is None:
            hour = datetime.now().hour

        zone = proximity_warning_check(position, zones, hour, self.dismissed)
        if zone is None:
            return self.active_warning

        if self.active_warning is None or self.active_warning.id != zone.id:
            logger.info("Approaching %s risk zone %s: %s", zone.risk_level, zone.id, zone.reason)
            self.haptics.vibrate(WARNING_VIBRATION_MS)
        self.active_warning = zone
        return zone

    def dismiss(self) -> Optional[str]:
        """Silence the active warning for the rest of the session."""
        if self.active_warning is None:
            return None
        zone_id = self.active_warning.id
        self.dismissed.add(zone_id)
        self.active_warning = None
        logger.info("Risk zone %s dismissed", zone_id)
        return zone_id
