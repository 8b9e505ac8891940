"""
Navigation sessions: one walker following one route.

Each session owns its guidance and alerting state, so several sessions can
run side by side without sharing announced or dismissed ids.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from saferoute.schemas.navigation import NavigationStatus, PositionUpdateResponse
from saferoute.schemas.route import Coordinate, Route
from saferoute.schemas.risk_zone import RiskZone
from saferoute.services.geo import format_distance, format_duration
from saferoute.services.proximity_alert import ProximityAlerter, RecordingHaptics
from saferoute.services.voice_guidance import QueuedSpeechSink, VoiceGuidance

logger = logging.getLogger(__name__)


class NavigationSession:
    def __init__(self, route: Route, session_id: Optional[str] = None):
        self.id = session_id or str(uuid.uuid4())
        self.route = route
        self.speech = QueuedSpeechSink()
        self.haptics = RecordingHaptics()
        self.guidance = VoiceGuidance(self.speech)
        self.alerter = ProximityAlerter(self.haptics)
        self.last_position: Optional[Coordinate] = None

    @property
    def waypoints(self) -> List[Coordinate]:
        return self.route.coordinates

    def start(self) -> List[str]:
        self.guidance.start_navigation(self.waypoints)
        return self.speech.drain()

    def stop(self) -> None:
        self.guidance.stop_navigation()
        self.speech.drain()

    def toggle_voice(self) -> bool:
        return self.guidance.toggle_voice()

    def dismiss_warning(self) -> Optional[str]:
        return self.alerter.dismiss()

    def update_position(
        self,
        position: Coordinate,
        zones: Iterable[RiskZone],
        hour: Optional[int] = None,
    ) -> PositionUpdateResponse:
        """Feed one location sample to guidance and alerting independently."""
        if hour is None:
            hour = datetime.now().hour
        self.last_position = position

        self.guidance.update_for_position(position, self.waypoints)
        warning = self.alerter.evaluate(position, zones, hour)

        remaining = self.guidance.get_remaining_distance(position, self.waypoints)
        remaining_time = self.guidance.get_remaining_time(position, self.waypoints)

        return PositionUpdateResponse(
            session_id=self.id,
            state=self.guidance.state,
            current_instruction=self.guidance.current_instruction,
            spoken=self.speech.drain(),
            warning=warning,
            vibrate=self.haptics.drain(),
            remaining_distance=remaining,
            remaining_time=remaining_time,
            remaining_distance_text=format_distance(remaining),
            remaining_time_text=format_duration(remaining_time),
        )

    def status(self) -> NavigationStatus:
        return NavigationStatus(
            session_id=self.id,
            route_id=self.route.id,
            state=self.guidance.state,
            voice_enabled=self.guidance.enabled,
            current_instruction=self.guidance.current_instruction,
            instructions=self.guidance.instructions,
            active_warning=self.alerter.active_warning,
        )


class SessionStore:
    """In-memory registry of live sessions; nothing is persisted."""

    def __init__(self):
        self._sessions: Dict[str, NavigationSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, route: Route) -> NavigationSession:
        session = NavigationSession(route)
        self._sessions[session.id] = session
        logger.info("Session %s started on %s route", session.id, route.type)
        return session

    def get(self, session_id: str) -> Optional[NavigationSession]:
        return self._sessions.get(session_id)

    def end(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.stop()
        logger.info("Session %s ended", session_id)
        return True
