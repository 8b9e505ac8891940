"""
Voice guidance: turn-by-turn instructions for a chosen route.

Instructions are generated once per navigation from the route's waypoints and
announced as the walker comes within range of each one.  An instruction id
that has been announced is never spoken again during the same navigation.
"""

import logging
from typing import List, Optional, Sequence, Set

from saferoute.schemas.navigation import NavigationInstruction, NavigationState
from saferoute.schemas.route import Coordinate
from saferoute.services.geo import bearing, distance, format_distance, turn_direction

logger = logging.getLogger(__name__)

START_ID = "start"
DESTINATION_ID = "destination"

START_TEXT = "Starting navigation. Head forward."
ARRIVAL_TEXT = "You have arrived at your destination."

ANNOUNCE_RADIUS_M = 30.0
ARRIVAL_RADIUS_M = 20.0

# The remaining-time estimate uses a brisker pace than route durations do
ETA_WALKING_SPEED_MPS = 1.4


# ─── Speech output ───────────────────────────────────────────────

class NullSpeechSink:
    """Used when no speech engine is available: every call is a no-op."""

    @property
    def is_speaking(self) -> bool:
        return False

    def speak(self, text: str) -> None:
        pass

    def cancel(self) -> None:
        pass


class QueuedSpeechSink(NullSpeechSink):
    """
    Holds the utterance waiting to be voiced by a remote client.

    Cancelling drops whatever has not been picked up yet, so a new utterance
    always replaces the previous one.
    """

    def __init__(self):
        self._pending: List[str] = []

    @property
    def is_speaking(self) -> bool:
        return bool(self._pending)

    def speak(self, text: str) -> None:
        self._pending.append(text)

    def cancel(self) -> None:
        self._pending.clear()

    def drain(self) -> List[str]:
        pending, self._pending = self._pending, []
        return pending


# ─── Instruction generation ──────────────────────────────────────

def generate_instructions(waypoints: Sequence[Coordinate]) -> List[NavigationInstruction]:
    if len(waypoints) < 2:
        return []

    instructions = [
        NavigationInstruction(id=START_ID, text=START_TEXT, distance_from_start=0.0, coords=waypoints[0])
    ]

    prev_bearing = bearing(waypoints[0], waypoints[1])
    for i in range(1, len(waypoints) - 1):
        new_bearing = bearing(waypoints[i], waypoints[i + 1])
        direction = turn_direction(prev_bearing, new_bearing)

        if direction != "continue straight":
            to_next = format_distance(distance(waypoints[i], waypoints[i + 1]), spoken=True)
            instructions.append(
                NavigationInstruction(
                    id=f"turn-{i}",
                    text=f"{direction[0].upper()}{direction[1:]}, then continue for {to_next}.",
                    distance_from_start=distance(waypoints[0], waypoints[i]),
                    coords=waypoints[i],
                )
            )
        prev_bearing = new_bearing

    instructions.append(
        NavigationInstruction(id=DESTINATION_ID, text=ARRIVAL_TEXT, distance_from_start=0.0, coords=waypoints[-1])
    )
    return instructions


# ─── Navigation state ────────────────────────────────────────────

class VoiceGuidance:
    """
    Per-navigation guidance state: idle -> navigating -> arrived.

    ``announced`` is the only record of what has been spoken.
    """

    def __init__(self, speech: Optional[NullSpeechSink] = None, enabled: bool = True):
        self.speech = speech or NullSpeechSink()
        self.enabled = enabled
        self.state: NavigationState = "idle"
        self.instructions: List[NavigationInstruction] = []
        self.current_instruction: Optional[NavigationInstruction] = None
        self.announced: Set[str] = set()

    @property
    def is_speaking(self) -> bool:
        return self.speech.is_speaking

    def speak(self, text: str) -> bool:
        if not self.enabled:
            return False
        self.speech.cancel()
        self.speech.speak(text)
        return True

    def start_navigation(self, waypoints: Sequence[Coordinate]) -> None:
        self.announced.clear()
        self.instructions = generate_instructions(waypoints)
        self.current_instruction = None
        if not self.instructions:
            self.state = "idle"
            return

        self.state = "navigating"
        first = self.instructions[0]
        self.current_instruction = first
        self._announce(first)
        logger.info("Navigation started with %d instructions", len(self.instructions))

    def stop_navigation(self) -> None:
        self.speech.cancel()
        self.instructions = []
        self.current_instruction = None
        self.announced.clear()
        self.state = "idle"

    def toggle_voice(self) -> bool:
        self.enabled = not self.enabled
        if not self.enabled:
            self.speech.cancel()
        return self.enabled

    def update_for_position(
        self,
        position: Optional[Coordinate],
        waypoints: Sequence[Coordinate],
    ) -> List[str]:
        """
        Evaluate one location sample; returns the texts announced by it.

        Feeding the same sample again announces nothing new.
        """
        if not self.instructions or position is None:
            return []

        announced: List[str] = []

        nearest: Optional[NavigationInstruction] = None
        nearest_distance = float("inf")
        for instruction in self.instructions:
            if instruction.id in self.announced:
                continue
            d = distance(position, instruction.coords)
            if d < nearest_distance:
                nearest, nearest_distance = instruction, d

        if nearest is not None:
            self.current_instruction = nearest
            if nearest_distance < ANNOUNCE_RADIUS_M and nearest.id not in self.announced:
                self._announce(nearest)
                announced.append(nearest.text)

        # Arrival depends only on the arrival radius; the destination
        # instruction may already have been read out from 30 m
        if waypoints and distance(position, waypoints[-1]) < ARRIVAL_RADIUS_M:
            if DESTINATION_ID not in self.announced:
                self.announced.add(DESTINATION_ID)
                self._mark(DESTINATION_ID)
                self.speak(ARRIVAL_TEXT)
                announced.append(ARRIVAL_TEXT)
            self.state = "arrived"
        return announced

    def get_remaining_distance(
        self,
        position: Optional[Coordinate],
        waypoints: Sequence[Coordinate],
    ) -> float:
        """Straight line to the last waypoint, not the remaining path length."""
        if position is None or not waypoints:
            return 0.0
        return distance(position, waypoints[-1])

    def get_remaining_time(
        self,
        position: Optional[Coordinate],
        waypoints: Sequence[Coordinate],
    ) -> float:
        return self.get_remaining_distance(position, waypoints) / ETA_WALKING_SPEED_MPS

    def _announce(self, instruction: NavigationInstruction) -> None:
        self.announced.add(instruction.id)
        instruction.announced = True
        logger.debug("Announcing %s: %s", instruction.id, instruction.text)
        self.speak(instruction.text)

    def _mark(self, instruction_id: str) -> None:
        for instruction in self.instructions:
            if instruction.id == instruction_id:
                instruction.announced = True
