# src/models/match_phase.py

from enum import Enum
from typing import Dict
import logging

from exceptions import PhaseStateError


class MatchPhase(Enum):
    NONE    = ""
    AUTO    = "auto"
    TELEOP  = "teleop"


# Row names that move the phase. "autonomous points" closes the auto section,
# so the row that ends auto is also the row that starts teleop.
PHASE_TRANSITIONS: Dict[str, MatchPhase] = {
    "mobility":             MatchPhase.AUTO,
    "autonomous points":    MatchPhase.TELEOP,
    "teleop points":        MatchPhase.NONE,
}


def next_phase(current: MatchPhase, row_name: str) -> MatchPhase:
    """Phase after a row named row_name has been consumed."""
    return PHASE_TRANSITIONS.get(row_name, current)


class PhaseTracker:
    """
    Tracks the implicit match phase while report rows are consumed in document order.
    One tracker per parsed report.
    """

    def __init__(self, phase: MatchPhase = MatchPhase.NONE):
        self.phase = phase

    def advance(self, row_name: str) -> MatchPhase:
        return self.set_phase(next_phase(self.phase, row_name), row_name)

    def set_phase(self, phase: MatchPhase, row_name: str = "") -> MatchPhase:
        if phase is not self.phase:
            logging.debug(f"Match phase {self.phase.name} -> {phase.name} on row '{row_name}'")
        self.phase = phase
        return self.phase

    def field_prefix(self) -> str:
        """Prefix for phase-suffixed fields, e.g. 'auto' + 'GamePieceCount'."""
        return self.phase.value

    def endgame_prefix(self, desc: str) -> str:
        """Like field_prefix, but teleop maps to 'endGame' and no phase is an error."""
        if self.phase is MatchPhase.NONE:
            raise PhaseStateError(desc)
        if self.phase is MatchPhase.TELEOP:
            return "endGame"
        return self.phase.value
