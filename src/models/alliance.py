# src/models/alliance.py

from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Any, Mapping, Optional, Tuple

from models.breakdown_record import BreakdownRecord
from models.field_value import FieldKind

ROBOTS_PER_ALLIANCE = 3
SCORE_NOT_SET       = -1
TEAM_KEY_PREFIX     = "frc"


class Side(Enum):
    BLUE    = "blue"
    RED     = "red"


# Report column order: label, blue, red
SIDES: Tuple[Side, ...] = (Side.BLUE, Side.RED)


def team_key(team: str) -> str:
    """'254' -> 'frc254'; already prefixed keys are left alone."""
    team = team.strip()
    if not team or team.lower().startswith(TEAM_KEY_PREFIX):
        return team
    return TEAM_KEY_PREFIX + team


@dataclass(frozen=True)
class AllianceInfo:
    teams:          Tuple[str, ...] = ("",) * ROBOTS_PER_ALLIANCE
    surrogates:     Tuple[str, ...] = ()
    dqs:            Tuple[str, ...] = ()
    score:          int = SCORE_NOT_SET

    def __post_init__(self):
        for key in ("teams", "surrogates", "dqs"):
            object.__setattr__(self, key, tuple(getattr(self, key)))

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        for key in ("teams", "surrogates", "dqs"):
            d[key] = list(d[key])
        return d

    def validate(self) -> Tuple[bool, str]:
        if len(self.teams) != ROBOTS_PER_ALLIANCE:
            return False, f"Expected {ROBOTS_PER_ALLIANCE} teams, got {len(self.teams)}"
        if self.score == SCORE_NOT_SET:
            return False, "Final score not observed"
        if not all(self.teams):
            return False, "Teams not observed"
        return True, ""


@dataclass
class ScoreInfo:
    """Score components seen in the report, used for derived fields."""
    auto:       int = 0
    teleop:     int = 0
    fouls:      int = 0
    total:      int = 0


class AllianceAccumulator:
    """Everything collected for one side while the report rows are walked."""

    def __init__(self, side: Side, field_kinds: Optional[Mapping[str, FieldKind]] = None):
        self.side       = side
        self.info       = AllianceInfo()
        self.breakdown  = BreakdownRecord(field_kinds)
        self.scores     = ScoreInfo()
