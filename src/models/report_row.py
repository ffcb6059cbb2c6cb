# src/models/report_row.py

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from exceptions import FieldKindError
from models.alliance import AllianceAccumulator, Side, SIDES
from models.field_value import FieldValue
from models.match_phase import MatchPhase, PhaseTracker
from utils import normalize_row_name


@dataclass(frozen=True)
class ReportRow:
    """One table row as extracted from the report: label cell + value cells (blue, red)."""
    label:      str
    cells:      Tuple[str, ...] = ()
    row_no:     Optional[int] = None

    @property
    def row_name(self) -> str:
        return normalize_row_name(self.label)

    def has_side_cells(self) -> bool:
        return len(self.cells) == len(SIDES)

    def side_text(self, side: Side) -> str:
        return self.cells[SIDES.index(side)].strip()


@dataclass
class ParseError:
    row_name:   str
    message:    str
    side:       Optional[str] = None
    row_no:     Optional[int] = None

    def __str__(self) -> str:
        where = f"row '{self.row_name}'"
        if self.side:
            where += f" ({self.side})"
        return f"{where}: {self.message}"


@dataclass
class RowOutcome:
    """
    Result of handling one row. Nothing is written until apply() is called, so a
    row that fails never leaves partial writes behind.
    """
    row_name:           str
    next_phase:         MatchPhase
    writes:             Dict[Side, List[Tuple[str, FieldValue]]] = field(default_factory=lambda: {s: [] for s in SIDES})
    teams:              Optional[Dict[Side, List[str]]] = None
    score:              Optional[Dict[Side, int]] = None
    score_components:   Dict[str, Dict[Side, int]] = field(default_factory=dict)   # e.g. {"auto": {BLUE: 12, RED: 8}}
    skipped:            bool = False
    error:              Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def write(self, field_name: str, values: Dict[Side, FieldValue]) -> None:
        for side in SIDES:
            self.writes[side].append((field_name, values[side]))

    def check_kinds(self, accumulators: Dict[Side, AllianceAccumulator]) -> None:
        """Raise FieldKindError before anything is applied."""
        for side in SIDES:
            breakdown = accumulators[side].breakdown
            for field_name, value in self.writes[side]:
                expected = breakdown.kind_of(field_name)
                if expected is not None and expected is not value.kind:
                    raise FieldKindError(field_name, expected.value, value.kind.value, side=side.value)

    def apply(self, accumulators: Dict[Side, AllianceAccumulator], tracker: PhaseTracker) -> None:
        for side in SIDES:
            acc = accumulators[side]
            for field_name, value in self.writes[side]:
                acc.breakdown.set(field_name, value, side=side.value)
            if self.teams is not None:
                acc.info = replace(acc.info, teams=tuple(self.teams[side]))
            if self.score is not None:
                acc.info = replace(acc.info, score=self.score[side])
                acc.scores.total = self.score[side]
            for component, values in self.score_components.items():
                setattr(acc.scores, component, values[side])
        tracker.set_phase(self.next_phase, self.row_name)
