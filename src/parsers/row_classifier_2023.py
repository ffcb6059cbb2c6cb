# src/parsers/row_classifier_2023.py
#
# Decides what a single report row means. classify_row() is a pure function of
# (row, current phase): it returns a RowOutcome describing the writes and side
# effects and leaves applying them to the caller.
#
# Check order (first match wins):
#   simple fields -> phase fields -> teams -> final score -> ranking points
#   -> RP badges -> autonomous points -> teleop points -> foul points
#   -> fouls/techs committed -> charge station -> raw passthrough ("!" + name)

import logging
from typing import Dict, List

from config import HEADER_ROW_NAMES
from exceptions import ValueParseError
from models.alliance import ROBOTS_PER_ALLIANCE, Side, SIDES, team_key
from models.breakdown_record import BreakdownRecord
from models.field_value import FieldValue
from models.match_phase import MatchPhase, PhaseTracker, next_phase
from models.report_row import ReportRow, RowOutcome
from parsers.coercion import parse_bool, parse_int, parse_int_list, split_and_strip
from parsers.fields_2023 import (
    SIMPLE_FIELDS,
    SIMPLE_MATCH_PHASE_FIELDS,
    MULTI_FIELDS,
    MULTI_FIELD_SEPARATOR,
    RP_BADGE_NAMES,
    ROBOT_SEPARATOR,
    ROW_TEAMS,
    ROW_FINAL_SCORE,
    ROW_RANKING_POINTS,
    ROW_AUTONOMOUS_POINTS,
    ROW_TELEOP_POINTS,
    ROW_FOUL_POINTS,
    ROW_CHARGE_STATION,
    FIELD_RANKING_POINTS,
    FIELD_TOTAL_POINTS,
)

# Rows that set a score component: row name -> (API field, ScoreInfo attribute)
SCORE_COMPONENT_ROWS = {
    ROW_AUTONOMOUS_POINTS:  ("autoPoints",   "auto"),
    ROW_TELEOP_POINTS:      ("teleopPoints", "teleop"),
    ROW_FOUL_POINTS:        ("foulPoints",   "fouls"),
}


def _desc(side: Side, row_name: str) -> str:
    return f"{side.value} {row_name}"


def _side_ints(row: ReportRow, row_name: str) -> Dict[Side, int]:
    return {
        side: parse_int(row.side_text(side), _desc(side, row_name), side=side.value)
        for side in SIDES
    }


def _int_values(ints: Dict[Side, int]) -> Dict[Side, FieldValue]:
    return {side: FieldValue.integer(n) for side, n in ints.items()}


def _robot_tokens(row: ReportRow, row_name: str, side: Side) -> List[str]:
    text = row.side_text(side)
    tokens = split_and_strip(text, ROBOT_SEPARATOR)
    if len(tokens) != ROBOTS_PER_ALLIANCE:
        raise ValueParseError(
            text,
            f"{_desc(side, row_name)} (expected {ROBOTS_PER_ALLIANCE} robots, got {len(tokens)})",
            expected="robot list",
            side=side.value,
        )
    return tokens


def classify_row(row: ReportRow, phase: MatchPhase) -> RowOutcome:
    """
    Work out the writes for one row. Raises RowParseError subclasses on bad cells
    or phase-dependent rows outside a phase; nothing is mutated either way.
    """
    row_name = row.row_name

    if not row.has_side_cells():
        return RowOutcome(row_name=row_name, next_phase=phase, skipped=True)
    if not row_name or row_name in HEADER_ROW_NAMES:
        return RowOutcome(row_name=row_name, next_phase=phase, skipped=True)

    # "mobility" opens auto before the row itself is dispatched
    phase = next_phase(phase, row_name)
    tracker = PhaseTracker(phase)
    outcome = RowOutcome(row_name=row_name, next_phase=phase)

    if row_name in SIMPLE_FIELDS:
        outcome.write(SIMPLE_FIELDS[row_name], _int_values(_side_ints(row, row_name)))

    elif row_name in SIMPLE_MATCH_PHASE_FIELDS:
        api_field = tracker.field_prefix() + SIMPLE_MATCH_PHASE_FIELDS[row_name]
        outcome.write(api_field, _int_values(_side_ints(row, row_name)))

    elif row_name == ROW_TEAMS:
        outcome.teams = {
            side: [team_key(t) for t in _robot_tokens(row, row_name, side)]
            for side in SIDES
        }

    elif row_name == ROW_FINAL_SCORE:
        scores = _side_ints(row, row_name)
        outcome.write(FIELD_TOTAL_POINTS, _int_values(scores))
        outcome.score = scores

    elif row_name == ROW_RANKING_POINTS:
        outcome.write(FIELD_RANKING_POINTS, _int_values(_side_ints(row, row_name)))

    elif row_name in RP_BADGE_NAMES:
        outcome.write(RP_BADGE_NAMES[row_name], {
            side: FieldValue.boolean(parse_bool(row.side_text(side), _desc(side, row_name), side=side.value))
            for side in SIDES
        })

    elif row_name in SCORE_COMPONENT_ROWS:
        api_field, component = SCORE_COMPONENT_ROWS[row_name]
        points = _side_ints(row, row_name)
        outcome.write(api_field, _int_values(points))
        outcome.score_components[component] = points

    elif row_name in MULTI_FIELDS:
        api_fields = MULTI_FIELDS[row_name]
        per_side = {
            side: parse_int_list(row.side_text(side), MULTI_FIELD_SEPARATOR, len(api_fields), _desc(side, row_name), side=side.value)
            for side in SIDES
        }
        for i, api_field in enumerate(api_fields):
            outcome.write(api_field, {side: FieldValue.integer(per_side[side][i]) for side in SIDES})

    # begin year-specific
    elif row_name == ROW_CHARGE_STATION:
        api_field_prefix = tracker.endgame_prefix(row_name) + "ChargeStationRobot"
        per_side = {side: _robot_tokens(row, row_name, side) for side in SIDES}
        for i in range(ROBOTS_PER_ALLIANCE):
            outcome.write(f"{api_field_prefix}{i + 1}", {side: FieldValue.string(per_side[side][i]) for side in SIDES})

    else:
        outcome.write(
            BreakdownRecord.unknown_field_name(row_name),
            {side: FieldValue.string(row.side_text(side)) for side in SIDES},
        )
        logging.debug(f"Unknown row '{row_name}' kept as raw text")

    return outcome
