# src/parsers/parse_score_breakdown_2023.py
#
# Turns the ordered rows of a 2023 FMS score report into a MatchReport
# (TBA "alliances" + "score_breakdown").
#
# Rows are handled strictly in document order since phase-dependent API names
# depend on the rows seen before. A failing row is recorded and skipped as a
# whole; once every row has been tried, any recorded failure fails the report.

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from exceptions import ReportParseError, RowParseError
from models.alliance import AllianceAccumulator, Side, SIDES
from models.extra_alliance_info import ExtraAllianceInfo
from models.match_phase import PhaseTracker
from models.match_report import MatchReport
from models.report_row import ParseError, ReportRow, RowOutcome
from parsers.fields_2023 import FIELD_KINDS
from parsers.resolve_breakdown_2023 import resolve_alliance
from parsers.row_classifier_2023 import classify_row


def make_accumulators(extra_info: Optional[Dict[Side, ExtraAllianceInfo]] = None) -> Dict[Side, AllianceAccumulator]:
    extra_info = extra_info or {}
    accumulators = {}
    for side in SIDES:
        acc = AllianceAccumulator(side, FIELD_KINDS)
        extra = extra_info.get(side) or ExtraAllianceInfo()
        acc.info = replace(acc.info, surrogates=tuple(extra.surrogates), dqs=tuple(extra.dqs))
        accumulators[side] = acc
    return accumulators


def handle_row(
    row:            ReportRow,
    accumulators:   Dict[Side, AllianceAccumulator],
    tracker:        PhaseTracker
) -> RowOutcome:
    """
    Classify and apply one row. Failures come back as an outcome with .error set;
    in that case nothing was written and the phase is unchanged.
    """
    row_name = row.row_name
    try:
        outcome = classify_row(row, tracker.phase)
        outcome.check_kinds(accumulators)
    except RowParseError as e:
        error = ParseError(row_name=row_name, message=e.message, side=e.side, row_no=row.row_no)
        return RowOutcome(row_name=row_name, next_phase=tracker.phase, error=error)
    except Exception as e:
        logging.exception(f"Unexpected error on row '{row_name}'")
        error = ParseError(row_name=row_name, message=f"unexpected error: {e}", row_no=row.row_no)
        return RowOutcome(row_name=row_name, next_phase=tracker.phase, error=error)

    if not outcome.skipped:
        outcome.apply(accumulators, tracker)
    return outcome


def parse_score_breakdown(
    rows:       Iterable[ReportRow],
    extra_info: Optional[Dict[Side, ExtraAllianceInfo]] = None,
    playoff:    bool = False,
    source:     Optional[str] = None
) -> MatchReport:
    """
    Parse already extracted report rows.
    Raises ReportParseError listing every failed row (in table order) if any row failed.
    """
    accumulators = make_accumulators(extra_info)
    tracker = PhaseTracker()
    parse_errors: List[ParseError] = []
    rows_handled = 0

    for row in rows:
        outcome = handle_row(row, accumulators, tracker)
        if outcome.error is not None:
            logging.warning(f"Parse error in {source or 'report'}: {outcome.error}")
            parse_errors.append(outcome.error)
        elif not outcome.skipped:
            rows_handled += 1

    for side in SIDES:
        resolve_alliance(accumulators[side], playoff=playoff)

    if parse_errors:
        raise ReportParseError(parse_errors, source=source)

    for side in SIDES:
        is_valid, msg = accumulators[side].info.validate()
        if not is_valid:
            logging.warning(f"{source or 'report'} {side.value}: {msg}")

    logging.info(f"Parsed {source or 'report'}: {rows_handled} rows (playoff={playoff})")
    return MatchReport.from_accumulators(accumulators, source=source, playoff=playoff)
