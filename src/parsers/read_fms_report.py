# src/parsers/read_fms_report.py
#
# Reads an FMS score report (static HTML table export) plus its optional
# .extrajson side file and hands the rows to the 2023 parser.
# Uses BeautifulSoup; the report is a plain server-rendered table.

"""
Report layout (from saved FMS exports):
  - One <table>, first row "Match Score Item | Blue | Red" (header, skipped).
  - Every other <tr> has three cells: label, blue value, red value.
  - Section rows ("Autonomous", ...) span the table and have fewer cells.
  - Team and charge station cells list one robot per line (<br> or newline).
  - "Fouls/Techs Committed" cells read like "2 • 1".

Extra info file (same stem, .extrajson):
  {"blue": {"dqs": [], "surrogates": [], "g405_penalty": false, "h111_penalty": false}, "red": {...}}
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup

from config import EXTRA_INFO_SUFFIX, PLAYOFF_DEFAULT
from exceptions import ReportReadError
from models.alliance import Side
from models.extra_alliance_info import ExtraAllianceInfo, extra_info_by_side
from models.match_report import MatchReport
from models.report_row import ReportRow
from parsers.parse_score_breakdown_2023 import parse_score_breakdown

BLANK_LINES_RE = re.compile(r"[ \t\r]*\n\s*")


def _cell_text(cell) -> str:
    # Newline separator keeps <br>-separated robot lists apart; "<br>\n" must not leave blank lines
    text = cell.get_text("\n")
    return BLANK_LINES_RE.sub("\n", text).strip()


def extract_rows(html: str) -> List[ReportRow]:
    """Every <tr> in document order; label is the first cell, the rest are value cells."""
    soup = BeautifulSoup(html, "html.parser")
    rows = []
    for i, tr in enumerate(soup.find_all("tr")):
        cells = tr.find_all(["td", "th"], recursive=False)
        if not cells:
            continue
        rows.append(ReportRow(
            label   = _cell_text(cells[0]),
            cells   = tuple(_cell_text(c) for c in cells[1:]),
            row_no  = i,
        ))
    return rows


def extra_info_path(report_path: Union[str, Path]) -> Path:
    p = Path(report_path)
    return p.with_suffix(EXTRA_INFO_SUFFIX)


def load_extra_info(report_path: Union[str, Path]) -> Dict[Side, ExtraAllianceInfo]:
    """Extra info for both sides; defaults when the side file does not exist."""
    path = extra_info_path(report_path)
    if not path.exists():
        return extra_info_by_side()

    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ReportReadError(str(path), f"invalid extra info JSON: {e}") from e
    if not isinstance(raw, dict):
        raise ReportReadError(str(path), "extra info must be a JSON object keyed by alliance")

    extra = extra_info_by_side(raw)
    for side, info in extra.items():
        is_valid, msg = info.validate()
        if not is_valid:
            logging.warning(f"{path.name} {side.value}: {msg}")
        if info.g405_penalty or info.h111_penalty:
            logging.info(f"{path.name} {side.value}: penalties g405={info.g405_penalty} h111={info.h111_penalty}")
    return extra


def read_report_html(report_path: Union[str, Path]) -> str:
    path = Path(report_path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ReportReadError(str(path), f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise ReportReadError(str(path), str(e)) from e


def parse_report_file(report_path: Union[str, Path], playoff: Optional[bool] = None) -> MatchReport:
    """
    Read and parse one report file.
    Raises ReportReadError (file problems) or ReportParseError (row problems).
    """
    playoff = PLAYOFF_DEFAULT if playoff is None else playoff
    html = read_report_html(report_path)
    extra = load_extra_info(report_path)
    rows = extract_rows(html)
    if not rows:
        raise ReportReadError(str(report_path), "no table rows found")
    return parse_score_breakdown(rows, extra_info=extra, playoff=playoff, source=Path(report_path).name)
