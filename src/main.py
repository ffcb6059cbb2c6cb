# src/main.py

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from config import (
    REPORT_DIR,
    REPORT_GLOB,
    OUTPUT_DIR,
    JSON_INDENT,
    PLAYOFF_DEFAULT,
    EXCEL_EXPORT_FILE,
)
from exceptions import ReportParseError, ReportReadError
from models.match_report import MatchReport
from parsers.read_fms_report import parse_report_file
from utils import OperationLogger, export_breakdowns_to_excel, setup_logging


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert FMS score reports into TBA score breakdown JSON.")
    parser.add_argument("paths", nargs="*",
                        help=f"Report files or directories (default: {REPORT_DIR})")
    parser.add_argument("--playoff", action="store_true", default=PLAYOFF_DEFAULT,
                        help="Reports are playoff matches (rp = 0, RP badges false)")
    parser.add_argument("--out-dir", default=OUTPUT_DIR,
                        help="Where to write <report>.json (default: next to each report)")
    parser.add_argument("--excel", default=EXCEL_EXPORT_FILE,
                        help="Also export all parsed breakdowns to this .xlsx file")
    parser.add_argument("--verbose", action="store_true",
                        help="Log to console as well")
    return parser


def collect_report_paths(paths: List[str]) -> List[Path]:
    found = []
    for p in (paths or [REPORT_DIR]):
        path = Path(p)
        if path.is_dir():
            found.extend(sorted(path.glob(REPORT_GLOB)))
        else:
            found.append(path)
    return found


def write_report_json(report: MatchReport, report_path: Path, out_dir: Optional[str] = None) -> Path:
    target_dir = Path(out_dir) if out_dir else report_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / (report_path.stem + ".json")
    with open(target, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=JSON_INDENT, sort_keys=True, ensure_ascii=False)
        f.write("\n")
    return target


def convert_reports(
    report_paths:   List[Path],
    playoff:        bool = False,
    out_dir:        Optional[str] = None,
    logger:         Optional[OperationLogger] = None
) -> Dict[str, object]:
    """Parse every report, write its JSON. Returns {'reports': [...], 'failed': {name: error}}."""
    logger = logger or OperationLogger(verbosity=2, print_output=False)
    reports: List[MatchReport] = []
    failed: Dict[str, str] = {}

    for report_path in report_paths:
        logger.inc_processed()
        logger_keys = {"report": report_path.name}

        if not report_path.exists():
            logger.skipped(logger_keys, "Report file not found")
            continue

        try:
            report = parse_report_file(report_path, playoff=playoff)
        except ReportReadError as e:
            failed[report_path.name] = e.message
            logger.failed(logger_keys, "Report could not be read", to_console=True)
            continue
        except ReportParseError as e:
            failed[report_path.name] = e.message
            for error in e.errors:
                logger.warning({**logger_keys, "row": error.row_name, "side": error.side}, error.message)
            logger.failed(logger_keys, f"Parse error ({len(e.errors)})", to_console=True)
            continue

        target = write_report_json(report, report_path, out_dir)
        reports.append(report)
        logger.success(logger_keys, "Parsed")
        logging.info(f"Wrote {target}")

    return {"reports": reports, "failed": failed}


def main(argv: Optional[List[str]] = None) -> int:

    args = create_parser().parse_args(argv)
    setup_logging(to_console=args.verbose)

    logger = OperationLogger(
        verbosity       = 2,
        print_output    = True
    )

    report_paths = collect_report_paths(args.paths)
    logger.info(f"Converting {len(report_paths)} reports (playoff={args.playoff})...")

    result = convert_reports(report_paths, playoff=args.playoff, out_dir=args.out_dir, logger=logger)

    if args.excel:
        export_breakdowns_to_excel(
            result["reports"], args.excel, failed=result["failed"], log_entries=logger.individual_logs
        )

    logger.summarize()
    return 1 if result["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
