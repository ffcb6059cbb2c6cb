
# src/utils.py
# Contains reusable helpers: logging setup, the operation logger, label normalization and exports.

from collections import defaultdict
import inspect
import logging
import os
import re
import time
import unicodedata
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from config import LOG_FILE, LOG_LEVEL


def setup_logging(log_file: str = LOG_FILE, log_level: str = LOG_LEVEL, to_console: bool = False):

    # DEBUG: Row-by-row details (phase changes, every write).
    # INFO: One line per report (parsed / failed), run summary.
    # WARNING: Rows that failed to parse.
    # ERROR: Reports that could not be read or parsed.

    # Create log directory if not exists (derive from log_file)
    log_dir = os.path.dirname(os.path.abspath(log_file))
    os.makedirs(log_dir, exist_ok=True)

    # Clear any existing handlers to avoid duplicates
    logging.getLogger().handlers = []

    # File handler with UTF-8 encoding
    file_handler = logging.FileHandler(log_file, encoding='utf-8', mode='a')  # 'a' for append
    file_handler.setLevel(log_level)
    file_formatter = logging.Formatter('[%(asctime)s] %(levelname)-8s %(filename)-32.32s%(lineno)-5d%(funcName)-35.35s: %(message)-100s', datefmt='%b %d %a] [%H:%M:%S')
    file_handler.setFormatter(file_formatter)
    logging.getLogger().addHandler(file_handler)

    # Console handler for real-time output
    if to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_formatter = logging.Formatter('[%(asctime)s] [%(levelname)-7s] %(funcName)-35s : %(message)s', datefmt='%b %d %a %H:%M:%S')
        console_handler.setFormatter(console_formatter)
        logging.getLogger().addHandler(console_handler)

    logging.getLogger().setLevel(log_level)

    logging.info(f"Logging configured to {log_file} at level {log_level}")
    logging.info("-------------------------------------------------------------------")


def normalize_row_name(label: Optional[str]) -> str:
    """
    Normalize a report row label for table lookups.
    Example: '  Fouls/Techs   Committed ' -> 'fouls/techs committed'
    """
    s = label or ""
    s = unicodedata.normalize("NFKC", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s.lower()


class OperationLogger:
    """
    A general logging class for tracking success, failed, skipped, and warnings while converting reports.

    Usage:
    - Initialize at the start of a run:
      logger = OperationLogger(verbosity=1, print_output=True)
    - Add messages during processing:
      logger.success({'report': 'Qualification 12'}, 'Parsed')
      logger.failed({'report': 'Qualification 13'}, 'Parse error (2)')
      logger.skipped({'report': 'notes.txt'}, 'Not a report')
      logger.warning({'report': 'Qualification 14', 'row': 'teams'}, 'Bad cell')
    - Call summarize() at the end to print/log the summary.

    Parameters:
    - verbosity (int): Controls detail level:
        0: Summary totals only.
        1: Totals + reason breakdowns (default).
        2: Level 1 + individual details for failed/skipped/warnings.
        3: Level 2 + detailed output for all items.
    - print_output (bool): If True, prints to console (default: True).
    """
    def __init__(
        self,
        verbosity:      int = 1,
        print_output:   bool = True
    ):
        self.verbosity          = verbosity
        self.print_output       = print_output
        self.results            = defaultdict(lambda: {"success": 0, "failed": 0, "skipped": 0})
        self.reasons            = {"success": defaultdict(int), "failed": defaultdict(int), "skipped": defaultdict(int), "warning": defaultdict(int)}
        self.individual_logs    = []
        self.processed          = 0
        self.start_time         = time.time()

    def inc_processed(self, n: int = 1):
        """Increment number of processed records (used for throughput)."""
        self.processed += n

    def _format_msg(self, context: dict, reason: str) -> str:
        return f"({', '.join(f'{k}: {v}' for k,v in context.items())}): {reason}"

    def _record(self, status: str, context: dict, reason: str):
        frame = inspect.currentframe().f_back.f_back
        self.individual_logs.append({
            'status': status,
            'context': context,
            'message': reason,
            'function_name': frame.f_code.co_name,
            'filename': os.path.basename(frame.f_code.co_filename)
        })

    def _emit(self, msg: str, emoji: str, to_console: Optional[bool]):
        should_print = to_console if to_console is not None else False
        if should_print:
            print(f"{emoji} {msg}")

    def info(
        self,
        item_key_or_message: Union[dict, str],
        reason: Optional[str] = None,
        *,
        to_console: Optional[bool] = None,
        emoji: str = "ℹ️ ",
    ):
        """
        logger.info("Parsing 12 reports...")                # message-only
        logger.info({'report': 'Q12'}, "Playoff overrides")  # with key
        Does NOT affect counters/summaries.
        """
        if reason is None:
            log_msg = str(item_key_or_message)
        elif isinstance(item_key_or_message, dict):
            log_msg = self._format_msg(item_key_or_message, reason)
        else:
            log_msg = f"{item_key_or_message}: {reason}" if item_key_or_message else reason

        logging.info(log_msg, stacklevel=2)

        should_print = self.print_output if to_console is None else to_console
        if should_print:
            print(f"{emoji} {log_msg}")

    def success(
        self,
        context: Union[dict, str],
        reason: Optional[str] = "Success",
        *,
        to_console: Optional[bool] = None,
        emoji: str = "✅ ",
    ):
        if isinstance(context, str):
            context = {'key': context}
        self.results[str(context)]["success"] += 1
        self.reasons["success"][reason] += 1

        msg = self._format_msg(context, reason)
        if self.verbosity >= 3:
            logging.info(msg, stacklevel=2)
        self._emit(msg, emoji, to_console)
        self._record('success', context, reason)

    def failed(
        self,
        context: Union[dict, str],
        reason: Optional[str] = "Failed",
        *,
        to_console: Optional[bool] = None,
        emoji: str = "❌ ",
    ):
        if isinstance(context, str):
            context = {'key': context}
        self.results[str(context)]["failed"] += 1
        self.reasons["failed"][reason] += 1

        msg = self._format_msg(context, reason)
        if self.verbosity >= 1:
            logging.error(msg, stacklevel=2)
        self._emit(msg, emoji, to_console)
        self._record('error', context, reason)

    def skipped(
        self,
        context: Union[dict, str],
        reason: Optional[str] = "Skipped",
        *,
        to_console: Optional[bool] = None,
        emoji: str = "⏭️  ",
    ):
        if isinstance(context, str):
            context = {'key': context}
        self.results[str(context)]["skipped"] += 1
        self.reasons["skipped"][reason] += 1

        msg = self._format_msg(context, reason)
        if self.verbosity >= 3:
            logging.warning(msg, stacklevel=2)
        self._emit(msg, emoji, to_console)
        self._record('skipped', context, reason)

    def warning(
        self,
        context: Union[dict, str],
        reason: str,
        *,
        to_console: Optional[bool] = None,
        emoji: str = "⚠️  ",
    ):
        if isinstance(context, str):
            context = {'key': context}
        self.reasons["warning"][reason] += 1

        msg = self._format_msg(context, reason)
        if self.verbosity >= 2:
            logging.warning(msg, stacklevel=2)
        self._emit(msg, emoji, to_console)
        self._record('warning', context, reason)

    def totals(self) -> Dict[str, int]:
        return {
            "success":  sum(d["success"] for d in self.results.values()),
            "failed":   sum(d["failed"]  for d in self.results.values()),
            "skipped":  sum(d["skipped"] for d in self.results.values()),
            "warning":  sum(self.reasons["warning"].values()),
        }

    def summarize(self) -> List[str]:
        """Generate and print/log the full summary, always including totals, one line at a time."""
        totals = self.totals()

        lines = []
        lines.append("📊 Operation Summary:")
        for status, label, emoji in [
            ("success", "Success",  "✅"),
            ("failed",  "Failed",   "❌"),
            ("skipped", "Skipped",  "⏭️ "),
            ("warning", "Warnings", "⚠️ "),
        ]:
            lines.append(f"   {emoji} {label}: {totals[status]}")
            if self.verbosity >= 1:
                for reason, count in self.reasons[status].items():
                    lines.append(f"      • {reason}: {count}")

        runtime_seconds = time.time() - self.start_time
        lines.append("")
        lines.append(f"   ⏱️  Runtime: {runtime_seconds:.1f}s")
        lines.append(f"   📦 Records processed: {self.processed}")
        if runtime_seconds > 0:
            throughput = self.processed / runtime_seconds
            lines.append(f"   ⚡ Throughput: {throughput:.1f} records/sec")

        for line in lines:
            logging.info(line, stacklevel=2)
            if self.print_output:
                print(line)
        return lines


def export_breakdowns_to_excel(
    reports:        Iterable[Any],
    path:           str,
    failed:         Optional[Dict[str, str]] = None,
    log_entries:    Optional[List[dict]] = None
) -> int:
    """
    Export parsed reports to an Excel workbook, one row per (match, alliance).
    reports are MatchReport objects (anything with to_rows()); failed maps source -> error message;
    log_entries are OperationLogger.individual_logs, written to an All_Logs sheet with context flattened.
    Always rewrites the file. Returns the number of alliance rows written.
    """
    rows = [row for report in reports for row in report.to_rows()]
    df = pd.DataFrame(rows)

    with pd.ExcelWriter(path, engine='openpyxl') as writer:
        if df.empty:
            pd.DataFrame(columns=["source", "alliance"]).to_excel(writer, sheet_name='Breakdowns', index=False)
        else:
            # Fixed columns first, breakdown fields sorted after them
            fixed = ["source", "playoff", "alliance", "teams", "surrogates", "dqs", "score"]
            rest = sorted(c for c in df.columns if c not in fixed)
            df[fixed + rest].to_excel(writer, sheet_name='Breakdowns', index=False)

        if failed:
            failed_df = pd.DataFrame(
                [{"source": source, "error": error} for source, error in failed.items()]
            )
            failed_df.to_excel(writer, sheet_name='Failed', index=False)

        if log_entries:
            logs_df = pd.DataFrame(log_entries)
            context_df = pd.json_normalize(list(logs_df['context']))
            logs_df = pd.concat([logs_df.drop('context', axis=1), context_df], axis=1)
            logs_df.to_excel(writer, sheet_name='All_Logs', index=False)

    print(f"ℹ️  Exported {len(rows)} alliance rows to {path}")
    logging.info(f"Exported {len(rows)} alliance rows to {path}")
    return len(rows)
