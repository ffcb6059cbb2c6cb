# src/exceptions.py
"""
Exceptions raised while reading and parsing FMS score reports.

Row-level errors (RowParseError and subclasses) are recoverable: the parser
records them per row and keeps going. ReportParseError is the aggregate raised
once the whole table has been walked. ReportReadError is fatal and raised
before any row is looked at.
"""

from typing import Optional, Dict, Any, List


class ScoreReportException(Exception):
    """Base exception for score report handling."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a structured error dict."""
        error_dict = {
            "success": False,
            "error": self.message
        }
        if self.context:
            error_dict["context"] = self.context
        return error_dict


class ReportReadError(ScoreReportException):
    """Raised when a report or its extra info document cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Error reading {path}: {reason}",
            context={"path": path, "reason": reason}
        )


class RowParseError(ScoreReportException):
    """Raised while handling a single row; caught and collected by the parser."""

    side: Optional[str] = None


class ValueParseError(RowParseError):
    """Raised when cell text cannot be coerced to the field's type."""

    def __init__(self, text: str, context: str, expected: str = "int", side: Optional[str] = None):
        self.text = text
        self.side = side
        super().__init__(
            message=f"parse {expected} {context} failed: {text!r}",
            context={"text": text, "desc": context, "expected": expected}
        )


class PhaseStateError(RowParseError):
    """Raised when a phase-dependent row shows up outside auto/teleop."""

    def __init__(self, desc: str):
        super().__init__(
            message=f"no active match phase: {desc}",
            context={"desc": desc}
        )


class FieldKindError(RowParseError):
    """Raised when a field is written with a value of another kind than it already holds."""

    def __init__(self, field: str, expected: str, got: str, side: Optional[str] = None):
        self.side = side
        super().__init__(
            message=f"field {field} holds {expected} values, cannot store {got}",
            context={"field": field, "expected": expected, "got": got}
        )


class ReportParseError(ScoreReportException):
    """Raised after the whole table was walked and at least one row failed."""

    def __init__(self, errors: List[Any], source: Optional[str] = None):
        self.errors = list(errors)
        lines = [str(e) for e in self.errors]
        super().__init__(
            message=f"Parse error ({len(lines)}):\n" + "\n".join(lines),
            context={"source": source, "errors": lines} if source else {"errors": lines}
        )
