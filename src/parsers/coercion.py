# src/parsers/coercion.py
#
# Turns raw cell text into typed values. Every failure is a ValueParseError
# carrying the offending text and a "<side> <row name>" description.

import re
from typing import List, Optional

from exceptions import ValueParseError

INT_RE = re.compile(r"[+-]?[0-9]+")

TRUE_TOKENS     = {"yes", "y", "true", "1", "✓", "✔"}
FALSE_TOKENS    = {"no", "n", "false", "0", "✗", "✘", ""}


def parse_int(text: Optional[str], desc: str, side: Optional[str] = None) -> int:
    """'  42 ' -> 42. ASCII digits only: no thousands separators, no floats."""
    s = (text or "").strip()
    if not INT_RE.fullmatch(s):
        raise ValueParseError(s, desc, expected="int", side=side)
    return int(s, 10)


def split_and_strip(text: Optional[str], sep: str) -> List[str]:
    """
    Split on sep and strip every token. Empty tokens at the start and the end
    (leading/trailing separators, blank lines) are dropped, inner ones kept.
    Never fails: '' -> [].
    """
    tokens = [t.strip() for t in (text or "").split(sep)]
    while tokens and not tokens[0]:
        tokens.pop(0)
    while tokens and not tokens[-1]:
        tokens.pop()
    return tokens


def parse_int_list(text: Optional[str], sep: str, count: int, desc: str, side: Optional[str] = None) -> List[int]:
    """'2•1' -> [2, 1]; the number of tokens must be exactly count."""
    tokens = split_and_strip(text, sep)
    if len(tokens) != count:
        raise ValueParseError(
            (text or "").strip(), f"{desc} (expected {count} values, got {len(tokens)})", expected="int list", side=side
        )
    return [parse_int(tok, desc, side=side) for tok in tokens]


def parse_bool(text: Optional[str], desc: str, side: Optional[str] = None) -> bool:
    s = (text or "").strip().lower()
    if s in TRUE_TOKENS:
        return True
    if s in FALSE_TOKENS:
        return False
    raise ValueParseError(s, desc, expected="bool", side=side)
