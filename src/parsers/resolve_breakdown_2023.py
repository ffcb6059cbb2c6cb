# src/parsers/resolve_breakdown_2023.py
"""
Post-pass run once per alliance after every row has been consumed.

1. adjustPoints is derived when no "adjustments" row set it:
       total - auto - teleop - fouls
   It goes negative when the report has components but no final score.
2. Playoff reports have no ranking point rows, so rp is forced to 0 and every
   RP badge to False.
3. Every field of the default table that is still missing gets its default,
   so the output always has the same field set.
"""

import logging

from models.alliance import AllianceAccumulator
from models.field_value import FieldValue
from parsers.fields_2023 import (
    DEFAULT_FIELD_VALUES,
    FIELD_ADJUST_POINTS,
    FIELD_RANKING_POINTS,
    RP_BADGE_NAMES,
)


def add_manual_fields(acc: AllianceAccumulator) -> None:
    if FIELD_ADJUST_POINTS in acc.breakdown:
        return
    s = acc.scores
    adjust = s.total - s.auto - s.teleop - s.fouls
    acc.breakdown.set(FIELD_ADJUST_POINTS, FieldValue.integer(adjust), side=acc.side.value)
    logging.debug(f"{acc.side.value} {FIELD_ADJUST_POINTS} derived as {adjust}")


def apply_playoff_overrides(acc: AllianceAccumulator) -> None:
    acc.breakdown.set(FIELD_RANKING_POINTS, FieldValue.integer(0), side=acc.side.value)
    for api_field in RP_BADGE_NAMES.values():
        acc.breakdown.set(api_field, FieldValue.boolean(False), side=acc.side.value)


def apply_defaults(acc: AllianceAccumulator) -> int:
    applied = 0
    for api_field, value in DEFAULT_FIELD_VALUES.items():
        if acc.breakdown.set_default(api_field, value):
            applied += 1
    return applied


def resolve_alliance(acc: AllianceAccumulator, playoff: bool = False) -> None:
    add_manual_fields(acc)
    if playoff:
        apply_playoff_overrides(acc)
    applied = apply_defaults(acc)
    logging.debug(f"{acc.side.value}: {applied} fields defaulted (playoff={playoff})")
