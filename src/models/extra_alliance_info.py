# src/models/extra_alliance_info.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

from models.alliance import Side, SIDES


@dataclass
class ExtraAllianceInfo:
    """Per-alliance data that is not in the score report itself (from the .extrajson file)."""
    dqs:            List[str] = field(default_factory=list)
    surrogates:     List[str] = field(default_factory=list)
    g405_penalty:   bool = False
    h111_penalty:   bool = False

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "ExtraAllianceInfo":
        d = d or {}
        return cls(
            dqs             = [str(t) for t in (d.get("dqs") or [])],
            surrogates      = [str(t) for t in (d.get("surrogates") or [])],
            g405_penalty    = bool(d.get("g405_penalty", False)),
            h111_penalty    = bool(d.get("h111_penalty", False)),
        )

    def validate(self) -> Tuple[bool, str]:
        overlap = set(self.dqs) & set(self.surrogates)
        if overlap:
            return False, f"Teams listed as both dq and surrogate: {', '.join(sorted(overlap))}"
        return True, ""


def extra_info_by_side(d: Optional[Dict[str, Any]] = None) -> Dict[Side, ExtraAllianceInfo]:
    """{'blue': {...}, 'red': {...}} -> {Side: ExtraAllianceInfo}; missing sides get defaults."""
    d = d or {}
    return {side: ExtraAllianceInfo.from_dict(d.get(side.value)) for side in SIDES}
