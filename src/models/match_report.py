# src/models/match_report.py

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional

from models.alliance import AllianceAccumulator, AllianceInfo, Side, SIDES
from models.breakdown_record import BreakdownRecord


@dataclass(frozen=True)
class MatchReport:
    """Parsed match: alliance metadata + score breakdown per side. Frozen once built."""
    alliances:          Mapping[Side, AllianceInfo]
    score_breakdown:    Mapping[Side, BreakdownRecord]
    source:             Optional[str] = None
    playoff:            bool = False

    @classmethod
    def from_accumulators(
        cls,
        accumulators:   Dict[Side, AllianceAccumulator],
        source:         Optional[str] = None,
        playoff:        bool = False
    ) -> "MatchReport":
        for side in SIDES:
            accumulators[side].breakdown.freeze()
        return cls(
            alliances       = MappingProxyType({side: accumulators[side].info for side in SIDES}),
            score_breakdown = MappingProxyType({side: accumulators[side].breakdown for side in SIDES}),
            source          = source,
            playoff         = playoff,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alliances":        {side.value: self.alliances[side].to_dict() for side in SIDES},
            "score_breakdown":  {side.value: self.score_breakdown[side].to_dict() for side in SIDES},
        }

    def to_rows(self) -> list:
        """One flat dict per alliance, used for tabular exports."""
        rows = []
        for side in SIDES:
            info = self.alliances[side]
            row = {
                "source":       self.source,
                "playoff":      self.playoff,
                "alliance":     side.value,
                "teams":        " ".join(info.teams),
                "surrogates":   " ".join(info.surrogates),
                "dqs":          " ".join(info.dqs),
                "score":        info.score,
            }
            for name, value in self.score_breakdown[side].to_dict().items():
                row[name] = " ".join(value) if isinstance(value, list) else value
            rows.append(row)
        return rows
