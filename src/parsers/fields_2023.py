# src/parsers/fields_2023.py
#
# Static lookup tables for the 2023 FMS score report. Keys are normalized row
# names (see utils.normalize_row_name), values are TBA API field names.
# Read-only: everything is wrapped in MappingProxyType / tuples.

from types import MappingProxyType
from typing import Mapping, Tuple

from models.field_value import FieldKind, FieldValue

# Basic integer fields, same API name in every phase
SIMPLE_FIELDS: Mapping[str, str] = MappingProxyType({
    "coop game piece count":    "coopGamePieceCount",
    "mobility points":          "autoMobilityPoints",
    "endgame park points":      "endGameParkPoints",
    "link points":              "linkPoints",
    "adjustments":              "adjustPoints",
})

# Integer fields whose API name is the current match phase ("auto"/"teleop") + suffix
SIMPLE_MATCH_PHASE_FIELDS: Mapping[str, str] = MappingProxyType({
    "game piece count":         "GamePieceCount",
    "game piece points":        "GamePiecePoints",
})

# One cell holding several integers separated by a bullet
MULTI_FIELD_SEPARATOR = "•"
MULTI_FIELDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "fouls/techs committed":    ("foulCount", "techFoulCount"),
})

# Bonus ranking point badges; absent from playoff reports
RP_BADGE_NAMES: Mapping[str, str] = MappingProxyType({
    "cargo bonus ranking point achieved":   "cargoBonusRankingPoint",
    "hangar bonus ranking point achieved":  "hangarBonusRankingPoint",
})

# Cells listing one value per robot (teams, charge station states) use line breaks
ROBOT_SEPARATOR = "\n"

# Named rows with their own handling in the row classifier
ROW_TEAMS               = "teams"
ROW_FINAL_SCORE         = "final score"
ROW_RANKING_POINTS      = "ranking points"
ROW_AUTONOMOUS_POINTS   = "autonomous points"
ROW_TELEOP_POINTS       = "teleop points"
ROW_FOUL_POINTS         = "foul points"
ROW_CHARGE_STATION      = "charge station"

FIELD_ADJUST_POINTS     = "adjustPoints"
FIELD_RANKING_POINTS    = "rp"
FIELD_TOTAL_POINTS      = "totalPoints"

DEFAULT_BREAKDOWN_VALUES = MappingProxyType({
    "adjustPoints":                 0,
    "autoCargoLowerBlue":           0,
    "autoCargoLowerFar":            0,
    "autoCargoLowerNear":           0,
    "autoCargoLowerRed":            0,
    "autoCargoPoints":              0,
    "autoCargoTotal":               0,
    "autoCargoUpperBlue":           0,
    "autoCargoUpperFar":            0,
    "autoCargoUpperNear":           0,
    "autoCargoUpperRed":            0,
    "autoPoints":                   0,
    "autoTaxiPoints":               0,
    "cargoBonusRankingPoint":       False,
    "endgamePoints":                0,
    "endgameRobot1":                "None",
    "endgameRobot2":                "None",
    "endgameRobot3":                "None",
    "foulCount":                    0,
    "foulPoints":                   0,
    "hangarBonusRankingPoint":      False,
    "matchCargoTotal":              0,
    "quintetAchieved":              False,
    "rp":                           0,
    "taxiRobot1":                   "No",
    "taxiRobot2":                   "No",
    "taxiRobot3":                   "No",
    "techFoulCount":                0,
    "teleopCargoLowerBlue":         0,
    "teleopCargoLowerFar":          0,
    "teleopCargoLowerNear":         0,
    "teleopCargoLowerRed":          0,
    "teleopCargoPoints":            0,
    "teleopCargoTotal":             0,
    "teleopCargoUpperBlue":         0,
    "teleopCargoUpperFar":          0,
    "teleopCargoUpperNear":         0,
    "teleopCargoUpperRed":          0,
    "teleopPoints":                 0,
    "totalPoints":                  0,
    # Fields written by the 2023 rows above
    "coopGamePieceCount":           0,
    "autoMobilityPoints":           0,
    "endGameParkPoints":            0,
    "linkPoints":                   0,
    "autoGamePieceCount":           0,
    "autoGamePiecePoints":          0,
    "teleopGamePieceCount":         0,
    "teleopGamePiecePoints":        0,
    "autoChargeStationRobot1":      "None",
    "autoChargeStationRobot2":      "None",
    "autoChargeStationRobot3":      "None",
    "endGameChargeStationRobot1":   "None",
    "endGameChargeStationRobot2":   "None",
    "endGameChargeStationRobot3":   "None",
})

DEFAULT_FIELD_VALUES: Mapping[str, FieldValue] = MappingProxyType(
    {name: FieldValue.from_default(value) for name, value in DEFAULT_BREAKDOWN_VALUES.items()}
)

FIELD_KINDS: Mapping[str, FieldKind] = MappingProxyType(
    {name: value.kind for name, value in DEFAULT_FIELD_VALUES.items()}
)
