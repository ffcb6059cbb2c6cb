# config.py

LOG_FILE                                = "../data/logs/log.log"
LOG_LEVEL                               = "INFO"    # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL

REPORT_DIR                              = "../data/reports"     # Where FMS score reports are read from when no path is given
REPORT_GLOB                             = "*.html"              # Pattern used when a directory is passed
EXTRA_INFO_SUFFIX                       = ".extrajson"          # Side-channel document next to each report (dqs, surrogates, penalties)
OUTPUT_DIR                              = None                  # Directory for <report>.json output, None = next to the report
JSON_INDENT                             = 2

PLAYOFF_DEFAULT                         = False     # Playoff reports lack the bonus ranking point rows
EXCEL_EXPORT_FILE                       = None      # e.g. "breakdowns.xlsx", None to skip the export

# Row labels in the report are matched case-insensitively after trimming.
HEADER_ROW_NAMES                        = ("match score item",)
