"""Text ingestion: date normalization and delimited-record parsing.

Public API:
  - dates: parse_date, is_calendar_date
  - records: parse_records, parse_records_with_report, export_csv, ParseReport
"""

from fig_monitor.parsing.dates import is_calendar_date, parse_date
from fig_monitor.parsing.records import (
    CSV_HEADER,
    ParseReport,
    SkippedRow,
    coerce_number,
    export_csv,
    parse_records,
    parse_records_with_report,
)

__all__ = [
    "CSV_HEADER",
    "ParseReport",
    "SkippedRow",
    "coerce_number",
    "export_csv",
    "is_calendar_date",
    "parse_date",
    "parse_records",
    "parse_records_with_report",
]
