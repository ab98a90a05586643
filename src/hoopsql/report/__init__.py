"""📊 Multi-query HTML reports."""

from .builder import build_report, run_report, write_report
from .models import DEFAULT_QUERIES_FILE, ReportDefinition, ReportQuery, load_report_definition

__all__ = [
    "DEFAULT_QUERIES_FILE",
    "ReportDefinition",
    "ReportQuery",
    "build_report",
    "load_report_definition",
    "run_report",
    "write_report",
]
