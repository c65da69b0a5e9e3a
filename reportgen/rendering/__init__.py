"""Report rendering: variant dispatch, status aggregation and HTML builders."""

from reportgen.rendering.html_reporter import (
    build_batch_report,
    build_single_report,
    build_suite_report,
    generate_html_report,
)
from reportgen.rendering.variants import BatchTests, ReportVariant, SingleTest, SuiteRun, dispatch

__all__ = [
    "BatchTests",
    "ReportVariant",
    "SingleTest",
    "SuiteRun",
    "build_batch_report",
    "build_single_report",
    "build_suite_report",
    "dispatch",
    "generate_html_report",
]
