"""Report output: artifact naming, writing and the latest pointer."""

from reportgen.output.latest_link import LinkResult, update_latest_link
from reportgen.output.naming import generate_timestamp, report_file_name
from reportgen.output.writer import write_report

__all__ = [
    "LinkResult",
    "generate_timestamp",
    "report_file_name",
    "update_latest_link",
    "write_report",
]
