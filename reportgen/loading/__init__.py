"""Report data input: file loading and request validation."""

from reportgen.loading.loader import read_data_file, resolve_data_path
from reportgen.loading.validation import ReportRequest, parse_request, validate_data

__all__ = [
    "ReportRequest",
    "parse_request",
    "read_data_file",
    "resolve_data_path",
    "validate_data",
]
