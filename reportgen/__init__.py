"""HTML report generation for test, batch and suite execution data."""

from reportgen.engine import GenerationOutcome, ReportArtifact, ReportEngine, generate_report
from reportgen.errors import (
    DataFileNotFoundError,
    DataFileParseError,
    ReportError,
    ReportWriteError,
    ValidationError,
)

__all__ = [
    "DataFileNotFoundError",
    "DataFileParseError",
    "GenerationOutcome",
    "ReportArtifact",
    "ReportEngine",
    "ReportError",
    "ReportWriteError",
    "ValidationError",
    "generate_report",
]
