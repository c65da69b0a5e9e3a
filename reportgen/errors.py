"""Error taxonomy for report generation.

Every failure raised by the engine carries one of a small set of stable
message prefixes so callers can pattern-match on the failure category.
Input and validation errors are raised before any rendering starts; write
errors wrap the underlying filesystem exception.
"""

from __future__ import annotations

from pathlib import Path


class ReportError(Exception):
    """Base class for all report generation failures."""

    kind = "error"
    prefix = "Report error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class DataFileNotFoundError(ReportError):
    """The resolved data file does not exist."""

    kind = "input"
    prefix = "Data file not found"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(str(path))


class DataFileParseError(ReportError):
    """The data file could not be read or parsed."""

    kind = "input"
    prefix = "Failed to read data file"

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ValidationError(ReportError):
    """The payload does not satisfy the minimal request contract."""

    kind = "validation"


class MissingFieldsError(ValidationError):
    """One or more required fields are absent."""

    prefix = "Missing required fields in data"

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(", ".join(self.fields))


class InvalidReportTypeError(ValidationError):
    """``reportType`` is present but not a recognised value."""

    prefix = "Invalid reportType"

    def __init__(self, report_type: object) -> None:
        self.report_type = report_type
        super().__init__(f"{report_type}. Must be 'test' or 'suite'")


class ReportWriteError(ReportError):
    """The report document could not be persisted."""

    kind = "write"
    prefix = "Failed to generate report"
