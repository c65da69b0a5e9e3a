"""Structural validation of report requests.

Only the top-level contract is enforced here. Nested fields are left to the
content builders, which substitute display defaults instead of rejecting
partial data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from reportgen.errors import InvalidReportTypeError, MissingFieldsError

REQUIRED_FIELDS = ("reportType", "reportData")

# Fields each report type needs inside reportData
TYPE_FIELDS: dict[str, tuple[str, ...]] = {
    "test": ("testCase", "execution"),
    "suite": ("suite", "results"),
}

VALID_REPORT_TYPES = frozenset(TYPE_FIELDS)


@dataclass(frozen=True)
class ReportRequest:
    """A validated report request."""

    report_type: str  # test, suite
    report_data: dict[str, Any]
    config: dict[str, Any] = field(default_factory=dict)
    environment: Any = None


def validate_data(data: Any) -> None:
    """Check the minimal request contract.

    Args:
        data: Parsed payload.

    Raises:
        MissingFieldsError: Naming every missing field in one message.
        InvalidReportTypeError: If ``reportType`` is not ``test``/``suite``.
    """
    if not isinstance(data, Mapping):
        raise MissingFieldsError(list(REQUIRED_FIELDS))

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise MissingFieldsError(missing)

    report_type = data["reportType"]
    if not isinstance(report_type, str) or report_type not in VALID_REPORT_TYPES:
        raise InvalidReportTypeError(report_type)

    report_data = data["reportData"]
    if not isinstance(report_data, Mapping):
        report_data = {}
    nested_missing = [
        f"reportData.{name}"
        for name in TYPE_FIELDS[report_type]
        if name not in report_data
    ]
    if nested_missing:
        raise MissingFieldsError(nested_missing)


def parse_request(data: Any) -> ReportRequest:
    """Validate a payload and wrap it in a ReportRequest.

    Args:
        data: Parsed payload.

    Returns:
        The validated request.
    """
    validate_data(data)
    config = data.get("config")
    return ReportRequest(
        report_type=data["reportType"],
        report_data=dict(data["reportData"]),
        config=dict(config) if isinstance(config, Mapping) else {},
        environment=data.get("environment"),
    )
