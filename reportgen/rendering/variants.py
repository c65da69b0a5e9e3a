"""Report variant selection.

A validated request maps to exactly one of three variants. The shape of
``testCase`` (single record or sequence) is inspected once here; builders
receive an already-typed variant and never re-inspect the payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from reportgen.loading.validation import ReportRequest


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


@dataclass(frozen=True)
class SingleTest:
    """One test case with its execution record."""

    test_case: dict[str, Any]
    execution: dict[str, Any]

    kind = "single"
    family = "test"
    latest_name = "latest-test-report.html"

    @property
    def name(self) -> str | None:
        name = self.test_case.get("name")
        return str(name) if name else None


@dataclass(frozen=True)
class BatchTests:
    """Several test cases from one execution.

    ``test_results`` is aligned with ``test_cases`` by position; entries
    without a matching result are ``None``.
    """

    test_cases: list[dict[str, Any]]
    execution: dict[str, Any]
    test_results: list[dict[str, Any] | None] = field(default_factory=list)

    kind = "batch"
    family = "test"
    latest_name = "latest-test-report.html"

    @property
    def name(self) -> str | None:
        name = self.execution.get("name")
        return str(name) if name else None


@dataclass(frozen=True)
class SuiteRun:
    """A suite and its ordered per-test results."""

    suite: dict[str, Any]
    results: list[dict[str, Any]]

    kind = "suite"
    family = "suite"
    latest_name = "latest-suite-report.html"

    @property
    def name(self) -> str | None:
        name = self.suite.get("name")
        return str(name) if name else None


ReportVariant = Union[SingleTest, BatchTests, SuiteRun]


def _zip_results(
    test_cases: list[Any], test_results: Any
) -> list[dict[str, Any] | None]:
    """Pair each test case with the result at the same position."""
    if not isinstance(test_results, (list, tuple)):
        return [None] * len(test_cases)
    paired: list[dict[str, Any] | None] = []
    for index in range(len(test_cases)):
        result = test_results[index] if index < len(test_results) else None
        paired.append(dict(result) if isinstance(result, Mapping) else None)
    return paired


def dispatch(request: ReportRequest) -> ReportVariant:
    """Select the report variant for a validated request.

    Args:
        request: A request that has passed validation.

    Returns:
        SuiteRun for suite requests, BatchTests when ``testCase`` is a
        sequence, SingleTest otherwise.
    """
    data = request.report_data

    if request.report_type == "suite":
        results = [_as_dict(r) for r in _as_list(data.get("results"))]
        return SuiteRun(suite=_as_dict(data.get("suite")), results=results)

    test_case = data.get("testCase")
    execution = _as_dict(data.get("execution"))

    if isinstance(test_case, (list, tuple)):
        test_cases = [_as_dict(tc) for tc in test_case]
        return BatchTests(
            test_cases=test_cases,
            execution=execution,
            test_results=_zip_results(test_cases, execution.get("testResults")),
        )

    return SingleTest(test_case=_as_dict(test_case), execution=execution)
