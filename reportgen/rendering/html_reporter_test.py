"""Tests for HTML report generation."""

from __future__ import annotations

import json
import re

from reportgen.config import ReportConfig
from reportgen.loading.validation import parse_request
from reportgen.rendering.html_reporter import (
    build_batch_report,
    build_single_report,
    build_suite_report,
    generate_html_report,
)
from reportgen.rendering.variants import dispatch

TIMESTAMP = "2026-01-01-12-00-00-000"


def _single(test_case=None, execution=None):
    return dispatch(parse_request({
        "reportType": "test",
        "reportData": {"testCase": test_case, "execution": execution},
    }))


def _batch(test_cases, test_results=None, **execution):
    if test_results is not None:
        execution["testResults"] = test_results
    return dispatch(parse_request({
        "reportType": "test",
        "reportData": {"testCase": test_cases, "execution": execution},
    }))


def _suite(results, suite=None):
    return dispatch(parse_request({
        "reportType": "suite",
        "reportData": {"suite": suite or {"name": "Checkout"}, "results": results},
    }))


def _embedded_data(document: str) -> dict:
    match = re.search(r"window\.reportData = (.*);</script>", document)
    assert match is not None
    return json.loads(match.group(1))


class TestDocumentStructure:
    """Tests shared by all builders."""

    def test_single_is_complete_document(self):
        """Output starts with the doctype and closes the html element."""
        result = build_single_report(_single({"name": "t"}), ReportConfig(), TIMESTAMP)
        assert result.startswith("<!DOCTYPE html>")
        assert "<style>" in result
        assert result.rstrip().endswith("</html>")

    def test_no_external_assets(self):
        """Reports never reference external scripts or stylesheets."""
        for variant in (
            _single({"name": "t"}),
            _batch([{"name": "a"}]),
            _suite([{"testName": "a", "status": "passed"}]),
        ):
            result = generate_html_report(variant, ReportConfig(), TIMESTAMP)
            assert "<script src" not in result
            assert "<link" not in result

    def test_timestamp_embedded(self):
        """The invocation timestamp appears in the document and data."""
        result = build_single_report(_single({"name": "t"}), ReportConfig(), TIMESTAMP)
        assert f"Generated: {TIMESTAMP}" in result
        assert _embedded_data(result)["timestamp"] == TIMESTAMP

    def test_only_timestamp_differs(self):
        """Rendering twice differs only in the timestamp."""
        variant = _suite([{"testName": "a", "status": "passed"}])
        first = build_suite_report(variant, ReportConfig(), "2026-01-01-00-00-00-001")
        second = build_suite_report(variant, ReportConfig(), "2026-01-01-00-00-00-002")
        assert first != second
        assert first.replace("00-001", "X") == second.replace("00-002", "X")

    def test_text_is_escaped(self):
        """Payload text is HTML-escaped."""
        result = build_single_report(
            _single({"name": "<b>bold</b>", "description": "a & b"}),
            ReportConfig(), TIMESTAMP,
        )
        assert "&lt;b&gt;bold&lt;/b&gt;" in result
        assert "a &amp; b" in result
        assert "<b>bold</b>" not in result

    def test_embedded_script_cannot_be_closed(self):
        """Data containing </script> does not break out of the element."""
        result = build_single_report(
            _single({"name": "</script><script>alert(1)</script>"}),
            ReportConfig(), TIMESTAMP,
        )
        assert result.count("</script>") == 1
        data = _embedded_data(result)
        assert data["testCase"]["name"] == "</script><script>alert(1)</script>"


class TestSingleReport:
    """Tests for the single-test builder."""

    def test_passed_scenario(self):
        """Name, passed icon and whole-second duration are shown."""
        result = build_single_report(
            _single({"name": "login flow"}, {"status": "passed", "duration": 30000}),
            ReportConfig(), TIMESTAMP,
        )
        assert "login flow" in result
        assert "✅" in result
        assert re.search(r'class="stat-number"[^>]*>30</div>', result)
        assert "linear-gradient(135deg, #28a745, #20c997)" in result

    def test_defaults_for_missing_data(self):
        """Null test case and execution render with placeholders."""
        result = build_single_report(_single(None, None), ReportConfig(), TIMESTAMP)
        assert "Unnamed Test" in result
        assert "❓" in result
        assert "UNKNOWN" in result
        assert "N/A" in result
        assert "No tags" in result
        assert "linear-gradient(135deg, #6c757d, #8d9498)" in result

    def test_unknown_status_is_neutral(self):
        """Unrecognised status values use the unknown bucket."""
        result = build_single_report(
            _single({"name": "t"}, {"status": "exploded"}), ReportConfig(), TIMESTAMP,
        )
        assert "❓" in result
        assert "status-unknown" in result

    def test_tags_rendered(self):
        """Each tag gets its own element."""
        result = build_single_report(
            _single({"name": "t", "tags": ["smoke", "auth"]}), ReportConfig(), TIMESTAMP,
        )
        assert '<span class="tag">smoke</span>' in result
        assert '<span class="tag">auth</span>' in result

    def test_overview_hides_steps(self):
        """The overview style omits the detailed steps section."""
        result = build_single_report(
            _single({"name": "t", "steps": ["open page"]}), ReportConfig(), TIMESTAMP,
        )
        assert "Detailed Steps" not in result
        assert "open page" not in result.split("<script>")[0]

    def test_detailed_renders_steps(self):
        """Plain and structured steps render in the detailed style."""
        steps = [
            "open page",
            {"action": "click login", "description": "primary button"},
            {"description": "no action"},
        ]
        result = build_single_report(
            _single({"name": "t", "steps": steps}),
            ReportConfig({"reportStyle": "detailed"}), TIMESTAMP,
        )
        assert "Detailed Steps" in result
        assert "open page" in result
        assert "click login" in result
        assert "primary button" in result
        assert "Unknown step" in result

    def test_failed_step_highlighted(self):
        """The failed step index is highlighted in detailed style."""
        result = build_single_report(
            _single(
                {"name": "t", "steps": ["a", "b"]},
                {"status": "failed", "failedStepIndex": 1, "error": "boom"},
            ),
            ReportConfig({"reportStyle": "detailed"}), TIMESTAMP,
        )
        assert result.count("step-item step-failed") == 1
        assert "Error Details" in result
        assert "boom" in result

    def test_boolean_failed_step_ignored(self):
        """A boolean failedStepIndex highlights no step."""
        result = build_single_report(
            _single(
                {"name": "t", "steps": ["a", "b"]},
                {"status": "failed", "failedStepIndex": True},
            ),
            ReportConfig({"reportStyle": "detailed"}), TIMESTAMP,
        )
        assert "step-item step-failed" not in result

    def test_error_only_for_failures(self):
        """Errors are not shown for passing tests."""
        result = build_single_report(
            _single({"name": "t"}, {"status": "passed", "error": "stale"}),
            ReportConfig(), TIMESTAMP,
        )
        assert "Error Details" not in result

    def test_environment_shown(self):
        """The configured environment is displayed."""
        result = build_single_report(
            _single({"name": "t"}), ReportConfig({"environment": "staging"}), TIMESTAMP,
        )
        assert "Environment: staging" in result


class TestBatchReport:
    """Tests for the batch builder."""

    def test_all_passed(self):
        """Two passing tests give 100 percent and the green header."""
        result = build_batch_report(
            _batch(
                [{"name": "a"}, {"name": "b"}],
                [{"status": "passed"}, {"status": "passed"}],
            ),
            ReportConfig(), TIMESTAMP,
        )
        assert re.search(r'class="stat-number"[^>]*>100%</div>', result)
        assert "linear-gradient(135deg, #28a745, #20c997)" in result

    def test_all_failed(self):
        """Two failing tests give 0 percent and the failure color."""
        result = build_batch_report(
            _batch(
                [{"name": "a"}, {"name": "b"}],
                [{"status": "failed"}, {"status": "failed"}],
            ),
            ReportConfig(), TIMESTAMP,
        )
        assert '<div class="stat-number" style="color:#dc3545">0%</div>' in result
        assert "linear-gradient(135deg, #dc3545, #e74c3c)" in result

    def test_missing_results_are_unknown(self):
        """Tests without a matching result show an unknown status."""
        result = build_batch_report(
            _batch([{"name": "a"}, {"name": "b"}], [{"status": "passed"}]),
            ReportConfig(), TIMESTAMP,
        )
        assert result.count("result-card unknown") == 1
        assert result.count("result-card passed") == 1
        assert re.search(r'class="stat-number"[^>]*>50%</div>', result)

    def test_unnamed_tests_numbered(self):
        """Unnamed tests are labelled by position."""
        result = build_batch_report(_batch([{}, {}]), ReportConfig(), TIMESTAMP)
        assert "Test 1" in result
        assert "Test 2" in result

    def test_total_duration_from_execution(self):
        """Execution duration is used for the header total."""
        result = build_batch_report(
            _batch([{"name": "a"}], [{"status": "passed"}], duration=45000),
            ReportConfig(), TIMESTAMP,
        )
        assert re.search(r'class="stat-number"[^>]*>45</div>', result)

    def test_total_duration_summed(self):
        """Without an execution duration, per-test durations are summed."""
        result = build_batch_report(
            _batch(
                [{"name": "a"}, {"name": "b"}],
                [{"status": "passed", "duration": 1000}, {"status": "passed", "duration": 2500}],
            ),
            ReportConfig(), TIMESTAMP,
        )
        assert re.search(r'class="stat-number"[^>]*>3.5</div>', result)
        assert "Duration: 2.5s" in result

    def test_result_extras(self):
        """Validations, errors and session markers are rendered."""
        result = build_batch_report(
            _batch(
                [{"name": "a"}],
                [{
                    "status": "failed",
                    "error": "timeout",
                    "validations": ["title", "url"],
                    "sessionOptimized": True,
                }],
            ),
            ReportConfig(), TIMESTAMP,
        )
        assert "Validations:</strong> title, url" in result
        assert "timeout" in result
        assert "Session Optimized" in result

    def test_detailed_lists_steps(self):
        """Detailed style lists each test's steps."""
        result = build_batch_report(
            _batch([{"name": "a", "steps": ["open", {"action": "submit"}]}]),
            ReportConfig({"reportStyle": "detailed"}), TIMESTAMP,
        )
        assert "Test Steps:" in result
        assert "1. open" in result
        assert "2. submit" in result

    def test_embedded_data_keys(self):
        """Batch reports embed the test case list."""
        data = _embedded_data(build_batch_report(
            _batch([{"name": "a"}]), ReportConfig(), TIMESTAMP,
        ))
        assert data["testCases"] == [{"name": "a"}]
        assert data["config"]["environment"] == "dev"


class TestSuiteReport:
    """Tests for the suite builder."""

    def test_half_passed(self):
        """One passed and one failed result give 50 percent."""
        result = build_suite_report(
            _suite([
                {"testName": "a", "status": "passed", "steps": 3, "duration": 2000},
                {"testName": "b", "status": "failed", "steps": 5},
            ]),
            ReportConfig(), TIMESTAMP,
        )
        assert re.search(r'class="stat-number"[^>]*>50%</div>', result)
        assert "Steps: 3" in result
        assert "Duration: 2s" in result
        assert "Duration: N/A" in result

    def test_empty_results(self):
        """An empty suite shows 0 percent and a neutral header."""
        result = build_suite_report(_suite([]), ReportConfig(), TIMESTAMP)
        assert re.search(r'class="stat-number"[^>]*>0%</div>', result)
        assert "linear-gradient(135deg, #6c757d, #8d9498)" in result

    def test_suite_info(self):
        """Suite name and description are shown."""
        result = build_suite_report(
            _suite([], suite={"name": "Checkout", "description": "Buying things"}),
            ReportConfig(), TIMESTAMP,
        )
        assert "Suite: Checkout" in result
        assert "Buying things" in result

    def test_malformed_results_degrade(self):
        """Non-record results and missing names do not raise."""
        result = build_suite_report(
            _suite(["junk", {"status": None, "steps": "many"}]),
            ReportConfig(), TIMESTAMP,
        )
        assert result.count("Unnamed Test") == 2
        assert "Steps: 0" in result

    def test_features_and_detailed_steps(self):
        """Features and steps_detail are rendered for suite results."""
        result = build_suite_report(
            _suite([{
                "testName": "a",
                "status": "passed",
                "features": "login, cart",
                "steps_detail": ["go", "check"],
            }]),
            ReportConfig({"reportStyle": "detailed"}), TIMESTAMP,
        )
        assert "Features: login, cart" in result
        assert "2. check" in result
