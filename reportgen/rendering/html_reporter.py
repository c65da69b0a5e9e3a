"""HTML report generation for single tests, test batches and suites.

Builders are pure: they take a dispatched variant, the effective config and
the invocation timestamp, and return a complete self-contained document
with embedded styles and data. Missing or malformed nested fields degrade
to placeholder text instead of raising.
"""

from __future__ import annotations

import html
import json
from collections.abc import Mapping
from typing import Any

from reportgen.config import ReportConfig
from reportgen.rendering.status import (
    DURATION_PLACEHOLDER,
    format_duration,
    normalize_status,
    status_accent,
    status_color,
    status_icon,
    sum_durations,
    summarize,
)
from reportgen.rendering.variants import BatchTests, ReportVariant, SingleTest, SuiteRun

FOOTER_CREDIT = "Generated by reportgen"

_CSS = """\
* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}
body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    background: #f8f9fa;
    color: #333;
}
.container {
    max-width: 1200px;
    margin: 0 auto;
    padding: 20px;
}
.header {
    color: white;
    padding: 30px;
    border-radius: 12px;
    margin-bottom: 30px;
    box-shadow: 0 4px 15px rgba(0,0,0,0.1);
}
.header h1 {
    font-size: 2.2em;
    margin-bottom: 10px;
    display: flex;
    align-items: center;
    gap: 15px;
}
.header .subtitle {
    font-size: 1.1em;
    opacity: 0.9;
}
.stats-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
    gap: 20px;
    margin-bottom: 30px;
}
.stat-card {
    background: white;
    padding: 20px;
    border-radius: 12px;
    box-shadow: 0 2px 10px rgba(0,0,0,0.05);
    border-left: 4px solid #28a745;
}
.stat-card h3 {
    color: #495057;
    margin-bottom: 10px;
    font-size: 1em;
}
.stat-number {
    font-size: 2em;
    font-weight: bold;
    margin-bottom: 5px;
}
.stat-label {
    color: #6c757d;
    font-size: 0.9em;
}
.section {
    background: white;
    border-radius: 12px;
    padding: 25px;
    box-shadow: 0 2px 10px rgba(0,0,0,0.05);
    margin-bottom: 30px;
}
.info-grid, .cards-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
    gap: 20px;
    margin-top: 20px;
}
.info-item {
    padding: 15px;
    background: #f8f9fa;
    border-radius: 8px;
    border-left: 3px solid #007bff;
}
.info-item h4 {
    color: #495057;
    margin-bottom: 8px;
}
.info-item p {
    color: #6c757d;
    line-height: 1.4;
}
.result-card {
    background: white;
    border: 1px solid #e9ecef;
    border-left: 4px solid #6c757d;
    border-radius: 8px;
    padding: 15px;
}
.result-header {
    display: flex;
    justify-content: space-between;
    align-items: center;
    gap: 10px;
    margin-bottom: 10px;
}
.status-badge {
    padding: 4px 10px;
    border-radius: 12px;
    font-size: 0.8em;
    font-weight: 600;
    display: inline-block;
}
.status-passed { background: #d4edda; color: #155724; }
.status-failed { background: #f8d7da; color: #721c24; }
.status-skipped { background: #fff3cd; color: #856404; }
.status-pending { background: #d1ecf1; color: #0c5460; }
.status-unknown { background: #e2e3e5; color: #6c757d; }
.tag {
    background: #007bff;
    color: white;
    padding: 2px 6px;
    border-radius: 8px;
    font-size: 0.75em;
    margin: 2px;
    display: inline-block;
}
.muted {
    color: #6c757d;
}
.result-meta {
    display: flex;
    gap: 15px;
    color: #6c757d;
    font-size: 0.9em;
    margin-top: 10px;
    flex-wrap: wrap;
}
.validations {
    margin-top: 10px;
    padding: 8px;
    background: #d4edda;
    border-radius: 6px;
    font-size: 0.9em;
    color: #155724;
}
.error-info {
    margin-top: 10px;
    padding: 8px;
    background: #f8d7da;
    border-radius: 6px;
    font-size: 0.9em;
    color: #721c24;
    font-family: monospace;
    white-space: pre-wrap;
}
.step-item {
    padding: 10px;
    border: 1px solid #e9ecef;
    border-radius: 8px;
    margin-bottom: 8px;
    background: #f8f9fa;
}
.step-item.step-failed {
    background: #f8d7da;
}
.step-number {
    color: white;
    padding: 4px 8px;
    border-radius: 50%;
    font-size: 0.8em;
    font-weight: bold;
    margin-right: 10px;
}
.step-text {
    font-weight: 500;
    color: #495057;
}
.step-description {
    color: #6c757d;
    font-size: 0.9em;
    margin: 6px 0 0 34px;
}
.mini-steps {
    margin-top: 12px;
    padding: 10px;
    background: #f8f9fa;
    border-radius: 8px;
    border-left: 3px solid #007bff;
    font-size: 0.85em;
}
.mini-steps h5 {
    color: #495057;
    margin-bottom: 6px;
}
.footer {
    text-align: center;
    color: #6c757d;
    margin-top: 40px;
    padding: 20px;
    background: white;
    border-radius: 12px;
}
"""


def generate_html_report(
    variant: ReportVariant, config: ReportConfig, timestamp: str
) -> str:
    """Render the document for any report variant.

    Args:
        variant: Dispatched variant.
        config: Effective report configuration.
        timestamp: Invocation timestamp, embedded in the document.

    Returns:
        Complete HTML string.
    """
    if isinstance(variant, SuiteRun):
        return build_suite_report(variant, config, timestamp)
    if isinstance(variant, BatchTests):
        return build_batch_report(variant, config, timestamp)
    return build_single_report(variant, config, timestamp)


def build_single_report(
    variant: SingleTest, config: ReportConfig, timestamp: str
) -> str:
    """Render the report for one test case."""
    test_case = variant.test_case
    execution = variant.execution
    status = normalize_status(execution.get("status"))
    name = _display(test_case.get("name"), "Unnamed Test")
    steps = _as_list(test_case.get("steps"))
    tags = _as_list(test_case.get("tags"))
    accent = status_accent(status)

    parts: list[str] = []
    parts.append(_render_header(
        status,
        "Test Case Report",
        [
            f"Test: {name}",
            f"Environment: {_escape(config.environment)}",
            f"Generated: {_escape(timestamp)}",
        ],
    ))

    parts.append('<div class="stats-grid">')
    parts.append(_render_stat_card(
        "📊 Status", status_icon(status), _render_badge(status), accent,
    ))
    parts.append(_render_stat_card("📝 Steps", str(len(steps)), "Total Steps", accent))
    parts.append(_render_stat_card(
        "⏱️ Duration", format_duration(execution.get("duration")), "Seconds", accent,
    ))
    parts.append(_render_stat_card("🏷️ Tags", str(len(tags)), "Test Tags", accent))
    parts.append("</div>")

    parts.append('<div class="section test-info">')
    parts.append("<h2>📋 Test Information</h2>")
    parts.append('<div class="info-grid">')
    parts.append(_render_info_item("Test Name", f"<p>{name}</p>"))
    parts.append(_render_info_item(
        "Description",
        f"<p>{_display(test_case.get('description'), 'No description')}</p>",
    ))
    parts.append(_render_info_item("Tags", f"<div>{_render_tags(tags)}</div>"))
    parts.append(_render_info_item(
        "Environment", f"<p>{_escape(config.environment)}</p>",
    ))
    parts.append("</div>")
    parts.append("</div>")

    error = execution.get("error")
    if status == "failed" and error:
        parts.append('<div class="section error-section">')
        parts.append("<h2>❌ Error Details</h2>")
        parts.append(f'<div class="error-info">{_escape(error)}</div>')
        parts.append("</div>")

    if config.detailed:
        failed_index = execution.get("failedStepIndex")
        if isinstance(failed_index, bool) or not isinstance(failed_index, int):
            failed_index = None
        parts.append(_render_detailed_steps(steps, failed_index))

    return _render_document(
        title=f"Test Report - {name}",
        body="\n".join(parts),
        footer_lines=[
            f"Test: {name} | Environment: {_escape(config.environment)}",
            f"Generated on {_escape(timestamp)}",
        ],
        data={
            "testCase": test_case,
            "execution": execution,
            "config": config.config,
            "timestamp": timestamp,
        },
    )


def build_batch_report(
    variant: BatchTests, config: ReportConfig, timestamp: str
) -> str:
    """Render the report for several test cases from one execution."""
    test_cases = variant.test_cases
    results = variant.test_results
    execution = variant.execution
    statuses = [normalize_status((r or {}).get("status")) for r in results]
    summary = summarize(statuses)
    total = summary["total"]
    accent = status_accent(summary["status"])

    duration = execution.get("duration")
    if format_duration(duration) == DURATION_PLACEHOLDER:
        duration = sum_durations((r or {}).get("duration") for r in results)

    parts: list[str] = []
    parts.append(_render_header(
        summary["status"],
        "Batch Test Report",
        [
            f"Environment: {_escape(config.environment)}",
            f"Tests: {total}",
            f"Success: {summary['percentage']}%",
            f"Generated: {_escape(timestamp)}",
        ],
    ))

    parts.append('<div class="stats-grid">')
    parts.append(_render_stat_card(
        "📊 Overall", f"{summary['percentage']}%", "Success Rate", accent,
    ))
    parts.append(_render_stat_card(
        "✅ Passed", str(summary["passed"]), f"out of {total}", accent,
    ))
    parts.append(_render_stat_card(
        "❌ Failed", str(summary["failed"]), f"out of {total}", accent,
    ))
    parts.append(_render_stat_card(
        "⏱️ Duration", format_duration(duration), "Seconds", accent,
    ))
    parts.append("</div>")

    parts.append('<div class="section test-cases">')
    parts.append("<h2>📋 Test Cases</h2>")
    parts.append('<div class="cards-grid">')
    for index, (test_case, result) in enumerate(zip(test_cases, results)):
        result = result or {}
        steps_detail = result.get("steps_detail")
        if steps_detail is None:
            steps_detail = test_case.get("steps")
        step_count = len(_as_list(test_case.get("steps")))
        parts.append(_render_result_card(
            name=_display(test_case.get("name"), f"Test {index + 1}"),
            status=statuses[index],
            description=test_case.get("description"),
            tags=_as_list(test_case.get("tags")),
            step_count=step_count,
            result=result,
            steps_detail=_as_list(steps_detail) if config.detailed else [],
        ))
    parts.append("</div>")
    parts.append("</div>")

    run_name = _display(execution.get("name"), "Test Execution")
    return _render_document(
        title=f"Batch Test Report - {run_name}",
        body="\n".join(parts),
        footer_lines=[
            f"Execution: {run_name} | Environment: {_escape(config.environment)}",
            f"Generated on {_escape(timestamp)}",
        ],
        data={
            "testCases": test_cases,
            "execution": execution,
            "config": config.config,
            "timestamp": timestamp,
        },
    )


def build_suite_report(
    variant: SuiteRun, config: ReportConfig, timestamp: str
) -> str:
    """Render the report for a suite run."""
    suite = variant.suite
    results = variant.results
    statuses = [normalize_status(r.get("status")) for r in results]
    summary = summarize(statuses)
    total = summary["total"]
    accent = status_accent(summary["status"])
    suite_name = _display(suite.get("name"), "Unnamed Suite")

    parts: list[str] = []
    parts.append(_render_header(
        summary["status"],
        "Test Suite Report",
        [
            f"Suite: {suite_name}",
            f"Environment: {_escape(config.environment)}",
            f"Generated: {_escape(timestamp)}",
        ],
    ))

    parts.append('<div class="stats-grid">')
    parts.append(_render_stat_card(
        "📊 Suite Status", f"{summary['percentage']}%", "Success Rate", accent,
    ))
    parts.append(_render_stat_card(
        "✅ Passed", str(summary["passed"]), "Test Cases", accent,
    ))
    parts.append(_render_stat_card(
        "❌ Failed", str(summary["failed"]), "Test Cases", accent,
    ))
    parts.append(_render_stat_card("📝 Total", str(total), "Test Cases", accent))
    parts.append("</div>")

    parts.append('<div class="section suite-info">')
    parts.append("<h2>📋 Suite Information</h2>")
    parts.append('<div class="info-grid">')
    parts.append(_render_info_item("Suite Name", f"<p>{suite_name}</p>"))
    parts.append(_render_info_item(
        "Description",
        f"<p>{_display(suite.get('description'), 'No description')}</p>",
    ))
    parts.append(_render_info_item(
        "Environment", f"<p>{_escape(config.environment)}</p>",
    ))
    parts.append(_render_info_item("Total Tests", f"<p>{total}</p>"))
    parts.append("</div>")
    parts.append("</div>")

    parts.append('<div class="section test-results">')
    parts.append("<h2>📊 Test Results</h2>")
    parts.append('<div class="cards-grid">')
    for index, result in enumerate(results):
        parts.append(_render_result_card(
            name=_display(result.get("testName"), "Unnamed Test"),
            status=statuses[index],
            description=result.get("description"),
            tags=_as_list(result.get("tags")),
            step_count=_step_count(result.get("steps")),
            result=result,
            steps_detail=(
                _as_list(result.get("steps_detail")) if config.detailed else []
            ),
        ))
    parts.append("</div>")
    parts.append("</div>")

    return _render_document(
        title=f"Suite Report - {suite_name}",
        body="\n".join(parts),
        footer_lines=[
            f"Suite: {suite_name} | Environment: {_escape(config.environment)}",
            f"Generated on {_escape(timestamp)}",
        ],
        data={
            "suite": suite,
            "results": results,
            "config": config.config,
            "timestamp": timestamp,
        },
    )


def _escape(value: Any) -> str:
    return html.escape(str(value))


def _display(value: Any, default: str) -> str:
    """Escaped display text, or the default for empty values."""
    if value is None or value == "":
        return html.escape(default)
    return _escape(value)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _step_count(steps: Any) -> int:
    """Steps may be given as a count or as the step list itself."""
    if isinstance(steps, bool):
        return 0
    if isinstance(steps, int):
        return max(steps, 0)
    return len(_as_list(steps))


def _embed_data(data: dict[str, Any]) -> str:
    """Serialize report data for an inline script element."""
    payload = json.dumps(data, ensure_ascii=False, default=str)
    # No "<" may survive, or "</script>" inside a value would end the element
    return payload.replace("<", "\\u003c")


def _render_document(
    title: str,
    body: str,
    footer_lines: list[str],
    data: dict[str, Any],
) -> str:
    """Wrap rendered sections into a complete HTML document."""
    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('<meta charset="UTF-8">')
    parts.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
    parts.append(f"<title>{title}</title>")
    parts.append(f"<style>{_CSS}</style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append('<div class="container">')
    parts.append(body)
    parts.append('<div class="footer">')
    parts.append(f"<strong>{FOOTER_CREDIT}</strong><br>")
    parts.append("<br>\n".join(footer_lines))
    parts.append("</div>")
    parts.append("</div>")
    parts.append(f"<script>window.reportData = {_embed_data(data)};</script>")
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts)


def _render_header(status: str, heading: str, subtitle_items: list[str]) -> str:
    """Render the colored banner; subtitle items must already be escaped."""
    return "\n".join([
        f'<div class="header" style="background: linear-gradient(135deg, '
        f'{status_color(status)});">',
        f'<h1><span class="icon">{status_icon(status)}</span> {heading}</h1>',
        f'<div class="subtitle">{" | ".join(subtitle_items)}</div>',
        "</div>",
    ])


def _render_stat_card(title: str, number: str, label: str, accent: str) -> str:
    return (
        f'<div class="stat-card" style="border-left-color:{accent}">'
        f"<h3>{title}</h3>"
        f'<div class="stat-number" style="color:{accent}">{number}</div>'
        f'<div class="stat-label">{label}</div>'
        "</div>"
    )


def _render_badge(status: str) -> str:
    return (
        f'<span class="status-badge status-{status}">'
        f"{status.upper()}</span>"
    )


def _render_info_item(heading: str, content: str) -> str:
    return f'<div class="info-item"><h4>{heading}</h4>{content}</div>'


def _render_tags(tags: list[Any]) -> str:
    if not tags:
        return '<span class="muted">No tags</span>'
    return "".join(f'<span class="tag">{_escape(tag)}</span>' for tag in tags)


def _step_text(step: Any) -> tuple[str, str | None]:
    """Split a step into escaped action text and optional description."""
    if isinstance(step, Mapping):
        action = _display(step.get("action"), "Unknown step")
        description = step.get("description")
        return action, _escape(description) if description else None
    if step is None:
        return html.escape("Unknown step"), None
    return _escape(step), None


def _render_detailed_steps(steps: list[Any], failed_index: int | None) -> str:
    """Render the expanded step-by-step section."""
    parts: list[str] = ['<div class="section steps-detail">']
    parts.append("<h2>📝 Detailed Steps</h2>")
    if not steps:
        parts.append('<p class="muted">No steps defined</p>')
    for index, step in enumerate(steps):
        failed = index == failed_index
        action, description = _step_text(step)
        number_color = status_accent("failed" if failed else "passed")
        css_class = "step-item step-failed" if failed else "step-item"
        parts.append(f'<div class="{css_class}">')
        parts.append(
            f'<span class="step-number" style="background:{number_color}">'
            f"{index + 1}</span>"
            f'<span class="step-text">{action}</span>'
        )
        if description:
            parts.append(f'<div class="step-description">{description}</div>')
        parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)


def _render_mini_steps(steps: list[Any]) -> str:
    """Compact step list shown inside a result card."""
    parts: list[str] = ['<div class="mini-steps">', "<h5>📝 Test Steps:</h5>"]
    for index, step in enumerate(steps):
        action, _ = _step_text(step)
        parts.append(f"<div>{index + 1}. {action}</div>")
    parts.append("</div>")
    return "\n".join(parts)


def _render_result_card(
    name: str,
    status: str,
    description: Any,
    tags: list[Any],
    step_count: int,
    result: dict[str, Any],
    steps_detail: list[Any],
) -> str:
    """Render one test card for batch and suite reports."""
    parts: list[str] = []
    parts.append(
        f'<div class="result-card {status}" '
        f'style="border-left-color:{status_accent(status)}">'
    )
    parts.append(
        f'<div class="result-header"><h4>{status_icon(status)} {name}</h4>'
        f"{_render_badge(status)}</div>"
    )
    parts.append(f'<p class="muted">{_display(description, "No description")}</p>')
    if tags:
        parts.append(f'<div class="tags">{_render_tags(tags)}</div>')

    duration = format_duration(result.get("duration"))
    if duration != DURATION_PLACEHOLDER:
        duration += "s"
    meta = [f"<span>Steps: {step_count}</span>", f"<span>Duration: {duration}</span>"]
    if result.get("features"):
        meta.append(f"<span>Features: {_escape(result['features'])}</span>")
    if result.get("sessionOptimized"):
        meta.append("<span>🚀 Session Optimized</span>")
    parts.append(f'<div class="result-meta">{"".join(meta)}</div>')

    validations = result.get("validations")
    if validations:
        if isinstance(validations, (list, tuple)):
            validations = ", ".join(str(v) for v in validations)
        parts.append(
            f'<div class="validations"><strong>Validations:</strong> '
            f"{_escape(validations)}</div>"
        )
    if result.get("error"):
        parts.append(
            f'<div class="error-info"><strong>Error:</strong> '
            f"{_escape(result['error'])}</div>"
        )
    if steps_detail:
        parts.append(_render_mini_steps(steps_detail))

    parts.append("</div>")
    return "\n".join(parts)
