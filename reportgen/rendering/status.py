"""Status presentation and aggregation shared by all report variants."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

# Defined execution statuses
VALID_STATUSES = frozenset({
    "passed",
    "failed",
    "skipped",
    "pending",
    "unknown",
})

STATUS_ICONS: dict[str, str] = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
    "pending": "⏳",
}
UNKNOWN_ICON = "❓"

# Gradient stops embedded in linear-gradient(135deg, ...)
STATUS_COLORS: dict[str, str] = {
    "passed": "#28a745, #20c997",
    "failed": "#dc3545, #e74c3c",
}
NEUTRAL_COLOR = "#6c757d, #8d9498"

# Solid accent (first gradient stop) used for borders and numbers
STATUS_ACCENTS: dict[str, str] = {
    "passed": "#28a745",
    "failed": "#dc3545",
}
NEUTRAL_ACCENT = "#6c757d"

DURATION_PLACEHOLDER = "N/A"


def normalize_status(status: Any) -> str:
    """Map any value onto one of the five defined statuses."""
    if isinstance(status, str) and status in VALID_STATUSES:
        return status
    return "unknown"


def status_icon(status: Any) -> str:
    """Icon for a status; unrecognised values get the unknown icon."""
    if not isinstance(status, str):
        return UNKNOWN_ICON
    return STATUS_ICONS.get(status, UNKNOWN_ICON)


def status_color(status: Any) -> str:
    """Gradient stops for a status; anything but passed/failed is gray."""
    if not isinstance(status, str):
        return NEUTRAL_COLOR
    return STATUS_COLORS.get(status, NEUTRAL_COLOR)


def status_accent(status: Any) -> str:
    """Solid accent color for a status."""
    if not isinstance(status, str):
        return NEUTRAL_ACCENT
    return STATUS_ACCENTS.get(status, NEUTRAL_ACCENT)


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def duration_seconds(duration_ms: Any) -> float | None:
    """Convert milliseconds to seconds truncated to one decimal.

    Returns None for absent or non-numeric durations.
    """
    if not _is_number(duration_ms):
        return None
    try:
        return math.floor(duration_ms / 100) / 10
    except OverflowError:
        return None


def format_duration(duration_ms: Any) -> str:
    """Render a millisecond duration as seconds (``30``, ``1.5``).

    Absent durations render as a placeholder rather than ``0``.
    """
    seconds = duration_seconds(duration_ms)
    if seconds is None:
        return DURATION_PLACEHOLDER
    if seconds.is_integer():
        return str(int(seconds))
    return f"{seconds:.1f}"


def sum_durations(durations: Iterable[Any]) -> float | None:
    """Sum the numeric durations, or None when there are none."""
    numeric = [d for d in durations if _is_number(d)]
    if not numeric:
        return None
    return sum(numeric)


def pass_percentage(passed: int, total: int) -> int:
    """Percentage of passed entries, rounded; ``0/0`` is ``0``."""
    if total <= 0:
        return 0
    # Round half up: 12.5 -> 13
    return int(math.floor(passed / total * 100 + 0.5))


def count_statuses(statuses: Iterable[Any]) -> dict[str, int]:
    """Count normalized statuses.

    Returns:
        Dict with a key per defined status plus ``total``.
    """
    counts = {status: 0 for status in sorted(VALID_STATUSES)}
    total = 0
    for status in statuses:
        counts[normalize_status(status)] += 1
        total += 1
    counts["total"] = total
    return counts


def aggregate_status(statuses: list[Any]) -> str:
    """Compute the overall status of a result sequence.

    Any failure makes the whole sequence ``failed``; a non-empty sequence
    where everything passed is ``passed``; anything else is ``unknown``.
    """
    normalized = [normalize_status(s) for s in statuses]
    if any(s == "failed" for s in normalized):
        return "failed"
    if normalized and all(s == "passed" for s in normalized):
        return "passed"
    return "unknown"


def summarize(statuses: list[Any]) -> dict[str, Any]:
    """Aggregate a status sequence for a report header.

    Returns:
        Dict with per-status counts, ``total``, ``percentage`` and the
        aggregate ``status``.
    """
    counts = count_statuses(statuses)
    summary: dict[str, Any] = dict(counts)
    summary["percentage"] = pass_percentage(counts["passed"], counts["total"])
    summary["status"] = aggregate_status(statuses)
    return summary
