"""Timestamp and artifact file naming.

The millisecond timestamp is the only collision guard between two runs
writing to the same directory.
"""

from __future__ import annotations

import datetime
import re

from reportgen.rendering.variants import ReportVariant

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"

_UNSAFE_RE = re.compile(r"[^\w.\-]+")
_DASHES_RE = re.compile(r"-{2,}")

# Stem cap in UTF-8 bytes; most filesystems limit names to 255 bytes
MAX_STEM_BYTES = 100


def generate_timestamp(now: datetime.datetime | None = None) -> str:
    """Format a local timestamp as ``YYYY-MM-DD-HH-mm-ss-SSS``."""
    if now is None:
        now = datetime.datetime.now()
    return f"{now.strftime(TIMESTAMP_FORMAT)}-{now.microsecond // 1000:03d}"


def _strip_yaml_suffix(name: str) -> str:
    for suffix in (".yml", ".yaml"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def sanitize_name(name: str) -> str:
    """Make a display name safe to embed in a file name."""
    cleaned = _UNSAFE_RE.sub("-", name.strip())
    cleaned = _DASHES_RE.sub("-", cleaned).strip("-.")
    if len(cleaned.encode("utf-8")) > MAX_STEM_BYTES:
        cut = cleaned.encode("utf-8")[:MAX_STEM_BYTES]
        cleaned = cut.decode("utf-8", errors="ignore").rstrip("-.")
    return cleaned


def report_file_name(variant: ReportVariant, timestamp: str) -> str:
    """Derive the artifact file name for a variant.

    Args:
        variant: The dispatched report variant.
        timestamp: Invocation timestamp from generate_timestamp().

    Returns:
        ``test-<name>-<ts>.html``, ``test-batch-<ts>.html`` or
        ``suite-<name>-<ts>.html``.
    """
    if variant.kind == "batch":
        return f"test-batch-{timestamp}.html"

    if variant.kind == "suite":
        raw = _strip_yaml_suffix(variant.name or "unnamed-suite")
        stem = sanitize_name(re.sub(r"\s+", "-", raw).lower()) or "unnamed-suite"
        return f"suite-{stem}-{timestamp}.html"

    raw = _strip_yaml_suffix(variant.name or "unnamed-test")
    stem = sanitize_name(raw) or "unnamed-test"
    return f"test-{stem}-{timestamp}.html"
