"""Report generation pipeline.

Runs one best-effort pass per invocation: load, validate, dispatch,
render, write, then refresh the latest pointer. Validation always
completes before anything is rendered or written, so a rejected payload
leaves nothing on disk.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reportgen.config import ReportConfig, apply_environment
from reportgen.errors import ReportError, ReportWriteError
from reportgen.loading.loader import read_data_file
from reportgen.loading.validation import parse_request
from reportgen.output.latest_link import LinkResult, update_latest_link
from reportgen.output.naming import generate_timestamp, report_file_name
from reportgen.output.writer import write_report
from reportgen.rendering.html_reporter import generate_html_report
from reportgen.rendering.variants import dispatch


@dataclass
class ReportArtifact:
    """A successfully written report."""

    report_path: Path
    file_name: str
    latest_link: Path
    link: LinkResult
    kind: str  # single, batch, suite


@dataclass
class GenerationOutcome:
    """Result of one pipeline run: an artifact or a terminal error."""

    artifact: ReportArtifact | None = None
    error: ReportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.artifact is not None

    @property
    def degraded(self) -> bool:
        """True when the report was written but the pointer fell back."""
        return self.ok and self.artifact.link.degraded


class ReportEngine:
    """Generates HTML report artifacts from report request payloads.

    Args:
        project_root: Base directory for relative data and output paths
            (default: cwd).
        ambient: Process-level settings consulted after the request's own
            overrides, e.g. ``os.environ``. Never modified.
    """

    def __init__(
        self,
        project_root: Path | None = None,
        ambient: Mapping[str, str] | None = None,
    ) -> None:
        self.project_root = (project_root or Path.cwd()).resolve()
        self.ambient: Mapping[str, str] = dict(ambient or {})

    def read_data_file(self, data_path: str | Path) -> Any:
        """Load a payload from a data file (see loading.loader)."""
        return read_data_file(data_path, self.project_root, self.ambient)

    def generate_report(
        self, data: Any, timestamp: str | None = None
    ) -> ReportArtifact:
        """Render and write the report for a parsed payload.

        Args:
            data: Parsed ``ReportRequest`` payload.
            timestamp: Override for the invocation timestamp; generated
                once when omitted and shared by file name and document.

        Returns:
            The written artifact.

        Raises:
            MissingFieldsError, InvalidReportTypeError: On invalid payloads.
            ReportWriteError: If the document cannot be written.
        """
        request = parse_request(data)

        try:
            overrides = apply_environment(request.environment)
            config = ReportConfig(request.config, overrides)
            variant = dispatch(request)

            if timestamp is None:
                timestamp = generate_timestamp()
            file_name = report_file_name(variant, timestamp)
            content = generate_html_report(variant, config, timestamp)

            output_dir = config.output_root(self.project_root, self.ambient)
            report_path = write_report(output_dir, file_name, content)
        except ReportError:
            raise
        except Exception as e:
            # Anything past validation is reported as a generation failure
            raise ReportWriteError(str(e)) from e

        link = update_latest_link(report_path, variant.latest_name)

        return ReportArtifact(
            report_path=report_path,
            file_name=file_name,
            latest_link=link.path,
            link=link,
            kind=variant.kind,
        )

    def run(self, data_path: str | Path) -> GenerationOutcome:
        """Load a data file and generate its report.

        Named report errors are returned in the outcome rather than raised.

        Args:
            data_path: Path to the JSON or YAML data file.

        Returns:
            GenerationOutcome with either the artifact or the error.
        """
        try:
            data = self.read_data_file(data_path)
            artifact = self.generate_report(data)
        except ReportError as e:
            return GenerationOutcome(error=e)
        return GenerationOutcome(artifact=artifact)


def generate_report(
    data: Any,
    project_root: Path | None = None,
    ambient: Mapping[str, str] | None = None,
) -> ReportArtifact:
    """Generate a report for a parsed payload with a one-off engine."""
    return ReportEngine(project_root, ambient).generate_report(data)
