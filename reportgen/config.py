"""Report rendering configuration and output location.

Reads the optional ``config`` and ``environment`` sections of a report
request. Environment overrides are kept as an immutable mapping and passed
explicitly to whoever needs them; nothing here touches ``os.environ``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "environment": "dev",
    "reportStyle": "overview",
    "reportFormat": "html",
    "reportPath": None,
}

REPORT_STYLES = frozenset({"overview", "detailed"})

# Environment key that overrides the output root directory
REPORT_PATH_KEY = "REPORT_PATH"


def apply_environment(environment: Any) -> Mapping[str, str]:
    """Build an immutable override mapping from a request's environment.

    Args:
        environment: The request's ``environment`` value. ``None`` and
            non-mapping values are ignored.

    Returns:
        Read-only mapping of override keys to string values.
    """
    if not isinstance(environment, Mapping):
        return MappingProxyType({})
    return MappingProxyType({
        str(key): str(value)
        for key, value in environment.items()
        if value is not None
    })


class ReportConfig:
    """Rendering switches for a single report invocation.

    Values never influence pass/fail computation; they only select the
    view (``overview`` or ``detailed``), the labels shown in the document,
    and the output directory.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._overrides: Mapping[str, str] = overrides or MappingProxyType({})
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if isinstance(data, Mapping):
            self._data.update(
                {k: v for k, v in data.items() if v is not None}
            )
        # Environment name may come from the overrides when config is silent
        if not (isinstance(data, Mapping) and data.get("environment")):
            env_name = self._overrides.get("environment")
            if env_name:
                self._data["environment"] = env_name

    @property
    def config(self) -> dict[str, Any]:
        """Get the full effective configuration dict."""
        return dict(self._data)

    @property
    def overrides(self) -> Mapping[str, str]:
        """Get the environment overrides supplied with the request."""
        return self._overrides

    @property
    def environment(self) -> str:
        """Get the environment label (``dev``, ``test``, ...)."""
        return str(self._data.get("environment") or DEFAULT_CONFIG["environment"])

    @property
    def report_style(self) -> str:
        """Get the report style as given (``overview`` when unset)."""
        return str(self._data.get("reportStyle") or DEFAULT_CONFIG["reportStyle"])

    @property
    def detailed(self) -> bool:
        """True when the detailed step view was requested."""
        return self.report_style == "detailed"

    @property
    def report_path(self) -> str | None:
        """Get the explicitly configured output directory, if any."""
        val = self._data.get("reportPath")
        return str(val) if val else None

    def output_root(
        self,
        project_root: Path,
        ambient: Mapping[str, str] | None = None,
    ) -> Path:
        """Resolve the directory reports are written to.

        Precedence: ``config.reportPath``, the request's ``REPORT_PATH``
        override, ``REPORT_PATH`` from the caller-supplied ambient mapping,
        then ``reports/<environment>``. Relative results are joined to the
        project root.

        Args:
            project_root: Base directory for relative paths.
            ambient: Optional process-level mapping (the CLI passes
                ``os.environ``).

        Returns:
            Absolute output directory.
        """
        candidate = (
            self.report_path
            or self._overrides.get(REPORT_PATH_KEY)
            or (ambient or {}).get(REPORT_PATH_KEY)
            or f"reports/{self.environment}"
        )
        path = Path(candidate)
        if not path.is_absolute():
            path = project_root / path
        return path.resolve()
