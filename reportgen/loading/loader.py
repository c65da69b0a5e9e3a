"""Report data file loading.

Resolves a data source path against the project layout, reads it, and
parses it as JSON (or YAML for ``.yaml``/``.yml`` files). Missing files and
unparsable content fail loudly with the input error kinds.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from reportgen.config import REPORT_PATH_KEY
from reportgen.errors import DataFileNotFoundError, DataFileParseError

# Environment subdirectories searched under reports/ for relative paths
SEARCH_ENVIRONMENTS = ("dev", "test", "prod")

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def resolve_data_path(
    data_path: str | Path,
    project_root: Path,
    ambient: Mapping[str, str] | None = None,
) -> Path:
    """Resolve a data source to an absolute path.

    Absolute paths are returned unchanged. Relative paths are tried against
    the project root, the report output root, and each ``reports/<env>``
    directory in turn; the first existing candidate wins.

    Args:
        data_path: Path given by the caller.
        project_root: Base directory for relative paths.
        ambient: Optional mapping consulted for ``REPORT_PATH``.

    Returns:
        Absolute path. When no candidate exists, the project-root join is
        returned so the caller can report it.
    """
    path = Path(data_path)
    if path.is_absolute():
        return path

    root_candidate = project_root / path
    if root_candidate.exists():
        return root_candidate

    report_root = Path((ambient or {}).get(REPORT_PATH_KEY) or "reports/dev")
    if not report_root.is_absolute():
        report_root = project_root / report_root
    candidates = [report_root / path]
    candidates.extend(
        project_root / "reports" / env / path for env in SEARCH_ENVIRONMENTS
    )
    for candidate in candidates:
        if candidate.exists():
            return candidate

    return root_candidate


def read_data_file(
    data_path: str | Path,
    project_root: Path | None = None,
    ambient: Mapping[str, str] | None = None,
) -> Any:
    """Read and parse a report data file.

    Args:
        data_path: Explicit path to the data file.
        project_root: Base directory for relative paths (default: cwd).
        ambient: Optional mapping consulted for ``REPORT_PATH``.

    Returns:
        The parsed payload.

    Raises:
        DataFileNotFoundError: If the resolved path does not exist.
        DataFileParseError: If the file cannot be read or parsed.
    """
    root = (project_root or Path.cwd()).resolve()
    full_path = resolve_data_path(data_path, root, ambient)

    if not full_path.exists():
        raise DataFileNotFoundError(full_path)

    try:
        content = full_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileParseError(full_path, str(e)) from e

    if full_path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DataFileParseError(full_path, f"invalid YAML: {e}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise DataFileParseError(full_path, f"invalid JSON: {e}") from e
