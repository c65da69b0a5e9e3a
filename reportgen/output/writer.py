"""Persisting report documents."""

from __future__ import annotations

from pathlib import Path

from reportgen.errors import ReportWriteError


def ensure_directory(directory: Path) -> None:
    """Create a directory and its parents; existing directories are fine."""
    directory.mkdir(parents=True, exist_ok=True)


def write_report(directory: Path, file_name: str, content: str) -> Path:
    """Write an HTML document into the output directory.

    Args:
        directory: Output directory, created if missing.
        file_name: Artifact file name.
        content: Complete HTML document.

    Returns:
        Absolute path of the written file.

    Raises:
        ReportWriteError: Wrapping any filesystem failure.
    """
    output_path = (directory / file_name).absolute()
    try:
        ensure_directory(output_path.parent)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, ValueError) as e:
        raise ReportWriteError(str(e)) from e
    return output_path
