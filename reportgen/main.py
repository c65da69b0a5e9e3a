"""Entry point for report generation.

Reads a report request from a data file and writes the HTML report plus its
latest pointer. Exits non-zero when the data cannot be loaded or validated
or the report cannot be written.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from reportgen.engine import ReportEngine


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate an HTML test report from a JSON data file"
    )
    parser.add_argument(
        "--data",
        required=True,
        type=Path,
        help="Path to the JSON (or YAML) report data file",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Base directory for relative paths (default: current directory)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    engine = ReportEngine(args.project_root, ambient=os.environ)

    print(f"Reading data from: {args.data}")
    outcome = engine.run(args.data)
    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1

    artifact = outcome.artifact
    print(f"Report generated successfully: {artifact.report_path}")
    if artifact.link.mode == "symlink":
        print(f"Latest report link: {artifact.latest_link}")
    elif artifact.link.mode == "redirect":
        print(f"Latest report redirect: {artifact.latest_link}")
    else:
        print(f"Latest report not updated: {artifact.link.reason}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
