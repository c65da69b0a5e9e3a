"""Stable "latest report" pointer management.

The pointer is a relative symbolic link next to the artifact. Where links
cannot be created, a small redirect document is written instead. Nothing in
this module raises: the artifact is already on disk, so pointer problems are
reported and the run carries on.
"""

from __future__ import annotations

import html
import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass
class LinkResult:
    """Outcome of updating a latest pointer."""

    mode: str  # symlink, redirect, failed
    path: Path
    reason: str = ""

    @property
    def degraded(self) -> bool:
        return self.mode != "symlink"


def render_redirect(file_name: str) -> str:
    """Standalone HTML document that redirects to ``file_name``."""
    target = html.escape(file_name, quote=True)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        f'    <meta http-equiv="refresh" content="0; url={target}">\n'
        "    <title>Redirecting...</title>\n"
        "</head>\n"
        "<body>\n"
        f'    <p>Redirecting to <a href="{target}">latest report</a>...</p>\n'
        "</body>\n"
        "</html>\n"
    )


def _remove_existing(link_path: Path) -> None:
    """Clear whatever currently sits at the pointer path."""
    if os.path.lexists(link_path):
        os.unlink(link_path)


def update_latest_link(artifact_path: Path, link_name: str) -> LinkResult:
    """Point ``link_name`` (beside the artifact) at the artifact.

    Args:
        artifact_path: Path of the freshly written report.
        link_name: Stable pointer file name, e.g. ``latest-test-report.html``.

    Returns:
        LinkResult describing which mechanism was used.
    """
    link_path = artifact_path.parent / link_name
    target = artifact_path.name

    try:
        _remove_existing(link_path)
    except OSError as e:
        print(f"latest link: could not remove {link_path}: {e}", file=sys.stderr)

    try:
        os.symlink(target, link_path)
        return LinkResult(mode="symlink", path=link_path)
    except (OSError, NotImplementedError) as e:
        link_error = str(e) or type(e).__name__

    # A stale link that could not be removed would redirect the write
    if os.path.islink(link_path):
        reason = f"symlink failed ({link_error}); stale link still present"
        print(f"latest link: {reason}", file=sys.stderr)
        return LinkResult(mode="failed", path=link_path, reason=reason)

    try:
        with open(link_path, "w", encoding="utf-8") as f:
            f.write(render_redirect(target))
    except OSError as e:
        reason = f"symlink failed ({link_error}); redirect failed ({e})"
        print(f"latest link: {reason}", file=sys.stderr)
        return LinkResult(mode="failed", path=link_path, reason=reason)

    print(
        f"latest link: symlink unavailable ({link_error}), "
        f"wrote redirect to {target}",
        file=sys.stderr,
    )
    return LinkResult(
        mode="redirect", path=link_path, reason=f"symlink failed: {link_error}"
    )
