"""Centralized path and default helpers.

Environment-first, with fallbacks that still work when installed as a
package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

DEFAULT_CELLS = 8


def _find_git_root(start: Path) -> Path | None:
    # at most five levels up
    candidates = [start, *start.parents][:5]
    return next((p for p in candidates if (p / ".git").exists()), None)


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var RINGTOE_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("RINGTOE_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def data_dir() -> Path:
    p = os.getenv("RINGTOE_DATA_DIR")
    return Path(p) if p else repo_root() / "data"


def default_cells() -> int:
    """Ring size used when the CLI is not given one (RINGTOE_CELLS, else 8)."""
    raw = os.getenv("RINGTOE_CELLS")
    if not raw:
        return DEFAULT_CELLS
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"RINGTOE_CELLS must be an integer, got {raw!r}") from None


def _git(*args: str) -> str | None:
    """Output of a git command run against repo_root(), or None outside a work tree."""
    try:
        return subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        ).strip()
    except (OSError, subprocess.SubprocessError):
        return None


def get_git_commit() -> str | None:
    return _git("rev-parse", "HEAD") or None


def get_git_is_dirty() -> bool | None:
    status = _git("status", "--porcelain")
    return None if status is None else bool(status)
