"""Centralized workspace path management.

All tool-managed artifacts go under var/ (configurable via SPLITVERIFY_WORKDIR).
Each helper takes an optional Settings so a run loaded with --config resolves
against its own workdir; the process-wide SETTINGS is used otherwise.
"""

from pathlib import Path
from typing import Optional

from .config import SETTINGS, Settings

# Working directory the tool was started from
ROOT = Path.cwd()


def workdir(settings: Optional[Settings] = None) -> Path:
    """Tool-managed workspace directory (default: var/)"""
    return ROOT / (settings or SETTINGS).SPLITVERIFY_WORKDIR


def runs(settings: Optional[Settings] = None) -> Path:
    """Runs artifact directory (default: var/runs/)"""
    return workdir(settings) / "runs"


def logs(settings: Optional[Settings] = None) -> Path:
    """Log files directory (default: var/logs/)"""
    return workdir(settings) / "logs"


def ensure_all() -> None:
    """Create all workspace directories if they don't exist."""
    for dir_path in [workdir(), runs(), logs()]:
        dir_path.mkdir(parents=True, exist_ok=True)
