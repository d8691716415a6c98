"""
Logging setup for the places applet.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False


def default_log_path() -> Path:
    """Return the log file location, honouring PLACES_APPLET_LOG_DIR and XDG_STATE_HOME."""
    override = os.environ.get("PLACES_APPLET_LOG_DIR")
    if override:
        return Path(override) / "applet.log"
    state_home = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(state_home) / "places-applet" / "applet.log"


def configure(log_path: Optional[Path] = None) -> None:
    """
    Configure loguru for the applet.

    Runs once per process: a console sink at INFO and a rotating file sink
    at DEBUG. A file sink that cannot be created is skipped so logging never
    prevents the applet from starting.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or default_log_path()

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level="INFO")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            target,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
        )
    except OSError as exc:
        _logger.warning("File logging disabled, cannot use {}: {}", target, exc)
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
