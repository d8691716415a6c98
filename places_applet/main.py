"""
Entry point for the places applet.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Iterable, Tuple

from PySide6.QtCore import QDir, QLockFile
from PySide6.QtWidgets import QApplication

from places_applet import logger as app_logger

_LOGGER = app_logger.get_logger()
_LOCK_NAME = "places-applet.lock"
_INITIAL_BACKOFF_SECONDS = 2
_MAX_BACKOFF_SECONDS = 30


class _InstanceGuard:
    """Lock file guard preventing a second applet in the same session."""

    def __init__(self, path: Path) -> None:
        self._lock = QLockFile(str(path))
        self._lock.setStaleLockTime(0)

    def acquire(self) -> bool:
        return self._lock.tryLock(100)

    def release(self) -> None:
        if self._lock.isLocked():
            self._lock.unlock()


def _next_backoff(current: int) -> int:
    """Double the restart delay, capped at the maximum."""
    return min(current * 2, _MAX_BACKOFF_SECONDS)


def _run_application_once(argv: Iterable[str]) -> Tuple[int, bool]:
    """Start the Qt application once and report whether shutdown was intentional."""
    from places_core.app import AppCoordinator
    from places_core.config_sync import load_initial_state

    app = QApplication.instance() or QApplication(list(argv))
    app.setQuitOnLastWindowClosed(False)
    coordinator = AppCoordinator(load_initial_state())
    coordinator.start()
    exit_code = app.exec()
    return exit_code, coordinator.manual_shutdown_requested


def main() -> int:
    """Launch the applet with single-instance and restart safeguards."""
    guard = _InstanceGuard(Path(QDir.tempPath()) / _LOCK_NAME)
    if not guard.acquire():
        _LOGGER.debug("Places applet already running; exiting silently.")
        return 0

    backoff_seconds = _INITIAL_BACKOFF_SECONDS

    try:
        while True:
            try:
                exit_code, manual = _run_application_once(sys.argv)
            except Exception:  # pragma: no cover - crash guard
                _LOGGER.exception("Applet crashed; attempting automatic recovery.")
                exit_code = 1
                manual = False

            if manual:
                return exit_code

            _LOGGER.warning(
                "Applet exited unexpectedly (code={}). Restarting in {} seconds.",
                exit_code,
                backoff_seconds,
            )
            time.sleep(backoff_seconds)
            backoff_seconds = _next_backoff(backoff_seconds)
    finally:
        guard.release()


if __name__ == "__main__":
    raise SystemExit(main())
