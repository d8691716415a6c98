"""
Launches the file manager for an activated entry.
"""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

from places_applet import logger as app_logger
from places_shared.config_schema import DEFAULT_FILE_MANAGER
from places_shared.places import Location, PathLocation, TrashLocation

_LOGGER = app_logger.get_logger()

TRASH_FLAG = "--trash"

Spawner = Callable[[Sequence[str]], object]


def spawn_detached(argv: Sequence[str]) -> subprocess.Popen:
    """Start ``argv`` in its own session without waiting for it."""
    return subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def location_argument(location: Location) -> str:
    if isinstance(location, TrashLocation):
        return TRASH_FLAG
    if isinstance(location, PathLocation):
        return str(location.path)
    raise TypeError(f"Unsupported location: {location!r}")


class ActionDispatcher:
    """Fire-and-forget launcher; failures are logged and dropped."""

    def __init__(self, file_manager: str = DEFAULT_FILE_MANAGER, spawner: Spawner = spawn_detached) -> None:
        self.file_manager = file_manager
        self._spawner = spawner

    def dispatch(self, location: Location) -> bool:
        argv = [self.file_manager, location_argument(location)]
        try:
            self._spawner(argv)
        except (OSError, subprocess.SubprocessError) as exc:
            _LOGGER.error("Failed to launch {}: {}", " ".join(argv), exc)
            return False
        _LOGGER.info("Launched {}", " ".join(argv))
        return True
