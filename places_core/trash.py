"""
Trash state query for the freedesktop home trash.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QStandardPaths

from places_applet import logger as app_logger

_LOGGER = app_logger.get_logger()


def home_trash_dir() -> Path:
    data_home = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
    if not data_home:
        data_home = str(Path.home() / ".local" / "share")
    return Path(data_home) / "Trash" / "files"


def is_trash_non_empty(trash_dir: Optional[Path] = None) -> bool:
    """Return whether the trash holds anything. Any failure counts as empty."""
    target = trash_dir or home_trash_dir()
    try:
        return next(target.iterdir(), None) is not None
    except OSError as exc:
        _LOGGER.debug("Trash query failed for {}: {}", target, exc)
        return False
