# tests/conftest.py

import os
import tempfile
from pathlib import Path

# Qt must not try to reach a display, and test runs must not write into the user's log dir.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("PLACES_APPLET_LOG_DIR", tempfile.mkdtemp(prefix="places-applet-logs-"))

import pytest
from PySide6.QtWidgets import QApplication

from places_core.special_dirs import SpecialDirectoryTable, WellKnownDir

HOME = Path("/home/alice")


class FakeProbe:
    """Filesystem probe answering from fixed sets of directories and files."""

    def __init__(self, dirs=(), files=()):
        self.dirs = {Path(p) for p in dirs}
        self.files = {Path(p) for p in files}

    def exists(self, path):
        return Path(path) in self.dirs or Path(path) in self.files

    def is_dir(self, path):
        return Path(path) in self.dirs


@pytest.fixture(scope="session")
def qapp():
    """Creates a QApplication instance for the test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def standard_dirs():
    return {
        WellKnownDir.HOME: HOME,
        WellKnownDir.DOCUMENTS: HOME / "Documents",
        WellKnownDir.DOWNLOADS: HOME / "Downloads",
        WellKnownDir.MUSIC: HOME / "Music",
        WellKnownDir.PICTURES: HOME / "Pictures",
        WellKnownDir.VIDEOS: HOME / "Videos",
        WellKnownDir.DESKTOP: HOME / "Desktop",
        WellKnownDir.ROOT: Path("/"),
    }


@pytest.fixture
def table(standard_dirs):
    return SpecialDirectoryTable.build(standard_dirs.get)


@pytest.fixture
def probe(standard_dirs):
    return FakeProbe(dirs=standard_dirs.values())
