"""
Well-known directory lookups and the path -> icon table built from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from PySide6.QtCore import QDir, QStandardPaths

from places_shared.places import FavoriteTag


class WellKnownDir(Enum):
    HOME = "home"
    DOCUMENTS = "documents"
    DOWNLOADS = "downloads"
    MUSIC = "music"
    PICTURES = "pictures"
    VIDEOS = "videos"
    DESKTOP = "desktop"
    PUBLIC = "public"
    TEMPLATES = "templates"
    ROOT = "root"


# (icon base name, display label)
_TABLE_SPEC: Dict[WellKnownDir, Tuple[str, str]] = {
    WellKnownDir.HOME: ("user-home", "Home"),
    WellKnownDir.DOCUMENTS: ("folder-documents", "Documents"),
    WellKnownDir.DOWNLOADS: ("folder-download", "Downloads"),
    WellKnownDir.MUSIC: ("folder-music", "Music"),
    WellKnownDir.PICTURES: ("folder-pictures", "Pictures"),
    WellKnownDir.VIDEOS: ("folder-videos", "Videos"),
    WellKnownDir.DESKTOP: ("user-desktop", "Desktop"),
    WellKnownDir.PUBLIC: ("folder-publicshare", "Public"),
    WellKnownDir.TEMPLATES: ("folder-templates", "Templates"),
    WellKnownDir.ROOT: ("drive-harddisk", "Filesystem"),
}

TAG_TO_DIR: Dict[FavoriteTag, WellKnownDir] = {
    FavoriteTag.HOME: WellKnownDir.HOME,
    FavoriteTag.DOCUMENTS: WellKnownDir.DOCUMENTS,
    FavoriteTag.DOWNLOADS: WellKnownDir.DOWNLOADS,
    FavoriteTag.MUSIC: WellKnownDir.MUSIC,
    FavoriteTag.PICTURES: WellKnownDir.PICTURES,
    FavoriteTag.VIDEOS: WellKnownDir.VIDEOS,
}

FOLDER_ICON = "folder"
FILE_ICON = "text-x-generic"
TRASH_ICON = "user-trash"
TRASH_FULL_ICON = "user-trash-full"

WellKnownQuery = Callable[[WellKnownDir], Optional[Path]]


def symbolic(icon: str) -> str:
    return f"{icon}-symbolic"


_STANDARD_LOCATIONS = {
    WellKnownDir.HOME: QStandardPaths.StandardLocation.HomeLocation,
    WellKnownDir.DOCUMENTS: QStandardPaths.StandardLocation.DocumentsLocation,
    WellKnownDir.DOWNLOADS: QStandardPaths.StandardLocation.DownloadLocation,
    WellKnownDir.MUSIC: QStandardPaths.StandardLocation.MusicLocation,
    WellKnownDir.PICTURES: QStandardPaths.StandardLocation.PicturesLocation,
    WellKnownDir.VIDEOS: QStandardPaths.StandardLocation.MoviesLocation,
    WellKnownDir.DESKTOP: QStandardPaths.StandardLocation.DesktopLocation,
    WellKnownDir.PUBLIC: QStandardPaths.StandardLocation.PublicShareLocation,
    WellKnownDir.TEMPLATES: QStandardPaths.StandardLocation.TemplatesLocation,
}


def query_well_known(kind: WellKnownDir) -> Optional[Path]:
    """Resolve a well-known directory through Qt's standard paths, or None."""
    if kind is WellKnownDir.ROOT:
        return Path(QDir.rootPath())
    location = QStandardPaths.writableLocation(_STANDARD_LOCATIONS[kind])
    if not location:
        return None
    return Path(location)


@dataclass(frozen=True)
class SpecialDir:
    kind: WellKnownDir
    path: Path
    icon: str
    label: str


class SpecialDirectoryTable:
    """
    Immutable lookup of well-known paths to icon names.

    Built once at startup from a well-known-directory query; directories the
    query cannot resolve are simply left out. When two kinds resolve to the
    same path (an unconfigured XDG dir falling back to home, say) the first
    kind in declaration order wins.
    """

    def __init__(self, entries: Dict[WellKnownDir, SpecialDir]) -> None:
        self._by_kind = dict(entries)
        by_path: Dict[Path, SpecialDir] = {}
        for kind in WellKnownDir:
            entry = self._by_kind.get(kind)
            if entry is not None and entry.path not in by_path:
                by_path[entry.path] = entry
        self._by_path = by_path

    @classmethod
    def build(cls, query: WellKnownQuery = query_well_known) -> "SpecialDirectoryTable":
        entries: Dict[WellKnownDir, SpecialDir] = {}
        for kind, (icon, label) in _TABLE_SPEC.items():
            path = query(kind)
            if path is None:
                continue
            entries[kind] = SpecialDir(kind=kind, path=Path(path), icon=icon, label=label)
        return cls(entries)

    def lookup(self, path: Path) -> Optional[str]:
        entry = self._by_path.get(Path(path))
        return entry.icon if entry else None

    def path_for(self, kind: WellKnownDir) -> Optional[Path]:
        entry = self._by_kind.get(kind)
        return entry.path if entry else None

    def well_known_paths(self) -> FrozenSet[Tuple[Path, str, str]]:
        return frozenset((e.path, e.icon, e.label) for e in self._by_path.values())

    def __len__(self) -> int:
        return len(self._by_path)
