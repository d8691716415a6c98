"""
Turns stored favorites into concrete (path, label, icon) triples.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from places_shared.places import FavoriteRef, FavoriteTag

from .special_dirs import FILE_ICON, FOLDER_ICON, TAG_TO_DIR, SpecialDirectoryTable, symbolic


class FileProbe:
    """Filesystem metadata queries used while resolving favorites."""

    def exists(self, path: Path) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)


@dataclass(frozen=True, slots=True)
class ResolvedFavorite:
    path: Path
    label: str
    icon: str


class FavoriteResolver:
    """
    Resolves favorites against the special directory table.

    A path favorite equal to a tag's well-known path is treated as that tag,
    so both spellings produce the same label and icon.
    """

    def __init__(self, table: SpecialDirectoryTable, probe: Optional[FileProbe] = None) -> None:
        self._table = table
        self._probe = probe or FileProbe()

    def canonicalize(self, ref: FavoriteRef) -> FavoriteRef:
        if ref.tag is not None or ref.path is None:
            return ref
        for tag, kind in TAG_TO_DIR.items():
            if self._table.path_for(kind) == ref.path:
                return FavoriteRef.of_tag(tag)
        return ref

    def resolve(self, ref: FavoriteRef) -> Optional[ResolvedFavorite]:
        ref = self.canonicalize(ref)
        if ref.tag is not None:
            return self._resolve_tag(ref.tag)
        return self._resolve_path(ref.path)

    def _resolve_tag(self, tag: FavoriteTag) -> Optional[ResolvedFavorite]:
        kind = TAG_TO_DIR[tag]
        path = self._table.path_for(kind)
        if path is None or not self._probe.exists(path):
            return None
        icon = self._table.lookup(path) or FOLDER_ICON
        return ResolvedFavorite(path=path, label=tag.label, icon=symbolic(icon))

    def _resolve_path(self, path: Path) -> Optional[ResolvedFavorite]:
        label = path.name
        if not label:
            return None
        if not self._probe.exists(path):
            return None
        if self._probe.is_dir(path):
            icon = self._table.lookup(path) or FOLDER_ICON
        else:
            icon = FILE_ICON
        return ResolvedFavorite(path=path, label=label, icon=symbolic(icon))
