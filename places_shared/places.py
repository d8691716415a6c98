"""
Shared representation of favorites, locations and navigation entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class FavoriteTag(Enum):
    """Well-known locations a favorite can refer to symbolically."""

    HOME = "Home"
    DOCUMENTS = "Documents"
    DOWNLOADS = "Downloads"
    MUSIC = "Music"
    PICTURES = "Pictures"
    VIDEOS = "Videos"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FavoriteRef:
    """
    A stored favorite: either a well-known tag or an explicit path.

    Exactly one of ``tag`` and ``path`` is set.
    """

    tag: Optional[FavoriteTag] = None
    path: Optional[Path] = None

    def __post_init__(self) -> None:
        if (self.tag is None) == (self.path is None):
            raise ValueError("FavoriteRef needs exactly one of tag or path.")

    @classmethod
    def of_tag(cls, tag: FavoriteTag) -> "FavoriteRef":
        return cls(tag=tag)

    @classmethod
    def of_path(cls, path: Union[str, Path]) -> "FavoriteRef":
        return cls(path=Path(path))

    @property
    def is_tag(self) -> bool:
        return self.tag is not None


@dataclass(frozen=True, slots=True)
class TrashLocation:
    """The user's trash."""


@dataclass(frozen=True, slots=True)
class PathLocation:
    path: Path


Location = Union[TrashLocation, PathLocation]

TRASH = TrashLocation()


@dataclass(frozen=True, slots=True)
class NavigationEntry:
    """One row of the popup list."""

    label: str
    icon: str
    location: Location

    @property
    def is_trash(self) -> bool:
        return isinstance(self.location, TrashLocation)
