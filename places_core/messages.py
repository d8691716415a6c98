"""
Messages handled by the applet's sequential dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from places_shared.config_schema import DisplayConfig, FavoritesConfig

from .config_store import ConfigUpdate


@dataclass(frozen=True)
class TogglePopup:
    pass


@dataclass(frozen=True)
class PopupClosed:
    popup_id: int


@dataclass(frozen=True)
class DisplayConfigChanged:
    update: ConfigUpdate[DisplayConfig]


@dataclass(frozen=True)
class FavoritesConfigChanged:
    update: ConfigUpdate[FavoritesConfig]


@dataclass(frozen=True)
class EntryActivated:
    generation: int
    index: int


Message = Union[TogglePopup, PopupClosed, DisplayConfigChanged, FavoritesConfigChanged, EntryActivated]
