"""
Keeps the two configuration documents and the cached entry list in step.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from places_applet import logger as app_logger
from places_shared.config_schema import (
    APPLET_CONFIG_VERSION,
    APPLET_ID,
    FILES_CONFIG_VERSION,
    FILES_ID,
    DisplayConfig,
    FavoritesConfig,
)
from places_shared.places import NavigationEntry

from .config_store import ConfigStore, ConfigStoreError, ConfigUpdate
from .nav_model import NavigationModelBuilder
from .trash import is_trash_non_empty

_LOGGER = app_logger.get_logger()

TrashProbe = Callable[[], bool]


@dataclass
class InitialState:
    display: DisplayConfig
    favorites: FavoritesConfig
    display_store: Optional[ConfigStore[DisplayConfig]]
    favorites_store: Optional[ConfigStore[FavoritesConfig]]

    @property
    def favorites_available(self) -> bool:
        return self.favorites_store is not None


def _load_namespace(namespace: str, version: int, config_type, root: Optional[Path], *, create: bool = True):
    try:
        store = ConfigStore.open(namespace, version, config_type, root=root, create=create)
    except ConfigStoreError as exc:
        _LOGGER.error("Failed to create config handler: {}", exc)
        return None, config_type()
    config, errors = store.get()
    if errors:
        _LOGGER.warning(
            "Errors loading config {}: {}",
            namespace,
            "; ".join(str(error) for error in errors),
        )
    return store, config


def load_initial_state(root: Optional[Path] = None) -> InitialState:
    """Read both namespaces once at startup. Never raises; defaults fill the gaps."""
    display_store, display = _load_namespace(APPLET_ID, APPLET_CONFIG_VERSION, DisplayConfig, root)
    # The file manager owns its namespace; only read it.
    favorites_store, favorites = _load_namespace(
        FILES_ID, FILES_CONFIG_VERSION, FavoritesConfig, root, create=False
    )
    return InitialState(
        display=display,
        favorites=favorites,
        display_store=display_store,
        favorites_store=favorites_store,
    )


class ConfigSyncController:
    """
    Owns DisplayConfig and FavoritesConfig and the entry list derived from them.

    Only favorites changes rebuild the entries. Every rebuild bumps
    ``generation`` so handles into an older list can be told apart.
    """

    def __init__(
        self,
        builder: NavigationModelBuilder,
        *,
        display: Optional[DisplayConfig] = None,
        favorites: Optional[FavoritesConfig] = None,
        trash_probe: TrashProbe = is_trash_non_empty,
        legacy_layout: bool = False,
    ) -> None:
        self._builder = builder
        self._trash_probe = trash_probe
        self._legacy_layout = legacy_layout
        self.display = display or DisplayConfig()
        self.favorites = favorites or FavoritesConfig()
        self.generation = 0
        self.entries: Tuple[NavigationEntry, ...] = ()
        if legacy_layout:
            _LOGGER.warning("No favorites source available; falling back to the deprecated well-known directory list.")
        self.rebuild()

    @property
    def legacy_layout(self) -> bool:
        return self._legacy_layout

    def on_display_config_changed(self, update: ConfigUpdate[DisplayConfig]) -> bool:
        """Adopt a new display config. Returns True when the stored value changed."""
        self._report_errors("applet", update)
        if update.config == self.display:
            return False
        self.display = update.config
        return True

    def on_favorites_config_changed(self, update: ConfigUpdate[FavoritesConfig]) -> bool:
        """Adopt new favorites and rebuild. Returns True when a rebuild happened."""
        self._report_errors("favorites", update)
        if update.config == self.favorites:
            return False
        self.favorites = update.config
        self.rebuild()
        return True

    def rebuild(self) -> Sequence[NavigationEntry]:
        trash_full = self._trash_probe()
        if self._legacy_layout:
            entries: List[NavigationEntry] = self._builder.build_well_known(trash_full)
        else:
            entries = self._builder.build(self.favorites, trash_full)
        self.entries = tuple(entries)
        self.generation += 1
        _LOGGER.debug("Navigation model rebuilt (generation {}, {} entries)", self.generation, len(self.entries))
        return self.entries

    def entry_at(self, generation: int, index: int) -> Optional[NavigationEntry]:
        """Entry for a handle issued from ``generation``; None if stale or out of range."""
        if generation != self.generation or not 0 <= index < len(self.entries):
            return None
        return self.entries[index]

    @staticmethod
    def _report_errors(source: str, update: ConfigUpdate) -> None:
        if update.errors:
            _LOGGER.warning(
                "Errors loading {} config {}: {}",
                source,
                list(update.keys),
                "; ".join(str(error) for error in update.errors),
            )
