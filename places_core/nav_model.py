"""
Builds the ordered list of navigation entries shown in the popup.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from places_shared.config_schema import FavoritesConfig
from places_shared.places import TRASH, FavoriteRef, NavigationEntry, PathLocation

from .favorite_resolver import FavoriteResolver, FileProbe
from .special_dirs import TRASH_FULL_ICON, TRASH_ICON, SpecialDirectoryTable, symbolic

TRASH_LABEL = "Trash"


def trash_entry(trash_is_non_empty: bool) -> NavigationEntry:
    icon = TRASH_FULL_ICON if trash_is_non_empty else TRASH_ICON
    return NavigationEntry(label=TRASH_LABEL, icon=symbolic(icon), location=TRASH)


class NavigationModelBuilder:
    """
    Derives navigation entries from configuration.

    Building reads the live filesystem, so two builds only agree when the
    filesystem did not change in between. Nothing is locked.
    """

    def __init__(
        self,
        table: SpecialDirectoryTable,
        resolver: Optional[FavoriteResolver] = None,
        probe: Optional[FileProbe] = None,
    ) -> None:
        self._table = table
        self._probe = probe or FileProbe()
        self._resolver = resolver or FavoriteResolver(table, self._probe)

    def build(self, favorites_config: FavoritesConfig, trash_is_non_empty: bool) -> List[NavigationEntry]:
        """Favorites in stored order, unresolvable ones skipped, Trash last."""
        entries = list(self._favorite_entries(favorites_config.favorites))
        entries.append(trash_entry(trash_is_non_empty))
        return entries

    def build_well_known(self, trash_is_non_empty: bool) -> List[NavigationEntry]:
        """
        Deprecated layout: every well-known directory sorted by label, Trash last.

        Only used when no favorites source can be opened.
        """
        entries = [
            NavigationEntry(label=label, icon=symbolic(icon), location=PathLocation(path))
            for path, icon, label in self._table.well_known_paths()
            if self._probe.exists(path)
        ]
        entries.sort(key=lambda entry: (entry.label, str(entry.location.path)))
        entries.append(trash_entry(trash_is_non_empty))
        return entries

    def _favorite_entries(self, favorites: Iterable[FavoriteRef]) -> Iterable[NavigationEntry]:
        for ref in favorites:
            resolved = self._resolver.resolve(ref)
            if resolved is None:
                continue
            yield NavigationEntry(
                label=resolved.label,
                icon=resolved.icon,
                location=PathLocation(resolved.path),
            )
