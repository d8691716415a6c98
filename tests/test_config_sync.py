# tests/test_config_sync.py

from pathlib import Path

import pytest

from conftest import FakeProbe, HOME
from places_core.config_store import ConfigUpdate
from places_core.config_sync import ConfigSyncController
from places_core.nav_model import NavigationModelBuilder
from places_shared.config_schema import ConfigLoadError, DisplayConfig, FavoritesConfig
from places_shared.places import FavoriteRef, FavoriteTag, PathLocation


@pytest.fixture
def builder(table, standard_dirs):
    probe = FakeProbe(dirs=list(standard_dirs.values()) + [Path("/srv/a")])
    return NavigationModelBuilder(table, probe=probe)


@pytest.fixture
def sync(builder):
    return ConfigSyncController(
        builder,
        favorites=FavoritesConfig((FavoriteRef.of_tag(FavoriteTag.HOME),)),
        trash_probe=lambda: False,
    )


def test_initial_build(sync):
    assert sync.generation == 1
    assert [e.label for e in sync.entries] == ["Home", "Trash"]


def test_display_change_does_not_rebuild(sync):
    entries = sync.entries

    changed = sync.on_display_config_changed(ConfigUpdate(DisplayConfig(show_icon=False)))

    assert changed
    assert sync.display.show_icon is False
    assert sync.entries is entries
    assert sync.generation == 1


def test_equal_display_config_is_ignored(sync):
    assert not sync.on_display_config_changed(ConfigUpdate(DisplayConfig()))


def test_favorites_change_rebuilds(sync):
    update = ConfigUpdate(
        FavoritesConfig((FavoriteRef.of_path("/srv/a"), FavoriteRef.of_tag(FavoriteTag.HOME))),
        keys=("favorites",),
    )

    assert sync.on_favorites_config_changed(update)
    assert sync.generation == 2
    assert [e.label for e in sync.entries] == ["a", "Home", "Trash"]


def test_unchanged_favorites_keep_entries(sync):
    entries = sync.entries

    rebuilt = sync.on_favorites_config_changed(ConfigUpdate(FavoritesConfig((FavoriteRef.of_tag(FavoriteTag.HOME),))))

    assert not rebuilt
    assert sync.entries is entries


def test_partial_failure_still_adopts_config(sync):
    update = ConfigUpdate(
        FavoritesConfig(),
        keys=("favorites",),
        errors=(ConfigLoadError(key="favorites", message="not valid JSON"),),
    )

    assert sync.on_favorites_config_changed(update)
    assert sync.favorites == FavoritesConfig()
    assert [e.label for e in sync.entries] == ["Trash"]


def test_entry_handles_expire_after_rebuild(sync):
    assert sync.entry_at(1, 0).location == PathLocation(HOME)
    assert sync.entry_at(1, 5) is None

    sync.on_favorites_config_changed(ConfigUpdate(FavoritesConfig((FavoriteRef.of_path("/srv/a"),))))

    assert sync.entry_at(1, 0) is None
    assert sync.entry_at(2, 0).label == "a"


def test_legacy_layout_lists_well_known_directories(builder):
    sync = ConfigSyncController(builder, trash_probe=lambda: True, legacy_layout=True)

    assert sync.legacy_layout
    assert "Documents" in [e.label for e in sync.entries]
    assert sync.entries[-1].icon == "user-trash-full-symbolic"
