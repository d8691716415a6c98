# tests/test_applet.py

from pathlib import Path

import pytest

from conftest import FakeProbe, HOME
from places_core.applet import PlacesApplet
from places_core.config_store import ConfigUpdate
from places_core.config_sync import ConfigSyncController
from places_core.dispatcher import ActionDispatcher
from places_core.messages import (
    DisplayConfigChanged,
    EntryActivated,
    FavoritesConfigChanged,
    PopupClosed,
    TogglePopup,
)
from places_core.nav_model import NavigationModelBuilder
from places_shared.config_schema import DisplayConfig, FavoritesConfig
from places_shared.places import FavoriteRef, FavoriteTag


class FakeRenderer:
    """Records every call the applet makes on the rendering layer."""

    def __init__(self):
        self.calls = []

    def show_entries(self, generation, entries):
        self.calls.append(("show_entries", generation, [e.label for e in entries]))

    def create_popup(self, popup_id, limits):
        self.calls.append(("create_popup", popup_id))

    def destroy_popup(self, popup_id):
        self.calls.append(("destroy_popup", popup_id))

    def apply_display_config(self, config):
        self.calls.append(("apply_display_config", config))


@pytest.fixture
def spawned():
    return []


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def applet(table, standard_dirs, renderer, spawned):
    builder = NavigationModelBuilder(table, probe=FakeProbe(dirs=list(standard_dirs.values()) + [Path("/srv/a")]))
    sync = ConfigSyncController(
        builder,
        favorites=FavoritesConfig((FavoriteRef.of_tag(FavoriteTag.HOME),)),
        trash_probe=lambda: False,
    )
    applet = PlacesApplet(sync, renderer, dispatcher=ActionDispatcher(spawner=spawned.append))
    applet.start()
    renderer.calls.clear()
    return applet


def test_start_pushes_display_and_entries(table, renderer):
    sync = ConfigSyncController(NavigationModelBuilder(table, probe=FakeProbe()), trash_probe=lambda: False)
    PlacesApplet(sync, renderer).start()

    assert renderer.calls == [
        ("apply_display_config", DisplayConfig()),
        ("show_entries", 1, ["Trash"]),
    ]


def test_toggle_creates_then_destroys_popup(applet, renderer):
    applet.update(TogglePopup())
    applet.update(TogglePopup())

    assert renderer.calls == [("create_popup", 1), ("destroy_popup", 1)]
    assert not applet.popup.is_open


def test_external_close_then_toggle_opens_new_popup(applet, renderer):
    applet.update(TogglePopup())
    applet.update(PopupClosed(1))
    applet.update(TogglePopup())

    assert renderer.calls == [("create_popup", 1), ("create_popup", 2)]


def test_stale_close_is_ignored(applet):
    applet.update(TogglePopup())
    applet.update(PopupClosed(99))

    assert applet.popup.state.popup_id == 1


def test_activation_launches_file_manager(applet, spawned):
    applet.update(EntryActivated(generation=1, index=0))
    applet.update(EntryActivated(generation=1, index=1))

    assert spawned == [["cosmic-files", str(HOME)], ["cosmic-files", "--trash"]]


def test_favorites_change_republishes_and_retires_old_handles(applet, renderer, spawned):
    update = ConfigUpdate(FavoritesConfig((FavoriteRef.of_path("/srv/a"),)), keys=("favorites",))
    applet.update(FavoritesConfigChanged(update))

    assert renderer.calls == [("show_entries", 2, ["a", "Trash"])]

    applet.update(EntryActivated(generation=1, index=0))
    assert spawned == []

    applet.update(EntryActivated(generation=2, index=0))
    assert spawned == [["cosmic-files", "/srv/a"]]


def test_display_change_only_restyles(applet, renderer, spawned):
    new_display = DisplayConfig(show_icon=False, file_manager="nautilus")
    applet.update(DisplayConfigChanged(ConfigUpdate(new_display, keys=("show_icon", "file_manager"))))

    assert renderer.calls == [("apply_display_config", new_display)]

    applet.update(EntryActivated(generation=1, index=1))
    assert spawned == [["nautilus", "--trash"]]


def test_unknown_message_is_rejected(applet):
    with pytest.raises(TypeError):
        applet.update("refresh")
