"""
Toolkit-independent applet controller.

``PlacesApplet.update`` is the single entry point for every event. The Qt
coordinator feeds it one message at a time from the event loop, so no
message is ever processed while another is in flight.

The renderer is any object providing::

    show_entries(generation, entries)
    create_popup(popup_id, limits)
    destroy_popup(popup_id)
    apply_display_config(config)
"""

from __future__ import annotations

from typing import Any

from places_applet import logger as app_logger

from .config_sync import ConfigSyncController
from .dispatcher import ActionDispatcher
from .messages import (
    DisplayConfigChanged,
    EntryActivated,
    FavoritesConfigChanged,
    Message,
    PopupClosed,
    TogglePopup,
)
from .popup_lifecycle import CreatePopup, DestroyPopup, PopupLifecycle


class PlacesApplet:
    def __init__(
        self,
        sync: ConfigSyncController,
        renderer: Any,
        *,
        popup: PopupLifecycle | None = None,
        dispatcher: ActionDispatcher | None = None,
    ) -> None:
        self._logger = app_logger.get_logger()
        self.sync = sync
        self.popup = popup or PopupLifecycle()
        self.dispatcher = dispatcher or ActionDispatcher(sync.display.file_manager)
        self._renderer = renderer

    def start(self) -> None:
        """Push the initial state to the renderer."""
        self._renderer.apply_display_config(self.sync.display)
        self._renderer.show_entries(self.sync.generation, self.sync.entries)

    def update(self, message: Message) -> None:
        if isinstance(message, TogglePopup):
            self._toggle_popup()
        elif isinstance(message, PopupClosed):
            self._popup_closed(message.popup_id)
        elif isinstance(message, DisplayConfigChanged):
            self._display_config_changed(message)
        elif isinstance(message, FavoritesConfigChanged):
            if self.sync.on_favorites_config_changed(message.update):
                self._renderer.show_entries(self.sync.generation, self.sync.entries)
        elif isinstance(message, EntryActivated):
            self._entry_activated(message)
        else:
            raise TypeError(f"Unknown message: {message!r}")

    def _toggle_popup(self) -> None:
        command = self.popup.toggle()
        if isinstance(command, CreatePopup):
            self._logger.debug("Opening popup {}", command.popup_id)
            self._renderer.create_popup(command.popup_id, command.limits)
        elif isinstance(command, DestroyPopup):
            self._logger.debug("Closing popup {}", command.popup_id)
            self._renderer.destroy_popup(command.popup_id)

    def _popup_closed(self, popup_id: int) -> None:
        if not self.popup.external_close(popup_id):
            self._logger.debug("Ignoring close for stale popup {}", popup_id)

    def _display_config_changed(self, message: DisplayConfigChanged) -> None:
        if not self.sync.on_display_config_changed(message.update):
            return
        self.dispatcher.file_manager = self.sync.display.file_manager
        self._renderer.apply_display_config(self.sync.display)

    def _entry_activated(self, message: EntryActivated) -> None:
        entry = self.sync.entry_at(message.generation, message.index)
        if entry is None:
            self._logger.debug(
                "Ignoring activation of stale entry {} from generation {}",
                message.index,
                message.generation,
            )
            return
        self.dispatcher.dispatch(entry.location)
