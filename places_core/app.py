"""
Qt coordinator: tray icon, popup surface and config watchers around PlacesApplet.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import replace
from typing import Deque, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, QRect, Qt
from PySide6.QtGui import QAction, QFont, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from places_applet import logger as app_logger
from places_shared.config_schema import DisplayConfig
from places_shared.places import NavigationEntry

from .applet import PlacesApplet
from .config_store import ConfigUpdate, ConfigWatcher
from .config_sync import ConfigSyncController, InitialState
from .messages import (
    DisplayConfigChanged,
    EntryActivated,
    FavoritesConfigChanged,
    Message,
    PopupClosed,
    TogglePopup,
)
from .nav_model import NavigationModelBuilder
from .places_popup import PlacesPopup, themed_icon
from .popup_lifecycle import PopupLimits
from .special_dirs import SpecialDirectoryTable

APP_NAME = "Places"
APP_ICON = "system-file-manager"
TRAY_ICON_SIZE = 64
# A click on the tray icon first closes an open Qt.Popup, then arrives as a
# toggle; toggles this soon after an external close are dropped.
REOPEN_GUARD_SECONDS = 0.3


def text_icon(text: str, size: int = TRAY_ICON_SIZE) -> QIcon:
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    try:
        font = QFont()
        font.setPixelSize(size // 4)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QApplication.palette().windowText().color())
        painter.drawText(QRect(0, 0, size, size), Qt.AlignmentFlag.AlignCenter, text)
    finally:
        painter.end()
    return QIcon(pixmap)


class AppCoordinator(QObject):
    """Wires Qt events into PlacesApplet messages and renders its output."""

    def __init__(
        self,
        state: InitialState,
        *,
        table: Optional[SpecialDirectoryTable] = None,
        sync: Optional[ConfigSyncController] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self._state = state
        self._manual_shutdown_requested = False
        self._popup: Optional[PlacesPopup] = None
        self._generation = 0
        self._entries: Tuple[NavigationEntry, ...] = ()
        self._last_external_close = 0.0
        self._queue: Deque[Message] = deque()
        self._draining = False

        if sync is None:
            table = table or SpecialDirectoryTable.build()
            sync = ConfigSyncController(
                NavigationModelBuilder(table),
                display=state.display,
                favorites=state.favorites,
                legacy_layout=not state.favorites_available,
            )

        self._tray = QSystemTrayIcon(self)
        self._tray.setToolTip(APP_NAME)
        self._tray.activated.connect(self._on_tray_activated)  # type: ignore[arg-type]

        menu = QMenu()
        self._show_icon_action = QAction("Show icon", menu)
        self._show_icon_action.setCheckable(True)
        quit_action = QAction("Quit", menu)
        menu.addAction(self._show_icon_action)
        menu.addSeparator()
        menu.addAction(quit_action)
        self._menu = menu
        self._tray.setContextMenu(menu)

        self._show_icon_action.triggered.connect(self._on_show_icon_toggled)  # type: ignore[arg-type]
        quit_action.triggered.connect(self.shutdown)  # type: ignore[arg-type]

        self._display_watcher: Optional[ConfigWatcher] = None
        self._favorites_watcher: Optional[ConfigWatcher] = None
        if state.display_store is not None:
            self._display_watcher = ConfigWatcher(state.display_store, parent=self)
            self._display_watcher.updated.connect(self._on_display_update)  # type: ignore[arg-type]
        if state.favorites_store is not None:
            self._favorites_watcher = ConfigWatcher(state.favorites_store, parent=self)
            self._favorites_watcher.updated.connect(self._on_favorites_update)  # type: ignore[arg-type]

        self.applet = PlacesApplet(sync, renderer=self)

    @property
    def manual_shutdown_requested(self) -> bool:
        return self._manual_shutdown_requested

    @property
    def popup(self) -> Optional[PlacesPopup]:
        return self._popup

    @property
    def tray(self) -> QSystemTrayIcon:
        return self._tray

    def start(self) -> None:
        self._logger.info("Starting places applet.")
        self.applet.start()
        for watcher in (self._display_watcher, self._favorites_watcher):
            if watcher is not None:
                watcher.start()
        if not QSystemTrayIcon.isSystemTrayAvailable():
            self._logger.warning("No system tray available; the applet icon may not be visible.")
        self._tray.show()

    def shutdown(self) -> None:
        self._logger.info("Shutting down places applet on user request.")
        self._manual_shutdown_requested = True
        for watcher in (self._display_watcher, self._favorites_watcher):
            if watcher is not None:
                watcher.stop()
        if self._popup is not None:
            self._popup.close()
        self._tray.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def post(self, message: Message) -> None:
        """
        Queue a message for the applet and drain the queue.

        Messages raised while another one is being handled (a popup closing
        as a result of a toggle, say) wait their turn instead of nesting.
        Errors are logged, never fatal.
        """
        self._queue.append(message)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                pending = self._queue.popleft()
                try:
                    self.applet.update(pending)
                except Exception:  # pragma: no cover - guard around UI callbacks
                    self._logger.exception("Failed to handle {}", pending)
        finally:
            self._draining = False

    # Renderer interface used by PlacesApplet.

    def show_entries(self, generation: int, entries: Sequence[NavigationEntry]) -> None:
        self._generation = generation
        self._entries = tuple(entries)
        if self._popup is not None:
            self._popup.populate(generation, self._entries)

    def create_popup(self, popup_id: int, limits: PopupLimits) -> None:
        popup = PlacesPopup(popup_id)
        popup.entryActivated.connect(self._on_entry_activated)  # type: ignore[arg-type]
        popup.closed.connect(self._on_popup_closed)  # type: ignore[arg-type]
        popup.populate(self._generation, self._entries)
        popup.apply_limits(limits)
        self._popup = popup
        popup.show_at_cursor()

    def destroy_popup(self, popup_id: int) -> None:
        popup = self._popup
        if popup is None or popup.popup_id != popup_id:
            return
        self._popup = None
        popup.close()

    def apply_display_config(self, config: DisplayConfig) -> None:
        if config.show_icon:
            icon = themed_icon(APP_ICON, QStyle.StandardPixmap.SP_DirIcon)
        else:
            icon = text_icon(APP_NAME)
        self._tray.setIcon(icon)
        self._show_icon_action.setChecked(config.show_icon)

    # Qt signal handlers.

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason != QSystemTrayIcon.ActivationReason.Trigger:
            return
        if time.monotonic() - self._last_external_close < REOPEN_GUARD_SECONDS:
            return
        self.post(TogglePopup())

    def _on_popup_closed(self, popup_id: int) -> None:
        if self._popup is not None and self._popup.popup_id == popup_id:
            self._popup = None
            self._last_external_close = time.monotonic()
        self.post(PopupClosed(popup_id))

    def _on_entry_activated(self, generation: int, index: int) -> None:
        self.post(EntryActivated(generation, index))

    def _on_display_update(self, update: ConfigUpdate) -> None:
        self.post(DisplayConfigChanged(update))

    def _on_favorites_update(self, update: ConfigUpdate) -> None:
        self.post(FavoritesConfigChanged(update))

    def _on_show_icon_toggled(self, checked: bool) -> None:
        store = self._state.display_store
        if store is None:
            self._logger.warning("Failed to save config 'show_icon': no config handler")
            self.post(DisplayConfigChanged(ConfigUpdate(replace(self.applet.sync.display, show_icon=checked))))
            return
        try:
            store.set("show_icon", checked)
        except OSError as exc:
            self._logger.error("Failed to save config 'show_icon': {}", exc)
            return
        if self._display_watcher is not None:
            self._display_watcher.reload()
