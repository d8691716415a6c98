"""
Popup window listing the navigation entries under the tray icon.
"""

from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import QPoint, QSize, Qt, Signal
from PySide6.QtGui import QColor, QCursor, QIcon
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QGraphicsDropShadowEffect,
    QListWidget,
    QListWidgetItem,
    QStyle,
    QVBoxLayout,
    QWidget,
)

from places_shared.places import NavigationEntry

from .popup_lifecycle import PopupLimits

ROW_HEIGHT = 32
ICON_SIZE = 16
_INDEX_ROLE = int(Qt.ItemDataRole.UserRole) + 1


def themed_icon(name: str, fallback: QStyle.StandardPixmap) -> QIcon:
    icon = QIcon.fromTheme(name)
    if icon.isNull() and name.endswith("-symbolic"):
        icon = QIcon.fromTheme(name[: -len("-symbolic")])
    if icon.isNull():
        icon = QApplication.style().standardIcon(fallback)
    return icon


class PlacesPopup(QWidget):
    """
    One popup surface. A new instance is created for every popup id and
    never reused after it closes.
    """

    entryActivated = Signal(int, int)
    closed = Signal(int)

    def __init__(self, popup_id: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.popup_id = popup_id
        self._generation = 0
        self.setWindowFlags(Qt.WindowType.Popup | Qt.WindowType.FramelessWindowHint)
        self.setObjectName("PlacesPopup")
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)

        self._container = QWidget(self)
        self._container.setObjectName("PopupCard")
        shadow = QGraphicsDropShadowEffect(self._container)
        shadow.setBlurRadius(18)
        shadow.setColor(QColor(0, 0, 0, 120))
        shadow.setOffset(0, 6)
        self._container.setGraphicsEffect(shadow)

        self._list = QListWidget(self._container)
        self._list.setIconSize(QSize(ICON_SIZE, ICON_SIZE))
        self._list.setFrameShape(QFrame.Shape.NoFrame)
        self._list.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._list.itemClicked.connect(self._on_item_activated)  # type: ignore[arg-type]

        inner = QVBoxLayout(self._container)
        inner.setContentsMargins(0, 8, 0, 8)
        inner.addWidget(self._list)

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.addWidget(self._container)

        self.setStyleSheet(
            """
            QWidget#PopupCard {
                border-radius: 10px;
            }
            QListWidget::item {
                padding: 4px 8px;
            }
            """
        )

    @property
    def generation(self) -> int:
        return self._generation

    def populate(self, generation: int, entries: Sequence[NavigationEntry]) -> None:
        """Replace the list with ``entries``; rows remember the generation they came from."""
        self._generation = generation
        self._list.clear()
        for index, entry in enumerate(entries):
            fallback = QStyle.StandardPixmap.SP_TrashIcon if entry.is_trash else QStyle.StandardPixmap.SP_DirIcon
            item = QListWidgetItem(themed_icon(entry.icon, fallback), entry.label)
            item.setData(_INDEX_ROLE, index)
            item.setSizeHint(QSize(0, ROW_HEIGHT))
            self._list.addItem(item)

    def row_count(self) -> int:
        return self._list.count()

    def activate_row(self, row: int) -> None:
        item = self._list.item(row)
        if item is not None:
            self._on_item_activated(item)

    def apply_limits(self, limits: PopupLimits) -> None:
        self.setMinimumSize(int(limits.min_width), int(limits.min_height))
        self.setMaximumSize(int(limits.max_width), int(limits.max_height))
        rows_height = self._list.count() * ROW_HEIGHT + 16
        height = max(int(limits.min_height), min(int(limits.max_height), rows_height))
        self.resize(int(limits.max_width), height)

    def show_at_cursor(self) -> None:
        self._place_near(QCursor.pos())
        self.show()

    def _place_near(self, anchor: QPoint) -> None:
        screen = QApplication.screenAt(anchor) or QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        x = min(max(anchor.x() - self.width() // 2, geometry.left()), geometry.right() - self.width())
        if anchor.y() > geometry.center().y():
            y = anchor.y() - self.height()
        else:
            y = anchor.y()
        y = min(max(y, geometry.top()), geometry.bottom() - self.height())
        self.move(QPoint(x, y))

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        index = item.data(_INDEX_ROLE)
        if index is None:
            return
        self.entryActivated.emit(self._generation, int(index))

    def closeEvent(self, event) -> None:  # noqa: N802
        self.closed.emit(self.popup_id)
        super().closeEvent(event)
