"""
Open/closed state of the single popup surface.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator, Optional, Union


@dataclass(frozen=True, slots=True)
class PopupLimits:
    min_width: float = 100.0
    max_width: float = 200.0
    min_height: float = 200.0
    max_height: float = 1080.0


POPUP_LIMITS = PopupLimits()


@dataclass(frozen=True, slots=True)
class PopupState:
    """Closed when ``popup_id`` is None, otherwise open with that surface id."""

    popup_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.popup_id is not None


CLOSED = PopupState()


@dataclass(frozen=True, slots=True)
class CreatePopup:
    popup_id: int
    limits: PopupLimits


@dataclass(frozen=True, slots=True)
class DestroyPopup:
    popup_id: int


PopupCommand = Union[CreatePopup, DestroyPopup]


class PopupLifecycle:
    """
    Two-state machine for the popup.

    Transitions are immediate. The caller carries out the returned command
    against the rendering layer.
    """

    def __init__(self, limits: PopupLimits = POPUP_LIMITS) -> None:
        self._limits = limits
        self._ids: Iterator[int] = itertools.count(1)
        self._state = CLOSED

    @property
    def state(self) -> PopupState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def toggle(self) -> PopupCommand:
        if self._state.popup_id is not None:
            popup_id = self._state.popup_id
            self._state = CLOSED
            return DestroyPopup(popup_id)
        popup_id = next(self._ids)
        self._state = PopupState(popup_id)
        return CreatePopup(popup_id, self._limits)

    def external_close(self, popup_id: int) -> bool:
        """Handle a close reported by the rendering layer. Stale ids are ignored."""
        if self._state.popup_id != popup_id:
            return False
        self._state = CLOSED
        return True
