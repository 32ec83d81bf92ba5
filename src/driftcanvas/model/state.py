"""
Canvas State
============
Central state shared by the controllers and the canvas widget.

Why is this file needed?
------------------------
1. State Management: It holds the item store, the current selection and the
   status line in one place.
2. Decoupling: Views read from this object and listen to its signals;
   controllers write to it.

Classes:
    CanvasState: QObject container with change signals.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from driftcanvas.model.item import Item
from driftcanvas.model.store import ItemStore

logger = logging.getLogger(__name__)


class CanvasState(QObject):
    """Item store + selection + status channel."""
    status_changed = Signal(str)
    selection_changed = Signal(object)  # str | None
    busy_changed = Signal(bool)

    def __init__(self) -> None:
        super().__init__()
        self.store = ItemStore()
        self._selected_id: Optional[str] = None
        self._status_text: str = ""
        self._pending_requests: int = 0

    # --- STATUS ---

    @property
    def status_text(self) -> str:
        return self._status_text

    def set_status(self, text: str) -> None:
        """Overwrite (never queue) the status line."""
        self._status_text = text
        logger.debug(f"Status: {text!r}")
        self.status_changed.emit(text)

    # --- SELECTION ---

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def select(self, item_id: Optional[str]) -> None:
        if item_id is not None and self.store.find_by_id(item_id) is None:
            raise ValueError(f"Cannot select unknown item '{item_id}'.")
        if item_id != self._selected_id:
            self._selected_id = item_id
            self.selection_changed.emit(item_id)

    def clear_selection(self) -> None:
        self.select(None)

    def selected_item(self) -> Optional[Item]:
        return self.store.find_by_id(self._selected_id)

    def drop_stale_selection(self) -> None:
        if self._selected_id is not None and self.store.find_by_id(self._selected_id) is None:
            self.clear_selection()

    # --- IN-FLIGHT REQUESTS ---

    @property
    def is_busy(self) -> bool:
        return self._pending_requests > 0

    def request_started(self) -> None:
        self._pending_requests += 1
        if self._pending_requests == 1:
            self.busy_changed.emit(True)

    def request_finished(self) -> None:
        if self._pending_requests == 0:
            return
        self._pending_requests -= 1
        if self._pending_requests == 0:
            self.busy_changed.emit(False)
