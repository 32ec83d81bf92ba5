"""
Pointer Interaction
===================
Selection, dragging and raise-to-top for the cards.

Only active cards respond to the pointer. A card that starts its decay while
being dragged simply stops following the pointer; the selection itself is
cleared later, when the card leaves the store.
"""
from __future__ import annotations

import logging
from typing import Optional

from driftcanvas.model.item import Item
from driftcanvas.model.lifecycle import LifecycleClock
from driftcanvas.model.state import CanvasState

logger = logging.getLogger(__name__)


class InteractionController:
    def __init__(self, state: CanvasState, clock: LifecycleClock, frame_margin: float) -> None:
        self.state = state
        self.clock = clock
        self.frame_margin = frame_margin

        self.is_dragging: bool = False
        self.drag_offset: tuple[float, float] = (0.0, 0.0)

    @property
    def selected_id(self) -> Optional[str]:
        return self.state.selected_id

    @property
    def held_id(self) -> Optional[str]:
        """Id of the card currently pinned under the pointer, if any."""
        return self.state.selected_id if self.is_dragging else None

    def _is_interactive(self, item: Item, now: float) -> bool:
        return not item.is_expired and self.clock.is_active(now, item.placed_at)

    def hit_test(self, x: float, y: float, now: float) -> Optional[Item]:
        """Topmost active card whose frame contains the point."""
        for item in self.state.store.iterate_top_to_bottom():
            if not self._is_interactive(item, now):
                continue
            if item.frame_bounds(self.frame_margin).contains(x, y):
                return item
        return None

    def on_pointer_down(self, x: float, y: float, now: float) -> Optional[Item]:
        hit = self.hit_test(x, y, now)
        if hit is None:
            self.state.clear_selection()
            return None

        self.state.select(hit.id)
        self.is_dragging = True
        self.drag_offset = (x - hit.x, y - hit.y)
        self.state.store.raise_to_top(hit.id)
        logger.debug(f"Picked item {hit.id} at offset {self.drag_offset}")
        return hit

    def on_pointer_move(self, x: float, y: float, now: float) -> bool:
        """Returns True if a card was moved."""
        if not self.is_dragging:
            return False
        item = self.state.selected_item()
        if item is None or not self._is_interactive(item, now):
            return False
        dx, dy = self.drag_offset
        item.move_to(x - dx, y - dy)
        return True

    def on_pointer_up(self) -> None:
        self.is_dragging = False
