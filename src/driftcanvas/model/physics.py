"""
Physics Step
============
Moves free-floating cards and bounces them off the viewport edges.

The reflection is axis-aligned and perfectly elastic: each axis is clamped
independently and its velocity component negated. The top edge sits below
the UI chrome (``top_padding``).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from driftcanvas.model.item import Item
from driftcanvas.model.lifecycle import LifecycleClock


@dataclass
class Viewport:
    """Live canvas bounds. Mutated in place on resize, read on every tick."""
    width: float
    height: float
    top_padding: float = 0.0

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height


def reflect(item: Item, viewport: Viewport) -> None:
    """Clamp an item into the viewport, flipping velocity on each axis it crossed."""
    if item.x < 0:
        item.x = 0.0
        item.vx = -item.vx
    if item.y < viewport.top_padding:
        item.y = viewport.top_padding
        item.vy = -item.vy
    if item.x + item.w > viewport.width:
        item.x = viewport.width - item.w
        item.vx = -item.vx
    if item.y + item.h > viewport.height:
        item.y = viewport.height - item.h
        item.vy = -item.vy


class PhysicsStep:
    def __init__(self, clock: LifecycleClock, viewport: Viewport) -> None:
        self.clock = clock
        self.viewport = viewport

    def advance(self, items: Iterable[Item], now: float, held_id: Optional[str] = None) -> int:
        """
        Advance every active, unheld item by one tick.

        Args:
            items: Items in any order.
            now: Current time (ms) used to decide which items are still active.
            held_id: Id of the item being dragged, if any; it is left in place.

        Returns:
            Number of items moved.
        """
        moved = 0
        for item in items:
            if item.id == held_id:
                continue
            if item.is_expired or not self.clock.is_active(now, item.placed_at):
                continue
            item.x += item.vx
            item.y += item.vy
            reflect(item, self.viewport)
            moved += 1
        return moved
