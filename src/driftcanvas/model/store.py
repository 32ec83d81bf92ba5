"""
Item Store
==========
Ordered collection of the cards on the canvas.

The list order is the paint order: index 0 is painted first (bottom), the
last element is painted last (topmost) and is the first to be hit-tested.
Raising an item to the top is the only reordering operation.

Iteration hands out a snapshot, so a caller may append or raise items while
walking the store without corrupting the pass.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from driftcanvas.model.item import Item

logger = logging.getLogger(__name__)


class ItemStore:
    def __init__(self) -> None:
        self._items: list[Item] = []
        self._created: int = 0

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self.find_by_id(item_id) is not None  # type: ignore[arg-type]

    def next_frame_color_index(self, palette_size: int) -> int:
        """Cyclic palette slot by creation order (not by current length)."""
        index = self._created % palette_size
        self._created += 1
        return index

    def append(self, item: Item) -> None:
        if self.find_by_id(item.id) is not None:
            raise ValueError(f"Item with id '{item.id}' already exists.")
        self._items.append(item)
        logger.debug(f"Appended item {item.id} ({len(self._items)} on canvas)")

    def find_by_id(self, item_id: Optional[str]) -> Optional[Item]:
        if item_id is None:
            return None
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def raise_to_top(self, item_id: str) -> None:
        """Move the item to the end of the paint order; unknown ids are ignored."""
        for i, item in enumerate(self._items):
            if item.id == item_id:
                if i != len(self._items) - 1:
                    self._items.append(self._items.pop(i))
                return

    def remove_if(self, predicate: Callable[[Item], bool]) -> list[Item]:
        """Drop matching items, keeping survivors in order. Returns the removed ones."""
        kept: list[Item] = []
        removed: list[Item] = []
        for it in self._items:
            (removed if predicate(it) else kept).append(it)
        self._items = kept
        return removed

    def remove_expired(self) -> list[Item]:
        removed = self.remove_if(lambda it: it.fade_opacity <= 0.0)
        for item in removed:
            logger.debug(f"Pruned expired item {item.id}")
        return removed

    def iterate_bottom_to_top(self) -> Iterator[Item]:
        """Paint order."""
        return iter(list(self._items))

    def iterate_top_to_bottom(self) -> Iterator[Item]:
        """Hit-test order."""
        return iter(list(reversed(self._items)))

    def ids(self) -> list[str]:
        return [it.id for it in self._items]
