"""
Image Card (Data Model)
=======================
One generated image floating on the canvas.

Geometry is mutable (physics or dragging moves it), provenance and the
placement timestamp are fixed at creation. The decay fields can only be
written through `apply_lifecycle`, which takes a state produced by the
LifecycleClock.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from driftcanvas.model.bitmap import BitmapHandle
from driftcanvas.model.lifecycle import LifecycleState, Phase


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        # Edges are inclusive
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    def expanded(self, margin: float) -> Rect:
        return Rect(self.x - margin, self.y - margin, self.w + 2 * margin, self.h + 2 * margin)


@dataclass(eq=False)
class Item:
    prompt: str
    source_url: str
    bitmap: BitmapHandle
    x: float
    y: float
    w: float
    h: float
    vx: float
    vy: float
    placed_at: float
    frame_color_index: int
    id: str = field(default_factory=new_item_id)

    _phase: Phase = field(default=Phase.ACTIVE, init=False, repr=False)
    _mosaic_level: float = field(default=0.0, init=False, repr=False)
    _fade_opacity: float = field(default=1.0, init=False, repr=False)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def mosaic_level(self) -> float:
        return self._mosaic_level

    @property
    def fade_opacity(self) -> float:
        return self._fade_opacity

    @property
    def is_expired(self) -> bool:
        return self._fade_opacity <= 0.0

    def apply_lifecycle(self, state: LifecycleState) -> None:
        self._phase = state.phase
        self._mosaic_level = state.mosaic_level
        self._fade_opacity = state.fade_opacity

    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    def frame_bounds(self, margin: float) -> Rect:
        """The decorative card around the image; also the hit area."""
        return self.bounds().expanded(margin)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
