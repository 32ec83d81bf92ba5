"""
Lifecycle Clock
===============
Derives an item's phase and decay values from its age.

The result is a pure function of (now, placed_at) and the two durations;
it is recomputed on every tick and never cached on the item.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Phase(StrEnum):
    ACTIVE = "active"
    TRANSITIONING = "transitioning"
    EXPIRED = "expired"


@dataclass(frozen=True)
class LifecycleState:
    phase: Phase
    mosaic_level: float
    fade_opacity: float

    @property
    def is_active(self) -> bool:
        return self.phase is Phase.ACTIVE


@dataclass(frozen=True)
class LifecycleClock:
    """Holds D_active and D_transition (milliseconds)."""
    active_ms: float
    transition_ms: float

    def evaluate(self, now: float, placed_at: float) -> LifecycleState:
        age = now - placed_at
        if age < self.active_ms:
            return LifecycleState(Phase.ACTIVE, mosaic_level=0.0, fade_opacity=1.0)

        if self.transition_ms <= 0:
            t = 1.0
        else:
            t = min(1.0, max(0.0, (age - self.active_ms) / self.transition_ms))

        phase = Phase.TRANSITIONING if t < 1.0 else Phase.EXPIRED
        return LifecycleState(phase, mosaic_level=t, fade_opacity=1.0 - t)

    def is_active(self, now: float, placed_at: float) -> bool:
        return (now - placed_at) < self.active_ms
