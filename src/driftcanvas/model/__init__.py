from driftcanvas.model.bitmap import BitmapHandle, BitmapState
from driftcanvas.model.item import Item, Rect
from driftcanvas.model.lifecycle import LifecycleClock, LifecycleState, Phase
from driftcanvas.model.physics import PhysicsStep, Viewport
from driftcanvas.model.store import ItemStore

__all__ = [
    "BitmapHandle",
    "BitmapState",
    "Item",
    "ItemStore",
    "LifecycleClock",
    "LifecycleState",
    "Phase",
    "PhysicsStep",
    "Rect",
    "Viewport",
]
