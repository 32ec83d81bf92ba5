import pytest

from driftcanvas.model.lifecycle import LifecycleClock
from driftcanvas.model.physics import PhysicsStep, Viewport

from conftest import make_item


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(width=400.0, height=300.0, top_padding=70.0)


@pytest.fixture
def physics(viewport: Viewport) -> PhysicsStep:
    return PhysicsStep(LifecycleClock(10000.0, 6000.0), viewport)


def test_free_item_moves_by_velocity(physics: PhysicsStep) -> None:
    item = make_item(x=100, y=100, vx=0.3, vy=-0.2)
    assert physics.advance([item], now=0.0) == 1
    assert item.x == pytest.approx(100.3)
    assert item.y == pytest.approx(99.8)


def test_left_edge_reflection(physics: PhysicsStep) -> None:
    item = make_item(x=0.2, y=100, vx=-0.4, vy=0.0)
    physics.advance([item], now=0.0)
    assert item.x == 0.0
    assert item.vx == pytest.approx(0.4)


def test_top_edge_respects_padding(physics: PhysicsStep) -> None:
    item = make_item(x=100, y=70.1, vx=0.0, vy=-0.3)
    physics.advance([item], now=0.0)
    assert item.y == 70.0
    assert item.vy == pytest.approx(0.3)


def test_right_and_bottom_edges(physics: PhysicsStep) -> None:
    item = make_item(x=349.9, y=249.9, w=50, h=50, vx=0.4, vy=0.4)
    physics.advance([item], now=0.0)
    assert item.x == 350.0
    assert item.y == 250.0
    assert item.vx == pytest.approx(-0.4)
    assert item.vy == pytest.approx(-0.4)


def test_held_item_is_frozen(physics: PhysicsStep) -> None:
    item = make_item(x=100, y=100, vx=0.4, vy=0.4)
    assert physics.advance([item], now=0.0, held_id=item.id) == 0
    assert (item.x, item.y) == (100, 100)


def test_items_past_active_duration_are_frozen(physics: PhysicsStep) -> None:
    item = make_item(x=100, y=100, vx=0.4, vy=0.4, placed_at=0.0)
    assert physics.advance([item], now=10000.0) == 0
    assert (item.x, item.y) == (100, 100)


def test_uses_current_viewport_after_resize(physics: PhysicsStep, viewport: Viewport) -> None:
    item = make_item(x=180, y=100, w=50, h=50, vx=0.4)
    viewport.resize(200.0, 300.0)
    physics.advance([item], now=0.0)
    assert item.x == 150.0
    assert item.vx < 0
