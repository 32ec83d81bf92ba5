import os
from typing import Optional

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage
from PySide6.QtWidgets import QApplication

from driftcanvas.config import CanvasConfig
from driftcanvas.controller.canvas import CanvasController
from driftcanvas.model.bitmap import BitmapHandle
from driftcanvas.model.item import Item


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance() or QApplication([])
    yield app


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, ms: float) -> float:
        self.t += ms
        return self.t


class FakeLoader:
    """Hands out pending handles; the test completes them by hand."""

    def __init__(self) -> None:
        self.requested: list[str] = []
        self.handles: list[BitmapHandle] = []

    def load(self, url: str) -> BitmapHandle:
        handle = BitmapHandle(url)
        self.requested.append(url)
        self.handles.append(handle)
        return handle


class FakeClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def generate(self, prompt: str, token: str) -> str:
        self.calls.append((prompt, token))
        return "https://example.test/image.png"


@pytest.fixture
def config() -> CanvasConfig:
    return CanvasConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(config: CanvasConfig, clock: FakeClock) -> CanvasController:
    ctrl = CanvasController(
        config,
        client=FakeClient(),
        loader=FakeLoader(),
        clock=clock,
        token_provider=lambda: "test-token",
        rng=np.random.default_rng(1234),
    )
    ctrl.viewport.resize(1280, 800)
    return ctrl


def solid_image(width: int = 8, height: int = 8, color=Qt.GlobalColor.red) -> QImage:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(color)
    return image


def make_item(
    x: float = 100.0,
    y: float = 100.0,
    w: float = 50.0,
    h: float = 50.0,
    vx: float = 0.0,
    vy: float = 0.0,
    placed_at: float = 0.0,
    bitmap: Optional[BitmapHandle] = None,
    color_index: int = 0,
) -> Item:
    return Item(
        prompt="a cat",
        source_url="https://example.test/cat.png",
        bitmap=bitmap if bitmap is not None else BitmapHandle("https://example.test/cat.png"),
        x=x,
        y=y,
        w=w,
        h=h,
        vx=vx,
        vy=vy,
        placed_at=placed_at,
        frame_color_index=color_index,
    )
