"""
Canvas Widget
=============
Full-window QWidget that drives the animation and forwards pointer input.

A QTimer owns the frame cadence. Each timeout runs one controller tick with
a synchronous repaint in the middle, so a card removed by pruning is never
painted. paintEvent itself only reads state, which keeps expose/resize
repaints harmless.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QWidget

from driftcanvas.controller.canvas import CanvasController
from driftcanvas.view.renderer import Renderer

logger = logging.getLogger(__name__)


class CanvasWidget(QWidget):
    def __init__(
        self,
        controller: CanvasController,
        renderer: Optional[Renderer] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self.renderer = renderer or Renderer(controller.config)

        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(controller.config.tick_interval_ms)
        self._timer.timeout.connect(self._on_tick)

        controller.state.busy_changed.connect(self._on_busy_changed)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        logger.info(f"Animation started ({self._timer.interval()} ms per tick)")
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    # ------------------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            self.renderer.paint(painter, self.controller.state, self.controller.viewport)
        finally:
            painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        size = event.size()
        self.controller.viewport.resize(size.width(), size.height())
        super().resizeEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        pos = event.position()
        self.controller.interaction.on_pointer_down(pos.x(), pos.y(), self.controller.now())

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.controller.interaction.on_pointer_move(pos.x(), pos.y(), self.controller.now())

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.controller.interaction.on_pointer_up()
        super().mouseReleaseEvent(event)

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def _on_tick(self) -> None:
        self.controller.tick(paint=self.repaint)

    def _on_busy_changed(self, busy: bool) -> None:
        if busy:
            self.setCursor(Qt.CursorShape.BusyCursor)
        else:
            self.unsetCursor()
