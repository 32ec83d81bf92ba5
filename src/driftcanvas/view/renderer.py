"""
Frame Renderer
==============
Paints one frame of the canvas with a QPainter:

1. background,
2. every card bottom-to-top: shadowed pastel frame, then the image
   (mosaic-degraded while decaying) or a grey placeholder, all at the
   card's fade opacity,
3. the selection outline at full opacity,
4. the status line.

The renderer reads state only; it never moves, removes or re-orders cards.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPainterPath, QPen

from driftcanvas.config import CanvasConfig
from driftcanvas.model.item import Item, Rect
from driftcanvas.model.lifecycle import Phase
from driftcanvas.model.physics import Viewport
from driftcanvas.model.state import CanvasState
from driftcanvas.view.mosaic import MosaicEffect

logger = logging.getLogger(__name__)

# Approximates a 12px blurred drop shadow offset by (4, 4): (spread, alpha) layers.
_SHADOW_OFFSET = 4.0
_SHADOW_LAYERS: tuple[tuple[float, int], ...] = ((6.0, 18), (4.0, 22), (2.0, 26), (0.0, 30))


def _qrect(r: Rect) -> QRectF:
    return QRectF(r.x, r.y, r.w, r.h)


class Renderer:
    def __init__(self, config: CanvasConfig, mosaic: Optional[MosaicEffect] = None) -> None:
        self.config = config
        self.mosaic = mosaic or MosaicEffect(config.mosaic_max_block)

        self._background = QColor(config.background_color)
        self._placeholder = QColor(config.placeholder_color)
        self._status_color = QColor(*config.status_color)
        self._status_font = QFont(config.status_font_family)
        self._status_font.setPixelSize(config.status_font_px)

    def paint(self, painter: QPainter, state: CanvasState, viewport: Viewport) -> int:
        """Paint the whole frame. Returns the number of cards drawn."""
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(QRectF(0, 0, viewport.width, viewport.height), self._background)

        drawn = 0
        for item in state.store.iterate_bottom_to_top():
            if item.fade_opacity <= 0:
                continue
            self.paint_item(painter, item)
            if item.id == state.selected_id and item.phase is Phase.ACTIVE:
                self.paint_selection(painter, item)
            drawn += 1

        if state.status_text:
            self.paint_status(painter, state.status_text, viewport)
        return drawn

    def paint_item(self, painter: QPainter, item: Item) -> None:
        painter.save()
        painter.setOpacity(item.fade_opacity)
        self.paint_frame(painter, item)

        target = _qrect(item.bounds())
        if item.bitmap.is_ready():
            self.mosaic.draw(painter, item.bitmap.image, target, item.mosaic_level)
        else:
            painter.fillRect(target, self._placeholder)
        painter.restore()

    def paint_frame(self, painter: QPainter, item: Item) -> None:
        cfg = self.config
        frame = _qrect(item.frame_bounds(cfg.frame_margin))
        radius = cfg.frame_radius

        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        shadow = frame.translated(_SHADOW_OFFSET, _SHADOW_OFFSET)
        for spread, alpha in _SHADOW_LAYERS:
            painter.setBrush(QColor(0, 0, 0, alpha))
            painter.drawRoundedRect(
                shadow.adjusted(-spread, -spread, spread, spread), radius + spread, radius + spread
            )

        path = QPainterPath()
        path.addRoundedRect(frame, radius, radius)
        painter.fillPath(path, QColor(cfg.frame_color(item.frame_color_index)))
        pen = QPen(QColor("#000000"))
        pen.setWidthF(cfg.frame_border)
        painter.strokePath(path, pen)
        painter.restore()

    def paint_selection(self, painter: QPainter, item: Item) -> None:
        cfg = self.config
        outline = _qrect(item.frame_bounds(cfg.frame_margin).expanded(2.0))

        painter.save()
        painter.setOpacity(1.0)
        pen = QPen(QColor(cfg.selection_color))
        pen.setWidthF(cfg.selection_width)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(outline)
        painter.restore()

    def paint_status(self, painter: QPainter, text: str, viewport: Viewport) -> None:
        painter.save()
        painter.setOpacity(1.0)
        painter.setFont(self._status_font)
        painter.setPen(self._status_color)
        painter.drawText(16, int(viewport.height) - 16, text)
        painter.restore()
