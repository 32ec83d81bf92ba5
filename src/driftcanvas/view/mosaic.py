"""
Mosaic Effect
=============
Pixelates an image by shrinking it into a small working buffer (smoothed)
and stretching it back to display size (unsmoothed), which leaves visible
square blocks. Block size grows linearly with the level:

    level 0   -> block 1   (the effect is bypassed)
    level 1   -> block 1 + max_block

The working buffer is shared between cards and frames. It only ever grows.
"""
from __future__ import annotations

import math
from typing import Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QImage, QPainter


def block_size(level: float, max_block: float = 28.0) -> float:
    return 1.0 + max(0.0, level) * max_block


def working_size(width: float, height: float, level: float, max_block: float = 28.0) -> tuple[int, int]:
    """Resolution of the shrunk copy, at least 2x2."""
    block = block_size(level, max_block)
    return max(2, math.floor(width / block)), max(2, math.floor(height / block))


class MosaicEffect:
    def __init__(self, max_block: float = 28.0) -> None:
        self.max_block = max_block
        self._buffer: Optional[QImage] = None

    @property
    def buffer_size(self) -> tuple[int, int]:
        if self._buffer is None:
            return 0, 0
        return self._buffer.width(), self._buffer.height()

    def ensure_buffer(self, width: int, height: int) -> QImage:
        cur_w, cur_h = self.buffer_size
        if self._buffer is None or cur_w < width or cur_h < height:
            self._buffer = QImage(max(width, cur_w), max(height, cur_h), QImage.Format.Format_ARGB32_Premultiplied)
            self._buffer.fill(Qt.GlobalColor.transparent)
        return self._buffer

    def draw(self, painter: QPainter, image: QImage, target: QRectF, level: float) -> None:
        if level <= 0:
            painter.drawImage(target, image)
            return

        sw, sh = working_size(target.width(), target.height(), level, self.max_block)
        buffer = self.ensure_buffer(sw, sh)
        src = QRectF(0, 0, sw, sh)

        bp = QPainter(buffer)
        bp.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        bp.fillRect(src, Qt.GlobalColor.transparent)
        bp.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)
        bp.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        bp.drawImage(src, image)
        bp.end()

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, False)
        painter.drawImage(target, buffer, src)
        painter.restore()

    def render(self, image: QImage, width: int, height: int, level: float) -> QImage:
        """Standalone variant: returns a new width x height image with the effect applied."""
        out = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        out.fill(Qt.GlobalColor.transparent)
        painter = QPainter(out)
        self.draw(painter, image, QRectF(0, 0, width, height), level)
        painter.end()
        return out
