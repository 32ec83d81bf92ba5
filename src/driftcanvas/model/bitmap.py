"""
Bitmap Handle
=============
The pixel data behind one card, which may still be on its way.

A handle starts PENDING. The loader feeds it the downloaded bytes (or an
error) from its worker thread via queued signals, and the handle decodes on
the GUI thread. Until it is READY the card paints a placeholder.

Signals, in emission order:
    fetched -> the bytes arrived (the card may now be placed)
    ready   -> the image decoded and can be painted
    failed  -> download failed (ImageLoadError) or decode failed (ImageDecodeError)
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtGui import QImage

from driftcanvas.errors import CanvasError, ImageDecodeError

logger = logging.getLogger(__name__)


class BitmapState(StrEnum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"
    RELEASED = "released"


class BitmapHandle(QObject):
    fetched = Signal()
    ready = Signal()
    failed = Signal(object)  # CanvasError

    def __init__(self, url: str = "", parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.url = url
        self.state = BitmapState.PENDING
        self.image: Optional[QImage] = None
        self.error: Optional[CanvasError] = None

    @classmethod
    def from_image(cls, image: QImage, url: str = "") -> BitmapHandle:
        handle = cls(url)
        handle.image = image
        handle.state = BitmapState.READY
        return handle

    def is_ready(self) -> bool:
        return self.state is BitmapState.READY and self.image is not None

    @Slot(object)
    def complete(self, data: bytes) -> None:
        """Accept downloaded bytes, announce them, then decode."""
        if self.state is not BitmapState.PENDING:
            return
        self.fetched.emit()
        self.decode(data)

    def decode(self, data: bytes) -> None:
        if self.state is not BitmapState.PENDING:
            return
        image = QImage.fromData(data)
        if image.isNull():
            logger.warning(f"Could not decode image from {self.url} ({len(data)} bytes)")
            self.fail(ImageDecodeError(self.url))
            return
        self.image = image
        self.state = BitmapState.READY
        logger.debug(f"Decoded {image.width()}x{image.height()} image from {self.url}")
        self.ready.emit()

    @Slot(object)
    def fail(self, error: CanvasError) -> None:
        if self.state is not BitmapState.PENDING:
            return
        self.state = BitmapState.FAILED
        self.error = error
        self.failed.emit(error)

    def release(self) -> None:
        """
        Drop the pixel data and schedule the QObject for deletion.
        Called when the owning card leaves the canvas; Qt cuts every signal
        connection to the handle once the deletion runs.
        """
        if self.state is BitmapState.RELEASED:
            return
        self.image = None
        self.state = BitmapState.RELEASED
        self.deleteLater()
