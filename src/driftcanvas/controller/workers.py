"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for the network round trips.

Why is this file needed?
------------------------
1. Responsiveness: The image request can take many seconds. Running it on
   the GUI thread would freeze the animation.
2. Signals: Results cross back to the GUI thread only through Qt Signals,
   so item state is never touched from a worker.

Classes:
    GenerationWorker: prompt -> image URL.
    ImageFetchWorker: image URL -> raw bytes.
"""
import logging
from typing import Callable

from PySide6.QtCore import QThread, Signal

from driftcanvas.errors import CanvasError, RequestFailureError, ImageLoadError

logger = logging.getLogger(__name__)


class GenerationWorker(QThread):
    url_ready = Signal(str, str)  # (prompt, image_url)
    error_occurred = Signal(object)  # CanvasError

    def __init__(self, generate: Callable[[str, str], str], prompt: str, token: str) -> None:
        super().__init__()
        self._generate = generate
        self.prompt = prompt
        self._token = token

    def run(self) -> None:
        try:
            url = self._generate(self.prompt, self._token)
        except CanvasError as e:
            self.error_occurred.emit(e)
            return
        except Exception as e:
            logger.exception("Unexpected error in GenerationWorker")
            self.error_occurred.emit(RequestFailureError(str(e)))
            return
        self.url_ready.emit(self.prompt, url)


class ImageFetchWorker(QThread):
    fetched = Signal(object)  # bytes
    error_occurred = Signal(object)  # CanvasError

    def __init__(self, fetch: Callable[[str], bytes], url: str) -> None:
        super().__init__()
        self._fetch = fetch
        self.url = url

    def run(self) -> None:
        try:
            data = self._fetch(self.url)
        except CanvasError as e:
            self.error_occurred.emit(e)
            return
        except Exception as e:
            logger.exception("Unexpected error in ImageFetchWorker")
            self.error_occurred.emit(ImageLoadError(str(e)))
            return
        self.fetched.emit(data)
