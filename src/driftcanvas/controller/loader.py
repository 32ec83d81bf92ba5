"""
Image Loader
============
Downloads a generated image and materializes it as a paintable bitmap.

`ImageLoader.load(url)` returns a pending `BitmapHandle` immediately; a
background worker downloads the bytes and the handle decodes them on the GUI
thread. Callers must treat a handle that is not ready as "not yet paintable"
and never wait on it.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from driftcanvas.errors import ImageLoadError
from driftcanvas.controller.workers import ImageFetchWorker
from driftcanvas.model.bitmap import BitmapHandle, BitmapState

__all__ = ["BitmapHandle", "BitmapState", "ImageLoader"]

logger = logging.getLogger(__name__)


class ImageLoader:
    def __init__(self, timeout_s: float = 30.0, session: Optional[requests.Session] = None) -> None:
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self._workers: set[ImageFetchWorker] = set()

    def fetch(self, url: str) -> bytes:
        """Blocking download. Raises ImageLoadError on any failure or an empty body."""
        try:
            response = self.session.get(url, timeout=self.timeout_s)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Image download failed for {url}: {e}")
            raise ImageLoadError(str(e)) from e

        data = response.content
        if not data:
            raise ImageLoadError(f"Empty response body from {url}")
        return data

    def load(self, url: str) -> BitmapHandle:
        handle = BitmapHandle(url)
        worker = ImageFetchWorker(self.fetch, url)
        worker.fetched.connect(handle.complete)
        worker.error_occurred.connect(handle.fail)
        worker.finished.connect(lambda: self._workers.discard(worker))
        self._workers.add(worker)
        logger.info(f"Loading image: {url}")
        worker.start()
        return handle

    def pending_count(self) -> int:
        return len(self._workers)
