"""
Canvas Controller
=================
Glue between the prompt box, the network collaborators and the animated
item state.

Why is this file needed?
------------------------
1. Tick ordering: physics -> lifecycle -> paint -> pruning, once per frame,
   on the GUI thread only.
2. Request flow: prompt -> image URL -> bitmap -> new card, with every
   failure turned into a status line instead of an exception.
3. Single writer: asynchronous completions only append new cards or
   overwrite the status text; they never touch existing cards.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import numpy as np

from driftcanvas.config import CanvasConfig, resolve_api_token
from driftcanvas.controller.generator import ImageGenerationClient
from driftcanvas.controller.interaction import InteractionController
from driftcanvas.controller.loader import ImageLoader
from driftcanvas.controller.workers import GenerationWorker
from driftcanvas.errors import CanvasError, EmptyPromptError, ImageDecodeError, MissingTokenError
from driftcanvas.model.bitmap import BitmapHandle
from driftcanvas.model.item import Item
from driftcanvas.model.lifecycle import LifecycleClock
from driftcanvas.model.physics import PhysicsStep, Viewport
from driftcanvas.model.state import CanvasState
from driftcanvas.model.store import ItemStore

logger = logging.getLogger(__name__)

STATUS_GENERATING = "Generating image..."
STATUS_ADDED = "Added image."


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def validate_prompt(text: Optional[str]) -> str:
    prompt = (text or "").strip()
    if not prompt:
        raise EmptyPromptError()
    return prompt


class CanvasController:
    def __init__(
        self,
        config: CanvasConfig,
        state: Optional[CanvasState] = None,
        client: Optional[ImageGenerationClient] = None,
        loader: Optional[ImageLoader] = None,
        clock: Callable[[], float] = monotonic_ms,
        token_provider: Callable[[], Optional[str]] = resolve_api_token,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config
        self.state = state or CanvasState()
        self.client = client or ImageGenerationClient(config)
        self.loader = loader or ImageLoader(timeout_s=config.request_timeout_s)
        self.now = clock
        self._token_provider = token_provider
        self.rng = rng or np.random.default_rng()

        self.lifecycle = LifecycleClock(config.active_ms, config.transition_ms)
        self.viewport = Viewport(width=0.0, height=0.0, top_padding=config.top_padding)
        self.physics = PhysicsStep(self.lifecycle, self.viewport)
        self.interaction = InteractionController(self.state, self.lifecycle, config.frame_margin)

        self._workers: set[GenerationWorker] = set()

    @property
    def store(self) -> ItemStore:
        return self.state.store

    # ------------------------------------------------------------------------------
    # Per-frame work
    # ------------------------------------------------------------------------------

    def step(self, now: float) -> None:
        """Physics, then lifecycle, for every card. Painting comes after this."""
        items = list(self.store.iterate_bottom_to_top())
        self.physics.advance(items, now, held_id=self.interaction.held_id)
        for item in items:
            item.apply_lifecycle(self.lifecycle.evaluate(now, item.placed_at))

    def prune(self) -> list[Item]:
        """Remove expired cards, release their bitmaps and forget a dead selection."""
        removed = self.store.remove_expired()
        for item in removed:
            item.bitmap.release()
            logger.info(f"Removed expired item {item.id} ({item.prompt!r})")
        if removed:
            self.state.drop_stale_selection()
            if self.state.selected_id is None:
                self.interaction.on_pointer_up()
        return removed

    def tick(self, now: Optional[float] = None, paint: Optional[Callable[[], None]] = None) -> list[Item]:
        now = self.now() if now is None else now
        self.step(now)
        if paint is not None:
            paint()
        return self.prune()

    # ------------------------------------------------------------------------------
    # Prompt -> card
    # ------------------------------------------------------------------------------

    def submit_prompt(self, text: str) -> bool:
        """Returns True if a request was started."""
        try:
            prompt = validate_prompt(text)
        except EmptyPromptError:
            logger.debug("Ignoring empty prompt.")
            return False

        token = self._token_provider()
        if not token:
            logger.warning("No API token configured; request not sent.")
            self.state.set_status(MissingTokenError.status_text)
            return False

        self.state.set_status(STATUS_GENERATING)
        self.state.request_started()
        self._start_generation(prompt, token)
        return True

    def _start_generation(self, prompt: str, token: str) -> None:
        worker = GenerationWorker(self.client.generate, prompt, token)
        worker.url_ready.connect(self.on_image_url)
        worker.error_occurred.connect(self.on_request_failed)
        worker.finished.connect(lambda: self._workers.discard(worker))
        self._workers.add(worker)
        worker.start()

    def on_image_url(self, prompt: str, image_url: str) -> BitmapHandle:
        self.state.request_finished()
        handle = self.loader.load(image_url)
        handle.fetched.connect(lambda: self.place_item(prompt, image_url, handle))
        handle.failed.connect(self.on_image_failed)
        return handle

    def on_request_failed(self, error: CanvasError) -> None:
        self.state.request_finished()
        logger.warning(f"Prompt request failed: {type(error).__name__}: {error}")
        self.state.set_status(error.status_text)

    def on_image_failed(self, error: CanvasError) -> None:
        if isinstance(error, ImageDecodeError):
            # The card is already on the canvas and stays as a placeholder.
            logger.warning(f"Keeping undecodable image as placeholder: {error}")
        self.state.set_status(error.status_text)

    def spawn_position(self) -> tuple[float, float]:
        cfg = self.config
        jitter = cfg.spawn_jitter
        x = (self.viewport.width - cfg.item_width) * 0.5 + self.rng.uniform(-jitter, jitter)
        y = (self.viewport.height - cfg.item_height) * 0.5 + self.rng.uniform(-jitter, jitter)
        return max(cfg.spawn_min_x, float(x)), max(cfg.spawn_min_y, float(y))

    def place_item(self, prompt: str, image_url: str, handle: BitmapHandle) -> Item:
        cfg = self.config
        x, y = self.spawn_position()
        vx, vy = self.rng.uniform(-cfg.max_speed, cfg.max_speed, size=2)
        item = Item(
            prompt=prompt,
            source_url=image_url,
            bitmap=handle,
            x=x,
            y=y,
            w=cfg.item_width,
            h=cfg.item_height,
            vx=float(vx),
            vy=float(vy),
            placed_at=self.now(),
            frame_color_index=self.store.next_frame_color_index(len(cfg.frame_colors)),
        )
        self.store.append(item)
        self.state.select(item.id)
        self.state.set_status(STATUS_ADDED)
        logger.info(f"Added item {item.id} for prompt {prompt!r}")
        return item
