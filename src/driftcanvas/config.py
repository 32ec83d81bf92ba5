"""
Configuration & Constants
=========================
This module serves as the central registry for the tunables of the canvas.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (durations, frame sizes, colours)
   scattered throughout the model and the view.
2. Deployment: It lets a packaged build be tuned through environment
   variables without touching the code.
3. Secrets: It resolves the API token from the environment or from the
   persistent QSettings store, so no credential lives in the source tree.

Exports:
    CanvasConfig: Frozen dataclass with every tunable.
    resolve_api_token: Token lookup (env first, then QSettings).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "DRIFTCANVAS_"
TOKEN_ENV_VAR = "ITP_IMA_TOKEN"
TOKEN_SETTINGS_KEY = "api/token"

# Only these fields may be overridden from the environment.
_ENV_OVERRIDABLE: tuple[str, ...] = (
    "active_ms",
    "transition_ms",
    "tick_interval_ms",
    "top_padding",
    "generator_url",
    "generator_model",
    "request_timeout_s",
)


@dataclass(frozen=True)
class CanvasConfig:
    # Lifecycle (milliseconds)
    active_ms: float = 10000.0
    transition_ms: float = 6000.0

    # Card frame (Y2K pastel window)
    frame_margin: float = 14.0
    frame_radius: float = 16.0
    frame_border: float = 3.0
    frame_colors: tuple[str, ...] = ("#d5c4ff", "#ffe88a", "#ffd6f5")  # lavender, yellow, pink
    selection_color: str = "#000000"
    selection_width: float = 2.0

    # Item geometry and motion
    item_width: float = 260.0
    item_height: float = 260.0
    top_padding: float = 70.0
    spawn_jitter: float = 60.0
    spawn_min_x: float = 20.0
    spawn_min_y: float = 80.0
    max_speed: float = 0.4  # px per tick, per axis

    # Rendering
    tick_interval_ms: int = 16
    mosaic_max_block: float = 28.0
    background_color: str = "#fbf7ff"
    placeholder_color: str = "#eeeeee"
    status_color: tuple[int, int, int, int] = (0, 0, 0, 178)
    status_font_family: str = "Arial"
    status_font_px: int = 14

    # Image generation collaborator
    generator_url: str = "https://itp-ima-replicate-proxy.web.app/api/create_n_get"
    generator_model: str = "prunaai/z-image-turbo"
    prompt_style_suffix: str = ", cartoon style, illustrated, vibrant colors, 2D animation aesthetic"
    request_timeout_s: float = 120.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CanvasConfig:
        """
        Build a config with overrides read from DRIFTCANVAS_* variables.

        Unparsable values are logged and skipped, the default stays in place.
        """
        environ = os.environ if environ is None else environ
        base = cls()
        types = {f.name: type(getattr(base, f.name)) for f in fields(cls)}
        overrides: dict[str, object] = {}

        for name in _ENV_OVERRIDABLE:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            try:
                overrides[name] = types[name](raw)
            except ValueError:
                logger.warning(f"Ignoring invalid value {raw!r} for {ENV_PREFIX + name.upper()}")
                continue
            logger.info(f"Config override: {name} = {overrides[name]!r}")

        return replace(base, **overrides) if overrides else base

    def frame_color(self, index: int) -> str:
        return self.frame_colors[index % len(self.frame_colors)]


def resolve_api_token(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the bearer token for the generation proxy, or None if unset."""
    environ = os.environ if environ is None else environ
    token = environ.get(TOKEN_ENV_VAR, "").strip()
    if token:
        return token

    from PySide6.QtCore import QSettings

    value = QSettings().value(TOKEN_SETTINGS_KEY, "", type=str)
    return value.strip() or None
