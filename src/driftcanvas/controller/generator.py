"""
Image Generation Client
=======================
Turns a text prompt into an image URL through the Replicate proxy.

This is the only place that knows the proxy's request and response shape.
It is blocking and is meant to run inside a background worker.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from driftcanvas.config import CanvasConfig
from driftcanvas.errors import EmptyResultError, RequestFailureError

logger = logging.getLogger(__name__)


def extract_image_url(payload: Any) -> Optional[str]:
    """
    Pull the image reference out of a proxy response.

    The proxy answers ``{"output": "<url>"}`` or ``{"output": ["<url>", ...]}``.
    """
    if not isinstance(payload, dict):
        return None
    out = payload.get("output")
    if isinstance(out, str):
        return out or None
    if isinstance(out, list) and out and isinstance(out[0], str):
        return out[0] or None
    return None


class ImageGenerationClient:
    def __init__(self, config: CanvasConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.generator_model,
            "input": {
                "prompt": f"{prompt}{self.config.prompt_style_suffix}",
            },
        }

    def generate(self, prompt: str, token: str) -> str:
        """
        Request an image for the prompt and return its URL.

        Raises:
            RequestFailureError: transport error, HTTP error status or non-JSON body.
            EmptyResultError: the proxy answered but gave no usable image URL.
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }
        logger.info(f"Requesting image for prompt: {prompt!r}")

        try:
            response = self.session.post(
                self.config.generator_url,
                json=self.build_payload(prompt),
                headers=headers,
                timeout=self.config.request_timeout_s,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            # JSON decode errors are RequestException subclasses in requests >= 2.27
            logger.error(f"Image generation request failed: {e}")
            raise RequestFailureError(str(e)) from e

        image_url = extract_image_url(payload)
        if not image_url:
            logger.warning(f"Image generation returned no usable output for prompt {prompt!r}")
            raise EmptyResultError()

        logger.info(f"Image generated: {image_url}")
        return image_url
