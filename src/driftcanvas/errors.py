"""Failure kinds of a prompt request. None of them is fatal to the canvas."""


class CanvasError(Exception):
    """Base class; the message is what ends up in the status line."""
    status_text: str = "Something went wrong."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.status_text)
        self.detail = detail


class EmptyPromptError(CanvasError):
    status_text = ""


class MissingTokenError(CanvasError):
    status_text = "Missing token. Set ITP_IMA_TOKEN and try again."


class RequestFailureError(CanvasError):
    status_text = "Request failed (token expired or network error)."


class EmptyResultError(CanvasError):
    status_text = "No image returned. Try a different prompt."


class ImageLoadError(CanvasError):
    status_text = "Image failed to load."


class ImageDecodeError(CanvasError):
    status_text = "Image could not be decoded."
