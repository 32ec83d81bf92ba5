import pytest
import requests
import shiboken6
from PySide6.QtCore import QCoreApplication, QEvent

from driftcanvas.controller.loader import ImageLoader
from driftcanvas.model.bitmap import BitmapHandle, BitmapState
from driftcanvas.errors import ImageDecodeError, ImageLoadError

from conftest import solid_image


class FakeResponse:
    def __init__(self, content: bytes = b"", status: int = 200) -> None:
        self.content = content
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc

    def get(self, url, timeout=None):
        if self.exc is not None:
            raise self.exc
        return self.response


def test_fetch_returns_body() -> None:
    loader = ImageLoader(session=FakeSession(FakeResponse(b"\x89PNG...")))
    assert loader.fetch("https://x/a.png") == b"\x89PNG..."


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(exc=requests.ConnectionError("offline")),
        FakeSession(FakeResponse(b"nope", status=404)),
        FakeSession(FakeResponse(b"")),
    ],
)
def test_fetch_failures_raise_image_load_error(session) -> None:
    with pytest.raises(ImageLoadError):
        ImageLoader(session=session).fetch("https://x/a.png")


def test_handle_starts_pending() -> None:
    handle = BitmapHandle("https://x/a.png")
    assert handle.state is BitmapState.PENDING
    assert not handle.is_ready()


def test_decode_failure_marks_handle_failed(qapp) -> None:
    handle = BitmapHandle("https://x/a.png")
    errors = []
    handle.failed.connect(errors.append)

    handle.complete(b"garbage")

    assert handle.state is BitmapState.FAILED
    assert not handle.is_ready()
    assert isinstance(errors[0], ImageDecodeError)


def test_fail_after_ready_is_ignored(qapp) -> None:
    handle = BitmapHandle.from_image(solid_image())
    handle.fail(ImageLoadError("late"))
    assert handle.is_ready()


def test_release_drops_image(qapp) -> None:
    handle = BitmapHandle.from_image(solid_image())
    handle.release()
    assert handle.image is None
    assert handle.state is BitmapState.RELEASED
    assert not handle.is_ready()


def test_release_schedules_deletion_once(qapp) -> None:
    handle = BitmapHandle.from_image(solid_image())
    handle.release()
    handle.release()

    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete.value)

    assert not shiboken6.isValid(handle)


def test_loader_reexports_model_bitmap() -> None:
    from driftcanvas.controller import loader

    assert loader.BitmapHandle is BitmapHandle
    assert loader.BitmapState is BitmapState
