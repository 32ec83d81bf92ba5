import logging

import pytest

from driftcanvas.logging_config import FILE_ENV, LEVEL_ENV, LOG_NAMESPACE, resolve_level, setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOG_NAMESPACE)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved_level)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, logging.INFO),
        ("", logging.INFO),
        ("debug", logging.DEBUG),
        (" Warning ", logging.WARNING),
        ("15", 15),
        (logging.ERROR, logging.ERROR),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_level(value, expected) -> None:
    assert resolve_level(value) == expected


def test_level_comes_from_environment(clean_logger) -> None:
    logger = setup_logging(environ={LEVEL_ENV: "debug"})
    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_explicit_level_beats_environment(clean_logger) -> None:
    logger = setup_logging(level="error", environ={LEVEL_ENV: "debug"})
    assert logger.level == logging.ERROR


def test_repeated_setup_does_not_stack_handlers(clean_logger) -> None:
    setup_logging(environ={})
    logger = setup_logging(environ={})
    assert len(logger.handlers) == 1


def test_log_file_from_environment(clean_logger, tmp_path) -> None:
    path = tmp_path / "canvas.log"
    logger = setup_logging(environ={FILE_ENV: str(path), LEVEL_ENV: "INFO"})
    logger.getChild("controller").info("Added item abc")
    for handler in logger.handlers:
        handler.flush()

    text = path.read_text(encoding="utf-8")
    assert "Logging initialized at INFO." in text
    assert "driftcanvas.controller - INFO - Added item abc" in text
