"""
Logging Configuration
=====================
Console (and optional file) output for everything under the 'driftcanvas'
logger namespace.

Environment:
    DRIFTCANVAS_LOG_LEVEL   level name ("debug", "WARNING") or number; default INFO
    DRIFTCANVAS_LOG_FILE    optional path, truncated on every start
"""
import logging
import os
import sys
from typing import Mapping, Optional, Union

LOG_NAMESPACE = "driftcanvas"
LEVEL_ENV = "DRIFTCANVAS_LOG_LEVEL"
FILE_ENV = "DRIFTCANVAS_LOG_FILE"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(value: Union[str, int, None], default: int = logging.INFO) -> int:
    """Turn a level name or number into a logging level. Unknown names give `default`."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = value.strip()
    if not text:
        return default
    if text.isdigit():
        return int(text)
    # getLevelName maps known names to ints and anything else to "Level <name>"
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: Union[str, int, None] = None,
    log_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """
    Configures the 'driftcanvas' logger. Arguments left as None are read from
    the environment.

    Args:
        level: Logging level or level name.
        log_file: Optional path to also write the log to.
        environ: Mapping to read the variables from (defaults to os.environ).
    """
    env = os.environ if environ is None else environ
    resolved = resolve_level(env.get(LEVEL_ENV) if level is None else level)
    if log_file is None:
        log_file = env.get(FILE_ENV) or None

    logger = logging.getLogger(LOG_NAMESPACE)
    logger.setLevel(resolved)

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(resolved)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(resolved)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(resolved)}.")
    return logger
