"""Shared logging format and configuration for lesson-video handlers and services."""

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def _level_from_env(default: int) -> int:
    name = os.environ.get("LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logger for this process. Call once at startup (module import for Lambdas).

    LOG_LEVEL (e.g. DEBUG) overrides level. The Lambda runtime installs its own
    root handler before our code runs, so basicConfig alone would be a no-op there;
    in that case the existing handlers get our format instead.
    """
    level = _level_from_env(level)
    root = logging.getLogger()
    if root.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
        for handler in root.handlers:
            handler.setFormatter(formatter)
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
