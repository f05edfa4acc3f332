# core/utils.py
"""
Utility helpers: logger setup and verbosity handling.

Every module asks for its logger through get_logger(); all of them hang off a
single "watch" logger carrying the stream (and optional file) handler, so the
command line verbosity can be applied in one place.
"""

import logging
import os
from typing import Optional

import config

LOGGER_ROOT = "watch"

# -v count -> level; anything above the last entry is DEBUG
_VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(LOGGER_ROOT)
    if root.handlers:
        return root
    formatter = logging.Formatter(config.LOGGING["format"])
    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    root.addHandler(ch)
    if config.LOGGING.get("log_to_file"):
        filename = config.LOGGING["filename"]
        os.makedirs(os.path.dirname(filename), exist_ok=True)
        fh = logging.FileHandler(filename)
        fh.setFormatter(formatter)
        root.addHandler(fh)
    root.setLevel(config.LOGGING["level"])
    return root


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def verbosity_to_level(verbosity: int) -> int:
    if verbosity < 0:
        verbosity = 0
    return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]


def set_verbosity(verbosity: int, level: Optional[int] = None) -> int:
    """Apply a -v count (or an explicit level) to every watch logger."""
    lvl = level if level is not None else verbosity_to_level(verbosity)
    _configure_root().setLevel(lvl)
    return lvl
