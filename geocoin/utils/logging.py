"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Per-request access lines drown out game events unless debugging
_NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger for game output.

    Calling it again replaces the previous handler rather than stacking a
    second one, so the server lifespan can run it on every start.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-24s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for old in [h for h in root.handlers if getattr(h, "_geocoin", False)]:
        root.removeHandler(old)
    handler._geocoin = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    quiet = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
