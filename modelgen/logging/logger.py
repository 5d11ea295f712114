# modelgen/logging/logger.py
"""
Unified logging setup for modelgen.

All modules use:
    from modelgen.logging.logger import get_logger
    logger = get_logger(__name__)

Log namespaces follow module paths, so `modelgen.build` can be tuned
independently of `modelgen.synth`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure the root logging handler.

    Called once early in the application lifecycle (e.g., CLI entrypoint).
    Safe to call multiple times, handler duplication is prevented.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here, configuration happens in configure_logging().
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "DEFAULT_FORMAT"]
