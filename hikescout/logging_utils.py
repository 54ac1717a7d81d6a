"""
Logging helpers for hikescout.

Log lines go to stderr so they stay apart from the report on stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level() -> str:
    env_level = os.getenv("LOG_LEVEL")
    if env_level:
        return env_level.upper()
    if os.getenv("SCRAPER_DEBUG", "0") == "1" or os.getenv("DEBUG", "0") == "1":
        return "DEBUG"
    return "INFO"


def configure_logging(level: Optional[str] = None) -> None:
    """Set up the root logger. An explicit level overrides LOG_LEVEL / DEBUG."""
    logging.basicConfig(
        level=(level or _resolve_level()).upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=level is not None,
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def is_debug() -> bool:
    return logging.getLogger("hikescout").isEnabledFor(logging.DEBUG)
