"""
Runtime configuration for hikescout.

Settings are read from the environment (a `.env` file is loaded by the entry
script). The list of target sites is static.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError
from .models import SiteConfig, SiteStrategy


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_DATES_FILE = "weekend_dates.md"

SITES: tuple[SiteConfig, ...] = (
    SiteConfig(
        url="https://monatrailskenya.wordpress.com/category/upcoming-hikes/",
        company="Mona Trails Kenya",
        strategy=SiteStrategy.LIST_PAGE,
    ),
    SiteConfig(
        url="https://matembezitravel.com/expedition/",
        company="Matembezi Travel",
        strategy=SiteStrategy.LIST_PAGE,
    ),
    SiteConfig(
        url="https://aviexpeditions.com/events/month",
        company="Avi Expeditions",
        strategy=SiteStrategy.CALENDAR_DRILLDOWN,
    ),
)


def _read_non_negative_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
        return value if value >= 0 else default
    except ValueError:
        return default


def _read_positive_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
        return value if value > 0 else default
    except ValueError:
        return default


def _read_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Timing, browser and model settings for a run."""
    openai_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    dates_file: str = DEFAULT_DATES_FILE
    headless: bool = True
    viewport_width: int = 1024
    viewport_height: int = 768
    navigation_timeout_ms: int = 30000
    openai_timeout_s: float = 120.0
    max_content_length: int = 40000
    settle_ms: int = 2000
    back_settle_ms: int = 1500
    overlay_timeout_ms: int = 5000
    scroll_steps: int = 5
    scroll_percentage: int = 80
    scroll_delay_ms: int = 500

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            dates_file=os.getenv("HIKE_DATES_FILE", DEFAULT_DATES_FILE),
            headless=_read_bool_env("HEADLESS", True),
            navigation_timeout_ms=_read_non_negative_int_env("NAVIGATION_TIMEOUT_MS", 30000),
            openai_timeout_s=_read_positive_float_env("OPENAI_TIMEOUT_S", 120.0),
            max_content_length=_read_non_negative_int_env("MAX_CONTENT_LENGTH", 40000),
        )

    def require_api_key(self) -> str:
        if not self.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY not configured")
        return self.openai_api_key
