"""
hikescout Scraper Package

Collects upcoming guided hikes for a target weekend from travel-operator
websites and prints a console report.
"""

from .models import HikeRecord, ScrapedResult, SiteConfig, SiteStrategy
from .dates import resolve_target_dates
from .pipeline import ScrapingPipeline
from .report import format_report, print_report

__all__ = [
    "HikeRecord",
    "ScrapedResult",
    "SiteConfig",
    "SiteStrategy",
    "resolve_target_dates",
    "ScrapingPipeline",
    "format_report",
    "print_report",
]
