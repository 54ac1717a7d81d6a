#!/usr/bin/env python3
"""
Scrape Hikes

Finds guided hikes for the target weekend on all configured operator sites
and prints a summary.

Usage:
    1. Put OPENAI_API_KEY in .env
    2. Write the target dates into weekend_dates.md (e.g. "Saturday 25th - Sunday 26th October")
    3. Run: python scrape_hikes.py
"""

import argparse
import sys
from typing import Optional

from dotenv import load_dotenv

from hikescout.config import SITES, Settings
from hikescout.dates import resolve_target_dates
from hikescout.logging_utils import configure_logging, get_logger
from hikescout.pipeline import ScrapingPipeline
from hikescout.report import print_report


logger = get_logger("scrape_hikes")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape upcoming guided hikes for a target weekend.")
    parser.add_argument("--dates-file", help="File holding the target dates (default: weekend_dates.md)")
    parser.add_argument(
        "--no-calendar",
        action="store_true",
        help="Scrape calendar sites as plain list pages (single pass, no drilldown)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the scrape. Returns the process exit code."""
    args = _parse_args(argv)
    load_dotenv()
    if args.verbose:
        configure_logging("DEBUG")

    settings = Settings.from_env()
    if args.dates_file:
        settings.dates_file = args.dates_file
    if args.headed:
        settings.headless = False

    target_dates = resolve_target_dates(settings.dates_file)
    print(f"\nTarget weekend: {target_dates}\n")

    try:
        with ScrapingPipeline(settings=settings, calendar_aware=not args.no_calendar) as pipeline:
            results = pipeline.run(SITES, target_dates)
    except Exception:
        logger.critical("Fatal error", exc_info=True)
        return 1

    print_report(results, target_dates)
    print("\nScraping complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
