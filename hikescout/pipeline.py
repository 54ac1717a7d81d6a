"""
Scraping Pipeline

Runs every configured site through its scraping strategy, one after the
other, on a single shared browser page:

1. Start the browser session
2. For each site (in configured order): dispatch to ListPage or CalendarDrilldown
3. Collect one ScrapedResult per site
4. Close the browser session, whatever happened in between
"""

from typing import Optional, Sequence

from openai import OpenAI

from .browser import BrowserSession
from .config import Settings
from .extractor import PageExtractor
from .logging_utils import get_logger
from .models import ScrapedResult, SiteConfig, SiteStrategy
from .strategies import strategy_for


logger = get_logger(__name__)


class ScrapingPipeline:
    """
    Sequential multi-site scrape.

    Usage:
        with ScrapingPipeline(openai_client, settings) as pipeline:
            results = pipeline.run(SITES, "this weekend")
    """

    def __init__(
        self,
        openai_client: Optional[OpenAI] = None,
        settings: Optional[Settings] = None,
        browser: Optional[BrowserSession] = None,
        extractor=None,
        calendar_aware: bool = True,
    ):
        """
        Initialize the scraping pipeline.

        Args:
            openai_client: OpenAI client used by the page extractor.
            settings: Run settings (defaults from the environment).
            browser: Browser session to use instead of a new Playwright one.
            extractor: Extraction capability to use instead of a PageExtractor.
            calendar_aware: If False, every site is scraped as a plain list page.
        """
        self.settings = settings or Settings.from_env()
        self.browser = browser or BrowserSession(self.settings)
        if extractor is None:
            client = openai_client or OpenAI(
                api_key=self.settings.require_api_key(),
                timeout=self.settings.openai_timeout_s,
            )
            extractor = PageExtractor(client, self.browser, self.settings)
        self.extractor = extractor
        self.calendar_aware = calendar_aware

    def _strategy_kind(self, site: SiteConfig) -> SiteStrategy:
        if not self.calendar_aware:
            return SiteStrategy.LIST_PAGE
        return site.strategy

    def run(self, sites: Sequence[SiteConfig], target_dates: str) -> list[ScrapedResult]:
        """
        Scrape all sites in order.

        Args:
            sites: Sites to scrape.
            target_dates: Date window phrase, passed verbatim to the strategies.

        Returns:
            One ScrapedResult per site, in the same order as `sites`.
        """
        results: list[ScrapedResult] = []

        for i, site in enumerate(sites, 1):
            logger.info("=" * 60)
            logger.info("[%s/%s] Scraping: %s", i, len(sites), site.company)
            logger.info("URL: %s", site.url)
            logger.info("Looking for hikes on: %s", target_dates)
            logger.info("=" * 60)

            scraper = strategy_for(
                self._strategy_kind(site), self.browser, self.extractor, self.settings
            )
            result = scraper.scrape(site, target_dates)
            results.append(result)

        total = sum(len(result.hikes) for result in results)
        logger.info("Pipeline complete: %s hike(s) from %s site(s)", total, len(results))
        return results

    def close(self):
        """Cleanup resources (browser session)."""
        self.browser.close()

    def __enter__(self):
        """Context manager entry."""
        try:
            self.browser.start()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
