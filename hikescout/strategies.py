"""
Site Scraping Strategies

Two ways of getting hikes off an operator's site:

1. ListPage: one extraction pass over a flat listing page.
2. CalendarDrilldown: find matching events on a calendar grid, then open
   each one and extract its detail page. A failing event is kept as a
   name/date-only record so the rest of the batch still goes through.

Both expose `scrape(site, target_dates) -> ScrapedResult` and never raise.
Date filtering is left to the extraction model through the instruction text.
"""

from typing import Optional

from .config import Settings
from .exceptions import ConfigurationError
from .logging_utils import get_logger
from .models import (
    CalendarEventListSchema,
    HikeDetailSchema,
    HikeListSchema,
    HikeRecord,
    ScrapedResult,
    SiteConfig,
    SiteStrategy,
)


logger = get_logger(__name__)


DISMISS_OVERLAY_INSTRUCTION = "close any popup, cookie banner, or accept button if visible"

OPEN_EVENT_INSTRUCTION = 'click on the "{name}" event link on the calendar'

LIST_PAGE_INSTRUCTION = """
Find ONLY hikes, adventures, or expeditions listed on this page that are scheduled for {target_dates}.

IMPORTANT RULES:
- ONLY include hikes happening on {target_dates} - no other dates
- If there are NO hikes scheduled for these specific dates, return an EMPTY array
- DO NOT return hikes for other dates if the target dates have no events
- Look for dates that match: {target_dates}, or phrases like "this weekend", "this Saturday", "this Sunday"

For each matching hike ONLY, extract:
- Name of the hike/adventure
- Location or destination
- Date (exact date if available)
- Time (meeting time or departure time)
- Meeting point or pickup location
- Cost/price
- Contact information (phone, email, WhatsApp, etc.)

If no hikes match {target_dates}, return an empty hikes array.
"""

CALENDAR_INSTRUCTION = """
Look at this calendar and find ONLY events scheduled for {target_dates}.

IMPORTANT RULES:
- ONLY include events happening on {target_dates} - no other dates
- If there are NO events on these specific dates, return an EMPTY array
- DO NOT return events for other dates

Return the event names and their exact dates from the calendar.
If no events match {target_dates}, return an empty events array.
"""

DETAIL_INSTRUCTION = """
Extract all details about this hike/event from this page:
- Name of the hike
- Location or destination
- Date
- Time (meeting time, departure time)
- Meeting point or pickup location
- Cost/price
- Contact information (phone, email, WhatsApp)
"""


def prepare_page(browser, extractor, settings: Settings, url: str, scroll: bool = True) -> None:
    """
    Navigate to `url`, dismiss overlays and (optionally) scroll to load lazy content.

    Navigation errors propagate; a failed overlay dismissal does not.
    """
    browser.navigate(url, wait_until="domcontentloaded")
    browser.wait(settings.settle_ms)

    try:
        extractor.act(DISMISS_OVERLAY_INSTRUCTION, timeout_ms=settings.overlay_timeout_ms)
    except Exception as e:
        logger.debug("No overlay dismissed on %s: %s", url, e)

    if scroll:
        load_lazy_content(browser, settings)


def load_lazy_content(browser, settings: Settings) -> None:
    browser.scroll_to_bottom(
        steps=settings.scroll_steps,
        percentage=settings.scroll_percentage,
        delay_ms=settings.scroll_delay_ms,
    )


class ListPageScraper:
    """Single extraction pass over a listing page."""

    kind = SiteStrategy.LIST_PAGE

    def __init__(self, browser, extractor, settings: Optional[Settings] = None):
        self.browser = browser
        self.extractor = extractor
        self.settings = settings or Settings()

    def scrape(self, site: SiteConfig, target_dates: str) -> ScrapedResult:
        try:
            prepare_page(self.browser, self.extractor, self.settings, site.url)
            data = self.extractor.extract(
                LIST_PAGE_INSTRUCTION.format(target_dates=target_dates), HikeListSchema
            )
        except Exception:
            logger.exception("Error scraping %s", site.company)
            return ScrapedResult(company=site.company, url=site.url, hikes=())

        logger.info("Found %s hike(s) on %s", len(data.hikes), site.company)
        return ScrapedResult(company=site.company, url=site.url, hikes=data.hikes)


class CalendarDrilldownScraper:
    """
    Two-phase scraper for calendar UIs.

    Phase 1 lists the matching events (name + date). Phase 2 opens each
    event, extracts its details and goes back to the calendar.
    """

    kind = SiteStrategy.CALENDAR_DRILLDOWN

    def __init__(self, browser, extractor, settings: Optional[Settings] = None):
        self.browser = browser
        self.extractor = extractor
        self.settings = settings or Settings()

    def scrape(self, site: SiteConfig, target_dates: str) -> ScrapedResult:
        try:
            prepare_page(self.browser, self.extractor, self.settings, site.url, scroll=False)
            calendar = self.extractor.extract(
                CALENDAR_INSTRUCTION.format(target_dates=target_dates), CalendarEventListSchema
            )
        except Exception:
            logger.exception("Error scraping %s", site.company)
            return ScrapedResult(company=site.company, url=site.url, hikes=())

        if not calendar.events:
            logger.info("No calendar events on %s for %s", site.company, target_dates)
            return ScrapedResult(company=site.company, url=site.url, hikes=())

        logger.info("Found %s calendar event(s) on %s", len(calendar.events), site.company)

        hikes: list[HikeRecord] = []
        for event in calendar.events:
            try:
                hikes.append(self._scrape_event(event.name))
            except Exception:
                logger.exception("Error extracting details for %s", event.name)
                hikes.append(HikeRecord(name=event.name, date=event.date))
                self._return_to_calendar(site)

        detailed = sum(1 for hike in hikes if hike.has_details())
        logger.info(
            "Found %s hike(s) on %s (%s with details)", len(hikes), site.company, detailed
        )
        return ScrapedResult(company=site.company, url=site.url, hikes=tuple(hikes))

    def _scrape_event(self, name: str) -> HikeRecord:
        """Open one event, extract its details and return to the calendar."""
        self.extractor.act(OPEN_EVENT_INSTRUCTION.format(name=name))
        self.browser.wait(self.settings.settle_ms)
        load_lazy_content(self.browser, self.settings)

        details = self.extractor.extract(DETAIL_INSTRUCTION, HikeDetailSchema)

        self.browser.go_back()
        self.browser.wait(self.settings.back_settle_ms)
        return details

    def _return_to_calendar(self, site: SiteConfig) -> None:
        """Reload the calendar after a failed event so the next one starts from it."""
        try:
            self.browser.navigate(site.url, wait_until="domcontentloaded")
            self.browser.wait(self.settings.settle_ms)
        except Exception as e:
            logger.error("Could not return to the calendar on %s: %s", site.company, e)


SCRAPERS = {
    SiteStrategy.LIST_PAGE: ListPageScraper,
    SiteStrategy.CALENDAR_DRILLDOWN: CalendarDrilldownScraper,
}


def strategy_for(kind: SiteStrategy, browser, extractor, settings: Optional[Settings] = None):
    """Return the scraper for a site strategy."""
    try:
        scraper_cls = SCRAPERS[SiteStrategy(kind)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"Unknown site strategy: {kind!r}") from None
    return scraper_cls(browser, extractor, settings)
