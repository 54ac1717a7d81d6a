"""
Browser Session

A single Chromium page shared by all site scrapes. Wraps the Playwright sync
API with the handful of operations the scraping strategies need: navigate,
scroll, go back, read the HTML and click elements picked by the extractor.
"""

from typing import Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from .config import Settings
from .logging_utils import get_logger, is_debug


# Attribute used to tag clickable elements so the extractor can refer to them by id
ELEMENT_ID_ATTR = "data-hikescout-id"

SCROLL_SCRIPT = """(pct) => {
    const viewportHeight = window.innerHeight;
    window.scrollBy(0, (viewportHeight * pct) / 100);
}"""

CLICKABLE_ELEMENTS_SCRIPT = """([attr, limit]) => {
    const selector = 'a, button, [role="button"], [onclick], input[type="submit"], input[type="button"]';
    const found = [];
    for (const el of document.querySelectorAll(selector)) {
        if (found.length >= limit) break;
        const rect = el.getBoundingClientRect();
        const style = window.getComputedStyle(el);
        if (rect.width === 0 || rect.height === 0 || style.visibility === 'hidden' || style.display === 'none') {
            continue;
        }
        const text = (el.innerText || el.value || el.getAttribute('aria-label') || el.title || '').trim();
        if (!text) continue;
        const id = String(found.length);
        el.setAttribute(attr, id);
        found.push({id: id, tag: el.tagName.toLowerCase(), text: text.slice(0, 120), href: el.getAttribute('href') || ''});
    }
    return found;
}"""


class BrowserSession:
    """
    Owns the Playwright driver, browser and the one page reused across sites.

    Usage:
        with BrowserSession(settings) as browser:
            browser.navigate(url)
            html = browser.content()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.logger = get_logger(__name__)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    def start(self) -> "BrowserSession":
        """Launch Chromium and open the shared page."""
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(headless=self.settings.headless)
        self._page = self._browser.new_page(
            viewport={
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
        )
        self._page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        self.logger.info("Browser started (headless=%s)", self.settings.headless)
        return self

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not started")
        return self._page

    def navigate(self, url: str, wait_until: str = "domcontentloaded") -> None:
        self.logger.info("Navigating to %s", url)
        self.page.goto(url, wait_until=wait_until)

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)

    def scroll(self, percentage: int = 50, delay_ms: int = 500) -> None:
        """Scroll down by a percentage of the viewport height, then let the page settle."""
        self.page.evaluate(SCROLL_SCRIPT, percentage)
        self.wait(delay_ms)

    def scroll_to_bottom(self, steps: int = 5, percentage: int = 80, delay_ms: int = 500) -> None:
        """Scroll in fixed steps to trigger lazy-loaded content."""
        for _ in range(steps):
            self.scroll(percentage, delay_ms)

    def go_back(self) -> None:
        self.page.go_back(wait_until="domcontentloaded")

    def content(self) -> str:
        return self.page.content()

    @property
    def url(self) -> str:
        return self.page.url

    def clickable_elements(self, limit: int = 200) -> list[dict]:
        """
        Tag visible links and buttons with an id and describe them.

        Returns:
            List of dicts with `id`, `tag`, `text` and `href` keys.
        """
        elements = self.page.evaluate(CLICKABLE_ELEMENTS_SCRIPT, [ELEMENT_ID_ATTR, limit])
        if is_debug():
            self.logger.debug("Found %s clickable elements on %s", len(elements), self.url)
        return elements

    def click(self, element_id: str, timeout_ms: Optional[int] = None) -> None:
        selector = f'[{ELEMENT_ID_ATTR}="{element_id}"]'
        if timeout_ms is None:
            self.page.click(selector)
        else:
            self.page.click(selector, timeout=timeout_ms)

    def close(self):
        """Cleanup resources."""
        try:
            if self._browser is not None:
                self._browser.close()
        finally:
            self._browser = None
            self._page = None
            if self._playwright is not None:
                self._playwright.stop()
                self._playwright = None

    def __enter__(self):
        """Context manager entry."""
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
