import pytest

from hikescout.config import Settings
from hikescout.exceptions import ActionError


class FakeBrowser:
    """Records browser calls instead of driving Playwright."""

    def __init__(self, navigate_errors=None, go_back_errors=0):
        self.calls = []
        self.navigate_errors = dict(navigate_errors or {})
        self.go_back_errors = go_back_errors
        self.started = False
        self.closed = False

    def start(self):
        self.started = True
        return self

    def close(self):
        self.closed = True

    def navigate(self, url, wait_until="domcontentloaded"):
        self.calls.append(("navigate", url))
        if url in self.navigate_errors:
            raise self.navigate_errors[url]

    def wait(self, ms):
        self.calls.append(("wait", ms))

    def scroll_to_bottom(self, steps=5, percentage=80, delay_ms=500):
        self.calls.append(("scroll_to_bottom", steps, percentage, delay_ms))

    def go_back(self):
        self.calls.append(("go_back",))
        if self.go_back_errors:
            self.go_back_errors -= 1
            raise RuntimeError("history is empty")


class FakeExtractor:
    """
    Scripted extraction capability.

    `results` are consumed in order by extract(); a dict is validated against
    the requested schema, an exception is raised.
    """

    def __init__(self, results=None, act_errors=None):
        self.results = list(results or [])
        self.act_errors = dict(act_errors or {})
        self.extract_calls = []
        self.actions = []

    def extract(self, instruction, schema):
        self.extract_calls.append((instruction, schema))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return schema.model_validate(result)

    def act(self, instruction, timeout_ms=None):
        self.actions.append((instruction, timeout_ms))
        error = self.act_errors.get(instruction)
        if error is not None:
            raise error


class PagedBrowser(FakeBrowser):
    """FakeBrowser that also tracks which page is showing."""

    def __init__(self, reload_errors=0, **kwargs):
        super().__init__(**kwargs)
        self.page = None
        self.reload_errors = reload_errors

    def navigate(self, url, wait_until="domcontentloaded"):
        reloading = self.page is not None
        super().navigate(url, wait_until)
        if reloading and self.reload_errors:
            self.reload_errors -= 1
            raise TimeoutError("net::ERR_TIMED_OUT")
        self.page = "calendar"

    def go_back(self):
        super().go_back()
        self.page = "calendar"


class PagedExtractor(FakeExtractor):
    """
    FakeExtractor bound to a PagedBrowser.

    Event links can only be clicked on the calendar, and clicking one leaves
    the browser on that event's detail page.
    """

    def __init__(self, browser, results=None, act_errors=None):
        super().__init__(results, act_errors)
        self.browser = browser

    def act(self, instruction, timeout_ms=None):
        super().act(instruction, timeout_ms)
        if instruction.startswith("click on the"):
            if self.browser.page != "calendar":
                raise ActionError(f"No event link on the {self.browser.page} page")
            self.browser.page = "detail"


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def make_browser():
    return FakeBrowser


@pytest.fixture
def make_extractor():
    return FakeExtractor


@pytest.fixture
def make_paged_browser():
    return PagedBrowser


@pytest.fixture
def make_paged_extractor():
    return PagedExtractor
