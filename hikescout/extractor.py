"""
Page Extractor

LLM-backed operations on the current browser page:

- extract(): convert the page to Markdown and ask the model for JSON matching
  a pydantic schema. The reply is validated; anything that does not fit the
  schema raises ExtractionError.
- act(): list the clickable elements on the page, let the model pick the one
  matching a natural-language instruction and click it.
"""

import json
import time
from typing import Optional, TypeVar

from bs4 import BeautifulSoup
from markdownify import markdownify as md
from openai import OpenAI, OpenAIError
from playwright.sync_api import Error as PlaywrightError
from pydantic import BaseModel, Field, ValidationError

from .browser import BrowserSession
from .config import Settings
from .exceptions import ActionError, ExtractionError
from .logging_utils import get_logger, is_debug


SchemaT = TypeVar("SchemaT", bound=BaseModel)


EXTRACTION_SYSTEM_PROMPT = """You extract structured data from the text content of web pages.

Rules:
- Use only information present in the page content. Never invent values.
- Leave optional fields out (or null) when the page does not state them.
- Answer with a single JSON object that matches the given JSON schema exactly.
- Do not wrap the JSON in explanations."""

EXTRACTION_USER_PROMPT = """Instruction:
{instruction}

JSON schema of the answer:
{schema}

Page URL: {url}

Page content (Markdown):
{content}"""

ACTION_SYSTEM_PROMPT = """You control a web browser. Given an instruction and a numbered list of
clickable elements on the current page, pick the single element that carries out the instruction.

Answer with a JSON object: {"element_id": <id or null>, "reason": "<short reason>"}
Use null if no element matches the instruction."""

ACTION_USER_PROMPT = """Instruction: {instruction}

Clickable elements (id | tag | text | href):
{elements}"""


class ActionChoice(BaseModel):
    """Model reply for act()."""
    element_id: Optional[int] = Field(None, description="Id of the element to click")
    reason: Optional[str] = Field(None, description="Why this element was chosen")


def _strip_code_fences(text: str) -> str:
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    return text.strip()


def parse_structured(text: str, schema: type[SchemaT]) -> SchemaT:
    """
    Validate a model reply against a schema.

    Raises:
        ExtractionError: if the reply is not JSON or does not fit the schema.
    """
    payload = _strip_code_fences(text or "")
    if not payload:
        raise ExtractionError(f"Empty reply for {schema.__name__}")
    try:
        return schema.model_validate_json(payload)
    except ValidationError as e:
        raise ExtractionError(f"Reply does not match {schema.__name__}: {e}") from e


def html_to_markdown(html: str, max_length: int = 40000) -> str:
    """
    Convert HTML to Markdown to reduce token count.

    Removes scripts, styles, and other non-content elements first.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup(["script", "style", "noscript", "iframe", "svg", "img"]):
        tag.decompose()

    for element in soup.find_all(style=lambda x: x and "display:none" in x.replace(" ", "")):
        element.decompose()

    markdown = md(str(soup.body or soup), heading_style="ATX", bullets="-")

    # Clean up excessive whitespace
    lines = [line.strip() for line in markdown.split("\n")]
    markdown = "\n".join(line for line in lines if line)

    if max_length and len(markdown) > max_length:
        markdown = markdown[:max_length] + "\n\n[... Content truncated ...]"
    return markdown


def _remaining(deadline: float, instruction: str) -> float:
    """Seconds left before `deadline`; ActionError once it has passed."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise ActionError(f"Timed out acting on: {instruction}")
    return remaining


def _format_elements(elements: list[dict]) -> str:
    return "\n".join(
        f"{el['id']} | {el.get('tag', '')} | {el.get('text', '')} | {el.get('href', '')}"
        for el in elements
    )


class PageExtractor:
    """
    Extraction and action capability bound to one browser session.

    Usage:
        extractor = PageExtractor(openai_client, browser)
        data = extractor.extract("Find all hikes", HikeListSchema)
        extractor.act("close the cookie banner", timeout_ms=5000)
    """

    def __init__(
        self,
        openai_client: OpenAI,
        browser: BrowserSession,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the PageExtractor.

        Args:
            openai_client: OpenAI client (required).
            browser: Started browser session whose page is read and clicked.
            settings: Model name, timeouts and content limits.
        """
        self.client = openai_client
        self.browser = browser
        self.settings = settings or Settings()
        self.logger = get_logger(__name__)
        self._last_tokens_used = 0

    @property
    def last_tokens_used(self) -> int:
        """Returns the token count from the last model call."""
        return self._last_tokens_used

    def _complete(self, system_prompt: str, user_prompt: str, timeout: float) -> str:
        response = self.client.chat.completions.create(
            model=self.settings.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.1,
            timeout=timeout,
        )
        self._last_tokens_used = response.usage.total_tokens if response.usage else 0
        if is_debug():
            self.logger.debug("LLM tokens used: %s", self._last_tokens_used)
        return response.choices[0].message.content or ""

    def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        """
        Extract data matching `schema` from the current page.

        Raises:
            ExtractionError: if the model call fails or the reply does not fit the schema.
        """
        markdown = html_to_markdown(self.browser.content(), self.settings.max_content_length)
        if is_debug():
            self.logger.debug("Markdown length: %s chars", len(markdown))

        user_prompt = EXTRACTION_USER_PROMPT.format(
            instruction=instruction.strip(),
            schema=json.dumps(schema.model_json_schema(), indent=2),
            url=self.browser.url,
            content=markdown,
        )
        try:
            reply = self._complete(
                EXTRACTION_SYSTEM_PROMPT, user_prompt, self.settings.openai_timeout_s
            )
        except OpenAIError as e:
            raise ExtractionError(f"Extraction call failed: {e}") from e

        return parse_structured(reply, schema)

    def act(self, instruction: str, timeout_ms: Optional[int] = None) -> None:
        """
        Click the element that best matches `instruction`.

        `timeout_ms` bounds the whole action: listing the elements, choosing
        one and clicking it share a single deadline.

        Raises:
            ActionError: if no element matches, the click fails or the deadline passes.
        """
        deadline = time.monotonic() + timeout_ms / 1000 if timeout_ms else None

        elements = self.browser.clickable_elements()
        if not elements:
            raise ActionError(f"No clickable elements for: {instruction}")

        user_prompt = ACTION_USER_PROMPT.format(
            instruction=instruction,
            elements=_format_elements(elements),
        )
        timeout = self.settings.openai_timeout_s
        if deadline is not None:
            timeout = _remaining(deadline, instruction)
        try:
            reply = self._complete(ACTION_SYSTEM_PROMPT, user_prompt, timeout)
            choice = parse_structured(reply, ActionChoice)
        except (OpenAIError, ExtractionError) as e:
            raise ActionError(f"Could not choose an element for '{instruction}': {e}") from e

        known_ids = {str(el["id"]) for el in elements}
        if choice.element_id is None or str(choice.element_id) not in known_ids:
            raise ActionError(f"No element matches: {instruction}")

        if is_debug():
            self.logger.debug(
                "Action '%s' -> element %s (%s)", instruction, choice.element_id, choice.reason
            )
        click_timeout_ms = None
        if deadline is not None:
            click_timeout_ms = max(1, int(_remaining(deadline, instruction) * 1000))
        try:
            self.browser.click(str(choice.element_id), timeout_ms=click_timeout_ms)
        except PlaywrightError as e:
            raise ActionError(f"Click failed for '{instruction}': {e}") from e
