"""
Target date window.

The window is a free-text phrase (e.g. "Saturday 25th - Sunday 26th October")
kept in a small Markdown file next to the script. It is embedded verbatim in
the extraction instructions and never parsed.
"""

from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_DATES_FILE
from .logging_utils import get_logger


FALLBACK_WINDOW = "this weekend"

logger = get_logger(__name__)


def resolve_target_dates(path: Optional[Union[str, Path]] = None) -> str:
    """
    Read the target date phrase.

    Returns the stripped file contents, or "this weekend" if the file is
    missing, unreadable or empty.
    """
    dates_path = Path(path or DEFAULT_DATES_FILE)
    try:
        content = dates_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading %s: %s", dates_path, e)
        return FALLBACK_WINDOW

    if not content:
        logger.warning("%s is empty, using '%s'", dates_path, FALLBACK_WINDOW)
        return FALLBACK_WINDOW
    return content
