"""
Console report for a scraping run.
"""

import sys
from typing import Optional, Sequence, TextIO

from .models import HikeRecord, ScrapedResult


RULE_WIDTH = 70

# (label, attribute) for the optional hike fields, in display order
HIKE_FIELDS = [
    ("Location", "location"),
    ("Date", "date"),
    ("Time", "time"),
    ("Meeting Point", "meeting_point"),
    ("Cost", "cost"),
    ("Contact", "contact"),
]


def _format_hike(hike: HikeRecord) -> list[str]:
    lines = ["", f"   - {hike.name}"]
    for label, attr in HIKE_FIELDS:
        value = getattr(hike, attr)
        if value:
            lines.append(f"      {label}: {value}")
    return lines


def format_report(results: Sequence[ScrapedResult], target_dates: str) -> str:
    """Render the results as plain text. Does not modify or filter `results`."""
    lines = [
        "=" * RULE_WIDTH,
        "HIKE SCRAPE RESULTS",
        f"Target Dates: {target_dates}",
        "=" * RULE_WIDTH,
    ]

    total_hikes = 0
    for result in results:
        lines += [
            "",
            "-" * RULE_WIDTH,
            f"Company: {result.company}",
            f"URL: {result.url}",
            "-" * RULE_WIDTH,
        ]
        if not result.hikes:
            lines.append(f"   No hikes found for {target_dates} (other dates not included)")
            continue
        for hike in result.hikes:
            total_hikes += 1
            lines += _format_hike(hike)

    lines += [
        "",
        "=" * RULE_WIDTH,
        f"TOTAL: Found {total_hikes} hike(s) across {len(results)} websites",
        "=" * RULE_WIDTH,
    ]
    return "\n".join(lines)


def print_report(
    results: Sequence[ScrapedResult], target_dates: str, stream: Optional[TextIO] = None
) -> None:
    print(format_report(results, target_dates), file=stream or sys.stdout)
