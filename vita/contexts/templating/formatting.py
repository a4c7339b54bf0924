"""
Shared formatting helpers for section renderers.

All helpers are total: bad input passes through instead of raising.
"""

import re
from typing import Optional

from vita.contexts.templating.defaults import MM_TO_PT
from vita.contexts.templating.settings import Capitalization, ListStyle

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]  # fmt: skip

PRESENT = "Present"
DATE_RANGE_SEPARATOR = " – "
BULLET = "•"

ISO_DATE = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")
URL_PROTOCOL = re.compile(r"^https?://")


def format_date(date_str: Optional[str]) -> str:
    """
    Format a resume date for display.

    Examples:
        >>> format_date("2023-01")
        'Jan 2023'
        >>> format_date("2021-11-30")
        'Nov 2021'
        >>> format_date("")
        'Present'
        >>> format_date("present")
        'Present'
        >>> format_date("Summer 2019")
        'Summer 2019'
    """
    if date_str is None:
        return PRESENT

    value = str(date_str).strip()
    if not value or value.lower() == "present":
        return PRESENT

    match = ISO_DATE.match(value)
    if not match:
        return str(date_str)

    year, month = match.group(1), int(match.group(2))
    if not 1 <= month <= 12:
        return str(date_str)
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def format_date_range(start: Optional[str], end: Optional[str]) -> str:
    """
    Format a start/end pair as "Start – End".

    An empty end date means the entry is ongoing ("Present"). An empty start
    yields just the end, and both empty yield "".
    """
    has_start = bool(start and str(start).strip())
    has_end = bool(end and str(end).strip())

    if not has_start and not has_end:
        return ""
    if not has_start:
        return format_date(end)
    return f"{format_date(start)}{DATE_RANGE_SEPARATOR}{format_date(end)}"


def format_section_title(title: str, capitalization: Optional[str]) -> str:
    """Apply a heading capitalization policy. Unknown policies leave the title unchanged."""
    if capitalization == Capitalization.UPPERCASE.value:
        return title.upper()
    if capitalization == Capitalization.LOWERCASE.value:
        return title.lower()
    if capitalization == Capitalization.TITLECASE.value:
        return " ".join(word[:1].upper() + word[1:].lower() for word in title.split(" "))
    if capitalization == Capitalization.CAPITALIZE.value:
        return title[:1].upper() + title[1:]
    return title


def list_marker(list_style: str, index: int = 0) -> str:
    """
    Marker text for the index-th (0-based) item of a list.

    Returns "" for styles without a marker (none, inline).
    """
    if list_style == ListStyle.BULLET.value:
        return BULLET
    if list_style == ListStyle.NUMBER.value:
        return f"{index + 1}."
    if list_style == ListStyle.DASH.value:
        return "-"
    return ""


def level_score(level: Optional[str]) -> int:
    """
    Convert a free-text skill level to a 1-5 score.

    Beginner-like levels score 1, intermediate 3, advanced 5; unknown levels
    default to 3.
    """
    value = (level or "").lower()
    if any(key in value for key in ("beginner", "novice", "basic")):
        return 1
    if any(key in value for key in ("intermediate", "competent")):
        return 3
    if any(key in value for key in ("advanced", "expert", "master", "proficient")):
        return 5
    return 3


def format_score(score: Optional[str]) -> str:
    """Education score with a "GPA: " prefix unless it is already labelled."""
    if not score:
        return ""
    if ":" in score or "gpa" in score.lower():
        return score
    return f"GPA: {score}"


def display_url(url: str) -> str:
    """Strip protocol and trailing slash for display."""
    return URL_PROTOCOL.sub("", url).rstrip("/")


def mm_to_pt(mm: float) -> float:
    return mm * MM_TO_PT
