"""
Date Parser - Recognize and normalize a date expression in free text

Supported forms, in priority order:
1. "today" / "today's date" (resolved to the current date)
2. ISO: 2025-06-15
3. Slash: 06/15/2025 or 06/15/25 (two-digit years are 20YY)
4. Month name: June 15, 2025
5. Legal longhand: (effective) the 15th day of September, 2026
6. Dash: 06-15-2025

The first pattern in this order that matches anywhere in the text wins,
even if another pattern matches earlier in the text.
All dates are normalized to YYYY-MM-DD.
"""

import re
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Pattern

logger = logging.getLogger(__name__)


MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

_MONTH_ALTERNATION = "|".join(MONTH_NAMES)

TODAY_PATTERN = re.compile(r"\btoday(?:'?s)?(?:\s+date)?\b", re.IGNORECASE)


@dataclass
class DateMatch:
    """A normalized date and where it was found in the text."""
    value: str
    start: int
    end: int
    pattern: str


@dataclass(frozen=True)
class DatePattern:
    """A named date regex and the function that turns its match into a date."""
    name: str
    regex: Pattern[str]
    to_date: Callable[["re.Match[str]"], date]


def _numeric_date(match: "re.Match[str]") -> date:
    year = int(match.group("year"))
    if year < 100:
        year += 2000
    return date(year, int(match.group("month")), int(match.group("day")))


def _month_name_date(match: "re.Match[str]") -> date:
    month = MONTH_NAMES.index(match.group("month_name").lower()) + 1
    return date(int(match.group("year")), month, int(match.group("day")))


DATE_PATTERNS: List[DatePattern] = [
    DatePattern(
        name="iso",
        regex=re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b"),
        to_date=_numeric_date,
    ),
    DatePattern(
        name="slash",
        regex=re.compile(r"\b(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4}|\d{2})\b"),
        to_date=_numeric_date,
    ),
    DatePattern(
        name="month_name",
        regex=re.compile(
            rf"\b(?P<month_name>{_MONTH_ALTERNATION})\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)?,?\s+(?P<year>\d{{4}})\b",
            re.IGNORECASE,
        ),
        to_date=_month_name_date,
    ),
    DatePattern(
        name="legal",
        regex=re.compile(
            rf"\b(?:effective\s+)?the\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)\s+day\s+of\s+"
            rf"(?P<month_name>{_MONTH_ALTERNATION}),?\s+(?P<year>\d{{4}})\b",
            re.IGNORECASE,
        ),
        to_date=_month_name_date,
    ),
    DatePattern(
        name="dash",
        regex=re.compile(r"\b(?P<month>\d{1,2})-(?P<day>\d{1,2})-(?P<year>\d{4})\b"),
        to_date=_numeric_date,
    ),
]


def match_date(text: str) -> Optional[DateMatch]:
    """
    Find the winning date expression in text.

    Returns:
        DateMatch with the normalized value and the span of the matched
        expression, or None when nothing matches or the winning match is not
        a real calendar date.
    """
    if not text:
        return None

    try:
        today_match = TODAY_PATTERN.search(text)
        if today_match:
            return DateMatch(
                value=date.today().isoformat(),
                start=today_match.start(),
                end=today_match.end(),
                pattern="today",
            )

        for pattern in DATE_PATTERNS:
            match = pattern.regex.search(text)
            if not match:
                continue
            try:
                parsed = pattern.to_date(match)
            except ValueError:
                logger.debug(f"Invalid calendar date in {match.group(0)!r} ({pattern.name})")
                return None
            return DateMatch(
                value=parsed.isoformat(),
                start=match.start(),
                end=match.end(),
                pattern=pattern.name,
            )
    except Exception as e:
        logger.warning(f"Date parsing failed: {e}")

    return None


def parse_date(text: str) -> str:
    """Return the first recognized date in text as YYYY-MM-DD, or ""."""
    found = match_date(text)
    return found.value if found else ""
