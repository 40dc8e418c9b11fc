"""Date handling for partially known birth and death dates."""

import logging
import re

from errors import MalformedDateAnomaly

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r"\d{4}")

# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

QUALIFIER_PATTERN = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)


def extract_year(date_str: str | None) -> int | None:
    """Pull the first 4-digit year out of a date string, or None if there is none."""
    if not date_str:
        return None
    match = YEAR_PATTERN.search(date_str)
    return int(match.group(0)) if match else None


def birth_year_or_sentinel(date_str: str | None, sentinel: int, member_id: str = "") -> int:
    """
    Year used for sibling ordering.

    Missing dates and dates without a 4-digit year sort last via the sentinel.
    The latter is logged as a MalformedDateAnomaly and otherwise ignored.
    """
    year = extract_year(date_str)
    if year is not None:
        return year
    if date_str:
        anomaly = MalformedDateAnomaly(
            f"no 4-digit year in date {date_str!r}", (member_id,) if member_id else ()
        )
        logger.debug("%s", anomaly)
    return sentinel


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a partial date string into sortable ISO form (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Missing month or day default to 01. Handles formats like:
    - "1930", "1930-07", "1930-07-20"
    - "25 NOV 1954", "11 Aug. 1968"
    - "NOV 1954", "May, 1837"
    - "ABT 1905", "(about 1833)"
    - "01/27/1920"
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_PATTERN.sub("", s).strip()
    if not s:
        return None

    # ISO, possibly truncated: "1839", "1839-08", "1839-08-29"
    match = re.match(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$", s)
    if match:
        year = int(match.group(1))
        month = int(match.group(2) or 1) or 1
        day = int(match.group(3) or 1) or 1
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"
        return None

    # "25 NOV 1954" (day month year)
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return f"{int(match.group(3)):04d}-{month:02d}-{int(match.group(1)):02d}"

    # "NOV 1954" or "May, 1837" (month year)
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return f"{int(match.group(2)):04d}-{month:02d}-01"

    # "01-27-1920" or "01/27/1920" (MM-DD-YYYY)
    match = re.match(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$", s)
    if match:
        month, day, year = int(match.group(1)), int(match.group(2)), int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    return None
