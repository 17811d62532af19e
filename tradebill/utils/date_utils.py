"""Date normalization for bill and receipt dates.

Bills arrive with dates in several textual shapes: ``DD/MM/YYYY`` from
spreadsheet uploads and cheque scans, ``YYYY-MM-DD`` from the store, and full
ISO timestamps from API clients. ``parse_bill_date`` tries each registered
parser in order and returns the first calendar date it gets, or ``None``.
"""

import re
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple, Union

import pandas as pd

DateParser = Callable[[str], Optional[date]]

_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_ISO_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")
_NUMERIC = re.compile(r"^[+-]?\d+(\.\d+)?$")

# Words pandas resolves against the wall clock
_RELATIVE_WORDS = {"now", "today", "yesterday", "tomorrow"}

_TIME_OF_DAY = re.compile(r"\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?")
_NUMBER = re.compile(r"\d+")
_MONTH_NAME = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?", re.IGNORECASE)

MIN_YEAR = 1900
MAX_YEAR = 2100


def _build_date(year: str, month: str, day: str) -> Optional[date]:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_day_month_year(value: str) -> Optional[date]:
    match = _DAY_MONTH_YEAR.match(value)
    if not match:
        return None
    day, month, year = match.groups()
    return _build_date(year, month, day)


def _parse_iso_date(value: str) -> Optional[date]:
    match = _ISO_DATE.match(value)
    if not match:
        return None
    return _build_date(*match.groups())


def _parse_iso_timestamp(value: str) -> Optional[date]:
    if not _ISO_TIMESTAMP.match(value):
        return None
    try:
        # Date portion as written, no conversion to local time
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _has_full_date(value: str) -> bool:
    """
    True when the text spells out day, month and a four digit year.

    pandas fills missing parts (today's date for a bare time, year 1 or
    day 1 for partial dates), so those inputs never reach it.
    """
    numbers = _NUMBER.findall(_TIME_OF_DAY.sub(" ", value))
    if not any(len(n) == 4 for n in numbers):
        return False
    required = 2 if _MONTH_NAME.search(value) else 3
    return len(numbers) >= required


def _parse_generic(value: str) -> Optional[date]:
    """Last resort: pandas' general parser, minus epoch-like, relative and partial input"""
    if _NUMERIC.match(value) or value.lower() in _RELATIVE_WORDS:
        return None
    if not _has_full_date(value):
        return None
    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return None
    return parsed.date()


# Tried in order; first parser returning a date wins
DATE_PARSERS: List[Tuple[str, DateParser]] = [
    ("day_month_year", _parse_day_month_year),
    ("iso_date", _parse_iso_date),
    ("iso_timestamp", _parse_iso_timestamp),
    ("generic", _parse_generic),
]


def parse_bill_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Normalize a date-like value into a calendar date.

    Never raises: ``None``, blank strings and anything no parser accepts all
    return ``None``. The result depends only on the input string.

    Example:
        "15/06/2024" -> date(2024, 6, 15)
        "2024-06-15" -> date(2024, 6, 15)
        "20240615"   -> None
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    cleaned = value.strip()
    if not cleaned:
        return None

    for _name, parser in DATE_PARSERS:
        parsed = parser(cleaned)
        if parsed is not None:
            return parsed

    return None


def format_bill_date(value: date) -> str:
    """Canonical storage form (YYYY-MM-DD)"""
    return value.isoformat()


def normalize_bill_date(value: Union[str, date, None]) -> Optional[str]:
    """Parse and re-render in storage form, ``None`` when unparseable"""
    parsed = parse_bill_date(value)
    return format_bill_date(parsed) if parsed else None
