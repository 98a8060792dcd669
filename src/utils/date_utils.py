"""Helpers for the loosely formatted dates found in imports and sheets."""

import re
from datetime import date, datetime


_YMD = re.compile(r"^\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})")


def parse_date(value) -> date | None:
    """Parse ``YYYY/MM/DD`` or ``YYYY-MM-DD`` (optionally with a time part).

    Args:
        value: Raw date value.

    Returns:
        date | None: Parsed date, or None when the value is not a date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    match = _YMD.match(text)
    if match:
        try:
            return date(
                int(match.group(1)),
                int(match.group(2)),
                int(match.group(3)),
            )
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def to_year_month(value) -> str:
    """Return the ``YYYY-MM`` bucket for a date value, or ``""``."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.year:04d}-{parsed.month:02d}"


__all__ = ["parse_date", "to_year_month"]
