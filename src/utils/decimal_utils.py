"""Helpers for Decimal normalization."""

import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation


_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_amount(value) -> Decimal:
    """Parse a lenient numeric string, falling back to zero.

    Thousands separators are stripped and a leading numeric prefix is
    accepted (``"1,234.5 TWD"`` parses as ``1234.5``). Anything else,
    including ``None`` and empty strings, resolves to ``Decimal("0")``.

    Args:
        value: Raw value from an import record or a stored row.

    Returns:
        Decimal: Parsed amount.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return coerce_decimal(value)
    match = _LEADING_NUMBER.match(str(value).replace(",", ""))
    if not match:
        return Decimal("0")
    try:
        parsed = Decimal(match.group(0).strip())
    except InvalidOperation:
        return Decimal("0")
    if not parsed.is_finite():
        return Decimal("0")
    return parsed


def round_half_up(value: Decimal) -> Decimal:
    """Round to a whole unit, halves towards positive infinity."""
    half = Decimal("0.5")
    return (value + half).quantize(Decimal("1"), rounding=ROUND_FLOOR)


__all__ = ["coerce_decimal", "parse_amount", "round_half_up"]
