"""Domain normalization helpers."""


def normalize_text(value) -> str:
    """Return a stripped string, treating ``None`` as empty."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_key_text(value) -> str:
    """Normalize free text used as a grouping key.

    Whitespace runs collapse to a single space and case is folded.
    """
    return " ".join(normalize_text(value).split()).casefold()


def normalize_currency(currency, default: str) -> str:
    """Normalize currency codes, falling back to ``default`` when empty."""
    cleaned = normalize_text(currency).upper()
    return cleaned or default


__all__ = ["normalize_text", "normalize_key_text", "normalize_currency"]
