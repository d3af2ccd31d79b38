"""Domain normalization helpers."""

import math
import re

_WHITESPACE_RUN = re.compile(r"\s+")
_NUMBER_NOISE = re.compile(r"[,$%()]|\s+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def normalize_ticker(ticker: str | None) -> str:
    """Normalize ticker symbols.

    Args:
        ticker: Raw ticker value from the transactions file.

    Returns:
        str: Trimmed uppercase ticker, empty when nothing usable remains.
    """
    if not ticker:
        return ""
    return str(ticker).strip().upper()


def normalize_header_key(key: str | None) -> str:
    """Normalize a CSV header cell into a lookup key.

    Args:
        key: Raw header cell, e.g. "Total Cost".

    Returns:
        str: Lowercase key with whitespace runs collapsed, e.g. "total_cost".
    """
    return _WHITESPACE_RUN.sub("_", str(key or "").strip().lower())


def normalize_month(month: str | None) -> str:
    """Normalize a bucketing month value.

    Args:
        month: Raw month cell.

    Returns:
        str: Trimmed month string, empty when missing.
    """
    return str(month or "").strip()


def month_from_iso_date(value: str | None) -> str:
    """Return the YYYY-MM prefix of an ISO-like date string."""
    return str(value or "").strip()[:7]


def to_number(value) -> float:
    """Parse a number written with currency formatting noise.

    Thousands separators, currency and percent signs, and whitespace are
    ignored. A value fully wrapped in parentheses is negative.

    Args:
        value: Raw cell value.

    Returns:
        float: Parsed value, NaN when the cell is empty or not numeric.
    """
    if value is None:
        return math.nan
    text = str(value).strip()
    if not text:
        return math.nan
    negative = text.startswith("(") and text.endswith(")")
    cleaned = _NUMBER_NOISE.sub("", text)
    if not _DECIMAL.fullmatch(cleaned):
        return math.nan
    number = float(cleaned)
    return -number if negative else number


__all__ = [
    "normalize_ticker",
    "normalize_header_key",
    "normalize_month",
    "month_from_iso_date",
    "to_number",
]
