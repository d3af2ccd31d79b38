"""Calendar period resolution on YYYY-MM month keys.

Months are compared as zero-padded ``YYYY-MM`` strings, which sort in the
same order as the calendar.
"""

from collections.abc import Iterable

from src.domain.constants import PERIOD_KEYS, PERIOD_LABELS
from src.domain.errors import UnknownPeriodError
from src.domain.models import PeriodRange, TransactionRecord

_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _split_month(month: str) -> tuple[int, int]:
    year, month_number = month.split("-")[:2]
    return int(year), int(month_number)


def _format_month(year: int, month_number: int) -> str:
    return f"{year:04d}-{month_number:02d}"


def add_months(month: str, delta: int) -> str:
    """Shift a YYYY-MM month by delta months, rolling years as needed."""
    year, month_number = _split_month(month)
    index = year * 12 + (month_number - 1) + delta
    return _format_month(index // 12, index % 12 + 1)


def month_offset(start: str, month: str) -> int:
    """Return the number of whole months from start to month."""
    start_year, start_month = _split_month(start)
    year, month_number = _split_month(month)
    return (year - start_year) * 12 + (month_number - start_month)


def quarter_start_month(month: str) -> str:
    """Return the first month of the calendar quarter containing month."""
    year, month_number = _split_month(month)
    return _format_month(year, (month_number - 1) // 3 * 3 + 1)


def previous_quarter_range(month: str) -> tuple[str, str]:
    """Return the first and last month of the quarter before month's."""
    end = add_months(quarter_start_month(month), -1)
    return add_months(end, -2), end


def period_range(period_key: str, as_of_month: str) -> PeriodRange:
    """Resolve a period key into an inclusive month window.

    Args:
        period_key: One of MTD, QTD, YTD, LM, LQ, LTM or SI.
        as_of_month: Valuation month in YYYY-MM form.

    Returns:
        PeriodRange: Window ending at or before as_of_month. For SI the
        start is None, meaning unbounded.

    Raises:
        UnknownPeriodError: If period_key is not supported.
    """
    key = str(period_key or "").strip().upper()
    if key not in PERIOD_KEYS:
        raise UnknownPeriodError(f"Unknown period: {period_key!r}")

    start: str | None
    end = as_of_month
    if key == "MTD":
        start = as_of_month
    elif key == "QTD":
        start = quarter_start_month(as_of_month)
    elif key == "YTD":
        start = f"{as_of_month[:4]}-01"
    elif key == "LM":
        start = end = add_months(as_of_month, -1)
    elif key == "LQ":
        start, end = previous_quarter_range(as_of_month)
    elif key == "LTM":
        start = add_months(as_of_month, -11)
    else:
        start = None
    return PeriodRange(
        key=key,
        label=PERIOD_LABELS[key],
        start_month=start,
        end_month=end,
    )


def filter_by_period(
    records: Iterable[TransactionRecord],
    period: PeriodRange,
) -> list[TransactionRecord]:
    """Keep the records whose month lies inside the period.

    Records without a month are never part of a period.
    """
    return [record for record in records if period.contains(record.month)]


def month_label(month: str) -> str:
    """Format YYYY-MM as "Jan 2025", returning other input unchanged."""
    text = str(month or "").strip()
    parts = text.split("-")
    if len(parts) < 2 or not parts[0] or not parts[1].isdigit():
        return text
    month_number = int(parts[1])
    if month_number < 1 or month_number > 12:
        return text
    return f"{_MONTH_NAMES[month_number - 1]} {parts[0]}"


def describe_period(period: PeriodRange) -> str:
    """Return the human readable span of a period."""
    start = "start" if period.start_month is None else month_label(
        period.start_month
    )
    return f"{period.label}: {start} → {month_label(period.end_month)}"


__all__ = [
    "add_months",
    "month_offset",
    "quarter_start_month",
    "previous_quarter_range",
    "period_range",
    "filter_by_period",
    "month_label",
    "describe_period",
]
