"""Aggregate priced lots by ticker or by month."""

from collections.abc import Callable, Iterable, Sequence

from src.domain.constants import DEFAULT_CONTRIBUTION_EPSILON
from src.domain.models import (
    AggregateRow,
    Mover,
    PortfolioTotals,
    PricedRow,
    TimelinePoint,
)


def compute_totals(rows: Iterable[PricedRow]) -> PortfolioTotals:
    """Sum invested and value over priced lots.

    Args:
        rows: Priced lots of the selection.

    Returns:
        PortfolioTotals: Selection totals.
    """
    invested = 0.0
    value = 0.0
    for row in rows:
        invested += row.invested
        value += row.value
    return PortfolioTotals(invested=invested, value=value)


def compute_contribution(
    gain: float,
    totals: PortfolioTotals,
    epsilon: float = DEFAULT_CONTRIBUTION_EPSILON,
) -> float | None:
    """Return a holding's share of the selection's total gain.

    The share is left undefined when the selection's overall return is
    within epsilon of zero, where dividing by the total gain would blow
    small gains up into meaningless percentages.

    Args:
        gain: Gain of the holding.
        totals: Totals of the selection the holding belongs to.
        epsilon: Minimum absolute overall return for a defined share.

    Returns:
        float | None: gain / total gain, or None when suppressed.
    """
    if totals.invested == 0 or abs(totals.return_pct) < epsilon:
        return None
    if totals.gain == 0:
        return None
    return gain / totals.gain


def aggregate_rows(
    rows: Sequence[PricedRow],
    key_func: Callable[[PricedRow], str],
    *,
    total_value: float | None = None,
    contribution_epsilon: float = DEFAULT_CONTRIBUTION_EPSILON,
) -> list[AggregateRow]:
    """Fold priced lots into one row per key.

    Args:
        rows: Priced lots of the selection.
        key_func: Grouping key, e.g. the ticker or the month.
        total_value: Value the weights are measured against. Defaults to
            the selection's own total value.
        contribution_epsilon: Threshold passed to compute_contribution.

    Returns:
        list[AggregateRow]: Rows in first-seen key order.
    """
    sums: dict[str, list[float]] = {}
    for row in rows:
        key = key_func(row)
        bucket = sums.setdefault(key, [0.0, 0.0, 0])
        bucket[0] += row.invested
        bucket[1] += row.value
        bucket[2] += 1

    totals = compute_totals(rows)
    weight_base = totals.value if total_value is None else total_value
    aggregates: list[AggregateRow] = []
    for key, (invested, value, txns) in sums.items():
        gain = value - invested
        aggregates.append(
            AggregateRow(
                key=key,
                invested=invested,
                value=value,
                gain=gain,
                gain_pct=0.0 if invested == 0 else gain / invested,
                weight=0.0 if weight_base == 0 else value / weight_base,
                contrib_pct=compute_contribution(
                    gain,
                    totals,
                    contribution_epsilon,
                ),
                txns=int(txns),
            )
        )
    return aggregates


def aggregate_by_ticker(
    rows: Sequence[PricedRow],
    **kwargs,
) -> list[AggregateRow]:
    """Aggregate priced lots per ticker."""
    return aggregate_rows(rows, lambda row: row.ticker, **kwargs)


def aggregate_by_month(
    rows: Sequence[PricedRow],
    **kwargs,
) -> list[AggregateRow]:
    """Aggregate priced lots per month, leaving out unbucketed lots."""
    bucketed = [row for row in rows if row.month]
    return aggregate_rows(bucketed, lambda row: row.month, **kwargs)


def build_timeline(
    rows: Sequence[PricedRow],
    up_to_month: str | None = None,
) -> list[TimelinePoint]:
    """Return invested and value per purchase month, oldest first.

    Args:
        rows: Priced lots, usually the whole portfolio.
        up_to_month: Optional last month to include.

    Returns:
        list[TimelinePoint]: One point per month.
    """
    points = [
        TimelinePoint(month=row.key, invested=row.invested, value=row.value)
        for row in aggregate_by_month(rows)
    ]
    points.sort(key=lambda point: point.month)
    if up_to_month:
        points = [point for point in points if point.month <= up_to_month]
    return points


def pick_winner(rows: Iterable[PricedRow | AggregateRow]) -> Mover | None:
    """Return the highest gain_pct row; ties go to the first encountered."""
    ranked = sorted(rows, key=lambda row: row.gain_pct, reverse=True)
    if not ranked:
        return None
    return Mover(ticker=ranked[0].ticker, gain_pct=ranked[0].gain_pct)


def pick_loser(rows: Iterable[PricedRow | AggregateRow]) -> Mover | None:
    """Return the lowest gain_pct row; ties go to the first encountered."""
    ranked = sorted(rows, key=lambda row: row.gain_pct)
    if not ranked:
        return None
    return Mover(ticker=ranked[0].ticker, gain_pct=ranked[0].gain_pct)


__all__ = [
    "compute_totals",
    "compute_contribution",
    "aggregate_rows",
    "aggregate_by_ticker",
    "aggregate_by_month",
    "build_timeline",
    "pick_winner",
    "pick_loser",
]
