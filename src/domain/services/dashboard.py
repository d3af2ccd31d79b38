"""Domain services composing the portfolio views.

Each function recomputes its view from scratch out of the raw records and
the price snapshot; callers rerun them on every interaction.
"""

import math
import re
from collections.abc import Mapping, Sequence
from datetime import date
from logging import Logger
from typing import Any

from src.domain.constants import (
    ALL_MONTHS,
    DEFAULT_CONTRIBUTION_EPSILON,
    WEIGHT_BASES,
    WEIGHT_BASIS_PORTFOLIO,
    WEIGHT_BASIS_SELECTION,
)
from src.domain.errors import InvalidWeightBasisError
from src.domain.models import (
    DashboardResult,
    HoldingsOverview,
    PriceSnapshot,
    PricedRow,
    SortState,
    TickerLot,
    TransactionRecord,
)
from src.domain.services.aggregation import (
    aggregate_by_ticker,
    build_timeline,
    compute_totals,
    pick_loser,
    pick_winner,
)
from src.domain.services.irr import build_cashflows, solve_irr
from src.domain.services.normalization import normalize_ticker
from src.domain.services.periods import filter_by_period, period_range
from src.domain.services.pricing import price_transactions, resolve_price
from src.domain.services.sorting import sort_rows

_MONTH_PATTERN = re.compile(r"\d{4}-(0[1-9]|1[0-2])")


def resolve_as_of_month(snapshot: PriceSnapshot, today: date | None = None) -> str:
    """Return the valuation month, falling back to the current month.

    Args:
        snapshot: Price snapshot carrying the as-of date.
        today: Reference date used when the snapshot has no usable date.

    Returns:
        str: Month in YYYY-MM form.
    """
    month = snapshot.as_of_month
    if _MONTH_PATTERN.fullmatch(month):
        return month
    return (today or date.today()).strftime("%Y-%m")


def list_months(transactions: Sequence[TransactionRecord]) -> list[str]:
    """Return the distinct non-empty months, oldest first."""
    return sorted({record.month for record in transactions if record.month})


def list_tickers(transactions: Sequence[TransactionRecord]) -> list[str]:
    """Return the distinct canonical tickers in alphabetical order."""
    tickers = {normalize_ticker(record.ticker) for record in transactions}
    return sorted(ticker for ticker in tickers if ticker)


def _matches_filter(ticker: str, ticker_filter: str) -> bool:
    needle = ticker_filter.strip().upper()
    return not needle or needle in ticker


def compute_dashboard(
    transactions: Sequence[TransactionRecord],
    snapshot: PriceSnapshot,
    period_key: str,
    *,
    sort_state: SortState | None = None,
    ticker_filter: str = "",
    weight_basis: str = WEIGHT_BASIS_SELECTION,
    contribution_epsilon: float = DEFAULT_CONTRIBUTION_EPSILON,
    today: date | None = None,
    logger: Logger | None = None,
) -> DashboardResult:
    """Compute the per-ticker performance view for one period.

    Args:
        transactions: All transaction records.
        snapshot: Current prices and as-of date.
        period_key: One of MTD, QTD, YTD, LM, LQ, LTM or SI.
        sort_state: Sort applied to the returned rows.
        ticker_filter: Substring filter applied to the returned rows only;
            totals and KPIs always cover the whole period.
        weight_basis: "selection" weighs holdings against the period's
            value, "portfolio" against the whole unfiltered portfolio.
        contribution_epsilon: Overall return below which contribution
            shares are left undefined.
        today: Reference date when the snapshot has no as-of date.
        logger: Optional logger for diagnostics.

    Returns:
        DashboardResult: Rows, totals and KPIs of the period.

    Raises:
        UnknownPeriodError: If period_key is not supported.
        InvalidWeightBasisError: If weight_basis is not supported.
    """
    if weight_basis not in WEIGHT_BASES:
        raise InvalidWeightBasisError(f"Unknown weight basis: {weight_basis!r}")

    as_of_month = resolve_as_of_month(snapshot, today)
    period = period_range(period_key, as_of_month)
    selected = filter_by_period(transactions, period)
    pricing = price_transactions(selected, snapshot.prices, logger)

    total_value = None
    if weight_basis == WEIGHT_BASIS_PORTFOLIO:
        total_value = compute_totals(
            price_transactions(transactions, snapshot.prices).rows
        ).value

    aggregates = aggregate_by_ticker(
        pricing.rows,
        total_value=total_value,
        contribution_epsilon=contribution_epsilon,
    )
    cashflows = build_cashflows(pricing.rows, as_of_month)
    irr = solve_irr(cashflows) if cashflows else None
    if logger is not None:
        logger.info(
            f"Dashboard computed: period={period.key} "
            f"range={period.start_month}..{period.end_month} "
            f"rows={len(aggregates)} irr={irr}"
        )

    state = sort_state or SortState()
    visible = [
        row for row in aggregates if _matches_filter(row.key, ticker_filter)
    ]
    return DashboardResult(
        period=period,
        rows=sort_rows(visible, state.key, state.direction),
        totals=compute_totals(pricing.rows),
        irr=irr,
        winner=pick_winner(aggregates),
        loser=pick_loser(aggregates),
        ticker_count=len({row.key for row in aggregates}),
        transaction_count=len(selected),
        missing=pricing.missing,
        as_of=snapshot.as_of,
    )


def compute_holdings_overview(
    transactions: Sequence[TransactionRecord],
    snapshot: PriceSnapshot,
    selection: str = ALL_MONTHS,
    *,
    sort_state: SortState | None = None,
    ticker_filter: str = "",
    today: date | None = None,
    logger: Logger | None = None,
) -> HoldingsOverview:
    """Compute the lot-level holdings view for a month selection.

    Args:
        transactions: All transaction records.
        snapshot: Current prices and as-of date.
        selection: "ALL" or a single YYYY-MM month.
        sort_state: Sort applied to the returned lots.
        ticker_filter: Substring filter applied to the returned lots only.
        today: Reference date when the snapshot has no as-of date.
        logger: Optional logger for diagnostics.

    Returns:
        HoldingsOverview: Lots, totals, KPIs and the value timeline.
    """
    if selection == ALL_MONTHS:
        selected = list(transactions)
    else:
        selected = [record for record in transactions if record.month == selection]

    pricing = price_transactions(selected, snapshot.prices, logger)
    cashflows = build_cashflows(
        pricing.rows,
        resolve_as_of_month(snapshot, today),
    )
    portfolio_rows = price_transactions(transactions, snapshot.prices).rows
    timeline = build_timeline(
        portfolio_rows,
        up_to_month=None if selection == ALL_MONTHS else selection,
    )

    state = sort_state or SortState()
    visible: list[PricedRow] = [
        row for row in pricing.rows if _matches_filter(row.ticker, ticker_filter)
    ]
    return HoldingsOverview(
        selection=selection,
        rows=sort_rows(visible, state.key, state.direction),
        totals=compute_totals(pricing.rows),
        irr=solve_irr(cashflows) if cashflows else None,
        winner=pick_winner(pricing.rows),
        loser=pick_loser(pricing.rows),
        ticker_count=len({row.ticker for row in pricing.rows}),
        missing=pricing.missing,
        months=list_months(transactions),
        timeline=timeline,
        as_of=snapshot.as_of,
    )


def _ratio(numerator: float, denominator: float) -> float:
    if not math.isfinite(denominator) or denominator == 0:
        return math.nan
    return numerator / denominator


def compute_ticker_lots(
    transactions: Sequence[TransactionRecord],
    prices: Mapping[str, Any],
    ticker: str,
    sort_state: SortState | None = None,
) -> list[TickerLot]:
    """Return every lot of one ticker, valued where possible.

    Unlike the portfolio views, lots with missing prices or unusable
    numbers are kept and show NaN for the figures that cannot be derived.

    Args:
        transactions: All transaction records.
        prices: Price map keyed by uppercase ticker.
        ticker: Ticker to show, any case.
        sort_state: Sort applied to the lots, newest month first by default.

    Returns:
        list[TickerLot]: Lots of the ticker.
    """
    canonical = normalize_ticker(ticker)
    if not canonical:
        return []
    price = resolve_price(prices, canonical)
    price_value = math.nan if price is None else price

    lots: list[TickerLot] = []
    for record in transactions:
        if normalize_ticker(record.ticker) != canonical:
            continue
        shares = record.shares
        invested = record.total_cost
        value = shares * price_value
        gain = value - invested
        lots.append(
            TickerLot(
                month=record.month,
                ticker=canonical,
                shares=shares,
                avg_cost=_ratio(invested, shares),
                price=price_value,
                invested=invested,
                value=value,
                gain=gain,
                gain_pct=_ratio(gain, invested),
            )
        )
    state = sort_state or SortState(key="month", direction="desc")
    return sort_rows(lots, state.key, state.direction)


__all__ = [
    "resolve_as_of_month",
    "list_months",
    "list_tickers",
    "compute_dashboard",
    "compute_holdings_overview",
    "compute_ticker_lots",
]
