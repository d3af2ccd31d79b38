"""Domain services package."""

from .aggregation import (
    aggregate_by_month,
    aggregate_by_ticker,
    build_timeline,
    compute_contribution,
    compute_totals,
    pick_loser,
    pick_winner,
)
from .dashboard import (
    compute_dashboard,
    compute_holdings_overview,
    compute_ticker_lots,
    list_months,
    list_tickers,
    resolve_as_of_month,
)
from .irr import build_cashflows, npv, solve_irr, solve_monthly_rate
from .normalization import (
    month_from_iso_date,
    normalize_header_key,
    normalize_ticker,
    to_number,
)
from .periods import filter_by_period, month_label, period_range
from .pricing import price_transaction, price_transactions, resolve_price
from .records import parse_csv_line, parse_transactions_csv
from .sorting import sort_rows
from .validation import is_finite_number, is_valid_lot

__all__ = [
    "aggregate_by_month",
    "aggregate_by_ticker",
    "build_cashflows",
    "build_timeline",
    "compute_contribution",
    "compute_dashboard",
    "compute_holdings_overview",
    "compute_ticker_lots",
    "compute_totals",
    "filter_by_period",
    "is_finite_number",
    "is_valid_lot",
    "list_months",
    "list_tickers",
    "month_from_iso_date",
    "month_label",
    "normalize_header_key",
    "normalize_ticker",
    "npv",
    "parse_csv_line",
    "parse_transactions_csv",
    "period_range",
    "pick_loser",
    "pick_winner",
    "price_transaction",
    "price_transactions",
    "resolve_as_of_month",
    "resolve_price",
    "solve_irr",
    "solve_monthly_rate",
    "sort_rows",
    "to_number",
]
