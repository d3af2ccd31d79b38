"""Domain package for portfolio analytics rules and core models."""

from .constants import PERIOD_KEYS, WEIGHT_BASES
from .errors import (
    InvalidWeightBasisError,
    PortfolioLoadError,
    UnknownPeriodError,
)
from .models import (
    AggregateRow,
    DashboardResult,
    HoldingsOverview,
    PriceSnapshot,
    PricedRow,
    SortState,
    TransactionRecord,
)
from .services import (
    compute_dashboard,
    compute_holdings_overview,
    compute_ticker_lots,
    parse_transactions_csv,
    period_range,
    solve_irr,
)

__all__ = [
    "PERIOD_KEYS",
    "WEIGHT_BASES",
    "InvalidWeightBasisError",
    "PortfolioLoadError",
    "UnknownPeriodError",
    "AggregateRow",
    "DashboardResult",
    "HoldingsOverview",
    "PriceSnapshot",
    "PricedRow",
    "SortState",
    "TransactionRecord",
    "compute_dashboard",
    "compute_holdings_overview",
    "compute_ticker_lots",
    "parse_transactions_csv",
    "period_range",
    "solve_irr",
]
