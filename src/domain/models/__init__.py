"""Domain models package."""

from .finance import (
    AggregateRow,
    Cashflow,
    DashboardResult,
    HoldingsOverview,
    Mover,
    PeriodRange,
    PortfolioTotals,
    PricedRow,
    RenderContext,
    SortState,
    TickerLot,
    TimelinePoint,
)
from .transactions import PriceSnapshot, TransactionRecord

__all__ = [
    "AggregateRow",
    "Cashflow",
    "DashboardResult",
    "HoldingsOverview",
    "Mover",
    "PeriodRange",
    "PortfolioTotals",
    "PricedRow",
    "PriceSnapshot",
    "RenderContext",
    "SortState",
    "TickerLot",
    "TimelinePoint",
    "TransactionRecord",
]
