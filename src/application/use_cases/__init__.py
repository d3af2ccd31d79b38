"""Application use cases package."""

from .get_holdings_overview import (
    GetHoldingsOverviewUseCase,
    HoldingsOverview,
)
from .get_performance_dashboard import (
    DashboardResult,
    GetPerformanceDashboardUseCase,
)
from .get_ticker_lots import GetTickerLotsUseCase, TickerLotsView

__all__ = [
    "GetHoldingsOverviewUseCase",
    "HoldingsOverview",
    "GetPerformanceDashboardUseCase",
    "DashboardResult",
    "GetTickerLotsUseCase",
    "TickerLotsView",
]
