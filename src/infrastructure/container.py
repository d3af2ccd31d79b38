"""Composition root for wiring infrastructure adapters."""

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.application.use_cases.get_holdings_overview import (
    GetHoldingsOverviewUseCase,
)
from src.application.use_cases.get_performance_dashboard import (
    GetPerformanceDashboardUseCase,
)
from src.application.use_cases.get_ticker_lots import GetTickerLotsUseCase
from src.infrastructure.file_portfolio_source import FilePortfolioSource
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings


def build_settings() -> DashboardSettings:
    """Return settings sourced from the environment."""
    return DashboardSettings.from_env()


def build_portfolio_source(
    settings: DashboardSettings | None = None,
) -> PortfolioSourcePort:
    """Return the configured portfolio source adapter."""
    resolved = settings or build_settings()
    return FilePortfolioSource(
        resolved.transactions_path,
        resolved.prices_path,
        logger=get_app_logger(),
    )


def build_performance_dashboard_use_case(
    settings: DashboardSettings | None = None,
    source: PortfolioSourcePort | None = None,
) -> GetPerformanceDashboardUseCase:
    """Return the performance use case wired to the configured source."""
    resolved = settings or build_settings()
    return GetPerformanceDashboardUseCase(
        source=source or build_portfolio_source(resolved),
        logger=get_app_logger(),
        weight_basis=resolved.weight_basis,
        contribution_epsilon=resolved.contribution_epsilon,
    )


def build_holdings_overview_use_case(
    settings: DashboardSettings | None = None,
    source: PortfolioSourcePort | None = None,
) -> GetHoldingsOverviewUseCase:
    """Return the holdings use case wired to the configured source."""
    resolved_source = source or build_portfolio_source(settings)
    return GetHoldingsOverviewUseCase(
        source=resolved_source,
        logger=get_app_logger(),
    )


def build_ticker_lots_use_case(
    settings: DashboardSettings | None = None,
    source: PortfolioSourcePort | None = None,
) -> GetTickerLotsUseCase:
    """Return the ticker lots use case wired to the configured source."""
    resolved_source = source or build_portfolio_source(settings)
    return GetTickerLotsUseCase(source=resolved_source, logger=get_app_logger())


__all__ = [
    "build_settings",
    "build_portfolio_source",
    "build_performance_dashboard_use_case",
    "build_holdings_overview_use_case",
    "build_ticker_lots_use_case",
]
