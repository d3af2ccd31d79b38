"""Use case to compute the per-ticker performance view for a period."""

from datetime import date

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.domain.constants import (
    DEFAULT_CONTRIBUTION_EPSILON,
    WEIGHT_BASIS_SELECTION,
)
from src.domain.models import DashboardResult, SortState
from src.domain.services.dashboard import compute_dashboard
from src.infrastructure.logging.logger import get_app_logger


class GetPerformanceDashboardUseCase:
    """Compute period performance from the configured portfolio source."""

    def __init__(
        self,
        source: PortfolioSourcePort,
        logger=None,
        weight_basis: str = WEIGHT_BASIS_SELECTION,
        contribution_epsilon: float = DEFAULT_CONTRIBUTION_EPSILON,
    ) -> None:
        """Initialize the use case.

        Args:
            source: Port providing transactions and prices.
            logger: Optional logger compatible with logging.Logger-like API.
            weight_basis: "selection" or "portfolio" weighting.
            contribution_epsilon: Overall return below which contribution
                shares are left undefined.
        """
        self._source = source
        self._logger = logger or get_app_logger()
        self._weight_basis = weight_basis
        self._contribution_epsilon = contribution_epsilon

    def execute(
        self,
        period_key: str,
        sort_state: SortState | None = None,
        ticker_filter: str = "",
        today: date | None = None,
    ) -> DashboardResult:
        """Return the performance view for the period.

        Args:
            period_key: One of MTD, QTD, YTD, LM, LQ, LTM or SI.
            sort_state: Optional sort of the holdings table.
            ticker_filter: Optional ticker substring filter.
            today: Reference date when the prices carry no as-of date.

        Returns:
            DashboardResult: Rows, totals and KPIs of the period.

        Raises:
            PortfolioLoadError: If the inputs cannot be loaded.
        """
        transactions = self._source.load_transactions()
        snapshot = self._source.load_price_snapshot()
        result = compute_dashboard(
            transactions,
            snapshot,
            period_key,
            sort_state=sort_state,
            ticker_filter=ticker_filter,
            weight_basis=self._weight_basis,
            contribution_epsilon=self._contribution_epsilon,
            today=today,
            logger=self._logger,
        )
        if result.missing:
            self._logger.warning(
                f"{len(result.missing)} rows skipped for missing price or "
                f"invalid numbers in {result.period.key}"
            )
        return result


__all__ = ["GetPerformanceDashboardUseCase", "DashboardResult"]
