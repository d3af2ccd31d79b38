"""Use case to compute the lot-level holdings overview."""

from datetime import date

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.domain.constants import ALL_MONTHS
from src.domain.models import HoldingsOverview, SortState
from src.domain.services.dashboard import compute_holdings_overview
from src.infrastructure.logging.logger import get_app_logger


class GetHoldingsOverviewUseCase:
    """Compute the holdings overview from the configured portfolio source."""

    def __init__(self, source: PortfolioSourcePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            source: Port providing transactions and prices.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._source = source
        self._logger = logger or get_app_logger()

    def execute(
        self,
        selection: str = ALL_MONTHS,
        sort_state: SortState | None = None,
        ticker_filter: str = "",
        today: date | None = None,
    ) -> HoldingsOverview:
        """Return the holdings overview for a month selection.

        Args:
            selection: "ALL" or a single YYYY-MM month.
            sort_state: Optional sort of the lots table.
            ticker_filter: Optional ticker substring filter.
            today: Reference date when the prices carry no as-of date.

        Returns:
            HoldingsOverview: Lots, totals, KPIs and timeline.
        """
        transactions = self._source.load_transactions()
        snapshot = self._source.load_price_snapshot()
        overview = compute_holdings_overview(
            transactions,
            snapshot,
            selection,
            sort_state=sort_state,
            ticker_filter=ticker_filter,
            today=today,
            logger=self._logger,
        )
        self._logger.info(
            f"Holdings computed: selection={selection}, "
            f"lots={len(overview.rows)}, missing={len(overview.missing)}"
        )
        return overview


__all__ = ["GetHoldingsOverviewUseCase", "HoldingsOverview"]
