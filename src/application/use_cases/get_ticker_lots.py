"""Use case to list the lots of a single ticker."""

from dataclasses import dataclass

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.domain.models import SortState, TickerLot
from src.domain.services.dashboard import compute_ticker_lots, list_tickers
from src.domain.services.normalization import normalize_ticker
from src.domain.services.pricing import resolve_price
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class TickerLotsView:
    """Lots of one ticker plus the choices for the ticker picker."""

    ticker: str
    price: float | None
    lots: list[TickerLot]
    tickers: list[str]
    as_of: str


class GetTickerLotsUseCase:
    """List the lots of one ticker from the configured portfolio source."""

    def __init__(self, source: PortfolioSourcePort, logger=None) -> None:
        self._source = source
        self._logger = logger or get_app_logger()

    def execute(
        self,
        ticker: str | None = None,
        sort_state: SortState | None = None,
    ) -> TickerLotsView:
        """Return the lots of ticker, defaulting to the first known ticker.

        Args:
            ticker: Ticker to show, any case. Unknown or empty values fall
                back to the first ticker in alphabetical order.
            sort_state: Optional sort of the lots table.

        Returns:
            TickerLotsView: Lots, current price and available tickers.
        """
        transactions = self._source.load_transactions()
        snapshot = self._source.load_price_snapshot()
        tickers = list_tickers(transactions)
        selected = normalize_ticker(ticker)
        if selected not in tickers:
            if selected:
                self._logger.warning(f"Unknown ticker requested: {selected}")
            selected = tickers[0] if tickers else ""
        lots = compute_ticker_lots(
            transactions,
            snapshot.prices,
            selected,
            sort_state,
        )
        return TickerLotsView(
            ticker=selected,
            price=resolve_price(snapshot.prices, selected) if selected else None,
            lots=lots,
            tickers=tickers,
            as_of=snapshot.as_of,
        )


__all__ = ["GetTickerLotsUseCase", "TickerLotsView"]
