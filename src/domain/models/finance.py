"""Domain models for derived portfolio figures."""

from dataclasses import dataclass, field

from src.domain.constants import ALL_MONTHS


@dataclass(frozen=True)
class PricedRow:
    """Valuation of a single lot against the current price.

    Attributes:
        ticker: Canonical uppercase ticker.
        month: Bucketing month of the lot.
        shares: Shares held in the lot.
        avg_cost: Cost per share.
        price: Current price per share.
        invested: Cost basis of the lot.
        value: Current market value of the lot.
        gain: Value minus invested.
        gain_pct: Gain relative to invested, 0 when nothing was invested.
    """

    ticker: str
    month: str
    shares: float
    avg_cost: float
    price: float
    invested: float
    value: float
    gain: float
    gain_pct: float


@dataclass(frozen=True)
class AggregateRow:
    """Lots folded together under one ticker or one month."""

    key: str
    invested: float
    value: float
    gain: float
    gain_pct: float
    weight: float
    contrib_pct: float | None
    txns: int

    @property
    def ticker(self) -> str:
        """Alias of key for ticker-grouped rows."""
        return self.key


@dataclass(frozen=True)
class PortfolioTotals:
    """Selection-level totals."""

    invested: float
    value: float

    @property
    def gain(self) -> float:
        """Return value minus invested."""
        return self.value - self.invested

    @property
    def return_pct(self) -> float:
        """Return gain relative to invested, 0 when nothing was invested."""
        if self.invested == 0:
            return 0.0
        return self.gain / self.invested


@dataclass(frozen=True)
class Mover:
    """Best or worst performing holding of a selection."""

    ticker: str
    gain_pct: float


@dataclass(frozen=True)
class Cashflow:
    """Signed amount at a whole-month offset from the first contribution."""

    offset_months: int
    amount: float


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive month window; start_month None means unbounded."""

    key: str
    label: str
    start_month: str | None
    end_month: str

    def contains(self, month: str) -> bool:
        """Return True when month falls inside the window."""
        if not month:
            return False
        if self.start_month is None:
            return month <= self.end_month
        return self.start_month <= month <= self.end_month


@dataclass(frozen=True)
class TimelinePoint:
    """Invested and current value of the lots bought in one month."""

    month: str
    invested: float
    value: float

    @property
    def gain_pct(self) -> float:
        """Return gain relative to invested, 0 when nothing was invested."""
        if self.invested == 0:
            return 0.0
        return (self.value - self.invested) / self.invested


@dataclass(frozen=True)
class TickerLot:
    """Lot row for the ticker detail view; NaN marks unavailable figures."""

    month: str
    ticker: str
    shares: float
    avg_cost: float
    price: float
    invested: float
    value: float
    gain: float
    gain_pct: float


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction of a table."""

    key: str = "value"
    direction: str = "desc"

    def toggled(self, key: str) -> "SortState":
        """Return the state after a click on the column named key."""
        if key == self.key:
            direction = "asc" if self.direction == "desc" else "desc"
            return SortState(key=key, direction=direction)
        return SortState(key=key, direction="desc")


@dataclass(frozen=True)
class RenderContext:
    """Per-render view state owned by the interface controller.

    Attributes:
        selection: Period key or month selection driving the filter.
        sort_state: Sort applied to the main table.
        ticker_filter: Case-insensitive ticker substring filter.
    """

    selection: str = ALL_MONTHS
    sort_state: SortState = field(default_factory=SortState)
    ticker_filter: str = ""


@dataclass(frozen=True)
class DashboardResult:
    """Everything the performance view renders for one period."""

    period: PeriodRange
    rows: list[AggregateRow]
    totals: PortfolioTotals
    irr: float | None
    winner: Mover | None
    loser: Mover | None
    ticker_count: int
    transaction_count: int
    missing: list[str]
    as_of: str


@dataclass(frozen=True)
class HoldingsOverview:
    """Lot-level holdings view for a month selection."""

    selection: str
    rows: list[PricedRow]
    totals: PortfolioTotals
    irr: float | None
    winner: Mover | None
    loser: Mover | None
    ticker_count: int
    missing: list[str]
    months: list[str]
    timeline: list[TimelinePoint]
    as_of: str


__all__ = [
    "PricedRow",
    "AggregateRow",
    "PortfolioTotals",
    "Mover",
    "Cashflow",
    "PeriodRange",
    "TimelinePoint",
    "TickerLot",
    "SortState",
    "RenderContext",
    "DashboardResult",
    "HoldingsOverview",
]
