"""Tests for the Streamlit app module."""

import math
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.domain.errors import PortfolioLoadError
from src.domain.models import (
    AggregateRow,
    PricedRow,
    SortState,
    TimelinePoint,
)


def _priced(ticker: str, invested: float, value: float) -> PricedRow:
    gain = value - invested
    return PricedRow(
        ticker=ticker,
        month="2025-01",
        shares=1.0,
        avg_cost=invested,
        price=value,
        invested=invested,
        value=value,
        gain=gain,
        gain_pct=gain / invested,
    )


def test_formatters_handle_missing_values() -> None:
    """Undefined and non-finite values render as a placeholder."""
    assert app._format_money(-1234.5) == "-$1,234.50"
    assert app._format_money(math.nan) == app.PLACEHOLDER
    assert app._format_pct(0.25) == "25.00%"
    assert app._format_pct(None) == app.PLACEHOLDER
    assert app._format_shares(1.5) == "1.500000"
    assert app._format_mover(None) == (app.PLACEHOLDER, app.PLACEHOLDER)
    assert app._format_mover(
        SimpleNamespace(ticker="AAPL", gain_pct=0.5)
    ) == ("AAPL", "50.00%")


def test_prepare_allocation_data_groups_tail_into_other() -> None:
    """Tickers past the limit are folded into an Other slice."""
    rows = [
        _priced("AAPL", 100, 500),
        _priced("AAPL", 100, 100),
        _priced("MSFT", 100, 300),
        _priced("VTI", 100, 150),
        _priced("NVDA", 100, 50),
    ]

    data = app._prepare_allocation_data(rows, max_categories=2)

    assert [item["ticker"] for item in data] == ["AAPL", "MSFT", "Other"]
    assert data[0]["value"] == 600
    assert data[2]["value"] == 200
    assert data[0]["share_label"] == "54.5%"


def test_prepare_gains_data_accepts_aggregates() -> None:
    """Aggregate rows are charted by ticker with gain direction."""
    rows = [
        AggregateRow("MSFT", 200, 150, -50, -0.25, 0.3, None, 1),
        AggregateRow("AAPL", 100, 350, 250, 2.5, 0.7, None, 2),
    ]

    data = app._prepare_gains_data(rows)

    assert [item["ticker"] for item in data] == ["AAPL", "MSFT"]
    assert data[0]["direction"] == "gain"
    assert data[1]["direction"] == "loss"
    assert data[1]["gain_pct"] == -25.0


def test_prepare_timeline_data_emits_both_series() -> None:
    """Each timeline point yields a value and an invested record."""
    data = app._prepare_timeline_data(
        [TimelinePoint(month="2025-03", invested=100.0, value=120.0)]
    )

    assert [item["series"] for item in data] == ["Value", "Invested"]
    assert data[0]["month_label"] == "Mar 2025"
    assert data[0]["amount_label"] == "$120.00"


def test_holdings_table_formats_rows() -> None:
    """Holdings rows are formatted for display."""
    table = app._holdings_table([_priced("AAPL", 100, 150)])

    assert table[0]["Ticker"] == "AAPL"
    assert table[0]["Gain %"] == "50.00%"
    assert table[0]["Value"] == "$150.00"


def test_fetch_performance_invokes_use_case(monkeypatch) -> None:
    """_fetch_performance should build the use case and execute it."""
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = "result"
    monkeypatch.setattr(
        app,
        "build_performance_dashboard_use_case",
        lambda: fake_use_case,
    )
    state = SortState(key="gain", direction="asc")

    result = app._fetch_performance("YTD", state, "aa")

    assert result == "result"
    fake_use_case.execute.assert_called_once_with(
        "YTD",
        sort_state=state,
        ticker_filter="aa",
    )


def test_fetch_holdings_and_ticker_lots_invoke_use_cases(monkeypatch) -> None:
    """The holdings and ticker fetchers delegate to their use cases."""
    holdings_use_case = MagicMock()
    lots_use_case = MagicMock()
    monkeypatch.setattr(
        app,
        "build_holdings_overview_use_case",
        lambda: holdings_use_case,
    )
    monkeypatch.setattr(
        app,
        "build_ticker_lots_use_case",
        lambda: lots_use_case,
    )
    state = SortState()

    app._fetch_holdings_overview("2025-01", state, "")
    app._fetch_ticker_lots("AAPL", state)

    holdings_use_case.execute.assert_called_once_with(
        selection="2025-01",
        sort_state=state,
        ticker_filter="",
    )
    lots_use_case.execute.assert_called_once_with(
        ticker="AAPL",
        sort_state=state,
    )


def test_load_performance_uses_fetch(monkeypatch) -> None:
    """The cached loader should rebuild the sort state and delegate."""
    calls = []

    def _fake_fetch(period_key, sort_state, ticker_filter):
        calls.append((period_key, sort_state, ticker_filter))
        return "cached"

    monkeypatch.setattr(app, "_fetch_performance", _fake_fetch)

    result = app._load_performance("QTD", "weight", "asc", "")

    assert result == "cached"
    assert calls == [("QTD", SortState(key="weight", direction="asc"), "")]


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options, **_kwargs):
        if label == "Page":
            return self.page
        return options[0]

    def text_input(self, _label, default=""):
        return default

    def radio(self, _label, options, index=0, **_kwargs):
        return options[index]


class _FakeStreamlit:
    def __init__(self, page: str) -> None:
        self.sidebar = _FakeSidebar(page)
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.query_params: dict[str, str] = {}

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def error(self, text: str):
        self.errors.append(text)

    def warning(self, text: str):
        self.warnings.append(text)


def _patch_main(monkeypatch, page: str) -> _FakeStreamlit:
    fake_st = _FakeStreamlit(page)
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "build_settings",
        lambda: SimpleNamespace(default_period="YTD"),
    )
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    return fake_st


def test_main_shows_error_banner_when_inputs_fail(monkeypatch) -> None:
    """Load failures are reported in the page instead of raising."""
    fake_st = _patch_main(monkeypatch, "Holdings")

    def _raise(*_args):
        raise PortfolioLoadError("prices.json missing")

    monkeypatch.setattr(app, "_load_holdings_overview", _raise)

    app.main()

    assert fake_st.config_kwargs["layout"] == "wide"
    assert len(fake_st.errors) == 1
    assert "prices.json missing" in fake_st.errors[0]


def test_main_ticker_page_without_transactions(monkeypatch) -> None:
    """The ticker page warns when the file has no tickers."""
    fake_st = _patch_main(monkeypatch, "Ticker")
    monkeypatch.setattr(
        app,
        "_load_ticker_lots",
        lambda *_args: SimpleNamespace(tickers=[]),
    )

    app.main()

    assert fake_st.errors == []
    assert fake_st.warnings == ["No tickers found in the transactions file."]


def test_render_missing_lists_unique_tickers(monkeypatch) -> None:
    """The diagnostic counts rows and lists each ticker once."""
    fake_st = _FakeStreamlit("Holdings")
    monkeypatch.setattr(app, "st", fake_st)

    app._render_missing(["ZZZ", "AAA", "ZZZ"])
    app._render_missing([])

    assert len(fake_st.warnings) == 1
    assert "3 rows skipped" in fake_st.warnings[0]
    assert "(AAA, ZZZ)" in fake_st.warnings[0]
