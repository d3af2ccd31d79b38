"""Streamlit dashboard entry point."""

import math
from collections.abc import Sequence

import altair as alt
import streamlit as st

from src.application.use_cases.get_holdings_overview import HoldingsOverview
from src.application.use_cases.get_performance_dashboard import (
    DashboardResult,
)
from src.application.use_cases.get_ticker_lots import TickerLotsView
from src.domain.constants import ALL_MONTHS, PERIOD_KEYS, PERIOD_LABELS
from src.domain.errors import PortfolioLoadError
from src.domain.models import (
    AggregateRow,
    Mover,
    PricedRow,
    RenderContext,
    SortState,
    TimelinePoint,
)
from src.domain.services.periods import describe_period, month_label
from src.infrastructure.container import (
    build_holdings_overview_use_case,
    build_performance_dashboard_use_case,
    build_settings,
    build_ticker_lots_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger

PLACEHOLDER = "—"

_PALETTE = [
    "#1b9aaa",
    "#2e7d32",
    "#f4a261",
    "#e76f51",
    "#457b9d",
    "#f6c453",
    "#6c8ead",
    "#a0c4ff",
]

_HOLDINGS_SORT_KEYS = {
    "Value": "value",
    "Ticker": "ticker",
    "Shares": "shares",
    "Avg Cost": "avg_cost",
    "Price": "price",
    "Invested": "invested",
    "Gain": "gain",
    "Gain %": "gain_pct",
}
_PERFORMANCE_SORT_KEYS = {
    "Value": "value",
    "Ticker": "key",
    "Invested": "invested",
    "Gain": "gain",
    "Gain %": "gain_pct",
    "Contribution": "contrib_pct",
    "Weight": "weight",
    "Txns": "txns",
}
_TICKER_SORT_KEYS = {
    "Month": "month",
    "Shares": "shares",
    "Avg Cost": "avg_cost",
    "Invested": "invested",
    "Value": "value",
    "Gain": "gain",
    "Gain %": "gain_pct",
}


def _fetch_holdings_overview(
    selection: str,
    sort_state: SortState,
    ticker_filter: str,
) -> HoldingsOverview:
    """Fetch the holdings overview from the configured inputs."""
    use_case = build_holdings_overview_use_case()
    return use_case.execute(
        selection=selection,
        sort_state=sort_state,
        ticker_filter=ticker_filter,
    )


@st.cache_data(show_spinner=False)
def _load_holdings_overview(
    selection: str,
    sort_key: str,
    sort_direction: str,
    ticker_filter: str,
) -> HoldingsOverview:
    """Cached wrapper around _fetch_holdings_overview."""
    return _fetch_holdings_overview(
        selection,
        SortState(key=sort_key, direction=sort_direction),
        ticker_filter,
    )


def _fetch_performance(
    period_key: str,
    sort_state: SortState,
    ticker_filter: str,
) -> DashboardResult:
    """Fetch the performance view for a period."""
    use_case = build_performance_dashboard_use_case()
    return use_case.execute(
        period_key,
        sort_state=sort_state,
        ticker_filter=ticker_filter,
    )


@st.cache_data(show_spinner=False)
def _load_performance(
    period_key: str,
    sort_key: str,
    sort_direction: str,
    ticker_filter: str,
) -> DashboardResult:
    """Cached wrapper around _fetch_performance."""
    return _fetch_performance(
        period_key,
        SortState(key=sort_key, direction=sort_direction),
        ticker_filter,
    )


def _fetch_ticker_lots(ticker: str, sort_state: SortState) -> TickerLotsView:
    """Fetch the lots of one ticker."""
    use_case = build_ticker_lots_use_case()
    return use_case.execute(ticker=ticker, sort_state=sort_state)


@st.cache_data(show_spinner=False)
def _load_ticker_lots(
    ticker: str,
    sort_key: str,
    sort_direction: str,
) -> TickerLotsView:
    """Cached wrapper around _fetch_ticker_lots."""
    return _fetch_ticker_lots(
        ticker,
        SortState(key=sort_key, direction=sort_direction),
    )


def _format_money(value: float) -> str:
    """Format currency values for display."""
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _format_pct(value: float | None) -> str:
    """Format ratios as percentages."""
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    return f"{value * 100:.2f}%"


def _format_shares(value: float) -> str:
    """Format share quantities."""
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    return f"{value:.6f}"


def _format_mover(mover: Mover | None) -> tuple[str, str]:
    """Return the ticker and gain label of a winner or loser."""
    if mover is None:
        return PLACEHOLDER, PLACEHOLDER
    return mover.ticker, _format_pct(mover.gain_pct)


def _sort_state(state_key: str, default: SortState) -> SortState:
    """Return the sort state stored for a table."""
    return st.session_state.get(state_key, default)


def _render_sort_controls(
    state_key: str,
    options: dict[str, str],
    default: SortState,
) -> SortState:
    """Render sort controls and return the resulting sort state.

    Picking a new column sorts it descending; the flip button reverses the
    direction of the current column.
    """
    current = _sort_state(state_key, default)
    labels = list(options)
    fields = list(options.values())
    index = fields.index(current.key) if current.key in fields else 0
    left, right = st.columns([3, 1])
    label = left.selectbox(
        "Sort by",
        labels,
        index=index,
        key=f"{state_key}_column",
    )
    chosen = options[label]
    if chosen != current.key:
        current = current.toggled(chosen)
    if right.button(
        "↑" if current.direction == "asc" else "↓",
        key=f"{state_key}_flip",
    ):
        current = current.toggled(current.key)
    st.session_state[state_key] = current
    return current


def _render_missing(missing: Sequence[str]) -> None:
    """Render the missing-rows diagnostic."""
    if not missing:
        return
    unique = sorted(set(missing))
    st.warning(
        f"⚠ Missing: {len(missing)} rows skipped for missing price or "
        f"invalid numbers ({', '.join(unique)})."
    )


def _prepare_allocation_data(
    rows: Sequence[PricedRow | AggregateRow],
    max_categories: int = 8,
) -> list[dict[str, str | float]]:
    """Prepare donut data of value per ticker with Top-N + Other grouping.

    Args:
        rows: Priced lots or aggregate rows.
        max_categories: Maximum tickers kept before grouping into Other.

    Returns:
        list[dict]: Altair-ready records.
    """
    values: dict[str, float] = {}
    for row in rows:
        values[row.ticker] = values.get(row.ticker, 0.0) + row.value
    ordered = sorted(values.items(), key=lambda item: item[1], reverse=True)
    top = ordered[:max_categories]
    other_amount = sum(amount for _, amount in ordered[max_categories:])
    if other_amount:
        top.append(("Other", other_amount))
    total = sum(values.values())
    return [
        {
            "ticker": ticker,
            "value": amount,
            "value_label": _format_money(amount),
            "share_label": f"{(amount / total * 100) if total else 0:.1f}%",
        }
        for ticker, amount in top
    ]


def _prepare_gains_data(
    rows: Sequence[PricedRow | AggregateRow],
) -> list[dict[str, str | float]]:
    """Prepare bar data of gain percentage per ticker, largest value first."""
    sums: dict[str, list[float]] = {}
    for row in rows:
        bucket = sums.setdefault(row.ticker, [0.0, 0.0])
        bucket[0] += row.invested
        bucket[1] += row.value
    ordered = sorted(sums.items(), key=lambda item: item[1][1], reverse=True)
    data: list[dict[str, str | float]] = []
    for ticker, (invested, value) in ordered:
        gain_pct = 0.0 if invested == 0 else (value - invested) / invested
        data.append(
            {
                "ticker": ticker,
                "gain_pct": gain_pct * 100,
                "gain_label": _format_pct(gain_pct),
                "direction": "gain" if gain_pct >= 0 else "loss",
            }
        )
    return data


def _prepare_timeline_data(
    points: Sequence[TimelinePoint],
) -> list[dict[str, str | float]]:
    """Prepare long-form line data for the value/invested timeline."""
    data: list[dict[str, str | float]] = []
    for point in points:
        for series, amount in (
            ("Value", point.value),
            ("Invested", point.invested),
        ):
            data.append(
                {
                    "month": point.month,
                    "month_label": month_label(point.month),
                    "series": series,
                    "amount": amount,
                    "amount_label": _format_money(amount),
                    "gain_label": _format_pct(point.gain_pct),
                }
            )
    return data


def _render_allocation_chart(
    rows: Sequence[PricedRow | AggregateRow],
    title: str,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of value per ticker."""
    data = _prepare_allocation_data(rows)
    if not data:
        st.info("No priced holdings available for the chart.")
        return
    hover = alt.selection_point(
        name="hover",
        fields=["ticker"],
        on="mouseover",
        clear="mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("value:Q"),
        color=alt.Color(
            "ticker:N",
            scale=alt.Scale(range=_PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=4),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("value:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("ticker:N"),
            alt.Tooltip("value_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    chart = base.add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_gains_chart(
    rows: Sequence[PricedRow | AggregateRow],
    title: str,
) -> None:
    """Render a bar chart of gain percentage per ticker."""
    data = _prepare_gains_data(rows)
    if not data:
        st.info("No priced holdings available for the chart.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X("ticker:N", sort=None, title=None),
        y=alt.Y("gain_pct:Q", title="Gain %"),
        color=alt.Color(
            "direction:N",
            scale=alt.Scale(
                domain=["gain", "loss"],
                range=["#7cffb2", "#ff7c7c"],
            ),
            legend=None,
        ),
        tooltip=[alt.Tooltip("ticker:N"), alt.Tooltip("gain_label:N")],
    )
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_timeline_chart(points: Sequence[TimelinePoint]) -> None:
    """Render invested and value per purchase month."""
    data = _prepare_timeline_data(points)
    if not data:
        st.info("No dated purchases available for the timeline.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_line(
        point=True,
        interpolate="monotone",
    ).encode(
        x=alt.X("month:O", title=None),
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(range=["#1b9aaa", "#f4a261"]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        strokeDash=alt.StrokeDash(
            "series:N",
            scale=alt.Scale(
                domain=["Value", "Invested"],
                range=[[1, 0], [6, 4]],
            ),
            legend=None,
        ),
        tooltip=[
            alt.Tooltip("month_label:N", title="Month"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount_label:N", title="Amount"),
            alt.Tooltip("gain_label:N", title="Gain %"),
        ],
    )
    st.subheader("Value Timeline")
    st.altair_chart(chart, width="stretch")


def _holdings_table(rows: Sequence[PricedRow]) -> list[dict[str, str]]:
    """Return display records for the holdings table."""
    return [
        {
            "Ticker": row.ticker,
            "Month": row.month or PLACEHOLDER,
            "Shares": _format_shares(row.shares),
            "Avg Cost": _format_money(row.avg_cost),
            "Price": _format_money(row.price),
            "Invested": _format_money(row.invested),
            "Value": _format_money(row.value),
            "Gain": _format_money(row.gain),
            "Gain %": _format_pct(row.gain_pct),
        }
        for row in rows
    ]


def _performance_table(rows: Sequence[AggregateRow]) -> list[dict[str, str]]:
    """Return display records for the performance table."""
    return [
        {
            "Ticker": row.key,
            "Invested": _format_money(row.invested),
            "Value": _format_money(row.value),
            "Gain": _format_money(row.gain),
            "Gain %": _format_pct(row.gain_pct),
            "Contribution": _format_pct(row.contrib_pct),
            "Weight": _format_pct(row.weight),
            "Txns": str(row.txns),
        }
        for row in rows
    ]


def _render_holdings(context: RenderContext) -> None:
    """Render the lot-level holdings page."""
    overview = _load_holdings_overview(
        context.selection,
        context.sort_state.key,
        context.sort_state.direction,
        context.ticker_filter,
    )
    st.caption(f"As of: {overview.as_of or PLACEHOLDER}")
    _render_missing(overview.missing)

    totals = overview.totals
    invested_col, value_col, gain_col, irr_col = st.columns(4)
    invested_col.metric("Invested", _format_money(totals.invested))
    value_col.metric("Value", _format_money(totals.value))
    gain_col.metric(
        "Gain",
        _format_money(totals.gain),
        _format_pct(totals.return_pct),
    )
    irr_col.metric("IRR", _format_pct(overview.irr))

    winner_ticker, winner_pct = _format_mover(overview.winner)
    loser_ticker, loser_pct = _format_mover(overview.loser)
    winner_col, loser_col, count_col = st.columns(3)
    winner_col.metric("Winner", winner_ticker, winner_pct)
    loser_col.metric("Loser", loser_ticker, loser_pct)
    count_col.metric("Tickers", str(overview.ticker_count))

    _render_timeline_chart(overview.timeline)
    st.subheader("Holdings")
    st.dataframe(
        _holdings_table(overview.rows),
        width="stretch",
        hide_index=True,
        height=420,
    )
    st.caption(
        f"Total: invested {_format_money(totals.invested)}, "
        f"value {_format_money(totals.value)}, "
        f"gain {_format_money(totals.gain)} "
        f"({_format_pct(totals.return_pct)})"
    )
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_allocation_chart(overview.rows, "Allocation")
    with chart_right:
        _render_gains_chart(overview.rows, "Gain % by Ticker")


def _render_performance(context: RenderContext) -> None:
    """Render the per-ticker performance page for a period."""
    result = _load_performance(
        context.selection,
        context.sort_state.key,
        context.sort_state.direction,
        context.ticker_filter,
    )
    st.caption(f"As of: {result.as_of or PLACEHOLDER}")
    st.caption(f"{describe_period(result.period)} (monthly view)")
    _render_missing(result.missing)

    totals = result.totals
    invested_col, value_col, gain_col, return_col, irr_col = st.columns(5)
    invested_col.metric("Invested", _format_money(totals.invested))
    value_col.metric("Value", _format_money(totals.value))
    gain_col.metric("Gain", _format_money(totals.gain))
    return_col.metric("Return", _format_pct(totals.return_pct))
    irr_col.metric("IRR", _format_pct(result.irr))

    best_ticker, best_pct = _format_mover(result.winner)
    worst_ticker, worst_pct = _format_mover(result.loser)
    best_col, worst_col, tickers_col, txns_col = st.columns(4)
    best_col.metric("Best", best_ticker, best_pct)
    worst_col.metric("Worst", worst_ticker, worst_pct)
    tickers_col.metric("Tickers", str(result.ticker_count))
    txns_col.metric("Transactions", str(result.transaction_count))

    st.dataframe(
        _performance_table(result.rows),
        width="stretch",
        hide_index=True,
        height=420,
    )
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_allocation_chart(result.rows, "Allocation")
    with chart_right:
        _render_gains_chart(result.rows, "Gain % by Ticker")


def _render_ticker(ticker: str, sort_state: SortState) -> None:
    """Render the lots of one ticker."""
    view = _load_ticker_lots(ticker, sort_state.key, sort_state.direction)
    if not view.ticker:
        st.warning("No tickers found in the transactions file.")
        return
    price_col, rows_col = st.columns(2)
    price_col.metric(
        "Price",
        PLACEHOLDER if view.price is None else _format_money(view.price),
    )
    rows_col.metric("Rows", str(len(view.lots)))
    st.subheader(f"Transactions – {view.ticker}")
    st.dataframe(
        [
            {
                "Month": lot.month or PLACEHOLDER,
                "Shares": _format_shares(lot.shares),
                "Avg Cost": _format_money(lot.avg_cost),
                "Price": _format_money(lot.price),
                "Invested": _format_money(lot.invested),
                "Value": _format_money(lot.value),
                "Gain": _format_money(lot.gain),
                "Gain %": _format_pct(lot.gain_pct),
            }
            for lot in view.lots
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Portfolio Dashboard", layout="wide")
    st.title("Portfolio Dashboard")

    settings = build_settings()
    usage_logger = get_usage_logger()
    page = st.sidebar.selectbox("Page", ["Holdings", "Performance", "Ticker"])
    usage_logger.info(f"Page viewed: {page}")

    try:
        if page == "Holdings":
            months = _load_holdings_overview(
                ALL_MONTHS, "value", "desc", ""
            ).months
            selection = st.sidebar.selectbox(
                "Month",
                [ALL_MONTHS, *months],
                format_func=lambda m: "All" if m == ALL_MONTHS else month_label(m),
            )
            ticker_filter = st.sidebar.text_input("Search ticker", "")
            sort_state = _render_sort_controls(
                "holdings_sort",
                _HOLDINGS_SORT_KEYS,
                SortState(),
            )
            _render_holdings(
                RenderContext(
                    selection=selection,
                    sort_state=sort_state,
                    ticker_filter=ticker_filter,
                )
            )
        elif page == "Performance":
            period_key = st.sidebar.radio(
                "Period",
                PERIOD_KEYS,
                index=PERIOD_KEYS.index(settings.default_period),
                format_func=lambda key: f"{key} · {PERIOD_LABELS[key]}",
            )
            ticker_filter = st.sidebar.text_input("Search ticker", "")
            sort_state = _render_sort_controls(
                "performance_sort",
                _PERFORMANCE_SORT_KEYS,
                SortState(),
            )
            _render_performance(
                RenderContext(
                    selection=period_key,
                    sort_state=sort_state,
                    ticker_filter=ticker_filter,
                )
            )
        else:
            tickers = _load_ticker_lots("", "month", "desc").tickers
            if not tickers:
                st.warning("No tickers found in the transactions file.")
                return
            requested = str(st.query_params.get("ticker", "")).upper()
            index = tickers.index(requested) if requested in tickers else 0
            ticker = st.sidebar.selectbox("Ticker", tickers, index=index)
            sort_state = _render_sort_controls(
                "ticker_sort",
                _TICKER_SORT_KEYS,
                SortState(key="month", direction="desc"),
            )
            _render_ticker(ticker, sort_state)
    except PortfolioLoadError as exc:
        st.error(
            "⚠ Failed to load data. Check that the transactions CSV and "
            f"prices JSON are present. ({exc})"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
