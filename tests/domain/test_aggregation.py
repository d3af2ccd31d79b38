"""Tests for ticker and month aggregation."""

import random

import pytest

from src.domain.models import PortfolioTotals, PricedRow
from src.domain.services.aggregation import (
    aggregate_by_month,
    aggregate_by_ticker,
    build_timeline,
    compute_contribution,
    compute_totals,
    pick_loser,
    pick_winner,
)
from src.domain.services.pricing import value_lot


def _lot(
    ticker: str,
    shares: float,
    cost: float,
    price: float,
    month: str = "2025-01",
) -> PricedRow:
    return value_lot(ticker, month, shares, cost, price)


def test_aggregate_by_ticker_sums_lots() -> None:
    """Lots of one ticker fold into a single row."""
    rows = [
        _lot("AAPL", 10, 1000, 150, "2025-01"),
        _lot("AAPL", 5, 600, 150, "2025-02"),
    ]

    [aggregate] = aggregate_by_ticker(rows)

    assert aggregate.key == "AAPL"
    assert aggregate.ticker == "AAPL"
    assert aggregate.invested == 1600
    assert aggregate.value == 2250
    assert aggregate.gain == 650
    assert aggregate.gain_pct == 0.40625
    assert aggregate.weight == 1.0
    assert aggregate.contrib_pct == 1.0
    assert aggregate.txns == 2


def test_aggregation_is_order_independent() -> None:
    """Shuffling the lots should not change the sums."""
    rows = [
        _lot("AAPL", 1.1, 100.3, 150.7),
        _lot("MSFT", 2.3, 800.1, 410.2),
        _lot("AAPL", 0.7, 90.9, 150.7),
        _lot("VTI", 3.9, 1000.5, 270.4),
        _lot("MSFT", 1.2, 420.0, 410.2),
    ]
    shuffled = rows[:]
    random.Random(7).shuffle(shuffled)

    original = {row.key: row for row in aggregate_by_ticker(rows)}
    reordered = {row.key: row for row in aggregate_by_ticker(shuffled)}

    assert original.keys() == reordered.keys()
    for key, row in original.items():
        assert reordered[key].invested == pytest.approx(row.invested)
        assert reordered[key].value == pytest.approx(row.value)
        assert reordered[key].txns == row.txns


def test_weights_can_use_an_external_total() -> None:
    """Weights are measured against the provided total value."""
    rows = [_lot("AAPL", 1, 100, 100), _lot("MSFT", 1, 100, 300)]

    own = {row.key: row.weight for row in aggregate_by_ticker(rows)}
    external = {
        row.key: row.weight
        for row in aggregate_by_ticker(rows, total_value=800)
    }

    assert own == {"AAPL": 0.25, "MSFT": 0.75}
    assert external == {"AAPL": 0.125, "MSFT": 0.375}


def test_weight_is_zero_when_total_value_is_zero() -> None:
    """A zero total value yields zero weights."""
    [row] = aggregate_by_ticker([_lot("AAPL", 1, 100, 100)], total_value=0)

    assert row.weight == 0


def test_contribution_is_suppressed_near_zero_return() -> None:
    """Contribution is undefined when the overall return is within epsilon."""
    flat = PortfolioTotals(invested=10_000, value=10_005)
    moving = PortfolioTotals(invested=10_000, value=10_500)

    assert compute_contribution(5, flat, epsilon=1e-3) is None
    assert compute_contribution(250, moving, epsilon=1e-3) == 0.5
    assert compute_contribution(5, PortfolioTotals(0, 0)) is None


def test_contribution_handles_negative_total_gain() -> None:
    """Losses share the total loss like gains share the total gain."""
    rows = [
        _lot("AAPL", 1, 100, 50),
        _lot("MSFT", 1, 100, 150),
        _lot("VTI", 1, 100, 0),
    ]

    contributions = {
        row.key: row.contrib_pct for row in aggregate_by_ticker(rows)
    }

    assert contributions["AAPL"] == pytest.approx(0.5)
    assert contributions["MSFT"] == pytest.approx(-0.5)
    assert contributions["VTI"] == pytest.approx(1.0)


def test_aggregate_by_month_skips_unbucketed_lots() -> None:
    """Lots without a month are excluded from monthly aggregation."""
    rows = [
        _lot("AAPL", 1, 100, 110, "2025-01"),
        _lot("MSFT", 1, 100, 120, "2025-01"),
        _lot("VTI", 1, 100, 90, ""),
    ]

    [month] = aggregate_by_month(rows)

    assert month.key == "2025-01"
    assert month.invested == 200
    assert month.value == 230
    assert month.txns == 2


def test_build_timeline_sorts_and_cuts_months() -> None:
    """Timeline points are sorted by month and optionally truncated."""
    rows = [
        _lot("AAPL", 1, 100, 110, "2025-03"),
        _lot("AAPL", 1, 100, 110, "2025-01"),
        _lot("MSFT", 1, 50, 40, "2025-02"),
    ]

    points = build_timeline(rows)
    truncated = build_timeline(rows, up_to_month="2025-02")

    assert [point.month for point in points] == ["2025-01", "2025-02", "2025-03"]
    assert points[1].gain_pct == pytest.approx(-0.2)
    assert [point.month for point in truncated] == ["2025-01", "2025-02"]


def test_winner_and_loser_keep_first_on_ties() -> None:
    """Ties go to the first row in input order."""
    rows = [
        _lot("AAPL", 1, 100, 120),
        _lot("MSFT", 1, 100, 120),
        _lot("VTI", 1, 100, 80),
        _lot("NVDA", 1, 100, 80),
    ]

    winner = pick_winner(rows)
    loser = pick_loser(rows)

    assert winner is not None and winner.ticker == "AAPL"
    assert winner.gain_pct == pytest.approx(0.2)
    assert loser is not None and loser.ticker == "VTI"
    assert pick_winner([]) is None
    assert pick_loser([]) is None


def test_compute_totals_sums_rows() -> None:
    """Totals derive gain and return from the sums."""
    totals = compute_totals([_lot("AAPL", 2, 100, 75), _lot("MSFT", 1, 100, 50)])

    assert totals.invested == 200
    assert totals.value == 200
    assert totals.gain == 0
    assert totals.return_pct == 0
