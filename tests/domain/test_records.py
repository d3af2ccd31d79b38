"""Tests for the transactions CSV normalizer."""

import math

from src.domain.models import TransactionRecord
from src.domain.services.normalization import (
    month_from_iso_date,
    normalize_header_key,
    normalize_ticker,
    to_number,
)
from src.domain.services.records import parse_csv_line, parse_transactions_csv


def test_to_number_strips_currency_noise() -> None:
    """Separators, currency and percent signs should be ignored."""
    assert to_number("1,234.50") == 1234.5
    assert to_number("$ 2,000") == 2000
    assert to_number("12%") == 12
    assert to_number(7) == 7


def test_to_number_reads_parenthesized_negatives() -> None:
    """A value wrapped in parentheses is negative."""
    assert to_number("(50)") == -50
    assert to_number("($123.45)") == -123.45


def test_to_number_returns_nan_for_empty_or_garbage() -> None:
    """Empty and non-numeric cells become NaN instead of raising."""
    assert math.isnan(to_number(None))
    assert math.isnan(to_number(""))
    assert math.isnan(to_number("   "))
    assert math.isnan(to_number("abc"))
    assert math.isnan(to_number("12abc"))
    assert math.isnan(to_number("$"))


def test_parse_csv_line_handles_quotes() -> None:
    """Quoted commas and doubled quotes should be kept as content."""
    assert parse_csv_line('"a,b",c') == ["a,b", "c"]
    assert parse_csv_line('"a""b"') == ['a"b']
    assert parse_csv_line(" x , y ,") == ["x", "y", ""]


def test_normalize_header_key_collapses_whitespace() -> None:
    """Header cells should become lowercase underscore keys."""
    assert normalize_header_key("  Total   Cost ") == "total_cost"
    assert normalize_header_key("TICKER") == "ticker"
    assert normalize_header_key(None) == ""


def test_normalize_ticker_and_month_helpers() -> None:
    """Tickers are uppercased and ISO dates cut to their month."""
    assert normalize_ticker("  aapl ") == "AAPL"
    assert normalize_ticker(None) == ""
    assert month_from_iso_date("2025-06-30T16:00:00Z") == "2025-06"
    assert month_from_iso_date(None) == ""


def test_parse_transactions_csv_reads_records() -> None:
    """Rows should be parsed in order with formatted numbers."""
    text = (
        "\ufeffTicker, Shares ,Total Cost,Month\r\n"
        'aapl,10,"$1,000.00",2025-01\r\n'
        "\r\n"
        "MSFT,2,(30),2025-02\n"
    )

    records = parse_transactions_csv(text)

    assert records == [
        TransactionRecord("aapl", 10.0, 1000.0, "2025-01"),
        TransactionRecord("MSFT", 2.0, -30.0, "2025-02"),
    ]


def test_parse_transactions_csv_defaults_missing_columns() -> None:
    """Short rows and absent columns default to empty or NaN."""
    text = "ticker,shares,total_cost\nVTI,3\n"

    records = parse_transactions_csv(text)

    assert len(records) == 1
    record = records[0]
    assert record.ticker == "VTI"
    assert record.shares == 3
    assert math.isnan(record.total_cost)
    assert record.month == ""


def test_parse_transactions_csv_skips_leading_blank_lines() -> None:
    """The first non-empty line is the header."""
    text = "\n\n  \nticker,shares,total_cost,month\nNVDA,1,100,2025-03\n"

    records = parse_transactions_csv(text)

    assert [record.ticker for record in records] == ["NVDA"]


def test_parse_transactions_csv_returns_empty_for_blank_text() -> None:
    """Blank input should produce no records."""
    assert parse_transactions_csv("") == []
    assert parse_transactions_csv("\ufeff\n\n") == []
