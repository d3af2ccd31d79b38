"""Parse transactions CSV text into typed records."""

import re

from src.domain.models import TransactionRecord
from src.domain.services.normalization import (
    normalize_header_key,
    normalize_month,
    to_number,
)

_BOM = "\ufeff"
_LINE_BREAK = re.compile(r"\r?\n")


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    A double quote toggles quoted mode, two consecutive quotes inside a
    quoted section produce a literal quote, and commas inside quotes are
    kept as content.

    Args:
        line: Raw line without its line terminator.

    Returns:
        list[str]: Field values, stripped of surrounding whitespace.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    while index < len(line):
        char = line[index]
        if char == '"':
            if in_quotes and index + 1 < len(line) and line[index + 1] == '"':
                current.append('"')
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return [field.strip() for field in fields]


def parse_transactions_csv(text: str) -> list[TransactionRecord]:
    """Parse the transactions file into records, preserving file order.

    The first non-empty line is the header. Header cells are matched
    case- and spacing-insensitively; rows shorter than the header leave
    the missing columns empty.

    Args:
        text: Full CSV text, optionally starting with a byte-order mark.

    Returns:
        list[TransactionRecord]: One record per non-blank data line.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    lines = [line for line in _LINE_BREAK.split(text) if line.strip()]
    if not lines:
        return []

    headers = [normalize_header_key(cell) for cell in parse_csv_line(lines[0])]
    records: list[TransactionRecord] = []
    for line in lines[1:]:
        values = parse_csv_line(line)
        row = dict(zip(headers, values))
        records.append(
            TransactionRecord(
                ticker=str(row.get("ticker") or "").strip(),
                shares=to_number(row.get("shares")),
                total_cost=to_number(row.get("total_cost")),
                month=normalize_month(row.get("month")),
            )
        )
    return records


__all__ = ["parse_csv_line", "parse_transactions_csv"]
