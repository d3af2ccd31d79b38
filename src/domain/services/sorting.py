"""Stable table sorting by a named field."""

import math
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

T = TypeVar("T")


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def sort_rows(rows: Iterable[T], key: str, direction: str = "desc") -> list[T]:
    """Return rows sorted by one field.

    Strings compare lexicographically and numbers numerically. Rows whose
    field is missing or NaN go last in both directions. Rows with equal
    values keep their relative order.

    Args:
        rows: Dataclass instances or mappings.
        key: Field name to sort on.
        direction: "asc" or "desc".

    Returns:
        list[T]: New sorted list.
    """
    present: list[T] = []
    blank: list[T] = []
    for row in rows:
        (blank if _is_blank(_field(row, key)) else present).append(row)

    as_text = any(isinstance(_field(row, key), str) for row in present)

    def sort_key(row: T) -> Any:
        value = _field(row, key)
        return str(value) if as_text else value

    ordered = sorted(present, key=sort_key, reverse=direction != "asc")
    return ordered + blank


__all__ = ["sort_rows"]
