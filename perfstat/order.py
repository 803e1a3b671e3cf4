"""Row orderings for comparison tables."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from perfstat.table import Table

Order = Callable[["Table", int, int], bool]
"""Reports whether table.rows[i] should come before table.rows[j]."""


def by_name(table: Table, i: int, j: int) -> bool:
    """Order rows by benchmark name."""
    return table.rows[i].benchmark < table.rows[j].benchmark


def by_delta(table: Table, i: int, j: int) -> bool:
    """Order rows by change, improvements first."""
    a, b = table.rows[i], table.rows[j]
    return abs(a.pct_delta) * a.change < abs(b.pct_delta) * b.change


def reverse(order: Order) -> Order:
    """Return the reverse of order."""

    def reversed_order(table: Table, i: int, j: int) -> bool:
        return order(table, j, i)

    return reversed_order


def sort_table(table: Table, order: Order) -> None:
    """Sort the rows of table in place, stably, by order."""

    def compare(i: int, j: int) -> int:
        if order(table, i, j):
            return -1
        if order(table, j, i):
            return 1
        return 0

    indices = sorted(range(len(table.rows)), key=cmp_to_key(compare))
    table.rows = [table.rows[i] for i in indices]