"""Fixed-width text and CSV rendering of comparison tables."""

from __future__ import annotations

import math
import os
from typing import Iterable, Sequence, TextIO

from perfstat.table import Table


def _trim(cols: list[str]) -> list[str]:
    while cols and cols[-1] == "":
        cols.pop()
    return cols


def _delta_row(norange: bool, label: str, *cols: str) -> list[str]:
    """Return label followed by cols, with "±" after each col unless norange."""
    row = [label]
    for col in cols:
        row.append(col)
        if not norange:
            row.append("±")
    return row


def _to_text(table: Table) -> list[list[str]]:
    n = len(table.configs)
    if n == 1:
        rows = [["name", table.metric]]
    elif n == 2:
        rows = [["name", "old " + table.metric, "new " + table.metric, "delta"]]
    else:
        rows = [["name \\ " + table.metric, *table.configs]]

    group = ""
    for row in table.rows:
        if row.group != group:
            group = row.group
            rows.append([group])
        cols = [row.benchmark]
        cols.extend(m.format(row.scaler) for m in row.metrics)
        if n == 2:
            cols.append("~   " if row.delta == "~" else row.delta)
            cols.append(row.note)
        rows.append(cols)
    return [_trim(r) for r in rows]


def _sci(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    return f"{x:.5E}"


def _to_csv(table: Table, norange: bool) -> list[list[str]]:
    units = ""
    if table.rows and table.rows[0].metrics:
        units = f" ({table.rows[0].metrics[0].unit})"
    n = len(table.configs)
    if n == 1:
        rows = [_delta_row(norange, "name", table.metric + units)]
    elif n == 2:
        rows = [
            _delta_row(
                norange,
                "name",
                "old " + table.metric + units,
                "new " + table.metric + units,
                "delta",
            )
        ]
    else:
        label = "name \\ " + table.metric + units
        rows = [_delta_row(norange, label, *trim_common_path_prefix(table.configs))]

    group = ""
    for row in table.rows:
        if row.group != group:
            group = row.group
            rows.append([group])
        cols = [row.benchmark]
        for m in row.metrics:
            if m.unit:
                mean, diff = _sci(m.mean), m.format_diff()
            else:
                mean = diff = ""
            cols.append(mean)
            if not norange:
                cols.append(diff)
        if n == 2:
            cols.append(row.delta)
            cols.append(row.note)
        rows.append(cols)
    return [_trim(r) for r in rows]


def _csv_field(field: str) -> str:
    if field == "":
        return field
    needs_quotes = (
        field == "\\."
        or any(c in field for c in ',"\r\n')
        or field[0].isspace()
    )
    if not needs_quotes:
        return field
    return '"' + field.replace('"', '""') + '"'


def _csv_line(cols: Iterable[str]) -> str:
    return ",".join(_csv_field(c) for c in cols) + "\n"


def format_text(out: TextIO, tables: Sequence[Table]) -> None:
    """Write a fixed-width text rendering of tables to out."""
    text_tables = [_to_text(t) for t in tables]

    widths: list[int] = []
    for table in text_tables:
        for cols in table:
            if len(cols) == 1:
                continue
            if len(widths) < len(cols):
                widths.extend([0] * (len(cols) - len(widths)))
            for i, s in enumerate(cols):
                widths[i] = max(widths[i], len(s))

    def width(i: int) -> int:
        return widths[i] if i < len(widths) else 0

    for k, table in enumerate(text_tables):
        if k > 0:
            out.write("\n")

        header = table[0]
        last = len(header) - 1
        for i, s in enumerate(header):
            if i == 0:
                out.write(s.ljust(width(i)))
            elif i == last:
                out.write(f"  {s}\n")
            else:
                out.write("  " + s.ljust(width(i)))

        for cols in table[1:]:
            for i, s in enumerate(cols):
                if len(cols) == 1:
                    out.write(s)
                elif i == 0:
                    out.write(s.ljust(width(i)))
                elif i == len(cols) - 1 and s.startswith("("):
                    # Left-align the p-value note.
                    out.write("  " + s)
                else:
                    out.write("  " + s.rjust(width(i)))
            out.write("\n")


def format_csv(out: TextIO, tables: Sequence[Table], norange: bool) -> None:
    """Write a CSV rendering of tables to out; norange drops the range columns."""
    for k, table in enumerate(tables):
        if k > 0:
            out.write("\n")
        for cols in _to_csv(table, norange):
            out.write(_csv_line(cols))


def trim_common_path_prefix(names: Sequence[str]) -> list[str]:
    """Strip the common directory prefix shared by the non-empty names.

    Empty names are ignored and kept empty; a single non-empty name is
    left unchanged.
    """
    present = [s for s in names if s]
    if len(present) < 2:
        return list(names)
    prefix = os.path.commonprefix(present)
    if not prefix:
        return list(names)
    cut = prefix.rfind(os.sep) + 1
    if cut == 0:
        return list(names)
    return [s[cut:] if s else "" for s in names]