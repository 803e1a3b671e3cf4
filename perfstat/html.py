"""HTML rendering of comparison tables."""

from __future__ import annotations

from typing import Sequence

from perfstat.table import Row, Table

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\0": "\ufffd",
}


def _esc(s: str) -> str:
    return "".join(_ESCAPES.get(c, c) for c in s)


def colspan(configs: int, delta: bool) -> int:
    """Return the column span of a group header row."""
    if delta:
        configs += 1
    return configs + 1


def group_rows(rows: Sequence[Row]) -> list[list[Row]]:
    """Split rows into runs of consecutive rows sharing a group."""
    out: list[list[Row]] = []
    group = ""
    cur: list[Row] = []
    for row in rows:
        if row.group != group:
            group = row.group
            if cur:
                out.append(cur)
                cur = []
        cur.append(row)
    if cur:
        out.append(cur)
    return out


def _row_html(table: Table, row: Row) -> str:
    parts = []
    if table.old_new_delta:
        if row.change == 1:
            cls = "better"
        elif row.change == -1:
            cls = "worse"
        else:
            cls = "unchanged"
        parts.append(f"<tr class='{cls}'>")
    else:
        parts.append("<tr>")
    parts.append(f"<td>{_esc(row.benchmark)}")
    for m in row.metrics:
        parts.append(f"<td>{_esc(m.format(row.scaler))}")
    if table.old_new_delta:
        cls = "nodelta" if row.delta == "~" else "delta"
        delta = row.delta.replace("-", "\u2212")
        parts.append(f"<td class='{cls}'>{_esc(delta)}<td class='note'>{_esc(row.note)}")
    parts.append("\n")
    return "".join(parts)


def _table_html(table: Table) -> str:
    parts = ["\n<tbody>\n"]
    if len(table.configs) == 1:
        parts.append(f"\n<tr><th><th>{_esc(table.metric)}\n")
    else:
        parts.append(
            f"<tr><th><th colspan='{len(table.configs)}' class='metric'>{_esc(table.metric)}"
        )
        if table.old_new_delta:
            parts.append("<th>delta")
        parts.append("\n")
    for group in group_rows(table.rows):
        if len(table.groups) > 1 and group[0].group:
            span = colspan(len(table.configs), table.old_new_delta)
            parts.append(f"<tr class='group'><th colspan='{span}'>{_esc(group[0].group)}")
        parts.extend(_row_html(table, row) for row in group)
    parts.append("<tr><td>&nbsp;\n</tbody>\n")
    return "".join(parts)


def format_html(tables: Sequence[Table]) -> str:
    """Return an HTML rendering of tables, or "" if there are none."""
    if not tables:
        return ""
    first = tables[0]
    parts = [f"\n<table class='benchstat {'oldnew' if first.old_new_delta else ''}'>\n"]
    if len(first.configs) != 1:
        parts.append("<tr class='configs'><th>")
        parts.extend(f"<th>{_esc(c)}" for c in first.configs)
        parts.append("\n")
    parts.append("\n")
    parts.extend(_table_html(t) for t in tables)
    parts.append("\n</table>\n")
    return "".join(parts)