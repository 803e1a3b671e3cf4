"""Comparison tables built from a collection of benchmark metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence

from perfstat.data import Key
from perfstat.delta import DeltaTest, DeltaTestError, u_test
from perfstat.metrics import Metrics
from perfstat.order import sort_table
from perfstat.scaler import Scaler, new_scaler

if TYPE_CHECKING:
    from perfstat.data import Collection


@dataclass
class Row:
    """A table row for one benchmark."""

    benchmark: str = ""
    group: str = ""
    scaler: Optional[Scaler] = None
    metrics: list[Metrics] = field(default_factory=list)
    pct_delta: float = 0.0
    delta: str = ""
    note: str = ""
    change: int = 0
    """+1 better, -1 worse, 0 unchanged."""


@dataclass
class Table:
    """A table of one metric across configurations."""

    metric: str = ""
    old_new_delta: bool = False
    configs: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)


_METRIC_SUFFIX = {
    "ns/op": "time/op",
    "ns/GC": "time/GC",
    "B/op": "alloc/op",
    "MB/s": "speed",
}


def metric_of(unit: str) -> str:
    """Return the name of the metric measured in unit."""
    if unit in _METRIC_SUFFIX:
        return _METRIC_SUFFIX[unit]
    for suffix, name in _METRIC_SUFFIX.items():
        dashed = "-" + suffix
        if unit.endswith(dashed):
            return unit[: -len(dashed)] + "-" + name
    return unit


def _geomean(xs: Sequence[float]) -> float:
    if not xs:
        return math.nan
    m = 0.0
    for i, x in enumerate(xs, 1):
        if x <= 0:
            return math.nan
        m += (math.log(x) - m) / i
    return math.exp(m)


def _pct_change(new: float, old: float) -> float:
    try:
        return (new / old - 1.0) * 100.0
    except ZeroDivisionError:
        return math.copysign(math.inf, new) if new else math.nan


def _format_pct(pct: float) -> str:
    if math.isnan(pct):
        return "+NaN%"
    if math.isinf(pct):
        return "+Inf%" if pct > 0 else "-Inf%"
    return f"{pct:+.2f}%"


def _build_row(
    collection: Collection,
    table: Table,
    group: str,
    benchmark: str,
    unit: str,
    delta_test: DeltaTest,
    alpha: float,
) -> Optional[Row]:
    row = Row(benchmark=benchmark)
    if len(collection.groups) > 1:
        row.group = group

    for config in collection.configs:
        m = collection.metrics.get(Key(config, group, benchmark, unit))
        if m is None:
            row.metrics.append(Metrics())
            continue
        row.metrics.append(m)
        if row.scaler is None:
            row.scaler = new_scaler(m.mean, m.unit)

    if not table.old_new_delta:
        return row

    old = collection.metrics.get(Key(collection.configs[0], group, benchmark, unit))
    new = collection.metrics.get(Key(collection.configs[1], group, benchmark, unit))
    if old is None or new is None:
        return None

    error: Optional[DeltaTestError] = None
    try:
        pval = delta_test(old, new)
    except DeltaTestError as exc:
        pval, error = -1.0, exc

    row.pct_delta = 0.0
    row.delta = "~"
    if error is not None:
        row.note = f"({error})"
    elif pval < alpha:
        if new.mean == old.mean:
            row.delta = "0.00%"
        else:
            pct = _pct_change(new.mean, old.mean)
            row.pct_delta = pct
            row.delta = _format_pct(pct)
            # Smaller is better, except for speeds.
            row.change = 1 if (pct < 0) == (table.metric != "speed") else -1
    if not row.note and pval != -1:
        row.note = f"(p={pval:0.3f} n={len(old.rvalues)}+{len(new.rvalues)})"
    return row


def build_tables(collection: Collection) -> list[Table]:
    """Return tables comparing the benchmarks in collection, one per unit."""
    delta_test = collection.delta_test or u_test
    alpha = collection.alpha or 0.05

    for m in collection.metrics.values():
        m.compute_stats()

    tables = []
    for unit in collection.units:
        table = Table(
            metric=metric_of(unit),
            old_new_delta=len(collection.configs) == 2,
            configs=list(collection.configs),
            groups=list(collection.groups),
        )
        for group in collection.groups:
            for benchmark in collection.benchmarks.get(group, []):
                row = _build_row(collection, table, group, benchmark, unit, delta_test, alpha)
                if row is not None:
                    table.rows.append(row)

        if table.rows:
            if collection.order is not None:
                sort_table(table, collection.order)
            if collection.add_geomean:
                add_geomean(collection, table, unit, table.old_new_delta)
            tables.append(table)
    return tables


def add_geomean(collection: Collection, table: Table, unit: str, delta: bool) -> None:
    """Append a row with the geometric mean of all benchmarks in unit."""
    row = Row(benchmark="[Geo mean]")
    geomeans = []
    max_count = 0
    for config in collection.configs:
        # Zero means are left out: they would make the geomean zero or undefined.
        means = [
            m.mean
            for group in collection.groups
            for benchmark in collection.benchmarks.get(group, [])
            if (m := collection.metrics.get(Key(config, group, benchmark, unit))) is not None
            and m.mean != 0
        ]
        max_count = max(max_count, len(means))
        if not means:
            row.metrics.append(Metrics())
            delta = False
            continue
        geomean = _geomean(means)
        geomeans.append(geomean)
        if row.scaler is None:
            row.scaler = new_scaler(geomean, unit)
        row.metrics.append(Metrics(unit=unit, mean=geomean))

    if max_count <= 1:
        # A single benchmark's geomean is just that benchmark.
        return
    if delta:
        pct = _pct_change(geomeans[1], geomeans[0])
        row.pct_delta = pct
        row.delta = _format_pct(pct)
    table.rows.append(row)