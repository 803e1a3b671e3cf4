"""Collections of benchmark results grouped by configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, NamedTuple, Optional

from perfstat.delta import DeltaTest
from perfstat.metrics import Metrics
from perfstat.order import Order

if TYPE_CHECKING:
    from perfstat.table import Table

_INT_RE = re.compile(r"[+-]?\d+")


class Key(NamedTuple):
    """Identifies one metric of one benchmark in one group and configuration."""

    config: str = ""
    group: str = ""
    benchmark: str = ""
    unit: str = ""


@dataclass
class BenchResult:
    """One benchmark result line with its file and name labels."""

    content: str
    labels: dict[str, str] = field(default_factory=dict)
    name_labels: dict[str, str] = field(default_factory=dict)


def _parse_float(s: str) -> Optional[float]:
    if "_" in s:
        return None
    try:
        return float(s)
    except ValueError:
        return None


def _add_unique(items: list[str], item: str) -> None:
    if item not in items:
        items.append(item)


@dataclass
class Collection:
    """Benchmark results collected for comparison.

    configs, groups, units and benchmarks keep the order in which
    they were first seen.
    """

    configs: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    units: list[str] = field(default_factory=list)
    benchmarks: dict[str, list[str]] = field(default_factory=dict)
    metrics: dict[Key, Metrics] = field(default_factory=dict)
    delta_test: Optional[DeltaTest] = None
    """Significance test; u_test when None."""
    alpha: float = 0.0
    """p-value cutoff for a significant change; 0.05 when zero."""
    add_geomean: bool = False
    split_by: list[str] = field(default_factory=list)
    order: Optional[Order] = None

    def _add_metrics(self, key: Key) -> Metrics:
        existing = self.metrics.get(key)
        if existing is not None:
            return existing
        _add_unique(self.configs, key.config)
        _add_unique(self.groups, key.group)
        _add_unique(self.benchmarks.setdefault(key.group, []), key.benchmark)
        _add_unique(self.units, key.unit)
        m = Metrics(unit=key.unit)
        self.metrics[key] = m
        return m

    def add_results(self, config: str, results: Iterable[BenchResult]) -> None:
        """Add benchmark results to the named configuration."""
        self.configs.append(config)
        for result in results:
            self._add_result(config, result)

    def _add_result(self, config: str, result: BenchResult) -> None:
        fields = result.content.split()
        if len(fields) < 4:
            return
        name = fields[0]
        if not name.startswith("Benchmark"):
            return
        name = name[len("Benchmark"):]
        if not _INT_RE.fullmatch(fields[1]) or int(fields[1]) == 0:
            return
        group = self._make_group(result)
        for value_text, unit in zip(fields[2::2], fields[3::2]):
            value = _parse_float(value_text)
            if value is None:
                continue
            self._add_metrics(Key(config, group, name, unit)).values.append(value)

    def _make_group(self, result: BenchResult) -> str:
        parts = []
        for label in self.split_by:
            value = result.name_labels.get(label) or result.labels.get(label, "")
            if value:
                parts.append(f"{label}:{value}")
        return " ".join(parts)

    def tables(self) -> list[Table]:
        """Return tables comparing the benchmarks in this collection."""
        from perfstat.table import build_tables

        return build_tables(self)