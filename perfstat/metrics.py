"""Accumulated measurements of one metric for one benchmark."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence

from perfstat.scaler import Scaler


def _go_float(x: float) -> str:
    """Format x in the shortest form, switching to an exponent for extremes."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    d = Decimal(repr(x)).normalize()
    exp = d.adjusted()
    if -4 <= exp < 21:
        return format(d, "f")
    sign, digits, _ = d.as_tuple()
    ds = "".join(str(digit) for digit in digits)
    mantissa = ds[0] + ("." + ds[1:] if len(ds) > 1 else "")
    exp_sign = "-" if exp < 0 else "+"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exp):02d}"


def _percentile(xs: Sequence[float], p: float) -> float:
    if not xs:
        return math.nan
    s = sorted(xs)
    if p <= 0:
        return s[0]
    if p >= 1:
        return s[-1]
    n = 1 / 3 + p * (len(s) + 1 / 3)
    frac, whole = math.modf(n)
    k = int(whole)
    if k <= 0:
        return s[0]
    if k >= len(s):
        return s[-1]
    return s[k - 1] + frac * (s[k] - s[k - 1])


def _mean(xs: Sequence[float]) -> float:
    if not xs:
        return math.nan
    m = 0.0
    for i, x in enumerate(xs, 1):
        m += (x - m) / i
    return m


@dataclass
class Metrics:
    """Measurements of a single metric for all runs of one benchmark."""

    unit: str = ""
    values: list[float] = field(default_factory=list)
    rvalues: list[float] = field(default_factory=list)
    min: float = 0.0
    mean: float = 0.0
    max: float = 0.0

    def format_mean(self, scaler: Optional[Scaler]) -> str:
        """Format the mean with scaler, or plainly if there is none."""
        if scaler is not None:
            return scaler(self.mean)
        return _go_float(self.mean)

    def format_diff(self) -> str:
        """Format the larger relative spread of min and max around the mean."""
        if self.mean == 0 or self.max == 0:
            return ""
        diff = 1 - self.min / self.mean
        d = self.max / self.mean - 1
        if d > diff:
            diff = d
        pct = diff * 100.0
        if math.isnan(pct):
            return "NaN%"
        return f"{pct:.0f}%"

    def format(self, scaler: Optional[Scaler]) -> str:
        """Format as "mean ±diff"."""
        if not self.unit:
            return ""
        mean = self.format_mean(scaler)
        diff = self.format_diff()
        if not diff:
            return mean + "     "
        return f"{mean} ±{diff:>3}"

    def compute_stats(self) -> None:
        """Discard outliers from values and derive min, mean and max."""
        q1 = _percentile(self.values, 0.25)
        q3 = _percentile(self.values, 0.75)
        iqr = q3 - q1
        lo, hi = q1 - 1.5 * iqr, q3 + 1.5 * iqr
        self.rvalues = [v for v in self.values if lo <= v <= hi]
        if self.rvalues:
            self.min = min(self.rvalues)
            self.max = max(self.rvalues)
        else:
            self.min = self.max = math.nan
        self.mean = _mean(self.rvalues)