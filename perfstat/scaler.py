"""Scaling of benchmark measurements for the comparison tables."""

from __future__ import annotations

import math
from typing import Callable

Scaler = Callable[[float], str]
"""Scales and formats a measurement; one is shared by a whole table row."""


def _fixed(val: float, prec: int) -> str:
    if math.isnan(val):
        return "NaN"
    if math.isinf(val):
        return "+Inf" if val > 0 else "-Inf"
    return f"{val:.{prec}f}"


_GENERAL_STEPS = [
    (99500000000000, 0, 1e12, "T"),
    (9950000000000, 1, 1e12, "T"),
    (995000000000, 2, 1e12, "T"),
    (99500000000, 0, 1e9, "G"),
    (9950000000, 1, 1e9, "G"),
    (995000000, 2, 1e9, "G"),
    (99500000, 0, 1e6, "M"),
    (9950000, 1, 1e6, "M"),
    (995000, 2, 1e6, "M"),
    (99500, 0, 1e3, "k"),
    (9950, 1, 1e3, "k"),
    (995, 2, 1e3, "k"),
    (99.5, 0, 1.0, ""),
    (9.95, 1, 1.0, ""),
]

_TIME_STEPS = [
    (99.5, 0, 1.0, "s"),
    (9.95, 1, 1.0, "s"),
    (0.995, 2, 1.0, "s"),
    (0.0995, 0, 1000.0, "ms"),
    (0.00995, 1, 1000.0, "ms"),
    (0.000995, 2, 1000.0, "ms"),
    (0.0000995, 0, 1000.0 * 1000, "µs"),
    (0.00000995, 1, 1000.0 * 1000, "µs"),
    (0.000000995, 2, 1000.0 * 1000, "µs"),
    (0.0000000995, 0, 1000.0 * 1000 * 1000, "ns"),
    (0.00000000995, 1, 1000.0 * 1000 * 1000, "ns"),
]


def has_base_unit(s: str, unit: str) -> bool:
    """Report whether s is unit or ends in "-" followed by unit."""
    return s == unit or s.endswith("-" + unit)


def _time_scaler(ns: float) -> Scaler:
    x = ns / 1e9
    prec, scale, suffix = 2, 1000.0 * 1000 * 1000, "ns"
    for threshold, p, sc, suf in _TIME_STEPS:
        if x >= threshold:
            prec, scale, suffix = p, sc, suf
            break

    def fmt(value: float) -> str:
        return _fixed(value / 1e9 * scale, prec) + suffix

    return fmt


def new_scaler(val: float, unit: str) -> Scaler:
    """Return a Scaler suited to formatting val, measured in unit."""
    if has_base_unit(unit, "ns/op") or has_base_unit(unit, "ns/GC"):
        return _time_scaler(val)

    is_speed = has_base_unit(unit, "MB/s")
    prescale = 1e6 if is_speed else 1.0
    x = val * prescale
    prec, scale, suffix = 2, 1.0, ""
    for threshold, p, sc, suf in _GENERAL_STEPS:
        if x >= threshold:
            prec, scale, suffix = p, sc, suf
            break

    if any(has_base_unit(unit, u) for u in ("B/op", "bytes/op", "bytes")):
        suffix += "B"
    if is_speed:
        suffix += "B/s"
    scale /= prescale

    def fmt(value: float) -> str:
        return _fixed(value / scale, prec) + suffix

    return fmt