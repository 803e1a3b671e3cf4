"""Scaling and formatting of numbers with SI or IEC prefixes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, NamedTuple

from perfstat.units import UnitClass


def _format_fixed(val: float, prec: int) -> str:
    if math.isnan(val):
        return "NaN"
    if math.isinf(val):
        return "+Inf" if val > 0 else "-Inf"
    if prec < 0:
        return format(Decimal(repr(val)).normalize(), "f")
    return f"{val:.{prec}f}"


@dataclass(frozen=True)
class Scaler:
    """A scaling factor and the precision used to show scaled values.

    A negative prec means the shortest representation of the exact value.
    """

    prec: int
    factor: float
    prefix: str

    def format(self, val: float) -> str:
        """Format val scaled by this factor, followed by the prefix."""
        return _format_fixed(val / self.factor, self.prec) + self.prefix


NO_OP_SCALER = Scaler(-1, 1.0, "")
"""Formats numbers exactly with no prefix, for machine-read output."""


class _Factor(NamedTuple):
    factor: float
    prefix: str
    t100: float
    t10: float
    t1: float


def _si_factors() -> list[_Factor]:
    factors = []
    for i, prefix in enumerate(["T", "G", "M", "k", "", "m", "µ", "n"]):
        exp = 12 - 3 * i
        factors.append(
            _Factor(
                float(f"1e{exp}"),
                prefix,
                float(f"99.995e{exp}"),
                float(f"9.9995e{exp}"),
                float(f".99995e{exp}"),
            )
        )
    return factors


def _iec_factors() -> list[_Factor]:
    # Values in [1000, 1024) of a factor are shown with the next smaller
    # factor, which keeps precision and avoids scaled values below 1.
    factors = []
    for i, prefix in enumerate(["Ti", "Gi", "Mi", "Ki", ""]):
        exp = 40 - 10 * i
        factors.append(
            _Factor(
                2.0**exp,
                prefix,
                float.fromhex(f"0x1.8ffae147ae148p{6 + exp}"),
                float.fromhex(f"0x1.3ffbe76c8b439p{3 + exp}"),
                float.fromhex(f"0x1.fff972474538fp{-1 + exp}"),
            )
        )
    return factors


_SI_FACTORS = _si_factors()
_IEC_FACTORS = _iec_factors()
# Thresholds for 3, 4, ... digits after the decimal point.
_SIGFIGS = [float(f"9.9995e{exp}") for exp in range(-1, -9, -1)]
_SIGFIGS_BASE = 3


def scale(val: float, cls: UnitClass) -> str:
    """Format val with at least three significant digits and a prefix."""
    return common_scale([val], cls).format(val)


def common_scale(vals: Iterable[float], cls: UnitClass) -> Scaler:
    """Return a Scaler that shows every value in vals with three significant digits."""
    smallest = 0.0
    for v in vals:
        v = abs(v)
        if v != 0 and (smallest == 0 or v < smallest):
            smallest = v
    if smallest == 0:
        return Scaler(3, 1.0, "")

    if cls is UnitClass.DECIMAL:
        factors = _SI_FACTORS
    elif cls is UnitClass.BINARY:
        factors = _IEC_FACTORS
    else:
        raise ValueError(f"bad unit class {cls!r}")

    for f in factors:
        if smallest >= f.t100:
            return Scaler(1, f.factor, f.prefix)
        if smallest >= f.t10:
            return Scaler(2, f.factor, f.prefix)
        if smallest >= f.t1:
            return Scaler(3, f.factor, f.prefix)

    # Below the smallest factor: add precision instead of a smaller prefix.
    last = factors[-1]
    scaled = smallest / last.factor
    for i, thresh in enumerate(_SIGFIGS):
        if scaled >= thresh or i == len(_SIGFIGS) - 1:
            return Scaler(i + _SIGFIGS_BASE, last.factor, last.prefix)
    raise AssertionError("unreachable")