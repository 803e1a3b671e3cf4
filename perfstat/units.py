"""Benchmark unit classification and normalization."""

from __future__ import annotations

import enum
from functools import lru_cache
from typing import Iterator, NamedTuple


class UnitClass(enum.Enum):
    """The family of prefixes used to scale values of a unit."""

    DECIMAL = 0
    """Scale by powers of 1000 using SI prefixes such as "k" and "M"."""
    BINARY = 1
    """Scale by powers of 1024 using IEC prefixes such as "Ki" and "Mi"."""

    def __str__(self) -> str:
        return self.name.capitalize()


_SEPARATORS = frozenset("*/-")


def _is_separator(ch: str) -> bool:
    return ch in _SEPARATORS or ch.isspace()


class _Token(NamedTuple):
    text: str
    pos: int
    denom: bool


def _tokens(unit: str) -> Iterator[_Token]:
    """Yield the tokens of a unit with their offsets and denominator flag."""
    denom = False
    i = 0
    n = len(unit)
    while i < n:
        ch = unit[i]
        if ch == "*":
            denom = False
            i += 1
        elif ch == "/":
            denom = True
            i += 1
        elif ch == "-" or ch.isspace():
            i += 1
        else:
            start = i
            while i < n and not _is_separator(unit[i]):
                i += 1
            yield _Token(unit[start:i], start, denom)


def class_of(unit: str) -> UnitClass:
    """Return BINARY if unit has a measure of bytes in its numerator."""
    for tok in _tokens(unit):
        if tok.text in ("B", "MB", "bytes") and not tok.denom:
            return UnitClass.BINARY
    return UnitClass.DECIMAL


def tidy(value: float, unit: str) -> tuple[float, str]:
    """Rescale value from a pre-scaled unit (like "ns" or "MB") to base units.

    Returns the rescaled value and its new unit.
    """
    new_unit, factor = tidy_unit(unit)
    return value * factor, new_unit


def tidy_unit(unit: str) -> tuple[str, float]:
    """Return the tidied form of unit and the factor converting into it."""
    if unit == "ns/op":
        return "sec/op", 1e-9
    if unit == "MB/s":
        return "B/s", 1e6
    if unit in ("B/op", "allocs/op"):
        return unit, 1.0
    if "ns" not in unit and "MB" not in unit:
        return unit, 1.0
    return _tidy_unit_uncached(unit)


@lru_cache(maxsize=None)
def _tidy_unit_uncached(unit: str) -> tuple[str, float]:
    factor = 1.0
    edits: list[tuple[int, int, str]] = []
    for tok in _tokens(unit):
        if tok.denom:
            continue
        if tok.text == "ns":
            edits.append((tok.pos, 2, "sec"))
            factor /= 1e9
        elif tok.text == "MB":
            edits.append((tok.pos, 2, "B"))
            factor *= 1e6
    for pos, length, replacement in reversed(edits):
        unit = unit[:pos] + replacement + unit[pos + length:]
    return unit, factor