"""Significance tests deciding whether two metrics differ."""

from __future__ import annotations

import statistics
from typing import Callable, Optional

from scipy import stats as _sps

from perfstat.metrics import Metrics

DeltaTest = Callable[[Metrics, Metrics], float]
"""Returns the probability that old and new come from the same distribution.

Raises DeltaTestError when no probability can be computed; a test that
does not apply returns -1.
"""

NO_PVALUE = -1.0


class DeltaTestError(Exception):
    """A significance test could not compute a probability."""

    default_message = "delta test failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class SamplesEqualError(DeltaTestError):
    """All samples are equal."""

    default_message = "all equal"


class SampleSizeError(DeltaTestError):
    """There are too few samples."""

    default_message = "too few samples"


class ZeroVarianceError(DeltaTestError):
    """The samples have zero variance."""

    default_message = "zero variance"


def no_delta_test(old: Metrics, new: Metrics) -> float:
    """Apply no test to two metrics; the result is always -1."""
    for metrics in (old, new):
        if not isinstance(metrics, Metrics):
            raise TypeError(f"expected Metrics, got {type(metrics).__name__}")
    return NO_PVALUE


def t_test(old: Metrics, new: Metrics) -> float:
    """Two-sample Welch t-test on the outlier-free values."""
    a, b = old.rvalues, new.rvalues
    if len(a) <= 1 or len(b) <= 1:
        raise SampleSizeError()
    if statistics.variance(a) == 0 and statistics.variance(b) == 0:
        raise ZeroVarianceError()
    result = _sps.ttest_ind(a, b, equal_var=False)
    return float(result.pvalue)


def u_test(old: Metrics, new: Metrics) -> float:
    """Mann-Whitney U test on the outlier-free values."""
    a, b = old.rvalues, new.rvalues
    if not a or not b:
        raise SampleSizeError()
    distinct = set(a) | set(b)
    if len(distinct) == 1:
        raise SamplesEqualError()
    has_ties = len(distinct) < len(a) + len(b)
    method = "exact" if not has_ties and len(a) <= 50 and len(b) <= 50 else "asymptotic"
    result = _sps.mannwhitneyu(a, b, alternative="two-sided", method=method)
    return float(result.pvalue)