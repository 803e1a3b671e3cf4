"""Benchmark result statistics, comparison tables and unit formatting."""

__version__ = "0.1.0"