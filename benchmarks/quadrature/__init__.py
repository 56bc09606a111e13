"""Benchmarks for adaptive quadrature.

Compares torchkronrod integrators against scipy.integrate baselines.
"""

from .bench_quad import BenchQuad

__all__ = [
    "BenchQuad",
]
