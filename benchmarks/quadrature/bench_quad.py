"""Benchmarks for adaptive Gauss-Kronrod quadrature.

This module compares torchkronrod quadrature against scipy.integrate.quad.
"""

from __future__ import annotations

import math
import time
from typing import Any, Callable

import numpy as np
import torch

# scipy imports - handle optional dependency
try:
    from scipy import integrate as scipy_integrate

    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

from torchkronrod.quadrature import (
    GaussKronrod,
    adaptive_integrate,
    kronrod21,
    quad,
)


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> np.ndarray:
    """Wall-clock times of ``iterations`` calls of ``func``, in seconds.

    Integration runs on the CPU in float64, so no device synchronization is
    needed between calls.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = np.empty(iterations)
    for i in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times[i] = time.perf_counter() - start

    return times


_UNITS = ((1.0, "s"), (1e-3, "ms"), (1e-6, "us"), (1e-9, "ns"))


def format_time(seconds: float) -> str:
    for scale, unit in _UNITS:
        if seconds >= scale:
            return f"{seconds / scale:.3f}{unit}"
    return f"{seconds / 1e-9:.3f}ns"


def report(
    name: str,
    times: np.ndarray,
    baseline: np.ndarray | None = None,
) -> None:
    """Print median and spread, and the ratio to scipy when available."""
    median = float(np.median(times))
    spread = float(np.percentile(times, 75) - np.percentile(times, 25))

    print(f"\n{name}")
    print(
        f"  torchkronrod  median {format_time(median)} "
        f"(IQR {format_time(spread)})"
    )

    if baseline is not None:
        scipy_median = float(np.median(baseline))
        print(f"  scipy         median {format_time(scipy_median)}")
        print(f"  ratio         {median / scipy_median:.2f}x scipy")


class BenchQuad:
    """Benchmarks for adaptive quadrature."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> np.ndarray:
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_smooth(self, epsrel: float = 1e-10) -> None:
        """Benchmark a smooth integrand, exp(-x^2) on [-2, 2]."""
        times = self._bench(
            quad, lambda x: torch.exp(-(x**2)), -2, 2, epsrel=epsrel
        )

        baseline = None
        if SCIPY_AVAILABLE:
            baseline = self._bench(
                scipy_integrate.quad,
                lambda x: np.exp(-(x**2)),
                -2,
                2,
                epsrel=epsrel,
            )

        report(f"exp(-x^2) (epsrel={epsrel:g})", times, baseline)

    def bench_peaked(self, width: float = 1e-2) -> None:
        """Benchmark a Lorentzian peak that forces subdivision.

        Parameters
        ----------
        width : float, optional
            Half-width of the peak. Default is 1e-2.
        """
        times = self._bench(
            quad,
            lambda x: 1 / ((x - 0.3) ** 2 + width**2),
            0,
            1,
            epsabs=0.0,
            epsrel=1e-10,
            limit=500,
        )

        baseline = None
        if SCIPY_AVAILABLE:
            baseline = self._bench(
                scipy_integrate.quad,
                lambda x: 1 / ((x - 0.3) ** 2 + width**2),
                0,
                1,
                epsabs=0.0,
                epsrel=1e-10,
                limit=500,
            )

        report(f"Lorentzian (width={width:g})", times, baseline)

    def bench_scalar_integrand(self) -> None:
        """Benchmark point-by-point evaluation of a math integrand."""
        times = self._bench(
            quad, math.cos, 0, 100, limit=200, vectorized=False
        )

        baseline = None
        if SCIPY_AVAILABLE:
            baseline = self._bench(
                scipy_integrate.quad, math.cos, 0, 100, limit=200
            )

        report("cos(x) on [0, 100] (scalar)", times, baseline)

    def bench_rule(self, order: int = 21) -> None:
        """Benchmark a single rule application.

        Parameters
        ----------
        order : int, optional
            Kronrod order. Default is 21.
        """
        times = self._bench(GaussKronrod(order), torch.sin, 0.0, 1.0)

        report(f"GaussKronrod(order={order})", times)

    def bench_subdivisions(self, limit: int = 100) -> None:
        """Benchmark a run that uses its whole subdivision budget.

        Parameters
        ----------
        limit : int, optional
            Subdivision budget. Default is 100.
        """
        times = self._bench(
            adaptive_integrate,
            lambda x: torch.sin(1000 * x),
            kronrod21,
            0.0,
            math.pi,
            1e-15,
            0.0,
            limit,
        )

        report(f"sin(1000x) (limit={limit})", times)

    def run_all(self) -> None:
        """Run all quadrature benchmarks."""
        print("=" * 60)
        print("QUADRATURE BENCHMARKS")
        print("=" * 60)

        print("\n--- Adaptive Integration ---")
        self.bench_smooth()
        self.bench_peaked()
        self.bench_scalar_integrand()

        print("\n--- Single Rule ---")
        for order in [15, 21, 31, 41, 51, 61]:
            self.bench_rule(order=order)

    def run_scaling(self) -> None:
        """Run scaling benchmarks with varying parameters."""
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        print("\n--- Peak Width Scaling ---")
        for width in [1e-1, 1e-2, 1e-3, 1e-4]:
            self.bench_peaked(width=width)

        print("\n--- Subdivision Budget Scaling ---")
        for limit in [10, 50, 100, 500]:
            self.bench_subdivisions(limit=limit)


if __name__ == "__main__":
    bench = BenchQuad(warmup=5, iterations=20)
    bench.run_all()
    print("\n")
    bench.run_scaling()
