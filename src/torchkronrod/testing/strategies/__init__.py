"""Hypothesis strategies for quadrature testing."""

from ._gauss_kronrod_orders import gauss_kronrod_orders
from ._integration_bounds import integration_bounds
from ._positive_real_numbers import positive_real_numbers
from ._real_numbers import real_numbers

__all__ = [
    # Numeric strategies
    "positive_real_numbers",
    "real_numbers",
    # Quadrature strategies
    "gauss_kronrod_orders",
    "integration_bounds",
]
