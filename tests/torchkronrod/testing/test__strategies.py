import math

import hypothesis

from torchkronrod.testing.strategies import (
    gauss_kronrod_orders,
    integration_bounds,
    positive_real_numbers,
    real_numbers,
)


class TestStrategies:
    @hypothesis.given(x=real_numbers(min_value=-5.0, max_value=5.0))
    def test_real_numbers(self, x):
        assert math.isfinite(x)
        assert -5.0 <= x <= 5.0

    @hypothesis.given(x=positive_real_numbers())
    def test_positive_real_numbers(self, x):
        assert x > 0

    @hypothesis.given(x=positive_real_numbers(allow_zero=True))
    def test_positive_real_numbers_allow_zero(self, x):
        assert x >= 0

    @hypothesis.given(order=gauss_kronrod_orders())
    def test_gauss_kronrod_orders(self, order):
        from torchkronrod.quadrature import GAUSS_KRONROD_ORDERS

        assert order in GAUSS_KRONROD_ORDERS

    @hypothesis.given(bounds=integration_bounds(min_width=0.5))
    def test_integration_bounds(self, bounds):
        a, b = bounds

        assert -10.0 <= a < b
        assert b - a >= 0.5
