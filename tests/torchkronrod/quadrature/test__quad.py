import warnings

import numpy as np
import pytest
import scipy.integrate
import torch


class TestQuad:
    def test_basic_integration(self):
        """Integrate sin(x) from 0 to pi"""
        from torchkronrod.quadrature import quad

        result = quad(torch.sin, 0, torch.pi)

        assert torch.allclose(
            result, torch.tensor(2.0, dtype=result.dtype), rtol=1e-6
        )

    def test_matches_scipy(self):
        """Compare with scipy.integrate.quad"""
        from torchkronrod.quadrature import quad

        result = quad(lambda x: torch.exp(-(x**2)), -2, 2)
        expected, _ = scipy.integrate.quad(lambda x: np.exp(-(x**2)), -2, 2)

        assert torch.allclose(
            result, torch.tensor(expected, dtype=result.dtype), rtol=1e-6
        )

    def test_oscillatory(self):
        """Handle oscillatory integrand"""
        from torchkronrod.quadrature import quad

        result = quad(lambda x: torch.sin(20 * x), 0, torch.pi, limit=100)
        expected = (1 - torch.cos(torch.tensor(20 * torch.pi))) / 20

        assert torch.allclose(result, expected.to(result.dtype), rtol=1e-4)

    @pytest.mark.parametrize("order", [15, 21, 31, 41, 51, 61])
    def test_order(self, order):
        from torchkronrod.quadrature import quad

        result = quad(lambda x: 1 / (1 + x**2), 0, 1, order=order)

        assert torch.allclose(
            result,
            torch.tensor(torch.pi / 4, dtype=result.dtype),
            rtol=1e-8,
        )

    def test_invalid_order_raises(self):
        from torchkronrod.quadrature import quad

        with pytest.raises(ValueError, match="order must be one of"):
            quad(torch.sin, 0, 1, order=16)

    def test_scalar_integrand(self):
        import math

        from torchkronrod.quadrature import quad

        result = quad(math.cos, 0, math.pi / 2, vectorized=False)

        assert torch.allclose(
            result, torch.tensor(1.0, dtype=result.dtype), rtol=1e-10
        )

    def test_dtype_follows_bounds(self):
        from torchkronrod.quadrature import quad

        result = quad(
            torch.exp,
            torch.tensor(0.0, dtype=torch.float32),
            torch.tensor(1.0, dtype=torch.float32),
        )

        assert result.dtype == torch.float32
        assert torch.allclose(
            result, torch.tensor(np.e - 1, dtype=torch.float32)
        )

    def test_default_dtype_is_float64(self):
        from torchkronrod.quadrature import quad

        assert quad(torch.sin, 0, 1).dtype == torch.float64

    def test_convergence_failure_raises(self):
        """Should raise IntegrationError when convergence fails"""
        from torchkronrod.quadrature import ErrorCode, IntegrationError, quad

        # Very difficult integrand with very tight tolerance and low limit
        with pytest.raises(
            IntegrationError, match="failed to converge"
        ) as excinfo:
            quad(
                lambda x: torch.sin(1000 * x),
                0,
                torch.pi,
                epsabs=1e-15,
                limit=5,
            )

        assert excinfo.value.outcome is ErrorCode.BUDGET_EXHAUSTED
        assert excinfo.value.error > 0
        assert "maximum number of subdivisions reached" in str(excinfo.value)

    def test_convergence_failure_does_not_warn(self):
        from torchkronrod.quadrature import IntegrationError, quad

        with warnings.catch_warnings():
            warnings.simplefilter("error")

            with pytest.raises(IntegrationError):
                quad(lambda x: 1 / torch.sqrt(x), 0, 1, epsabs=1e-14, limit=3)

    def test_bad_tolerance_raises(self):
        from torchkronrod.quadrature import BadToleranceError, quad

        with pytest.raises(BadToleranceError):
            quad(torch.sin, 0, 1, epsabs=0.0, epsrel=0.0)


class TestQuadInfo:
    def test_returns_error_and_info(self):
        """quad_info returns error estimate and info dict"""
        from torchkronrod.quadrature import ErrorCode, quad_info

        result, error, info = quad_info(torch.sin, 0, torch.pi)

        assert torch.allclose(
            result, torch.tensor(2.0, dtype=result.dtype), rtol=1e-6
        )
        assert error < 1e-6
        assert "neval" in info
        assert "nsubintervals" in info
        assert "converged" in info
        assert info["converged"]
        assert info["outcome"] is ErrorCode.OK

    def test_evaluation_count(self):
        from torchkronrod.quadrature import quad_info

        _, _, info = quad_info(
            lambda x: 1 / ((x - 0.3) ** 2 + 0.01), 0, 1, order=31
        )

        assert info["nsubintervals"] > 1
        assert info["neval"] == 31 * (2 * info["nsubintervals"] - 1)

    def test_info_shows_convergence_status(self):
        """Info dict correctly reports non-convergence"""
        from torchkronrod.quadrature import (
            ErrorCode,
            QuadratureWarning,
            quad_info,
        )

        # Very difficult integrand
        with pytest.warns(QuadratureWarning, match="did not converge"):
            result, error, info = quad_info(
                lambda x: torch.sin(1000 * x),
                0,
                torch.pi,
                epsabs=1e-15,
                limit=5,
            )

        assert not info["converged"]
        assert info["outcome"] is ErrorCode.BUDGET_EXHAUSTED
        assert info["nsubintervals"] == 5
        assert error > 0

    def test_converged_does_not_warn(self):
        from torchkronrod.quadrature import quad_info

        with warnings.catch_warnings():
            warnings.simplefilter("error")

            quad_info(torch.cos, 0, 1)


class TestQuadTolerance:
    def test_epsabs(self):
        """Test absolute tolerance"""
        from torchkronrod.quadrature import quad_info

        _, error, _ = quad_info(torch.sin, 0, torch.pi, epsabs=1e-10)

        assert error < 1e-9

    def test_epsrel(self):
        """Test relative tolerance"""
        from torchkronrod.quadrature import quad_info

        result, error, _ = quad_info(torch.sin, 0, torch.pi, epsrel=1e-8)

        assert error < 1e-7 * abs(result.item())

    def test_tighter_tolerance_more_work(self):
        from torchkronrod.quadrature import quad_info

        _, loose, loose_info = quad_info(
            torch.sqrt, 0, 1, epsabs=1e-4, epsrel=0.0, limit=200
        )
        _, tight, tight_info = quad_info(
            torch.sqrt, 0, 1, epsabs=1e-12, epsrel=0.0, limit=200
        )

        assert tight < loose
        assert tight_info["neval"] > loose_info["neval"]
