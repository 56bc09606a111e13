"""Tensor front end for adaptive Gauss-Kronrod integration."""

import warnings
from typing import Callable, Tuple, Union

import torch
from torch import Tensor

from torchkronrod.quadrature._adaptive import adaptive_integrate
from torchkronrod.quadrature._error_code import ErrorCode
from torchkronrod.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchkronrod.quadrature._rules import GaussKronrod, _dtype_device


def quad(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    epsabs: float = 1.49e-8,
    epsrel: float = 1.49e-8,
    limit: int = 50,
    order: int = 21,
    vectorized: bool = True,
) -> Tensor:
    """
    Integrate ``f`` over ``[a, b]`` to the requested tolerance.

    Runs :func:`adaptive_integrate` with a :class:`GaussKronrod` rule of the
    given order and returns the estimate as a tensor.

    Parameters
    ----------
    f : callable
        Integrand.
    a, b : float or Tensor
        Scalar bounds. A tensor bound fixes the dtype and device of the
        result.
    epsabs : float
        Absolute error tolerance.
    epsrel : float
        Relative error tolerance.
    limit : int
        Subdivision budget.
    order : int
        Kronrod order of the rule: 15, 21, 31, 41, 51 or 61.
    vectorized : bool
        Whether ``f`` accepts a tensor of abscissae.

    Returns
    -------
    Tensor
        Estimate of the integral.

    Raises
    ------
    IntegrationError
        If the requested tolerance is not reached. The exception's
        ``outcome`` says why; ``value`` and ``error`` hold the best
        estimate found.
    BadToleranceError
        If the tolerances cannot be met in double precision.

    Examples
    --------
    >>> quad(torch.sin, 0, torch.pi)  # approximately 2.0
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", QuadratureWarning)

        result, error, info = quad_info(
            f,
            a,
            b,
            epsabs=epsabs,
            epsrel=epsrel,
            limit=limit,
            order=order,
            vectorized=vectorized,
        )

    if not info["converged"]:
        outcome = info["outcome"]
        tolerance = max(epsabs, epsrel * abs(result.item()))

        raise IntegrationError(
            f"Integration failed to converge ({outcome.message}) with "
            f"{info['nsubintervals']} subintervals: error estimate "
            f"{error.item():.2e} exceeds tolerance {tolerance:.2e}",
            outcome=outcome,
            value=result.item(),
            error=error.item(),
        )

    return result


def quad_info(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    epsabs: float = 1.49e-8,
    epsrel: float = 1.49e-8,
    limit: int = 50,
    order: int = 21,
    vectorized: bool = True,
) -> Tuple[Tensor, Tensor, dict]:
    """
    Integrate like :func:`quad`, returning the error estimate and run details.

    Unlike :func:`quad`, an unconverged run is not an error: the best estimate
    is returned and a warning is emitted.

    Returns
    -------
    result : Tensor
        Estimate of the integral.
    error : Tensor
        Estimated absolute error.
    info : dict
        - "neval": integrand evaluations
        - "nsubintervals": subintervals in the final partition
        - "converged": whether the tolerance was reached
        - "outcome": the :class:`ErrorCode` of the run

    Warns
    -----
    QuadratureWarning
        If the outcome is anything but ``ErrorCode.OK``.
    """
    dtype, device = _dtype_device(a, b)

    integration = adaptive_integrate(
        f,
        GaussKronrod(order),
        a,
        b,
        epsabs,
        epsrel,
        limit,
        vectorized=vectorized,
    )

    converged = integration.outcome is ErrorCode.OK

    if not converged:
        warnings.warn(
            f"Quadrature did not converge: {integration.outcome.message}. "
            f"Error: {integration.error:.2e}",
            QuadratureWarning,
        )

    return (
        torch.tensor(integration.value, dtype=dtype, device=device),
        torch.tensor(integration.error, dtype=dtype, device=device),
        {
            "neval": integration.num_evaluations,
            "nsubintervals": integration.num_subintervals,
            "converged": converged,
            "outcome": integration.outcome,
        },
    )
