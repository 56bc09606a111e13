"""Gauss-Kronrod quadrature rules."""

from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

import torch
from torch import Tensor

from torchkronrod.quadrature._nodes import (
    GAUSS_KRONROD_ORDERS,
    gauss_kronrod_nodes_weights,
    kronrod_tables,
)
from torchkronrod.quadrature._rescale import rescale_error


class RuleResult(NamedTuple):
    """Result of one Gauss-Kronrod rule over one interval.

    Parameters
    ----------
    value : float
        Kronrod approximation of the integral.
    abs_estimate : float
        Kronrod approximation of the integral of ``|f|``.
    asc_estimate : float
        Kronrod approximation of the integral of ``|f - mean|``.
    error_estimate : float
        Rescaled error estimate.
    """

    value: float
    abs_estimate: float
    asc_estimate: float
    error_estimate: float


def _evaluate(
    f: Callable,
    abscissae: List[float],
    vectorized: bool,
) -> List[float]:
    if not vectorized:
        return [float(f(x)) for x in abscissae]

    x = torch.tensor(abscissae, dtype=torch.float64)

    values = torch.as_tensor(f(x)).detach().to(torch.float64)

    # Constant integrands such as ``lambda x: 1`` return a scalar
    if values.dim() == 0:
        values = values.expand(x.shape)

    if values.shape != x.shape:
        raise ValueError(
            f"integrand returned shape {tuple(values.shape)} for "
            f"{x.numel()} abscissae, expected {tuple(x.shape)}"
        )

    return values.cpu().tolist()


def _gauss_kronrod(
    f: Callable,
    a: float,
    b: float,
    xgk: Sequence[float],
    wg: Sequence[float],
    wgk: Sequence[float],
    *,
    vectorized: bool = True,
) -> RuleResult:
    n = len(xgk)

    center = 0.5 * (a + b)
    half_length = 0.5 * (b - a)
    abs_half_length = abs(half_length)

    # Centre first, then the symmetric pair of every other node
    abscissae = [center]
    for j in range(n - 1):
        abscissa = half_length * xgk[j]
        abscissae.append(center - abscissa)
        abscissae.append(center + abscissa)

    values = _evaluate(f, abscissae, vectorized)

    f_center = values[0]
    fv1 = values[1::2]
    fv2 = values[2::2]

    result_gauss = 0.0
    result_kronrod = f_center * wgk[n - 1]
    result_abs = abs(result_kronrod)

    if n % 2 == 0:
        result_gauss = f_center * wg[n // 2 - 1]

    # Gauss nodes sit at odd table positions
    for j in range((n - 1) // 2):
        jtw = 2 * j + 1
        fsum = fv1[jtw] + fv2[jtw]
        result_gauss += wg[j] * fsum
        result_kronrod += wgk[jtw] * fsum
        result_abs += wgk[jtw] * (abs(fv1[jtw]) + abs(fv2[jtw]))

    for j in range(n // 2):
        jtwm1 = 2 * j
        result_kronrod += wgk[jtwm1] * (fv1[jtwm1] + fv2[jtwm1])
        result_abs += wgk[jtwm1] * (abs(fv1[jtwm1]) + abs(fv2[jtwm1]))

    mean = result_kronrod * 0.5

    result_asc = wgk[n - 1] * abs(f_center - mean)

    for j in range(n - 1):
        result_asc += wgk[j] * (abs(fv1[j] - mean) + abs(fv2[j] - mean))

    err = (result_kronrod - result_gauss) * half_length

    result_kronrod *= half_length
    result_abs *= abs_half_length
    result_asc *= abs_half_length

    return RuleResult(
        result_kronrod,
        result_abs,
        result_asc,
        rescale_error(err, result_abs, result_asc),
    )


def kronrod15(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """7-point Gauss, 15-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(15), vectorized=vectorized)


def kronrod21(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """10-point Gauss, 21-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(21), vectorized=vectorized)


def kronrod31(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """15-point Gauss, 31-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(31), vectorized=vectorized)


def kronrod41(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """20-point Gauss, 41-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(41), vectorized=vectorized)


def kronrod51(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """25-point Gauss, 51-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(51), vectorized=vectorized)


def kronrod61(
    f: Callable, a: float, b: float, *, vectorized: bool = True
) -> RuleResult:
    """30-point Gauss, 61-point Kronrod rule over ``[a, b]``."""
    return _gauss_kronrod(f, a, b, *kronrod_tables(61), vectorized=vectorized)


def _dtype_device(
    a: Union[float, Tensor],
    b: Union[float, Tensor],
) -> Tuple[torch.dtype, torch.device]:
    if isinstance(a, Tensor):
        return a.dtype, a.device

    if isinstance(b, Tensor):
        return b.dtype, b.device

    return torch.float64, torch.device("cpu")


class GaussKronrod:
    """
    Fixed-order Gauss-Kronrod rule selected by its number of Kronrod points.

    The tabulated pairs are G7-K15, G10-K21, G15-K31, G20-K41, G25-K51 and
    G30-K61. Instances are rule evaluators: calling one returns a
    :class:`RuleResult`, so it can be handed to
    :func:`~torchkronrod.quadrature.adaptive_integrate`.

    Parameters
    ----------
    order : int
        Kronrod order: 15, 21, 31, 41, 51 or 61.

    Examples
    --------
    >>> rule = GaussKronrod(31)
    >>> value, error = rule.integrate_with_error(torch.exp, 0, 1)
    >>> rule(torch.sin, 0.0, torch.pi).value  # approximately 2.0

    Attributes
    ----------
    order : int
        Kronrod points per application.
    """

    def __init__(self, order: int = 21):
        if order not in GAUSS_KRONROD_ORDERS:
            raise ValueError(
                f"order must be one of {GAUSS_KRONROD_ORDERS}, got {order}"
            )
        self.order = order
        self._tables = kronrod_tables(order)
        self._cache: dict = {}

    def __repr__(self) -> str:
        return f"GaussKronrod(order={self.order})"

    def __call__(
        self,
        f: Callable,
        a: float,
        b: float,
        *,
        vectorized: bool = True,
    ) -> RuleResult:
        return _gauss_kronrod(
            f, float(a), float(b), *self._tables, vectorized=vectorized
        )

    def _reference_rule(
        self,
        dtype: torch.dtype,
        device: torch.device,
    ) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
        key = (dtype, torch.device(device))

        if key not in self._cache:
            self._cache[key] = gauss_kronrod_nodes_weights(
                self.order, dtype=dtype, device=device
            )

        return self._cache[key]

    def nodes_and_weights(
        self,
        a: Union[float, Tensor] = -1.0,
        b: Union[float, Tensor] = 1.0,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """
        Kronrod abscissae and weights mapped onto ``[a, b]``.

        Parameters
        ----------
        a, b : float or Tensor
            Scalar bounds; ``[-1, 1]`` by default.
        dtype : torch.dtype, optional
            Defaults to the dtype of a tensor bound, else float64.
        device : torch.device, optional
            Defaults to the device of a tensor bound, else CPU.

        Returns
        -------
        nodes : Tensor
            Shape (order,), ascending.
        weights : Tensor
            Shape (order,); they sum to ``b - a``.
        """
        inferred_dtype, inferred_device = _dtype_device(a, b)
        dtype = dtype or inferred_dtype
        device = device or inferred_device

        nodes, k_weights, _, _ = self._reference_rule(dtype, device)

        a = torch.as_tensor(a, dtype=dtype, device=device)
        b = torch.as_tensor(b, dtype=dtype, device=device)

        half_length = (b - a) / 2

        return half_length * nodes + (a + b) / 2, half_length * k_weights

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """Kronrod estimate of the integral of ``f`` over ``[a, b]``."""
        return self.integrate_with_error(f, a, b)[0]

    def integrate_with_error(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tuple[Tensor, Tensor]:
        """
        Apply the rule once and return the estimate with its error.

        Parameters
        ----------
        f : callable
            Vectorized integrand.
        a, b : float or Tensor
            Scalar bounds. A tensor bound fixes the output dtype and device.

        Returns
        -------
        value : Tensor
            Kronrod estimate.
        error : Tensor
            Rescaled error estimate.
        """
        dtype, device = _dtype_device(a, b)

        value, _, _, error = self(f, float(a), float(b))

        return (
            torch.tensor(value, dtype=dtype, device=device),
            torch.tensor(error, dtype=dtype, device=device),
        )
