"""Error rescaling for Gauss-Kronrod estimates."""

import math

from torchkronrod.quadrature._machine import EPSILON, MIN_NORMAL


def rescale_error(err: float, result_abs: float, result_asc: float) -> float:
    """
    Rescale a raw Gauss-Kronrod error estimate.

    The Kronrod-minus-Gauss difference underestimates the error of
    near-polynomial integrands. ``result_asc`` (the weighted deviation of
    the integrand from its mean) bounds it from above, and
    ``result_abs`` (the integral of ``|f|``) sets a roundoff floor.

    Parameters
    ----------
    err : float
        Raw error, ``(kronrod - gauss) * half_length``.
    result_abs : float
        Integral of ``|f|`` over the interval.
    result_asc : float
        Integral of ``|f - mean|`` over the interval.

    Returns
    -------
    float
        Non-negative error estimate.

    Notes
    -----
    With ``e = |err|`` and ``r = 200 e / result_asc``, the estimate is
    ``result_asc * min(1, r**1.5)``, then raised to at least
    ``50 * eps * result_abs`` unless ``result_abs`` is so small that the
    floor itself would underflow.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    """
    err = math.fabs(err)

    if result_asc != 0 and err != 0:
        ratio = 200 * err / result_asc

        # sqrt(ratio**3) < 1 exactly when ratio < 1; testing ratio first
        # keeps the cube from overflowing
        if ratio < 1:
            err = result_asc * math.sqrt(ratio * ratio * ratio)
        else:
            err = result_asc

    if result_abs > MIN_NORMAL / (50 * EPSILON):
        min_err = 50 * EPSILON * result_abs

        if min_err > err:
            err = min_err

    return err
