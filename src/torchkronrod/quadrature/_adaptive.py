"""Adaptive bisection driver for Gauss-Kronrod quadrature."""

from typing import Callable, NamedTuple

from torch import Tensor

from torchkronrod.quadrature._degenerate import is_degenerate
from torchkronrod.quadrature._error_code import ErrorCode
from torchkronrod.quadrature._exceptions import BadToleranceError
from torchkronrod.quadrature._machine import EPSILON
from torchkronrod.quadrature._rules import RuleResult
from torchkronrod.quadrature._workspace import IntegrationWorkspace

RuleEvaluator = Callable[..., RuleResult]


class QuadratureResult(NamedTuple):
    """Result of an adaptive integration.

    Parameters
    ----------
    value : float
        Integral estimate (sum over the final subintervals).
    error : float
        Estimated absolute error.
    outcome : ErrorCode
        ``ErrorCode.OK`` when the tolerance was reached; otherwise why it
        was not. ``value`` and ``error`` are a best-effort estimate in that
        case.
    num_subintervals : int
        Number of subintervals in the final partition.
    num_evaluations : int
        Number of integrand evaluations.
    """

    value: float
    error: float
    outcome: ErrorCode
    num_subintervals: int
    num_evaluations: int


def adaptive_integrate(
    f: Callable,
    rule: RuleEvaluator,
    a: float,
    b: float,
    epsabs: float,
    epsrel: float,
    limit: int,
    *,
    vectorized: bool = True,
) -> QuadratureResult:
    """
    Integrate ``f`` over ``[a, b]`` by repeated bisection.

    The subinterval with the largest error estimate is bisected until the
    summed error drops below ``max(epsabs, epsrel * |integral|)``, the
    subdivision budget runs out, or roundoff or a non-integrable point makes
    further bisection pointless.

    Parameters
    ----------
    f : callable
        Integrand. Receives a float64 tensor of abscissae when
        ``vectorized`` is true, a single float otherwise.
    rule : callable
        Rule evaluator ``rule(f, a, b, vectorized=...) -> RuleResult``, e.g.
        :func:`kronrod21` or a :class:`GaussKronrod` instance.
    a, b : float
        Integration bounds.
    epsabs : float
        Absolute error tolerance.
    epsrel : float
        Relative error tolerance.
    limit : int
        Maximum number of subintervals.
    vectorized : bool
        Whether ``f`` accepts a tensor of abscissae.

    Returns
    -------
    QuadratureResult
        Estimate, error estimate, outcome and counters.

    Raises
    ------
    BadToleranceError
        If ``epsabs <= 0`` and ``epsrel`` is below double precision. Checked
        before ``limit``.
    ValueError
        If ``limit < 1``.

    Examples
    --------
    >>> adaptive_integrate(lambda x: x**2, kronrod21, 0.0, 1.0, 1e-10, 1e-10, 100)
    QuadratureResult(value=0.333..., error=..., outcome=<ErrorCode.OK: 'ok'>, ...)
    """
    if epsabs <= 0 and (epsrel < EPSILON or epsrel < 0.5e-28):
        raise BadToleranceError(epsabs, epsrel)

    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    a = float(a.item()) if isinstance(a, Tensor) else float(a)
    b = float(b.item()) if isinstance(b, Tensor) else float(b)

    num_evaluations = 0

    def integrand(x):
        nonlocal num_evaluations
        num_evaluations += x.numel() if isinstance(x, Tensor) else 1
        return f(x)

    workspace = IntegrationWorkspace(limit)

    result0, resabs0, resasc0, abserr0 = rule(
        integrand, a, b, vectorized=vectorized
    )

    workspace.initialize(a, b, result0, abserr0)

    tolerance = max(epsabs, epsrel * abs(result0))

    round_off = 50 * EPSILON * resabs0

    if abserr0 <= round_off and abserr0 > tolerance:
        return QuadratureResult(
            result0, abserr0, ErrorCode.ROUNDOFF_LIMITED, 1, num_evaluations
        )

    if (abserr0 <= tolerance and abserr0 != resasc0) or abserr0 == 0.0:
        return QuadratureResult(
            result0, abserr0, ErrorCode.OK, 1, num_evaluations
        )

    if limit == 1:
        return QuadratureResult(
            result0, abserr0, ErrorCode.BUDGET_EXHAUSTED, 1, num_evaluations
        )

    area = result0
    errsum = abserr0
    iteration = 1
    roundoff_type1 = 0
    roundoff_type2 = 0
    fatal = None

    while iteration < limit and fatal is None and errsum > tolerance:
        a_i, b_i, r_i, e_i = workspace.retrieve_worst()

        a1 = a_i
        b1 = 0.5 * (a_i + b_i)
        a2 = b1
        b2 = b_i

        area1, _, resasc1, error1 = rule(
            integrand, a1, b1, vectorized=vectorized
        )
        area2, _, resasc2, error2 = rule(
            integrand, a2, b2, vectorized=vectorized
        )

        area12 = area1 + area2
        error12 = error1 + error2

        errsum += error12 - e_i
        area += area12 - r_i

        # Children whose error sits at the rescaling cap say nothing
        # about roundoff
        if resasc1 != error1 and resasc2 != error2:
            delta = r_i - area12

            if abs(delta) <= 1.0e-5 * abs(area12) and error12 >= 0.99 * e_i:
                roundoff_type1 += 1

            if iteration >= 10 and error12 > e_i:
                roundoff_type2 += 1

        tolerance = max(epsabs, epsrel * abs(area))

        if errsum > tolerance:
            if roundoff_type1 >= 6 or roundoff_type2 >= 20:
                fatal = ErrorCode.ROUNDOFF_LIMITED
            elif is_degenerate(a1, a2, b2):
                fatal = ErrorCode.SINGULARITY_LIMITED

        workspace.update((a1, b1, area1, error1), (a2, b2, area2, error2))

        iteration += 1

    value = workspace.sum_results()

    if errsum <= tolerance:
        outcome = ErrorCode.OK
    elif fatal is not None:
        outcome = fatal
    elif iteration == limit:
        outcome = ErrorCode.BUDGET_EXHAUSTED
    else:
        outcome = ErrorCode.FAILED

    return QuadratureResult(
        value, errsum, outcome, workspace.size, num_evaluations
    )
