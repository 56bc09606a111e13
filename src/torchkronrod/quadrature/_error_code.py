"""Outcome codes reported by the adaptive integrator."""

import enum


class ErrorCode(enum.Enum):
    """Outcome of an adaptive integration.

    ``OK`` is the only successful outcome. ``BAD_TOLERANCE`` is a
    precondition failure raised before any evaluation; the remaining codes
    accompany a best-effort estimate.
    """

    OK = "ok"
    BAD_TOLERANCE = "bad_tolerance"
    ROUNDOFF_LIMITED = "roundoff_limited"
    SINGULARITY_LIMITED = "singularity_limited"
    BUDGET_EXHAUSTED = "budget_exhausted"
    FAILED = "failed"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.OK: "integration converged",
    ErrorCode.BAD_TOLERANCE: (
        "tolerance cannot be achieved with given epsabs and epsrel"
    ),
    ErrorCode.ROUNDOFF_LIMITED: (
        "roundoff error prevents tolerance from being achieved"
    ),
    ErrorCode.SINGULARITY_LIMITED: (
        "bad integrand behavior found in the integration interval"
    ),
    ErrorCode.BUDGET_EXHAUSTED: "maximum number of subdivisions reached",
    ErrorCode.FAILED: "could not integrate function",
}
