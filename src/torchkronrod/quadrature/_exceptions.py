"""Exceptions for quadrature integration."""

from typing import Optional

from torchkronrod.quadrature._error_code import ErrorCode


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., tolerance not reached)."""

    pass


class IntegrationError(Exception):
    """Error when integration fails to reach the requested tolerance.

    Parameters
    ----------
    message : str
        Human-readable description.
    outcome : ErrorCode, optional
        Outcome reported by the integrator.
    value, error : float, optional
        Best-effort estimate and its error, when one exists.
    """

    def __init__(
        self,
        message: str,
        outcome: Optional[ErrorCode] = None,
        value: Optional[float] = None,
        error: Optional[float] = None,
    ):
        super().__init__(message)
        self.outcome = outcome
        self.value = value
        self.error = error


class BadToleranceError(IntegrationError, ValueError):
    """Requested tolerances are unattainable in double precision."""

    def __init__(self, epsabs: float, epsrel: float):
        super().__init__(
            f"{ErrorCode.BAD_TOLERANCE.message} "
            f"(epsabs={epsabs!r}, epsrel={epsrel!r})",
            outcome=ErrorCode.BAD_TOLERANCE,
        )
        self.epsabs = epsabs
        self.epsrel = epsrel
