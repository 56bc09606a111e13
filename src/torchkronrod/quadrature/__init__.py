"""
Adaptive Gauss-Kronrod quadrature module.

Function-based integration (evaluates callable):
    adaptive_integrate, quad, quad_info

Fixed-order Gauss-Kronrod rules:
    kronrod15, kronrod21, kronrod31, kronrod41, kronrod51, kronrod61,
    GaussKronrod

Building blocks:
    IntegrationWorkspace, rescale_error, is_degenerate

Node/weight computation:
    gauss_kronrod_nodes_weights, gauss_legendre_nodes_weights

Results and outcomes:
    RuleResult, QuadratureResult, ErrorCode

Exceptions:
    QuadratureWarning, IntegrationError, BadToleranceError
"""

from torchkronrod.quadrature._adaptive import (
    QuadratureResult,
    adaptive_integrate,
)
from torchkronrod.quadrature._degenerate import is_degenerate
from torchkronrod.quadrature._error_code import ErrorCode
from torchkronrod.quadrature._exceptions import (
    BadToleranceError,
    IntegrationError,
    QuadratureWarning,
)
from torchkronrod.quadrature._nodes import (
    GAUSS_KRONROD_ORDERS,
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)
from torchkronrod.quadrature._quad import quad, quad_info
from torchkronrod.quadrature._rescale import rescale_error
from torchkronrod.quadrature._rules import (
    GaussKronrod,
    RuleResult,
    kronrod15,
    kronrod21,
    kronrod31,
    kronrod41,
    kronrod51,
    kronrod61,
)
from torchkronrod.quadrature._workspace import IntegrationWorkspace

__all__ = [
    # Function-based
    "adaptive_integrate",
    "quad",
    "quad_info",
    # Rules
    "kronrod15",
    "kronrod21",
    "kronrod31",
    "kronrod41",
    "kronrod51",
    "kronrod61",
    "GaussKronrod",
    "GAUSS_KRONROD_ORDERS",
    # Building blocks
    "IntegrationWorkspace",
    "rescale_error",
    "is_degenerate",
    # Node/weight computation
    "gauss_kronrod_nodes_weights",
    "gauss_legendre_nodes_weights",
    # Results
    "RuleResult",
    "QuadratureResult",
    "ErrorCode",
    # Exceptions
    "QuadratureWarning",
    "IntegrationError",
    "BadToleranceError",
]
