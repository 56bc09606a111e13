"""Testing helpers for torchkronrod.

Requires ``hypothesis`` (installed with the ``test`` extra).
"""

from . import strategies

__all__ = [
    "strategies",
]
