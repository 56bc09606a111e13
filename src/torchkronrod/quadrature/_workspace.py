"""Subinterval storage for adaptive quadrature."""

from typing import Tuple

import torch
from torch import Tensor

Subinterval = Tuple[float, float, float, float]


class IntegrationWorkspace:
    """
    Arena of active subintervals ordered by error estimate.

    Storage is preallocated for ``limit`` entries and addressed by integer
    index. Columns are plain Python lists; the tensor properties return
    copies of the active entries for inspection. ``order`` is a permutation of the active indices whose first
    entry is always the subinterval with the largest error; the rest of
    ``order`` is kept descending only over a window that shrinks as the
    number of remaining subdivisions drops.

    Parameters
    ----------
    limit : int
        Maximum number of subintervals.

    Notes
    -----
    The workspace does not check capacity on :meth:`update`; callers stop
    subdividing once ``size == limit``.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    """

    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        self._limit = limit

        self._a = [0.0] * limit
        self._b = [0.0] * limit
        self._result = [0.0] * limit
        self._error = [0.0] * limit
        self._level = [0] * limit
        self._order = [0] * limit

        self._size = 0
        self._current = 0
        self._maximum_level = 0

    def __repr__(self) -> str:
        return (
            f"IntegrationWorkspace(limit={self._limit}, size={self._size}, "
            f"maximum_level={self._maximum_level})"
        )

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def size(self) -> int:
        return self._size

    @property
    def current(self) -> int:
        """Index of the subinterval with the largest error."""
        return self._current

    @property
    def maximum_level(self) -> int:
        return self._maximum_level

    @property
    def order(self) -> Tensor:
        return torch.tensor(self._order[: self._size], dtype=torch.int64)

    @property
    def a(self) -> Tensor:
        return torch.tensor(self._a[: self._size], dtype=torch.float64)

    @property
    def b(self) -> Tensor:
        return torch.tensor(self._b[: self._size], dtype=torch.float64)

    @property
    def result(self) -> Tensor:
        return torch.tensor(
            self._result[: self._size], dtype=torch.float64
        )

    @property
    def error(self) -> Tensor:
        return torch.tensor(
            self._error[: self._size], dtype=torch.float64
        )

    @property
    def level(self) -> Tensor:
        return torch.tensor(self._level[: self._size], dtype=torch.int64)

    def initialize(self, a: float, b: float, result: float, error: float):
        """Reset to a single subinterval covering ``[a, b]``."""
        self._a[0] = a
        self._b[0] = b
        self._result[0] = result
        self._error[0] = error
        self._level[0] = 0
        self._order[0] = 0

        self._size = 1
        self._current = 0
        self._maximum_level = 0

    def retrieve_worst(self) -> Subinterval:
        """Return ``(a, b, result, error)`` of the largest-error subinterval."""
        i = self._current

        return self._a[i], self._b[i], self._result[i], self._error[i]

    def update(self, left: Subinterval, right: Subinterval):
        """
        Replace the worst subinterval by its two halves.

        The half with the larger error takes over the worst subinterval's
        slot and the other half is appended; on a tie the left half keeps
        the slot.

        Parameters
        ----------
        left, right : tuple of float
            ``(a, b, result, error)`` of the halves ``[a, mid]`` and
            ``[mid, b]``.
        """
        i_max = self._current
        i_new = self._size
        new_level = self._level[i_max] + 1

        if right[3] > left[3]:
            kept, appended = right, left
        else:
            kept, appended = left, right

        self._store(i_max, kept, new_level)
        self._store(i_new, appended, new_level)

        self._size += 1

        if new_level > self._maximum_level:
            self._maximum_level = new_level

        self._reorder()

    def sum_results(self) -> float:
        """Sum of the integral estimates over all active subintervals."""
        total = 0.0
        for i in range(self._size):
            total += self._result[i]
        return total

    def _store(self, i: int, subinterval: Subinterval, level: int):
        a, b, result, error = subinterval

        self._a[i] = a
        self._b[i] = b
        self._result[i] = result
        self._error[i] = error
        self._level[i] = level

    def _reorder(self):
        last = self._size - 1
        order = self._order
        error = self._error

        if last < 2:
            order[0] = 0
            order[1] = 1
            return

        i_maxerr = self._current
        errmax = error[i_maxerr]

        # Only the leading entries matter once few subdivisions remain
        if last < self._limit // 2 + 2:
            top = last
        else:
            top = self._limit - last + 1

        i = 1
        while i < top and errmax < error[order[i]]:
            order[i - 1] = order[i]
            i += 1
        order[i - 1] = i_maxerr

        errmin = error[last]
        k = top - 1
        while k > i - 2 and errmin >= error[order[k]]:
            order[k + 1] = order[k]
            k -= 1
        order[k + 1] = last

        self._current = order[0]
