"""
Factorization values.

DenseMatrix.lu_factor() and DenseMatrix.cholesky_factor() return these
immutable objects instead of overwriting the matrix. Each kind only
offers the operations valid for it, so solving with the wrong
factorization cannot happen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydense.core.exceptions import DimensionError, SingularMatrixError
from pydense.matrix._lu import lu_back_substitute, lu_determinant
from pydense.matrix._cholesky import cholesky_back_substitute, cholesky_determinant
from pydense.matrix.vector import read_vector


def _as_rhs(b: Any, n: int) -> NDArray[np.inexact[Any]]:
    if isinstance(b, (list, tuple)):
        b = np.asarray(b)
    rhs = read_vector(b, 'b')
    if rhs.shape[0] != n:
        raise DimensionError(
            f"b: expected length {n}, got {rhs.shape[0]}",
            expected=(n,),
            actual=rhs.shape,
        )
    return rhs


@dataclass(frozen=True)
class LUFactors:
    """
    Result of LU decomposition.

    Attributes:
        lu: Combined factors; strictly lower part holds the multipliers of
            the unit-lower L, the rest holds U.
        pivots: Sequential row-swap record (pivots[k] = row exchanged with
            row k at step k), or None if no pivoting was used.
        n_swaps: Number of actual row exchanges.
        singular: True if elimination met a zero pivot (only possible
            when factoring with allow_singular=True).
    """
    lu: NDArray[np.inexact[Any]]
    pivots: NDArray[np.intp] | None
    n_swaps: int
    singular: bool = False

    def __post_init__(self):
        self.lu.flags.writeable = False
        if self.pivots is not None:
            self.pivots.flags.writeable = False

    @property
    def n(self) -> int:
        return self.lu.shape[0]

    @property
    def lower(self) -> NDArray[np.inexact[Any]]:
        """Unit lower-triangular factor L."""
        return np.tril(self.lu, k=-1) + np.eye(self.n, dtype=self.lu.dtype)

    @property
    def upper(self) -> NDArray[np.inexact[Any]]:
        """Upper-triangular factor U."""
        return np.triu(self.lu)

    def permutation(self) -> NDArray[np.intp]:
        """Row order such that A[perm] = L @ U."""
        perm = np.arange(self.n, dtype=np.intp)
        if self.pivots is not None:
            for k, p in enumerate(self.pivots):
                if p != k:
                    perm[k], perm[p] = perm[p], perm[k]
        return perm

    def solve(self, b: Any) -> NDArray[np.inexact[Any]]:
        """Solve A x = b; returns a new array in the promoted dtype."""
        if self.singular:
            raise SingularMatrixError(
                "LU factors are singular; no unique solution",
                matrix_name="matrix",
                expected_rank=self.n,
            )
        return lu_back_substitute(self.lu, self.pivots, _as_rhs(b, self.n))

    def det(self) -> Any:
        """Determinant of the factored matrix, sign-corrected for swaps."""
        return lu_determinant(self.lu, self.n_swaps, self.singular)


@dataclass(frozen=True)
class CholeskyFactors:
    """
    Result of Cholesky decomposition A = L L^H.

    Attributes:
        L: Lower-triangular factor with a real, positive diagonal.
    """
    L: NDArray[np.inexact[Any]]

    def __post_init__(self):
        self.L.flags.writeable = False

    @property
    def n(self) -> int:
        return self.L.shape[0]

    def solve(self, b: Any) -> NDArray[np.inexact[Any]]:
        """Solve A x = b.

        b may use a different scalar type than L; a real factor is promoted
        to complex for a complex right-hand side.
        """
        return cholesky_back_substitute(self.L, _as_rhs(b, self.n))

    def det(self) -> float:
        return cholesky_determinant(self.L)

