"""
Cholesky factorization and substitution.

For a symmetric (Hermitian) positive-definite A, computes the lower
triangular L with A = L L^H column by column. Only the lower triangle of
A is read. No pivoting is needed for SPD input.

The right-hand side may have its own scalar type: a real factor is
promoted to the rhs type for substitution (real x complex -> complex), so
one real factorization serves any number of complex excitations.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
import scipy.linalg as sla

from pydense.core.exceptions import NotPositiveDefiniteError
from pydense.core.compute.precision import promote_dtype


def cholesky_decompose(
    a: NDArray[np.inexact[Any]],
    matrix_name: str = 'A',
) -> NDArray[np.inexact[Any]]:
    """Compute L with a = L L^H.

    Args:
        a: Square SPD matrix. Not modified.
        matrix_name: Name used in error messages.

    Returns:
        New lower-triangular array (zeros above the diagonal).

    Raises:
        NotPositiveDefiniteError: If a diagonal pivot candidate is not
            strictly positive (NaN included).
    """
    n = a.shape[0]
    L = np.zeros_like(a)

    for j in range(n):
        row = L[j, :j]
        d = (a[j, j] - np.vdot(row, row)).real
        if not d > 0:
            raise NotPositiveDefiniteError(
                f"{matrix_name}: non-positive pivot {d:.6g} at row {j} of {n}; "
                f"matrix is not symmetric positive definite",
                matrix_name=matrix_name,
                pivot_index=j,
                pivot_value=float(d),
            )
        ljj = np.sqrt(d)
        L[j, j] = ljj
        L[j + 1:, j] = (a[j + 1:, j] - L[j + 1:, :j] @ row.conj()) / ljj

    return L


def cholesky_back_substitute(
    L: NDArray[np.inexact[Any]],
    b: NDArray[np.inexact[Any]],
) -> NDArray[np.inexact[Any]]:
    """Solve L L^H x = b.

    Forward substitution L y = b, then backward substitution L^H x = y.

    Returns:
        New solution array in the promoted dtype of (L, b).
    """
    dtype = promote_dtype(L.dtype, b.dtype)
    y = np.array(b, dtype=dtype)
    if y.size == 0:
        return y
    factor = L.astype(dtype, copy=False)
    y = sla.solve_triangular(factor, y, lower=True)
    return sla.solve_triangular(factor, y, lower=True, trans='C')


def cholesky_determinant(L: NDArray[np.inexact[Any]]) -> float:
    """det(A) = prod(diag L)^2 (diag L is real and positive)."""
    return float(np.prod(np.diag(L).real) ** 2)
