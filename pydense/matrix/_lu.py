"""
LU elimination and triangular substitution.

Gaussian elimination reduces a square matrix in place to the combined
factors of A = L U (or P A = L U with partial pivoting):

    strictly lower part: multipliers of the unit-lower factor L
    upper part incl. diagonal: U

Row exchanges are recorded LAPACK-style as a sequential swap record:
pivots[k] = p means that at step k rows k and p were exchanged. The same
exchanges are replayed on the right-hand side before forward
substitution, and each one flips the sign of the determinant.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
import scipy.linalg as sla

from pydense.core.exceptions import SingularMatrixError
from pydense.core.compute.precision import pivot_tolerance, promote_dtype


def lu_decompose(
    a: NDArray[np.inexact[Any]],
    partial_pivot: bool = False,
    allow_singular: bool = False,
    matrix_name: str = 'A',
) -> tuple[NDArray[np.intp] | None, int, bool]:
    """Factor the square array `a` in place.

    Args:
        a: Square matrix, overwritten with the combined LU factors.
        partial_pivot: Swap the largest-magnitude candidate of the current
            column (from the current row down) into the pivot position.
        allow_singular: Record a zero pivot and carry on instead of
            raising. Used by det(), where a singular matrix has det 0.
            A non-finite pivot is eliminated through so it reaches the
            determinant.        matrix_name: Name used in error messages.

    Returns:
        (pivots, n_swaps, singular). pivots is None without pivoting.

    Raises:
        SingularMatrixError: On a pivot that is non-finite or zero to
            working precision relative to its own column, and
            allow_singular is False. `a` is partially eliminated then;
            callers that need atomicity pass a copy.
    """
    n = a.shape[0]
    # row exchanges leave column magnitudes unchanged
    column_scale = np.max(np.abs(a), axis=0) if a.size else np.zeros(n)

    pivots = np.arange(n, dtype=np.intp) if partial_pivot else None
    n_swaps = 0
    singular = False

    for k in range(n):
        if partial_pivot:
            p = k + int(np.argmax(np.abs(a[k:, k])))
            if p != k:
                a[[k, p], :] = a[[p, k], :]
                n_swaps += 1
            pivots[k] = p

        pivot = a[k, k]
        tol = pivot_tolerance(a.dtype, n, column_scale[k])
        finite = bool(np.isfinite(pivot))
        if not finite or abs(pivot) <= tol:
            if not allow_singular:
                hint = "" if partial_pivot else " Retry with partial_pivot=True."
                what = (
                    f"zero pivot ({abs(pivot):.3e} <= {tol:.3e})" if finite
                    else f"non-finite pivot ({pivot})"
                )
                raise SingularMatrixError(
                    f"{matrix_name}: {what} at elimination step {k} of {n}.{hint}",
                    matrix_name=matrix_name,
                    expected_rank=n,
                    pivot_index=k,
                )
            if finite:
                singular = True
                continue

        a[k + 1:, k] /= pivot
        a[k + 1:, k + 1:] -= np.outer(a[k + 1:, k], a[k, k + 1:])

    return pivots, n_swaps, singular


def apply_row_swaps(
    b: NDArray[np.inexact[Any]],
    pivots: NDArray[np.intp] | None,
) -> None:
    """Replay the recorded row exchanges on `b` in place."""
    if pivots is None:
        return
    for k, p in enumerate(pivots):
        if p != k:
            b[k], b[p] = b[p], b[k]


def lu_back_substitute(
    lu: NDArray[np.inexact[Any]],
    pivots: NDArray[np.intp] | None,
    b: NDArray[np.inexact[Any]],
) -> NDArray[np.inexact[Any]]:
    """Solve A x = b from combined LU factors.

    Forward substitution with the implied unit diagonal (L y = P b), then
    backward substitution (U x = y).

    Returns:
        New solution array in the promoted dtype of (lu, b).
    """
    dtype = promote_dtype(lu.dtype, b.dtype)
    y = np.array(b, dtype=dtype)
    if y.size == 0:
        return y
    apply_row_swaps(y, pivots)
    factors = lu.astype(dtype, copy=False)
    y = sla.solve_triangular(factors, y, lower=True, unit_diagonal=True)
    return sla.solve_triangular(factors, y, lower=False)


def lu_determinant(
    lu: NDArray[np.inexact[Any]],
    n_swaps: int,
    singular: bool,
) -> Any:
    """Signed product of the diagonal of U."""
    if singular:
        return lu.dtype.type(0)
    value = np.prod(np.diag(lu))
    if n_swaps % 2:
        value = -value
    return lu.dtype.type(value)
