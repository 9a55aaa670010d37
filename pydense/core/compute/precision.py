"""
Numerical precision constants and utilities.

Provides machine epsilon, the zero-pivot threshold used by LU
elimination, the real/complex promotion rule for mixed-type solves and a
condition number estimate.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7

# A pivot is treated as zero when |pivot| <= PIVOT_RTOL * n * eps * max|A[:, k]|
PIVOT_RTOL: float = 1.0


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.
    
    Complex dtypes report the epsilon of their component type.
    """
    return float(np.finfo(dtype).eps)


def pivot_tolerance(dtype: np.dtype | type, n: int, scale: float) -> float:
    """
    Magnitude at or below which an elimination pivot counts as zero.

    Args:
        dtype: Scalar type of the factorized matrix
        n: Matrix order
        scale: Largest entry magnitude in the pivot's column before
            elimination

    Returns:
        PIVOT_RTOL * max(n, 1) * eps * scale. Zero for a zero column, so
        only exact zeros are rejected there.
    """
    return PIVOT_RTOL * max(n, 1) * machine_epsilon(dtype) * float(scale)


def promote_dtype(coefficient: Any, rhs: Any) -> np.dtype:
    """
    Scalar type of a solve's arithmetic and its solution.

    Real coefficients with a complex right-hand side promote to complex
    (float64 x complex128 -> complex128); otherwise numpy's usual
    promotion applies. Integer right-hand sides promote to the
    coefficient type.
    """
    return np.result_type(np.dtype(coefficient), np.dtype(rhs), np.float16)


def condition_number(A: NDArray[np.inexact[Any]]) -> float:
    """
    Compute the 2-norm condition number of a matrix using SVD.
    
    Returns:
        Ratio of largest to smallest singular value, inf if singular,
        1.0 for an empty matrix.
    """
    if A.size == 0:
        return 1.0
    s = np.linalg.svd(A, compute_uv=False)
    if s[-1] == 0:
        return np.inf
    return float(s[0] / s[-1])
