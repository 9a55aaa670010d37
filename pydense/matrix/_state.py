"""Decomposition state tag for DenseMatrix."""

from enum import Enum


class DecompositionType(Enum):
    """
    What the matrix entries currently hold.

    CLEAN: the entries as the caller wrote them.
    LU: combined unit-lower / upper factors from Gaussian elimination.
    CHOLESKY: the lower-triangular factor L of A = L L^H.

    Every mutation returns the matrix to CLEAN. Only lu_solve / det set LU
    and only cholesky_solve sets CHOLESKY.
    """
    CLEAN = 'clean'
    LU = 'lu'
    CHOLESKY = 'cholesky'
