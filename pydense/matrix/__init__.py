"""
Dense local-matrix kernel.

Small, dense, fully materialized matrices (element stiffness and mass
matrices) with in-place LU and Cholesky solves, determinant, norms and
symmetry-preserving boundary-condition condensation.

Public API:
    DenseMatrix: the kernel
    DenseVector: right-hand-side / solution vector
    DecompositionType: what a DenseMatrix's entries currently hold
    LUFactors, CholeskyFactors: immutable factorization values

Example:
    >>> from pydense.matrix import DenseMatrix, DenseVector
    >>> K = DenseMatrix.from_array([[2.0, 0.0], [0.0, 2.0]])
    >>> x = DenseVector()
    >>> K.cholesky_solve(DenseVector.from_array([4.0, 6.0]), x)
    >>> x.to_array()
    array([2., 3.])
"""

from pydense.matrix._state import DecompositionType
from pydense.matrix.vector import DenseVector
from pydense.matrix.dense import DenseMatrix
from pydense.matrix.factors import LUFactors, CholeskyFactors

__all__ = [
    "DenseMatrix",
    "DenseVector",
    "DecompositionType",
    "LUFactors",
    "CholeskyFactors",
]
