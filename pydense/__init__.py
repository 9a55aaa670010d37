"""
PyDense: dense local-matrix linear algebra for finite element codes.

A kernel for assembling and solving the small per-element systems
(element stiffness / mass matrices) of a simulator before they are summed
into a global system.

Submodules:
    core: Exceptions, validation, result envelope, compute utilities
    matrix: DenseMatrix / DenseVector kernel
    linear: solve(A, b) convenience pipeline with diagnostics
"""

__version__ = "0.1.0"

from pydense.core.exceptions import (
    PyDenseError,
    ValidationError,
    DimensionError,
    BoundsError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    DecompositionStateError,
)
from pydense.matrix import DenseMatrix, DenseVector, DecompositionType
from pydense.linear import solve

__all__ = [
    "__version__",
    "DenseMatrix",
    "DenseVector",
    "DecompositionType",
    "solve",
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "BoundsError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "DecompositionStateError",
]
