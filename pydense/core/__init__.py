"""
Core infrastructure for PyDense.

This module provides shared abstractions and utilities used by the matrix
kernel and the solve pipeline.

Key components:
    protocols: VectorLike, MatrixBase, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    build: Build-mode switches (bounds checking)
    compute: Timing, tolerance tiers, precision helpers
"""

from pydense.core.protocols import VectorLike, MatrixBase, Backend
from pydense.core.result import Result
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

__all__ = [
    # Protocols
    "VectorLike",
    "MatrixBase",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "BoundsError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "DecompositionStateError",
]
