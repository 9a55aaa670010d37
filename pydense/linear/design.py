"""
Linear System Design.

A design holds the validated coefficient matrix A and right-hand side b
of one square system A x = b. Validation happens once, here; backends
trust the design.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import DecompositionStateError
from pydense.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_consistent_length,
    check_finite,
    check_square,
)
from pydense.matrix import DenseMatrix, DenseVector, DecompositionType


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Square linear system specification.
    
    Immutable after construction.
    
    Construction:
        LinearSystemDesign.from_arrays(A, b)
        LinearSystemDesign.from_matrix(K, f)     # DenseMatrix + DenseVector
    """
    _A: NDArray[np.inexact[Any]]
    _b: NDArray[np.inexact[Any]]
    _n: int
    
    @classmethod
    def from_arrays(cls, A: ArrayLike, b: DenseVector | ArrayLike) -> LinearSystemDesign:
        """Build design directly from array-likes."""
        if isinstance(b, DenseVector):
            b = b.to_array()
        A_arr = check_array(A, 'A')
        b_arr = check_array(b, 'b')
        if b_arr.ndim == 2 and b_arr.shape[1] == 1:
            b_arr = b_arr.ravel()
        return cls._build(A_arr, b_arr)
    
    @classmethod
    def from_matrix(cls, matrix: DenseMatrix, b: DenseVector | ArrayLike) -> LinearSystemDesign:
        """
        Build design from kernel objects.
        
        The matrix must hold its original entries, not factors.
        """
        if matrix.decomposition_type is not DecompositionType.CLEAN:
            raise DecompositionStateError(
                f"A: matrix holds {matrix.decomposition_type.value} factors, "
                f"not the system coefficients",
                current=matrix.decomposition_type.value,
                requested=DecompositionType.CLEAN.value,
            )
        return cls.from_arrays(matrix.to_array(), b)
    
    @classmethod
    def _build(cls, A: NDArray, b: NDArray) -> LinearSystemDesign:
        """Internal builder with validation."""
        check_2d(A, 'A')
        check_square(A.shape, 'A')
        check_1d(b, 'b')
        check_consistent_length(A, b, names=('A', 'b'))
        check_finite(A, 'A')
        check_finite(b, 'b')
        
        return cls(_A=A, _b=b, _n=A.shape[0])
    
    # === Properties ===
    
    @property
    def A(self) -> NDArray[np.inexact[Any]]:
        """Coefficient matrix (n x n)."""
        return self._A
    
    @property
    def b(self) -> NDArray[np.inexact[Any]]:
        """Right-hand side (n,)."""
        return self._b
    
    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self._n
    
    def is_symmetric(self, rtol: float = 1e-10, atol: float = 1e-12) -> bool:
        """True if A equals its conjugate transpose within tolerance."""
        return bool(np.allclose(self._A, self._A.conj().T, rtol=rtol, atol=atol))
    
    def has_positive_diagonal(self) -> bool:
        """Necessary condition for positive definiteness."""
        return bool(np.all(np.diag(self._A).real > 0))
