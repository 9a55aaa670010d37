"""
Exception hierarchy for PyDense.

All exceptions inherit from PyDenseError to allow catching any
library-specific error. Kernel-specific exceptions inherit from the
appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyDenseError(Exception):
    """Base exception for all PyDense errors."""
    pass


class ValidationError(PyDenseError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix or vector dimensions are incorrect or inconsistent.
    
    Raised when an algebraic operation combines operands of incompatible
    shape (add, multiply, solve against a vector of the wrong length).
    
    Attributes:
        expected: Expected shape, if known
        actual: Actual shape, if known
    """
    
    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | None = None,
        actual: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class BoundsError(ValidationError, IndexError):
    """
    Element access outside the matrix or vector extents.
    
    Only raised while bounds checking is enabled (see pydense.core.build).
    Also an IndexError so that sequence idioms keep working.
    
    Attributes:
        index: The offending index
        shape: Extents of the accessed object
    """
    
    def __init__(
        self,
        message: str,
        index: tuple[int, ...] | int | None = None,
        shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class NumericalError(PyDenseError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.
    
    Raised when LU elimination meets a pivot that is zero to working
    precision. The kernel never retries; callers may retry with partial
    pivoting enabled.
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically n)
        pivot_index: Elimination step at which the zero pivot appeared
    """
    
    def __init__(
        self, 
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
        self.pivot_index = pivot_index


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.
    
    Raised when Cholesky factorization meets a diagonal pivot candidate
    that is not strictly positive.
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_eigenvalue: Minimum eigenvalue, if computed
        pivot_index: Row at which factorization broke down
        pivot_value: The non-positive pivot candidate
    """
    
    def __init__(
        self, 
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class DecompositionStateError(PyDenseError):
    """
    Solve or query requested against a mismatched decomposition state.
    
    LU and Cholesky factors overwrite the matrix entries. Asking for one
    kind of factorization while the matrix holds the other is a caller
    programming error and is always surfaced.
    
    Attributes:
        current: Decomposition the matrix currently holds
        requested: Decomposition the call needed
    """
    
    def __init__(
        self,
        message: str,
        current: str | None = None,
        requested: str | None = None,
    ):
        super().__init__(message)
        self.current = current
        self.requested = requested
