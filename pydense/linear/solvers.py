"""
Solver dispatch for square linear systems.

This module provides the solve() function (public API) and backend selection.
"""

from typing import Any, Literal
import warnings

from numpy.typing import ArrayLike

from pydense.core.validation import check_symmetric
from pydense.matrix import DenseMatrix
from pydense.linear.design import LinearSystemDesign
from pydense.linear.solution import LinearSolveSolution
from pydense.linear.backends.cpu import CPULUBackend, CPUCholeskyBackend


# Type alias for method selection
MethodChoice = Literal['auto', 'lu', 'cholesky']


def solve(
    A: DenseMatrix | ArrayLike,
    b: Any,
    *,
    method: MethodChoice = 'auto',
    partial_pivot: bool = True,
    check_condition: bool = True,
) -> LinearSolveSolution:
    """
    Solve the square linear system A x = b.
    
    This is the functional entry point: all input validation, backend
    selection and result wrapping happens here. The kernel methods on
    DenseMatrix remain available for in-place, repeated-solve use.
    
    Args:
        A: Coefficient matrix (n x n). A DenseMatrix or any array-like.
        b: Right-hand side (n,). A DenseVector or any array-like.
        method: Factorization to use:
            - 'auto': Cholesky if A is symmetric with a positive
              diagonal, LU otherwise
            - 'lu': LU decomposition
            - 'cholesky': Cholesky decomposition (A must be symmetric)
        partial_pivot: Use partial pivoting in LU
        check_condition: Compute the condition number of A and use it to
            judge the residual
            
    Returns:
        LinearSolveSolution with the solution, residual diagnostics and
        summary methods
        
    Raises:
        ValidationError: If inputs are invalid, or 'cholesky' is requested
            for a non-symmetric matrix
        DimensionError: If A is not square or b has the wrong length
        SingularMatrixError: If LU meets a zero pivot
        NotPositiveDefiniteError: If Cholesky meets a non-positive pivot
        ValueError: If method is unknown
        
    Example:
        >>> from pydense.linear import solve
        >>> sol = solve([[4.0, 3.0], [6.0, 3.0]], [1.0, 1.0], method='lu')
        >>> sol.x
        array([0.        , 0.33333333])
        >>> print(sol.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    if isinstance(A, DenseMatrix):
        design = LinearSystemDesign.from_matrix(A, b)
    else:
        design = LinearSystemDesign.from_arrays(A, b)
    
    # === Select Backend ===
    backend_impl = _get_backend(method, design, partial_pivot, check_condition)
    
    # === Solve ===
    result = backend_impl.solve(design)
    
    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)
    
    # === Wrap and Return ===
    return LinearSolveSolution(_result=result, _design=design)


def _get_backend(
    choice: MethodChoice,
    design: LinearSystemDesign,
    partial_pivot: bool,
    check_condition: bool,
):
    """
    Select and instantiate the appropriate backend.
    
    Raises:
        ValueError: If unknown method specified
        ValidationError: If 'cholesky' is requested for a non-symmetric matrix
    """
    if choice == 'auto':
        if design.is_symmetric() and design.has_positive_diagonal():
            return CPUCholeskyBackend(check_condition=check_condition)
        return CPULUBackend(partial_pivot=partial_pivot, check_condition=check_condition)
    
    elif choice == 'lu':
        return CPULUBackend(partial_pivot=partial_pivot, check_condition=check_condition)
    
    elif choice == 'cholesky':
        check_symmetric(design.A, 'A')
        return CPUCholeskyBackend(check_condition=check_condition)
    
    else:
        raise ValueError(f"Unknown method: {choice!r}")
