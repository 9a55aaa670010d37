"""
CPU backends for square linear systems.

Both backends drive the DenseMatrix kernel: the factorization is taken
as an immutable value (lu_factor / cholesky_factor), so the matrix keeps
its coefficients and the residual can be formed from it afterwards.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pydense.core.result import Result
from pydense.core.compute.timing import Timer
from pydense.core.compute.precision import condition_number
from pydense.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD, select_tolerance
from pydense.matrix import DenseMatrix, DenseVector
from pydense.linear.design import LinearSystemDesign
from pydense.linear.solution import SolveParams


def _relative_residual(
    A: NDArray[np.inexact[Any]],
    x: NDArray[np.inexact[Any]],
    b: NDArray[np.inexact[Any]],
    residual: NDArray[np.inexact[Any]],
) -> float:
    """Normwise backward error |r| / (|A| |x| + |b|) in the infinity norm."""
    if residual.size == 0:
        return 0.0
    denom = (
        np.linalg.norm(A, np.inf) * np.linalg.norm(x, np.inf)
        + np.linalg.norm(b, np.inf)
    )
    if denom == 0:
        return 0.0
    return float(np.linalg.norm(residual, np.inf) / denom)


def _finish(
    design: LinearSystemDesign,
    matrix: DenseMatrix,
    x: NDArray[np.inexact[Any]],
    determinant: Any,
    pivots: NDArray[np.intp] | None,
    n_swaps: int,
    timer: Timer,
    info: dict[str, Any],
    check_condition: bool,
    backend_name: str,
) -> Result[SolveParams]:
    """Residual diagnostics and Result assembly shared by the backends."""
    warnings_list: list[str] = []

    with timer.section('residual'):
        A = matrix.to_array()
        residual = design.b - A @ x
        residual_norm = float(np.linalg.norm(residual))
        relative = _relative_residual(A, x, design.b, residual)

    cond = None
    if check_condition:
        with timer.section('condition'):
            cond = condition_number(A)
        info['condition_number'] = cond
        if cond > ILL_CONDITIONED_THRESHOLD:
            warnings_list.append(
                f"Matrix is ill-conditioned (condition number {cond:.2e}); "
                f"the solution may be inaccurate"
            )

    tier = select_tolerance(x.dtype, is_ill_conditioned=cond is not None and cond > ILL_CONDITIONED_THRESHOLD)
    info['tolerance_tier'] = tier.name

    bound = tier.rtol * max(1.0, cond if cond is not None else 1.0)
    if relative > bound:
        warnings_list.append(
            f"Relative residual {relative:.3e} exceeds {tier.name} bound {bound:.3e}"
        )

    timer.stop()

    params = SolveParams(
        x=x,
        residual=residual,
        residual_norm=residual_norm,
        relative_residual=relative,
        determinant=determinant,
        pivots=pivots,
        n_swaps=n_swaps,
    )

    return Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(warnings_list),
    )


class CPULUBackend:
    """
    CPU backend using LU decomposition.
    
    Implements the Backend protocol for LinearSystemDesign -> SolveParams.
    Without partial pivoting, elimination fails on the first zero pivot
    even when the matrix is nonsingular.
    """
    
    def __init__(self, partial_pivot: bool = True, check_condition: bool = True):
        self.partial_pivot = partial_pivot
        self.check_condition = check_condition
    
    @property
    def name(self) -> str:
        return 'cpu_lu_pivot' if self.partial_pivot else 'cpu_lu'
    
    def solve(self, design: LinearSystemDesign) -> Result[SolveParams]:
        """
        Solve A x = b via LU decomposition.
        
        Algorithm:
            1. Factor A = L U (P A = L U with pivoting)
            2. Substitute: L y = P b, then U x = y
            3. Residual, determinant and conditioning diagnostics
            
        Raises:
            SingularMatrixError: On a zero pivot
        """
        timer = Timer()
        timer.start()
        
        matrix = DenseMatrix.from_array(design.A)
        b = DenseVector.from_array(design.b)
        
        with timer.section('decompose'):
            factors = matrix.lu_factor(partial_pivot=self.partial_pivot)
        
        with timer.section('substitute'):
            x = factors.solve(b)
        
        info: dict[str, Any] = {
            'method': 'lu',
            'n': design.n,
            'partial_pivot': self.partial_pivot,
        }
        
        return _finish(
            design, matrix, x,
            determinant=factors.det(),
            pivots=None if factors.pivots is None else factors.pivots.copy(),
            n_swaps=factors.n_swaps,
            timer=timer,
            info=info,
            check_condition=self.check_condition,
            backend_name=self.name,
        )


class CPUCholeskyBackend:
    """
    CPU backend using Cholesky decomposition A = L L^H.
    
    Requires a symmetric (Hermitian) positive-definite matrix; symmetry is
    checked by the caller, positive definiteness by the factorization.
    """
    
    def __init__(self, check_condition: bool = True):
        self.check_condition = check_condition
    
    @property
    def name(self) -> str:
        return 'cpu_cholesky'
    
    def solve(self, design: LinearSystemDesign) -> Result[SolveParams]:
        """
        Solve A x = b via Cholesky decomposition.
        
        Raises:
            NotPositiveDefiniteError: If a diagonal pivot is not strictly positive
        """
        timer = Timer()
        timer.start()
        
        matrix = DenseMatrix.from_array(design.A)
        b = DenseVector.from_array(design.b)
        
        with timer.section('decompose'):
            factors = matrix.cholesky_factor()
        
        with timer.section('substitute'):
            x = factors.solve(b)
        
        info: dict[str, Any] = {
            'method': 'cholesky',
            'n': design.n,
            'partial_pivot': False,
        }
        
        return _finish(
            design, matrix, x,
            determinant=factors.det(),
            pivots=None,
            n_swaps=0,
            timer=timer,
            info=info,
            check_condition=self.check_condition,
            backend_name=self.name,
        )
