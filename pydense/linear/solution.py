"""
Linear solve solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pydense.core.result import Result

if TYPE_CHECKING:
    from pydense.linear.design import LinearSystemDesign


@dataclass(frozen=True)
class SolveParams:
    """
    Parameter payload for a direct solve.
    
    This is the immutable data computed by backends.
    
    Attributes:
        x: Solution vector (n,)
        residual: b - A x (n,)
        residual_norm: 2-norm of the residual
        relative_residual: Normwise backward error
            |r|_inf / (|A|_inf |x|_inf + |b|_inf)
        determinant: det(A) from the factorization
        pivots: Row-swap record for pivoted LU, else None
        n_swaps: Number of row exchanges (0 for Cholesky)
    """
    x: NDArray[np.inexact[Any]]
    residual: NDArray[np.inexact[Any]]
    residual_norm: float
    relative_residual: float
    determinant: Any
    pivots: NDArray[np.intp] | None
    n_swaps: int


@dataclass
class LinearSolveSolution:
    """
    User-facing solve results.
    
    Wraps the backend Result and provides convenient accessors.
    """
    _result: Result[SolveParams]
    _design: 'LinearSystemDesign'
    
    @property
    def x(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.x
    
    @property
    def residual(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.residual
    
    @property
    def residual_norm(self) -> float:
        return self._result.params.residual_norm
    
    @property
    def relative_residual(self) -> float:
        return self._result.params.relative_residual
    
    @property
    def determinant(self) -> Any:
        return self._result.params.determinant
    
    @property
    def pivots(self) -> NDArray[np.intp] | None:
        return self._result.params.pivots
    
    @property
    def n_swaps(self) -> int:
        return self._result.params.n_swaps
    
    @property
    def condition_number(self) -> float | None:
        """2-norm condition number, if it was computed."""
        return self._result.info.get('condition_number')
    
    @property
    def method(self) -> str:
        return self._result.info['method']
    
    @property
    def info(self) -> dict[str, Any]:
        return self._result.info
    
    @property
    def backend_name(self) -> str:
        return self._result.backend_name
    
    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing
    
    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings
    
    def summary(self) -> str:
        """Generate a plain-text summary of the solve."""
        cond = self.condition_number
        cond_str = f"{cond:.4e}" if cond is not None else "not computed"
        lines = [
            "Linear Solve Results",
            "=" * 60,
            f"Unknowns: {self._design.n}",
            f"Method: {self.method}",
            f"Row swaps: {self.n_swaps}",
            f"Determinant: {self.determinant:.6g}",
            f"Condition number: {cond_str}",
            f"Residual norm: {self.residual_norm:.6e}",
            f"Relative residual: {self.relative_residual:.6e}",
            "",
            "Solution:",
            "-" * 60,
        ]
        
        for i, value in enumerate(self.x):
            lines.append(f"  x[{i}]: {value:14.6g}")
        
        lines.append("-" * 60)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.6f}s")
        
        return "\n".join(lines)
    
    def __repr__(self) -> str:
        return (
            f"LinearSolveSolution(n={self._design.n}, method={self.method!r}, "
            f"relative_residual={self.relative_residual:.3e})"
        )
