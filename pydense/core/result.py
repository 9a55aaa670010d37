"""
Generic result container for PyDense computations.

The Result class is the standardized envelope returned by solve backends.
It carries the numeric payload together with timing, diagnostics and the
library versions that produced it, so a solve can be reproduced later.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, pivoting, condition number)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Versions of the libraries that produced a result."""
    import numpy
    import scipy
    from pydense import __version__

    return {
        'pydense_version': __version__,
        'numpy_version': numpy.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for kernel computations.
    
    Type Parameters:
        P: The payload type
        
    Attributes:
        params: Computed quantities (solution vector, residual, ...)
        info: Structured metadata (method, pivoting, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions, generated automatically
        
    Examples:
        >>> Result(
        ...     params=SolveParams(x=x, ...),
        ...     info={'method': 'lu', 'partial_pivot': True},
        ...     timing={'total_seconds': 0.001, 'decompose': 0.0006},
        ...     backend_name='cpu_lu_pivot'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)
    
    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
