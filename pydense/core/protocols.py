"""
Core protocols for PyDense.

These define structural interfaces the kernel consumes and exposes.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that callers can hand in their own vector types without inheriting from
anything in this package.

Design Principles:
    - Minimal contracts: prescribe only what the kernel actually calls
    - Composition over inheritance: dimensions are a value held by the
      matrix, not a base class
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class VectorLike(Protocol):
    """
    Caller-owned right-hand-side / solution vector.

    Fixed length for the duration of a solve; the kernel resizes the
    solution vector before writing into it.
    """

    def size(self) -> int:
        """Number of entries."""
        ...

    def resize(self, n: int) -> None:
        """Change the length to n, zero-filling."""
        ...

    def __getitem__(self, i: int) -> Any:
        ...

    def __setitem__(self, i: int, value: Any) -> None:
        ...


@runtime_checkable
class MatrixBase(Protocol):
    """
    Dimensions-and-access capability shared by matrix representations.

    Anything that reports its extents and can read an element satisfies
    this protocol; the dense kernel accepts it as the other operand of
    products and sums.
    """

    @property
    def m(self) -> int:
        """Row count."""
        ...

    @property
    def n(self) -> int:
        """Column count."""
        ...

    def el(self, i: int, j: int) -> Any:
        """Element (i, j)."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for solve backends.
    
    Each backend takes a validated design and produces a Result with a
    parameter payload. Backends are stateless apart from construction-time
    options, which makes them easy to test and swap.
    
    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """
    
    @property
    def name(self) -> str:
        """
        Backend identifier.
        
        Convention: '{device}_{algorithm}'
        Examples: 'cpu_lu', 'cpu_lu_pivot', 'cpu_cholesky'
        """
        ...
    
    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.
        
        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If design is invalid for this backend
        """
        ...
