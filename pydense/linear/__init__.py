"""
Functional linear solve API.

Solves a square system A x = b in one call and returns a solution object
with residual diagnostics, timing and a printable summary.

Example:
    >>> from pydense.linear import solve
    >>> sol = solve(A, b)
    >>> sol.x
    >>> print(sol.summary())
"""

from pydense.linear.design import LinearSystemDesign
from pydense.linear.solution import SolveParams, LinearSolveSolution
from pydense.linear.solvers import solve

__all__ = [
    "solve",
    "LinearSystemDesign",
    "SolveParams",
    "LinearSolveSolution",
]
