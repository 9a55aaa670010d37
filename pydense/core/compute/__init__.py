"""
Shared compute infrastructure for PyDense.

Submodules:
    timing: Execution timing utilities
    tolerances: Residual tolerance tiers by precision
    precision: Epsilon, pivot threshold, dtype promotion, condition number
"""

from pydense.core.compute.timing import Timer, timed
from pydense.core.compute.tolerances import ToleranceTier, select_tolerance
from pydense.core.compute.precision import (
    machine_epsilon,
    pivot_tolerance,
    promote_dtype,
    condition_number,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
    # Precision
    "machine_epsilon",
    "pivot_tolerance",
    "promote_dtype",
    "condition_number",
]
