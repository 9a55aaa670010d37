"""
Tolerance tiers for numerical validation.

Defines the residual accuracy expected from a direct solve, by scalar
precision:
- FP64 (float64 / complex128): near machine precision
- FP32 (float32 / complex64): relaxed for single-precision arithmetic
- ill-conditioned variants for systems with cond > ILL_CONDITIONED_THRESHOLD

Used by the solve backends' residual check and by the test suite.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision direct solve',
)

FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='fp64_ill_conditioned',
    description='double precision, ill-conditioned (cond > 1e4)',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='single precision direct solve',
)

FP32_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='fp32_ill_conditioned',
    description='single precision, ill-conditioned',
)

# Above this condition number the relaxed tiers apply.
ILL_CONDITIONED_THRESHOLD = 1e4


def select_tolerance(
    dtype: Any,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a scalar type."""
    single = np.finfo(np.dtype(dtype)).bits <= 32
    if single:
        if is_ill_conditioned:
            return FP32_ILL_CONDITIONED
        return FP32
    if is_ill_conditioned:
        return FP64_ILL_CONDITIONED
    return FP64
