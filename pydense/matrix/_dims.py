"""
Matrix extents and row-major addressing.

MatrixDimensions is held by value inside each matrix (composition rather
than a shared base class). It owns the bounds check so every storage
layout addresses elements the same way.
"""

from dataclasses import dataclass
import operator

from pydense.core import build
from pydense.core.exceptions import BoundsError, ValidationError


@dataclass
class MatrixDimensions:
    """Row and column counts of an m x n matrix."""
    m: int = 0
    n: int = 0

    @property
    def size(self) -> int:
        return self.m * self.n

    @property
    def shape(self) -> tuple[int, int]:
        return (self.m, self.n)

    def offset(self, i: int, j: int) -> int:
        """Row-major offset of element (i, j): i*n + j."""
        i = operator.index(i)
        j = operator.index(j)
        if build.BOUNDS_CHECK and not (0 <= i < self.m and 0 <= j < self.n):
            raise BoundsError(
                f"index ({i}, {j}) out of range for {self.m}x{self.n} matrix",
                index=(i, j),
                shape=self.shape,
            )
        return i * self.n + j


def check_extents(m: int, n: int) -> tuple[int, int]:
    """Validate requested extents for construction or resize."""
    try:
        m = operator.index(m)
        n = operator.index(n)
    except TypeError as e:
        raise ValidationError(f"matrix extents must be integers, got ({m!r}, {n!r})") from e
    if m < 0 or n < 0:
        raise ValidationError(f"matrix extents must be non-negative, got ({m}, {n})")
    return m, n
