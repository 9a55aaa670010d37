"""
Dense vector collaborator.

DenseVector is the right-hand-side / solution vector handed to the solve
routines. It is owned by the caller; the kernel only reads it or writes
a result into it.

The helpers at the bottom let the kernel accept any VectorLike (and plain
1-D numpy arrays where no resize is needed), with a fast path for
DenseVector.
"""

from __future__ import annotations

from typing import Any, Iterator
import operator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core import build
from pydense.core.exceptions import BoundsError, DimensionError, ValidationError
from pydense.core.protocols import VectorLike
from pydense.core.validation import check_array, check_dtype, check_1d


class DenseVector:
    """
    Fixed-length, mutable sequence of scalars.

    Examples:
        >>> b = DenseVector(3)
        >>> b[0] = 1.0
        >>> b.size()
        3
        >>> b.resize(5)   # zero-fills
    """

    def __init__(self, n: int = 0, dtype: Any = np.float64):
        self._val = np.zeros(operator.index(n), dtype=check_dtype(dtype, 'dtype'))

    @classmethod
    def from_array(cls, array: ArrayLike, dtype: Any = None) -> DenseVector:
        """
        Build a vector holding a copy of a 1-D array-like.

        Raises:
            ValidationError: If dtype cannot hold the values without
                dropping a component (complex data into real storage)
        """
        arr = check_array(array, 'array')
        check_1d(arr, 'array')
        target = arr.dtype if dtype is None else check_dtype(dtype, 'dtype')
        if not np.can_cast(arr.dtype, target, casting='same_kind'):
            raise ValidationError(f"array: cannot store {arr.dtype} values in {target} storage")
        vec = cls(arr.shape[0], dtype=target)
        vec._val[:] = arr
        return vec

    @property
    def dtype(self) -> np.dtype:
        return self._val.dtype

    def size(self) -> int:
        return self._val.shape[0]

    def __len__(self) -> int:
        return self._val.shape[0]

    def resize(self, n: int, dtype: Any = None) -> None:
        """Change the length to n and zero every entry.

        Args:
            n: New length
            dtype: New scalar type; keeps the current one if None
        """
        n = operator.index(n)
        if n < 0:
            raise ValidationError(f"vector length must be non-negative, got {n}")
        new_dtype = self._val.dtype if dtype is None else check_dtype(dtype, 'dtype')
        self._val = np.zeros(n, dtype=new_dtype)

    def zero(self) -> None:
        self._val.fill(0)

    def _check(self, i: int) -> int:
        i = operator.index(i)
        if build.BOUNDS_CHECK and not 0 <= i < self._val.shape[0]:
            raise BoundsError(
                f"index {i} out of range for vector of size {self._val.shape[0]}",
                index=i,
                shape=self._val.shape,
            )
        return i

    def __getitem__(self, i: int) -> Any:
        return self._val[self._check(i)]

    def __setitem__(self, i: int, value: Any) -> None:
        self._val[self._check(i)] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._val)

    def get_values(self) -> NDArray[np.inexact[Any]]:
        """Mutable view of the underlying storage."""
        return self._val

    def to_array(self) -> NDArray[np.inexact[Any]]:
        """Copy of the entries as a 1-D array."""
        return self._val.copy()

    def __repr__(self) -> str:
        return f"DenseVector(size={self.size()}, dtype={self.dtype})"


def read_vector(vector: Any, name: str) -> NDArray[np.inexact[Any]]:
    """Copy a vector's entries into a new 1-D array."""
    if isinstance(vector, DenseVector):
        return vector.to_array()
    if isinstance(vector, np.ndarray):
        arr = check_array(vector, name)
        check_1d(arr, name)
        return arr.copy()
    if isinstance(vector, VectorLike):
        return check_array([vector[k] for k in range(vector.size())], name)
    raise ValidationError(
        f"{name}: expected a DenseVector, vector-like object or 1-D array, "
        f"got {type(vector).__name__}"
    )


def _store_array(target: NDArray[np.inexact[Any]], data: NDArray[np.inexact[Any]], name: str) -> None:
    if target.shape != data.shape:
        raise DimensionError(
            f"{name}: expected length {data.shape[0]}, got {target.shape}",
            expected=data.shape,
            actual=target.shape,
        )
    if not np.can_cast(data.dtype, target.dtype, casting='same_kind'):
        raise ValidationError(
            f"{name}: cannot store {data.dtype} values in a {target.dtype} array"
        )
    target[...] = data


def write_vector(vector: Any, data: NDArray[np.inexact[Any]], name: str) -> None:
    """Resize `vector` to len(data) and overwrite it with `data`.

    A DenseVector takes on the dtype of `data`, which is the promoted
    solve type. A numpy array cannot be resized, so it must already have
    the right length and a dtype that can hold `data`.
    """
    if isinstance(vector, DenseVector):
        vector.resize(data.shape[0], dtype=data.dtype)
        vector.get_values()[:] = data
    elif isinstance(vector, np.ndarray):
        _store_array(vector, data, name)
    elif isinstance(vector, VectorLike):
        vector.resize(data.shape[0])
        for k, value in enumerate(data):
            vector[k] = value
    else:
        raise ValidationError(
            f"{name}: expected a DenseVector, vector-like object or 1-D array, "
            f"got {type(vector).__name__}"
        )


def update_vector(vector: Any, data: NDArray[np.inexact[Any]], name: str) -> None:
    """Overwrite a vector's entries in place, keeping its length and dtype."""
    if isinstance(vector, DenseVector):
        _store_array(vector.get_values(), data, name)
    elif isinstance(vector, np.ndarray):
        _store_array(vector, data, name)
    elif isinstance(vector, VectorLike):
        for k, value in enumerate(data):
            vector[k] = value
    else:
        raise ValidationError(
            f"{name}: expected a DenseVector, vector-like object or 1-D array, "
            f"got {type(vector).__name__}"
        )


def vector_size(vector: Any, name: str) -> int:
    """Length of any accepted vector type."""
    if isinstance(vector, np.ndarray):
        check_1d(vector, name)
        return vector.shape[0]
    if isinstance(vector, (DenseVector, VectorLike)):
        return vector.size()
    raise ValidationError(
        f"{name}: expected a DenseVector, vector-like object or 1-D array, "
        f"got {type(vector).__name__}"
    )
