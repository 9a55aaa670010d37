"""
Input validation utilities for PyDense.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes and
      integer/bool promotion to float64)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pydense.core.exceptions import ValidationError, DimensionError, BoundsError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Real and complex floating dtypes are kept; integer and boolean data is
    promoted to float64.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating or complex dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.inexact):
        result = result.astype(np.float64)

    return result


def check_dtype(dtype: Any, name: str) -> np.dtype:
    """
    Validate a scalar type for matrix or vector storage.

    Args:
        dtype: Anything np.dtype() accepts
        name: Parameter name for error messages

    Returns:
        The normalised numpy dtype

    Raises:
        ValidationError: If dtype is not a real or complex floating type
    """
    try:
        result = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a dtype: {dtype!r}") from e
    if not np.issubdtype(result, np.inexact):
        raise ValidationError(
            f"{name}: dtype {result} is not a floating or complex type"
        )
    return result


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.inexact[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            actual=array.shape,
        )


def check_1d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a 2D shape is square.

    Args:
        shape: (rows, cols)
        name: Parameter name for error messages

    Raises:
        DimensionError: If rows != cols
    """
    m, n = shape
    if m != n:
        raise DimensionError(
            f"{name}: expected a square matrix, got {m}x{n}",
            expected=(m, m),
            actual=(m, n),
        )


def check_same_shape(
    shape: tuple[int, ...],
    other: tuple[int, ...],
    names: tuple[str, str],
) -> None:
    """
    Verify two operands have identical extents.

    Raises:
        DimensionError: If the shapes differ
    """
    if tuple(shape) != tuple(other):
        raise DimensionError(
            f"Shape mismatch: {names[0]}={tuple(shape)}, {names[1]}={tuple(other)}",
            expected=tuple(shape),
            actual=tuple(other),
        )


def check_consistent_length(
    *arrays: NDArray[np.inexact[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_symmetric(
    array: NDArray[np.inexact[Any]],
    name: str,
    rtol: float = 1e-10,
    atol: float = 1e-12,
) -> None:
    """
    Verify a square matrix is symmetric (Hermitian for complex data).

    Args:
        array: Square 2D array
        name: Parameter name for error messages
        rtol: Relative tolerance for the comparison
        atol: Absolute tolerance for the comparison

    Raises:
        ValidationError: If array differs from its conjugate transpose
    """
    if not np.allclose(array, array.conj().T, rtol=rtol, atol=atol):
        asym = float(np.max(np.abs(array - array.conj().T)))
        raise ValidationError(
            f"{name}: matrix is not symmetric (max |A - A^H| = {asym:.3e})"
        )


def check_scalar(value: Any, dtype: np.dtype, name: str) -> None:
    """
    Verify a scalar can be combined with `dtype` storage in place.

    In-place updates must not change the storage type, so a complex
    factor applied to a real matrix is rejected.

    Raises:
        ValidationError: If value is not a number or would promote dtype
    """
    if not isinstance(value, (numbers.Number, np.number)):
        raise ValidationError(f"{name}: expected a scalar, got {type(value).__name__}")
    if np.iscomplexobj(value) and not np.issubdtype(dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex value {value!r} cannot be applied to {dtype} storage"
        )


def check_index(index: int, extent: int, name: str) -> None:
    """
    Verify 0 <= index < extent.

    Negative indices are rejected rather than wrapped.

    Raises:
        BoundsError: If index is out of range
    """
    if not 0 <= index < extent:
        raise BoundsError(
            f"{name}: index {index} out of range for extent {extent}",
            index=index,
            shape=(extent,),
        )


def check_nonempty(shape: tuple[int, ...], name: str) -> None:
    """
    Verify an object has at least one entry.

    Raises:
        ValidationError: If any extent is zero
    """
    if any(extent == 0 for extent in shape):
        raise ValidationError(f"{name}: operation undefined on empty shape {tuple(shape)}")
