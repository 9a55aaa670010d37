"""
Dense matrix kernel.

DenseMatrix stores an m x n matrix in one contiguous row-major buffer
(element (i, j) at offset i*n + j). It is meant for small, fully
materialized element matrices (stiffness, mass) that are assembled and
solved locally before being summed into a global system.

The matrix tracks what its entries hold (DecompositionType):

    CLEAN ──lu_solve/det──> LU
    CLEAN ──cholesky_solve──> CHOLESKY
    any mutation ──> CLEAN

lu_solve/cholesky_solve on a matrix already holding the same kind of
factors reuse them; requesting the other kind raises
DecompositionStateError. A decomposition that fails leaves the entries
untouched and the state CLEAN, so the caller can retry with another
method.

Example:
    >>> A = DenseMatrix(2, 2)
    >>> A[0, 0], A[0, 1], A[1, 0], A[1, 1] = 4.0, 3.0, 6.0, 3.0
    >>> b = DenseVector.from_array([1.0, 1.0])
    >>> x = DenseVector()
    >>> A.lu_solve(b, x, partial_pivot=True)
    >>> x.to_array()
    array([0.        , 0.33333333])
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import (
    DecompositionStateError,
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from pydense.core.protocols import MatrixBase
from pydense.core.validation import (
    check_array,
    check_2d,
    check_dtype,
    check_index,
    check_nonempty,
    check_same_shape,
    check_scalar,
    check_square,
)
from pydense.matrix._dims import MatrixDimensions, check_extents
from pydense.matrix._state import DecompositionType
from pydense.matrix._lu import lu_decompose, lu_back_substitute, lu_determinant
from pydense.matrix._cholesky import cholesky_decompose, cholesky_back_substitute
from pydense.matrix.factors import LUFactors, CholeskyFactors
from pydense.matrix.vector import read_vector, write_vector, update_vector, vector_size


class DenseMatrix:
    """
    Dense m x n matrix of real or complex scalars.

    Args:
        m: Row count (default 0)
        n: Column count (default 0)
        dtype: Scalar type; any numpy floating or complex type

    Element access uses ``A[i, j]``; writes reset the decomposition state.
    """

    def __init__(self, m: int = 0, n: int = 0, dtype: Any = np.float64):
        self._dims = MatrixDimensions()
        self._val = np.zeros(0, dtype=check_dtype(dtype, 'dtype'))
        self._decomposition_type = DecompositionType.CLEAN
        self._pivots: NDArray[np.intp] | None = None
        self._n_swaps = 0
        self._lu_singular = False
        self.resize(m, n)

    @classmethod
    def from_array(cls, array: ArrayLike, dtype: Any = None) -> DenseMatrix:
        """
        Build a matrix holding a copy of a 2-D array-like.

        Raises:
            ValidationError: If dtype cannot hold the values without
                dropping a component (complex data into real storage)
        """
        arr = check_array(array, 'array')
        check_2d(arr, 'array')
        target = arr.dtype if dtype is None else check_dtype(dtype, 'dtype')
        if not np.can_cast(arr.dtype, target, casting='same_kind'):
            raise ValidationError(f"array: cannot store {arr.dtype} values in {target} storage")
        matrix = cls(*arr.shape, dtype=target)
        matrix._matrix()[...] = arr
        return matrix

    # === Properties ===

    @property
    def m(self) -> int:
        """Row count."""
        return self._dims.m

    @property
    def n(self) -> int:
        """Column count."""
        return self._dims.n

    @property
    def shape(self) -> tuple[int, int]:
        return self._dims.shape

    @property
    def dtype(self) -> np.dtype:
        return self._val.dtype

    @property
    def capacity(self) -> int:
        """Entries the physical buffer can hold without reallocating."""
        return self._val.shape[0]

    @property
    def decomposition_type(self) -> DecompositionType:
        return self._decomposition_type

    @property
    def pivots(self) -> NDArray[np.intp] | None:
        """Row-swap record of the held LU factors (None without pivoting)."""
        return None if self._pivots is None else self._pivots.copy()

    @property
    def n_swaps(self) -> int:
        """Row exchanges performed by the held LU factorization."""
        return self._n_swaps

    def _matrix(self) -> NDArray[np.inexact[Any]]:
        # 2-D view of the active part of the buffer
        return self._val[:self._dims.size].reshape(self._dims.shape)

    def _reset_state(self) -> None:
        self._decomposition_type = DecompositionType.CLEAN
        self._pivots = None
        self._n_swaps = 0
        self._lu_singular = False

    # === Storage ===

    def resize(self, m: int, n: int) -> None:
        """
        Set the extents to m x n and zero every entry.

        The buffer grows when needed but is never shrunk.
        """
        m, n = check_extents(m, n)
        if m * n > self._val.shape[0]:
            self._val = np.zeros(m * n, dtype=self._val.dtype)
        self._dims.m = m
        self._dims.n = n
        self.zero()

    def zero(self) -> None:
        """Set every entry to 0 and reset the decomposition state."""
        self._reset_state()
        self._val[:self._dims.size] = 0

    def get_values(self) -> NDArray[np.inexact[Any]]:
        """
        Mutable flat row-major view of the entries, for bulk transfer.

        The caller may write through the view, so the decomposition state
        is reset. The reset happens here, not on each write: a later
        lu_solve, cholesky_solve or det() overwrites the entries with
        factors that a view held from before it still aliases. Call
        get_values() again after any of those before writing, or the
        stored factors are changed without the matrix noticing.

        Use to_array() or values_view() for reads that outlive a solve.
        """
        self._reset_state()
        return self._val[:self._dims.size]

    def values_view(self) -> NDArray[np.inexact[Any]]:
        """Read-only flat row-major view of the entries."""
        view = self._val[:self._dims.size]
        view.flags.writeable = False
        return view

    def to_array(self) -> NDArray[np.inexact[Any]]:
        """Copy of the entries as an m x n array."""
        return self._matrix().copy()

    def assign(self, other: DenseMatrix) -> DenseMatrix:
        """Make this matrix a copy of `other`, decomposition state included."""
        if not isinstance(other, DenseMatrix):
            raise ValidationError(f"other: expected DenseMatrix, got {type(other).__name__}")
        if other is self:
            return self
        self._dims = MatrixDimensions(other.m, other.n)
        self._val = other._val[:other._dims.size].copy()
        self._decomposition_type = other._decomposition_type
        self._pivots = None if other._pivots is None else other._pivots.copy()
        self._n_swaps = other._n_swaps
        self._lu_singular = other._lu_singular
        return self

    def copy(self) -> DenseMatrix:
        return DenseMatrix(dtype=self.dtype).assign(self)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> DenseMatrix:
        return self.copy()

    def swap(self, other: DenseMatrix) -> None:
        """Exchange extents, storage and decomposition state with `other`."""
        if not isinstance(other, DenseMatrix):
            raise ValidationError(f"other: expected DenseMatrix, got {type(other).__name__}")
        self._dims, other._dims = other._dims, self._dims
        self._val, other._val = other._val, self._val
        self._decomposition_type, other._decomposition_type = (
            other._decomposition_type, self._decomposition_type)
        self._pivots, other._pivots = other._pivots, self._pivots
        self._n_swaps, other._n_swaps = other._n_swaps, self._n_swaps
        self._lu_singular, other._lu_singular = other._lu_singular, self._lu_singular

    # === Element access ===

    def __getitem__(self, index: tuple[int, int]) -> Any:
        i, j = index
        return self._val[self._dims.offset(i, j)]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        i, j = index
        self._val[self._dims.offset(i, j)] = value
        self._reset_state()

    def el(self, i: int, j: int) -> Any:
        return self[i, j]

    def set_el(self, i: int, j: int, value: Any) -> None:
        self[i, j] = value

    def transpose(self, i: int, j: int) -> Any:
        """Element (i, j) of the transpose, i.e. self[j, i]."""
        return self[j, i]

    # === Elementwise algebra ===

    def _operand(self, other: Any, name: str) -> NDArray[np.inexact[Any]]:
        """2-D array for the other operand of a sum or product."""
        if isinstance(other, DenseMatrix):
            arr = other._matrix()
        elif isinstance(other, MatrixBase):
            arr = check_array(
                [[other.el(i, j) for j in range(other.n)] for i in range(other.m)], name
            ).reshape(other.m, other.n)
        else:
            arr = check_array(other, name)
            check_2d(arr, name)
        if not np.can_cast(arr.dtype, self.dtype, casting='same_kind'):
            raise ValidationError(
                f"{name}: {arr.dtype} entries cannot be combined into {self.dtype} storage"
            )
        return arr

    def scale(self, factor: Any) -> None:
        """Multiply every entry by `factor`."""
        check_scalar(factor, self.dtype, 'factor')
        self._matrix()[...] *= factor
        self._reset_state()

    def __imul__(self, factor: Any) -> DenseMatrix:
        self.scale(factor)
        return self

    def add(self, factor: Any, other: Any) -> None:
        """this += factor * other, entry by entry; shapes must match."""
        check_scalar(factor, self.dtype, 'factor')
        arr = self._operand(other, 'other')
        check_same_shape(self.shape, arr.shape, names=('self', 'other'))
        self._matrix()[...] += factor * arr
        self._reset_state()

    def __iadd__(self, other: Any) -> DenseMatrix:
        self.add(1, other)
        return self

    def min(self) -> float:
        """Smallest entry, compared by real part."""
        check_nonempty(self.shape, 'matrix')
        return float(np.min(self._matrix().real))

    def max(self) -> float:
        """Largest entry, compared by real part."""
        check_nonempty(self.shape, 'matrix')
        return float(np.max(self._matrix().real))

    def l1_norm(self) -> float:
        """
        Maximum absolute column sum, |M|_1 = max_j sum_i |M_ij|.

        The operator norm compatible with the vector 1-norm:
        |M v|_1 <= |M|_1 |v|_1.
        """
        check_nonempty(self.shape, 'matrix')
        return float(np.max(np.sum(np.abs(self._matrix()), axis=0)))

    def linfty_norm(self) -> float:
        """
        Maximum absolute row sum, |M|_inf = max_i sum_j |M_ij|.

        The operator norm compatible with the vector infinity-norm.
        """
        check_nonempty(self.shape, 'matrix')
        return float(np.max(np.sum(np.abs(self._matrix()), axis=1)))

    # === Products ===

    def _replace(self, product: NDArray[np.inexact[Any]]) -> None:
        self.resize(*product.shape)
        self._matrix()[...] = product

    def left_multiply(self, M2: Any) -> None:
        """this = M2 @ this."""
        B = self._operand(M2, 'M2')
        if B.shape[1] != self.m:
            raise DimensionError(
                f"left_multiply: M2 is {B.shape[0]}x{B.shape[1]}, this is {self.m}x{self.n}",
                expected=(B.shape[0], self.m),
                actual=B.shape,
            )
        self._replace(B @ self._matrix())

    def right_multiply(self, M3: Any) -> None:
        """this = this @ M3."""
        B = self._operand(M3, 'M3')
        if B.shape[0] != self.n:
            raise DimensionError(
                f"right_multiply: this is {self.m}x{self.n}, M3 is {B.shape[0]}x{B.shape[1]}",
                expected=(self.n, B.shape[1]),
                actual=B.shape,
            )
        self._replace(self._matrix() @ B)

    def left_multiply_transpose(self, A: Any) -> None:
        """this = A^T @ this, without forming A^T."""
        B = self._operand(A, 'A')
        if B.shape[0] != self.m:
            raise DimensionError(
                f"left_multiply_transpose: A is {B.shape[0]}x{B.shape[1]}, "
                f"this is {self.m}x{self.n}",
                expected=(self.m, B.shape[1]),
                actual=B.shape,
            )
        self._replace(B.T @ self._matrix())

    def right_multiply_transpose(self, A: Any) -> None:
        """this = this @ A^T, without forming A^T."""
        B = self._operand(A, 'A')
        if B.shape[1] != self.n:
            raise DimensionError(
                f"right_multiply_transpose: this is {self.m}x{self.n}, "
                f"A is {B.shape[0]}x{B.shape[1]}",
                expected=(B.shape[0], self.n),
                actual=B.shape,
            )
        self._replace(self._matrix() @ B.T)

    # === Decomposition and solve ===

    def _check_rhs(self, b: Any, name: str) -> NDArray[np.inexact[Any]]:
        check_square(self.shape, 'matrix')
        rhs = read_vector(b, name)
        if rhs.shape[0] != self.m:
            raise DimensionError(
                f"{name}: expected length {self.m}, got {rhs.shape[0]}",
                expected=(self.m,),
                actual=rhs.shape,
            )
        return rhs

    def _require(self, requested: DecompositionType, operation: str) -> None:
        current = self._decomposition_type
        if current not in (DecompositionType.CLEAN, requested):
            raise DecompositionStateError(
                f"{operation}: the matrix holds {current.value} factors "
                f"(needs {requested.value}); zero() or refill it first",
                current=current.value,
                requested=requested.value,
            )

    def _lu_decompose(self, partial_pivot: bool, allow_singular: bool = False) -> None:
        work = self._matrix().copy()
        pivots, n_swaps, singular = lu_decompose(
            work, partial_pivot=partial_pivot, allow_singular=allow_singular, matrix_name='matrix'
        )
        self._matrix()[...] = work
        self._decomposition_type = DecompositionType.LU
        self._pivots = pivots
        self._n_swaps = n_swaps
        self._lu_singular = singular

    def lu_solve(self, b: Any, x: Any, partial_pivot: bool = False) -> None:
        """
        Solve A x = b by LU decomposition.

        The matrix is left holding its LU factors. If it already holds LU
        factors (from an earlier lu_solve or det) they are reused.

        Args:
            b: Right-hand side (DenseVector, vector-like or 1-D array)
            x: Receives the solution; resized to n
            partial_pivot: Select the largest-magnitude pivot in each
                column. Without it, elimination fails on a zero pivot.

        Raises:
            DimensionError: If the matrix is not square or b has the wrong length
            SingularMatrixError: On a zero pivot
            DecompositionStateError: If the matrix holds Cholesky factors
        """
        rhs = self._check_rhs(b, 'b')
        self._require(DecompositionType.LU, 'lu_solve')
        if self._decomposition_type is DecompositionType.CLEAN:
            self._lu_decompose(partial_pivot)
        if self._lu_singular:
            raise SingularMatrixError(
                "matrix: LU factors are singular (det() found a zero pivot)",
                matrix_name='matrix',
                expected_rank=self.n,
            )
        write_vector(x, lu_back_substitute(self._matrix(), self._pivots, rhs), 'x')

    def det(self) -> Any:
        """
        Determinant via LU decomposition with partial pivoting.

        Not a pure query: a CLEAN matrix is decomposed in place and left
        holding its LU factors. A singular matrix gives 0.

        Raises:
            DimensionError: If the matrix is not square
            DecompositionStateError: If the matrix holds Cholesky factors
        """
        check_square(self.shape, 'matrix')
        self._require(DecompositionType.LU, 'det')
        if self._decomposition_type is DecompositionType.CLEAN:
            self._lu_decompose(partial_pivot=True, allow_singular=True)
        return lu_determinant(self._matrix(), self._n_swaps, self._lu_singular)

    def cholesky_solve(self, b: Any, x: Any) -> None:
        """
        Solve A x = b for symmetric positive-definite A via A = L L^T.

        About half the work of LU and needs no pivoting. b and x may use
        a different scalar type from the matrix: real coefficients with a
        complex right-hand side give a complex solution. For complex
        coefficients the factorization is Hermitian, A = L L^H.

        Raises:
            DimensionError: If the matrix is not square or b has the wrong length
            NotPositiveDefiniteError: If a diagonal pivot is not strictly positive
            DecompositionStateError: If the matrix holds LU factors
        """
        rhs = self._check_rhs(b, 'b')
        self._require(DecompositionType.CHOLESKY, 'cholesky_solve')
        if self._decomposition_type is DecompositionType.CLEAN:
            L = cholesky_decompose(self._matrix(), matrix_name='matrix')
            self._matrix()[...] = L
            self._decomposition_type = DecompositionType.CHOLESKY
        write_vector(x, cholesky_back_substitute(self._matrix(), rhs), 'x')

    def lu_factor(self, partial_pivot: bool = False, allow_singular: bool = False) -> LUFactors:
        """LU factors of the current entries; the matrix is not modified.

        With allow_singular=True a zero pivot is recorded in the result
        (det() gives 0, solve() raises) instead of raising here.
        """
        check_square(self.shape, 'matrix')
        self._require(DecompositionType.CLEAN, 'lu_factor')
        work = self._matrix().copy()
        pivots, n_swaps, singular = lu_decompose(
            work, partial_pivot=partial_pivot, allow_singular=allow_singular, matrix_name="matrix"
        )
        return LUFactors(lu=work, pivots=pivots, n_swaps=n_swaps, singular=singular)

    def cholesky_factor(self) -> CholeskyFactors:
        """Cholesky factor of the current entries; the matrix is not modified."""
        check_square(self.shape, 'matrix')
        self._require(DecompositionType.CLEAN, 'cholesky_factor')
        return CholeskyFactors(L=cholesky_decompose(self._matrix(), matrix_name='matrix'))

    # === Boundary conditions ===

    def condense(self, i: int, j: int, val: Any, rhs: Any) -> None:
        """
        Force degree of freedom i to take the value `val`, keeping symmetry.

        Moves column j times val into the right-hand side, zeroes column j
        and row i, and sets A[i, j] = 1, rhs[i] = val. Any later solve then
        yields x[i] == val.

        Args:
            i, j: Row and column of the constrained entry; must be equal
            val: Prescribed value
            rhs: Right-hand side, updated in place

        Raises:
            ValidationError: If i != j
            BoundsError: If i is out of range
            DimensionError: If rhs length differs from the row count
        """
        if i != j:
            raise ValidationError(f"condense: only diagonal entries can be condensed, got ({i}, {j})")
        check_index(i, self.m, 'i')
        check_index(j, self.n, 'j')
        size = vector_size(rhs, 'rhs')
        if size != self.m:
            raise DimensionError(
                f"rhs: expected length {self.m}, got {size}",
                expected=(self.m,),
                actual=(size,),
            )
        values = read_vector(rhs, 'rhs')
        check_scalar(val, values.dtype, 'val')
        if not np.can_cast(self.dtype, values.dtype, casting="same_kind"):
            raise ValidationError(
                f"rhs: {values.dtype} vector cannot absorb {self.dtype} matrix entries"
            )

        A = self._matrix()
        values -= A[:, j] * val
        A[:, j] = 0
        A[i, :] = 0
        A[i, j] = 1
        values[i] = val
        self._reset_state()
        update_vector(rhs, values, 'rhs')

    def __repr__(self) -> str:
        return (
            f"DenseMatrix(m={self.m}, n={self.n}, dtype={self.dtype}, "
            f"state={self._decomposition_type.value})"
        )
