"""
Tests for DenseMatrix elementwise algebra, norms and in-place products.
"""

import numpy as np
import pytest

from pydense.core.exceptions import DimensionError, ValidationError
from pydense.matrix import DenseMatrix, DecompositionType


class _Diagonal:
    """Minimal MatrixBase implementation: a diagonal matrix."""

    def __init__(self, diag):
        self._diag = list(diag)

    @property
    def m(self):
        return len(self._diag)

    @property
    def n(self):
        return len(self._diag)

    def el(self, i, j):
        return self._diag[i] if i == j else 0.0


# ═══════════════════════════════════════════════════════════════════════
# scale / add
# ═══════════════════════════════════════════════════════════════════════


class TestScale:

    def test_scale(self):
        A = DenseMatrix.from_array([[1.0, -2.0], [3.0, 4.0]])
        A.scale(2.0)
        np.testing.assert_array_equal(A.to_array(), [[2.0, -4.0], [6.0, 8.0]])

    def test_scale_roundtrip(self, rng):
        original = rng.standard_normal((4, 3))
        A = DenseMatrix.from_array(original)
        A.scale(7.3)
        A.scale(1 / 7.3)
        np.testing.assert_allclose(A.to_array(), original, rtol=1e-14)

    def test_scale_resets_state(self):
        A = DenseMatrix.from_array([[2.0, 1.0], [1.0, 2.0]])
        A.det()
        A.scale(1.0)
        assert A.decomposition_type is DecompositionType.CLEAN

    def test_imul(self):
        A = DenseMatrix.from_array([[1.0, 2.0]])
        A *= 3
        np.testing.assert_array_equal(A.to_array(), [[3.0, 6.0]])

    def test_complex_factor_on_real_rejected(self):
        A = DenseMatrix(2, 2)
        with pytest.raises(ValidationError, match="complex value"):
            A.scale(1j)

    def test_complex_matrix_complex_factor(self):
        A = DenseMatrix.from_array([[1.0 + 0j, 2.0]])
        A.scale(1j)
        np.testing.assert_array_equal(A.to_array(), [[1j, 2j]])


class TestAdd:

    def test_axpy(self):
        A = DenseMatrix.from_array([[1.0, 2.0], [3.0, 4.0]])
        B = DenseMatrix.from_array([[1.0, 1.0], [1.0, 1.0]])
        A.add(-2.0, B)
        np.testing.assert_array_equal(A.to_array(), [[-1.0, 0.0], [1.0, 2.0]])

    def test_iadd(self):
        A = DenseMatrix.from_array([[1.0, 2.0]])
        A += DenseMatrix.from_array([[10.0, 20.0]])
        np.testing.assert_array_equal(A.to_array(), [[11.0, 22.0]])

    def test_add_array_like(self):
        A = DenseMatrix(2, 2)
        A.add(1, [[1, 2], [3, 4]])
        np.testing.assert_array_equal(A.to_array(), [[1.0, 2.0], [3.0, 4.0]])

    def test_add_matrix_base(self):
        A = DenseMatrix.from_array([[1.0, 1.0], [1.0, 1.0]])
        A += _Diagonal([2.0, 3.0])
        np.testing.assert_array_equal(A.to_array(), [[3.0, 1.0], [1.0, 4.0]])

    def test_shape_mismatch(self):
        A = DenseMatrix(2, 2)
        with pytest.raises(DimensionError):
            A.add(1.0, DenseMatrix(2, 3))

    def test_complex_operand_on_real_rejected(self):
        A = DenseMatrix(1, 1)
        with pytest.raises(ValidationError):
            A += np.array([[1j]])


# ═══════════════════════════════════════════════════════════════════════
# min / max / norms
# ═══════════════════════════════════════════════════════════════════════


class TestReductions:

    def test_min_max(self):
        A = DenseMatrix.from_array([[1.0, -5.0], [7.0, 0.5]])
        assert A.min() == -5.0
        assert A.max() == 7.0

    def test_min_max_complex_by_real_part(self):
        A = DenseMatrix.from_array([[1.0 + 100j, -2.0 - 1j], [3.0 + 0j, 0.0 + 50j]])
        assert A.min() == -2.0
        assert A.max() == 3.0

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            DenseMatrix().min()
        with pytest.raises(ValidationError, match="empty"):
            DenseMatrix(0, 3).l1_norm()

    def test_l1_norm_is_max_column_sum(self):
        A = DenseMatrix.from_array([[1.0, -2.0], [-3.0, 4.0]])
        assert A.l1_norm() == 6.0

    def test_linfty_norm_is_max_row_sum(self):
        A = DenseMatrix.from_array([[1.0, -2.0], [-3.0, 4.0]])
        assert A.linfty_norm() == 7.0

    def test_norms_match_numpy(self, rng):
        arr = rng.standard_normal((4, 6))
        A = DenseMatrix.from_array(arr)
        assert A.l1_norm() == pytest.approx(np.linalg.norm(arr, 1))
        assert A.linfty_norm() == pytest.approx(np.linalg.norm(arr, np.inf))

    def test_norm_duality_under_transpose(self, rng):
        arr = rng.standard_normal((3, 5)) + 1j * rng.standard_normal((3, 5))
        A = DenseMatrix.from_array(arr)
        At = DenseMatrix.from_array(arr.T)
        assert A.l1_norm() == pytest.approx(At.linfty_norm())
        assert A.linfty_norm() == pytest.approx(At.l1_norm())


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════


class TestProducts:

    def test_left_multiply(self, rng):
        a = rng.standard_normal((3, 2))
        m = rng.standard_normal((4, 3))
        A = DenseMatrix.from_array(a)
        A.left_multiply(DenseMatrix.from_array(m))
        assert A.shape == (4, 2)
        np.testing.assert_allclose(A.to_array(), m @ a)

    def test_right_multiply(self, rng):
        a = rng.standard_normal((3, 2))
        m = rng.standard_normal((2, 5))
        A = DenseMatrix.from_array(a)
        A.right_multiply(m)
        assert A.shape == (3, 5)
        np.testing.assert_allclose(A.to_array(), a @ m)

    def test_left_multiply_transpose(self, rng):
        a = rng.standard_normal((3, 2))
        b = rng.standard_normal((3, 4))
        A = DenseMatrix.from_array(a)
        A.left_multiply_transpose(b)
        np.testing.assert_allclose(A.to_array(), b.T @ a)

    def test_right_multiply_transpose(self, rng):
        a = rng.standard_normal((3, 2))
        b = rng.standard_normal((5, 2))
        A = DenseMatrix.from_array(a)
        A.right_multiply_transpose(DenseMatrix.from_array(b))
        np.testing.assert_allclose(A.to_array(), a @ b.T)

    def test_element_stiffness_triple_product(self):
        """B^T D B for a two-node bar element."""
        B = np.array([[-1.0, 1.0]])
        K = DenseMatrix.from_array([[5.0]])
        K.right_multiply(B)
        K.left_multiply_transpose(B)
        np.testing.assert_array_equal(K.to_array(), [[5.0, -5.0], [-5.0, 5.0]])

    @pytest.mark.parametrize("op, shape", [
        ("left_multiply", (2, 2)),
        ("right_multiply", (2, 2)),
        ("left_multiply_transpose", (2, 3)),
        ("right_multiply_transpose", (2, 2)),
    ])
    def test_inner_dimension_mismatch(self, op, shape):
        A = DenseMatrix(3, 3)
        with pytest.raises(DimensionError):
            getattr(A, op)(np.zeros(shape))

    def test_product_resets_state(self):
        A = DenseMatrix.from_array([[2.0, 1.0], [1.0, 2.0]])
        A.det()
        A.right_multiply(np.eye(2))
        assert A.decomposition_type is DecompositionType.CLEAN
