"""
Tests for symmetry-preserving condensation of a prescribed value.
"""

import numpy as np
import pytest

from pydense.core.exceptions import BoundsError, DimensionError, ValidationError
from pydense.matrix import DenseMatrix, DenseVector, DecompositionType


def _bar_stiffness():
    """Three-node chain of unit springs: singular until one node is fixed."""
    return np.array([
        [1.0, -1.0, 0.0],
        [-1.0, 2.0, -1.0],
        [0.0, -1.0, 1.0],
    ])


class TestCondense:

    def test_procedure(self):
        A = DenseMatrix.from_array([[4.0, 1.0, 2.0], [1.0, 5.0, 3.0], [2.0, 3.0, 6.0]])
        rhs = DenseVector.from_array([1.0, 1.0, 1.0])
        A.condense(1, 1, 2.0, rhs)
        np.testing.assert_array_equal(
            A.to_array(), [[4.0, 0.0, 2.0], [0.0, 1.0, 0.0], [2.0, 0.0, 6.0]]
        )
        np.testing.assert_array_equal(rhs.to_array(), [-1.0, 2.0, -5.0])

    def test_solution_takes_prescribed_value(self, spd_matrix, rng):
        n = spd_matrix.shape[0]
        A = DenseMatrix.from_array(spd_matrix)
        rhs = DenseVector.from_array(rng.standard_normal(n))
        A.condense(2, 2, 0.75, rhs)
        x = DenseVector()
        A.lu_solve(rhs, x, partial_pivot=True)
        assert x[2] == pytest.approx(0.75, abs=1e-14)

    def test_symmetry_preserved(self, spd_matrix, rng):
        A = DenseMatrix.from_array(spd_matrix)
        rhs = DenseVector(spd_matrix.shape[0])
        A.condense(0, 0, 1.5, rhs)
        A.condense(4, 4, -2.0, rhs)
        K = A.to_array()
        np.testing.assert_array_equal(K, K.T)

    def test_condensed_system_still_spd(self, rng):
        """Fixing one node of a floating spring chain makes it solvable by Cholesky."""
        A = DenseMatrix.from_array(_bar_stiffness())
        rhs = DenseVector.from_array([0.0, 0.0, 1.0])
        A.condense(0, 0, 0.0, rhs)
        x = DenseVector()
        A.cholesky_solve(rhs, x)
        np.testing.assert_allclose(x.to_array(), [0.0, 1.0, 2.0])

    def test_remaining_unknowns_match_reduced_solve(self, spd_matrix, rng):
        n = spd_matrix.shape[0]
        f = rng.standard_normal(n)
        val = 0.3
        A = DenseMatrix.from_array(spd_matrix)
        rhs = f.copy()
        A.condense(1, 1, val, rhs)
        x = DenseVector()
        A.cholesky_solve(rhs, x)

        free = [k for k in range(n) if k != 1]
        reduced = np.linalg.solve(
            spd_matrix[np.ix_(free, free)], f[free] - spd_matrix[free, 1] * val
        )
        np.testing.assert_allclose(x.to_array()[free], reduced, rtol=1e-10)

    def test_resets_state(self):
        A = DenseMatrix.from_array([[2.0, 1.0], [1.0, 2.0]])
        A.det()
        A.condense(0, 0, 1.0, DenseVector(2))
        assert A.decomposition_type is DecompositionType.CLEAN

    def test_complex_value_on_complex_rhs(self):
        A = DenseMatrix.from_array([[2.0, 1.0], [1.0, 2.0]])
        rhs = DenseVector(2, dtype=np.complex128)
        A.condense(0, 0, 1j, rhs)
        np.testing.assert_array_equal(rhs.to_array(), [1j, -1j])


class TestCondenseErrors:

    def test_off_diagonal_rejected(self):
        with pytest.raises(ValidationError, match="diagonal"):
            DenseMatrix(3, 3).condense(0, 1, 1.0, DenseVector(3))

    def test_index_out_of_range(self):
        with pytest.raises(BoundsError):
            DenseMatrix(3, 3).condense(3, 3, 1.0, DenseVector(3))

    def test_rhs_length(self):
        with pytest.raises(DimensionError):
            DenseMatrix(3, 3).condense(0, 0, 1.0, DenseVector(2))

    def test_complex_value_on_real_rhs(self):
        rhs = DenseVector(2)
        with pytest.raises(ValidationError):
            DenseMatrix(2, 2).condense(0, 0, 1j, rhs)
        np.testing.assert_array_equal(rhs.to_array(), [0.0, 0.0])

    def test_complex_matrix_real_rhs(self):
        with pytest.raises(ValidationError, match="cannot absorb"):
            DenseMatrix(2, 2, dtype=np.complex128).condense(0, 0, 1.0, DenseVector(2))
