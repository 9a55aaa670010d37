"""
Tests for shared compute utilities: timing, tolerances, precision.
"""

import numpy as np
import pytest

from pydense.core.compute.timing import Timer, timed
from pydense.core.compute.tolerances import (
    FP32,
    FP32_ILL_CONDITIONED,
    FP64,
    FP64_ILL_CONDITIONED,
    select_tolerance,
)
from pydense.core.compute.precision import (
    EPSILON_64,
    PIVOT_RTOL,
    condition_number,
    machine_epsilon,
    pivot_tolerance,
    promote_dtype,
)


# ═══════════════════════════════════════════════════════════════════════
# Timing
# ═══════════════════════════════════════════════════════════════════════


class TestTimer:

    def test_sections_reported(self):
        timer = Timer()
        timer.start()
        with timer.section("decompose"):
            pass
        with timer.section("substitute"):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {"total_seconds", "decompose", "substitute"}
        assert result["total_seconds"] >= 0.0

    def test_repeated_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section("residual"):
            pass
        first = timer._sections["residual"]
        with timer.section("residual"):
            pass
        timer.stop()
        assert timer.result()["residual"] >= first

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_timed_context(self):
        with timed() as timer:
            pass
        assert "total_seconds" in timer.result()


# ═══════════════════════════════════════════════════════════════════════
# Tolerances
# ═══════════════════════════════════════════════════════════════════════


class TestSelectTolerance:

    @pytest.mark.parametrize("dtype, ill, expected", [
        (np.float64, False, FP64),
        (np.complex128, False, FP64),
        (np.float64, True, FP64_ILL_CONDITIONED),
        (np.float32, False, FP32),
        (np.complex64, False, FP32),
        (np.float32, True, FP32_ILL_CONDITIONED),
    ])
    def test_tiers(self, dtype, ill, expected):
        assert select_tolerance(dtype, is_ill_conditioned=ill) is expected

    def test_single_looser_than_double(self):
        assert FP32.rtol > FP64.rtol


# ═══════════════════════════════════════════════════════════════════════
# Precision
# ═══════════════════════════════════════════════════════════════════════


class TestPrecision:

    def test_machine_epsilon(self):
        assert machine_epsilon(np.float64) == EPSILON_64
        assert machine_epsilon(np.complex128) == EPSILON_64

    def test_pivot_tolerance_scales(self):
        tol = pivot_tolerance(np.float64, 4, 10.0)
        assert tol == pytest.approx(PIVOT_RTOL * 4 * EPSILON_64 * 10.0)

    def test_pivot_tolerance_zero_matrix(self):
        assert pivot_tolerance(np.float64, 3, 0.0) == 0.0

    def test_promotion_real_complex(self):
        assert promote_dtype(np.float64, np.complex128) == np.complex128

    def test_promotion_single_complex(self):
        assert promote_dtype(np.float32, np.complex64) == np.complex64

    def test_promotion_integer_rhs(self):
        assert promote_dtype(np.float32, np.int8) == np.float32

    def test_condition_number_identity(self):
        assert condition_number(np.eye(4)) == pytest.approx(1.0)

    def test_condition_number_singular(self):
        assert condition_number(np.zeros((2, 2))) == np.inf

    def test_condition_number_diagonal(self):
        assert condition_number(np.diag([1.0, 100.0])) == pytest.approx(100.0)

    def test_condition_number_empty(self):
        assert condition_number(np.zeros((0, 0))) == 1.0
