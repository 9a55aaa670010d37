"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 6x6 symmetric positive-definite matrix."""
    n = 6
    M = rng.standard_normal((n, n))
    S = M @ M.T
    return (S + S.T) / 2 + n * np.eye(n)


@pytest.fixture
def general_matrix(rng):
    """Nonsymmetric, diagonally dominant 5x5 matrix."""
    n = 5
    A = rng.standard_normal((n, n))
    return A + n * np.eye(n)


@pytest.fixture
def bounds_check(monkeypatch):
    """Force element bounds checking on, whatever the interpreter mode."""
    from pydense.core import build
    monkeypatch.setattr(build, "BOUNDS_CHECK", True)
