"""
Tests for the Result[P] envelope.

Validates:
    - Generic payload and field access
    - Frozen immutability
    - Default factories (warnings, provenance)
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

import pydense
from pydense.core.result import Result, _default_provenance


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**kwargs):
    defaults = dict(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu_lu")
    defaults.update(kwargs)
    return Result(**defaults)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _result(
            params=FakeParams(value=42.0),
            info={"method": "lu", "partial_pivot": True},
            timing={"total_seconds": 0.01, "decompose": 0.006},
        )
        assert result.params.value == 42.0
        assert result.info["method"] == "lu"
        assert result.timing["decompose"] == 0.006
        assert result.backend_name == "cpu_lu"


class TestDefaults:

    def test_warnings_default_empty(self):
        assert _result().warnings == ()

    def test_provenance_auto_generated(self):
        provenance = _result().provenance
        assert provenance["pydense_version"] == pydense.__version__
        assert "numpy_version" in provenance
        assert "scipy_version" in provenance

    def test_provenance_explicit_override(self):
        result = _result(provenance={"custom": "metadata"})
        assert result.provenance == {"custom": "metadata"}

    def test_default_provenance_is_fresh_dict(self):
        assert _default_provenance() is not _default_provenance()


class TestHasWarning:

    def test_substring_match(self):
        result = _result(warnings=("Matrix is ill-conditioned (condition number 1e+12)",))
        assert result.has_warning("ill-conditioned")
        assert not result.has_warning("residual")


class TestImmutability:

    def test_cannot_set_params(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=2.0)

    def test_cannot_set_warnings(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new warning",)
