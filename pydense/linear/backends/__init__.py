"""Solve backends for linear systems."""

from pydense.linear.backends.cpu import CPULUBackend, CPUCholeskyBackend

__all__ = ["CPULUBackend", "CPUCholeskyBackend"]
