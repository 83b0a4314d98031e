# errors.py
"""
Exception Types for the Coulomb Engine
======================================

Domain errors (bad arguments) fail fast and derive from ValueError.
Convergence failures derive from RuntimeError; the dispatcher in
coulomb.py catches them and moves on to the next method, and only raises
PrecisionLossError once every method has failed.
"""

from __future__ import annotations

from typing import Optional, Sequence

from constants import MAX_ACCURACY


class DomainError(ValueError):
    """Argument outside the domain of the function (L < 0, ρ < 0, pole, ...)."""


class AccuracyError(DomainError):
    """Accuracy target outside [MAX_ACCURACY, 1)."""


class ConvergenceError(RuntimeError):
    """An iterative method exhausted its budget without converging."""

    def __init__(self, message: str, method: Optional[str] = None,
                 iterations: Optional[int] = None):
        super().__init__(message)
        self.method = method
        self.iterations = iterations


class PrecisionLossError(ConvergenceError):
    """Every method in a fallback chain failed to converge."""

    def __init__(self, message: str, attempted: Sequence[str] = ()):
        super().__init__(message, method="chain", iterations=len(attempted))
        self.attempted = tuple(attempted)


def check_accuracy(value: float) -> float:
    """
    Validate an accuracy target and return it as a float.

    Raises
    ------
    AccuracyError
        If value < 2^-49 or value >= 1 (or is not a number).
    """
    value = float(value)
    if not (MAX_ACCURACY <= value < 1.0):
        raise AccuracyError(
            f"Invalid accuracy value {value!r}: must lie in [{MAX_ACCURACY!r}, 1)"
        )
    return value
