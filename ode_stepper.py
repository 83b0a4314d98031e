# ode_stepper.py
"""
Extrapolated Stoermer Stepper for y'' = f(x, y)
================================================

Bulirsch-Stoer style integrator specialised to second-order equations
without a first-derivative term, which is exactly the form of the radial
Coulomb equation

    u''(ρ) = (L(L+1)/ρ² + 2η/ρ - 1) u(ρ).

Each step of size ΔX is attempted with n = 2, 4, ..., 16 Stoermer
mini-steps of size h = ΔX/n:

    Δ_0   = h (y'_0 + h f_0 / 2)
    y_1   = y_0 + Δ_0
    Δ_i   = Δ_{i-1} + h² f(x_i, y_i),   y_{i+1} = y_i + Δ_i
    y'_n  = Δ_{n-1}/h + h f(x_n, y_n)/2

The error of the Stoermer rule is even in h, so the trial results are
extrapolated to h → 0 with Aitken-Neville in the variable h². A step is
accepted when the last two diagonal entries of the tableau agree to the
requested accuracy for both y and y'.

Step Control
------------
- converged within the first four trials: ΔX grows by 1.6
- needed seven or more trials: ΔX shrinks by 0.7
- no convergence after all trials: ΔX is quartered and the step retried

Usage
-----
    stepper = StoermerExtrapolationStepper(lambda x, y: -y, 0.0, 0.0, 1.0, 0.25)
    stepper.integrate(10.0)
    stepper.y, stepper.y_prime       # sin(10), cos(10)
"""

from __future__ import annotations
import math
from typing import Callable, Optional

import numpy as np

from constants import (
    INTEGRATOR_ACCURACY,
    STEPPER_MAX_EVALUATIONS,
    STEPPER_TRIAL_COUNTS,
    TINY,
)
from errors import ConvergenceError, check_accuracy
from logging_config import get_logger

logger = get_logger(__name__)

_GROW_FACTOR = 1.6
_SHRINK_FACTOR = 0.7
_RETRY_FACTOR = 0.25
_GROW_COLUMN = 3
_SHRINK_COLUMN = 6


class StoermerExtrapolationStepper:
    """
    Adaptive extrapolation integrator for y'' = rhs(x, y).

    Parameters
    ----------
    rhs : callable
        rhs(x, y) returning y''. y may be a float or a numpy array.
    x : float
        Starting abscissa.
    y, y_prime : float or np.ndarray
        Initial value and first derivative.
    delta_x : float
        Initial step size (the sign is adjusted by integrate()).
    accuracy : float
        Relative accuracy per step, in [2^-49, 1).

    Attributes
    ----------
    evaluation_count : int
        Number of rhs calls so far.
    step_count : int
        Number of accepted steps.
    max_evaluations : int
        rhs call budget; exceeding it raises ConvergenceError.
    """

    def __init__(
        self,
        rhs: Callable,
        x: float,
        y,
        y_prime,
        delta_x: float,
        accuracy: float = INTEGRATOR_ACCURACY,
        max_evaluations: int = STEPPER_MAX_EVALUATIONS,
    ):
        if not delta_x or not math.isfinite(delta_x):
            raise ValueError(f"delta_x must be finite and non-zero, got {delta_x}")
        self.rhs = rhs
        self.x = float(x)
        self.y = y
        self.y_prime = y_prime
        self.delta_x = float(delta_x)
        self.accuracy = accuracy
        self.max_evaluations = max_evaluations
        self.evaluation_count = 0
        self.step_count = 0

    @property
    def accuracy(self) -> float:
        return self._accuracy

    @accuracy.setter
    def accuracy(self, value: float) -> None:
        self._accuracy = check_accuracy(value)

    def _evaluate(self, x: float, y):
        self.evaluation_count += 1
        if self.evaluation_count > self.max_evaluations:
            raise ConvergenceError(
                f"ODE stepper exceeded {self.max_evaluations} evaluations at x={self.x}",
                method="stoermer", iterations=self.evaluation_count,
            )
        return self.rhs(x, y)

    def _trial_step(self, f0, dx: float, n: int):
        """n Stoermer mini-steps across dx; returns (y, y') at x + dx."""
        h = dx / n
        delta = h * (self.y_prime + 0.5 * h * f0)
        y = self.y + delta
        for i in range(1, n):
            delta = delta + h * h * self._evaluate(self.x + i * h, y)
            y = y + delta
        y_prime = delta / h + 0.5 * h * self._evaluate(self.x + dx, y)
        return y, y_prime

    def _extrapolate(self, f0, dx: float):
        """
        Run the trial sequence for one step.

        Returns
        -------
        (y, y', column) on convergence, None if all trials were used.
        """
        rows_y = []
        rows_yp = []

        for k, n in enumerate(STEPPER_TRIAL_COUNTS):
            y, y_prime = self._trial_step(f0, dx, n)
            row_y = [y]
            row_yp = [y_prime]
            for j in range(1, k + 1):
                ratio = (n / STEPPER_TRIAL_COUNTS[k - j]) ** 2 - 1.0
                row_y.append(row_y[j - 1] + (row_y[j - 1] - rows_y[k - 1][j - 1]) / ratio)
                row_yp.append(row_yp[j - 1] + (row_yp[j - 1] - rows_yp[k - 1][j - 1]) / ratio)
            rows_y.append(row_y)
            rows_yp.append(row_yp)

            if k == 0:
                continue

            y_best, yp_best = row_y[k], row_yp[k]
            scale_y = np.abs(y_best) + np.abs(dx * yp_best) + TINY
            scale_yp = np.abs(yp_best) + np.abs(y_best) / abs(dx) + TINY
            error_y = np.max(np.abs(y_best - rows_y[k - 1][k - 1]) / scale_y)
            error_yp = np.max(np.abs(yp_best - rows_yp[k - 1][k - 1]) / scale_yp)
            if error_y <= self._accuracy and error_yp <= self._accuracy:
                return y_best, yp_best, k

        return None

    def step(self, x_end: Optional[float] = None) -> None:
        """
        Take one accepted step, adapting delta_x.

        If x_end is given and the step taken covers exactly the remaining
        distance, x is set to x_end without rounding.

        Raises
        ------
        ConvergenceError
            If the step size collapses or the evaluation budget runs out.
        """
        f0 = self._evaluate(self.x, self.y)
        while True:
            dx = self.delta_x
            if self.x + dx == self.x:
                raise ConvergenceError(
                    f"ODE step size underflow at x={self.x}",
                    method="stoermer", iterations=self.step_count,
                )

            result = self._extrapolate(f0, dx)
            if result is None:
                self.delta_x = dx * _RETRY_FACTOR
                continue

            y, y_prime, column = result
            if x_end is not None and dx == x_end - self.x:
                self.x = x_end
            else:
                self.x += dx
            self.y = y
            self.y_prime = y_prime
            self.step_count += 1

            if column <= _GROW_COLUMN:
                self.delta_x = dx * _GROW_FACTOR
            elif column >= _SHRINK_COLUMN:
                self.delta_x = dx * _SHRINK_FACTOR
            return

    def integrate(self, x1: float) -> None:
        """
        Advance (forward or backward) until x == x1 exactly.

        Raises
        ------
        ConvergenceError
            Propagated from step().
        """
        x1 = float(x1)
        direction = 1.0 if x1 > self.x else -1.0
        self.delta_x = math.copysign(self.delta_x, direction)
        start_evaluations = self.evaluation_count

        while self.x != x1:
            remaining = x1 - self.x
            if abs(self.delta_x) >= abs(remaining):
                self.delta_x = remaining
                self.step(x_end=x1)
            else:
                self.step()

        logger.debug("Integrated to x=%g in %d evaluations (total steps %d)",
                     x1, self.evaluation_count - start_evaluations, self.step_count)
