"""
Tests for the extrapolated Stoermer stepper.
"""

import math

import numpy as np
import pytest

from errors import AccuracyError, ConvergenceError
from ode_stepper import StoermerExtrapolationStepper


def _harmonic(x, y):
    return -y


class TestStoermerStepper:

    def test_forward_sine(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 0.25)
        stepper.integrate(10.0)
        assert stepper.x == 10.0
        assert stepper.y == pytest.approx(math.sin(10.0), abs=1e-10)
        assert stepper.y_prime == pytest.approx(math.cos(10.0), abs=1e-10)

    def test_backward(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 10.0, math.sin(10.0), math.cos(10.0), 0.25)
        stepper.integrate(0.0)
        assert stepper.x == 0.0
        assert stepper.y == pytest.approx(0.0, abs=1e-10)
        assert stepper.y_prime == pytest.approx(1.0, abs=1e-10)

    def test_lands_exactly(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 1.0, 0.0, 0.3)
        for target in (0.1, 1.0 / 3.0, 2.718281828459045):
            stepper.integrate(target)
            assert stepper.x == target
        assert stepper.y == pytest.approx(math.cos(2.718281828459045), abs=1e-11)

    def test_vector_state(self):
        stepper = StoermerExtrapolationStepper(
            _harmonic, 0.0, np.array([0.0, 1.0]), np.array([1.0, 0.0]), 0.25)
        stepper.integrate(6.0)
        np.testing.assert_allclose(stepper.y, [math.sin(6.0), math.cos(6.0)], atol=1e-10)
        np.testing.assert_allclose(stepper.y_prime, [math.cos(6.0), -math.sin(6.0)], atol=1e-10)

    def test_growing_solution(self):
        # y'' = y, y = e^x
        stepper = StoermerExtrapolationStepper(lambda x, y: y, 0.0, 1.0, 1.0, 0.5)
        stepper.integrate(5.0)
        assert stepper.y == pytest.approx(math.exp(5.0), rel=1e-10)

    def test_counts_evaluations(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 0.25)
        stepper.step()
        first = stepper.evaluation_count
        assert first > 0
        assert stepper.step_count == 1
        stepper.step()
        assert stepper.evaluation_count > first
        assert stepper.step_count == 2

    def test_step_size_adapts(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 1.0e-3)
        stepper.step()
        assert stepper.delta_x > 1.0e-3

    def test_evaluation_budget(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 0.25, max_evaluations=10)
        with pytest.raises(ConvergenceError):
            stepper.integrate(10.0)

    @pytest.mark.parametrize("accuracy", [0.0, 1.0e-17, 1.0, 2.0])
    def test_rejects_accuracy(self, accuracy):
        with pytest.raises(AccuracyError):
            StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 0.25, accuracy=accuracy)

    def test_accuracy_can_be_changed(self):
        stepper = StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, 0.25)
        stepper.accuracy = 1.0e-8
        assert stepper.accuracy == 1.0e-8
        with pytest.raises(AccuracyError):
            stepper.accuracy = 1.5

    @pytest.mark.parametrize("delta_x", [0.0, math.inf, math.nan])
    def test_rejects_step(self, delta_x):
        with pytest.raises(ValueError):
            StoermerExtrapolationStepper(_harmonic, 0.0, 0.0, 1.0, delta_x)
