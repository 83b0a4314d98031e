"""
Tests for the Gamma-family special functions.

Reference values come from scipy.special.
"""

import cmath
import math

import numpy as np
import pytest
from scipy import special

from errors import ConvergenceError, DomainError
from special_functions import (
    beta,
    gamma,
    lanczos_sum,
    log_beta,
    log_gamma,
    log_gamma_stirling,
    psi,
    reduce_angle,
    sin_pi,
)


def _angle_difference(a, b):
    d = math.fmod(a - b, 2.0 * math.pi)
    if d > math.pi:
        d -= 2.0 * math.pi
    elif d < -math.pi:
        d += 2.0 * math.pi
    return d


# =============================================================================
# Gamma
# =============================================================================

class TestGamma:

    def test_integers_are_exact_factorials(self):
        assert gamma(5) == 24.0
        assert gamma(1.0) == 1.0
        assert gamma(11) == 3628800.0
        assert gamma(171) == float(math.factorial(170))

    def test_half(self):
        assert gamma(0.5) == pytest.approx(math.sqrt(math.pi), rel=1e-14)

    @pytest.mark.parametrize("x", [1e-8, 0.1, 0.75, 1.5, 3.7, 10.2, 30.5, 100.3, 170.5])
    def test_positive_against_scipy(self, x):
        assert gamma(x) == pytest.approx(special.gamma(x), rel=1e-12)

    @pytest.mark.parametrize("x", [-0.5, -1.5, -2.3, -10.7])
    def test_reflection_against_scipy(self, x):
        assert gamma(x) == pytest.approx(special.gamma(x), rel=1e-12)

    @pytest.mark.parametrize("x", [0.0, -1.0, -3.0, -50.0])
    def test_poles_raise(self, x):
        with pytest.raises(DomainError):
            gamma(x)

    def test_overflow(self):
        assert gamma(172.0) == math.inf
        assert gamma(math.inf) == math.inf

    def test_nan_and_negative_infinity_raise(self):
        with pytest.raises(DomainError):
            gamma(math.nan)
        with pytest.raises(DomainError):
            gamma(-math.inf)

    def test_complex(self):
        z = complex(2.5, 1.5)
        assert abs(gamma(z) - special.gamma(z)) <= 1e-13 * abs(special.gamma(z))

    def test_lanczos_sum_recurrence(self):
        # Γ(x+1) = x Γ(x) reproduced by the Lanczos form away from the integers
        for x in (0.3, 2.7, 9.1):
            assert gamma(x + 1.0) == pytest.approx(x * gamma(x), rel=1e-13)

    def test_lanczos_sum_real_and_complex_agree(self):
        assert lanczos_sum(complex(3.5, 0.0)).real == pytest.approx(lanczos_sum(3.5), rel=1e-15)


# =============================================================================
# Log Gamma
# =============================================================================

class TestLogGamma:

    @pytest.mark.parametrize("x", [0.01, 0.5, 1.0, 2.0, 3.3, 15.9, 16.0, 20.0, 100.0, 1.0e4, 1.0e8])
    def test_real_against_scipy(self, x):
        assert log_gamma(x) == pytest.approx(special.gammaln(x), rel=1e-13, abs=1e-14)

    @pytest.mark.parametrize("x", [-0.5, -2.5, -7.3])
    def test_negative_real_is_log_abs(self, x):
        assert log_gamma(x) == pytest.approx(special.gammaln(x), rel=1e-12)

    def test_real_pole_raises(self):
        with pytest.raises(DomainError):
            log_gamma(-2.0)

    def test_complex_pole_raises(self):
        with pytest.raises(DomainError):
            log_gamma(complex(-1.0, 0.0))

    def test_infinity(self):
        assert log_gamma(math.inf) == math.inf

    @pytest.mark.parametrize("z", [1 + 1j, 0.5 + 3j, 5 - 2j, 2 + 14j, 1 + 30j, 40 + 0.5j, 3 + 100j])
    def test_complex_against_scipy(self, z):
        ours = log_gamma(z)
        ref = special.loggamma(z)
        assert ours.real == pytest.approx(ref.real, rel=1e-12, abs=1e-13)
        assert _angle_difference(ours.imag, ref.imag) == pytest.approx(0.0, abs=1e-11)

    def test_complex_reflection(self):
        z = complex(-2.5, 0.7)
        ours = log_gamma(z)
        ref = special.loggamma(z)
        assert ours.real == pytest.approx(ref.real, rel=1e-12)
        assert _angle_difference(ours.imag, ref.imag) == pytest.approx(0.0, abs=1e-11)

    def test_stirling_large_argument(self):
        assert log_gamma_stirling(50.0) == pytest.approx(special.gammaln(50.0), rel=1e-14)
        z = complex(8.0, 10.0)
        assert abs(log_gamma_stirling(z) - log_gamma(z)) < 1e-11

    def test_stirling_small_argument_does_not_converge(self):
        with pytest.raises(ConvergenceError):
            log_gamma_stirling(2.0)


# =============================================================================
# Digamma
# =============================================================================

class TestPsi:

    @pytest.mark.parametrize("x", [0.3, 1.0, 2.5, 10.0, 15.9, 16.1, 50.0, 1.0e3])
    def test_real_against_scipy(self, x):
        assert psi(x) == pytest.approx(special.psi(x), rel=1e-12)

    @pytest.mark.parametrize("x", [-0.5, -2.7, -10.2])
    def test_reflection_against_scipy(self, x):
        assert psi(x) == pytest.approx(special.psi(x), rel=1e-11)

    def test_euler_gamma(self):
        assert psi(1.0) == pytest.approx(-0.5772156649015329, rel=1e-13)

    @pytest.mark.parametrize("x", [0.0, -1.0, -4.0])
    def test_poles_raise(self, x):
        with pytest.raises(DomainError):
            psi(x)

    def test_complex_pole_raises(self):
        with pytest.raises(DomainError):
            psi(complex(-3.0, 0.0))

    @pytest.mark.parametrize("z", [1 + 2j, 3 + 20j, 0.5 - 1j, -2.5 + 1j, 1 + 0.1j])
    def test_complex_against_scipy(self, z):
        ref = special.psi(z)
        assert abs(psi(z) - ref) <= 1e-12 * max(1.0, abs(ref))


# =============================================================================
# Beta
# =============================================================================

class TestBeta:

    def test_unit(self):
        assert beta(1.0, 1.0) == pytest.approx(1.0, rel=1e-14)

    def test_half_half_is_pi(self):
        assert beta(0.5, 0.5) == pytest.approx(math.pi, rel=1e-14)

    @pytest.mark.parametrize("x, y", [(2.5, 3.5), (0.1, 7.0), (10.0, 0.3), (100.0, 200.0)])
    def test_against_scipy(self, x, y):
        assert beta(x, y) == pytest.approx(special.beta(x, y), rel=1e-12)

    @pytest.mark.parametrize("x, y", [(2.5, 3.5), (1000.0, 2000.0), (0.5, 50.0)])
    def test_log_against_scipy(self, x, y):
        assert log_beta(x, y) == pytest.approx(special.betaln(x, y), rel=1e-12)

    def test_no_intermediate_overflow(self):
        # Γ(300) overflows, B(300, 300) does not underflow
        assert math.isfinite(log_beta(300.0, 300.0))
        assert beta(300.0, 300.0) > 0.0

    @pytest.mark.parametrize("x, y", [(0.0, 1.0), (1.0, -2.0), (-0.5, -0.5)])
    def test_domain(self, x, y):
        with pytest.raises(DomainError):
            beta(x, y)
        with pytest.raises(DomainError):
            log_beta(x, y)


# =============================================================================
# Helpers
# =============================================================================

class TestHelpers:

    def test_sin_pi(self):
        assert sin_pi(0.5) == pytest.approx(1.0, rel=1e-15)
        assert sin_pi(1.0e6 + 0.5) == pytest.approx(1.0, rel=1e-15)
        assert abs(sin_pi(3.0)) < 1e-15

    def test_reduce_angle_keeps_phase(self):
        x = 12345.678
        theta = reduce_angle(x)
        assert abs(theta) < 2.0 * math.pi
        assert math.cos(theta) == pytest.approx(math.cos(x), abs=1e-11)

    def test_reduce_angle_cancels_large_terms(self):
        assert reduce_angle(1.0e6, -1.0e6) == 0.0
        assert cmath.exp(1j * reduce_angle(1.0, 2.0, 3.0)) == pytest.approx(np.exp(6j), abs=1e-14)
