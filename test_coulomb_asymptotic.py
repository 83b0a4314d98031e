"""
Tests for the large-ρ asymptotic expansion and the Coulomb phase shift.
"""

import math

import mpmath
import pytest
from scipy import special

from coulomb_asymptotic import coulomb_asymptotic, coulomb_phase_shift
from errors import ConvergenceError, DomainError


def _angle_difference(a, b):
    d = math.fmod(a - b, 2.0 * math.pi)
    if d > math.pi:
        d -= 2.0 * math.pi
    elif d < -math.pi:
        d += 2.0 * math.pi
    return d


class TestPhaseShift:

    def test_free_particle(self):
        assert coulomb_phase_shift(0, 0.0) == 0.0
        assert coulomb_phase_shift(4, 0.0) == 0.0

    @pytest.mark.parametrize("L, eta", [(0, 1.0), (2, -0.5), (5, 3.0), (0, 40.0)])
    def test_against_mpmath(self, L, eta):
        with mpmath.workdps(30):
            ref = float(mpmath.im(mpmath.loggamma(mpmath.mpc(L + 1, eta))))
        assert _angle_difference(coulomb_phase_shift(L, eta), ref) == pytest.approx(0.0, abs=1e-12)

    def test_odd_in_eta(self):
        assert coulomb_phase_shift(3, -2.0) == pytest.approx(-coulomb_phase_shift(3, 2.0), abs=1e-14)


class TestAsymptotic:

    @pytest.mark.parametrize("rho", [40.0, 123.4, 1.0e4])
    def test_free_particle(self, rho):
        pair = coulomb_asymptotic(0, 0.0, rho)
        assert pair.f == pytest.approx(math.sin(rho), abs=1e-12)
        assert pair.f_prime == pytest.approx(math.cos(rho), abs=1e-12)
        assert pair.g == pytest.approx(math.cos(rho), abs=1e-12)
        assert pair.g_prime == pytest.approx(-math.sin(rho), abs=1e-12)

    def test_riccati_bessel(self):
        rho = 80.0
        pair = coulomb_asymptotic(3, 0.0, rho)
        assert pair.f == pytest.approx(rho * special.spherical_jn(3, rho), abs=1e-12)
        assert pair.g == pytest.approx(-rho * special.spherical_yn(3, rho), abs=1e-12)

    @pytest.mark.parametrize("L, eta, rho", [(1, 0.5, 60.0), (0, 2.0, 100.0), (4, -3.0, 70.0)])
    def test_against_mpmath(self, check_pair, L, eta, rho):
        check_pair(coulomb_asymptotic(L, eta, rho), L, eta, rho, 1e-11)

    def test_wronskian(self):
        assert coulomb_asymptotic(2, 3.0, 100.0).wronskian == pytest.approx(1.0, abs=1e-13)

    def test_diverges_inside_turning_point(self):
        with pytest.raises(ConvergenceError) as excinfo:
            coulomb_asymptotic(0, 10.0, 5.0)
        assert excinfo.value.method == "asymptotic"

    def test_rejects_origin(self):
        with pytest.raises(DomainError):
            coulomb_asymptotic(0, 1.0, 0.0)
