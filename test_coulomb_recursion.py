"""
Tests for the upward recursion in L.
"""

import math

import pytest
from scipy import special

from coulomb_fractions import coulomb_steed
from coulomb_recursion import coulomb_recurse_pair, coulomb_recurse_upward
from errors import DomainError
from solution_pair import SolutionPair


class TestRecurseUpward:

    def test_free_particle_regular(self):
        rho = 10.0
        f, f_prime = coulomb_recurse_upward(0, 3, 0.0, rho, math.sin(rho), math.cos(rho))
        j = special.spherical_jn(3, rho)
        jp = special.spherical_jn(3, rho, derivative=True)
        assert f == pytest.approx(rho * j, abs=1e-13)
        assert f_prime == pytest.approx(j + rho * jp, abs=1e-13)

    def test_free_particle_irregular(self):
        rho = 10.0
        g, g_prime = coulomb_recurse_upward(0, 3, 0.0, rho, math.cos(rho), -math.sin(rho))
        y = special.spherical_yn(3, rho)
        yp = special.spherical_yn(3, rho, derivative=True)
        assert g == pytest.approx(-rho * y, abs=1e-13)
        assert g_prime == pytest.approx(-(y + rho * yp), abs=1e-13)

    def test_against_mpmath(self, mp_coulomb):
        eta, rho = 2.0, 15.0
        F0, Fp0, G0, Gp0 = mp_coulomb(0, eta, rho)
        F4, Fp4, G4, Gp4 = mp_coulomb(4, eta, rho)
        f, f_prime = coulomb_recurse_upward(0, 4, eta, rho, F0, Fp0)
        g, g_prime = coulomb_recurse_upward(0, 4, eta, rho, G0, Gp0)
        assert f == pytest.approx(F4, abs=1e-12)
        assert f_prime == pytest.approx(Fp4, abs=1e-12)
        assert g == pytest.approx(G4, abs=1e-12)
        assert g_prime == pytest.approx(Gp4, abs=1e-12)

    def test_same_order_is_identity(self):
        assert coulomb_recurse_upward(2, 2, 1.0, 3.0, 0.25, -0.5) == (0.25, -0.5)

    def test_downward_rejected(self):
        with pytest.raises(DomainError):
            coulomb_recurse_upward(3, 1, 0.0, 1.0, 1.0, 1.0)

    def test_origin_rejected(self):
        with pytest.raises(DomainError):
            coulomb_recurse_upward(0, 1, 0.0, 0.0, 1.0, 1.0)

    def test_irregular_overflow_is_infinite(self):
        # G_200(0, 1) = -ρ y_200(ρ) is far beyond double range
        g, g_prime = coulomb_recurse_upward(0, 200, 0.0, 1.0, math.cos(1.0), -math.sin(1.0))
        assert g == math.inf
        assert g_prime == -math.inf

    def test_infinite_start_stays_infinite(self):
        assert coulomb_recurse_upward(0, 3, 300.0, 0.005, math.inf, -math.inf) == (math.inf, -math.inf)


class TestRecursePair:

    def test_steed_recursed_matches_steed(self):
        # beyond the turning point of L=5 both solutions recurse stably
        eta, rho = 1.0, 20.0
        recursed = coulomb_recurse_pair(2, 5, eta, rho, coulomb_steed(2, eta, rho))
        direct = coulomb_steed(5, eta, rho)
        for a, b in zip(recursed.to_dict().values(), direct.to_dict().values()):
            assert a == pytest.approx(b, abs=1e-12)

    def test_regular_only(self):
        pair = coulomb_recurse_pair(0, 2, 0.0, 5.0, SolutionPair(math.sin(5.0), math.cos(5.0)))
        assert not pair.has_irregular
        assert math.isnan(pair.g)
        assert pair.f == pytest.approx(5.0 * special.spherical_jn(2, 5.0), abs=1e-13)

    def test_wronskian_is_preserved(self):
        pair = coulomb_recurse_pair(0, 6, -1.5, 12.0, coulomb_steed(0, -1.5, 12.0))
        assert pair.wronskian == pytest.approx(1.0, abs=1e-12)
