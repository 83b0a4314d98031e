"""
Shared fixtures: high-precision Coulomb reference values from mpmath.
"""

import math

import mpmath
import pytest


def coulomb_reference(L, eta, rho, dps=30):
    """F, F', G, G' at (L, eta, rho) from mpmath, rounded to float."""
    with mpmath.workdps(dps):
        F = mpmath.coulombf(L, eta, rho)
        G = mpmath.coulombg(L, eta, rho)
        Fp = mpmath.diff(lambda r: mpmath.coulombf(L, eta, r), rho)
        Gp = mpmath.diff(lambda r: mpmath.coulombg(L, eta, r), rho)
        return tuple(float(mpmath.re(v)) for v in (F, Fp, G, Gp))


def turning_point(L, eta):
    return eta + math.sqrt(eta * eta + L * (L + 1))


def assert_pair_close(pair, L, eta, rho, tol):
    """
    Compare a SolutionPair with mpmath.

    Below the turning point F and G are monotone and compared relatively;
    beyond it the errors are measured against the local amplitude.
    """
    F, Fp, G, Gp = coulomb_reference(L, eta, rho)
    if rho < turning_point(L, eta):
        scales = (abs(F), abs(Fp), abs(G), abs(Gp))
    else:
        amplitude = math.hypot(F, G)
        amplitude_prime = math.hypot(Fp, Gp)
        scales = (amplitude, amplitude_prime, amplitude, amplitude_prime)

    ours = (pair.f, pair.f_prime, pair.g, pair.g_prime)
    for name, value, ref, scale in zip(("F", "F'", "G", "G'"), ours, (F, Fp, G, Gp), scales):
        if math.isnan(value):
            continue
        assert abs(value - ref) <= tol * scale, \
            f"{name}_{L}(eta={eta}, rho={rho}): got {value!r}, expected {ref!r}"


@pytest.fixture
def mp_coulomb():
    return coulomb_reference


@pytest.fixture
def check_pair():
    return assert_pair_close
