# coulomb_fractions.py
"""
Continued Fractions and Steed's Method
======================================

CF1 (real)
----------
    F'_L/F_L = S_{L+1} - R²_{L+1} / (T_{L+1} - R²_{L+2} / (T_{L+2} - ...))

    S_k = k/ρ + η/k,   R²_k = 1 + η²/k²,   T_k = S_k + S_{k+1}

evaluated with the modified Lentz algorithm. The number of negative Lentz
denominators fixes the sign of F_L.

CF2 (complex)
-------------
    (G' + iF')/(G + iF) = p + iq
        = i(1 - η/ρ) + (i/ρ) a_1/(b_1 + a_2/(b_2 + ...))

    a_k = (iη - L + k - 1)(iη + L + k),   b_k = 2(ρ - η) + 2ik

CF1 converges in roughly ρ terms; CF2 converges quickly well beyond the
turning point and slowly near it.

Steed's Method
--------------
With f = CF1, p + iq = CF2 and the Wronskian G F' - F G' = 1:

    γ = (f - p)/q
    F = ±1/√(q(γ² + 1)),  F' = f F,  G = γ F,  G' = (p γ - q) F
"""

from __future__ import annotations
import math
from typing import Tuple

from constants import DEFAULT_ACCURACY, SERIES_MAX, TINY
from coulomb_regime import check_order
from errors import ConvergenceError, DomainError, check_accuracy
from logging_config import get_logger
from solution_pair import SolutionPair

logger = get_logger(__name__)


def _check_radius(rho: float) -> None:
    if not rho > 0.0:
        raise DomainError(f"Continued fractions require rho > 0, got {rho}")


def coulomb_cf1(
    L: int,
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> Tuple[float, float]:
    """
    F'_L/F_L and the sign of F_L from the first continued fraction.

    Returns
    -------
    (f, sign) : tuple of float
        Logarithmic derivative and ±1.

    Raises
    ------
    ConvergenceError
        If the fraction has not converged after SERIES_MAX terms.
    """
    L = check_order(L)
    accuracy = check_accuracy(accuracy)
    _check_radius(rho)

    def s_k(k: int) -> float:
        return k / rho + eta / k

    def r_sq(k: int) -> float:
        return 1.0 + (eta / k) ** 2

    f = s_k(L + 1)
    if f == 0.0:
        f = TINY
    c = f
    d = 0.0
    sign = 1.0

    for j in range(1, SERIES_MAX + 1):
        k = L + j
        a = -r_sq(k)
        b = s_k(k) + s_k(k + 1)

        d = b + a * d
        if d == 0.0:
            d = TINY
        c = b + a / c
        if c == 0.0:
            c = TINY
        d = 1.0 / d
        delta = c * d
        f *= delta
        if d < 0.0:
            sign = -sign

        if abs(delta - 1.0) < accuracy:
            logger.debug("CF1 converged: L=%d eta=%g rho=%g terms=%d", L, eta, rho, j)
            return f, sign

    raise ConvergenceError(
        f"CF1 did not converge for L={L}, eta={eta}, rho={rho}",
        method="cf1", iterations=SERIES_MAX,
    )


def coulomb_cf2(
    L: int,
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> complex:
    """
    p + iq = (G' + iF')/(G + iF) from the second continued fraction.

    Raises
    ------
    ConvergenceError
        If the fraction has not converged after SERIES_MAX terms.
    """
    L = check_order(L)
    accuracy = check_accuracy(accuracy)
    _check_radius(rho)

    def a_k(k: int) -> complex:
        return complex(k - 1 - L, eta) * complex(k + L, eta)

    def b_k(k: int) -> complex:
        return complex(2.0 * (rho - eta), 2.0 * k)

    # Lentz for the tail b_1 + a_2/(b_2 + a_3/(b_3 + ...))
    f = b_k(1)
    c = f
    d = 0j

    for k in range(2, SERIES_MAX + 2):
        a = a_k(k)
        b = b_k(k)

        d = b + a * d
        if d == 0:
            d = TINY
        c = b + a / c
        if c == 0:
            c = TINY
        d = 1.0 / d
        delta = c * d
        f *= delta

        if abs(delta - 1.0) < accuracy:
            logger.debug("CF2 converged: L=%d eta=%g rho=%g terms=%d", L, eta, rho, k - 1)
            return complex(0.0, 1.0 - eta / rho) + (1j / rho) * (a_k(1) / f)

    raise ConvergenceError(
        f"CF2 did not converge for L={L}, eta={eta}, rho={rho}",
        method="cf2", iterations=SERIES_MAX,
    )


def coulomb_steed(
    L: int,
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> SolutionPair:
    """
    F, F', G, G' from Steed's method.

    Accurate for ρ beyond the turning point; below it CF2 converges slowly
    and G dominates F so strongly that F loses its relative accuracy.

    Raises
    ------
    ConvergenceError
        Propagated from CF1 or CF2.
    """
    f, sign = coulomb_cf1(L, eta, rho, accuracy)
    pq = coulomb_cf2(L, eta, rho, accuracy)
    p, q = pq.real, pq.imag

    gamma = (f - p) / q
    F = sign / math.sqrt(q * (gamma * gamma + 1.0))
    return SolutionPair(F, f * F, gamma * F, (p * gamma - q) * F)
