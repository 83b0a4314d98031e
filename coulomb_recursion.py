# coulomb_recursion.py
"""
Upward Recursion in L
=====================

Both F and G satisfy (Abramowitz & Stegun 14.2.1, 14.2.2)

    u_{L+1}  = (S_{L+1} u_L - u'_L) / R_{L+1}
    u'_{L+1} = R_{L+1} u_L - S_{L+1} u_{L+1}

    S_k = k/ρ + η/k,   R_k = √(1 + η²/k²)

Upward recursion is stable for G everywhere and for F above the turning
point. Below the turning point F decreases with L and upward recursion
amplifies the admixture of G, so callers use it for F only where
ρ >= ρ_t(L2).
"""

from __future__ import annotations
import math
from typing import Tuple

from coulomb_regime import check_order
from errors import DomainError
from solution_pair import SolutionPair


def coulomb_recurse_upward(
    L1: int,
    L2: int,
    eta: float,
    rho: float,
    u: float,
    up: float
) -> Tuple[float, float]:
    """
    Carry a Coulomb solution u and its derivative from L1 up to L2.

    Parameters
    ----------
    L1, L2 : int
        Start and target angular momentum, 0 <= L1 <= L2.
    eta : float
        Sommerfeld parameter.
    rho : float
        Radius, rho > 0.
    u, up : float
        Solution and derivative at L1.

    Returns
    -------
    (u, u') at L2. If u overflows on the way up, (±inf, ∓inf) with the
    sign of u is returned; only G grows that fast, and only below the
    turning point, where G and G' have opposite signs.

    Raises
    ------
    DomainError
        If L2 < L1 (downward recursion is not supported) or rho <= 0.
    """
    L1 = check_order(L1)
    L2 = check_order(L2)
    if L2 < L1:
        raise DomainError(f"Only upward recursion is supported, got L1={L1} > L2={L2}")
    if not rho > 0.0:
        raise DomainError(f"Recursion requires rho > 0, got {rho}")

    for k in range(L1 + 1, L2 + 1):
        s = k / rho + eta / k
        r = math.sqrt(1.0 + (eta / k) ** 2)
        u_next = (s * u - up) / r
        if math.isinf(u_next):
            return u_next, -u_next
        up = r * u - s * u_next
        u = u_next
    return u, up


def coulomb_recurse_pair(
    L1: int,
    L2: int,
    eta: float,
    rho: float,
    pair: SolutionPair
) -> SolutionPair:
    """Recurse both solutions of a pair from L1 to L2 (G stays NaN if absent)."""
    f, f_prime = coulomb_recurse_upward(L1, L2, eta, rho, pair.f, pair.f_prime)
    if not pair.has_irregular:
        return SolutionPair(f, f_prime)
    g, g_prime = coulomb_recurse_upward(L1, L2, eta, rho, pair.g, pair.g_prime)
    return SolutionPair(f, f_prime, g, g_prime)
