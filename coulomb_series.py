# coulomb_series.py
"""
Power Series of the Coulomb Wave Functions about ρ = 0
======================================================

Regular Solution
----------------
    F_L(η, ρ) = C_L(η) ρ^(L+1) Σ_j t_j
    t_0 = 1,  t_{-1} = 0
    t_j = (2ηρ t_{j-1} - ρ² t_{j-2}) / (j (j + 2L + 1))

and F'_L = C_L ρ^L Σ_j (L + 1 + j) t_j.

L = 0 Pair
----------
For L = 0 the irregular solution has a logarithmic series. With

    u_0 = 0, u_1 = ρ,  u_k = (2ηρ u_{k-1} - ρ² u_{k-2}) / (k(k-1))
    v_0 = 1, v_1 = 0,  v_k = (2ηρ v_{k-1} - ρ² v_{k-2} - 2η(2k-1) u_k) / (k(k-1))
    u = Σ u_k,  v = Σ v_k,  r = Re ψ(1 + iη) + 2γ - 1

the functions are

    F_0 = C_0 u
    G_0 = (v + 2η u (ln 2ρ + r)) / C_0

Both series converge for every ρ but lose digits to cancellation once ρ
or |ηρ| is large; coulomb_regime restricts them to the region where they
converge within a few dozen terms.

Convergence
-----------
A series is considered converged when two consecutive terms fall below
accuracy × max(|partial sum|, largest term so far). Two terms are
required because for η = 0 every other term vanishes; the largest-term
scale keeps sums near a zero of the function from iterating forever.
"""

from __future__ import annotations
import math
from typing import Tuple

from constants import DEFAULT_ACCURACY, EULER_GAMMA, LOG_FLOAT_MAX, SERIES_MAX
from coulomb_regime import check_order, coulomb_factor_zero, log_coulomb_factor, log_coulomb_factor_zero
from errors import ConvergenceError, check_accuracy
from logging_config import get_logger
from solution_pair import SolutionPair
from special_functions import psi

logger = get_logger(__name__)


def _negligible(term: float, total: float, largest: float, accuracy: float) -> bool:
    return abs(term) <= accuracy * max(abs(total), largest)


def _divide_by_gamow(x: float, eta: float, c0: float) -> float:
    """x / C_0(η), overflowing to ±inf once C_0 itself has underflowed to 0."""
    if c0 > 0.0:
        return x / c0
    if x == 0.0:
        return 0.0
    log_magnitude = math.log(abs(x)) - log_coulomb_factor_zero(eta)
    if log_magnitude > LOG_FLOAT_MAX:
        return math.copysign(math.inf, x)
    return math.copysign(math.exp(log_magnitude), x)


def coulomb_f_series(
    L: int,
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> Tuple[float, float]:
    """
    Regular Coulomb function and derivative from the power series.

    Parameters
    ----------
    L : int
        Angular momentum, L >= 0.
    eta : float
        Sommerfeld parameter.
    rho : float
        Radius, rho >= 0.
    accuracy : float
        Relative accuracy target.

    Returns
    -------
    (F, F') : tuple of float

    Raises
    ------
    ConvergenceError
        If the series has not converged after SERIES_MAX terms.
    """
    L = check_order(L)
    accuracy = check_accuracy(accuracy)

    if rho == 0.0:
        return 0.0, (coulomb_factor_zero(eta) if L == 0 else 0.0)

    two_eta_rho = 2.0 * eta * rho
    rho_sq = rho * rho

    t_older = 0.0
    t_old = 1.0
    s = 1.0
    sp = L + 1.0
    largest_s = 1.0
    largest_sp = L + 1.0
    was_negligible = False

    for j in range(1, SERIES_MAX + 1):
        t = (two_eta_rho * t_old - rho_sq * t_older) / (j * (j + 2 * L + 1))
        tp = (L + 1 + j) * t
        s += t
        sp += tp
        largest_s = max(largest_s, abs(t))
        largest_sp = max(largest_sp, abs(tp))

        negligible = _negligible(t, s, largest_s, accuracy) \
            and _negligible(tp, sp, largest_sp, accuracy)
        if negligible and was_negligible:
            logger.debug("F series converged: L=%d eta=%g rho=%g terms=%d", L, eta, rho, j)
            # F' = C ρ^L Σ(L+1+j)t_j, F = C ρ^(L+1) Σ t_j
            prefactor = math.exp(log_coulomb_factor(L, eta) + L * math.log(rho))
            return prefactor * rho * s, prefactor * sp
        was_negligible = negligible

        t_older, t_old = t_old, t

    raise ConvergenceError(
        f"F power series did not converge for L={L}, eta={eta}, rho={rho}",
        method="series", iterations=SERIES_MAX,
    )


def coulomb_zero_series(
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> SolutionPair:
    """
    F_0, F_0', G_0, G_0' from the L = 0 power series.

    At ρ = 0 the exact limits F = 0, F' = C_0, G = 1/C_0 are returned, with
    G' ~ 2η ln(2ρ)/C_0 giving -inf, 0 or +inf by the sign of η.

    G and G' overflow to ±inf for large η, where C_0 underflows.

    Raises
    ------
    ConvergenceError
        If the series has not converged after SERIES_MAX terms.
    """
    accuracy = check_accuracy(accuracy)
    c0 = coulomb_factor_zero(eta)

    if rho == 0.0:
        g_prime = -math.copysign(math.inf, eta) if eta != 0.0 else 0.0
        return SolutionPair(0.0, c0, _divide_by_gamow(1.0, eta, c0), g_prime)

    two_eta_rho = 2.0 * eta * rho
    rho_sq = rho * rho

    u_older, u_old = 0.0, rho
    v_older, v_old = 1.0, 0.0
    u, up = rho, 1.0
    v, vp = 1.0, 0.0
    largest = max(rho, 1.0)
    was_negligible = False

    for k in range(2, SERIES_MAX + 1):
        kk = k * (k - 1)
        uk = (two_eta_rho * u_old - rho_sq * u_older) / kk
        vk = (two_eta_rho * v_old - rho_sq * v_older - 2.0 * eta * (2 * k - 1) * uk) / kk
        u += uk
        v += vk
        up += k * uk / rho
        vp += k * vk / rho
        largest = max(largest, abs(uk), abs(vk), abs(k * uk / rho), abs(k * vk / rho))

        negligible = _negligible(uk, u, largest, accuracy) \
            and _negligible(vk, v, largest, accuracy) \
            and _negligible(k * uk / rho, up, largest, accuracy) \
            and _negligible(k * vk / rho, vp, largest, accuracy)
        if negligible and was_negligible:
            logger.debug("Zero series converged: eta=%g rho=%g terms=%d", eta, rho, k)
            break
        was_negligible = negligible

        u_older, u_old = u_old, uk
        v_older, v_old = v_old, vk
    else:
        raise ConvergenceError(
            f"L=0 power series did not converge for eta={eta}, rho={rho}",
            method="zero_series", iterations=SERIES_MAX,
        )

    r = psi(complex(1.0, eta)).real + 2.0 * EULER_GAMMA - 1.0
    log_term = math.log(2.0 * rho) + r

    f = c0 * u
    f_prime = c0 * up
    g = _divide_by_gamow(v + 2.0 * eta * u * log_term, eta, c0)
    g_prime = _divide_by_gamow(vp + 2.0 * eta * (up * log_term + u / rho), eta, c0)
    return SolutionPair(f, f_prime, g, g_prime)
