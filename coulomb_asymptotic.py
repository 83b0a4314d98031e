# coulomb_asymptotic.py
"""
Asymptotic Expansion for Large ρ
================================

For ρ far beyond the turning point (Abramowitz & Stegun 14.5):

    F = g cos θ + f sin θ
    G = f cos θ - g sin θ
    θ = ρ - η ln 2ρ - Lπ/2 + σ_L(η),   σ_L(η) = arg Γ(L + 1 + iη)

with f + ig = Σ_k t_k, t_0 = 1 and

    t_{k+1} = (a_k + i b_k) t_k
    a_k = (2k + 1) η / ((2k + 2) ρ)
    b_k = (L(L+1) - k(k+1) + η²) / ((2k + 2) ρ)

Each t_k carries ρ^-k, so the derivatives follow term by term:

    f* = Σ(-k f_k/ρ) - θ' g,   g* = Σ(-k g_k/ρ) + θ' f,   θ' = 1 - η/ρ
    F' = g* cos θ + f* sin θ
    G' = f* cos θ - g* sin θ

The series is asymptotic: once b_k turns negative the terms eventually
grow again, and evaluation fails if that happens before they drop below
the accuracy target.
"""

from __future__ import annotations
import math

from constants import DEFAULT_ACCURACY, SERIES_MAX
from coulomb_regime import check_order
from errors import ConvergenceError, DomainError, check_accuracy
from logging_config import get_logger
from solution_pair import SolutionPair
from special_functions import log_gamma, reduce_angle

logger = get_logger(__name__)


def coulomb_phase_shift(L: int, eta: float) -> float:
    """
    Coulomb phase shift σ_L(η) = Im ln Γ(L + 1 + iη), modulo 2π.

    Parameters
    ----------
    L : int
        Angular momentum, L >= 0.
    eta : float
        Sommerfeld parameter.
    """
    L = check_order(L)
    if eta == 0.0:
        return 0.0
    return log_gamma(complex(L + 1, eta)).imag


def coulomb_asymptotic(
    L: int,
    eta: float,
    rho: float,
    accuracy: float = DEFAULT_ACCURACY
) -> SolutionPair:
    """
    F, F', G, G' from the asymptotic expansion.

    Raises
    ------
    ConvergenceError
        If the terms start growing again, or SERIES_MAX terms are used,
        before they fall below the accuracy target.
    """
    L = check_order(L)
    accuracy = check_accuracy(accuracy)
    if not rho > 0.0:
        raise DomainError(f"Asymptotic expansion requires rho > 0, got {rho}")

    ll = L * (L + 1)
    eta_sq = eta * eta

    f, g = 1.0, 0.0
    fp, gp = 0.0, 0.0
    fk, gk = 1.0, 0.0
    magnitude = 1.0

    for k in range(SERIES_MAX):
        denominator = (2 * k + 2) * rho
        a = (2 * k + 1) * eta / denominator
        b = (ll - k * (k + 1) + eta_sq) / denominator
        fk, gk = a * fk - b * gk, a * gk + b * fk

        new_magnitude = math.hypot(fk, gk)
        if b < 0.0 and new_magnitude > magnitude:
            raise ConvergenceError(
                f"Asymptotic series diverges for L={L}, eta={eta}, rho={rho} "
                f"(smallest term {magnitude:.3e})",
                method="asymptotic", iterations=k + 1,
            )
        magnitude = new_magnitude

        f += fk
        g += gk
        fp -= (k + 1) * fk / rho
        gp -= (k + 1) * gk / rho

        if magnitude * (1.0 + (k + 1) / rho) < accuracy:
            logger.debug("Asymptotic series converged: L=%d eta=%g rho=%g terms=%d",
                         L, eta, rho, k + 1)
            break
    else:
        raise ConvergenceError(
            f"Asymptotic series did not converge for L={L}, eta={eta}, rho={rho}",
            method="asymptotic", iterations=SERIES_MAX,
        )

    theta = reduce_angle(
        rho,
        -eta * math.log(2.0 * rho),
        -(L % 4) * (math.pi / 2.0),
        coulomb_phase_shift(L, eta),
    )
    theta_prime = 1.0 - eta / rho
    f_star = fp - theta_prime * g
    g_star = gp + theta_prime * f

    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return SolutionPair(
        g * cos_t + f * sin_t,
        g_star * cos_t + f_star * sin_t,
        f * cos_t - g * sin_t,
        f_star * cos_t - g_star * sin_t,
    )
