# coulomb.py
"""
Coulomb Wave Functions: Public Entry Points
===========================================

Evaluates the regular and irregular Coulomb wave functions F_L(η, ρ) and
G_L(η, ρ) for integer L >= 0, real η and ρ >= 0.

Normalization: F_L ~ sin θ, G_L ~ cos θ as ρ → ∞, with
θ = ρ - η ln 2ρ - Lπ/2 + σ_L(η), so that G F' - F G' = 1. At η = 0,
F_0 = sin ρ and G_0 = cos ρ.

Each call validates its arguments, asks coulomb_regime.select_methods()
for the fallback chain at (L, η, ρ), and tries the methods in order. A
method that raises errors.ConvergenceError is logged at DEBUG and the
next one is tried; if the whole chain fails, a warning is logged and
errors.PrecisionLossError is raised.

Usage
-----
    from coulomb import coulomb, coulomb_f, coulomb_g

    F = coulomb_f(0, 1.0, 5.0)
    pair = coulomb(2, -0.5, 10.0)
    pair.f, pair.f_prime, pair.g, pair.g_prime
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

import numpy as np

from config_types import CoulombConfig, DEFAULT_CONFIG
from coulomb_asymptotic import coulomb_asymptotic
from coulomb_fractions import coulomb_steed
from coulomb_integrate import coulomb_f_integrate, coulomb_integrate_inward
from coulomb_recursion import coulomb_recurse_upward
from coulomb_regime import Method, check_order, select_methods
from coulomb_series import coulomb_f_series, coulomb_zero_series
from errors import ConvergenceError, DomainError, PrecisionLossError
from logging_config import get_logger
from solution_pair import SolutionPair

logger = get_logger(__name__)


def _validate(L, eta, rho) -> Tuple[int, float, float]:
    L = check_order(L)
    try:
        eta = float(eta)
        rho = float(rho)
    except (TypeError, ValueError):
        raise DomainError(f"eta and rho must be real numbers, got eta={eta!r}, rho={rho!r}") from None
    if not math.isfinite(eta):
        raise DomainError(f"eta must be finite, got {eta}")
    if not math.isfinite(rho) or rho < 0.0:
        raise DomainError(f"rho must be finite and >= 0, got {rho}")
    return L, eta, rho


def _origin(L: int, eta: float) -> SolutionPair:
    """Exact limits at ρ = 0."""
    if L == 0:
        return coulomb_zero_series(eta, 0.0)
    return SolutionPair(0.0, 0.0, math.inf, -math.inf)


def _irregular_only(g: float, g_prime: float) -> SolutionPair:
    return SolutionPair(math.nan, math.nan, g, g_prime)


def _run_method(method: Method, L: int, eta: float, rho: float,
                config: CoulombConfig) -> SolutionPair:
    accuracy = config.accuracy

    if method is Method.SERIES:
        f, f_prime = coulomb_f_series(L, eta, rho, accuracy)
        return SolutionPair(f, f_prime)

    if method is Method.ZERO_SERIES:
        pair = coulomb_zero_series(eta, rho, accuracy)
        if L == 0:
            return pair
        return _irregular_only(*coulomb_recurse_upward(0, L, eta, rho, pair.g, pair.g_prime))

    if method is Method.ASYMPTOTIC:
        return coulomb_asymptotic(L, eta, rho, accuracy)

    if method is Method.STEED:
        return coulomb_steed(L, eta, rho, accuracy)

    if method is Method.STEED_RECURSION:
        pair = coulomb_steed(0, eta, rho, accuracy)
        return _irregular_only(*coulomb_recurse_upward(0, L, eta, rho, pair.g, pair.g_prime))

    if method is Method.INTEGRATE_INWARD:
        return coulomb_integrate_inward(L, eta, rho, config)

    if method is Method.INTEGRATE_OUTWARD:
        return coulomb_f_integrate(L, eta, rho, config)

    raise ValueError(f"Unknown method: {method!r}")


def _evaluate_chain(kind: str, L: int, eta: float, rho: float,
                    config: CoulombConfig) -> Tuple[SolutionPair, Method]:
    methods = select_methods(kind, L, eta, rho, config)

    for method in methods:
        try:
            pair = _run_method(method, L, eta, rho, config)
        except ConvergenceError as exc:
            logger.debug("%s_%d(eta=%g, rho=%g): %s failed (%s), trying next method",
                         kind, L, eta, rho, method.value, exc)
            continue
        logger.debug("%s_%d(eta=%g, rho=%g) evaluated by %s", kind, L, eta, rho, method.value)
        return pair, method

    attempted = [m.value for m in methods]
    logger.warning("All methods failed for %s_%d(eta=%g, rho=%g); attempted %s",
                   kind, L, eta, rho, ", ".join(attempted))
    raise PrecisionLossError(
        f"Could not evaluate {kind}_{L}(eta={eta}, rho={rho}) to the requested accuracy",
        attempted=attempted,
    )


def coulomb_f(L: int, eta: float, rho: float,
              config: Optional[CoulombConfig] = None) -> float:
    """
    Regular Coulomb wave function F_L(η, ρ).

    Parameters
    ----------
    L : int
        Angular momentum, L >= 0.
    eta : float
        Sommerfeld parameter (η > 0 repulsive, η < 0 attractive).
    rho : float
        Radius, rho >= 0.
    config : CoulombConfig, optional
        Accuracy and regime thresholds; DEFAULT_CONFIG if omitted.

    Raises
    ------
    DomainError
        For invalid arguments.
    PrecisionLossError
        If every method for this (L, η, ρ) fails.
    """
    L, eta, rho = _validate(L, eta, rho)
    if rho == 0.0:
        return 0.0
    pair, _ = _evaluate_chain("F", L, eta, rho, config or DEFAULT_CONFIG)
    return pair.f


def coulomb_g(L: int, eta: float, rho: float,
              config: Optional[CoulombConfig] = None) -> float:
    """
    Irregular Coulomb wave function G_L(η, ρ).

    At ρ = 0 this is 1/C_0(η) for L = 0 and +inf for L > 0.
    Arguments and errors as for coulomb_f().
    """
    L, eta, rho = _validate(L, eta, rho)
    if rho == 0.0:
        return _origin(L, eta).g
    pair, _ = _evaluate_chain("G", L, eta, rho, config or DEFAULT_CONFIG)
    return pair.g


def coulomb(L: int, eta: float, rho: float,
            config: Optional[CoulombConfig] = None) -> SolutionPair:
    """
    F, F', G and G' at (L, η, ρ).

    F comes from the F chain and G from the G chain; when the method that
    produced F also produced G (asymptotic, Steed, inward integration) it
    is not evaluated a second time.
    """
    L, eta, rho = _validate(L, eta, rho)
    if rho == 0.0:
        return _origin(L, eta)

    config = config or DEFAULT_CONFIG
    f_pair, _ = _evaluate_chain("F", L, eta, rho, config)
    if f_pair.has_irregular:
        return f_pair

    g_pair, _ = _evaluate_chain("G", L, eta, rho, config)
    return SolutionPair(f_pair.f, f_pair.f_prime, g_pair.g, g_pair.g_prime)


def coulomb_on_grid(
    L: int,
    eta: float,
    rho_values,
    config: Optional[CoulombConfig] = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Tabulate F, F', G, G' on a radial grid.

    Parameters
    ----------
    L : int
        Angular momentum.
    eta : float
        Sommerfeld parameter.
    rho_values : array_like
        Radii (any shape), all >= 0.

    Returns
    -------
    (F, F', G, G') : tuple of np.ndarray
        Arrays with the shape of rho_values.
    """
    rho_arr = np.asarray(rho_values, dtype=float)
    F = np.empty_like(rho_arr)
    Fp = np.empty_like(rho_arr)
    G = np.empty_like(rho_arr)
    Gp = np.empty_like(rho_arr)

    for index, rho in np.ndenumerate(rho_arr):
        pair = coulomb(L, eta, float(rho), config)
        F[index] = pair.f
        Fp[index] = pair.f_prime
        G[index] = pair.g
        Gp[index] = pair.g_prime

    return F, Fp, G, Gp
