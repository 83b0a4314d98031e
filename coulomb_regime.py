# coulomb_regime.py
"""
Coulomb Regime Classification
=============================

Quantities that characterize a point (L, η, ρ) and decide which
evaluation method is tried for it.

Turning Point
-------------
The classical turning point

    ρ_t(L, η) = η + √(η² + L(L+1))

separates the tunneling region ρ < ρ_t (F grows, G decays with ρ) from
the oscillatory region ρ > ρ_t. For η < 0 the equivalent form
L(L+1)/(√(η² + L(L+1)) - η) is used to avoid cancellation.

Gamow Factor
------------
    C_0(η) = √(2πη / (e^(2πη) - 1))
    C_L(η) = C_0(η) Π_{k=1..L} √(k² + η²) / (k(2k+1))

so that F_L ~ C_L ρ^(L+1) as ρ → 0.

Method Selection
----------------
select_methods() returns the ordered fallback chain for F or G. The
dispatcher tries each method in turn and moves to the next one when a
method raises errors.ConvergenceError.
"""

from __future__ import annotations
import math
from enum import Enum
from typing import List, Optional

from config_types import CoulombConfig, DEFAULT_CONFIG
from errors import DomainError
from logging_config import get_logger

logger = get_logger(__name__)

# Above this 2πη the expm1 form overflows
_GAMOW_DIRECT_LIMIT = 700.0


class Method(Enum):
    """Evaluation methods of the Coulomb wave functions."""
    SERIES = "series"
    ZERO_SERIES = "zero_series"
    ASYMPTOTIC = "asymptotic"
    STEED = "steed"
    STEED_RECURSION = "steed_recursion"
    INTEGRATE_INWARD = "integrate_inward"
    INTEGRATE_OUTWARD = "integrate_outward"


def check_order(L) -> int:
    """Return L as int, raising DomainError unless it is a non-negative integer."""
    if isinstance(L, bool):
        raise DomainError(f"L must be a non-negative integer, got {L!r}")
    try:
        ivalue = int(L)
    except (TypeError, ValueError, OverflowError):
        raise DomainError(f"L must be a non-negative integer, got {L!r}") from None
    if ivalue != L or ivalue < 0:
        raise DomainError(f"L must be a non-negative integer, got {L!r}")
    return ivalue


# =============================================================================
# TURNING POINT AND NORMALIZATION
# =============================================================================

def coulomb_turning_point(L: int, eta: float) -> float:
    """
    Classical turning point ρ_t(L, η).

    Parameters
    ----------
    L : int
        Angular momentum, L >= 0.
    eta : float
        Sommerfeld parameter.

    Returns
    -------
    float
        ρ_t >= 0.
    """
    L = check_order(L)
    ll = L * (L + 1)
    root = math.sqrt(eta * eta + ll)
    if eta >= 0.0:
        return eta + root
    return ll / (root - eta)


def log_coulomb_factor_zero(eta: float) -> float:
    """ln C_0(η), accurate for any real η."""
    if eta == 0.0:
        return 0.0
    x = 2.0 * math.pi * eta
    if x > 0.0:
        # x/(e^x - 1) = x e^-x / (1 - e^-x)
        return 0.5 * (math.log(x) - x - math.log(-math.expm1(-x)))
    return 0.5 * (math.log(-x) - math.log(-math.expm1(x)))


def coulomb_factor_zero(eta: float) -> float:
    """Gamow factor C_0(η) = √(2πη/(e^(2πη) - 1)), with C_0(0) = 1."""
    if eta == 0.0:
        return 1.0
    x = 2.0 * math.pi * eta
    if abs(x) < _GAMOW_DIRECT_LIMIT:
        return math.sqrt(x / math.expm1(x))
    return math.exp(log_coulomb_factor_zero(eta))


def coulomb_factor(L: int, eta: float) -> float:
    """
    Normalization C_L(η) = C_0(η) Π_{k=1..L} √(k² + η²)/(k(2k+1)).

    Underflows to 0 for large L; use log_coulomb_factor there.
    """
    L = check_order(L)
    c = coulomb_factor_zero(eta)
    for k in range(1, L + 1):
        c *= math.hypot(k, eta) / (k * (2 * k + 1))
    return c


def log_coulomb_factor(L: int, eta: float) -> float:
    """ln C_L(η)."""
    L = check_order(L)
    s = log_coulomb_factor_zero(eta)
    for k in range(1, L + 1):
        s += math.log(math.hypot(k, eta)) - math.log(k * (2 * k + 1))
    return s


# =============================================================================
# REGIONS
# =============================================================================

def series_radius(L: int, eta: float, config: CoulombConfig = DEFAULT_CONFIG) -> float:
    """Largest ρ inside the power-series region of F for this (L, η)."""
    radius = config.series_rho_base + config.series_rho_per_sqrt_l * math.sqrt(L)
    if eta != 0.0:
        radius = min(radius, (config.series_eta_rho_base + config.series_eta_rho_per_l * L) / abs(eta))
    return radius


def in_series_region(L: int, eta: float, rho: float,
                     config: CoulombConfig = DEFAULT_CONFIG) -> bool:
    """ρ < 4 + 2√L and |ηρ| < 8 + 4L (default thresholds)."""
    return rho < config.series_rho_base + config.series_rho_per_sqrt_l * math.sqrt(L) \
        and abs(eta * rho) < config.series_eta_rho_base + config.series_eta_rho_per_l * L


def in_zero_series_region(eta: float, rho: float,
                          config: CoulombConfig = DEFAULT_CONFIG) -> bool:
    """ρ < 4 and |ηρ| < 8, or ηρ < 2 for repulsive η (default thresholds)."""
    if eta > 0.0:
        return rho < config.zero_series_rho and eta * rho < config.zero_series_repulsive_eta_rho
    return rho < config.zero_series_rho and abs(eta * rho) < config.zero_series_eta_rho


def asymptotic_radius(L: int, eta: float, config: CoulombConfig = DEFAULT_CONFIG) -> float:
    """Smallest ρ of the asymptotic region, 32 + (L² + η²)/2 by default."""
    return config.asymptotic_rho_base + 0.5 * (L * L + eta * eta)


def in_asymptotic_region(L: int, eta: float, rho: float,
                         config: CoulombConfig = DEFAULT_CONFIG) -> bool:
    return rho > asymptotic_radius(L, eta, config)


# =============================================================================
# METHOD SELECTION
# =============================================================================

def select_methods(
    kind: str,
    L: int,
    eta: float,
    rho: float,
    config: Optional[CoulombConfig] = None
) -> List[Method]:
    """
    Ordered list of methods to try for F ("F") or G ("G") at (L, η, ρ).

    F: power series near the origin, asymptotic expansion far out, Steed
       and inward integration beyond the turning point, and outward
       integration from the series region as the last resort (the only
       stable direction for F in the tunneling region).

    G: L=0 series recursed upward near the origin, asymptotic expansion,
       Steed beyond the turning point, Steed at L=0 recursed upward
       between ρ_t(0) and ρ_t(L), and inward integration (stable for G
       everywhere) as the last resort.

    Parameters
    ----------
    kind : str
        "F" or "G".
    L : int
        Angular momentum.
    eta, rho : float
        Sommerfeld parameter and radius.
    config : CoulombConfig, optional
        Thresholds; DEFAULT_CONFIG if omitted.

    Returns
    -------
    List[Method]
        Methods in the order they should be tried.
    """
    if config is None:
        config = DEFAULT_CONFIG
    L = check_order(L)
    turning_point = coulomb_turning_point(L, eta)
    asymptotic = in_asymptotic_region(L, eta, rho, config)

    methods: List[Method] = []
    if kind == "F":
        if in_series_region(L, eta, rho, config):
            methods.append(Method.SERIES)
        if asymptotic:
            methods.append(Method.ASYMPTOTIC)
        if rho >= turning_point:
            methods.extend([Method.STEED, Method.INTEGRATE_INWARD])
        methods.append(Method.INTEGRATE_OUTWARD)
    elif kind == "G":
        if in_zero_series_region(eta, rho, config):
            methods.append(Method.ZERO_SERIES)
        if asymptotic:
            methods.append(Method.ASYMPTOTIC)
        if rho >= turning_point:
            methods.append(Method.STEED)
        elif L > 0 and rho >= coulomb_turning_point(0, eta):
            methods.append(Method.STEED_RECURSION)
        methods.append(Method.INTEGRATE_INWARD)
    else:
        raise DomainError(f"kind must be 'F' or 'G', got {kind!r}")

    logger.debug("select_methods(%s, L=%d, eta=%g, rho=%g) -> %s",
                 kind, L, eta, rho, [m.value for m in methods])
    return methods
