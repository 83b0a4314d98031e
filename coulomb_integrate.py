# coulomb_integrate.py
"""
Coulomb Functions by Direct Integration
=======================================

Last-resort evaluation by integrating the radial Coulomb equation

    u''(ρ) = (L(L+1)/ρ² + 2η/ρ - 1) u(ρ)

with ode_stepper.StoermerExtrapolationStepper.

Direction matters. Below the turning point F grows and G decays with ρ,
so each solution is only stable when integrated in the direction in which
it grows:

- coulomb_f_integrate: F and F' from the power series just inside the
  series region, integrated outward.
- coulomb_integrate_inward: F, G and derivatives from the asymptotic
  expansion at the edge of the asymptotic region, integrated inward. F is
  carried along only if the target lies beyond the turning point.
"""

from __future__ import annotations
import math
from typing import Callable, Optional

import numpy as np

from config_types import CoulombConfig, DEFAULT_CONFIG
from coulomb_asymptotic import coulomb_asymptotic
from coulomb_regime import asymptotic_radius, check_order, coulomb_turning_point, series_radius
from coulomb_series import coulomb_f_series
from errors import ConvergenceError, DomainError
from logging_config import get_logger
from ode_stepper import StoermerExtrapolationStepper
from solution_pair import SolutionPair

logger = get_logger(__name__)


def coulomb_rhs(L: int, eta: float) -> Callable:
    """Right-hand side u'' = (L(L+1)/ρ² + 2η/ρ - 1) u for the stepper."""
    ll = float(L * (L + 1))
    two_eta = 2.0 * eta

    def rhs(rho, u):
        return (ll / (rho * rho) + two_eta / rho - 1.0) * u

    return rhs


def _check_radius(rho: float) -> None:
    if not rho > 0.0:
        raise DomainError(f"Integration requires rho > 0, got {rho}")


def coulomb_f_integrate(
    L: int,
    eta: float,
    rho: float,
    config: Optional[CoulombConfig] = None
) -> SolutionPair:
    """
    F and F' by outward integration from the power-series region.

    Returns
    -------
    SolutionPair
        With g and g_prime NaN.

    Raises
    ------
    ConvergenceError
        If the starting series or the integration fails, or the starting
        value underflows.
    """
    if config is None:
        config = DEFAULT_CONFIG
    L = check_order(L)
    _check_radius(rho)

    rho0 = config.integrator_start_fraction * series_radius(L, eta, config)
    f0, f0_prime = coulomb_f_series(L, eta, rho0, config.accuracy)
    if f0 == 0.0 and f0_prime == 0.0:
        raise ConvergenceError(
            f"F underflows at the integration start rho={rho0} for L={L}, eta={eta}",
            method="integrate_outward",
        )

    stepper = StoermerExtrapolationStepper(
        coulomb_rhs(L, eta), rho0, f0, f0_prime,
        config.integrator_initial_step, config.integrator_accuracy,
    )
    stepper.integrate(rho)
    logger.debug("Outward integration L=%d eta=%g: rho %g -> %g, %d evaluations",
                 L, eta, rho0, rho, stepper.evaluation_count)
    return SolutionPair(float(stepper.y), float(stepper.y_prime))


def coulomb_integrate_inward(
    L: int,
    eta: float,
    rho: float,
    config: Optional[CoulombConfig] = None
) -> SolutionPair:
    """
    G (and F, beyond the turning point) by inward integration from the
    asymptotic region.

    Returns
    -------
    SolutionPair
        f and f_prime are NaN when rho lies below the turning point.

    Raises
    ------
    ConvergenceError
        If the asymptotic start values or the integration fail.
    """
    if config is None:
        config = DEFAULT_CONFIG
    L = check_order(L)
    _check_radius(rho)

    rho0 = asymptotic_radius(L, eta, config)
    start = coulomb_asymptotic(L, eta, rho0, config.accuracy)
    with_regular = rho >= coulomb_turning_point(L, eta)

    if with_regular:
        y = np.array([start.f, start.g])
        y_prime = np.array([start.f_prime, start.g_prime])
    else:
        y = start.g
        y_prime = start.g_prime

    stepper = StoermerExtrapolationStepper(
        coulomb_rhs(L, eta), rho0, y, y_prime,
        config.integrator_initial_step, config.integrator_accuracy,
    )
    stepper.integrate(rho)
    logger.debug("Inward integration L=%d eta=%g: rho %g -> %g, %d evaluations",
                 L, eta, rho0, rho, stepper.evaluation_count)

    if with_regular:
        return SolutionPair(
            float(stepper.y[0]), float(stepper.y_prime[0]),
            float(stepper.y[1]), float(stepper.y_prime[1]),
        )
    return SolutionPair(math.nan, math.nan,
                        float(stepper.y), float(stepper.y_prime))
