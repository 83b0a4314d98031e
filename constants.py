# constants.py
"""
Numerical Constants for Coulomb Wave Function Evaluation
=========================================================

This module centralizes all magic numbers used throughout the engine,
providing named constants with documentation for maintainability.

Precision Limits
----------------
- MAX_ACCURACY: Tightest accuracy any iterative method may be asked for
- DEFAULT_ACCURACY: Target for series, continued fractions, asymptotics
- SERIES_MAX: Shared iteration cap

Constant Tables
---------------
- BERNOULLI: Even Bernoulli numbers B_0, B_2, ..., B_30
- LANCZOS_G, LANCZOS_C: Godfrey's Lanczos parameter and coefficients

Regime Thresholds
-----------------
- Boundaries of the power-series and asymptotic regions. These are
  empirical and can be overridden through config_types.CoulombConfig.

All tables are tuples built at import time and never mutated, so they can
be shared by any number of concurrent evaluations.
"""

from __future__ import annotations

import math

# =============================================================================
# PRECISION LIMITS
# =============================================================================

MAX_ACCURACY: float = 2.0 ** -49
"""Smallest accepted accuracy target.

A double carries 52 mantissa bits; asking for one byte less keeps every
convergence test clear of round-off at the margin.
"""

DEFAULT_ACCURACY: float = 2.0 ** -48
"""Relative accuracy for series, continued fractions and asymptotics."""

INTEGRATOR_ACCURACY: float = 2.5e-13
"""Per-step relative accuracy for the extrapolation ODE stepper.

Looser than DEFAULT_ACCURACY because errors accumulate over many steps and
the integrator is only the last resort.
"""

SERIES_MAX: int = 250
"""Maximum number of terms of any series or continued fraction."""

TINY: float = 1.0e-300
"""Stand-in for zero denominators in the modified Lentz algorithm."""

LOG_FLOAT_MAX: float = 709.782712893384
"""ln of the largest finite double; exp() of anything larger overflows."""

# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================

EULER_GAMMA: float = 0.577215664901532860606512
"""Euler-Mascheroni constant γ."""

TWO_PI: float = 2.0 * math.pi

SQRT_TWO_PI: float = math.sqrt(TWO_PI)

HALF_LOG_TWO_PI: float = 0.5 * math.log(TWO_PI)

BERNOULLI: tuple = (
    1.0,
    1.0 / 6.0,
    -1.0 / 30.0,
    1.0 / 42.0,
    -1.0 / 30.0,
    5.0 / 66.0,
    -691.0 / 2730.0,
    7.0 / 6.0,
    -3617.0 / 510.0,
    43867.0 / 798.0,
    -174611.0 / 330.0,
    854513.0 / 138.0,
    -236364091.0 / 2730.0,
    8553103.0 / 6.0,
    -23749461029.0 / 870.0,
    8615841276005.0 / 14322.0,
)
"""Even Bernoulli numbers, BERNOULLI[n] = B_2n.

B_1 = -1/2 is the only non-vanishing odd one and is handled separately by
every expansion that needs it.
"""

# =============================================================================
# LANCZOS APPROXIMATION
# =============================================================================

LANCZOS_G: float = 607.0 / 128.0
"""Godfrey's Lanczos parameter g.

Measured relative deviation at the integers is a few 1e-16.
"""

LANCZOS_C: tuple = (
    0.999999999999997092,
    57.1562356658629235,
    -59.5979603554754912,
    14.1360979747417471,
    -0.491913816097620199,
    0.339946499848118887e-4,
    0.465236289270485756e-4,
    -0.983744753048795646e-4,
    0.158088703224912494e-3,
    -0.210264441724104883e-3,
    0.217439618115212643e-3,
    -0.164318106536763890e-3,
    0.844182239838527433e-4,
    -0.261908384015814087e-4,
    0.368991826595316234e-5,
)
"""Godfrey's coefficients for
    Γ(z) = √(2π) ((z + g - 1/2)/e)^(z - 1/2) e^(-g) [c0 + c1/z + c2/(z+1) + ...]
"""

LANCZOS_GP: float = LANCZOS_G - 0.5

LANCZOS_EXP_G: float = math.exp(-LANCZOS_G)

FACTORIAL_MAX_ARGUMENT: int = 171
"""Largest integer x for which Γ(x) = (x-1)! is finite in double precision."""

GAMMA_OVERFLOW_ARGUMENT: float = 171.624376956302725
"""Γ(x) overflows for x above this value."""

LOG_GAMMA_STIRLING_REAL: float = 16.0
"""Real arguments at or above this use the Stirling series for ln Γ and ψ."""

LOG_GAMMA_STIRLING_COMPLEX: float = 15.0
"""Complex arguments with |z| at or above this use the Stirling series."""

# =============================================================================
# REGIME THRESHOLDS
# =============================================================================

SERIES_RHO_BASE: float = 4.0
SERIES_RHO_PER_SQRT_L: float = 2.0
"""Power series for F is used for ρ < 4 + 2√L ...

Each term introduces factors ρ²/(L+1) and 2ηρ/(L+1); with these bounds the
series converges within roughly 30 terms.
"""

SERIES_ETA_RHO_BASE: float = 8.0
SERIES_ETA_RHO_PER_L: float = 4.0
"""... and |ηρ| < 8 + 4L."""

ZERO_SERIES_RHO: float = 4.0
ZERO_SERIES_ETA_RHO: float = 8.0
"""L=0 series for both F and G is used for ρ < 4 and |ηρ| < 8 ..."""

ZERO_SERIES_REPULSIVE_ETA_RHO: float = 2.0
"""... narrowed to ηρ < 2 for η > 0.

For repulsive η the series for G sums terms growing like e^(2√(2ηρ)) to a
result that decays like e^(-2√(2ηρ)), so the rounding error is amplified
about 3000 times at ηρ = 2 and 10⁷ times at ηρ = 8.
"""

ASYMPTOTIC_RHO_BASE: float = 32.0
"""Asymptotic expansion is used for ρ > 32 + (L² + η²)/2."""

# =============================================================================
# INTEGRATOR DEFAULTS
# =============================================================================

INTEGRATOR_INITIAL_STEP: float = 0.25
"""Initial step ΔX for the Coulomb integrations."""

INTEGRATOR_START_FRACTION: float = 0.5
"""Outward integration starts at this fraction of the series-region radius."""

STEPPER_TRIAL_COUNTS: tuple = (2, 4, 6, 8, 10, 12, 14, 16)
"""Mini-step counts of the successive Stoermer trial steps."""

STEPPER_MAX_EVALUATIONS: int = 2_000_000
"""Right-hand side evaluation budget of one stepper instance."""
