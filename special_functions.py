# special_functions.py
"""
Gamma-Family Special Functions
==============================

Lanczos-approximation based Γ, ln Γ, ψ (digamma) and B (beta) functions for
real and complex arguments.

Lanczos Form
------------
With g = 607/128 (Godfrey's coefficients, see constants.py):

    Γ(z) = √(2π) ((z + g - 1/2)/e)^(z - 1/2) e^(-g) Sum(z)
    Sum(z) = c0 + c1/z + c2/(z+1) + ... + cN/(z+N-1)

Large Arguments
---------------
For |z| beyond a threshold the Stirling series with the Bernoulli table
is used instead (log_gamma_stirling), which stays accurate far up the
imaginary axis where the Coulomb phase shifts σ_L(η) live.

Poles
-----
Γ and ψ have poles at the non-positive integers; asking for a value there
raises errors.DomainError.
"""

from __future__ import annotations
import cmath
import math
from typing import Union

from constants import (
    BERNOULLI,
    FACTORIAL_MAX_ARGUMENT,
    GAMMA_OVERFLOW_ARGUMENT,
    HALF_LOG_TWO_PI,
    LANCZOS_C,
    LANCZOS_EXP_G,
    LANCZOS_G,
    LANCZOS_GP,
    LOG_GAMMA_STIRLING_COMPLEX,
    LOG_GAMMA_STIRLING_REAL,
    SQRT_TWO_PI,
    TWO_PI,
)
from errors import ConvergenceError, DomainError

Number = Union[float, complex]

_LOG_PI = math.log(math.pi)


# =============================================================================
# ELEMENTARY HELPERS
# =============================================================================

def sin_pi(x: float) -> float:
    """sin(πx), reducing x modulo 2 first so large |x| keeps its digits."""
    return math.sin(math.pi * math.fmod(x, 2.0))


def reduce_angle(*terms: float) -> float:
    """
    Sum phase contributions, reducing each modulo 2π before adding.

    sin/cos of the result are then as accurate as the individual terms
    allow, even when one term (typically ρ) is large.
    """
    total = 0.0
    for term in terms:
        total += math.fmod(term, TWO_PI)
    return math.fmod(total, TWO_PI)


def _is_pole(x: float) -> bool:
    return x <= 0.0 and not math.isinf(x) and x == math.floor(x)


def _check_real_argument(x: float, symbol: str) -> None:
    if math.isnan(x) or x == -math.inf:
        raise DomainError(f"{symbol} is undefined for x = {x}")
    if _is_pole(x):
        raise DomainError(f"{symbol} has a pole at x = {x}")


# =============================================================================
# LANCZOS SUMS
# =============================================================================

def lanczos_sum(x: Number) -> Number:
    """Sum(x) = c0 + Σ_{j>=1} c_j/(x + j - 1), for real or complex x."""
    s = LANCZOS_C[0]
    for j in range(1, len(LANCZOS_C)):
        s += LANCZOS_C[j] / (x + (j - 1))
    return s


def lanczos_log_sum_prime(x: Number) -> Number:
    """Sum'(x)/Sum(x), the Lanczos-sum contribution to ψ."""
    s = LANCZOS_C[0]
    sp = 0.0
    for j in range(1, len(LANCZOS_C)):
        zj = x + (j - 1)
        s += LANCZOS_C[j] / zj
        sp -= LANCZOS_C[j] / (zj * zj)
    return sp / s


def _lanczos_gamma(x: float) -> float:
    t = x + LANCZOS_GP
    # split the power so Γ near 171 does not overflow in the intermediate
    half_power = math.pow(t / math.e, 0.5 * (x - 0.5))
    return SQRT_TWO_PI * half_power * (half_power * LANCZOS_EXP_G * lanczos_sum(x))


def _lanczos_log_gamma(x: Number) -> Number:
    if isinstance(x, complex):
        t = x + LANCZOS_GP
        return (x - 0.5) * (cmath.log(t) - 1.0) - LANCZOS_G + HALF_LOG_TWO_PI \
            + cmath.log(lanczos_sum(x))
    t = x + LANCZOS_GP
    return (x - 0.5) * (math.log(t) - 1.0) - LANCZOS_G + HALF_LOG_TWO_PI \
        + math.log(lanczos_sum(x))


def _lanczos_psi(x: Number) -> Number:
    t = x + LANCZOS_GP
    log = cmath.log if isinstance(x, complex) else math.log
    return log(t) - LANCZOS_G / t + lanczos_log_sum_prime(x)


# =============================================================================
# STIRLING SERIES
# =============================================================================

def log_gamma_stirling(z: Number) -> Number:
    """
    Stirling series for ln Γ(z), accurate for large |z| with Re z > 0.

        ln Γ(z) = (z - 1/2) ln z - z + ln √(2π) + Σ B_2k / (2k (2k-1) z^(2k-1))

    Raises
    ------
    ConvergenceError
        If the Bernoulli table is exhausted before the correction stops
        changing the result (|z| too small for this expansion).
    """
    log = cmath.log if isinstance(z, complex) else math.log
    f = (z - 0.5) * log(z) - z + HALF_LOG_TWO_PI

    zsq = z * z
    zp = z
    for k in range(1, len(BERNOULLI)):
        f_old = f
        f += BERNOULLI[k] / ((2 * k) * (2 * k - 1)) / zp
        if f == f_old:
            return f
        zp *= zsq

    raise ConvergenceError(
        f"Stirling series for ln Γ({z}) did not converge",
        method="log_gamma_stirling", iterations=len(BERNOULLI) - 1,
    )


def _psi_stirling(z: Number) -> Number:
    log = cmath.log if isinstance(z, complex) else math.log
    f = log(z) - 0.5 / z

    zsq = z * z
    zp = zsq
    for k in range(1, len(BERNOULLI)):
        f_old = f
        f -= BERNOULLI[k] / (2 * k) / zp
        if f == f_old:
            return f
        zp *= zsq

    raise ConvergenceError(
        f"Asymptotic series for ψ({z}) did not converge",
        method="psi_stirling", iterations=len(BERNOULLI) - 1,
    )


# =============================================================================
# PUBLIC FUNCTIONS
# =============================================================================

def gamma(x: Number) -> Number:
    """
    The Gamma function Γ(x).

    Positive integers return the exactly rounded factorial, so Γ(5) == 24.0.
    Complex arguments are evaluated as exp(ln Γ(z)).

    Raises
    ------
    DomainError
        At the poles x = 0, -1, -2, ...
    """
    if isinstance(x, complex):
        return cmath.exp(log_gamma(x))

    x = float(x)
    _check_real_argument(x, "Γ(x)")
    if x > GAMMA_OVERFLOW_ARGUMENT:
        return math.inf
    if x == math.floor(x) and x <= FACTORIAL_MAX_ARGUMENT:
        return float(math.factorial(int(x) - 1))
    if x < 0.5:
        return math.pi / (sin_pi(x) * gamma(1.0 - x))
    return _lanczos_gamma(x)


def log_gamma(x: Number) -> Number:
    """
    ln Γ(x) for real x (returning ln|Γ(x)| for negative non-integers), or
    the principal-branch ln Γ(z) for complex z with Re z >= 0.

    For Re z < 0 the complex result is obtained by reflection and agrees
    with the principal branch modulo 2πi.
    """
    if isinstance(x, complex):
        if x.imag == 0.0 and _is_pole(x.real):
            raise DomainError(f"ln Γ(z) has a pole at z = {x}")
        if x.real < 0.0:
            return _LOG_PI - cmath.log(cmath.sin(math.pi * x)) - log_gamma(1.0 - x)
        if abs(x) < LOG_GAMMA_STIRLING_COMPLEX:
            return _lanczos_log_gamma(x)
        return log_gamma_stirling(x)

    x = float(x)
    _check_real_argument(x, "ln Γ(x)")
    if x == math.inf:
        return math.inf
    if x < 0.0:
        return _LOG_PI - math.log(abs(sin_pi(x))) - log_gamma(1.0 - x)
    if x < LOG_GAMMA_STIRLING_REAL:
        return _lanczos_log_gamma(x)
    return log_gamma_stirling(x)


def psi(x: Number) -> Number:
    """
    The digamma function ψ(x) = d ln Γ(x)/dx, real or complex.

    Raises
    ------
    DomainError
        At the poles x = 0, -1, -2, ...
    """
    if isinstance(x, complex):
        if x.imag == 0.0 and _is_pole(x.real):
            raise DomainError(f"ψ(z) has a pole at z = {x}")
        if x.real < 0.0:
            return psi(1.0 - x) - math.pi / cmath.tan(math.pi * x)
        if abs(x) < LOG_GAMMA_STIRLING_COMPLEX:
            return _lanczos_psi(x)
        return _psi_stirling(x)

    x = float(x)
    _check_real_argument(x, "ψ(x)")
    if x == math.inf:
        return math.inf
    if x < 0.0:
        return psi(1.0 - x) - math.pi / math.tan(math.pi * math.fmod(x, 1.0))
    if x < LOG_GAMMA_STIRLING_REAL:
        return _lanczos_psi(x)
    return _psi_stirling(x)


def _check_beta_arguments(x: float, y: float) -> None:
    if not (x > 0.0 and y > 0.0):
        raise DomainError(f"Beta function requires x > 0 and y > 0, got x={x}, y={y}")


def beta(x: float, y: float) -> float:
    """
    The Beta function B(x, y) = Γ(x)Γ(y)/Γ(x+y) for x, y > 0.

    The Lanczos factors are combined before exponentiation, so B stays
    finite even where the individual Γ values overflow:

        B = √(2π) e^(1/2-g) (tx/txy)^x (ty/txy)^y √(txy/(tx ty))
            Sum(x) Sum(y) / Sum(x+y),     t· = · + g - 1/2
    """
    x = float(x)
    y = float(y)
    _check_beta_arguments(x, y)

    tx = x + LANCZOS_GP
    ty = y + LANCZOS_GP
    txy = x + y + LANCZOS_GP
    return SQRT_TWO_PI * math.exp(0.5 - LANCZOS_G) \
        * math.pow(tx / txy, x) * math.pow(ty / txy, y) * math.sqrt(txy / tx / ty) \
        * lanczos_sum(x) * lanczos_sum(y) / lanczos_sum(x + y)


def log_beta(x: float, y: float) -> float:
    """ln B(x, y) for x, y > 0."""
    x = float(x)
    y = float(y)
    _check_beta_arguments(x, y)

    tx = x + LANCZOS_GP
    ty = y + LANCZOS_GP
    txy = x + y + LANCZOS_GP
    return HALF_LOG_TWO_PI + 0.5 - LANCZOS_G \
        + x * math.log(tx / txy) + y * math.log(ty / txy) + 0.5 * math.log(txy / tx / ty) \
        + math.log(lanczos_sum(x)) + math.log(lanczos_sum(y)) - math.log(lanczos_sum(x + y))
