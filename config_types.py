# config_types.py
"""
Configuration Dataclasses for the Coulomb Engine
================================================

Typed container for every tunable of the engine: accuracy targets,
regime thresholds and integrator settings. Defaults come from
constants.py, so a bare CoulombConfig() reproduces the standard engine.

Instances are frozen and validated at construction time, which makes the
module-level DEFAULT_CONFIG safe to share between any number of callers.

Usage:
    cfg = CoulombConfig.from_params(params)
    tight = cfg.replace(accuracy=2.0 ** -49)

The params dict mirrors the YAML layout read by config_loader.py:

    accuracy:
      analytic: 3.55e-15
      integrator: 2.5e-13
    regions:
      series_rho_base: 4.0
      ...
    integrator:
      initial_step: 0.25
      start_fraction: 0.5
"""

from __future__ import annotations
import dataclasses
import math
from dataclasses import dataclass
from typing import List

from constants import (
    ASYMPTOTIC_RHO_BASE,
    DEFAULT_ACCURACY,
    INTEGRATOR_ACCURACY,
    INTEGRATOR_INITIAL_STEP,
    INTEGRATOR_START_FRACTION,
    SERIES_ETA_RHO_BASE,
    SERIES_ETA_RHO_PER_L,
    SERIES_RHO_BASE,
    SERIES_RHO_PER_SQRT_L,
    ZERO_SERIES_ETA_RHO,
    ZERO_SERIES_REPULSIVE_ETA_RHO,
    ZERO_SERIES_RHO,
)
from errors import check_accuracy

_REGION_FIELDS = (
    'series_rho_base',
    'series_rho_per_sqrt_l',
    'series_eta_rho_base',
    'series_eta_rho_per_l',
    'zero_series_rho',
    'zero_series_eta_rho',
    'zero_series_repulsive_eta_rho',
    'asymptotic_rho_base',
)


@dataclass(frozen=True)
class CoulombConfig:
    """Configuration for one Coulomb wave function evaluation.

    Attributes
    ----------
    accuracy : float
        Relative accuracy of series, continued fractions and asymptotics.
    integrator_accuracy : float
        Per-step relative accuracy of the ODE fallback integrator.
    series_rho_base, series_rho_per_sqrt_l : float
        F power series is used for ρ < base + per_sqrt_l·√L ...
    series_eta_rho_base, series_eta_rho_per_l : float
        ... and |ηρ| < base + per_l·L.
    zero_series_rho, zero_series_eta_rho : float
        L=0 series for F and G is used for ρ < zero_series_rho and
        |ηρ| < zero_series_eta_rho.
    zero_series_repulsive_eta_rho : float
        Tighter bound on ηρ for η > 0, where G loses digits to cancellation.
    asymptotic_rho_base : float
        Asymptotic expansion is used for ρ > base + (L² + η²)/2.
    integrator_initial_step : float
        First step size of the Coulomb integrations.
    integrator_start_fraction : float
        Outward integration starts at this fraction of the series radius.
    """
    accuracy: float = DEFAULT_ACCURACY
    integrator_accuracy: float = INTEGRATOR_ACCURACY
    series_rho_base: float = SERIES_RHO_BASE
    series_rho_per_sqrt_l: float = SERIES_RHO_PER_SQRT_L
    series_eta_rho_base: float = SERIES_ETA_RHO_BASE
    series_eta_rho_per_l: float = SERIES_ETA_RHO_PER_L
    zero_series_rho: float = ZERO_SERIES_RHO
    zero_series_eta_rho: float = ZERO_SERIES_ETA_RHO
    zero_series_repulsive_eta_rho: float = ZERO_SERIES_REPULSIVE_ETA_RHO
    asymptotic_rho_base: float = ASYMPTOTIC_RHO_BASE
    integrator_initial_step: float = INTEGRATOR_INITIAL_STEP
    integrator_start_fraction: float = INTEGRATOR_START_FRACTION

    def __post_init__(self):
        check_accuracy(self.accuracy)
        check_accuracy(self.integrator_accuracy)
        problems = find_config_errors(dataclasses.asdict(self))
        if problems:
            raise ValueError("Invalid CoulombConfig:\n" + "\n".join(f"  - {p}" for p in problems))

    @classmethod
    def from_params(cls, params: dict) -> CoulombConfig:
        """Create CoulombConfig from params dict."""
        acc = params.get('accuracy', {}) or {}
        regions = params.get('regions', {}) or {}
        integ = params.get('integrator', {}) or {}

        kwargs = {
            'accuracy': float(acc.get('analytic', DEFAULT_ACCURACY)),
            'integrator_accuracy': float(acc.get('integrator', INTEGRATOR_ACCURACY)),
            'integrator_initial_step': float(integ.get('initial_step', INTEGRATOR_INITIAL_STEP)),
            'integrator_start_fraction': float(integ.get('start_fraction', INTEGRATOR_START_FRACTION)),
        }
        for name in _REGION_FIELDS:
            if name in regions:
                kwargs[name] = float(regions[name])
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Convert to dict for serialization (same layout as from_params)."""
        return {
            'accuracy': {
                'analytic': self.accuracy,
                'integrator': self.integrator_accuracy,
            },
            'regions': {name: getattr(self, name) for name in _REGION_FIELDS},
            'integrator': {
                'initial_step': self.integrator_initial_step,
                'start_fraction': self.integrator_start_fraction,
            },
        }

    def replace(self, **changes) -> CoulombConfig:
        """Return a copy with some fields changed (validated again)."""
        return dataclasses.replace(self, **changes)


def find_config_errors(values: dict) -> List[str]:
    """
    Check flat CoulombConfig field values and return a list of problems.

    Parameters
    ----------
    values : dict
        Field name -> value, as produced by dataclasses.asdict().

    Returns
    -------
    List[str]
        Validation error messages. Empty if valid.
    """
    errors = []

    for name in ('accuracy', 'integrator_accuracy'):
        if name in values:
            try:
                check_accuracy(values[name])
            except (ValueError, TypeError) as exc:
                errors.append(f"{name}: {exc}")

    for name in _REGION_FIELDS:
        if name not in values:
            continue
        value = values[name]
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
            errors.append(f"{name} must be a finite non-negative number, got {value!r}")

    step = values.get('integrator_initial_step', INTEGRATOR_INITIAL_STEP)
    if not isinstance(step, (int, float)) or not (step > 0 and math.isfinite(step)):
        errors.append(f"integrator_initial_step must be > 0, got {step!r}")

    fraction = values.get('integrator_start_fraction', INTEGRATOR_START_FRACTION)
    if not isinstance(fraction, (int, float)) or not (0.0 < fraction < 1.0):
        errors.append(f"integrator_start_fraction must lie in (0, 1), got {fraction!r}")

    return errors


DEFAULT_CONFIG = CoulombConfig()
"""Shared default configuration."""
