# config_loader.py
"""
Configuration File Loader for the Coulomb Engine
================================================

YAML-based loading, validation and saving of CoulombConfig, so that the
accuracy targets and regime thresholds of a run can be kept in a file
next to its results.

Usage
-----
```python
from config_loader import load_config
from coulomb import coulomb

config = load_config("engine_config.yaml")
pair = coulomb(3, 2.0, 15.0, config)
```

Configuration Format
--------------------
See examples/engine_config.yaml for a complete template. Every key is
optional; missing keys take the defaults from constants.py.
"""

from __future__ import annotations
import yaml
from pathlib import Path
from typing import Any, Dict, List, Union

from config_types import CoulombConfig, find_config_errors
from logging_config import get_logger

logger = get_logger(__name__)

# section -> {yaml key: CoulombConfig field}
_LAYOUT: Dict[str, Dict[str, str]] = {
    'accuracy': {
        'analytic': 'accuracy',
        'integrator': 'integrator_accuracy',
    },
    'regions': {
        'series_rho_base': 'series_rho_base',
        'series_rho_per_sqrt_l': 'series_rho_per_sqrt_l',
        'series_eta_rho_base': 'series_eta_rho_base',
        'series_eta_rho_per_l': 'series_eta_rho_per_l',
        'zero_series_rho': 'zero_series_rho',
        'zero_series_eta_rho': 'zero_series_eta_rho',
        'zero_series_repulsive_eta_rho': 'zero_series_repulsive_eta_rho',
        'asymptotic_rho_base': 'asymptotic_rho_base',
    },
    'integrator': {
        'initial_step': 'integrator_initial_step',
        'start_fraction': 'integrator_start_fraction',
    },
}


# =============================================================================
# CONFIG LOADING AND VALIDATION
# =============================================================================

def validate_config(params: Dict[str, Any]) -> List[str]:
    """
    Validate a params dict (as read from YAML) and return a list of errors.

    Returns
    -------
    List[str]
        List of validation error messages. Empty if valid.
    """
    errors = []
    values = {}

    if not isinstance(params, dict):
        return [f"Configuration must be a mapping, got {type(params).__name__}"]

    for section, content in params.items():
        if section not in _LAYOUT:
            errors.append(f"Unknown section: '{section}'. Expected one of {sorted(_LAYOUT)}.")
            continue
        if content is None:
            continue
        if not isinstance(content, dict):
            errors.append(f"Section '{section}' must be a mapping")
            continue
        for key, value in content.items():
            field_name = _LAYOUT[section].get(key)
            if field_name is None:
                errors.append(f"Unknown key '{key}' in section '{section}'")
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{section}.{key} must be a number, got {value!r}")
                continue
            values[field_name] = float(value)

    errors.extend(find_config_errors(values))
    return errors


def load_config(path: Union[str, Path]) -> CoulombConfig:
    """
    Load and validate a YAML configuration file.

    Parameters
    ----------
    path : str or Path
        Path to the YAML configuration file.

    Returns
    -------
    CoulombConfig
        Validated configuration object.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    ValueError
        If the configuration is invalid.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from: %s", path)

    with open(path, 'r', encoding='utf-8') as f:
        raw_data = yaml.safe_load(f)

    if raw_data is None:
        raise ValueError(f"Configuration file is empty: {path}")

    errors = validate_config(raw_data)
    if errors:
        for e in errors:
            logger.error("Config %s: %s", path, e)
        raise ValueError("Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors))

    config = CoulombConfig.from_params(raw_data)
    logger.info("Configuration loaded successfully: accuracy=%g, integrator_accuracy=%g",
                config.accuracy, config.integrator_accuracy)
    return config


def save_config(config: CoulombConfig, path: Union[str, Path]) -> None:
    """Write a CoulombConfig as YAML (readable again by load_config)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)

    logger.info("Configuration saved to: %s", path)


def generate_template_config(output_path: Union[str, Path]) -> None:
    """
    Generate a commented template configuration file with the defaults.

    Parameters
    ----------
    output_path : str or Path
        Where to save the template.
    """
    d = CoulombConfig().to_dict()
    acc, reg, integ = d['accuracy'], d['regions'], d['integrator']
    template = f'''# Coulomb Engine Configuration

accuracy:
  analytic: {acc['analytic']!r}       # series, continued fractions, asymptotics
  integrator: {acc['integrator']!r}          # per-step accuracy of the ODE fallback

regions:
  series_rho_base: {reg['series_rho_base']}          # F series: rho < base + per_sqrt_l * sqrt(L)
  series_rho_per_sqrt_l: {reg['series_rho_per_sqrt_l']}
  series_eta_rho_base: {reg['series_eta_rho_base']}      #           |eta*rho| < base + per_l * L
  series_eta_rho_per_l: {reg['series_eta_rho_per_l']}
  zero_series_rho: {reg['zero_series_rho']}          # L=0 series: rho < ..., |eta*rho| < ...
  zero_series_eta_rho: {reg['zero_series_eta_rho']}
  zero_series_repulsive_eta_rho: {reg['zero_series_repulsive_eta_rho']}   # eta > 0: eta*rho < ...
  asymptotic_rho_base: {reg['asymptotic_rho_base']}     # asymptotic: rho > base + (L^2 + eta^2)/2

integrator:
  initial_step: {integ['initial_step']}
  start_fraction: {integ['start_fraction']}          # outward start, fraction of the series radius
'''

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(template)

    logger.info("Template configuration saved to: %s", path)


# =============================================================================
# CLI UTILITIES
# =============================================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Coulomb Engine Configuration File Utilities")
    parser.add_argument("--generate", "-g", type=str, metavar="PATH",
                        help="Generate template config at PATH")
    parser.add_argument("--validate", "-v", type=str, metavar="PATH",
                        help="Validate config file at PATH")

    args = parser.parse_args()

    if args.generate:
        generate_template_config(args.generate)
        print(f"Template saved to: {args.generate}")
    elif args.validate:
        try:
            config = load_config(args.validate)
            print(f"✓ Configuration is valid: {args.validate}")
            print(f"  Accuracy: {config.accuracy:g} (integrator {config.integrator_accuracy:g})")
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"✗ Validation failed: {e}")
    else:
        parser.print_help()
