# run_verification.py
"""
Wronskian Verification Sweep
============================

Evaluates F, F', G, G' over a grid of (L, η, ρ) covering every regime
(power series, tunneling region, Steed, asymptotic) and checks the
Wronskian G F' - F G' = 1 at each point.

Run:
    python run_verification.py
    python run_verification.py --log verification.log --tolerance 1e-9
"""

from __future__ import annotations
import argparse
import sys
import time
from typing import Iterable, Optional, Sequence

import numpy as np

from config_types import CoulombConfig, DEFAULT_CONFIG
from coulomb import coulomb
from errors import PrecisionLossError
from logging_config import enable_file_logging, get_logger

logger = get_logger(__name__)

DEFAULT_L_VALUES: Sequence[int] = (0, 1, 2, 5, 10, 20)
DEFAULT_ETA_VALUES: Sequence[float] = (-10.0, -1.0, 0.0, 0.5, 2.0, 10.0)
DEFAULT_RHO_VALUES: Sequence[float] = (0.01, 0.5, 2.0, 6.0, 15.0, 40.0, 120.0)
DEFAULT_TOLERANCE = 1.0e-10


def run_verification(
    L_values: Iterable[int] = DEFAULT_L_VALUES,
    eta_values: Iterable[float] = DEFAULT_ETA_VALUES,
    rho_values: Iterable[float] = DEFAULT_RHO_VALUES,
    tolerance: float = DEFAULT_TOLERANCE,
    config: Optional[CoulombConfig] = None,
) -> float:
    """
    Sweep the grid and return the worst Wronskian deviation |W - 1|
    (inf if any point could not be evaluated).

    Points whose functions overflow or underflow (G = inf or F = 0 deep in
    the tunneling region) are skipped; points where every method fails
    count as failures and are reported.
    """
    config = config or DEFAULT_CONFIG
    print("=== Coulomb Wave Function Verification ===")

    worst = 0.0
    worst_point = None
    n_checked = 0
    n_skipped = 0
    n_failed = 0
    n_bad = 0

    t0 = time.perf_counter()
    for L in L_values:
        for eta in eta_values:
            for rho in rho_values:
                try:
                    pair = coulomb(L, eta, rho, config)
                except PrecisionLossError as exc:
                    n_failed += 1
                    logger.warning("L=%d eta=%g rho=%g: %s (attempted %s)",
                                   L, eta, rho, exc, ", ".join(exc.attempted))
                    continue

                values = np.array([pair.f, pair.f_prime, pair.g, pair.g_prime])
                if not np.all(np.isfinite(values)) or pair.f == 0.0:
                    n_skipped += 1
                    logger.debug("L=%d eta=%g rho=%g: out of double range, skipped", L, eta, rho)
                    continue

                deviation = abs(pair.wronskian - 1.0)
                n_checked += 1
                logger.debug("L=%d eta=%g rho=%g: F=%.15e G=%.15e |W-1|=%.2e",
                             L, eta, rho, pair.f, pair.g, deviation)
                if deviation > tolerance:
                    n_bad += 1
                    logger.warning("Wronskian deviation %.2e at L=%d eta=%g rho=%g",
                                   deviation, L, eta, rho)
                if deviation > worst:
                    worst = deviation
                    worst_point = (L, eta, rho)
    dt = time.perf_counter() - t0

    print(f"Points checked : {n_checked}")
    print(f"Points skipped : {n_skipped} (overflow/underflow)")
    print(f"Points failed  : {n_failed}")
    print(f"Above tolerance: {n_bad} (tolerance {tolerance:.1e})")
    if worst_point is not None:
        print(f"Worst |W - 1|  : {worst:.3e} at L={worst_point[0]}, "
              f"eta={worst_point[1]}, rho={worst_point[2]}")
    print(f"Time           : {dt:.2f} s")

    logger.info("Verification finished: %d checked, %d failed, worst |W-1| = %.3e",
                n_checked, n_failed, worst)
    if n_failed:
        return float("inf")
    return worst


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Coulomb wave function Wronskian sweep")
    parser.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE,
                        help="Maximum accepted |W - 1|")
    parser.add_argument("--config", type=str, metavar="PATH",
                        help="YAML engine configuration")
    parser.add_argument("--log", type=str, metavar="PATH",
                        help="Also write a DEBUG log to PATH")
    args = parser.parse_args(argv)

    if args.log:
        enable_file_logging(args.log)

    config = None
    if args.config:
        from config_loader import load_config
        config = load_config(args.config)

    worst = run_verification(tolerance=args.tolerance, config=config)
    return 0 if worst <= args.tolerance else 1


if __name__ == "__main__":
    sys.exit(main())
