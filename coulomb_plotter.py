# coulomb_plotter.py
#
# Visualization of Coulomb wave functions and their evaluation regimes.
#
# Usage:
#   python coulomb_plotter.py <L> <eta> <rho_max>
#

import sys

import matplotlib.pyplot as plt
import numpy as np

from config_types import DEFAULT_CONFIG
from coulomb import coulomb, coulomb_on_grid
from coulomb_regime import asymptotic_radius, coulomb_turning_point, series_radius
from errors import PrecisionLossError


def sample_functions(L, eta, rho_max, n_points=400, config=None):
    """
    Tabulates F, F', G, G' on (0, rho_max].
    Returns dict with 'rho', 'F', 'Fp', 'G', 'Gp' arrays.
    """
    rho = np.linspace(rho_max / n_points, rho_max, n_points)
    F, Fp, G, Gp = coulomb_on_grid(L, eta, rho, config)
    return {'rho': rho, 'F': F, 'Fp': Fp, 'G': G, 'Gp': Gp}


def regime_boundaries(L, eta, config=None):
    """Radii where the evaluation method changes, keyed by label."""
    config = config or DEFAULT_CONFIG
    return {
        'series': series_radius(L, eta, config),
        'turning point': coulomb_turning_point(L, eta),
        'asymptotic': asymptotic_radius(L, eta, config),
    }


def plot_wave_functions(L, eta, rho_max, out=None, config=None):
    """
    Plots F_L and G_L against rho with the regime boundaries marked.
    G is clipped where it grows below the turning point.
    """
    data = sample_functions(L, eta, rho_max, config=config)
    rho = data['rho']

    plt.figure(figsize=(10, 6))
    plt.plot(rho, data['F'], 'b-', linewidth=2, label=r"$F_L(\eta,\rho)$")
    plt.plot(rho, data['G'], 'r--', linewidth=2, label=r"$G_L(\eta,\rho)$")

    styles = {'series': 'g:', 'turning point': 'k-.', 'asymptotic': 'm:'}
    for label, radius in regime_boundaries(L, eta, config).items():
        if 0.0 < radius < rho_max:
            plt.axvline(radius, color=styles[label][0], linestyle=styles[label][1:],
                        alpha=0.7, label=f"{label} ({radius:.3g})")

    # F stays bounded, so it sets the visible range
    f_max = np.max(np.abs(data['F']))
    limit = 1.3 * max(f_max, 1.0)
    plt.ylim(-limit, limit)

    plt.xlabel(r"$\rho$", fontsize=12)
    plt.ylabel("Coulomb wave function", fontsize=12)
    plt.title(rf"Coulomb Wave Functions, $L={L}$, $\eta={eta:g}$", fontsize=14)
    plt.legend()
    plt.grid(True, linestyle=':', alpha=0.7)
    plt.tight_layout()

    if out is None:
        out = f"plot_coulomb_L{L}_eta{eta:g}.png"
    plt.savefig(out, dpi=150)
    print(f"   Saved {out}")
    plt.close()
    return out


def plot_wronskian_deviation(L_values, eta, rho_values, out=None, config=None):
    """
    Plots |G F' - F G' - 1| against rho for several L (log scale).
    Points that fail or leave double range are left out.
    """
    plt.figure(figsize=(10, 6))

    for L in L_values:
        rho_ok = []
        deviation = []
        for rho in rho_values:
            try:
                pair = coulomb(L, eta, rho, config)
            except PrecisionLossError:
                continue
            w = pair.wronskian
            if not np.isfinite(w):
                continue
            rho_ok.append(rho)
            # log axis
            deviation.append(max(abs(w - 1.0), 1e-17))
        plt.plot(rho_ok, deviation, '-o', label=f"L={L}", markersize=3)

    plt.xlabel(r"$\rho$", fontsize=12)
    plt.ylabel(r"$|W - 1|$", fontsize=12)
    plt.title(rf"Wronskian Deviation, $\eta={eta:g}$", fontsize=14)
    plt.yscale('log')
    plt.legend()
    plt.grid(True, which="both", linestyle='--', alpha=0.5)
    plt.tight_layout()

    if out is None:
        out = f"plot_wronskian_eta{eta:g}.png"
    plt.savefig(out, dpi=150)
    print(f"   Saved {out}")
    plt.close()
    return out


def main():
    if len(sys.argv) < 4:
        print("Usage: python coulomb_plotter.py <L> <eta> <rho_max>")
        return

    L = int(sys.argv[1])
    eta = float(sys.argv[2])
    rho_max = float(sys.argv[3])

    plot_wave_functions(L, eta, rho_max)
    plot_wronskian_deviation(range(max(L - 2, 0), L + 3), eta,
                             np.linspace(rho_max / 50, rho_max, 50))


if __name__ == "__main__":
    main()
