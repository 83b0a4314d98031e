# solution_pair.py
"""
Coulomb Solution Pair
=====================

Container for the values of the regular and irregular Coulomb wave
functions and their ρ-derivatives at one point (L, η, ρ).

Methods that only produce the regular solution (the power series, the
outward integration) leave g and g_prime as NaN; has_irregular tells the
two cases apart.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SolutionPair:
    """Values F, F', G, G' at one (L, η, ρ).

    Attributes
    ----------
    f : float
        Regular solution F_L(η, ρ).
    f_prime : float
        dF/dρ.
    g : float
        Irregular solution G_L(η, ρ), NaN if not computed.
    g_prime : float
        dG/dρ, NaN if not computed.
    """
    f: float
    f_prime: float
    g: float = math.nan
    g_prime: float = math.nan

    @property
    def has_irregular(self) -> bool:
        """True if G and G' were computed."""
        return not (math.isnan(self.g) or math.isnan(self.g_prime))

    @property
    def wronskian(self) -> float:
        """G F' - F G', equal to 1 for correctly normalized solutions."""
        return self.g * self.f_prime - self.f * self.g_prime

    def to_dict(self) -> dict:
        """Convert to dict for serialization."""
        return {
            'f': self.f,
            'f_prime': self.f_prime,
            'g': self.g,
            'g_prime': self.g_prime,
        }
