# MIT License (see LICENSE)
"""
Energy and momentum accounting.

Diagnostic only. The penalty collision model is inelastic and the
integrator is first order, so none of these quantities are exactly
conserved. Pure gravity between well separated bodies conserves linear
momentum to rounding error, which the tests rely on.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..constants import G
from ..types import PointMass
from ..util import distance, norm


@dataclass
class Energy:
    """
    Energy breakdown of a system.
    
    Attributes:
        kinetic: Σ ½ m v², in joules.
        gravitational: Σ over pairs of -G mA mB / r, in joules.
    """
    kinetic: float = 0.0
    gravitational: float = 0.0

    def total(self) -> float:
        return self.kinetic + self.gravitational


def kinetic_energy(bodies: Sequence[PointMass]) -> float:
    """T = Σ ½ m v²."""
    ke = 0.0
    for b in bodies:
        ke += 0.5 * b.mass * float(np.dot(b.velocity, b.velocity))
    return ke


def gravitational_potential_energy(bodies: Sequence[PointMass]) -> float:
    """
    U = Σ_{i<j} -G mi mj / r.
    
    Each pair is counted once. Coincident pairs are skipped, matching the
    force model.
    """
    u = 0.0
    n = len(bodies)
    for i in range(n):
        a = bodies[i]
        for j in range(i + 1, n):
            b = bodies[j]
            r = distance(a.position, b.position)
            if r == 0.0:
                continue
            u -= G * a.mass * b.mass / r
    return u


def total_energy(bodies: Sequence[PointMass]) -> Energy:
    return Energy(
        kinetic=kinetic_energy(bodies),
        gravitational=gravitational_potential_energy(bodies),
    )


def linear_momentum(bodies: Sequence[PointMass]) -> np.ndarray:
    """P = Σ m v, in kg·m/s."""
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        p += b.mass * b.velocity
    return p


def momentum_magnitude_sum(bodies: Sequence[PointMass]) -> float:
    """Σ m |v|. A scalar activity readout; not a conserved quantity."""
    return sum(b.mass * norm(b.velocity) for b in bodies)
