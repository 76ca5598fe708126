# MIT License (see LICENSE)
"""
Pairwise force model: Newtonian gravity plus a collision penalty.

Every step evaluates all ordered pairs (i < j) of the body snapshot, so the
cost is O(N²). Each pair contribution is computed once, added to body i and
subtracted from body j (Newton's third law).

Overlapping circles are pushed apart by a penalty force rather than being
resolved exactly. Two penalty models are available:
- "lighter_mass": F = min(mA, mB) * overlap. The overlap is treated as an
  acceleration of the lighter body, so the lighter one is displaced more.
- "spring": F = k * overlap, a Hookean spring with constant k.

Force computation is split in two phases:
1. pairwise_forces() fills a per-body buffer from all bodies (locked ones
   included, they still attract).
2. accumulate_net_forces() copies the buffer rows into the recipients'
   net_force. Locked bodies are never recipients.
"""
from __future__ import annotations
import math
from typing import Iterable, Sequence

import numpy as np

from ..constants import G, DEFAULT_SPRING_CONSTANT
from ..types import PointMass

PENALTY_MODELS = ("lighter_mass", "spring")


def gravity_force(a: PointMass, b: PointMass) -> np.ndarray:
    """
    Gravitational force on ``a`` due to ``b``.
    
    Implements |F| = G mA mB / r², directed from a toward b.
    Coincident bodies contribute nothing.
    """
    dx = float(b.position[0] - a.position[0])
    dy = float(b.position[1] - a.position[1])
    r = math.sqrt(dx * dx + dy * dy)
    if r == 0.0:
        return np.zeros(2, dtype=np.float64)
    # Similar triangles: components scale with dx/r and dy/r
    magnitude = G * a.mass * b.mass / (r * r)
    return np.array([dx * magnitude / r, dy * magnitude / r], dtype=np.float64)


def penalty_force(
    a: PointMass,
    b: PointMass,
    model: str = "lighter_mass",
    spring_constant: float = DEFAULT_SPRING_CONSTANT,
) -> np.ndarray:
    """
    Repulsive force on ``a`` from an overlap with ``b``.
    
    Points from b toward a along the line of centers. Zero when the circles
    do not interpenetrate or the centers coincide.
    """
    if model not in PENALTY_MODELS:
        raise ValueError(f"Unknown penalty model: {model!r}")
    dx = float(b.position[0] - a.position[0])
    dy = float(b.position[1] - a.position[1])
    r = math.sqrt(dx * dx + dy * dy)
    if r == 0.0:
        return np.zeros(2, dtype=np.float64)
    overlap = (a.radius + b.radius) - r
    if overlap <= 0.0:
        return np.zeros(2, dtype=np.float64)
    magnitude = _penalty_magnitude(a, b, overlap, model, spring_constant)
    return np.array([-dx * magnitude / r, -dy * magnitude / r], dtype=np.float64)


def pairwise_forces(
    bodies: Sequence[PointMass],
    model: str = "lighter_mass",
    spring_constant: float = DEFAULT_SPRING_CONSTANT,
) -> np.ndarray:
    """
    Net force on every body from every other body.
    
    Args:
        bodies: Snapshot of all bodies taking part in the step.
        model: Penalty model name (see PENALTY_MODELS).
        spring_constant: Spring constant for the "spring" model.
    
    Returns:
        (N, 2) array; row i is the net force on bodies[i].
    
    Raises:
        ValueError: If the penalty model is unknown.
    """
    if model not in PENALTY_MODELS:
        raise ValueError(f"Unknown penalty model: {model!r}")

    n = len(bodies)
    out = np.zeros((n, 2), dtype=np.float64)
    for i in range(n):
        a = bodies[i]
        ax, ay = float(a.position[0]), float(a.position[1])
        for j in range(i + 1, n):
            b = bodies[j]
            dx = float(b.position[0]) - ax
            dy = float(b.position[1]) - ay
            r = math.sqrt(dx * dx + dy * dy)
            if r == 0.0:
                continue

            # Attraction toward b, then repulsion away from b on overlap
            magnitude = G * a.mass * b.mass / (r * r)
            overlap = (a.radius + b.radius) - r
            if overlap > 0.0:
                magnitude -= _penalty_magnitude(a, b, overlap, model, spring_constant)

            fx = dx * magnitude / r
            fy = dy * magnitude / r
            out[i, 0] += fx
            out[i, 1] += fy
            out[j, 0] -= fx
            out[j, 1] -= fy
    return out


def accumulate_net_forces(
    bodies: Sequence[PointMass],
    recipients: Iterable[int],
    model: str = "lighter_mass",
    spring_constant: float = DEFAULT_SPRING_CONSTANT,
) -> np.ndarray:
    """
    Zero and refill ``net_force`` for the recipient bodies.
    
    Args:
        bodies: All bodies exerting force this step.
        recipients: Indices into ``bodies`` of the bodies that will be integrated.
        model: Penalty model name.
        spring_constant: Spring constant for the "spring" model.
    
    Returns:
        The full (N, 2) force buffer, for diagnostics.
    """
    buffer = pairwise_forces(bodies, model, spring_constant)
    for i in recipients:
        bodies[i].net_force[:] = buffer[i]
    return buffer


def _penalty_magnitude(
    a: PointMass,
    b: PointMass,
    overlap: float,
    model: str,
    spring_constant: float,
) -> float:
    if model == "spring":
        return spring_constant * overlap
    return min(a.mass, b.mass) * overlap
