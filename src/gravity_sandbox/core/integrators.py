# MIT License (see LICENSE)
"""
Numerical integrators for point masses.

Both schemes solve dx/dt = v, dv/dt = F/m with the force held constant over
the step (it was accumulated just before).

Available integrators:
- semi_implicit_euler_step: velocity first, then position with the new
  velocity (symplectic Euler). The sandbox default.
- constant_acceleration_step: exact kinematics for a constant
  acceleration (second-order Taylor step): position from the old velocity
  plus the half-acceleration term, then velocity. The force is not
  re-evaluated mid-step, so this is not velocity Verlet.

A negative dt runs time backwards, which the speed control uses for
reverse playback.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import Callable

from ..types import PointMass


def semi_implicit_euler_step(body: PointMass, dt: float) -> None:
    """
    Advance one body by dt using semi-implicit Euler.
    
        a = F / m
        v(t+dt) = v(t) + a dt
        x(t+dt) = x(t) + v(t+dt) dt
    
    Args:
        body: Point mass to integrate (modified in-place).
        dt: Timestep in seconds.
    """
    a = body.net_force / body.mass
    body.velocity += a * dt
    body.position += body.velocity * dt


def constant_acceleration_step(body: PointMass, dt: float) -> None:
    """
    Advance one body as if its acceleration were constant over the step.
    
        x(t+dt) = x(t) + v(t) dt + ½ a dt²
        v(t+dt) = v(t) + a dt
    """
    a = body.net_force / body.mass
    body.position += body.velocity * dt + 0.5 * a * dt * dt
    body.velocity += a * dt


INTEGRATORS: dict[str, Callable[[PointMass, float], None]] = {
    "semi_implicit_euler": semi_implicit_euler_step,
    "constant_acceleration": constant_acceleration_step,
}


def get_integrator(name: str) -> Callable[[PointMass, float], None]:
    """Look up an integrator by name, raising ValueError if unknown."""
    try:
        return INTEGRATORS[name]
    except KeyError:
        raise ValueError(f"Unknown integrator: {name}") from None
