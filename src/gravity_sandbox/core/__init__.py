# MIT License (see LICENSE)
"""
Core simulation components.

This subpackage provides:
    - Force model: pairwise gravity and collision penalty.
    - Integrators: semi-implicit Euler (default) and a constant-acceleration step.
    - Scheduler: fixed-step accumulator and speed control.
    - Invariants: energy and momentum diagnostics.

Typical usage:
    from gravity_sandbox.core import accumulate_net_forces, semi_implicit_euler_step

    accumulate_net_forces(bodies, recipients=range(len(bodies)))
    for b in bodies:
        semi_implicit_euler_step(b, dt=1/60)
"""
from .forces import (
    gravity_force,
    penalty_force,
    pairwise_forces,
    accumulate_net_forces,
)
from .integrators import semi_implicit_euler_step, constant_acceleration_step, get_integrator
from .invariants import (
    Energy,
    kinetic_energy,
    gravitational_potential_energy,
    total_energy,
    linear_momentum,
    momentum_magnitude_sum,
)
from .scheduler import StepScheduler, clamp_frame_delta

__all__ = [
    # Forces
    "gravity_force",
    "penalty_force",
    "pairwise_forces",
    "accumulate_net_forces",
    # Integrators
    "semi_implicit_euler_step",
    "constant_acceleration_step",
    "get_integrator",
    # Diagnostics
    "Energy",
    "kinetic_energy",
    "gravitational_potential_energy",
    "total_energy",
    "linear_momentum",
    "momentum_magnitude_sum",
    # Scheduling
    "StepScheduler",
    "clamp_frame_delta",
]
