# MIT License (see LICENSE)
"""
gravity_sandbox - An interactive 2D gravity sandbox engine.

Point masses attract each other gravitationally and resist overlapping
through a penalty force. The engine steps at a fixed timestep decoupled
from the frame rate, and provides the camera transform and pointer
interaction (pick, drag, fling) a front end needs. It does not draw.

Main entry points:
    - Simulation: The world, its bodies and the fixed-step loop.
    - PointMass: A circular body with mass, position and velocity.
    - Camera: Screen/simulation coordinate mapping.
    - InteractionController: Pointer gestures.

Submodules:
    - core: Force model, integrators, scheduler, diagnostics.
    - io: JSON presets.
    - renderer: Optional rendering adapters.

Example:
    from gravity_sandbox import Simulation, PointMass

    sim = Simulation()
    sim.add_body(PointMass(mass=5.972e24, radius=6.371e6))
    sim.add_body(PointMass(mass=1, radius=10, position=(0, -6.371e6 - 200), velocity=(100, 0)))
    sim.tick(1 / 60)
"""
import logging

from .simulation import Simulation, DuplicateBodyError
from .types import PointMass, AxisAlignedBox
from .trail import Trail, TrailPoint
from .camera import Camera
from .interaction import InteractionController, DragMode, FlingTracker
from .core.scheduler import StepScheduler, clamp_frame_delta

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core simulation
    "Simulation",
    "DuplicateBodyError",
    "PointMass",
    "StepScheduler",
    "clamp_frame_delta",
    # Geometry and trails
    "AxisAlignedBox",
    "Trail",
    "TrailPoint",
    # View and input
    "Camera",
    "InteractionController",
    "DragMode",
    "FlingTracker",
]
