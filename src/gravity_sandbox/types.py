# MIT License (see LICENSE)
"""
Core type definitions for the gravity sandbox.

Defines the fundamental data structures:
- AxisAlignedBox: min/max rectangle used for viewport culling.
- PointMass: the simulated body with mass, kinematic state and display payload.

Bodies follow plain Newtonian point-mass mechanics:
  dx/dt = v
  dv/dt = F/m
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Any

import numpy as np

from .trail import Trail
from .util import f64, zeros2


# =============================================================================
# Bounds
# =============================================================================

@dataclass(frozen=True)
class AxisAlignedBox:
    """
    Axis-aligned rectangle in simulation space.
    
    With the screen's y axis pointing down, ``min_y`` is the top edge.
    
    Attributes:
        min_x, min_y: Left/top corner in meters.
        max_x, max_y: Right/bottom corner in meters.
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def around(cls, center, half_width: float, half_height: float) -> "AxisAlignedBox":
        """Box of the given half extents centered on a point."""
        cx, cy = float(center[0]), float(center[1])
        return cls(cx - half_width, cy - half_height, cx + half_width, cy + half_height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> np.ndarray:
        return f64(((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2))

    def intersects(self, other: "AxisAlignedBox") -> bool:
        """True when the boxes overlap or touch along an edge."""
        return (
            self.min_x <= other.max_x
            and other.min_x <= self.max_x
            and self.min_y <= other.max_y
            and other.min_y <= self.max_y
        )

    def contains(self, point) -> bool:
        return self.min_x <= point[0] <= self.max_x and self.min_y <= point[1] <= self.max_y


# =============================================================================
# Point Mass
# =============================================================================

@dataclass(eq=False)
class PointMass:
    """
    A circular point mass.
    
    Attributes:
        mass: Mass in kg. Must be positive, the integrator divides by it every step.
        radius: Collision and picking radius in meters.
        position: Center [x, y] in meters.
        velocity: Velocity [vx, vy] in m/s.
        color: Display color, passed through to renderers untouched.
        name: Optional display label.
        uninteractable: When True the body cannot be picked up and dragged.
        locked: True while the body is held by the pointer. Locked bodies
                still attract others but are not integrated.
        net_force: Force accumulated for the current step (N).
        trail: Recent positions for rendering.
        id: Stable identifier assigned by Simulation.add_body().
    
    Equality is identity: two bodies with the same state are still
    different bodies.
    """
    mass: float
    radius: float = 10.0
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    color: Any = "white"
    name: str = ""
    uninteractable: bool = False

    # Runtime state (not user-specified)
    locked: bool = False
    net_force: np.ndarray = field(default_factory=zeros2)
    trail: Trail = field(default_factory=Trail, repr=False)
    id: int = -1

    def __post_init__(self) -> None:
        """Validate mass/radius and convert vectors to float64 arrays."""
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        if not math.isfinite(self.mass) or self.mass <= 0:
            raise ValueError(f"PointMass mass must be positive and finite, got {self.mass}")
        if not math.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f"PointMass radius must be non-negative, got {self.radius}")
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.net_force = f64(self.net_force)

    def clear_force(self) -> None:
        """Reset the accumulated force for the next step."""
        self.net_force[:] = 0.0

    def move_by(self, dx: float, dy: float) -> "PointMass":
        self.position[0] += dx
        self.position[1] += dy
        return self

    def momentum(self) -> np.ndarray:
        """Linear momentum m·v in kg·m/s."""
        return self.mass * self.velocity

    def bounds(self) -> AxisAlignedBox:
        """Bounding box of the body's circle."""
        return AxisAlignedBox.around(self.position, self.radius, self.radius)

    def contains_point(self, point) -> bool:
        """True when the point lies strictly inside the body's circle."""
        dx = float(point[0] - self.position[0])
        dy = float(point[1] - self.position[1])
        return math.sqrt(dx * dx + dy * dy) < self.radius

    def clone(self) -> "PointMass":
        """
        Copy physical state and display payload into a new, unregistered body.
        
        The clone gets no id, no lock and an empty trail of the same capacity.
        """
        return PointMass(
            mass=self.mass,
            radius=self.radius,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            color=self.color,
            name=self.name,
            uninteractable=self.uninteractable,
            trail=Trail(self.trail.capacity),
        )
