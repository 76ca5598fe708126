# MIT License (see LICENSE)
"""
Physical and interaction constants used throughout the sandbox.

Physical values are SI. View and input values are expressed in screen
pixels and wall-clock seconds.
"""
from __future__ import annotations

# Newtonian constant of gravitation, m³·kg⁻¹·s⁻².
# Rounded to the value the sandbox presets were tuned against.
G: float = 6.674e-11

# Spring constant for the Hookean collision penalty (N/m).
DEFAULT_SPRING_CONSTANT: float = 10000.0

# Positions kept per body for trail rendering.
DEFAULT_TRAIL_CAPACITY: int = 150

# Camera zoom is in screen pixels per simulation meter.
# A wheel delta of 100 halves or doubles the scale.
ZOOM_SPEED: float = 0.01
MIN_ZOOM: float = 1e-6

# Recent pointer motion that contributes to a fling, in seconds.
FLING_WINDOW: float = 0.075

# Longest wall-clock slice a single tick may consume, in seconds.
MAX_FRAME_DELTA: float = 0.030

# Speed control: relative speed = SPEED_BASE ** |level|.
SPEED_BASE: float = 1.5
COARSE_SPEED_THRESHOLD: float = 1000.0
COARSE_TIMESTEP: float = 0.1
FINE_TIMESTEP: float = 0.02

DEFAULT_UPDATES_PER_SECOND: float = 60.0
