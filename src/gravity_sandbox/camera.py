# MIT License (see LICENSE)
"""
2D camera mapping between screen pixels and simulation meters.

Screen coordinates are canvas-local pixels with the origin at the top-left
corner and y pointing down. The camera's ``center`` is the simulation point
shown at the middle of the viewport, and ``zoom`` is the number of screen
pixels per simulation meter (larger zoom = more magnified).
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math

import numpy as np

from .constants import MIN_ZOOM, ZOOM_SPEED
from .types import AxisAlignedBox, PointMass
from .util import f64


@dataclass
class Camera:
    """
    View transform for rendering and pointer input.
    
    Attributes:
        center: Simulation-space point at the visual center of the viewport.
        zoom: Screen pixels per simulation meter. Must be positive.
        viewport_size: Viewport (width, height) in pixels.
    """
    center: np.ndarray | tuple[float, float] = (0.0, 0.0)
    zoom: float = 1.0
    viewport_size: tuple[float, float] = (800.0, 600.0)
    min_zoom: float = field(default=MIN_ZOOM, repr=False)

    def __post_init__(self) -> None:
        self.center = f64(self.center)
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise ValueError(f"Camera zoom must be positive, got {self.zoom}")
        self.set_viewport_size(*self.viewport_size)

    def set_viewport_size(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport size must be positive, got ({width}, {height})")
        self.viewport_size = (float(width), float(height))

    @property
    def viewport_pixel_center(self) -> np.ndarray:
        return f64((self.viewport_size[0] / 2, self.viewport_size[1] / 2))

    def screen_to_simulation(self, screen_point) -> np.ndarray:
        """sim = center + (screen - viewport_center) / zoom."""
        offset = f64(screen_point) - self.viewport_pixel_center
        return self.center + offset / self.zoom

    def simulation_to_screen(self, point) -> np.ndarray:
        """Inverse of screen_to_simulation."""
        return (f64(point) - self.center) * self.zoom + self.viewport_pixel_center

    def pan(self, screen_dx: float, screen_dy: float) -> None:
        """
        Drag the view by a screen-space delta.
        
        The center moves opposite to the cursor so the content follows it.
        """
        self.center[0] -= screen_dx / self.zoom
        self.center[1] -= screen_dy / self.zoom

    def zoom_at(self, wheel_delta: float, screen_x: float, screen_y: float) -> None:
        """
        Zoom by a wheel delta, keeping the point under (screen_x, screen_y) fixed.
        
        Zoom is multiplied by 2^(-wheel_delta * ZOOM_SPEED), floored at min_zoom.
        """
        anchor = (screen_x, screen_y)
        before = self.screen_to_simulation(anchor)
        self.zoom = max(self.zoom * 2.0 ** (-wheel_delta * ZOOM_SPEED), self.min_zoom)
        # Re-center so the same simulation point lands under the anchor again
        offset = f64(anchor) - self.viewport_pixel_center
        self.center = before - offset / self.zoom

    def visible_rectangle(self) -> AxisAlignedBox:
        """Simulation-space rectangle currently covered by the viewport."""
        w, h = self.viewport_size
        return AxisAlignedBox.around(self.center, w / self.zoom / 2, h / self.zoom / 2)

    def is_visible(self, body: PointMass) -> bool:
        """True unless the body is entirely outside the viewport."""
        return body.bounds().intersects(self.visible_rectangle())
