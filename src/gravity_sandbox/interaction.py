# MIT License (see LICENSE)
"""
Pointer interaction: picking, dragging and flinging bodies.

A pointer session is a small state machine:

    IDLE --pointer_down on a body--> DRAGGING_BODY   --end_drag--> IDLE
    IDLE --pointer_down elsewhere--> DRAGGING_VIEWPORT --end_drag--> IDLE

While a body is dragged it is locked: the scheduler neither accumulates
force into it nor integrates it, and pointer motion moves it directly.
On release the average pointer velocity over the last FLING_WINDOW seconds
becomes the body's new velocity.

All pointer deltas are in screen pixels; the controller converts them with
the simulation camera's zoom.
"""
from __future__ import annotations
from collections import deque
from enum import Enum
import logging
import time
from typing import Callable

import numpy as np

from .constants import FLING_WINDOW
from .simulation import Simulation
from .types import PointMass
from .util import zeros2

logger = logging.getLogger(__name__)


class DragMode(Enum):
    IDLE = "idle"
    DRAGGING_VIEWPORT = "dragging_viewport"
    DRAGGING_BODY = "dragging_body"


class FlingTracker:
    """
    Sliding window of recent pointer deltas.

    Each sample is (timestamp, dx, dy), where the delta covers the time since
    the previous sample (or since begin() for the first one). Samples older
    than ``window`` seconds are discarded on every record/query.

    Example:
        tracker = FlingTracker(window=0.075)
        tracker.begin(0.0)
        tracker.record(10, 0, 0.01)
        tracker.record(10, 0, 0.02)
        tracker.velocity(0.02)  # array([1000., 0.]) pixels/second
    """

    def __init__(self, window: float = FLING_WINDOW) -> None:
        if window <= 0:
            raise ValueError(f"Fling window must be positive, got {window}")
        self.window = float(window)
        self._samples: deque[tuple[float, float, float]] = deque()
        # Time at which the oldest retained delta started accumulating
        self._start = 0.0

    def begin(self, now: float) -> None:
        """Start a new gesture at ``now``."""
        self._samples.clear()
        self._start = float(now)

    def clear(self) -> None:
        self._samples.clear()

    def record(self, dx: float, dy: float, now: float) -> None:
        self._samples.append((float(now), float(dx), float(dy)))
        self._prune(now)

    def _prune(self, now: float) -> None:
        cutoff = now - self.window
        while self._samples and self._samples[0][0] < cutoff:
            self._start = self._samples.popleft()[0]

    def __len__(self) -> int:
        return len(self._samples)

    def velocity(self, now: float) -> np.ndarray:
        """
        Average pointer velocity over the recency window, in pixels/second.

        Total displacement of the retained samples divided by the time they
        span (never more than the window). Zero when no samples remain.
        """
        self._prune(now)
        if not self._samples:
            return zeros2()
        span = now - max(self._start, now - self.window)
        if span <= 0:
            return zeros2()
        dx = sum(s[1] for s in self._samples)
        dy = sum(s[2] for s in self._samples)
        return np.array([dx / span, dy / span], dtype=np.float64)


class InteractionController:
    """
    Translates pointer gestures into simulation and camera changes.

    Attributes:
        simulation: The world being manipulated.
        clock: Wall-clock source in seconds, used to timestamp pointer moves.
        fling: Window of recent pointer motion.
        mode: Current DragMode.
        body_id: Id of the held body while in DRAGGING_BODY.
    """

    def __init__(
        self,
        simulation: Simulation,
        clock: Callable[[], float] = time.perf_counter,
        fling_window: float = FLING_WINDOW,
    ) -> None:
        self.simulation = simulation
        self.clock = clock
        self.fling = FlingTracker(fling_window)
        self.mode = DragMode.IDLE
        self.body_id: int | None = None

    @property
    def held_body(self) -> PointMass | None:
        """The dragged body, or None (also once it has been removed)."""
        if self.body_id is None:
            return None
        return self.simulation.get_body(self.body_id)

    def pointer_down(self, screen_x: float, screen_y: float) -> DragMode:
        """
        Start a gesture at a screen position.

        Grabs the first body under the pointer unless it is uninteractable;
        otherwise starts panning the viewport.
        """
        if self.mode is not DragMode.IDLE:
            self.end_drag()

        body_id = self.simulation.pick_body_at_screen_point(screen_x, screen_y)
        if body_id is not None and self.begin_drag(body_id):
            return self.mode

        self.mode = DragMode.DRAGGING_VIEWPORT
        self.fling.begin(self.clock())
        return self.mode

    def begin_drag(self, body_id: int) -> bool:
        """
        Lock a body and start dragging it.

        Returns:
            False if the body does not exist or is uninteractable.
        """
        body = self.simulation.get_body(body_id)
        if body is None or body.uninteractable:
            return False
        if self.mode is not DragMode.IDLE:
            self.end_drag()

        body.locked = True
        self.body_id = body_id
        self.mode = DragMode.DRAGGING_BODY
        self.fling.begin(self.clock())
        self.simulation.dirty = True
        logger.debug("Dragging body %d", body_id)
        return True

    def drag_move(self, screen_dx: float, screen_dy: float) -> None:
        """Apply a pointer movement to the camera or the held body."""
        if self.mode is DragMode.IDLE:
            return
        self.fling.record(screen_dx, screen_dy, self.clock())

        if self.mode is DragMode.DRAGGING_VIEWPORT:
            self.simulation.pan(screen_dx, screen_dy)
            return

        body = self.held_body
        if body is None:
            return
        zoom = self.simulation.camera.zoom
        body.move_by(screen_dx / zoom, screen_dy / zoom)
        self.simulation.dirty = True

    def end_drag(self) -> np.ndarray | None:
        """
        Finish the gesture.

        A held body is released with the fling velocity (converted to m/s),
        its net force cleared and its lock lifted.

        Returns:
            The release velocity, or None when no body was released.
        """
        released = None
        if self.mode is DragMode.DRAGGING_BODY:
            body = self.held_body
            if body is not None:
                pixels_per_second = self.fling.velocity(self.clock())
                body.velocity[:] = pixels_per_second / self.simulation.camera.zoom
                body.clear_force()
                body.locked = False
                released = body.velocity.copy()
                self.simulation.dirty = True
                logger.debug("Released body %d with velocity %s", body.id, released)
        self._reset()
        return released

    def cancel(self) -> None:
        """Abort the gesture; a held body is unlocked with its velocity untouched."""
        body = self.held_body
        if self.mode is DragMode.DRAGGING_BODY and body is not None:
            body.locked = False
        self._reset()

    def _reset(self) -> None:
        self.mode = DragMode.IDLE
        self.body_id = None
        self.fling.clear()
