# MIT License (see LICENSE)
"""
The simulation world and its fixed-step loop.

The Simulation class owns:
- The body set, in insertion order, with stable integer ids.
- The step scheduler (timestep, update rate, carried fraction).
- The camera used by renderers and pointer input.
- The simulation clock, the running flag and the dirty flag.

Each animation frame the driver calls tick(elapsed). A tick:
    1. Clamps the wall-clock delta and asks the scheduler for a step count.
    2. Snapshots the body list and the indices of unlocked bodies, once.
    3. Runs that many fixed steps on the snapshot. Every step first
       accumulates forces for all recipients, then integrates them.
    4. Records trail points when the surface is visible.

Structure:
    - Caller creates a Simulation.
    - Caller adds bodies via add_body().
    - Caller calls sim.tick(dt) once per frame and redraws when
      consume_dirty() is True.
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass, field
import logging
from typing import Sequence

import numpy as np

from .camera import Camera
from .constants import (
    DEFAULT_SPRING_CONSTANT,
    DEFAULT_TRAIL_CAPACITY,
    MAX_FRAME_DELTA,
)
from .core.forces import PENALTY_MODELS, accumulate_net_forces
from .core.integrators import get_integrator
from .core.invariants import Energy, linear_momentum, total_energy
from .core.scheduler import StepScheduler
from .profiler import Profiler
from .trail import validate_capacity
from .types import AxisAlignedBox, PointMass
from .util import distance, is_finite

logger = logging.getLogger(__name__)


class DuplicateBodyError(ValueError):
    """Raised when a body that is already in the simulation is added again."""


@dataclass
class Simulation:
    """
    Gravity sandbox world.

    Attributes:
        scheduler: Fixed-step accumulator. Holds timestep and update rate.
        integrator: Integration scheme ("semi_implicit_euler" or "constant_acceleration").
        penalty: Collision penalty model ("lighter_mass" or "spring").
        spring_constant: Spring constant for the "spring" penalty model (N/m).
        trail_capacity: Trail length given to bodies when they are added.
        max_frame_delta: Upper bound on the wall time one tick may consume (s).
        camera: View transform for rendering and input.
        profiler: Optional Profiler instance for timing statistics.
    """
    scheduler: StepScheduler = field(default_factory=StepScheduler)
    integrator: str = "semi_implicit_euler"
    penalty: str = "lighter_mass"
    spring_constant: float = DEFAULT_SPRING_CONSTANT
    trail_capacity: int = DEFAULT_TRAIL_CAPACITY
    max_frame_delta: float = MAX_FRAME_DELTA
    camera: Camera = field(default_factory=Camera)
    profiler: Profiler | None = None

    # Internal state
    bodies: list[PointMass] = field(default_factory=list)
    time: float = 0.0
    running: bool = True
    dirty: bool = True
    steps_taken: int = 0

    def __post_init__(self) -> None:
        """Validate configuration and build lookup tables."""
        self._integrate = get_integrator(self.integrator)
        if self.penalty not in PENALTY_MODELS:
            raise ValueError(f"Unknown penalty model: {self.penalty!r}")
        if self.max_frame_delta <= 0:
            raise ValueError(f"max_frame_delta must be positive, got {self.max_frame_delta}")
        self.trail_capacity = validate_capacity(self.trail_capacity)
        self._by_id: dict[int, PointMass] = {}
        # id(body) -> id assigned by this simulation; body.id follows the latest add
        self._ids: dict[int, int] = {}
        self._next_id = 1
        self._non_finite_reported: set[int] = set()
        for body in list(self.bodies):
            self.bodies.remove(body)
            self.add_body(body)

    # ------------------------------------------------------------------
    # Timestep / speed
    # ------------------------------------------------------------------

    @property
    def timestep(self) -> float:
        return self.scheduler.timestep

    @timestep.setter
    def timestep(self, value: float) -> None:
        self.scheduler.set_rate(self.scheduler.updates_per_second, value)

    @property
    def updates_per_second(self) -> float:
        return self.scheduler.updates_per_second

    @updates_per_second.setter
    def updates_per_second(self, value: float) -> None:
        self.scheduler.set_rate(value, self.scheduler.timestep)

    def set_relative_speed(self, signed_exponent: float) -> None:
        """See StepScheduler.set_relative_speed."""
        self.scheduler.set_relative_speed(signed_exponent)

    def speed_relative_to_realtime(self) -> float:
        return self.scheduler.speed_relative_to_realtime()

    # ------------------------------------------------------------------
    # Body set
    # ------------------------------------------------------------------

    def add_body(self, body: PointMass) -> int:
        """
        Add a body to the simulation and assign it a fresh id.

        Args:
            body: The body instance to add.

        Returns:
            The assigned body id.

        Raises:
            DuplicateBodyError: If this body is already in the simulation.
        """
        if id(body) in self._ids:
            raise DuplicateBodyError(f"Body {self._ids[id(body)]} is already in the simulation")
        body.id = self._next_id
        self._next_id += 1
        self._ids[id(body)] = body.id
        if body.trail.capacity != self.trail_capacity:
            body.trail.resize(self.trail_capacity)
        self.bodies.append(body)
        self._by_id[body.id] = body
        self.dirty = True
        logger.info("Added body %d %s(mass=%g, radius=%g)", body.id, body.name, body.mass, body.radius)
        return body.id

    def remove_body(self, body_id: int) -> PointMass | None:
        """
        Remove a body by id. Absent ids are ignored.

        Takes effect from the next tick; a tick never runs concurrently
        with this call.

        Returns:
            The removed body, or None if nothing was removed.
        """
        body = self._by_id.pop(body_id, None)
        if body is None:
            return None
        del self._ids[id(body)]
        self.bodies.remove(body)
        body.locked = False
        self._non_finite_reported.discard(body_id)
        self.dirty = True
        logger.info("Removed body %d", body_id)
        return body

    def get_body(self, body_id: int) -> PointMass | None:
        return self._by_id.get(body_id)

    def __contains__(self, body: PointMass) -> bool:
        return id(body) in self._ids

    def __len__(self) -> int:
        return len(self.bodies)

    def body_at(self, point) -> PointMass | None:
        """
        First body (insertion order) whose circle strictly contains the point.

        Used for pointer picking.
        """
        for b in self.bodies:
            if b.contains_point(point):
                return b
        return None

    def pick_body_at_screen_point(self, screen_x: float, screen_y: float) -> int | None:
        """Id of the body under a screen position, or None."""
        body = self.body_at(self.camera.screen_to_simulation((screen_x, screen_y)))
        return None if body is None else self._ids[id(body)]

    def would_overlap(self, candidate: PointMass) -> bool:
        """
        True if the candidate's circle would interpenetrate any body.

        Callers use this to refuse spawning a body on top of another.
        """
        for b in self.bodies:
            if b is candidate:
                continue
            if distance(b.position, candidate.position) < b.radius + candidate.radius:
                return True
        return False

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def _step(self, bodies: Sequence[PointMass], recipients: Sequence[int]) -> None:
        """
        One fixed step over a snapshot.

        Forces for every recipient are complete before any body moves.
        """
        with self._section("forces"):
            accumulate_net_forces(bodies, recipients, self.penalty, self.spring_constant)

        dt = self.scheduler.timestep
        with self._section("integrate"):
            for i in recipients:
                self._integrate(bodies[i], dt)

        self.time += dt
        self.steps_taken += 1

    def _snapshot(self) -> tuple[list[PointMass], list[int]]:
        """Body list and unlocked indices, taken once per tick."""
        bodies = list(self.bodies)
        recipients = [i for i, b in enumerate(bodies) if not b.locked]
        return bodies, recipients

    def tick(self, elapsed_wall_seconds: float, visible: bool = True) -> None:
        """
        Advance the simulation by the steps owed for a frame.

        Args:
            elapsed_wall_seconds: Wall time since the previous frame. Values
                above max_frame_delta are clamped.
            visible: Whether the host surface is showing. Trail capture is
                skipped while hidden; stepping is not.

        Raises:
            ValueError: If the elapsed time is negative.
        """
        elapsed = float(elapsed_wall_seconds)
        if elapsed < 0:
            raise ValueError(f"Elapsed wall time must be non-negative, got {elapsed}")
        if elapsed > self.max_frame_delta:
            logger.debug("Clamping frame delta %.4fs to %.4fs", elapsed, self.max_frame_delta)
            elapsed = self.max_frame_delta
        if not self.running:
            return

        steps = self.scheduler.steps_for(elapsed)
        if self.profiler is not None:
            self.profiler.record_tick(steps)
        if steps == 0:
            return

        bodies, recipients = self._snapshot()
        for _ in range(steps):
            self._step(bodies, recipients)
        self.dirty = True
        logger.debug("Ran %d steps on %d bodies (%d unlocked), t=%.6g",
                     steps, len(bodies), len(recipients), self.time)

        if visible:
            with self._section("trails"):
                self._record_trails(bodies)
        self._report_non_finite(bodies)

    def step(self) -> None:
        """Run exactly one fixed step, ignoring the running flag and the accumulator."""
        bodies, recipients = self._snapshot()
        self._step(bodies, recipients)
        self.dirty = True
        self._report_non_finite(bodies)

    def _record_trails(self, bodies: Sequence[PointMass]) -> None:
        for b in bodies:
            b.trail.record(b.position, self.time)

    def _report_non_finite(self, bodies: Sequence[PointMass]) -> None:
        for b in bodies:
            body_id = self._ids.get(id(b))
            if body_id is None or body_id in self._non_finite_reported:
                continue
            if not (is_finite(b.position) and is_finite(b.velocity)):
                self._non_finite_reported.add(body_id)
                logger.warning("Body %d has a non-finite state: position=%s velocity=%s",
                               body_id, b.position, b.velocity)

    def pause(self) -> None:
        if self.running:
            self.running = False
            logger.info("Simulation paused at t=%.6g", self.time)

    def resume(self) -> None:
        if not self.running:
            self.running = True
            logger.info("Simulation resumed at t=%.6g", self.time)

    def toggle_running(self) -> None:
        if self.running:
            self.pause()
        else:
            self.resume()

    def is_running(self) -> bool:
        return self.running

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def pan(self, screen_dx: float, screen_dy: float) -> None:
        self.camera.pan(screen_dx, screen_dy)
        self.dirty = True

    def zoom_at(self, wheel_delta: float, screen_x: float, screen_y: float) -> None:
        self.camera.zoom_at(wheel_delta, screen_x, screen_y)
        self.dirty = True

    def screen_to_simulation(self, screen_x: float, screen_y: float) -> np.ndarray:
        return self.camera.screen_to_simulation((screen_x, screen_y))

    def visible_rectangle(self) -> AxisAlignedBox:
        return self.camera.visible_rectangle()

    def visible_bodies(self) -> list[PointMass]:
        """Bodies whose bounds intersect the viewport, in insertion order."""
        view = self.camera.visible_rectangle()
        return [b for b in self.bodies if b.bounds().intersects(view)]

    def set_viewport_size(self, width: float, height: float) -> None:
        self.camera.set_viewport_size(width, height)
        self.dirty = True

    def consume_dirty(self) -> bool:
        """Return whether a redraw is needed and clear the flag."""
        was_dirty = self.dirty
        self.dirty = False
        return was_dirty

    # ------------------------------------------------------------------
    # Trails and diagnostics
    # ------------------------------------------------------------------

    def clear_trails(self) -> None:
        for b in self.bodies:
            b.trail.clear()
        self.dirty = True

    def set_trail_capacity(self, capacity: int) -> None:
        capacity = validate_capacity(capacity)
        for b in self.bodies:
            b.trail.resize(capacity)
        self.trail_capacity = capacity
        self.dirty = True

    def energy(self) -> Energy:
        return total_energy(self.bodies)

    def momentum(self) -> np.ndarray:
        return linear_momentum(self.bodies)
