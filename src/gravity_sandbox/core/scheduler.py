# MIT License (see LICENSE)
"""
Fixed-step scheduling.

The frame driver reports variable wall-clock deltas; physics always advances
in whole steps of ``timestep``. The scheduler converts one into the other
with an accumulator: the fractional part of the step count is carried to the
next tick, so if two frames each ask for 7.5 steps the second one runs 8 and
the total is 15, not 14.

Speed control changes ``timestep`` and ``updates_per_second`` together.
Their product is the speed relative to real time.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math

from ..constants import (
    COARSE_SPEED_THRESHOLD,
    COARSE_TIMESTEP,
    DEFAULT_UPDATES_PER_SECOND,
    FINE_TIMESTEP,
    MAX_FRAME_DELTA,
    SPEED_BASE,
)

logger = logging.getLogger(__name__)

# Step counts within this distance below an integer are rounded up to it.
# Absorbs binary rounding, e.g. 0.1 s at 100 Hz evaluating to 9.999999999999998.
STEP_SNAP: float = 1e-9


@dataclass
class StepScheduler:
    """
    Accumulator that turns elapsed wall time into a number of fixed steps.
    
    Attributes:
        updates_per_second: Steps per wall-clock second. Must be positive.
        timestep: Simulated seconds per step. Negative runs time backwards;
                  zero is rejected.
        rollover: Fractional step carried between ticks, always in [0, 1).
    """
    updates_per_second: float = DEFAULT_UPDATES_PER_SECOND
    timestep: float = 1 / DEFAULT_UPDATES_PER_SECOND
    rollover: float = 0.0

    def __post_init__(self) -> None:
        self._validate(self.updates_per_second, self.timestep)

    def steps_for(self, elapsed_wall_seconds: float) -> int:
        """
        Number of whole steps to run for this tick.
        
        Updates the rollover. The caller is expected to have clamped
        the delta already (see clamp_frame_delta).
        
        Raises:
            ValueError: If the elapsed time is negative or not finite.
        """
        elapsed = float(elapsed_wall_seconds)
        if not math.isfinite(elapsed) or elapsed < 0:
            raise ValueError(f"Elapsed wall time must be a non-negative number, got {elapsed}")

        steps_float = elapsed * self.updates_per_second + self.rollover
        steps = math.floor(steps_float + STEP_SNAP)
        self.rollover = min(max(steps_float - steps, 0.0), math.nextafter(1.0, 0.0))
        return steps

    def reset(self) -> None:
        """Drop any carried fraction."""
        self.rollover = 0.0

    def set_rate(self, updates_per_second: float, timestep: float | None = None) -> None:
        """
        Set the update rate, and the timestep (defaults to 1/rate).
        """
        if timestep is None:
            timestep = 1.0 / updates_per_second if updates_per_second > 0 else 0.0
        self._validate(updates_per_second, timestep)
        self.updates_per_second = float(updates_per_second)
        self.timestep = float(timestep)

    def speed_relative_to_realtime(self) -> float:
        """Simulated seconds per wall-clock second (negative in reverse)."""
        return self.updates_per_second * self.timestep

    def set_relative_speed(self, signed_exponent: float) -> None:
        """
        Map a UI speed level onto timestep and update rate.
        
        The target speed is SPEED_BASE ** |level|, negated for negative
        levels. Above COARSE_SPEED_THRESHOLD the coarse timestep is used to
        keep the step count bounded, trading accuracy for throughput.
        """
        speed = SPEED_BASE ** abs(signed_exponent)
        timestep = COARSE_TIMESTEP if speed > COARSE_SPEED_THRESHOLD else FINE_TIMESTEP
        if signed_exponent < 0:
            timestep = -timestep
        self.timestep = timestep
        self.updates_per_second = speed / abs(timestep)
        logger.info(
            "Speed level %s: %.4gx realtime (timestep=%s, %.4g updates/s)",
            signed_exponent, self.speed_relative_to_realtime(), timestep, self.updates_per_second,
        )

    @staticmethod
    def _validate(updates_per_second: float, timestep: float) -> None:
        if not math.isfinite(updates_per_second) or updates_per_second <= 0:
            raise ValueError(f"updates_per_second must be positive, got {updates_per_second}")
        if not math.isfinite(timestep) or timestep == 0:
            raise ValueError(f"timestep must be non-zero, got {timestep}")


def clamp_frame_delta(delta_ms: float, max_seconds: float = MAX_FRAME_DELTA) -> float:
    """
    Convert a raw animation-frame delta in milliseconds to clamped seconds.
    
    Long stalls (a backgrounded tab) would otherwise ask for a huge burst of
    catch-up steps. Negative deltas clamp to zero.
    """
    seconds = float(delta_ms) / 1000.0
    return min(max(seconds, 0.0), max_seconds)
