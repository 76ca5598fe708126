# MIT License (see LICENSE)
"""
Bounded position history for drawing motion trails.

Each body owns a Trail. The simulation appends one point per rendered
tick; once the buffer is full the oldest point is evicted. Points are
always ordered oldest first, newest last, which is the order a renderer
strokes them in.
"""
from __future__ import annotations
from collections import deque
from typing import Iterator, NamedTuple

import numpy as np

from .constants import DEFAULT_TRAIL_CAPACITY


class TrailPoint(NamedTuple):
    """A recorded position and the simulation time it was taken at."""
    x: float
    y: float
    time: float


class Trail:
    """
    Fixed-capacity ring buffer of TrailPoints.
    
    Example:
        trail = Trail(capacity=3)
        for t in range(5):
            trail.record((t, 0.0), float(t))
        [p.x for p in trail]  # [2.0, 3.0, 4.0]
    """

    def __init__(self, capacity: int = DEFAULT_TRAIL_CAPACITY) -> None:
        self._points: deque[TrailPoint] = deque(maxlen=validate_capacity(capacity))

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def record(self, position, time: float) -> None:
        """Append a position, evicting the oldest point when full."""
        self._points.append(TrailPoint(float(position[0]), float(position[1]), float(time)))

    def points(self) -> list[TrailPoint]:
        """Snapshot of the stored points, newest last."""
        return list(self._points)

    def positions(self) -> np.ndarray:
        """Stored positions as an (n, 2) float64 array, newest last."""
        if not self._points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self._points], dtype=np.float64)

    def latest(self) -> TrailPoint | None:
        return self._points[-1] if self._points else None

    def clear(self) -> None:
        self._points.clear()

    def resize(self, capacity: int) -> None:
        """Change capacity, keeping the newest points that still fit."""
        self._points = deque(self._points, maxlen=validate_capacity(capacity))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrailPoint]:
        return iter(self._points)


def validate_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or int(capacity) != capacity or capacity <= 0:
        raise ValueError(f"Trail capacity must be a positive integer, got {capacity!r}")
    return int(capacity)
