# MIT License (see LICENSE)
"""
Lightweight timing for simulation ticks.

Records wall time spent in named phases of a tick (force accumulation,
integration, trail capture) and how many fixed steps each tick ran.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    ...
    sim.tick(1 / 60)
    print(profiler.stats.summary())
"""
from __future__ import annotations
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
import time
from typing import Iterator

# Length cap for every sample series
MAX_SAMPLES = 10_000


@dataclass
class ProfileStats:
    """
    Raw timing samples per section plus per-tick step counts.

    Only the latest ``max_samples`` entries of each series are kept, so a
    long interactive session does not grow without bound.
    """
    max_samples: int = MAX_SAMPLES
    samples: dict[str, deque[float]] = field(default_factory=dict)
    steps_per_tick: deque[int] = field(init=False)

    def __post_init__(self) -> None:
        if self.max_samples < 1:
            raise ValueError(f"max_samples must be at least 1, got {self.max_samples}")
        self.steps_per_tick = deque(maxlen=self.max_samples)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        self.samples.setdefault(name, deque(maxlen=self.max_samples)).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics for every recorded section.
        
        Returns:
            Mapping of section name to {'n', 'mean_ms', 'max_ms', 'total_ms'},
            plus a 'steps' entry with {'ticks', 'mean', 'max'} once a tick
            has been recorded.
        """
        out: dict[str, dict[str, float]] = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * sum(times),
            }
        if self.steps_per_tick:
            counts = self.steps_per_tick
            out["steps"] = {
                "ticks": len(counts),
                "mean": sum(counts) / len(counts),
                "max": max(counts),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()
        self.steps_per_tick.clear()


class Profiler:
    """Context-manager based section timer."""

    def __init__(self, max_samples: int = MAX_SAMPLES) -> None:
        self.stats = ProfileStats(max_samples=max_samples)

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def record_tick(self, steps: int) -> None:
        self.stats.steps_per_tick.append(steps)
