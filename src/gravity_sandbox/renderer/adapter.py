# MIT License (see LICENSE)
"""
Renderer adapters for the sandbox.

The engine never draws. A renderer receives the camera and the bodies that
survive viewport culling and turns them into whatever output it likes. These
adapters are optional; a canvas or pygame front end would subclass
RendererAdapter the same way.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..camera import Camera
from ..types import PointMass

if TYPE_CHECKING:
    from ..simulation import Simulation


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame(sim.time, sim.camera)
        for body in sim.visible_bodies():
            renderer.draw_body(body)
        renderer.end_frame()

    Or use the convenience method, which also honours the dirty flag:
        renderer.render_simulation(sim)
    """

    @abstractmethod
    def begin_frame(self, time: float, camera: Camera) -> None:
        """
        Begin a new frame.

        Args:
            time: Current simulation time in seconds.
            camera: View transform for mapping bodies to the screen.
        """
        ...

    @abstractmethod
    def draw_body(self, body: PointMass) -> None:
        """Draw one body and its trail."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_simulation(self, simulation: "Simulation", visible: bool = True) -> bool:
        """
        Draw the simulation if it changed since the last frame.

        Nothing is drawn while the surface is hidden; the dirty flag is then
        left set so the first visible frame redraws.

        Returns:
            True if a frame was drawn.
        """
        if not visible or not simulation.consume_dirty():
            return False
        self.begin_frame(simulation.time, simulation.camera)
        for body in simulation.visible_bodies():
            self.draw_body(body)
        self.end_frame()
        return True


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Output:
        === Frame t=1.0000 zoom=6.34e-06 ===
        [1] Earth r=6.371e+06 @ (0.00, 0.00) v=(0.00, 0.00) color=white trail=12
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float, camera: Camera) -> None:
        self.output.write(f"=== Frame t={time:.4f} zoom={camera.zoom:.3g} ===\n")

    def draw_body(self, body: PointMass) -> None:
        pos = body.position
        label = body.name or "body"
        line = f"[{body.id}] {label} r={body.radius:.4g} @ ({pos[0]:.2f}, {pos[1]:.2f})"
        if self.verbose:
            vel = body.velocity
            line += f" v=({vel[0]:.2f}, {vel[1]:.2f}) color={body.color} trail={len(body.trail)}"
            if body.locked:
                line += " [held]"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarks."""

    def begin_frame(self, time: float, camera: Camera) -> None:
        pass

    def draw_body(self, body: PointMass) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records what would be drawn, in screen coordinates.

    Example:
        renderer = BufferedRenderer()
        sim.tick(1 / 60)
        renderer.render_simulation(sim)
        frame = renderer.frames[-1]
        frame["bodies"][0]["screen"]  # [x, y] in pixels
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None
        self._camera: Camera | None = None

    def begin_frame(self, time: float, camera: Camera) -> None:
        self._camera = camera
        self._current_frame = {
            "time": time,
            "zoom": camera.zoom,
            "bodies": [],
        }

    def draw_body(self, body: PointMass) -> None:
        if self._current_frame is None or self._camera is None:
            return
        camera = self._camera
        self._current_frame["bodies"].append({
            "id": body.id,
            "name": body.name,
            "color": body.color,
            "screen": camera.simulation_to_screen(body.position).tolist(),
            "screen_radius": body.radius * camera.zoom,
            "trail": [camera.simulation_to_screen(p).tolist() for p in body.trail.positions()],
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
