# MIT License (see LICENSE)
"""
JSON presets for the sandbox.

A preset describes the simulation parameters, the initial view and the
bodies to add. Loading a preset is the only way bodies enter a Simulation
from outside Python code, and it goes through Simulation.add_body() like
any other body.

JSON Schema Overview:
---------------------
{
  "updates_per_second": float,     # Default: 60
  "timestep": float,               # Seconds per step, default: 1/updates_per_second
  "integrator": string,            # "semi_implicit_euler" or "constant_acceleration"
  "penalty": string,               # "lighter_mass" or "spring"
  "spring_constant": float,        # Only used by the "spring" model
  "trail_capacity": int,           # Default: 150
  "camera": {                      # Optional
    "center": [x, y],              # Default: [0, 0]
    "zoom": float                  # Pixels per meter, default: 1
  },
  "bodies": [
    {
      "mass": float,               # Required, > 0
      "radius": float,             # Default: 10
      "position": [x, y],          # Default: [0, 0]
      "velocity": [vx, vy],        # Default: [0, 0]
      "color": any,                # Default: "white"
      "name": string,              # Optional
      "uninteractable": bool       # Default: false
    }
  ]
}
"""
from __future__ import annotations
import json
import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from ..camera import Camera
from ..constants import DEFAULT_SPRING_CONSTANT, DEFAULT_TRAIL_CAPACITY, DEFAULT_UPDATES_PER_SECOND
from ..core.scheduler import StepScheduler
from ..types import PointMass

if TYPE_CHECKING:
    from ..simulation import Simulation

logger = logging.getLogger(__name__)


def load_preset_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a preset file without constructing anything.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def simulation_from_json(data: dict[str, Any]) -> "Simulation":
    """
    Build a ready-to-run Simulation from preset data.

    Raises:
        ValueError: If a body is missing its mass or has invalid values,
            or the update rate or timestep is invalid.
    """
    # Import locally to avoid circular import
    from ..simulation import Simulation

    scheduler = StepScheduler()
    timestep = data.get("timestep")
    scheduler.set_rate(
        float(data.get("updates_per_second", DEFAULT_UPDATES_PER_SECOND)),
        None if timestep is None else float(timestep),
    )

    camera_data = data.get("camera", {})
    camera = Camera(
        center=tuple(camera_data.get("center", [0.0, 0.0])),
        zoom=float(camera_data.get("zoom", 1.0)),
    )

    sim = Simulation(
        scheduler=scheduler,
        integrator=data.get("integrator", "semi_implicit_euler"),
        penalty=data.get("penalty", "lighter_mass"),
        spring_constant=float(data.get("spring_constant", DEFAULT_SPRING_CONSTANT)),
        trail_capacity=int(data.get("trail_capacity", DEFAULT_TRAIL_CAPACITY)),
        camera=camera,
    )
    for body_data in data.get("bodies", []):
        sim.add_body(body_from_json(body_data))
    return sim


def load_preset(path: str) -> "Simulation":
    """
    Load and construct a Simulation from a JSON preset file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If body data is missing or invalid.
    """
    sim = simulation_from_json(load_preset_raw(path))
    logger.info("Loaded preset %s with %d bodies", path, len(sim.bodies))
    return sim


def body_from_json(d: dict[str, Any]) -> PointMass:
    """
    Parse a single body definition.

    Raises:
        ValueError: If 'mass' is missing, or mass/radius are out of range.
    """
    if "mass" not in d:
        raise ValueError("Body definition missing required 'mass' field.")
    return PointMass(
        mass=float(d["mass"]),
        radius=float(d.get("radius", 10.0)),
        position=tuple(d.get("position", [0.0, 0.0])),
        velocity=tuple(d.get("velocity", [0.0, 0.0])),
        color=d.get("color", "white"),
        name=str(d.get("name", "")),
        uninteractable=bool(d.get("uninteractable", False)),
    )


def body_to_json(body: PointMass) -> dict[str, Any]:
    """
    Serialize a body, skipping display fields left at their defaults.
    """
    result = {
        "mass": body.mass,
        "radius": body.radius,
        "position": _to_list(body.position),
        "velocity": _to_list(body.velocity),
    }
    if body.color != "white":
        result["color"] = body.color
    if body.name:
        result["name"] = body.name
    if body.uninteractable:
        result["uninteractable"] = True
    return result


def bodies_to_json(bodies: list[PointMass]) -> list[dict[str, Any]]:
    return [body_to_json(b) for b in bodies]


def simulation_to_json(sim: "Simulation") -> dict[str, Any]:
    """
    Serialize a Simulation's parameters, view and bodies as preset data.

    Trails, locks and the simulation clock are not captured.
    """
    result: dict[str, Any] = {
        "updates_per_second": sim.updates_per_second,
        "timestep": sim.timestep,
        "camera": {
            "center": _to_list(sim.camera.center),
            "zoom": sim.camera.zoom,
        },
        "bodies": bodies_to_json(sim.bodies),
    }
    if sim.integrator != "semi_implicit_euler":
        result["integrator"] = sim.integrator
    if sim.penalty != "lighter_mass":
        result["penalty"] = sim.penalty
    if sim.spring_constant != DEFAULT_SPRING_CONSTANT:
        result["spring_constant"] = sim.spring_constant
    if sim.trail_capacity != DEFAULT_TRAIL_CAPACITY:
        result["trail_capacity"] = sim.trail_capacity
    return result


def save_preset(sim: "Simulation", path: str, indent: int = 2) -> None:
    """Save a Simulation as a JSON preset file."""
    data = simulation_to_json(sim)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def _to_list(arr: Any) -> list[float]:
    """Convert a numpy array or tuple to a plain list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
