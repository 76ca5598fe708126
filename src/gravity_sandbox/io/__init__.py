# MIT License (see LICENSE)
"""
Preset input/output.

Typical usage:
    from gravity_sandbox.io import load_preset, save_preset

    sim = load_preset("earth.json")
    save_preset(sim, "snapshot.json")
"""
from .json_io import (
    load_preset,
    load_preset_raw,
    save_preset,
    simulation_from_json,
    simulation_to_json,
    bodies_to_json,
    body_to_json,
    body_from_json,
)

__all__ = [
    # Loading
    "load_preset",
    "load_preset_raw",
    "simulation_from_json",
    # Saving
    "save_preset",
    # Serialization
    "simulation_to_json",
    "bodies_to_json",
    "body_to_json",
    "body_from_json",
]
