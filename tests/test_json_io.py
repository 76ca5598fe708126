import json

import numpy as np
import pytest
from gravity_sandbox.io import (
    body_from_json,
    load_preset,
    save_preset,
    simulation_from_json,
    simulation_to_json,
)
from gravity_sandbox.presets import earth_system, earth_system_camera
from gravity_sandbox.simulation import Simulation


def test_load_preset_file(tmp_path):
    data = {
        "updates_per_second": 100,
        "timestep": 0.01,
        "penalty": "spring",
        "spring_constant": 500.0,
        "trail_capacity": 20,
        "camera": {"center": [10, 20], "zoom": 0.5},
        "bodies": [
            {"mass": 5.972e24, "radius": 6.371e6, "name": "Earth", "uninteractable": True},
            {"mass": 1.0, "position": [0, -6371200], "velocity": [100, 0], "color": "red"},
        ],
    }
    path = tmp_path / "preset.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    sim = load_preset(str(path))

    assert sim.updates_per_second == 100 and sim.timestep == 0.01
    assert sim.penalty == "spring" and sim.spring_constant == 500.0
    np.testing.assert_array_equal(sim.camera.center, [10, 20])
    assert sim.camera.zoom == 0.5
    earth, probe = sim.bodies
    assert earth.uninteractable and earth.name == "Earth" and earth.id == 1
    assert probe.radius == 10.0 and probe.color == "red"
    np.testing.assert_array_equal(probe.velocity, [100, 0])
    assert probe.trail.capacity == 20


def test_save_then_load(tmp_path):
    sim = Simulation(camera=earth_system_camera())
    for body in earth_system():
        sim.add_body(body)
    path = tmp_path / "earth.json"
    save_preset(sim, str(path))

    loaded = load_preset(str(path))
    assert simulation_to_json(loaded) == simulation_to_json(sim)
    assert [b.name for b in loaded.bodies] == [b.name for b in sim.bodies]


def test_invalid_body_data():
    with pytest.raises(ValueError):
        body_from_json({"radius": 3})
    with pytest.raises(ValueError):
        body_from_json({"mass": 0})
    with pytest.raises(ValueError):
        simulation_from_json({"bodies": [{"mass": 1}], "integrator": "euler_forward"})


def test_invalid_rates_raise_value_error():
    with pytest.raises(ValueError, match="updates_per_second"):
        simulation_from_json({"updates_per_second": 0, "bodies": []})
    with pytest.raises(ValueError, match="timestep"):
        simulation_from_json({"updates_per_second": 60, "timestep": 0})
    sim = simulation_from_json({"updates_per_second": 50})
    assert sim.timestep == pytest.approx(0.02)


def test_earth_system_preset_has_no_overlaps():
    sim = Simulation()
    for body in earth_system():
        sim.add_body(body)
    assert len(sim) == 6
    assert not any(sim.would_overlap(b) for b in sim.bodies)
    companion = sim.bodies[-1]
    np.testing.assert_array_equal(companion.velocity, [0, -5000])
