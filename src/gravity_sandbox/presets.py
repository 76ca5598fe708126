# MIT License (see LICENSE)
"""
Built-in scenes.

Factories return fresh, unregistered bodies; add them with
Simulation.add_body(). Coordinates use screen orientation (y down), so a
body at negative y sits above the origin.
"""
from __future__ import annotations

from .camera import Camera
from .types import PointMass

EARTH_MASS = 5.972e24
EARTH_RADIUS = 6.371e6


def earth() -> PointMass:
    return PointMass(mass=EARTH_MASS, radius=EARTH_RADIUS, name="Earth", color="#3b7dd8")


def earth_system() -> list[PointMass]:
    """
    Earth with the Moon, the ISS, a projectile and two test masses.

    Orbital speeds are the rounded values the demo scene was tuned with.
    """
    planet = earth()
    moon = PointMass(
        mass=7.34767309e22,
        radius=1737400,
        position=(0, EARTH_RADIUS + 378000000),
        velocity=(1028.192, 0),
        name="Moon",
        color="#c8c8c8",
    )
    iss = PointMass(
        mass=444615000,
        radius=70000,
        position=(0, EARTH_RADIUS + 413000),
        velocity=(7660, 0),
        name="ISS",
    )
    projectile = PointMass(
        mass=100,
        radius=30000,
        position=(0, -iss.position[1]),
        velocity=(1000, 0),
        name="Projectile",
        color="#ff7043",
    )
    test_object = PointMass(
        mass=4446150000,
        radius=700000,
        position=(0, EARTH_RADIUS + 20000000),
        velocity=(3500, 0),
        name="Test object",
    )
    companion = test_object.clone().move_by(0, 2000000)
    companion.velocity[:] = (0, -5000)
    companion.name = "Test companion"
    return [planet, moon, iss, projectile, test_object, companion]


def earth_system_camera(viewport_size: tuple[float, float] = (800.0, 600.0)) -> Camera:
    """View framing the test object of earth_system()."""
    return Camera(
        center=(0.0, EARTH_RADIUS + 20000000),
        zoom=0.00009380341682666084,
        viewport_size=viewport_size,
    )
