import numpy as np
import pytest
from gravity_sandbox.constants import G
from gravity_sandbox.core.forces import (
    accumulate_net_forces,
    gravity_force,
    pairwise_forces,
    penalty_force,
)
from gravity_sandbox.simulation import Simulation
from gravity_sandbox.types import PointMass


def test_gravity_newton_third_law_exact():
    """Pair contributions are applied once: force on A is exactly -force on B."""
    a = PointMass(mass=1e10, radius=1.0, position=(0.0, 0.0))
    b = PointMass(mass=2e10, radius=1.0, position=(100.0, 37.5))

    out = pairwise_forces([a, b])

    assert np.array_equal(out[0], -out[1])
    expected = G * a.mass * b.mass / (100.0**2 + 37.5**2)
    assert np.linalg.norm(out[0]) == pytest.approx(expected, rel=1e-12)
    # Attraction: force on A points toward B
    assert out[0][0] > 0 and out[0][1] > 0


def test_gravity_force_matches_buffer():
    a = PointMass(mass=3e9, position=(0.0, 0.0), radius=0.0)
    b = PointMass(mass=4e9, position=(0.0, -250.0), radius=0.0)
    out = pairwise_forces([a, b])
    np.testing.assert_allclose(out[0], gravity_force(a, b), rtol=1e-12)
    np.testing.assert_allclose(out[1], gravity_force(b, a), rtol=1e-12)


def test_three_bodies_net_force_sums_to_zero():
    bodies = [
        PointMass(mass=1e12, position=(0.0, 0.0), radius=1.0),
        PointMass(mass=5e11, position=(300.0, 0.0), radius=1.0),
        PointMass(mass=2e11, position=(-120.0, 80.0), radius=1.0),
    ]
    out = pairwise_forces(bodies)
    total = out.sum(axis=0)
    scale = np.abs(out).max()
    assert np.all(np.abs(total) <= 1e-12 * scale)


def test_collision_penalty_repels_equal_masses():
    """Two unit masses of radius 10, 15 apart: overlap 5, penalty = min(m) * 5."""
    sim = Simulation()
    a = PointMass(mass=1.0, radius=10.0, position=(0.0, 0.0))
    b = PointMass(mass=1.0, radius=10.0, position=(15.0, 0.0))
    sim.add_body(a)
    sim.add_body(b)

    sim.step()

    # Gravity between unit masses is ~3e-13 N and does not matter here
    assert a.net_force[0] == pytest.approx(-5.0, abs=1e-9)
    assert b.net_force[0] == pytest.approx(5.0, abs=1e-9)
    assert a.net_force[1] == 0.0 and b.net_force[1] == 0.0
    # Pushed apart along the line of centers
    assert a.velocity[0] < 0 < b.velocity[0]


def test_collision_penalty_uses_lighter_mass():
    light = PointMass(mass=2.0, radius=10.0, position=(0.0, 0.0))
    heavy = PointMass(mass=8.0, radius=10.0, position=(0.0, 15.0))

    f_light = penalty_force(light, heavy)
    f_heavy = penalty_force(heavy, light)

    np.testing.assert_allclose(f_light, [0.0, -10.0])
    np.testing.assert_allclose(f_heavy, [0.0, 10.0])
    # Same force, so the lighter body accelerates four times as much
    assert abs(f_light[1] / light.mass) == pytest.approx(4 * abs(f_heavy[1] / heavy.mass))


def test_spring_penalty_model():
    a = PointMass(mass=1.0, radius=10.0, position=(0.0, 0.0))
    b = PointMass(mass=1.0, radius=10.0, position=(15.0, 0.0))
    f = penalty_force(a, b, model="spring", spring_constant=10000.0)
    np.testing.assert_allclose(f, [-50000.0, 0.0])

    out = pairwise_forces([a, b], model="spring", spring_constant=10000.0)
    assert out[0][0] == pytest.approx(-50000.0, rel=1e-12)


def test_no_penalty_without_overlap():
    a = PointMass(mass=1.0, radius=10.0, position=(0.0, 0.0))
    b = PointMass(mass=1.0, radius=10.0, position=(20.0, 0.0))
    np.testing.assert_array_equal(penalty_force(a, b), [0.0, 0.0])


def test_unknown_penalty_model():
    a = PointMass(mass=1.0)
    b = PointMass(mass=1.0, position=(5.0, 0.0))
    with pytest.raises(ValueError):
        pairwise_forces([a, b], model="rubber")
    with pytest.raises(ValueError):
        penalty_force(a, b, model="rubber")


def test_zero_distance_pair_is_skipped():
    """Coincident bodies contribute nothing; other pairs still count."""
    a = PointMass(mass=1e10, radius=5.0, position=(10.0, 10.0))
    b = PointMass(mass=1e10, radius=5.0, position=(10.0, 10.0))
    c = PointMass(mass=1e10, radius=5.0, position=(110.0, 10.0))

    out = pairwise_forces([a, b])
    assert np.all(out == 0.0)

    out = pairwise_forces([a, b, c])
    assert np.all(np.isfinite(out))
    np.testing.assert_allclose(out[0], out[1])
    assert out[0][0] > 0


def test_accumulate_zeroes_single_body():
    lone = PointMass(mass=1.0, net_force=(3.0, -4.0))
    accumulate_net_forces([lone], [0])
    np.testing.assert_array_equal(lone.net_force, [0.0, 0.0])


def test_accumulate_skips_non_recipients():
    """A non-recipient still exerts force but its net_force is left alone."""
    held = PointMass(mass=1e12, position=(0.0, 0.0), net_force=(7.0, 7.0))
    free = PointMass(mass=1.0, position=(100.0, 0.0))

    accumulate_net_forces([held, free], recipients=[1])

    np.testing.assert_array_equal(held.net_force, [7.0, 7.0])
    assert free.net_force[0] < 0
