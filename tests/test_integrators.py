import numpy as np
import pytest
from gravity_sandbox.core.integrators import (
    get_integrator,
    semi_implicit_euler_step,
    constant_acceleration_step,
)
from gravity_sandbox.simulation import Simulation
from gravity_sandbox.types import PointMass


def test_semi_implicit_euler_uses_new_velocity():
    """
    a = F/m = 1;  v = 1 + 1*0.5 = 1.5;  x = 0 + 1.5*0.5 = 0.75
    """
    b = PointMass(mass=2.0, velocity=(1.0, 0.0), net_force=(2.0, 0.0))
    semi_implicit_euler_step(b, 0.5)
    np.testing.assert_allclose(b.velocity, [1.5, 0.0])
    np.testing.assert_allclose(b.position, [0.75, 0.0])


def test_constant_acceleration_step_is_exact_kinematics():
    """x = 0 + 1*0.5 + 0.5*1*0.25 = 0.625;  v = 1.5"""
    b = PointMass(mass=2.0, velocity=(1.0, 0.0), net_force=(2.0, 0.0))
    constant_acceleration_step(b, 0.5)
    np.testing.assert_allclose(b.position, [0.625, 0.0])
    np.testing.assert_allclose(b.velocity, [1.5, 0.0])


def test_negative_timestep_reverses():
    b = PointMass(mass=1.0, velocity=(2.0, 0.0))
    semi_implicit_euler_step(b, 0.25)
    semi_implicit_euler_step(b, -0.25)
    np.testing.assert_allclose(b.position, [0.0, 0.0])


def test_integrator_lookup():
    assert get_integrator("semi_implicit_euler") is semi_implicit_euler_step
    assert get_integrator("constant_acceleration") is constant_acceleration_step
    with pytest.raises(ValueError):
        get_integrator("rk4")
    with pytest.raises(ValueError):
        Simulation(integrator="rk4")
