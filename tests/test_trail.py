import numpy as np
import pytest
from gravity_sandbox.trail import Trail, TrailPoint
from gravity_sandbox.types import AxisAlignedBox, PointMass


def test_trail_evicts_oldest():
    trail = Trail(capacity=3)
    for t in range(5):
        trail.record((float(t), -float(t)), t * 0.5)
    assert len(trail) == 3
    assert [p.x for p in trail] == [2.0, 3.0, 4.0]
    assert trail.latest() == TrailPoint(4.0, -4.0, 2.0)
    np.testing.assert_array_equal(trail.positions(), [[2, -2], [3, -3], [4, -4]])


def test_trail_copies_position():
    trail = Trail(capacity=2)
    pos = np.array([1.0, 2.0])
    trail.record(pos, 0.0)
    pos[0] = 99.0
    assert trail.points()[0].x == 1.0


def test_trail_resize_keeps_newest():
    trail = Trail(capacity=5)
    for t in range(5):
        trail.record((t, 0), t)
    trail.resize(2)
    assert [p.x for p in trail] == [3.0, 4.0]
    assert trail.capacity == 2


def test_trail_empty_and_invalid():
    trail = Trail()
    assert trail.capacity == 150
    assert trail.latest() is None
    assert trail.positions().shape == (0, 2)
    with pytest.raises(ValueError):
        Trail(capacity=0)
    with pytest.raises(ValueError):
        trail.resize(-3)


def test_box_intersection():
    a = AxisAlignedBox(0, 0, 10, 10)
    assert a.intersects(AxisAlignedBox(5, 5, 15, 15))
    assert a.intersects(AxisAlignedBox(10, 10, 20, 20))  # touching corner
    assert not a.intersects(AxisAlignedBox(10.5, 0, 20, 10))
    assert AxisAlignedBox(-5, -5, 5, 5).intersects(AxisAlignedBox(-1, -1, 1, 1))
    assert a.width == 10 and a.height == 10
    assert a.contains((10, 0)) and not a.contains((11, 0))


def test_point_mass_validation_and_clone():
    with pytest.raises(ValueError):
        PointMass(mass=0.0)
    with pytest.raises(ValueError):
        PointMass(mass=-1.0)
    with pytest.raises(ValueError):
        PointMass(mass=1.0, radius=-0.1)

    source = PointMass(mass=3.0, radius=2.0, position=(1, 2), velocity=(3, 4), color="red", name="a")
    source.trail.record(source.position, 0.0)
    copy = source.clone().move_by(1, 1)
    assert copy is not source and copy != source
    np.testing.assert_array_equal(copy.position, [2, 3])
    np.testing.assert_array_equal(source.position, [1, 2])
    assert copy.color == "red" and copy.id == -1 and len(copy.trail) == 0
    assert source.bounds() == AxisAlignedBox(-1.0, 0.0, 3.0, 4.0)
    np.testing.assert_array_equal(source.momentum(), [9.0, 12.0])
