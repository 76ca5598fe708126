import numpy as np
import pytest
from gravity_sandbox.camera import Camera
from gravity_sandbox.constants import MIN_ZOOM
from gravity_sandbox.types import AxisAlignedBox, PointMass


def test_screen_to_simulation():
    cam = Camera(center=(0.0, 0.0), zoom=1.0, viewport_size=(800, 600))
    np.testing.assert_allclose(cam.screen_to_simulation((400, 300)), [0.0, 0.0])

    cam = Camera(center=(10.0, -5.0), zoom=2.0, viewport_size=(800, 600))
    np.testing.assert_allclose(cam.screen_to_simulation((500, 300)), [60.0, -5.0])
    np.testing.assert_allclose(cam.screen_to_simulation((0, 0)), [-190.0, -155.0])


def test_simulation_to_screen_is_inverse():
    cam = Camera(center=(1234.5, -42.0), zoom=0.37, viewport_size=(1024, 768))
    for screen in [(0, 0), (512, 384), (1000, 17.5)]:
        sim_point = cam.screen_to_simulation(screen)
        np.testing.assert_allclose(cam.simulation_to_screen(sim_point), screen, atol=1e-9)


def test_pan_moves_center_opposite_to_cursor():
    cam = Camera(zoom=2.0)
    cam.pan(10.0, -4.0)
    np.testing.assert_allclose(cam.center, [-5.0, 2.0])


@pytest.mark.parametrize("wheel, anchor", [
    (100.0, (400, 300)),
    (-100.0, (10, 590)),
    (37.5, (799, 1)),
    (-250.0, (123.4, 456.7)),
])
def test_zoom_at_preserves_anchor(wheel, anchor):
    cam = Camera(center=(5000.0, -3000.0), zoom=0.01, viewport_size=(800, 600))
    before = cam.screen_to_simulation(anchor)
    cam.zoom_at(wheel, *anchor)
    after = cam.screen_to_simulation(anchor)
    np.testing.assert_allclose(after, before, rtol=1e-12, atol=1e-9)


def test_zoom_direction_and_rate():
    cam = Camera(zoom=1.0)
    cam.zoom_at(100.0, 400, 300)
    assert cam.zoom == pytest.approx(0.5)
    cam.zoom_at(-200.0, 400, 300)
    assert cam.zoom == pytest.approx(2.0)


def test_zoom_floor():
    cam = Camera(zoom=2 * MIN_ZOOM)
    cam.zoom_at(10000.0, 400, 300)
    assert cam.zoom == MIN_ZOOM


def test_visible_rectangle():
    cam = Camera(center=(0.0, 0.0), zoom=2.0, viewport_size=(800, 600))
    assert cam.visible_rectangle() == AxisAlignedBox(-200.0, -150.0, 200.0, 150.0)


def test_is_visible_culls_offscreen_bodies():
    cam = Camera(center=(0.0, 0.0), zoom=1.0, viewport_size=(800, 600))
    assert cam.is_visible(PointMass(mass=1.0, radius=10.0, position=(0.0, 0.0)))
    # Center off-screen but edge reaching into the view
    assert cam.is_visible(PointMass(mass=1.0, radius=20.0, position=(415.0, 0.0)))
    assert not cam.is_visible(PointMass(mass=1.0, radius=10.0, position=(5000.0, 0.0)))


def test_invalid_camera():
    with pytest.raises(ValueError):
        Camera(zoom=0.0)
    with pytest.raises(ValueError):
        Camera(viewport_size=(0, 600))
