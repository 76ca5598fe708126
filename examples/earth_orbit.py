# examples/earth_orbit.py
import logging

from gravity_sandbox import Simulation
from gravity_sandbox.presets import earth_system, earth_system_camera
from gravity_sandbox.renderer import DebugRenderer

logging.basicConfig(level=logging.INFO)

sim = Simulation(camera=earth_system_camera())
for body in earth_system():
    sim.add_body(body)

# Fast-forward about 50x so the test objects visibly move
sim.set_relative_speed(10)

renderer = DebugRenderer()
frame = 1 / 60
for i in range(600):
    sim.tick(frame)
    if i % 120 == 0:
        renderer.render_simulation(sim)

print("t:", sim.time)
print("energy:", sim.energy().total())
