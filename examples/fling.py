# examples/fling.py
from gravity_sandbox import InteractionController, PointMass, Simulation


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


clock = Clock()
sim = Simulation()
sim.add_body(PointMass(mass=5.972e24, radius=6.371e6, position=(0, 6.371e6 + 1000), name="Earth"))
probe = PointMass(mass=1.0, radius=50.0, name="probe")
sim.add_body(probe)

controller = InteractionController(sim, clock=clock)
controller.pointer_down(400, 300)  # viewport center: the probe

# Drag right at 600 px/s for 50 ms of wall time
for _ in range(5):
    clock.now += 0.01
    controller.drag_move(6, 0)

print("released with velocity:", controller.end_drag())

for _ in range(120):
    clock.now += 1 / 60
    sim.tick(1 / 60)

print("pos:", probe.position)
print("vel:", probe.velocity)
