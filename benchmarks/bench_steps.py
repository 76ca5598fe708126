"""
Microbenchmark: time per step vs number of bodies.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from gravity_sandbox import PointMass, Simulation, StepScheduler
from gravity_sandbox.profiler import Profiler


def run(n: int, steps: int = 300):
    prof = Profiler()
    sim = Simulation(scheduler=StepScheduler(updates_per_second=60), profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn bodies in a grid with small random jitter
    side = int(np.ceil(np.sqrt(n)))
    k = 0
    for iy in range(side):
        for ix in range(side):
            if k >= n:
                break
            x = 50.0 * ix + float(rng.normal())
            y = 50.0 * iy + float(rng.normal())
            sim.add_body(PointMass(mass=1e9, radius=10.0, position=(x, y)))
            k += 1

    # warmup
    for _ in range(30):
        sim.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step()
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 50, 100, 250]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "integrate"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
