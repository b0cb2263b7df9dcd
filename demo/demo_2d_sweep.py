from __future__ import annotations

import logging

from sweepmarch.backend import BackendName, get_array_module, to_numpy
from sweepmarch.geometry import Circle, ViewportBounds, bounding_circle
from sweepmarch.raymarch.config import MarchConfig
from sweepmarch.raymarch.marcher import SphereMarcher
from sweepmarch.scene import SceneField
from sweepmarch.sweep import SweepFan2D
from sweepmarch.viz.plot2d import Plotter2D

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Run
BACKEND: BackendName = "numpy"
LOG_LEVEL = logging.INFO

# Scene: viewport
VIEWPORT_SIZE = (100.0, 100.0)

# Scene: circle obstacles (center, radius)
CIRCLES = [
    ((60.0, 50.0), 10.0),
    ((25.0, 80.0), 6.0),
    ((80.0, 20.0), 12.0),
]

# Scene: a triangle, bounded by a circle before marching
TRIANGLE = [(20.0, 15.0), (35.0, 15.0), (27.5, 30.0)]

# Sweep
ORIGIN = [10.0, 50.0]
HEADING_DEG = 0.0
SPREAD_DEG = 120.0
NUM_RAYS = 9

# March
EPS = 0.01
MAX_STEPS = 500

# Plot
SHOW_HALOS = True
SHOW_FIELD = True


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL)
    xp = get_array_module(BACKEND)

    circles = [
        Circle(xp=xp, center=xp.asarray(c, dtype=xp.float64), radius=float(r))
        for c, r in CIRCLES
    ]
    circles.append(bounding_circle(xp, TRIANGLE))

    field = SceneField(xp, circles, ViewportBounds.from_size(xp, *VIEWPORT_SIZE))
    marcher = SphereMarcher(xp=xp, config=MarchConfig(eps=EPS, max_steps=MAX_STEPS), field=field)

    fan = SweepFan2D(
        origin=xp.asarray(ORIGIN, dtype=xp.float64),
        heading_deg=HEADING_DEG,
        spread_deg=SPREAD_DEG,
        num_rays=NUM_RAYS,
    )
    results = fan.march_all(marcher)

    plotter = Plotter2D()
    if SHOW_FIELD:
        plotter.draw_field(field)
    for drawable in field.drawables:
        plotter.draw_drawable(xp, drawable)

    plotter.draw_point(to_numpy(xp, fan.origin), label="origin")
    for result in results:
        logging.getLogger("sweepmarch.demo").info(
            "%d samples, %s", len(result), result.termination,
        )
        plotter.draw_march(result, halos=SHOW_HALOS)

    width, height = VIEWPORT_SIZE
    plotter.show(xlim=(-5.0, width + 5.0), ylim=(-5.0, height + 5.0))


if __name__ == "__main__":
    main()
