from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sweepmarch.backend import to_numpy
from sweepmarch.math_utils import as_point, is_unit
from sweepmarch.protocols import Marcher2D
from sweepmarch.raymarch.config import MarchConfig, MarchResult, MarchSample, Termination

if TYPE_CHECKING:
    from sweepmarch.backend import ArrayModule
    from sweepmarch.scene import SceneField

log = logging.getLogger("sweepmarch.raymarch")


class SphereMarcher(Marcher2D):
    """Sphere tracer over a SceneField.

    Every step advances by the clearance measured at the current point, the
    largest step that cannot cross any obstacle. The march is blocked once
    the clearance falls below ``config.eps``; that last point is not recorded.
    """

    def __init__(self, xp: ArrayModule, config: MarchConfig, field: SceneField) -> None:
        """Initialise the marcher."""
        self.xp = xp
        self.cfg = config
        self.field = field

    def trace(self, origin: Any, direction: Any) -> MarchResult:
        """March from origin along a unit direction."""
        xp = self.xp
        eps = self.cfg.eps

        p = as_point(xp, origin, "origin").copy()
        d = as_point(xp, direction, "direction")
        if not is_unit(xp, d):
            msg = f"direction must have unit length, got |d| = {float(xp.linalg.norm(d)):.6g}"
            raise ValueError(msg)

        samples: list[MarchSample] = []
        dist = self.field.nearest_distance(p)

        for _ in range(int(self.cfg.max_steps)):
            if dist < eps:
                break
            samples.append(MarchSample(point=to_numpy(xp, p).copy(), clearance=dist))
            p = p + d * dist
            dist = self.field.nearest_distance(p)

        termination: Termination = "blocked" if dist < eps else "max_steps"
        log.debug("march %s after %d samples", termination, len(samples))
        return MarchResult(samples=tuple(samples), termination=termination, direction=to_numpy(xp, d))


def march(
        origin: Any,
        direction: Any,
        field: SceneField,
        epsilon: float = 0.01,
        max_steps: int = 1000,
) -> MarchResult:
    """Sphere trace a single ray through field."""
    marcher = SphereMarcher(xp=field.xp, config=MarchConfig(eps=epsilon, max_steps=max_steps), field=field)
    return marcher.trace(origin, direction)
