from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from sweepmarch.math_utils import direction_from_angle

if TYPE_CHECKING:
    from sweepmarch.backend import ArrayModule
    from sweepmarch.protocols import Marcher2D
    from sweepmarch.raymarch.config import MarchResult


@dataclass(frozen=True, slots=True)
class SweepFan2D:
    """Fan of rays cast from one origin around a heading.

    Coordinate convention:
    - points are (x, y)
    - angles are in degrees from the +x axis toward +y (atan2)

    Parameters
    ----------
    origin:
        Shared origin of every ray.
    heading_deg:
        Direction of the central ray.
    spread_deg:
        Full angular width of the fan. Zero gives a single direction.
    num_rays:
        Number of rays across the spread.

    """

    origin: Any
    heading_deg: float
    spread_deg: float = 0.0
    num_rays: int = 1

    def __post_init__(self) -> None:
        if int(self.num_rays) < 1:
            msg = f"num_rays must be at least 1, got {self.num_rays}"
            raise ValueError(msg)

    def angles_deg(self) -> np.ndarray:
        if self.num_rays == 1:
            return np.asarray([self.heading_deg], dtype=np.float64)
        half = 0.5 * self.spread_deg
        return np.linspace(self.heading_deg - half, self.heading_deg + half, self.num_rays, dtype=np.float64)

    def directions(self, xp: ArrayModule) -> list[Any]:
        """Unit direction vectors spanning the fan."""
        return [direction_from_angle(xp, float(np.deg2rad(a))) for a in self.angles_deg()]

    def march_all(self, marcher: Marcher2D) -> list[MarchResult]:
        """One independent march per direction."""
        return [marcher.trace(self.origin, d) for d in self.directions(np)]
