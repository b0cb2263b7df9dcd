from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from sweepmarch.backend import ArrayModule, to_numpy
from sweepmarch.math_utils import length, vec_min
from sweepmarch.protocols import SDF, Drawable2D


@dataclass(frozen=True, slots=True)
class Circle(SDF, Drawable2D):
    """Circle obstacle. Negative distance inside."""

    xp: ArrayModule
    center: Any
    radius: float

    def __post_init__(self) -> None:
        center = to_numpy(self.xp, self.center)
        if center.shape != (2,):
            msg = "Circle center must have shape (2,)"
            raise ValueError(msg)
        if not bool(np.all(np.isfinite(center))):
            msg = f"Circle center must be finite, got {center.tolist()}"
            raise ValueError(msg)
        if not (np.isfinite(self.radius) and self.radius >= 0.0):
            msg = f"Circle radius must be finite and non-negative, got {self.radius}"
            raise ValueError(msg)

    def sdf(self, p: Any) -> Any:
        # For p shaped (..., 2) this returns shape (...)
        return length(self.xp, p - self.center) - self.radius

    def polyline(self, num: int = 600) -> Any:
        center_np = to_numpy(self.xp, self.center)
        theta = np.linspace(0.0, 2.0 * np.pi, num, dtype=np.float64)
        poly = center_np[None, :] + np.stack(
            [np.cos(theta), np.sin(theta)], axis=-1,
        ) * self.radius
        return self.xp.asarray(poly, dtype=self.xp.float64)


@dataclass(frozen=True, slots=True)
class ViewportBounds(SDF, Drawable2D):
    """Axis-aligned rectangle whose inside is free space.

    The edges act as an obstacle seen from the inside: the distance is
    positive strictly inside, zero on an edge and negative outside.

    Outside the box the value is the componentwise minimum, not the
    Euclidean distance to the rectangle, so it under-estimates near corners.
    """

    xp: ArrayModule
    min: Any
    max: Any

    def __post_init__(self) -> None:
        lo = to_numpy(self.xp, self.min)
        hi = to_numpy(self.xp, self.max)
        if lo.shape != (2,) or hi.shape != (2,):
            msg = "Viewport corners must have shape (2,)"
            raise ValueError(msg)
        if not (bool(np.all(np.isfinite(lo))) and bool(np.all(np.isfinite(hi)))):
            msg = f"Viewport corners must be finite, got {lo.tolist()} and {hi.tolist()}"
            raise ValueError(msg)
        if bool(np.any(lo > hi)):
            msg = f"Viewport min {lo.tolist()} exceeds max {hi.tolist()}"
            raise ValueError(msg)

    @classmethod
    def from_size(cls, xp: ArrayModule, width: float, height: float) -> ViewportBounds:
        """Viewport spanning [(0, 0), (width, height)]."""
        return cls(
            xp=xp,
            min=xp.asarray([0.0, 0.0], dtype=xp.float64),
            max=xp.asarray([width, height], dtype=xp.float64),
        )

    @property
    def width(self) -> float:
        return float(self.max[0] - self.min[0])

    @property
    def height(self) -> float:
        return float(self.max[1] - self.min[1])

    def sdf(self, p: Any) -> Any:
        d = vec_min(self.xp, p - self.min, self.max - p)
        return self.xp.minimum(d[..., 0], d[..., 1])

    def polyline(self, num: int = 5) -> Any:
        """Closed rectangle outline. Always five vertices, whatever num is."""
        lo = to_numpy(self.xp, self.min)
        hi = to_numpy(self.xp, self.max)
        poly = np.asarray(
            [[lo[0], lo[1]], [hi[0], lo[1]], [hi[0], hi[1]], [lo[0], hi[1]], [lo[0], lo[1]]],
            dtype=np.float64,
        )
        return self.xp.asarray(poly, dtype=self.xp.float64)


def bounding_circle(xp: ArrayModule, vertices: Any) -> Circle:
    """Circle around a polygon: vertex centroid plus the farthest vertex distance."""
    pts = xp.asarray(vertices, dtype=xp.float64)
    if pts.ndim != 2 or pts.shape[0] == 0 or pts.shape[1] != 2:
        msg = "bounding_circle needs a non-empty (N,2) vertex array"
        raise ValueError(msg)
    center = pts.mean(axis=0)
    radius = float(length(xp, pts - center).max())
    return Circle(xp=xp, center=center, radius=radius)
