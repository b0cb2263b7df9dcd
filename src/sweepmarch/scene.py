from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from sweepmarch.math_utils import length

if TYPE_CHECKING:
    from sweepmarch.backend import ArrayModule
    from sweepmarch.geometry import Circle, ViewportBounds
    from sweepmarch.protocols import Drawable2D


class SceneField:
    """Circle obstacles inside a viewport, queried for nearest signed distance.

    The field is read-only once built. When obstacles change, build a new
    one with :meth:`with_circles` instead of mutating this instance.
    """

    __slots__ = ("_centers", "_radii", "circles", "viewport", "xp")

    def __init__(self, xp: ArrayModule, circles: Iterable[Circle], viewport: ViewportBounds) -> None:
        """Initialise the field and stack circle geometry for vectorised queries."""
        self.xp = xp
        self.circles: tuple[Circle, ...] = tuple(circles)
        self.viewport = viewport

        if self.circles:
            self._centers = xp.stack([xp.asarray(c.center, dtype=xp.float64) for c in self.circles])
            self._radii = xp.asarray([float(c.radius) for c in self.circles], dtype=xp.float64)
        else:
            self._centers = xp.zeros((0, 2), dtype=xp.float64)
            self._radii = xp.zeros((0,), dtype=xp.float64)

    def with_circles(self, circles: Iterable[Circle]) -> SceneField:
        """Rebuild the field with a new obstacle set and the same viewport."""
        return SceneField(self.xp, circles, self.viewport)

    @property
    def drawables(self) -> list[Drawable2D]:
        return [self.viewport, *self.circles]

    @staticmethod
    def distance_to_circle(p: Any, circle: Circle) -> float:
        return float(circle.sdf(p))

    def distance_to_viewport_edge(self, p: Any) -> float:
        return float(self.viewport.sdf(p))

    def nearest_distance(self, p: Any) -> float:
        """Minimum of the viewport edge distance and every circle distance."""
        dist = self.distance_to_viewport_edge(p)
        if not self.circles:
            return dist
        d_circles = length(self.xp, self._centers - p) - self._radii
        return min(dist, float(d_circles.min()))

    def sdf(self, p: Any) -> Any:
        """Batch form of :meth:`nearest_distance` for points shaped (..., 2)."""
        xp = self.xp
        dist = self.viewport.sdf(p)
        if not self.circles:
            return dist
        # (..., N) distances to every circle
        d_circles = length(xp, p[..., None, :] - self._centers) - self._radii
        return xp.minimum(dist, d_circles.min(axis=-1))
