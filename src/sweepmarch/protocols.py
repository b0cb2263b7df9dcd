from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from sweepmarch.raymarch.config import MarchResult


class SDF(Protocol):
    """Pure signed distance field contract."""

    def sdf(self, p: Any) -> Any:
        """Signed distance to surface at point p."""
        ...


class Drawable2D(Protocol):
    """2D debug drawable contract."""

    def polyline(self, num: int = 600) -> Any:
        """Return a (N,2) polyline suitable for plotting."""
        ...


class Marcher2D(Protocol):
    """2D ray marcher interface producing a MarchResult."""

    def trace(self, origin: Any, direction: Any) -> MarchResult:
        ...
