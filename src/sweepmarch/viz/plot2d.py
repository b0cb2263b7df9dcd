from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl

# IMPORTANT: set backend before importing pyplot
# - SWEEPMARCH_MPL_BACKEND wins when set (use "Agg" when headless).
# - Otherwise prefer a stable GUI backend if available; fallback to Agg.
_BACKEND = os.environ.get("SWEEPMARCH_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.patches import Circle as CirclePatch  # noqa: E402

from sweepmarch.backend import ArrayModule, to_numpy  # noqa: E402

if TYPE_CHECKING:
    from sweepmarch.protocols import Drawable2D
    from sweepmarch.raymarch.config import MarchResult
    from sweepmarch.scene import SceneField


class Plotter2D:
    """Matplotlib plotter for march results."""

    def __init__(self, title: str = "Sweep march") -> None:
        """Initialize the plotter."""
        self.fig, ax = plt.subplots(figsize=(8, 8))
        self.ax = ax
        ax.set_aspect("equal", "box")
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_title(title)

    def draw_drawable(self, xp: ArrayModule, drawable: Drawable2D, linewidth: float = 2.0) -> None:
        pts = to_numpy(xp, drawable.polyline())
        self.ax.plot(pts[:, 0], pts[:, 1], linewidth=linewidth)

    def draw_field(self, field: SceneField, resolution: int = 200) -> None:
        """Shade the signed distance over the viewport."""
        xp = field.xp
        lo = to_numpy(xp, field.viewport.min)
        hi = to_numpy(xp, field.viewport.max)
        xs = np.linspace(lo[0], hi[0], resolution)
        ys = np.linspace(lo[1], hi[1], resolution)
        grid = np.stack(np.meshgrid(xs, ys, indexing="xy"), axis=-1)
        dist = to_numpy(xp, field.sdf(xp.asarray(grid, dtype=xp.float64)))
        self.ax.contourf(xs, ys, dist, levels=20, cmap="Greys_r", alpha=0.4)

    def draw_point(self, p: np.ndarray, label: str | None = None) -> None:
        self.ax.scatter([p[0]], [p[1]], s=80)
        if label:
            self.ax.text(float(p[0] + 0.1), float(p[1] + 0.1), label)

    def draw_march(self, result: MarchResult, halos: bool = True) -> None:
        """Polyline through the samples, with optional clearance circles."""
        pts = result.points
        if pts.shape[0] == 0:
            return

        self.ax.plot(pts[:, 0], pts[:, 1], linewidth=1)
        self.ax.scatter(pts[:, 0], pts[:, 1], s=8)

        if halos:
            for sample in result:
                self.ax.add_patch(
                    CirclePatch(
                        (float(sample.point[0]), float(sample.point[1])),
                        sample.clearance,
                        fill=False,
                        linewidth=0.5,
                        alpha=0.5,
                    ),
                )

        # Endpoint marker based on termination reason
        end = result.end if result.end is not None else pts[-1]
        marker = "x" if result.termination == "blocked" else "s"
        self.ax.scatter([end[0]], [end[1]], marker=marker, s=50)

    def show(self, xlim: tuple[float, float], ylim: tuple[float, float]) -> None:
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        plt.tight_layout()
        plt.show()

    def save(self, path: str, xlim: tuple[float, float], ylim: tuple[float, float], dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        plt.tight_layout()
        plt.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)

