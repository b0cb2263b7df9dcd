from __future__ import annotations

from typing import Any

import numpy as np

UNIT_TOL: float = 1e-6


def length(xp: Any, v: Any) -> Any:
    """Euclidean length over the last axis."""
    return xp.linalg.norm(v, axis=-1)


def vec_min(xp: Any, a: Any, b: Any) -> Any:
    """Componentwise minimum of two vectors."""
    return xp.minimum(a, b)


def vec_max(xp: Any, a: Any, b: Any) -> Any:
    """Componentwise maximum of two vectors."""
    return xp.maximum(a, b)


def is_unit(xp: Any, v: Any, tol: float = UNIT_TOL) -> bool:
    """True if v has unit length within tol."""
    return abs(float(xp.linalg.norm(v)) - 1.0) <= tol


def as_point(xp: Any, p: Any, name: str = "point") -> Any:
    """Convert an array-like to a float64 (2,) vector."""
    out = xp.asarray(p, dtype=xp.float64)
    if out.shape != (2,):
        msg = f"{name} must have shape (2,), got {tuple(out.shape)}"
        raise ValueError(msg)
    if not bool(xp.all(xp.isfinite(out))):
        msg = f"{name} must be finite, got {out.tolist()}"
        raise ValueError(msg)
    return out


def direction_from_angle(xp: Any, angle: float) -> Any:
    """Unit direction for an angle in radians, measured from +x toward +y."""
    return xp.asarray([np.cos(angle), np.sin(angle)], dtype=xp.float64)
