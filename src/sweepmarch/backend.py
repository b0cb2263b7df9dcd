from __future__ import annotations

from typing import Any, Literal

import numpy as np

try:
    import cupy as cp  # type: ignore
except ImportError:  # pragma: no cover
    cp = None

ArrayModule = Any
BackendName = Literal["auto", "numpy", "cupy"]


def get_array_module(backend: BackendName = "auto") -> ArrayModule:
    """Return numpy or cupy depending on availability and request."""
    if backend == "numpy":
        return np
    if backend == "cupy":
        if cp is None:
            msg = "CuPy backend requested but cupy is not installed"
            raise RuntimeError(msg)
        return cp
    if backend == "auto":
        return cp if cp is not None else np
    msg = f"Unknown backend: {backend!r}"
    raise ValueError(msg)


def is_cupy(xp: ArrayModule) -> bool:
    """Return True if xp is the CuPy module."""
    return cp is not None and xp is cp


def to_numpy(xp: ArrayModule, a: Any) -> np.ndarray:
    """Convert xp array to NumPy for matplotlib."""
    if is_cupy(xp):
        return cp.asnumpy(a)  # type: ignore[union-attr]
    return np.asarray(a)
