from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Literal

import numpy as np


@dataclass(frozen=True, slots=True)
class MarchConfig:
    """Sphere tracing parameters.

    eps:
        A march stops once the measured clearance drops below this.
    max_steps:
        Upper bound on recorded samples; guards against marches whose
        clearance never falls below eps.
    """

    eps: float = 0.01
    max_steps: int = 1000

    def __post_init__(self) -> None:
        if not self.eps > 0.0:
            msg = f"eps must be positive, got {self.eps}"
            raise ValueError(msg)
        if int(self.max_steps) < 1:
            msg = f"max_steps must be at least 1, got {self.max_steps}"
            raise ValueError(msg)


Termination = Literal["blocked", "max_steps"]


@dataclass(frozen=True, slots=True)
class MarchSample:
    point: Any
    clearance: float


@dataclass(frozen=True, slots=True)
class MarchResult:
    """Ordered samples of one march.

    The first sample is the origin. Each following sample lies exactly the
    previous clearance further along the march direction.
    """

    samples: tuple[MarchSample, ...]
    termination: Termination
    direction: Any = None

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[MarchSample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> MarchSample:
        return self.samples[index]

    @property
    def truncated(self) -> bool:
        return self.termination == "max_steps"

    @property
    def points(self) -> np.ndarray:
        """(N,2) NumPy array of sample points."""
        if not self.samples:
            return np.zeros((0, 2), dtype=np.float64)
        return np.stack([np.asarray(s.point, dtype=np.float64) for s in self.samples])

    @property
    def end(self) -> np.ndarray | None:
        """Point where the march stopped, one clearance past the last sample."""
        if not self.samples or self.direction is None:
            return None
        last = self.samples[-1]
        return np.asarray(last.point, dtype=np.float64) + last.clearance * np.asarray(self.direction, dtype=np.float64)

    @property
    def clearances(self) -> np.ndarray:
        return np.asarray([s.clearance for s in self.samples], dtype=np.float64)
