import os

import numpy as np
import pytest

os.environ.setdefault("SWEEPMARCH_MPL_BACKEND", "Agg")

from sweepmarch.geometry import Circle, ViewportBounds  # noqa: E402
from sweepmarch.scene import SceneField  # noqa: E402


@pytest.fixture
def xp():
    return np


@pytest.fixture
def viewport(xp):
    """The 100 x 100 viewport anchored at the origin."""
    return ViewportBounds.from_size(xp, 100.0, 100.0)


@pytest.fixture
def empty_field(xp, viewport):
    return SceneField(xp, [], viewport)


@pytest.fixture
def single_obstacle_field(xp, viewport):
    circle = Circle(xp=xp, center=np.array([60.0, 50.0]), radius=10.0)
    return SceneField(xp, [circle], viewport)
