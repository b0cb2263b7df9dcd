from sweepmarch.backend import get_array_module, to_numpy
from sweepmarch.geometry import Circle, ViewportBounds, bounding_circle
from sweepmarch.raymarch import MarchConfig, MarchResult, MarchSample, SphereMarcher, march
from sweepmarch.scene import SceneField
from sweepmarch.sweep import SweepFan2D

__all__ = [
    "Circle",
    "MarchConfig",
    "MarchResult",
    "MarchSample",
    "SceneField",
    "SphereMarcher",
    "SweepFan2D",
    "ViewportBounds",
    "bounding_circle",
    "get_array_module",
    "march",
    "to_numpy",
]
