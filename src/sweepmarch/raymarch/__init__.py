from sweepmarch.raymarch.config import MarchConfig, MarchResult, MarchSample, Termination
from sweepmarch.raymarch.marcher import SphereMarcher, march

__all__ = [
    "MarchConfig",
    "MarchResult",
    "MarchSample",
    "SphereMarcher",
    "Termination",
    "march",
]
