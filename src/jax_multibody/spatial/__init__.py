"""Spatial types consumed by the multi-body tree.

Reference frames, spatial motion and force vectors, spatial inertia and
moment of inertia of primitive shapes.
"""

from . import moment_of_inertia
from .frames import ReferenceFrame
from .inertia import SpatialInertia
from .vectors import SpatialAcceleration, Twist, Wrench

__all__ = [
    "ReferenceFrame",
    "SpatialAcceleration",
    "SpatialInertia",
    "Twist",
    "Wrench",
    "moment_of_inertia",
]
