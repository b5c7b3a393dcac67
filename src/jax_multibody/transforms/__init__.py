"""
Lie-group helpers for rotations (so3) and rigid transforms (se3).

All functions are pure and operate on JAX arrays.
"""

from . import so3
from . import se3

__all__ = [
    "so3",
    "se3",
]
