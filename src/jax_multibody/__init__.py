"""
JAX Multibody: kinematic trees of rigid-bodies connected by joints.

This library models an articulated mechanism as a tree, answers queries on
that tree (common ancestors, joint paths, subtrees) and moves joint states
between the tree and flat JAX vectors.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import core
from . import joint_state
from . import spatial
from . import subtree
from . import topology
from . import transforms
from .core import Joint, JointKind, JointStateType, MultiBodySystem, RigidBody, TreeModel
from .exceptions import (
    ConfigurationError,
    IncompatibleTreeError,
    MultiBodyError,
    PreconditionViolationError,
    ReferenceFrameMismatchError,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "IncompatibleTreeError",
    "Joint",
    "JointKind",
    "JointStateType",
    "MultiBodyError",
    "MultiBodySystem",
    "PreconditionViolationError",
    "ReferenceFrameMismatchError",
    "RigidBody",
    "TreeModel",
    "core",
    "joint_state",
    "spatial",
    "subtree",
    "topology",
    "transforms",
]
