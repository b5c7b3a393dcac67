"""TreeModel PyTree: an immutable, index-based snapshot of a multi-body tree.

The snapshot carries the topology and the state layout of a
`MultiBodySystem` in JAX arrays so that it can be passed through
jit/vmap-transformed code, where the object graph can not.
"""

from typing import Tuple

import jax.numpy as jnp
from jax import Array
from flax import struct


@struct.dataclass
class TreeModel:
    """Flattened tree using integer indices for parent-child relationships.

    Bodies and joints appear in creation order, which places every parent
    before its children.

    Attributes:
        body_names: Names of all bodies. Index corresponds to body index.
                    Static field for JIT compilation.
        joint_names: Names of all joints. Index corresponds to joint index.
                     Static field for JIT compilation.
        parent_body_indices: Array of shape (num_bodies,); entry i is the index of
                             the parent body of body i. The root body parents itself.
        parent_joint_indices: Array of shape (num_bodies,); entry i is the index
                              of the parent joint of body i, -1 for the root body.
        joint_degrees_of_freedom: Array of shape (num_joints,).
        joint_configuration_sizes: Array of shape (num_joints,).
        velocity_offsets: Array of shape (num_joints,); first row of each joint in
                          a velocity, acceleration or effort vector of all joints.
        configuration_offsets: Array of shape (num_joints,); first row of each
                               joint in a configuration vector of all joints.
    """
    body_names: Tuple[str, ...] = struct.field(pytree_node=False)
    joint_names: Tuple[str, ...] = struct.field(pytree_node=False)
    parent_body_indices: Array
    parent_joint_indices: Array
    joint_degrees_of_freedom: Array
    joint_configuration_sizes: Array
    velocity_offsets: Array
    configuration_offsets: Array

    @property
    def num_bodies(self) -> int:
        return len(self.body_names)

    @property
    def num_joints(self) -> int:
        return len(self.joint_names)

    @property
    def num_degrees_of_freedom(self) -> Array:
        return jnp.sum(self.joint_degrees_of_freedom)

    @property
    def configuration_size(self) -> Array:
        return jnp.sum(self.joint_configuration_sizes)
