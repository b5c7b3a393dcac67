"""MultiBodySystem: arena owning the bodies and joints of one tree.

Assembly is explicit. `add_joint` creates a joint and then registers it in
its predecessor's child set; `add_rigid_body` creates the successor of a
joint. Bodies and joints refer to each other through their indices in the
arena. Once `lock` is called the tree shape is frozen and only joint states
and body inertias may change.
"""

import logging
from typing import Optional, Tuple, Union

import jax
import jax.numpy as jnp

from ..exceptions import ConfigurationError
from ..spatial import SpatialInertia
from .joint import Joint
from .joint_kinds import JointKind
from .rigid_body import RigidBody
from .tree_model import TreeModel

logger = logging.getLogger(__name__)

Array = jax.Array


class MultiBodySystem:
    """Builder and owner of a tree of rigid-bodies connected by joints.

    Example:
        >>> system = MultiBodySystem("elevator")
        >>> shoulder = system.add_joint("shoulder", system.root_body, JointKind.REVOLUTE, axis=[0, 0, 1])
        >>> upper_arm = system.add_rigid_body("upperArm", shoulder, mass=1.0, moment_of_inertia=jnp.eye(3))
    """

    def __init__(self, root_body_name: str = "elevator"):
        self._bodies = []
        self._joints = []
        self._locked = False
        self._root_body = RigidBody(self, 0, root_body_name)
        self._bodies.append(self._root_body)
        logger.debug("Created multi-body system with root body %s", root_body_name)

    @property
    def root_body(self) -> RigidBody:
        return self._root_body

    @property
    def bodies(self) -> Tuple[RigidBody, ...]:
        return tuple(self._bodies)

    @property
    def joints(self) -> Tuple[Joint, ...]:
        return tuple(self._joints)

    @property
    def is_locked(self) -> bool:
        return self._locked

    def body_at(self, index: int) -> RigidBody:
        return self._bodies[index]

    def joint_at(self, index: int) -> Joint:
        return self._joints[index]

    def get_body(self, name: str) -> RigidBody:
        for body in self._bodies:
            if body.name == name:
                return body
        raise KeyError(f"Body with name {name} not found")

    def get_joint(self, name: str) -> Joint:
        for joint in self._joints:
            if joint.name == name:
                return joint
        raise KeyError(f"Joint with name {name} not found")

    def add_joint(self, name: str, predecessor: RigidBody, kind: Union[JointKind, str],
                  axis: Optional[Array] = None, transform_to_parent: Optional[Array] = None) -> Joint:
        """Create a joint and register it as a child of `predecessor`.

        Args:
            name: Joint name, must not contain the name-id separator.
            predecessor: Body of this system the joint is attached to.
            kind: Joint kind, or its string value.
            axis: Motion axis, required by revolute and prismatic joints.
            transform_to_parent: Fixed 4x4 pose of the frame before the joint in
                the predecessor body-fixed frame, identity by default.

        Raises:
            ConfigurationError: if the name is malformed, the predecessor belongs
                to another system, or the system is locked.
        """
        self._check_unlocked()
        self._check_owned(predecessor, "predecessor")

        joint = Joint(self, len(self._joints), name, predecessor, JointKind(kind), axis, transform_to_parent)
        self._joints.append(joint)
        predecessor._register_child_joint(joint)
        logger.debug("Added %s joint %s after body %s", joint.kind.value, joint.name_id, predecessor.name)
        return joint

    def add_rigid_body(self, name: str, parent_joint: Joint, mass: Optional[float] = None,
                       moment_of_inertia: Optional[Array] = None,
                       center_of_mass_offset: Optional[Array] = None) -> RigidBody:
        """Create the successor of `parent_joint`.

        When `mass` is given the body inertia is built from the mass properties,
        expressed in the new body-fixed frame.

        Raises:
            ConfigurationError: if the joint already has a successor, belongs to
                another system, or the system is locked.
        """
        self._check_unlocked()
        self._check_owned(parent_joint, "parent joint")
        if parent_joint.successor is not None:
            raise ConfigurationError(
                f"Joint {parent_joint.name} already has a successor: {parent_joint.successor.name}"
            )

        body = RigidBody(self, len(self._bodies), name, parent_joint)
        if mass is not None:
            if moment_of_inertia is None:
                moment_of_inertia = jnp.zeros((3, 3))
            body.inertia = SpatialInertia.from_mass_properties(
                body.body_fixed_frame, body.body_fixed_frame, mass, moment_of_inertia, center_of_mass_offset
            )
        self._bodies.append(body)
        parent_joint._successor_index = body.index
        logger.debug("Added body %s after joint %s", body.name_id, parent_joint.name)
        return body

    def lock(self):
        """End the assembly; the tree shape can no longer change."""
        self._locked = True
        logger.debug("Locked multi-body system %s: %d bodies, %d joints",
                     self._root_body.name, len(self._bodies), len(self._joints))

    def to_model(self) -> TreeModel:
        """Export the topology and state layout as a TreeModel PyTree."""
        parent_body_indices = []
        parent_joint_indices = []
        for body in self._bodies:
            parent_joint = body.parent_joint
            if parent_joint is None:
                parent_body_indices.append(body.index)  # Root parents itself
                parent_joint_indices.append(-1)
            else:
                parent_body_indices.append(parent_joint.predecessor.index)
                parent_joint_indices.append(parent_joint.index)

        dofs = jnp.array([joint.degrees_of_freedom for joint in self._joints], dtype=jnp.int32)
        configuration_sizes = jnp.array([joint.configuration_size for joint in self._joints], dtype=jnp.int32)

        return TreeModel(
            body_names=tuple(body.name for body in self._bodies),
            joint_names=tuple(joint.name for joint in self._joints),
            parent_body_indices=jnp.array(parent_body_indices, dtype=jnp.int32),
            parent_joint_indices=jnp.array(parent_joint_indices, dtype=jnp.int32),
            joint_degrees_of_freedom=dofs,
            joint_configuration_sizes=configuration_sizes,
            velocity_offsets=jnp.cumsum(dofs) - dofs,
            configuration_offsets=jnp.cumsum(configuration_sizes) - configuration_sizes,
        )

    def _check_unlocked(self):
        if self._locked:
            raise ConfigurationError(f"Multi-body system {self._root_body.name} is locked")

    def _check_owned(self, node: Union[RigidBody, Joint], role: str):
        if node.system is not self:
            raise ConfigurationError(
                f"The {role} {node.name} belongs to another multi-body system than {self._root_body.name}"
            )
