"""Joint: tree edge allowing relative motion between two rigid-bodies.

A joint owns two frames. `frame_before_joint` is rigidly attached to the
predecessor and located at the joint origin; `frame_after_joint` is attached
to the successor and moves with the joint. When the joint is at its zero
configuration the two frames coincide.

Joints are created by `MultiBodySystem.add_joint`, which also registers
them in their predecessor's child set. Links to bodies are handles into the
owning system rather than direct references.
"""

import enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

import jax
import jax.numpy as jnp

from ..exceptions import ConfigurationError, PreconditionViolationError
from ..spatial import ReferenceFrame, SpatialAcceleration, Twist, Wrench
from .joint_kinds import JointKind, get_joint_kind_spec

if TYPE_CHECKING:
    from .rigid_body import RigidBody
    from .system import MultiBodySystem

Array = jax.Array

NAME_ID_SEPARATOR = ":"
MAX_NUMBER_OF_DOFS = 6


class JointStateType(enum.Enum):
    CONFIGURATION = "configuration"
    VELOCITY = "velocity"
    ACCELERATION = "acceleration"
    EFFORT = "effort"


class Joint:
    """A joint of a multi-body system.

    Attributes:
        name: Joint name, unique within a system by convention only.
        name_id: Name prefixed with the names of every ancestor joint.
        kind: The joint kind, fixing degrees of freedom and state layout.
        axis: Unit motion axis for revolute and prismatic joints, None otherwise.
        index: Handle of this joint in its system.
        frame_before_joint: Frame fixed to the predecessor at the joint origin.
        frame_after_joint: Frame fixed to the successor at the joint origin.
    """

    def __init__(self, system: "MultiBodySystem", index: int, name: str, predecessor: "RigidBody",
                 kind: JointKind, axis: Optional[Array] = None, transform_to_parent: Optional[Array] = None):
        if NAME_ID_SEPARATOR in name:
            raise ConfigurationError(
                f"A joint name can not contain '{NAME_ID_SEPARATOR}'. Tried to construct a joint with name {name}."
            )

        self._spec = get_joint_kind_spec(kind)
        if self._spec.requires_axis:
            if axis is None:
                raise ConfigurationError(f"Joint '{name}' of kind {kind.value} requires an axis")
            axis = jnp.asarray(axis, dtype=jnp.float64)
            norm = jnp.linalg.norm(axis)
            if axis.shape != (3,) or not norm > 0.0:
                raise ConfigurationError(f"Joint '{name}' axis must be a non-zero 3-vector, got {axis}")
            axis = axis / norm
        else:
            axis = None

        self._system = system
        self.index = index
        self.name = name
        self.kind = kind
        self.axis = axis
        self._predecessor_index = predecessor.index
        self._successor_index: Optional[int] = None

        if predecessor.is_root_body:
            self.name_id = name
        else:
            self.name_id = predecessor.parent_joint.name_id + NAME_ID_SEPARATOR + name

        self.frame_before_joint = ReferenceFrame(f"before{name}", predecessor.body_fixed_frame, transform_to_parent)
        self.frame_after_joint = ReferenceFrame(f"after{name}", self.frame_before_joint, lambda: self.joint_transform)

        self._configuration = self._spec.zero_configuration()
        self._velocity = jnp.zeros(self.degrees_of_freedom)
        self._acceleration = jnp.zeros(self.degrees_of_freedom)
        self._effort = jnp.zeros(self.degrees_of_freedom)

    @property
    def predecessor(self) -> "RigidBody":
        return self._system.body_at(self._predecessor_index)

    @property
    def successor(self) -> Optional["RigidBody"]:
        if self._successor_index is None:
            return None
        return self._system.body_at(self._successor_index)

    @property
    def system(self) -> "MultiBodySystem":
        return self._system

    @property
    def degrees_of_freedom(self) -> int:
        return self._spec.degrees_of_freedom

    @property
    def configuration_size(self) -> int:
        return self._spec.configuration_size

    # State

    @property
    def configuration(self) -> Array:
        return self._configuration

    @configuration.setter
    def configuration(self, value: Array):
        self._configuration = self._checked_state(JointStateType.CONFIGURATION, value)

    @property
    def velocity(self) -> Array:
        return self._velocity

    @velocity.setter
    def velocity(self, value: Array):
        self._velocity = self._checked_state(JointStateType.VELOCITY, value)

    @property
    def acceleration(self) -> Array:
        return self._acceleration

    @acceleration.setter
    def acceleration(self, value: Array):
        self._acceleration = self._checked_state(JointStateType.ACCELERATION, value)

    @property
    def effort(self) -> Array:
        return self._effort

    @effort.setter
    def effort(self, value: Array):
        self._effort = self._checked_state(JointStateType.EFFORT, value)

    def state_size(self, state_type: JointStateType) -> int:
        """Number of rows this joint uses for `state_type` in a state vector."""
        if state_type is JointStateType.CONFIGURATION:
            return self.configuration_size
        return self.degrees_of_freedom

    def get_state(self, state_type: JointStateType) -> Array:
        return getattr(self, state_type.value)

    def set_state(self, state_type: JointStateType, value: Array):
        setattr(self, state_type.value, value)

    def pack_state(self, state_type: JointStateType, row_start: int, buffer: Array) -> Tuple[int, Array]:
        """Write this joint's `state_type` into `buffer` from `row_start`.

        Returns:
            The next free row and the updated buffer.
        """
        size = self.state_size(state_type)
        buffer = buffer.at[row_start:row_start + size].set(self.get_state(state_type))
        return row_start + size, buffer

    def unpack_state(self, state_type: JointStateType, row_start: int, buffer: Array) -> int:
        """Read this joint's `state_type` from `buffer` starting at `row_start`.

        A configuration is normalized by the joint kind, e.g. quaternions are
        rescaled to unit length.

        Returns:
            The next row after the ones consumed.
        """
        size = self.state_size(state_type)
        value = jnp.asarray(buffer[row_start:row_start + size])
        if state_type is JointStateType.CONFIGURATION:
            value = self._spec.normalize_configuration(value)
        self.set_state(state_type, value)
        return row_start + size

    def set_to_zero(self):
        self._configuration = self._spec.zero_configuration()
        self._velocity = jnp.zeros(self.degrees_of_freedom)
        self._acceleration = jnp.zeros(self.degrees_of_freedom)
        self._effort = jnp.zeros(self.degrees_of_freedom)

    def _checked_state(self, state_type: JointStateType, value: Array) -> Array:
        value = jnp.asarray(value, dtype=jnp.float64)
        expected_shape = (self.state_size(state_type),)
        if value.shape != expected_shape:
            raise PreconditionViolationError(
                f"Joint {self.name}: {state_type.value} must have shape {expected_shape}, got {value.shape}"
            )
        return value

    # Spatial quantities

    @property
    def joint_transform(self) -> Array:
        """Pose of `frame_after_joint` expressed in `frame_before_joint`."""
        return self._spec.joint_transform(self._configuration, self._axis_or_zero())

    @property
    def joint_offset(self) -> Array:
        """Fixed pose of `frame_before_joint` in the predecessor body-fixed frame."""
        return self.frame_before_joint.transform_to_parent

    @property
    def motion_subspace(self) -> Array:
        """(6, dof) motion subspace expressed in `frame_after_joint`."""
        return self._spec.motion_subspace(self._axis_or_zero())

    @property
    def unit_twists(self) -> List[Twist]:
        """One twist per degree of freedom, used to assemble Jacobians."""
        subspace = self.motion_subspace
        return [
            Twist.from_array(self.frame_after_joint, self.frame_before_joint, self.frame_after_joint, subspace[:, i])
            for i in range(self.degrees_of_freedom)
        ]

    @property
    def twist(self) -> Twist:
        """Twist of `frame_after_joint` relative to `frame_before_joint`, expressed in the former."""
        return Twist.from_array(self.frame_after_joint, self.frame_before_joint, self.frame_after_joint,
                                self.motion_subspace @ self._velocity)

    @property
    def spatial_acceleration(self) -> SpatialAcceleration:
        return SpatialAcceleration.from_array(self.frame_after_joint, self.frame_before_joint,
                                              self.frame_after_joint, self.motion_subspace @ self._acceleration)

    @property
    def wrench(self) -> Wrench:
        """Wrench applied by the joint on its successor, expressed in `frame_after_joint`."""
        successor = self.successor
        body_frame = self.frame_after_joint if successor is None else successor.body_fixed_frame
        return Wrench.from_array(body_frame, self.frame_after_joint, self.motion_subspace @ self._effort)

    def successor_twist(self) -> Twist:
        """Twist of the successor relative to the predecessor, expressed in the successor frame."""
        successor_frame = self._require_successor().body_fixed_frame
        twist = self.twist.replace(base_frame=self.predecessor.body_fixed_frame, body_frame=successor_frame)
        return twist.change_frame(successor_frame)

    def predecessor_twist(self) -> Twist:
        """Twist of the predecessor relative to the successor, expressed in the predecessor frame.

        This is the contribution of a joint traversed against its natural
        direction, e.g. the second half of a joint path.
        """
        predecessor_frame = self.predecessor.body_fixed_frame
        twist = self.twist.replace(base_frame=predecessor_frame,
                                   body_frame=self._require_successor().body_fixed_frame)
        return twist.invert().change_frame(predecessor_frame)

    def _require_successor(self) -> "RigidBody":
        successor = self.successor
        if successor is None:
            raise PreconditionViolationError(f"Joint {self.name} has no successor")
        return successor

    def _axis_or_zero(self) -> Array:
        return jnp.zeros(3) if self.axis is None else self.axis

    # Subtree

    def iter_subtree(self) -> Iterator["Joint"]:
        """Lazily go through this joint and every joint below it, depth-first.

        A joint is always produced before its descendants and siblings follow
        their registration order.
        """
        yield self
        successor = self.successor
        if successor is not None:
            yield from successor.iter_children_subtree()

    def subtree_list(self) -> List["Joint"]:
        return list(self.iter_subtree())

    def __repr__(self):
        return f"{self.kind.name} {self.name}"
