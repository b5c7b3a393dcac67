"""Closed set of joint kinds and their fixed per-kind behavior.

Each kind is described by a single `JointKindSpec` looked up from
`JOINT_KIND_SPECS`. Joints never subclass per kind; every kind-specific
decision goes through that table entry.

Configuration layouts:
    FIXED       []
    REVOLUTE    [angle]
    PRISMATIC   [displacement]
    SPHERICAL   [qw, qx, qy, qz]
    SIX_DOF     [qw, qx, qy, qz, x, y, z]

Velocity, acceleration and effort have one entry per degree of freedom,
angular components before linear ones.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Dict

import jax
import jax.numpy as jnp

from ..transforms import se3, so3

Array = jax.Array


class JointKind(enum.Enum):
    FIXED = "fixed"
    REVOLUTE = "revolute"
    PRISMATIC = "prismatic"
    SPHERICAL = "spherical"
    SIX_DOF = "six_dof"


@dataclass(frozen=True)
class JointKindSpec:
    """Fixed properties of a joint kind.

    Attributes:
        degrees_of_freedom: Number of velocity, acceleration and effort entries.
        configuration_size: Number of configuration entries, larger than
            `degrees_of_freedom` when orientation is stored as a quaternion.
        requires_axis: Whether joints of this kind need a motion axis.
        zero_configuration: Returns the configuration where both joint frames coincide.
        normalize_configuration: Projects a configuration back onto its valid set.
        motion_subspace: Maps the joint axis to the (6, dof) motion subspace
            expressed in the frame after the joint.
        joint_transform: Maps (configuration, axis) to the pose of the frame
            after the joint expressed in the frame before the joint.
    """
    degrees_of_freedom: int
    configuration_size: int
    requires_axis: bool
    zero_configuration: Callable[[], Array]
    normalize_configuration: Callable[[Array], Array]
    motion_subspace: Callable[[Array], Array]
    joint_transform: Callable[[Array, Array], Array]


def _identity_normalization(configuration: Array) -> Array:
    return configuration


def _normalize_six_dof(configuration: Array) -> Array:
    return jnp.concatenate([so3.normalize_quaternion(configuration[:4]), configuration[4:]])


def _revolute_subspace(axis: Array) -> Array:
    return jnp.concatenate([axis, jnp.zeros(3)])[:, None]


def _prismatic_subspace(axis: Array) -> Array:
    return jnp.concatenate([jnp.zeros(3), axis])[:, None]


def _revolute_transform(configuration: Array, axis: Array) -> Array:
    return se3.from_position_and_rotation(jnp.zeros(3), so3.exp(axis * configuration[0]))


def _prismatic_transform(configuration: Array, axis: Array) -> Array:
    return se3.from_position(axis * configuration[0])


def _spherical_transform(configuration: Array, axis: Array) -> Array:
    return se3.from_position_and_rotation(jnp.zeros(3), so3.from_quaternion(configuration))


def _six_dof_transform(configuration: Array, axis: Array) -> Array:
    return se3.from_position_and_rotation(configuration[4:], so3.from_quaternion(configuration[:4]))


_IDENTITY_QUATERNION = (1.0, 0.0, 0.0, 0.0)

JOINT_KIND_SPECS: Dict[JointKind, JointKindSpec] = {
    JointKind.FIXED: JointKindSpec(
        degrees_of_freedom=0,
        configuration_size=0,
        requires_axis=False,
        zero_configuration=lambda: jnp.zeros(0),
        normalize_configuration=_identity_normalization,
        motion_subspace=lambda axis: jnp.zeros((6, 0)),
        joint_transform=lambda configuration, axis: se3.identity(),
    ),
    JointKind.REVOLUTE: JointKindSpec(
        degrees_of_freedom=1,
        configuration_size=1,
        requires_axis=True,
        zero_configuration=lambda: jnp.zeros(1),
        normalize_configuration=_identity_normalization,
        motion_subspace=_revolute_subspace,
        joint_transform=_revolute_transform,
    ),
    JointKind.PRISMATIC: JointKindSpec(
        degrees_of_freedom=1,
        configuration_size=1,
        requires_axis=True,
        zero_configuration=lambda: jnp.zeros(1),
        normalize_configuration=_identity_normalization,
        motion_subspace=_prismatic_subspace,
        joint_transform=_prismatic_transform,
    ),
    JointKind.SPHERICAL: JointKindSpec(
        degrees_of_freedom=3,
        configuration_size=4,
        requires_axis=False,
        zero_configuration=lambda: jnp.array(_IDENTITY_QUATERNION),
        normalize_configuration=so3.normalize_quaternion,
        motion_subspace=lambda axis: jnp.concatenate([jnp.eye(3), jnp.zeros((3, 3))]),
        joint_transform=_spherical_transform,
    ),
    JointKind.SIX_DOF: JointKindSpec(
        degrees_of_freedom=6,
        configuration_size=7,
        requires_axis=False,
        zero_configuration=lambda: jnp.array(_IDENTITY_QUATERNION + (0.0, 0.0, 0.0)),
        normalize_configuration=_normalize_six_dof,
        motion_subspace=lambda axis: jnp.eye(6),
        joint_transform=_six_dof_transform,
    ),
}


def get_joint_kind_spec(kind: JointKind) -> JointKindSpec:
    return JOINT_KIND_SPECS[kind]
