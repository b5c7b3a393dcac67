"""Pack and unpack joint states into flat vectors.

A state vector of an ordered joint sequence stacks each joint's rows in
sequence order. A joint uses `degrees_of_freedom` rows for velocity,
acceleration and effort, and `configuration_size` rows for configuration,
which is larger for joints storing orientation as a quaternion.

The per-joint packing rule is `Joint.pack_state` / `Joint.unpack_state`;
the functions here only chain them with a running row offset.
"""

import logging
from typing import Optional, Sequence, Tuple

import jax
import jax.numpy as jnp

from .core import Joint, JointStateType
from .exceptions import PreconditionViolationError

logger = logging.getLogger(__name__)

Array = jax.Array

__all__ = [
    "JointStateType",
    "compute_state_size",
    "copy_joints_state",
    "extract_joints_state",
    "insert_joints_state",
]


def compute_state_size(joints: Sequence[Joint], state_type: JointStateType) -> int:
    """Number of rows the state vector of `joints` has for `state_type`."""
    return sum(joint.state_size(state_type) for joint in joints)


def extract_joints_state(joints: Sequence[Joint], state_type: JointStateType,
                         buffer: Optional[Array] = None) -> Tuple[int, Array]:
    """Stack the `state_type` of each joint into a vector.

    Args:
        joints: Ordered joints to read from.
        state_type: The state category to extract.
        buffer: Vector to write into from row 0, at least as long as the
            joints need. When None a zero vector of the exact size is
            allocated.

    Returns:
        The number of rows written and the filled buffer.

    Raises:
        PreconditionViolationError: if `buffer` has fewer rows than the joints need.
    """
    required = compute_state_size(joints, state_type)
    if buffer is None:
        buffer = jnp.zeros(required)
    else:
        buffer = jnp.asarray(buffer)
        if buffer.shape[0] < required:
            raise PreconditionViolationError(
                f"Buffer too small to extract {state_type.value}: {buffer.shape[0]} rows, {required} required"
            )

    row = 0
    for joint in joints:
        row, buffer = joint.pack_state(state_type, row, buffer)

    logger.debug("Extracted %d rows of %s from %d joints", row, state_type.value, len(joints))
    return row, buffer


def insert_joints_state(joints: Sequence[Joint], state_type: JointStateType, buffer: Array) -> int:
    """Write consecutive rows of `buffer` into the `state_type` of each joint.

    Configurations are normalized by each joint kind on the way in.

    Returns:
        The number of rows read.

    Raises:
        PreconditionViolationError: if `buffer` has fewer rows than the joints need.
    """
    buffer = jnp.asarray(buffer)
    required = compute_state_size(joints, state_type)
    if buffer.shape[0] < required:
        raise PreconditionViolationError(
            f"Buffer too small to insert {state_type.value}: {buffer.shape[0]} rows, {required} required"
        )

    row = 0
    for joint in joints:
        row = joint.unpack_state(state_type, row, buffer)

    logger.debug("Inserted %d rows of %s into %d joints", row, state_type.value, len(joints))
    return row


def copy_joints_state(source: Sequence[Joint], destination: Sequence[Joint], state_type: JointStateType):
    """Copy the `state_type` of each source joint into the destination joint at the same index.

    Raises:
        PreconditionViolationError: if the two sequences differ in length or a
            pair of joints have different state sizes; nothing is copied then.
    """
    if len(source) != len(destination):
        raise PreconditionViolationError(
            f"Inconsistent argument size: source = {len(source)}, destination = {len(destination)}."
        )
    for source_joint, destination_joint in zip(source, destination):
        if source_joint.state_size(state_type) != destination_joint.state_size(state_type):
            raise PreconditionViolationError(
                f"Incompatible joints for {state_type.value}: {source_joint} and {destination_joint}"
            )

    for source_joint, destination_joint in zip(source, destination):
        destination_joint.set_state(state_type, source_joint.get_state(state_type))
