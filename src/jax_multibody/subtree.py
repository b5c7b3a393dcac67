"""Subtree collectors, joint filters and subtree inertia.

Collectors taking several start nodes return de-duplicated results in
first-seen order, so overlapping subtrees contribute each node once.
"""

from typing import Iterable, List, TypeVar, Union

from .core import Joint, JointKind, RigidBody
from .spatial import SpatialInertia
from .topology import create_joint_path, get_root_body

T = TypeVar("T")

KindSelection = Union[JointKind, Iterable[JointKind]]


def _unique(items: Iterable[T]) -> List[T]:
    # Joints and bodies hash by identity
    return list(dict.fromkeys(items))


def _as_kind_set(kinds: KindSelection) -> frozenset:
    if isinstance(kinds, JointKind):
        return frozenset((kinds,))
    return frozenset(kinds)


def filter_joints(joints: Iterable[Joint], kinds: KindSelection) -> List[Joint]:
    """Joints whose kind is one of `kinds`, in input order."""
    selection = _as_kind_set(kinds)
    return [joint for joint in joints if joint.kind in selection]


def count_joints_of_kind(joints: Iterable[Joint], kinds: KindSelection) -> int:
    """Number of joints whose kind is one of `kinds`."""
    selection = _as_kind_set(kinds)
    return sum(1 for joint in joints if joint.kind in selection)


def collect_successors(*joints: Joint) -> List[RigidBody]:
    """Successor of each joint, in order."""
    return [joint.successor for joint in joints]


def collect_subtree_successors(*joints: Joint) -> List[RigidBody]:
    """Every body in the subtrees starting at the successors of `joints`.

    Joints without successor contribute no body.
    """
    return _unique(body for joint in joints if joint.successor is not None
                   for body in joint.successor.iter_subtree())


def collect_support_joints(*bodies: RigidBody) -> List[Joint]:
    """Joints on the path from the root body to each of `bodies`."""
    return _unique(joint for body in bodies for joint in create_joint_path(get_root_body(body), body))


def collect_subtree_joints(*root_bodies: RigidBody) -> List[Joint]:
    """Every joint below each of `root_bodies`."""
    return _unique(joint for body in root_bodies for joint in body.iter_children_subtree())


def collect_support_and_subtree_joints(*bodies: RigidBody) -> List[Joint]:
    """Support joints of each body followed by the joints of its subtree."""
    def support_then_subtree(body):
        yield from create_joint_path(get_root_body(body), body)
        yield from body.iter_children_subtree()

    return _unique(joint for body in bodies for joint in support_then_subtree(body))


def collect_subtree_end_effectors(body: RigidBody) -> List[RigidBody]:
    """Bodies of the subtree starting at `body` that have no child joint."""
    return [subtree_body for subtree_body in body.iter_subtree() if not subtree_body.has_children]


def collect_subtree_joints_of_kind(root_body: RigidBody, kinds: KindSelection) -> List[Joint]:
    """Joints below `root_body` whose kind is one of `kinds`, in subtree order."""
    return filter_joints(root_body.iter_children_subtree(), kinds)


def compute_subtree_inertia(start: Union[RigidBody, Joint]) -> SpatialInertia:
    """Sum of the inertias of every body in a subtree, `start` included.

    The result is expressed in the body-fixed frame of the subtree root body,
    i.e. `start` or the successor of `start` for a joint. Bodies without
    inertia are skipped.

    Raises:
        PreconditionViolationError: if `start` is a joint without successor.
    """
    root_body = start._require_successor() if isinstance(start, Joint) else start
    frame = root_body.body_fixed_frame

    subtree_inertia = SpatialInertia.zero(frame, frame)
    for body in root_body.iter_subtree():
        if body.inertia is None:
            continue
        subtree_inertia = subtree_inertia.add(body.inertia.change_frame(frame))
    return subtree_inertia
