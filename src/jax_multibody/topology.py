"""Tree queries over the parent links of a multi-body system.

Every query walks parent joints toward the root and compares bodies by
identity. No assumption is made on the relative position of the bodies in
the tree: either, both, or neither may be an ancestor of the other.
"""

from typing import List, Optional, Sequence, Tuple

from .core import Joint, RigidBody
from .exceptions import IncompatibleTreeError, PreconditionViolationError


def _parent_body(body: RigidBody) -> RigidBody:
    return body.parent_joint.predecessor


def get_root_body(body: RigidBody) -> RigidBody:
    """Root body of the multi-body system `body` belongs to."""
    root = body
    while not root.is_root_body:
        root = _parent_body(root)
    return root


def compute_distance_to_root(body: RigidBody) -> int:
    """Number of joints between `body` and its root body, 0 for the root itself."""
    distance = 0
    current = body
    while not current.is_root_body:
        distance += 1
        current = _parent_body(current)
    return distance


def compute_distance_to_ancestor(descendant: RigidBody, ancestor: RigidBody) -> int:
    """Number of joints between `descendant` and `ancestor`.

    Returns:
        0 if the two bodies are the same, -1 if `ancestor` is not located
        between `descendant` and the root body.
    """
    distance = 0
    current = descendant
    while not current.is_root_body and current is not ancestor:
        distance += 1
        current = _parent_body(current)

    if current is not ancestor:
        return -1
    return distance


def is_ancestor(candidate_descendant: RigidBody, ancestor: RigidBody) -> bool:
    """Whether `ancestor` lies between `candidate_descendant` and the root, both included."""
    current = candidate_descendant
    while not current.is_root_body:
        if current is ancestor:
            return True
        current = _parent_body(current)
    return current is ancestor


def compute_nearest_common_ancestor(first_body: RigidBody, second_body: RigidBody) -> RigidBody:
    """Common ancestor of the two bodies minimizing the sum of their distances to it.

    Raises:
        IncompatibleTreeError: if the two bodies belong to different trees.
    """
    if first_body is second_body:
        return first_body

    first_ancestor = first_body
    second_ancestor = second_body
    first_distance = compute_distance_to_root(first_body)
    second_distance = compute_distance_to_root(second_body)

    # Bring the deeper body up to the depth of the other one
    while first_distance > second_distance:
        first_ancestor = _parent_body(first_ancestor)
        first_distance -= 1
    while second_distance > first_distance:
        second_ancestor = _parent_body(second_ancestor)
        second_distance -= 1

    if first_ancestor is second_ancestor:
        return first_ancestor

    # Both are now equidistant from their roots, on distinct branches
    distance_to_root = first_distance
    while distance_to_root > 0:
        first_ancestor = _parent_body(first_ancestor)
        second_ancestor = _parent_body(second_ancestor)
        if first_ancestor is second_ancestor:
            return first_ancestor
        distance_to_root -= 1

    # Both walks reached a root without meeting
    raise IncompatibleTreeError(first_ancestor, second_ancestor)


def compute_distance(first_body: RigidBody, second_body: RigidBody) -> int:
    """Number of joints separating two bodies of the same tree.

    Raises:
        IncompatibleTreeError: if the two bodies belong to different trees.
    """
    ancestor = compute_nearest_common_ancestor(first_body, second_body)
    return compute_distance_to_ancestor(first_body, ancestor) + compute_distance_to_ancestor(second_body, ancestor)


def collect_joint_path(start: RigidBody, end: RigidBody) -> Tuple[List[Joint], RigidBody]:
    """Shortest chain of joints connecting `start` to `end`.

    The first part of the path holds the joints met climbing from `start` to
    the nearest common ancestor, in that order. The second part holds the
    joints met climbing from `end`, stored in reverse so that the last joint
    is the parent joint of `end`. Joints of the second part are traversed
    from successor to predecessor, i.e. against their natural direction.

    Returns:
        The joint path and the nearest common ancestor of `start` and `end`.

    Raises:
        IncompatibleTreeError: if the two bodies belong to different trees.
    """
    ancestor = compute_nearest_common_ancestor(start, end)
    start_distance = compute_distance_to_ancestor(start, ancestor)
    end_distance = compute_distance_to_ancestor(end, ancestor)

    path: List[Optional[Joint]] = [None] * (start_distance + end_distance)

    current = start
    for index in range(start_distance):
        joint = current.parent_joint
        path[index] = joint
        current = joint.predecessor

    current = end
    for index in range(start_distance + end_distance - 1, start_distance - 1, -1):
        joint = current.parent_joint
        path[index] = joint
        current = joint.predecessor

    return path, ancestor


def create_joint_path(start: RigidBody, end: RigidBody) -> List[Joint]:
    """Joint path from `start` to `end`, see `collect_joint_path`."""
    path, _ = collect_joint_path(start, end)
    return path


def collect_rigid_body_path(start: RigidBody, end: RigidBody) -> Tuple[List[RigidBody], RigidBody]:
    """Bodies met traveling from `start` to `end`, both included.

    The nearest common ancestor appears in the path only when it is `start`
    or `end` itself; when it lies strictly between them the path goes from
    the last body of the `start` branch directly to the first body of the
    `end` branch.

    Returns:
        The body path and the nearest common ancestor of `start` and `end`.

    Raises:
        IncompatibleTreeError: if the two bodies belong to different trees.
    """
    if start is end:
        return [end], end

    ancestor = compute_nearest_common_ancestor(start, end)

    path: List[Optional[RigidBody]] = []
    if start is ancestor:
        path.append(start)

    current = start
    while current is not ancestor:
        path.append(current)
        current = _parent_body(current)

    path.extend([None] * compute_distance_to_ancestor(end, ancestor))

    if end is ancestor:
        path.append(end)

    current = end
    index = len(path) - 1
    while current is not ancestor:
        path[index] = current
        current = _parent_body(current)
        index -= 1

    return path, ancestor


def compute_degrees_of_freedom(joints: Sequence[Joint]) -> int:
    """Total number of degrees of freedom of the given joints."""
    return sum(joint.degrees_of_freedom for joint in joints)


def compute_degrees_of_freedom_between(first_body: RigidBody, second_body: RigidBody) -> int:
    """Number of degrees of freedom of the kinematic chain connecting the two bodies.

    Raises:
        IncompatibleTreeError: if the two bodies belong to different trees.
    """
    return compute_degrees_of_freedom(create_joint_path(first_body, second_body))


def are_joints_in_continuous_order(joints: Sequence[Joint]) -> bool:
    """Whether each joint is the parent joint of the next joint's predecessor."""
    for index in range(len(joints) - 1):
        if joints[index] is not joints[index + 1].predecessor.parent_joint:
            return False
    return True


def check_joints_in_continuous_order(joints: Sequence[Joint]):
    """Raise PreconditionViolationError unless the joints form a root-to-leaf chain."""
    if not are_joints_in_continuous_order(joints):
        raise PreconditionViolationError(f"Joints are not in continuous order: {list(joints)}")
