"""Tests for the tree queries in topology."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_multibody import (
    IncompatibleTreeError,
    JointKind,
    MultiBodyError,
    MultiBodySystem,
    PreconditionViolationError,
)
from jax_multibody import topology


def build_random_tree(parent_choices):
    """Grow a tree where body i + 1 hangs below body `parent_choices[i] % (i + 1)`."""
    system = MultiBodySystem("root")
    for i, choice in enumerate(parent_choices):
        parent = system.bodies[choice % len(system.bodies)]
        joint = system.add_joint(f"joint{i}", parent, JointKind.REVOLUTE, axis=[0.0, 0.0, 1.0])
        system.add_rigid_body(f"body{i}", joint)
    return system


def naive_common_ancestor(first, second):
    """Reference answer built from the ancestor set of `first`."""
    ancestors = []
    body = first
    while True:
        ancestors.append(body)
        if body.is_root_body:
            break
        body = body.parent_joint.predecessor

    body = second
    while not any(body is ancestor for ancestor in ancestors):
        body = body.parent_joint.predecessor
    return body


random_trees = st.lists(st.integers(min_value=0, max_value=1000), min_size=1, max_size=15)
body_picks = st.integers(min_value=0, max_value=1000)


# Scenarios
def test_chain_joint_paths(chain_system):
    """Joint paths along a chain in both directions."""
    root = chain_system.root_body
    b = chain_system.get_body("B")
    j1 = chain_system.get_joint("J1")
    j2 = chain_system.get_joint("J2")

    assert topology.create_joint_path(b, root) == [j2, j1]
    assert topology.create_joint_path(root, b) == [j1, j2]
    assert topology.compute_distance(root, b) == 2


def test_branched_joint_path(branched_system):
    """Path between two siblings goes through their common parent."""
    root = branched_system.root_body
    left = branched_system.get_body("L")
    right = branched_system.get_body("R")

    path, ancestor = topology.collect_joint_path(left, right)

    assert topology.compute_nearest_common_ancestor(left, right) is root
    assert ancestor is root
    assert path == [branched_system.get_joint("J1"), branched_system.get_joint("J2")]


def test_joint_path_between_same_body(chain_system):
    """A body is connected to itself by an empty path."""
    a = chain_system.get_body("A")
    path, ancestor = topology.collect_joint_path(a, a)
    assert path == []
    assert ancestor is a


def test_joint_path_in_deep_tree(humanoid_system):
    """Second half of the path is stored from the ancestor side to the end body."""
    left_hand = humanoid_system.get_body("leftHand")
    left_shin = humanoid_system.get_body("leftShin")

    path, ancestor = topology.collect_joint_path(left_hand, left_shin)

    assert ancestor is humanoid_system.get_body("pelvis")
    assert [joint.name for joint in path] == ["leftElbow", "leftShoulder", "spineYaw", "leftHip", "leftKnee"]


# Distances
def test_distance_to_root(humanoid_system):
    """Hop counts from several bodies to the root."""
    assert topology.compute_distance_to_root(humanoid_system.root_body) == 0
    assert topology.compute_distance_to_root(humanoid_system.get_body("pelvis")) == 1
    assert topology.compute_distance_to_root(humanoid_system.get_body("leftHand")) == 4
    assert topology.compute_distance_to_root(humanoid_system.get_body("head")) == 3


def test_distance_to_ancestor(humanoid_system):
    """-1 is returned when the ancestor is not on the path to the root."""
    left_hand = humanoid_system.get_body("leftHand")
    torso = humanoid_system.get_body("torso")
    right_arm = humanoid_system.get_body("rightArm")

    assert topology.compute_distance_to_ancestor(left_hand, torso) == 2
    assert topology.compute_distance_to_ancestor(left_hand, left_hand) == 0
    assert topology.compute_distance_to_ancestor(left_hand, right_arm) == -1
    assert topology.compute_distance_to_ancestor(torso, left_hand) == -1


def test_distance_between_branches(humanoid_system):
    """Distance between bodies of different branches."""
    left_hand = humanoid_system.get_body("leftHand")
    right_thigh = humanoid_system.get_body("rightThigh")
    assert topology.compute_distance(left_hand, right_thigh) == 4
    assert topology.compute_distance(right_thigh, left_hand) == 4


def test_is_ancestor(humanoid_system):
    """Ancestry includes the body itself and the root, never a sibling."""
    root = humanoid_system.root_body
    torso = humanoid_system.get_body("torso")
    head = humanoid_system.get_body("head")
    left_thigh = humanoid_system.get_body("leftThigh")

    assert topology.is_ancestor(head, torso)
    assert topology.is_ancestor(head, head)
    assert topology.is_ancestor(head, root)
    assert not topology.is_ancestor(torso, head)
    assert not topology.is_ancestor(head, left_thigh)
    for body in humanoid_system.bodies[1:]:
        assert not topology.is_ancestor(root, body)


def test_get_root_body(humanoid_system):
    for body in humanoid_system.bodies:
        assert topology.get_root_body(body) is humanoid_system.root_body


# Disjoint trees
def test_disjoint_trees_fail(chain_system, branched_system):
    """Queries across two systems report both roots."""
    b = chain_system.get_body("B")
    left = branched_system.get_body("L")

    with pytest.raises(IncompatibleTreeError, match="not part of the same multi-body system") as error:
        topology.compute_nearest_common_ancestor(b, left)
    assert error.value.first_root is chain_system.root_body
    assert error.value.second_root is branched_system.root_body

    with pytest.raises(IncompatibleTreeError):
        topology.collect_joint_path(b, left)
    with pytest.raises(IncompatibleTreeError):
        topology.compute_distance(left, b)
    with pytest.raises(IncompatibleTreeError):
        topology.collect_rigid_body_path(left, b)


def test_disjoint_roots_fail(chain_system, branched_system):
    """Two roots at depth zero are already distinct trees."""
    with pytest.raises(MultiBodyError):
        topology.compute_nearest_common_ancestor(chain_system.root_body, branched_system.root_body)


# Rigid-body paths
def test_rigid_body_path_descending(chain_system):
    """Start is the ancestor, so it opens the path."""
    root = chain_system.root_body
    a = chain_system.get_body("A")
    b = chain_system.get_body("B")

    path, ancestor = topology.collect_rigid_body_path(root, b)
    assert ancestor is root
    assert path == [root, a, b]


def test_rigid_body_path_ascending(chain_system):
    """End is the ancestor, so it closes the path."""
    root = chain_system.root_body
    a = chain_system.get_body("A")
    b = chain_system.get_body("B")

    path, ancestor = topology.collect_rigid_body_path(b, root)
    assert ancestor is root
    assert path == [b, a, root]


def test_rigid_body_path_skips_intermediate_ancestor(branched_system):
    """An ancestor strictly between both ends is not part of the path."""
    left = branched_system.get_body("L")
    right = branched_system.get_body("R")

    path, ancestor = topology.collect_rigid_body_path(left, right)
    assert ancestor is branched_system.root_body
    assert path == [left, right]


def test_rigid_body_path_same_body(chain_system):
    a = chain_system.get_body("A")
    assert topology.collect_rigid_body_path(a, a) == ([a], a)


# Degrees of freedom and continuity
def test_degrees_of_freedom_between(humanoid_system):
    """Spherical joints count 3, fixed joints count 0."""
    root = humanoid_system.root_body
    left_hand = humanoid_system.get_body("leftHand")
    head = humanoid_system.get_body("head")

    assert topology.compute_degrees_of_freedom_between(root, left_hand) == 6 + 1 + 3 + 1
    assert topology.compute_degrees_of_freedom_between(left_hand, head) == 1 + 3 + 0
    assert topology.compute_degrees_of_freedom(humanoid_system.joints) == 6 + 1 + 3 + 1 + 3 + 1 + 0 + 1 + 1 + 1


def test_continuous_order(humanoid_system):
    """Descending paths are continuous, paths through a branch point are not."""
    root = humanoid_system.root_body
    left_hand = humanoid_system.get_body("leftHand")
    left_shin = humanoid_system.get_body("leftShin")

    assert topology.are_joints_in_continuous_order(topology.create_joint_path(root, left_hand))
    assert topology.are_joints_in_continuous_order([])

    broken_path = topology.create_joint_path(left_hand, left_shin)
    assert not topology.are_joints_in_continuous_order(broken_path)
    with pytest.raises(PreconditionViolationError, match="continuous order"):
        topology.check_joints_in_continuous_order(broken_path)


# Property-based tests on random trees
@given(random_trees, body_picks, body_picks)
@settings(deadline=None)
def test_nearest_common_ancestor_properties(parent_choices, first_pick, second_pick):
    """NCA is symmetric, idempotent and matches a set-based reference."""
    system = build_random_tree(parent_choices)
    first = system.bodies[first_pick % len(system.bodies)]
    second = system.bodies[second_pick % len(system.bodies)]

    ancestor = topology.compute_nearest_common_ancestor(first, second)

    assert ancestor is topology.compute_nearest_common_ancestor(second, first)
    assert ancestor is naive_common_ancestor(first, second)
    assert topology.compute_nearest_common_ancestor(first, first) is first
    assert topology.is_ancestor(first, ancestor)
    assert topology.is_ancestor(second, ancestor)


@given(random_trees, body_picks)
@settings(deadline=None)
def test_distance_to_root_matches_distance_to_root_ancestor(parent_choices, pick):
    system = build_random_tree(parent_choices)
    body = system.bodies[pick % len(system.bodies)]
    assert topology.compute_distance_to_root(body) == topology.compute_distance_to_ancestor(body, system.root_body)


@given(random_trees, body_picks, body_picks)
@settings(deadline=None)
def test_joint_path_reversal(parent_choices, first_pick, second_pick):
    """Swapping start and end reverses the joint path."""
    system = build_random_tree(parent_choices)
    start = system.bodies[first_pick % len(system.bodies)]
    end = system.bodies[second_pick % len(system.bodies)]

    forward = topology.create_joint_path(start, end)
    backward = topology.create_joint_path(end, start)

    assert forward == list(reversed(backward))
    assert len(forward) == topology.compute_distance(start, end)
    assert all(joint is not None for joint in forward)


@given(random_trees, body_picks)
@settings(deadline=None)
def test_descending_path_is_continuous(parent_choices, pick):
    """A path from an ancestor down to a descendant is in continuous order."""
    system = build_random_tree(parent_choices)
    end = system.bodies[pick % len(system.bodies)]

    ancestor = end
    while not ancestor.is_root_body:
        assert topology.are_joints_in_continuous_order(topology.create_joint_path(ancestor, end))
        ancestor = ancestor.parent_joint.predecessor
    assert topology.are_joints_in_continuous_order(topology.create_joint_path(ancestor, end))


@given(random_trees, body_picks, body_picks)
@settings(deadline=None)
def test_rigid_body_path_endpoints(parent_choices, first_pick, second_pick):
    """Body paths open with start and close with end."""
    system = build_random_tree(parent_choices)
    start = system.bodies[first_pick % len(system.bodies)]
    end = system.bodies[second_pick % len(system.bodies)]

    path, ancestor = topology.collect_rigid_body_path(start, end)

    assert path[0] is start
    assert path[-1] is end
    assert all(body is not None for body in path)
    if start is not end and ancestor is not start and ancestor is not end:
        assert all(body is not ancestor for body in path)
