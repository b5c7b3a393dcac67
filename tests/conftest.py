"""
Shared multi-body trees for the test suite.

Fixtures are function-scoped since joint states are mutable.
"""

import jax.numpy as jnp
import pytest

from jax_multibody import JointKind, MultiBodySystem
from jax_multibody.transforms import se3


@pytest.fixture
def chain_system() -> MultiBodySystem:
    """root -> A -> B through two 1-DoF joints J1 (revolute) and J2 (prismatic)."""
    system = MultiBodySystem("root")
    j1 = system.add_joint("J1", system.root_body, JointKind.REVOLUTE, axis=[0.0, 0.0, 1.0])
    a = system.add_rigid_body("A", j1, mass=1.0, moment_of_inertia=jnp.eye(3))
    j2 = system.add_joint("J2", a, JointKind.PRISMATIC, axis=[1.0, 0.0, 0.0],
                          transform_to_parent=se3.from_position(jnp.array([0.0, 0.0, 0.5])))
    system.add_rigid_body("B", j2, mass=2.0, moment_of_inertia=0.5 * jnp.eye(3))
    return system


@pytest.fixture
def branched_system() -> MultiBodySystem:
    """Two branches from the root: root -> L through J1, root -> R through J2."""
    system = MultiBodySystem("root")
    j1 = system.add_joint("J1", system.root_body, JointKind.REVOLUTE, axis=[0.0, 1.0, 0.0])
    system.add_rigid_body("L", j1)
    j2 = system.add_joint("J2", system.root_body, JointKind.REVOLUTE, axis=[0.0, 1.0, 0.0])
    system.add_rigid_body("R", j2)
    return system


def build_humanoid_system() -> MultiBodySystem:
    """Floating humanoid-like tree mixing every joint kind.

    elevator
    └── rootJoint (6 DoF) -> pelvis
        ├── spineYaw (revolute) -> torso
        │   ├── leftShoulder (spherical) -> leftArm
        │   │   └── leftElbow (revolute) -> leftHand
        │   ├── rightShoulder (spherical) -> rightArm
        │   │   └── rightWrist (prismatic) -> rightHand
        │   └── headMount (fixed) -> head
        ├── leftHip (revolute) -> leftThigh
        │   └── leftKnee (revolute) -> leftShin
        └── rightHip (revolute) -> rightThigh
    """
    system = MultiBodySystem("elevator")
    z_axis = [0.0, 0.0, 1.0]
    y_axis = [0.0, 1.0, 0.0]

    def link(joint_name, predecessor, kind, body_name, axis=None, offset=(0.0, 0.0, 0.0)):
        joint = system.add_joint(joint_name, predecessor, kind, axis=axis,
                                 transform_to_parent=se3.from_position(jnp.array(offset)))
        return system.add_rigid_body(body_name, joint, mass=1.0, moment_of_inertia=0.1 * jnp.eye(3))

    pelvis = link("rootJoint", system.root_body, JointKind.SIX_DOF, "pelvis")
    torso = link("spineYaw", pelvis, JointKind.REVOLUTE, "torso", z_axis, (0.0, 0.0, 0.2))
    left_arm = link("leftShoulder", torso, JointKind.SPHERICAL, "leftArm", offset=(0.0, 0.2, 0.4))
    link("leftElbow", left_arm, JointKind.REVOLUTE, "leftHand", y_axis, (0.0, 0.0, -0.3))
    right_arm = link("rightShoulder", torso, JointKind.SPHERICAL, "rightArm", offset=(0.0, -0.2, 0.4))
    link("rightWrist", right_arm, JointKind.PRISMATIC, "rightHand", z_axis, (0.0, 0.0, -0.3))
    link("headMount", torso, JointKind.FIXED, "head", offset=(0.0, 0.0, 0.5))
    left_thigh = link("leftHip", pelvis, JointKind.REVOLUTE, "leftThigh", y_axis, (0.0, 0.1, -0.1))
    link("leftKnee", left_thigh, JointKind.REVOLUTE, "leftShin", y_axis, (0.0, 0.0, -0.4))
    link("rightHip", pelvis, JointKind.REVOLUTE, "rightThigh", y_axis, (0.0, -0.1, -0.1))
    return system


@pytest.fixture
def humanoid_system() -> MultiBodySystem:
    return build_humanoid_system()


@pytest.fixture
def other_humanoid_system() -> MultiBodySystem:
    """Independent copy of `humanoid_system` with its own joint states."""
    return build_humanoid_system()
