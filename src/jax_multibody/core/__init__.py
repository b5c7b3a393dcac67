"""Entity model of the multi-body tree.

Rigid-bodies, joints, the closed set of joint kinds, the arena that builds
and owns a tree, and its index-based PyTree snapshot.
"""

from .joint import MAX_NUMBER_OF_DOFS, NAME_ID_SEPARATOR, Joint, JointStateType
from .joint_kinds import JOINT_KIND_SPECS, JointKind, JointKindSpec, get_joint_kind_spec
from .rigid_body import RigidBody
from .system import MultiBodySystem
from .tree_model import TreeModel

__all__ = [
    "JOINT_KIND_SPECS",
    "MAX_NUMBER_OF_DOFS",
    "NAME_ID_SEPARATOR",
    "Joint",
    "JointKind",
    "JointKindSpec",
    "JointStateType",
    "MultiBodySystem",
    "RigidBody",
    "TreeModel",
    "get_joint_kind_spec",
]
