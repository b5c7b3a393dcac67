"""RigidBody: node of the multi-body tree."""

from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from ..spatial import ReferenceFrame, SpatialInertia
from .joint import NAME_ID_SEPARATOR

if TYPE_CHECKING:
    from .joint import Joint
    from .system import MultiBodySystem


class RigidBody:
    """A rigid-body of a multi-body system.

    The root body is the only body without a parent joint. Child joints are
    registered by `MultiBodySystem.add_joint`, never by the body itself.

    Attributes:
        name: Body name, unique within a system by convention only.
        name_id: Name prefixed with the identifiers of every ancestor.
        index: Handle of this body in its system.
        body_fixed_frame: Frame rigidly attached to this body.
        inertia: Spatial inertia of this body, None if unknown or irrelevant.
    """

    def __init__(self, system: "MultiBodySystem", index: int, name: str,
                 parent_joint: Optional["Joint"] = None):
        self._system = system
        self.index = index
        self.name = name
        self._parent_joint_index: Optional[int] = None
        self._child_joint_indices: List[int] = []

        if parent_joint is None:
            self.name_id = name
            self.body_fixed_frame = ReferenceFrame.create_root(f"{name}Frame")
        else:
            self._parent_joint_index = parent_joint.index
            self.name_id = parent_joint.name_id + NAME_ID_SEPARATOR + name
            self.body_fixed_frame = ReferenceFrame(f"{name}Frame", parent_joint.frame_after_joint)

        self.inertia: Optional[SpatialInertia] = None

    @property
    def system(self) -> "MultiBodySystem":
        return self._system

    @property
    def parent_joint(self) -> Optional["Joint"]:
        if self._parent_joint_index is None:
            return None
        return self._system.joint_at(self._parent_joint_index)

    @property
    def is_root_body(self) -> bool:
        return self._parent_joint_index is None

    @property
    def child_joints(self) -> Tuple["Joint", ...]:
        return tuple(self._system.joint_at(index) for index in self._child_joint_indices)

    @property
    def has_children(self) -> bool:
        return bool(self._child_joint_indices)

    def _register_child_joint(self, joint: "Joint"):
        self._child_joint_indices.append(joint.index)

    def iter_subtree(self) -> Iterator["RigidBody"]:
        """Lazily go through this body and every body below it.

        Depth-first pre-order: a body is produced before its descendants and
        children follow their registration order. Joints without successor
        are skipped.
        """
        stack = [self]
        while stack:
            body = stack.pop()
            yield body
            for joint in reversed(body.child_joints):
                successor = joint.successor
                if successor is not None:
                    stack.append(successor)

    def iter_children_subtree(self) -> Iterator["Joint"]:
        """Lazily go through every joint below this body, same order as `iter_subtree`."""
        stack = list(reversed(self.child_joints))
        while stack:
            joint = stack.pop()
            yield joint
            successor = joint.successor
            if successor is not None:
                stack.extend(reversed(successor.child_joints))

    def subtree_list(self) -> List["RigidBody"]:
        return list(self.iter_subtree())

    def __repr__(self):
        return f"RigidBody {self.name}"
