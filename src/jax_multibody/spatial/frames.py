"""Reference frames attached to rigid-bodies and joints.

A frame knows its parent and the pose of itself expressed in that parent.
The pose is either a constant 4x4 matrix or a provider called on every
query, which is how frames fixed after a joint follow the joint motion.
"""

from typing import Callable, Optional, Union

import jax
import jax.numpy as jnp

from ..exceptions import ReferenceFrameMismatchError
from ..transforms import se3

Array = jax.Array
TransformSource = Union[Array, Callable[[], Array]]


class ReferenceFrame:
    """Node of a tree of reference frames.

    Attributes:
        name: Frame name, used for diagnostics only.
        parent: Parent frame, None for a root frame.
    """

    def __init__(self, name: str, parent: Optional["ReferenceFrame"] = None,
                 transform_to_parent: Optional[TransformSource] = None):
        if parent is None and transform_to_parent is not None:
            raise ValueError(f"Root frame '{name}' can not have a transform to parent")

        self.name = name
        self.parent = parent
        if transform_to_parent is None:
            transform_to_parent = se3.identity()
        self._transform_source = transform_to_parent

    @classmethod
    def create_root(cls, name: str) -> "ReferenceFrame":
        return cls(name)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root_frame(self) -> "ReferenceFrame":
        frame = self
        while frame.parent is not None:
            frame = frame.parent
        return frame

    @property
    def transform_to_parent(self) -> Array:
        """Pose of this frame expressed in its parent; identity for a root frame."""
        if callable(self._transform_source):
            return self._transform_source()
        return jnp.asarray(self._transform_source)

    def transform_to_root(self) -> Array:
        """Pose of this frame expressed in its root frame."""
        T = se3.identity()
        frame = self
        while frame.parent is not None:
            T = se3.multiply(frame.transform_to_parent, T)
            frame = frame.parent
        return T

    def transform_to_desired_frame(self, desired_frame: "ReferenceFrame") -> Array:
        """Pose of this frame expressed in `desired_frame`.

        Raises:
            ReferenceFrameMismatchError: if the two frames have different roots.
        """
        if desired_frame is self:
            return se3.identity()
        if desired_frame.root_frame is not self.root_frame:
            raise ReferenceFrameMismatchError(self.root_frame, desired_frame.root_frame)
        return se3.multiply(se3.inverse(desired_frame.transform_to_root()), self.transform_to_root())

    def check_reference_frame_match(self, other: "ReferenceFrame"):
        if other is not self:
            raise ReferenceFrameMismatchError(self, other)

    def __repr__(self):
        return self.name
