"""Spatial vectors: Twist, SpatialAcceleration and Wrench.

Each vector is an immutable flax PyTree. The frames are static metadata,
the angular and linear parts are the array leaves. Operations that the
mutable formulations perform in place return a new vector here.

Layout is always angular part first, then linear part.
"""

import jax
import jax.numpy as jnp
from flax import struct

from ..exceptions import ReferenceFrameMismatchError
from ..transforms import se3
from .frames import ReferenceFrame

Array = jax.Array

SIZE = 6


class _SpatialVectorBase:
    """Shared behavior of every spatial vector type."""

    def to_array(self) -> Array:
        """(6,) array [angular, linear]."""
        return jnp.concatenate([self.angular, self.linear])

    def get(self, row_start: int, buffer: Array) -> Array:
        """Write the six components into `buffer` starting at `row_start`."""
        return buffer.at[row_start:row_start + SIZE].set(self.to_array())

    def with_components(self, components: Array):
        components = jnp.asarray(components)
        return self.replace(angular=components[:3], linear=components[3:SIZE])

    def set_including_frame(self, other):
        """Copy of `self` holding the frames and components of `other`."""
        return self.replace(**{name: getattr(other, name) for name in self._frame_fields},
                            angular=other.angular, linear=other.linear)

    def scale(self, factor):
        return self.replace(angular=self.angular * factor, linear=self.linear * factor)

    def check_reference_frame_match(self, frame: ReferenceFrame):
        self.expressed_in_frame.check_reference_frame_match(frame)

    def _check_frames_match(self, other):
        for name in self._frame_fields:
            if getattr(self, name) is not getattr(other, name):
                raise ReferenceFrameMismatchError(getattr(self, name), getattr(other, name))


class _SpatialMotionVectorBase(_SpatialVectorBase):
    _frame_fields = ("body_frame", "base_frame", "expressed_in_frame")

    @classmethod
    def zero(cls, body_frame, base_frame, expressed_in_frame):
        return cls(body_frame, base_frame, expressed_in_frame, jnp.zeros(3), jnp.zeros(3))

    @classmethod
    def from_array(cls, body_frame, base_frame, expressed_in_frame, components: Array):
        components = jnp.asarray(components)
        return cls(body_frame, base_frame, expressed_in_frame, components[:3], components[3:SIZE])

    def invert(self):
        """Motion of the base frame with respect to the body frame."""
        return self.replace(body_frame=self.base_frame, base_frame=self.body_frame,
                            angular=-self.angular, linear=-self.linear)

    def change_frame(self, desired_frame: ReferenceFrame):
        """Express this vector in `desired_frame`.

        For accelerations the two frames are assumed to have no relative
        motion, which holds for frames rigidly attached to the same body.
        """
        if desired_frame is self.expressed_in_frame:
            return self
        T = self.expressed_in_frame.transform_to_desired_frame(desired_frame)
        components = se3.motion_adjoint(T) @ self.to_array()
        return self.replace(expressed_in_frame=desired_frame,
                            angular=components[:3], linear=components[3:])

    def add(self, other):
        """Compose with `other` whose base frame is this vector's body frame.

        Both vectors must be expressed in the same frame. The result goes from
        this vector's base frame to `other`'s body frame.
        """
        self.check_reference_frame_match(other.expressed_in_frame)
        if other.base_frame is not self.body_frame:
            raise ReferenceFrameMismatchError(self.body_frame, other.base_frame)
        return self.replace(body_frame=other.body_frame,
                            angular=self.angular + other.angular, linear=self.linear + other.linear)


@struct.dataclass
class Twist(_SpatialMotionVectorBase):
    """Angular and linear velocity of `body_frame` with respect to `base_frame`."""
    body_frame: ReferenceFrame = struct.field(pytree_node=False)
    base_frame: ReferenceFrame = struct.field(pytree_node=False)
    expressed_in_frame: ReferenceFrame = struct.field(pytree_node=False)
    angular: Array
    linear: Array


@struct.dataclass
class SpatialAcceleration(_SpatialMotionVectorBase):
    """Angular and linear acceleration of `body_frame` with respect to `base_frame`."""
    body_frame: ReferenceFrame = struct.field(pytree_node=False)
    base_frame: ReferenceFrame = struct.field(pytree_node=False)
    expressed_in_frame: ReferenceFrame = struct.field(pytree_node=False)
    angular: Array
    linear: Array


@struct.dataclass
class Wrench(_SpatialVectorBase):
    """Torque and force exerted on `body_frame`."""
    body_frame: ReferenceFrame = struct.field(pytree_node=False)
    expressed_in_frame: ReferenceFrame = struct.field(pytree_node=False)
    angular: Array
    linear: Array

    _frame_fields = ("body_frame", "expressed_in_frame")

    @classmethod
    def zero(cls, body_frame, expressed_in_frame):
        return cls(body_frame, expressed_in_frame, jnp.zeros(3), jnp.zeros(3))

    @classmethod
    def from_array(cls, body_frame, expressed_in_frame, components: Array):
        components = jnp.asarray(components)
        return cls(body_frame, expressed_in_frame, components[:3], components[3:SIZE])

    def invert(self):
        """Reaction wrench, exerted by the body on its environment."""
        return self.replace(angular=-self.angular, linear=-self.linear)

    def change_frame(self, desired_frame: ReferenceFrame):
        if desired_frame is self.expressed_in_frame:
            return self
        T = self.expressed_in_frame.transform_to_desired_frame(desired_frame)
        components = se3.force_adjoint(T) @ self.to_array()
        return self.replace(expressed_in_frame=desired_frame,
                            angular=components[:3], linear=components[3:])

    def add(self, other: "Wrench") -> "Wrench":
        self._check_frames_match(other)
        return self.replace(angular=self.angular + other.angular, linear=self.linear + other.linear)
