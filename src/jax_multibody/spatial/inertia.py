"""Spatial inertia of a rigid-body as a 6x6 matrix (angular rows first)."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax import struct

from ..transforms import se3, so3
from .frames import ReferenceFrame

Array = jax.Array


@struct.dataclass
class SpatialInertia:
    """Inertia of the body attached to `body_frame`, expressed in `expressed_in_frame`.

    Attributes:
        body_frame: Frame rigidly attached to the body.
        expressed_in_frame: Frame the matrix is expressed in.
        matrix: (6, 6) symmetric matrix mapping a twist to a momentum.
    """
    body_frame: ReferenceFrame = struct.field(pytree_node=False)
    expressed_in_frame: ReferenceFrame = struct.field(pytree_node=False)
    matrix: Array

    @classmethod
    def zero(cls, body_frame: ReferenceFrame, expressed_in_frame: ReferenceFrame) -> "SpatialInertia":
        return cls(body_frame, expressed_in_frame, jnp.zeros((6, 6)))

    @classmethod
    def from_mass_properties(cls, body_frame: ReferenceFrame, expressed_in_frame: ReferenceFrame,
                             mass: float, moment_of_inertia: Array,
                             center_of_mass_offset: Optional[Array] = None) -> "SpatialInertia":
        """Build a spatial inertia from mass properties.

        Args:
            body_frame: Frame attached to the body.
            expressed_in_frame: Frame the mass properties are given in.
            mass: Body mass.
            moment_of_inertia: (3, 3) rotational inertia about the center of mass.
            center_of_mass_offset: (3,) center of mass position in
                `expressed_in_frame`, origin by default.
        """
        if center_of_mass_offset is None:
            center_of_mass_offset = jnp.zeros(3)
        c = so3.skew_symmetric(jnp.asarray(center_of_mass_offset, dtype=jnp.float64))
        inertia = jnp.asarray(moment_of_inertia, dtype=jnp.float64)

        top = jnp.concatenate([inertia + mass * c @ c.T, mass * c], axis=-1)
        bottom = jnp.concatenate([mass * c.T, mass * jnp.eye(3)], axis=-1)
        return cls(body_frame, expressed_in_frame, jnp.concatenate([top, bottom], axis=-2))

    @property
    def mass(self) -> Array:
        return self.matrix[3, 3]

    @property
    def center_of_mass_offset(self) -> Array:
        """Center of mass position in `expressed_in_frame`."""
        c = self.matrix[:3, 3:] / self.mass
        return jnp.array([c[2, 1], c[0, 2], c[1, 0]])

    def set_including_frame(self, other: "SpatialInertia") -> "SpatialInertia":
        return self.replace(body_frame=other.body_frame, expressed_in_frame=other.expressed_in_frame,
                            matrix=other.matrix)

    def change_frame(self, desired_frame: ReferenceFrame) -> "SpatialInertia":
        if desired_frame is self.expressed_in_frame:
            return self
        transform_to_desired = self.expressed_in_frame.transform_to_desired_frame(desired_frame)
        X = se3.motion_adjoint(se3.inverse(transform_to_desired))
        return self.replace(expressed_in_frame=desired_frame, matrix=X.T @ self.matrix @ X)

    def add(self, other: "SpatialInertia") -> "SpatialInertia":
        """Sum of two inertias expressed in the same frame; keeps this body frame."""
        self.expressed_in_frame.check_reference_frame_match(other.expressed_in_frame)
        return self.replace(matrix=self.matrix + other.matrix)
