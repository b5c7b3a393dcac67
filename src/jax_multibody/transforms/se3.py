"""SE(3) rigid-body transforms as 4x4 homogeneous matrices.

Spatial vectors in this package are ordered angular part first, then linear
part, so the adjoint operators below use that layout.
"""

import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct an SE(3) transform from a position and a rotation.

    Args:
        p: (..., 3) position vector
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    p = jnp.asarray(p)
    R = jnp.asarray(R)
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    T = jnp.zeros(batch_shape + (4, 4), dtype=jnp.result_type(p.dtype, R.dtype))
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def identity() -> Array:
    """The 4x4 identity transform."""
    return jnp.eye(4)


def from_position(p: Array) -> Array:
    """Pure translation."""
    return from_position_and_rotation(jnp.asarray(p, dtype=jnp.float64), jnp.eye(3))


def multiply(T1: Array, T2: Array) -> Array:
    """T1 @ T2: apply T2 first, then T1."""
    return jnp.matmul(T1, T2)


def inverse(T: Array) -> Array:
    """
    Inverse of an SE(3) transform using its block structure.

    T^-1 = [[R^T, -R^T @ t], [0, 1]]

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 4, 4) inverse transformation matrix
    """
    R_inv = so3.inverse(get_rotation(T))
    t_inv = -jnp.einsum("...ij,...j->...i", R_inv, get_position(T))
    return from_position_and_rotation(t_inv, R_inv)


def apply(T: Array, points: Array) -> Array:
    """
    Transform point(s).

    Args:
        T: (..., 4, 4) transformation matrix
        points: (..., 3) point(s)

    Returns:
        (..., 3) transformed point(s)
    """
    return jnp.einsum("...ij,...j->...i", get_rotation(T), points) + get_position(T)


def get_position(T: Array) -> Array:
    """(..., 3) translation part."""
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """(..., 3, 3) rotation part."""
    return T[..., :3, :3]


def motion_adjoint(T: Array) -> Array:
    """
    Adjoint matrix mapping motion vectors (angular, linear) across frames.

    If `T` is the pose of frame A expressed in frame B, the result maps a
    twist expressed in A to the same twist expressed in B.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 6, 6) matrix [[R, 0], [[t]_x R, R]]
    """
    R = get_rotation(T)
    t_skew_R = jnp.matmul(so3.skew_symmetric(get_position(T)), R)
    zeros = jnp.zeros_like(R)

    top = jnp.concatenate([R, zeros], axis=-1)
    bottom = jnp.concatenate([t_skew_R, R], axis=-1)
    return jnp.concatenate([top, bottom], axis=-2)


def force_adjoint(T: Array) -> Array:
    """
    Dual of `motion_adjoint` for force vectors (torque, force).

    Args:
        T: (..., 4, 4) pose of frame A expressed in frame B

    Returns:
        (..., 6, 6) matrix [[R, [t]_x R], [0, R]]
    """
    R = get_rotation(T)
    t_skew_R = jnp.matmul(so3.skew_symmetric(get_position(T)), R)
    zeros = jnp.zeros_like(R)

    top = jnp.concatenate([R, t_skew_R], axis=-1)
    bottom = jnp.concatenate([zeros, R], axis=-1)
    return jnp.concatenate([top, bottom], axis=-2)
