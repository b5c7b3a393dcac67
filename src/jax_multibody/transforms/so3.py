"""SO(3) helpers used by the joint kinds and the spatial types.

Rotations are stored as 3x3 matrices and quaternions as (w, x, y, z). All
functions are pure and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def skew_symmetric(v: Array) -> Array:
    """
    Convert a 3D vector to its cross-product matrix.

    Args:
        v: (..., 3) vector

    Returns:
        (..., 3, 3) skew-symmetric matrix such that skew(v) @ u == cross(v, u)
    """
    zeros = jnp.zeros(v.shape[:-1], dtype=v.dtype)

    return jnp.stack([
        jnp.stack([zeros, -v[..., 2], v[..., 1]], axis=-1),
        jnp.stack([v[..., 2], zeros, -v[..., 0]], axis=-1),
        jnp.stack([-v[..., 1], v[..., 0], zeros], axis=-1)
    ], axis=-2)


def exp(rotation_vector: Array) -> Array:
    """
    Rodrigues' formula: rotation vector (axis * angle) to rotation matrix.

    Args:
        rotation_vector: (..., 3) axis-angle vector

    Returns:
        (..., 3, 3) rotation matrix
    """
    angle = jnp.linalg.norm(rotation_vector, axis=-1, keepdims=True)
    small_angle = angle < 1e-8
    safe_angle = jnp.where(small_angle, 1.0, angle)

    # Taylor expansion near zero keeps the division well defined
    sin_term = jnp.where(small_angle, 1.0 - angle**2 / 6.0, jnp.sin(safe_angle) / safe_angle)
    cos_term = jnp.where(small_angle, 0.5 - angle**2 / 24.0, (1.0 - jnp.cos(safe_angle)) / safe_angle**2)

    K = skew_symmetric(rotation_vector)
    I = jnp.broadcast_to(jnp.eye(3, dtype=rotation_vector.dtype), rotation_vector.shape[:-1] + (3, 3))

    return I + sin_term[..., None] * K + cos_term[..., None] * jnp.matmul(K, K)


def inverse(R: Array) -> Array:
    """Inverse of a rotation matrix, i.e. its transpose."""
    return jnp.swapaxes(R, -1, -2)


def normalize_quaternion(quaternion: Array) -> Array:
    """Scale quaternion(s) to unit length."""
    return quaternion / jnp.linalg.norm(quaternion, axis=-1, keepdims=True)


def quaternion_from_axis_angle(axis: Array, angle) -> Array:
    """
    Build the unit quaternion of a rotation of `angle` about `axis`.

    Args:
        axis: (3,) rotation axis, normalized here
        angle: rotation angle in radians

    Returns:
        (4,) quaternion (w, x, y, z)
    """
    axis = jnp.asarray(axis, dtype=jnp.float64)
    axis = axis / jnp.linalg.norm(axis)
    half_angle = 0.5 * angle
    return jnp.concatenate([jnp.array([jnp.cos(half_angle)]), jnp.sin(half_angle) * axis])


def from_quaternion(quaternion: Array) -> Array:
    """
    Convert quaternion(s) (w, x, y, z) to rotation matrices.

    The input is normalized first, so slightly drifted quaternions are
    accepted.

    Args:
        quaternion: (..., 4) quaternion

    Returns:
        (..., 3, 3) rotation matrix
    """
    w, x, y, z = jnp.moveaxis(normalize_quaternion(quaternion), -1, 0)

    xx, yy, zz = x*x, y*y, z*z
    wx, wy, wz = w*x, w*y, w*z
    xy, xz, yz = x*y, x*z, y*z

    return jnp.stack([
        jnp.stack([1 - 2*(yy + zz), 2*(xy - wz), 2*(xz + wy)], axis=-1),
        jnp.stack([2*(xy + wz), 1 - 2*(xx + zz), 2*(yz - wx)], axis=-1),
        jnp.stack([2*(xz - wy), 2*(yz + wx), 1 - 2*(xx + yy)], axis=-1)
    ], axis=-2)
