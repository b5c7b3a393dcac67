"""Moment of inertia of primitive shapes, about their center of mass."""

import jax
import jax.numpy as jnp

Array = jax.Array


def _check_mass_and_dimensions(mass, *dimensions):
    if mass < 0.0:
        raise ValueError(f"can not pass in negative mass values, got {mass}")
    for dimension in dimensions:
        if dimension < 0.0:
            raise ValueError(f"can not pass in negative dimensions, got {dimension}")


def solid_cylinder(mass: float, radius: float, height: float, axis: Array) -> Array:
    """
    Moment of inertia of a solid cylinder.

    Args:
        mass: cylinder mass
        radius: cylinder radius
        height: cylinder length along its axis
        axis: (3,) revolution axis, expected to be one of the frame axes

    Returns:
        (3, 3) diagonal moment of inertia
    """
    _check_mass_and_dimensions(mass, radius, height)
    axis = jnp.asarray(axis, dtype=jnp.float64)

    i_along_axis = 0.5 * mass * radius * radius
    i_cross_axis = mass * (3.0 * radius * radius + height * height) / 12.0

    principal = i_cross_axis * (jnp.ones(3) - axis) + i_along_axis * axis
    return jnp.diag(principal)


def solid_ellipsoid(mass: float, x_radius: float, y_radius: float, z_radius: float) -> Array:
    """Moment of inertia of a solid ellipsoid given its three radii."""
    _check_mass_and_dimensions(mass, x_radius, y_radius, z_radius)
    ixx = mass * (y_radius * y_radius + z_radius * z_radius) / 5.0
    iyy = mass * (z_radius * z_radius + x_radius * x_radius) / 5.0
    izz = mass * (x_radius * x_radius + y_radius * y_radius) / 5.0
    return jnp.diag(jnp.array([ixx, iyy, izz]))


def solid_box(mass: float, x_length: float, y_length: float, z_length: float) -> Array:
    """Moment of inertia of a solid box given its edge lengths."""
    _check_mass_and_dimensions(mass, x_length, y_length, z_length)
    ixx = mass * (y_length * y_length + z_length * z_length) / 12.0
    iyy = mass * (x_length * x_length + z_length * z_length) / 12.0
    izz = mass * (x_length * x_length + y_length * y_length) / 12.0
    return jnp.diag(jnp.array([ixx, iyy, izz]))
