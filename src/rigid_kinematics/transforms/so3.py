"""SO(3) rotation matrix primitives in JAX.

This module implements the building blocks for 3D rotations: skew-symmetric
matrices, Rodrigues' formula and the elementary axis rotations. All functions
are pure, JIT-able, and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def skew_symmetric(v: Array) -> Array:
    """
    Convert 3D vector to skew-symmetric matrix.

    Args:
        v: (..., 3) vector

    Returns:
        (..., 3, 3) skew-symmetric matrix
    """
    zeros = jnp.zeros(v.shape[:-1], dtype=v.dtype)

    return jnp.stack([
        jnp.stack([zeros, -v[..., 2], v[..., 1]], axis=-1),
        jnp.stack([v[..., 2], zeros, -v[..., 0]], axis=-1),
        jnp.stack([-v[..., 1], v[..., 0], zeros], axis=-1)
    ], axis=-2)


def from_axis_angle(axis: Array, angle: Array) -> Array:
    """
    Rotation of `angle` radians about `axis` (Rodrigues' formula).

    The axis is normalized first. A zero-length axis is a caller error and
    yields NaN entries.

    Args:
        axis: (..., 3) rotation axis, any non-zero length
        angle: (...) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrix
    """
    axis = jnp.asarray(axis, dtype=jnp.result_type(float))
    angle = jnp.asarray(angle, dtype=axis.dtype)

    axis = axis / jnp.linalg.norm(axis, axis=-1, keepdims=True)
    K = skew_symmetric(axis)

    # R = I + sin(θ) * K + (1 - cos(θ)) * K²
    I = jnp.broadcast_to(jnp.eye(3, dtype=axis.dtype), K.shape)
    sin_angle = jnp.sin(angle)[..., None, None]
    cos_angle = jnp.cos(angle)[..., None, None]

    return I + sin_angle * K + (1.0 - cos_angle) * jnp.matmul(K, K)


def rot_x(angle: Array) -> Array:
    """Elementary rotation about the X axis."""
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(c), jnp.zeros_like(c)
    return jnp.stack([
        jnp.stack([one, zero, zero], axis=-1),
        jnp.stack([zero, c, -s], axis=-1),
        jnp.stack([zero, s, c], axis=-1)
    ], axis=-2)


def rot_y(angle: Array) -> Array:
    """Elementary rotation about the Y axis."""
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(c), jnp.zeros_like(c)
    return jnp.stack([
        jnp.stack([c, zero, s], axis=-1),
        jnp.stack([zero, one, zero], axis=-1),
        jnp.stack([-s, zero, c], axis=-1)
    ], axis=-2)


def rot_z(angle: Array) -> Array:
    """Elementary rotation about the Z axis."""
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(c), jnp.zeros_like(c)
    return jnp.stack([
        jnp.stack([c, -s, zero], axis=-1),
        jnp.stack([s, c, zero], axis=-1),
        jnp.stack([zero, zero, one], axis=-1)
    ], axis=-2)
