"""SE(3) rigid body transforms as homogeneous matrices in JAX.

A pose is a (..., 4, 4) matrix [R | p; 0 | 1]. Composition is plain matrix
multiplication, so the bottom row stays exactly (0, 0, 0, 1) and no
re-orthonormalization is applied.
"""


import jax
import jax.numpy as jnp

Array = jax.Array


def identity(batch_shape=(), dtype=None) -> Array:
    """(*batch_shape, 4, 4) identity transform."""
    if dtype is None:
        dtype = jnp.result_type(float)
    return jnp.broadcast_to(jnp.eye(4, dtype=dtype), tuple(batch_shape) + (4, 4))


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct SE(3) transform from position and rotation.

    Args:
        p: (..., 3) position vector
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    p = jnp.asarray(p)
    R = jnp.asarray(R)
    dtype = jnp.result_type(p.dtype, R.dtype, jnp.float32)

    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    T = jnp.zeros(batch_shape + (4, 4), dtype=dtype)
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def from_translation(p: Array) -> Array:
    """Pure translation by the (..., 3) vector `p`."""
    p = jnp.asarray(p, dtype=jnp.result_type(float))
    return from_position_and_rotation(p, jnp.eye(3, dtype=p.dtype))


def from_rotation(R: Array) -> Array:
    """Pure rotation by the (..., 3, 3) matrix `R`."""
    R = jnp.asarray(R, dtype=jnp.result_type(float))
    return from_position_and_rotation(jnp.zeros(3, dtype=R.dtype), R)


def multiply(T1: Array, T2: Array) -> Array:
    """
    Multiply two SE(3) transformation matrices.

    Args:
        T1: (..., 4, 4) first transformation matrix
        T2: (..., 4, 4) second transformation matrix

    Returns:
        (..., 4, 4) result of T1 @ T2
    """
    return jnp.matmul(T1, T2)


def get_position(T: Array) -> Array:
    """
    Extract position from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3) position vector
    """
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """
    Extract rotation matrix from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3, 3) rotation matrix
    """
    return T[..., :3, :3]
