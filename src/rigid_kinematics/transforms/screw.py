"""Screw motion parameters of rigid transforms (Chasles' theorem).

Every rigid displacement is a rotation by theta about a line with direction
s through point c, followed by a translation d along that same line. This
module extracts those parameters from a pose and rebuilds the pose from
them.
"""

import jax
import jax.numpy as jnp
from flax import struct

from .. import config
from . import se3
from .rotation import axis_angle_to_matrix, matrix_to_axis_angle

Array = jax.Array


@struct.dataclass
class ScrewParameters:
    """Immutable screw description of a rigid motion.

    Attributes:
        theta: (...) rotation angle about the axis, radians.
        d: (...) signed translation along the axis.
        s: (..., 3) unit axis direction.
        c: (..., 3) point on the axis. For a general screw this is
           1/2 (p - d s) + 1/2 cot(theta/2) (s x p); for a pure
           translation it is the origin.
    """
    theta: Array
    d: Array
    s: Array
    c: Array


def extract_screw(T: Array) -> ScrewParameters:
    """
    Decompose SE(3) transforms into screw parameters.

    A rotation below EPSILON is treated as a pure translation: d is the
    translation length, s its direction ((0, 0, 1) if there is none) and c
    the origin. The axis location is lost on that branch.

    Args:
        T: (..., 4, 4) transformation matrices

    Returns:
        ScrewParameters with matching batch shape
    """
    T = jnp.asarray(T, dtype=jnp.result_type(float))
    p = se3.get_position(T)
    s, theta = matrix_to_axis_angle(se3.get_rotation(T))

    pure_translation = jnp.abs(theta) < config.EPSILON

    # Pure translation branch
    p_norm = jnp.linalg.norm(p, axis=-1)
    has_translation = p_norm > config.EPSILON
    default_axis = jnp.broadcast_to(jnp.asarray(config.DEFAULT_AXIS, dtype=T.dtype), p.shape)
    safe_norm = jnp.where(has_translation, p_norm, 1.0)
    s_translation = jnp.where(has_translation[..., None], p / safe_norm[..., None], default_axis)

    # General branch; theta is replaced where cot(theta/2) would blow up
    d_general = jnp.sum(p * s, axis=-1)
    safe_theta = jnp.where(pure_translation, 1.0, theta)
    cot_half = 1.0 / jnp.tan(safe_theta / 2.0)
    c_general = (
        0.5 * (p - d_general[..., None] * s)
        + 0.5 * cot_half[..., None] * jnp.cross(s, p)
    )

    return ScrewParameters(
        theta=jnp.where(pure_translation, 0.0, theta),
        d=jnp.where(pure_translation, p_norm, d_general),
        s=jnp.where(pure_translation[..., None], s_translation, s),
        c=jnp.where(pure_translation[..., None], jnp.zeros_like(p), c_general),
    )


def build_pose(params: ScrewParameters) -> Array:
    """
    Rebuild SE(3) transforms from screw parameters.

    R = rot(s, theta), p = (I - R) c + d s. The axis direction is
    normalized first; a zero-length s is a caller error and yields NaNs.

    Args:
        params: ScrewParameters

    Returns:
        (..., 4, 4) transformation matrices
    """
    s = jnp.asarray(params.s, dtype=jnp.result_type(float))
    s = s / jnp.linalg.norm(s, axis=-1, keepdims=True)
    c = jnp.asarray(params.c, dtype=s.dtype)
    d = jnp.asarray(params.d, dtype=s.dtype)

    R = axis_angle_to_matrix(s, params.theta)
    Rc = jnp.einsum("...ij,...j->...i", R, c)
    p = c - Rc + d[..., None] * s

    return se3.from_position_and_rotation(p, R)


def screw_pitch(params: ScrewParameters) -> Array:
    """Translation per radian of rotation, d / theta; +inf for a pure translation."""
    theta = jnp.asarray(params.theta, dtype=jnp.result_type(float))
    no_rotation = jnp.abs(theta) < config.EPSILON
    safe_theta = jnp.where(no_rotation, 1.0, theta)
    return jnp.where(no_rotation, jnp.inf, params.d / safe_theta)
