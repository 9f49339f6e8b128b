"""Rotation conversion utilities in JAX.

Converts between rotation matrices, unit quaternions (x, y, z, w),
axis-angle pairs and intrinsic XYZ Euler angles. Degenerate inputs resolve
to fixed defaults instead of raising; inverse trigonometric calls always see
clamped arguments.
"""

import jax
import jax.numpy as jnp
from typing import Tuple

from .. import config
from . import so3

# Type aliases
Array = jax.Array


def normalize_quaternions(quaternions: Array) -> Array:
    """Normalize quaternions to unit length."""
    return quaternions / jnp.linalg.norm(quaternions, axis=-1, keepdims=True)


def quaternion_to_matrix(quaternions: Array) -> Array:
    """
    Convert quaternions to rotation matrices.

    Args:
        quaternions: (..., 4) array of quaternions in (x, y, z, w) format

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    quaternions = normalize_quaternions(jnp.asarray(quaternions, dtype=jnp.result_type(float)))

    # Unpack quaternion components - preserving batch dimensions
    x, y, z, w = jnp.moveaxis(quaternions, -1, 0)

    xx, yy, zz = x*x, y*y, z*z
    wx, wy, wz = w*x, w*y, w*z
    xy, xz, yz = x*y, x*z, y*z

    matrix = jnp.stack([
        jnp.stack([1 - 2*(yy + zz), 2*(xy - wz), 2*(xz + wy)], axis=-1),
        jnp.stack([2*(xy + wz), 1 - 2*(xx + zz), 2*(yz - wx)], axis=-1),
        jnp.stack([2*(xz - wy), 2*(yz + wx), 1 - 2*(xx + yy)], axis=-1)
    ], axis=-2)

    return matrix


def matrix_to_quaternion(matrix: Array) -> Array:
    """
    Convert rotation matrices to quaternions (x, y, z, w).

    Selects the extraction branch from the largest of {trace, m00, m11, m22}
    so the divisor never approaches zero, including at 180 degree rotations.
    The returned quaternion has w >= 0.

    Args:
        matrix: (..., 3, 3) array of rotation matrices

    Returns:
        (..., 4) array of unit quaternions in (x, y, z, w) format
    """
    matrix = jnp.asarray(matrix, dtype=jnp.result_type(float))

    m00, m01, m02 = matrix[..., 0, 0], matrix[..., 0, 1], matrix[..., 0, 2]
    m10, m11, m12 = matrix[..., 1, 0], matrix[..., 1, 1], matrix[..., 1, 2]
    m20, m21, m22 = matrix[..., 2, 0], matrix[..., 2, 1], matrix[..., 2, 2]

    trace = m00 + m11 + m22

    # Use dtype-adaptive epsilon
    eps = jnp.finfo(matrix.dtype).eps

    # Candidates in (x, y, z, w) order, each scaled by 4 * (its dominant component)
    q_w = jnp.stack([m21 - m12, m02 - m20, m10 - m01, 1.0 + trace], axis=-1)
    q_x = jnp.stack([1.0 + m00 - m11 - m22, m01 + m10, m02 + m20, m21 - m12], axis=-1)
    q_y = jnp.stack([m01 + m10, 1.0 + m11 - m00 - m22, m12 + m21, m02 - m20], axis=-1)
    q_z = jnp.stack([m02 + m20, m12 + m21, 1.0 + m22 - m00 - m11, m10 - m01], axis=-1)

    s_w = 0.5 / jnp.sqrt(jnp.maximum(1.0 + trace, eps))
    s_x = 0.5 / jnp.sqrt(jnp.maximum(1.0 + m00 - m11 - m22, eps))
    s_y = 0.5 / jnp.sqrt(jnp.maximum(1.0 + m11 - m00 - m22, eps))
    s_z = 0.5 / jnp.sqrt(jnp.maximum(1.0 + m22 - m00 - m11, eps))

    use_w = (trace > m00) & (trace > m11) & (trace > m22)
    use_x = (~use_w) & (m00 >= m11) & (m00 >= m22)
    use_y = (~use_w) & (~use_x) & (m11 >= m22)

    quaternion = jnp.where(
        use_w[..., None],
        q_w * s_w[..., None],
        jnp.where(
            use_x[..., None],
            q_x * s_x[..., None],
            jnp.where(use_y[..., None], q_y * s_y[..., None], q_z * s_z[..., None])
        )
    )

    # Canonical sign (w >= 0) keeps the derived angle in [0, pi]
    quaternion = jnp.where(quaternion[..., 3:4] < 0, -quaternion, quaternion)
    return normalize_quaternions(quaternion)


def matrix_to_axis_angle(matrix: Array) -> Tuple[Array, Array]:
    """
    Convert rotation matrices to a unit axis and an angle in [0, pi].

    When the rotation is within EPSILON of the identity the axis is
    undefined; the default axis (0, 0, 1) and angle 0 are returned. Callers
    must check the angle before trusting the axis.

    Args:
        matrix: (..., 3, 3) rotation matrices

    Returns:
        Tuple of (..., 3) unit axes and (...) angles in radians
    """
    q = matrix_to_quaternion(matrix)
    vec, w = q[..., :3], q[..., 3]

    # |q_xyz| = sin(θ/2), w = cos(θ/2)
    s = jnp.linalg.norm(vec, axis=-1)
    angle = 2.0 * jnp.arctan2(s, jnp.clip(w, -1.0, 1.0))

    no_rotation = s < config.EPSILON
    default_axis = jnp.broadcast_to(jnp.asarray(config.DEFAULT_AXIS, dtype=q.dtype), vec.shape)
    safe_s = jnp.where(no_rotation, 1.0, s)

    axis = jnp.where(no_rotation[..., None], default_axis, vec / safe_s[..., None])
    angle = jnp.where(no_rotation, 0.0, angle)
    return axis, angle


def axis_angle_to_matrix(axis: Array, angle: Array) -> Array:
    """
    Convert an axis and angle to a rotation matrix.

    The axis is normalized first. Passing a zero-length axis is a
    precondition violation and produces NaN entries rather than an error.

    Args:
        axis: (..., 3) rotation axis
        angle: (...) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrices
    """
    return so3.from_axis_angle(axis, angle)


def euler_to_matrix(euler: Array) -> Array:
    """
    Convert intrinsic XYZ Euler angles to rotation matrices.

    R = Rx(x) @ Ry(y) @ Rz(z)

    Args:
        euler: (..., 3) angles (x, y, z) in radians

    Returns:
        (..., 3, 3) rotation matrices
    """
    euler = jnp.asarray(euler, dtype=jnp.result_type(float))
    x, y, z = euler[..., 0], euler[..., 1], euler[..., 2]
    return so3.rot_x(x) @ so3.rot_y(y) @ so3.rot_z(z)


def matrix_to_euler(matrix: Array) -> Array:
    """
    Decompose rotation matrices into intrinsic XYZ Euler angles.

    At +/-90 degrees pitch (cos(pitch) below GIMBAL_LOCK_THRESHOLD) the
    decomposition is not unique; the roll takes the whole remaining rotation
    and yaw is set to 0. Only the matrix round-trip is guaranteed, not the
    input angle triple.

    Args:
        matrix: (..., 3, 3) rotation matrices

    Returns:
        (..., 3) angles (x, y, z) in radians
    """
    matrix = jnp.asarray(matrix, dtype=jnp.result_type(float))

    m00, m01, m02 = matrix[..., 0, 0], matrix[..., 0, 1], matrix[..., 0, 2]
    m11, m12 = matrix[..., 1, 1], matrix[..., 1, 2]
    m21, m22 = matrix[..., 2, 1], matrix[..., 2, 2]

    # First row is (cos y cos z, -cos y sin z, sin y)
    cos_y = jnp.hypot(m00, m01)
    y = jnp.arctan2(jnp.clip(m02, -1.0, 1.0), cos_y)

    gimbal_lock = cos_y < config.GIMBAL_LOCK_THRESHOLD
    x = jnp.where(gimbal_lock, jnp.arctan2(m21, m11), jnp.arctan2(-m12, m22))
    z = jnp.where(gimbal_lock, 0.0, jnp.arctan2(-m01, m00))

    return jnp.stack([x, y, z], axis=-1)
