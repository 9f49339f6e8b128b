"""Tests for screw parameter extraction and reconstruction."""

import jax
import jax.numpy as jnp
import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from rigid_kinematics.transforms import rotation, se3, so3
from rigid_kinematics.transforms.screw import (
    ScrewParameters,
    build_pose,
    extract_screw,
    screw_pitch,
)


def random_pose(seed):
    key1, key2 = jax.random.split(jax.random.PRNGKey(seed))
    quat = jax.random.normal(key1, (4,))
    position = jax.random.uniform(key2, (3,), minval=-2.0, maxval=2.0)
    return se3.from_position_and_rotation(position, rotation.quaternion_to_matrix(quat))


def test_pure_rotation_about_origin():
    T = se3.from_rotation(so3.rot_z(jnp.pi / 2))
    params = extract_screw(T)

    np.testing.assert_allclose(params.theta, jnp.pi / 2, atol=1e-12)
    np.testing.assert_allclose(params.d, 0.0, atol=1e-12)
    np.testing.assert_allclose(params.s, jnp.array([0.0, 0.0, 1.0]), atol=1e-12)
    np.testing.assert_allclose(params.c, jnp.zeros(3), atol=1e-12)


def test_rotation_about_offset_axis():
    """Quarter turn about the vertical line through (1, 0, 0), with a 0.5 rise."""
    R = so3.rot_z(jnp.pi / 2)
    p = jnp.array([1.0, -1.0, 0.5])
    params = extract_screw(se3.from_position_and_rotation(p, R))

    np.testing.assert_allclose(params.theta, jnp.pi / 2, atol=1e-12)
    np.testing.assert_allclose(params.d, 0.5, atol=1e-12)
    np.testing.assert_allclose(params.s, jnp.array([0.0, 0.0, 1.0]), atol=1e-12)
    np.testing.assert_allclose(params.c, jnp.array([1.0, 0.0, 0.0]), atol=1e-12)
    np.testing.assert_allclose(screw_pitch(params), 0.5 / (jnp.pi / 2), atol=1e-12)


def test_axis_point_is_orthogonal_to_axis():
    params = extract_screw(random_pose(7))
    np.testing.assert_allclose(jnp.dot(params.c, params.s), 0.0, atol=1e-9)


def test_pure_translation():
    params = extract_screw(se3.from_translation(jnp.array([1.0, 2.0, 2.0])))

    assert params.theta == 0.0
    np.testing.assert_allclose(params.d, 3.0, atol=1e-12)
    np.testing.assert_allclose(params.s, jnp.array([1.0, 2.0, 2.0]) / 3.0, atol=1e-12)
    np.testing.assert_allclose(params.c, jnp.zeros(3), atol=1e-12)
    assert jnp.isinf(screw_pitch(params))


def test_identity_uses_default_axis():
    params = extract_screw(jnp.eye(4))

    assert params.theta == 0.0
    assert params.d == 0.0
    np.testing.assert_allclose(params.s, jnp.array([0.0, 0.0, 1.0]))
    np.testing.assert_allclose(params.c, jnp.zeros(3))
    assert jnp.all(jnp.isfinite(params.c))


def test_build_pose_pure_translation():
    params = ScrewParameters(
        theta=jnp.array(0.0),
        d=jnp.array(2.0),
        s=jnp.array([0.0, 1.0, 0.0]),
        c=jnp.zeros(3),
    )
    np.testing.assert_allclose(build_pose(params), se3.from_translation(jnp.array([0.0, 2.0, 0.0])), atol=1e-12)


def test_build_pose_normalizes_axis():
    params = ScrewParameters(
        theta=jnp.array(jnp.pi / 2),
        d=jnp.array(0.0),
        s=jnp.array([0.0, 0.0, 5.0]),
        c=jnp.array([1.0, 0.0, 0.0]),
    )
    expected = se3.from_position_and_rotation(jnp.array([1.0, -1.0, 0.0]), so3.rot_z(jnp.pi / 2))
    np.testing.assert_allclose(build_pose(params), expected, atol=1e-12)


@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_screw_roundtrip_general(seed):
    T = random_pose(seed)
    T2 = build_pose(extract_screw(T))
    assert jnp.linalg.norm(T2 - T) < 1e-9


@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_screw_roundtrip_pure_translation(seed):
    p = jax.random.uniform(jax.random.PRNGKey(seed), (3,), minval=-3.0, maxval=3.0)
    T = se3.from_translation(p)
    T2 = build_pose(extract_screw(T))
    assert jnp.linalg.norm(T2 - T) < 1e-9


def test_screw_roundtrip_half_turn():
    T = se3.from_position_and_rotation(jnp.array([0.3, -0.2, 1.0]), so3.rot_x(jnp.pi))
    T2 = build_pose(extract_screw(T))
    np.testing.assert_allclose(T2, T, atol=1e-9)


def test_extract_screw_batch_and_jit():
    poses = jnp.stack([random_pose(i) for i in range(4)] + [se3.from_translation(jnp.array([0.0, 0.0, 1.0]))])

    params = jax.jit(extract_screw)(poses)
    assert params.theta.shape == (5,)
    assert params.s.shape == (5, 3)
    assert params.c.shape == (5, 3)

    np.testing.assert_allclose(jax.jit(build_pose)(params), poses, atol=1e-9)
