"""Denavit-Hartenberg link parameters and link transforms.

This module defines the DHRow record and the closed-form standard DH link
transform. An ordered sequence of rows, base to tip, describes a serial
kinematic chain.
"""

import math
from typing import Iterable, Optional, Sequence, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from .sequence import new_id

Array = jax.Array


@struct.dataclass
class DHRow:
    """One link of a serial chain in standard DH parameters.

    Attributes:
        a: Link length along the common normal.
        alpha: Link twist about the common normal (rad).
        d: Link offset along the previous z axis.
        theta: Joint angle about the previous z axis (rad).
        id: Stable identity for editing and reordering. Static field, so it
            does not take part in tracing.
    """
    a: float = 1.0
    alpha: float = 0.0
    d: float = 0.0
    theta: float = 0.0
    id: str = struct.field(pytree_node=False, default_factory=new_id)


def dh_transform(a: Array, alpha: Array, d: Array, theta: Array) -> Array:
    """
    Standard DH link transform, Rot_z(theta) Trans_z(d) Trans_x(a) Rot_x(alpha).

    Written out in closed form from the sines and cosines, without
    intermediate matrix products. Arguments broadcast against each other.

    Returns:
        (..., 4, 4) homogeneous transform from link i-1 to link i
    """
    a, alpha, d, theta = jnp.broadcast_arrays(
        *(jnp.asarray(v, dtype=jnp.result_type(float)) for v in (a, alpha, d, theta))
    )
    ct, st = jnp.cos(theta), jnp.sin(theta)
    ca, sa = jnp.cos(alpha), jnp.sin(alpha)
    zero, one = jnp.zeros_like(theta), jnp.ones_like(theta)

    return jnp.stack([
        jnp.stack([ct, -st * ca, st * sa, a * ct], axis=-1),
        jnp.stack([st, ct * ca, -ct * sa, a * st], axis=-1),
        jnp.stack([zero, sa, ca, d], axis=-1),
        jnp.stack([zero, zero, zero, one], axis=-1)
    ], axis=-2)


def dh_row_transform(row: DHRow) -> Array:
    """Link transform of a single DHRow."""
    return dh_transform(row.a, row.alpha, row.d, row.theta)


def dh_parameters(rows: Iterable[DHRow]) -> Array:
    """Stack rows into an (N, 4) array of (a, alpha, d, theta)."""
    params = [[row.a, row.alpha, row.d, row.theta] for row in rows]
    return jnp.asarray(params, dtype=jnp.result_type(float)).reshape(-1, 4)


# (a, alpha, d, theta) of the PUMA 560 arm in its zero pose
PUMA560_PARAMETERS = (
    (0.0, math.pi / 2, 0.0, 0.0),
    (0.4318, 0.0, 0.0, 0.0),
    (0.0203, -math.pi / 2, 0.15005, 0.0),
    (0.0, math.pi / 2, 0.4318, 0.0),
    (0.0, -math.pi / 2, 0.0, 0.0),
    (0.0, 0.0, 0.0, 0.0),
)


def puma560(thetas: Optional[Sequence[float]] = None) -> Tuple[DHRow, ...]:
    """PUMA 560 DH table, optionally with the six joint angles substituted."""
    if thetas is not None and len(thetas) != len(PUMA560_PARAMETERS):
        raise ValueError(
            f"PUMA 560 has {len(PUMA560_PARAMETERS)} joints, got {len(thetas)} angles"
        )
    rows = []
    for i, (a, alpha, d, theta) in enumerate(PUMA560_PARAMETERS):
        if thetas is not None:
            theta = float(thetas[i])
        rows.append(DHRow(a=a, alpha=alpha, d=d, theta=theta))
    return tuple(rows)
