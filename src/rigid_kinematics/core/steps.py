"""Named transform steps of a user-built composition chain."""

from typing import Iterable, Optional, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from ..transforms import se3
from .sequence import RecordSequence, new_id

Array = jax.Array


@struct.dataclass
class TransformStep:
    """One pose in a composition chain.

    Attributes:
        matrix: (4, 4) SE(3) transform of this step.
        name: Label used in composition formulas.
        active: Inactive steps are left out of the composition entirely.
        id: Stable identity for editing and reordering.
    """
    matrix: Array
    name: str = struct.field(pytree_node=False, default="Step")
    active: bool = struct.field(pytree_node=False, default=True)
    id: str = struct.field(pytree_node=False, default_factory=new_id)


def new_step(steps: RecordSequence, matrix: Optional[Array] = None) -> TransformStep:
    """Step to append to `steps`: identity pose named after its position."""
    if matrix is None:
        matrix = se3.identity()
    return TransformStep(matrix=jnp.asarray(matrix), name=f"Step {len(steps) + 1}")


def steps_to_poses(steps: Iterable[TransformStep]) -> Tuple[Array, Tuple[bool, ...]]:
    """
    Split steps into the plain inputs of `compose_chain`.

    Returns:
        (N, 4, 4) pose array and the matching tuple of active flags
    """
    steps = tuple(steps)
    if not steps:
        return jnp.zeros((0, 4, 4), dtype=jnp.result_type(float)), ()
    poses = jnp.stack([jnp.asarray(step.matrix, dtype=jnp.result_type(float)) for step in steps])
    return poses, tuple(bool(step.active) for step in steps)
