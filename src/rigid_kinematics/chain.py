"""Chain composition and Denavit-Hartenberg forward kinematics.

A chain is an ordered list of SE(3) transforms. Intrinsic composition
applies each transform in the current (moving) frame and post-multiplies;
extrinsic composition applies each transform in the fixed world frame and
pre-multiplies. Both produce the final pose together with every partial
product, starting from the identity, for drawing intermediate frames.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct

from .core.dh import DHRow, dh_parameters, dh_transform
from .core.steps import TransformStep, steps_to_poses
from .transforms import se3

Array = jax.Array

logger = logging.getLogger(__name__)

INTRINSIC = "intrinsic"
EXTRINSIC = "extrinsic"
MODES = (INTRINSIC, EXTRINSIC)


@struct.dataclass
class ChainResult:
    """Result of composing a chain.

    Attributes:
        final: (4, 4) composed pose.
        frames: (N + 1, 4, 4) partial products; frames[0] is the identity and
                frames[-1] equals `final`.
    """
    final: Array
    frames: Array


def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got '{mode}'")


def compose_chain(
    poses: Union[Array, Sequence[Array]],
    active: Optional[Sequence[bool]] = None,
    mode: str = INTRINSIC,
) -> ChainResult:
    """Compose an ordered list of transforms.

    Intrinsic: F_k = F_{k-1} @ T_k, so final = T_1 @ T_2 @ ... @ T_n.
    Extrinsic: F_k = T_k @ F_{k-1}, so final = T_n @ ... @ T_2 @ T_1.

    Inactive transforms are dropped before composing, so the frame count is
    the number of active transforms plus one.

    Args:
        poses: (N, 4, 4) array or sequence of (4, 4) transforms, in order
        active: Optional per-transform flags; all active when omitted
        mode: "intrinsic" or "extrinsic"

    Returns:
        ChainResult with the final pose and the N_active + 1 frames
    """
    _check_mode(mode)

    if isinstance(poses, (list, tuple)) and len(poses) == 0:
        poses = jnp.zeros((0, 4, 4), dtype=jnp.result_type(float))
    poses = jnp.asarray(poses, dtype=jnp.result_type(float))
    if poses.ndim != 3 or poses.shape[-2:] != (4, 4):
        raise ValueError(f"poses must have shape (N, 4, 4), got {poses.shape}")

    if active is not None:
        if len(active) != poses.shape[0]:
            raise ValueError(
                f"active has {len(active)} flags for {poses.shape[0]} poses"
            )
        keep = [i for i, flag in enumerate(active) if flag]
        poses = poses[jnp.asarray(keep, dtype=jnp.int32)] if keep else poses[:0]

    logger.debug("Composing %d transforms (%s)", poses.shape[0], mode)

    start = se3.identity(dtype=poses.dtype)
    if poses.shape[0] == 0:
        return ChainResult(final=start, frames=start[None])

    def scan_body(current, T):
        """Accumulates one transform onto the running pose."""
        if mode == INTRINSIC:
            current = se3.multiply(current, T)
        else:
            current = se3.multiply(T, current)
        return current, current

    final, partial = jax.lax.scan(scan_body, start, poses)
    frames = jnp.concatenate([start[None], partial], axis=0)

    return ChainResult(final=final, frames=frames)


def compose_steps(steps: Iterable[TransformStep], mode: str = INTRINSIC) -> ChainResult:
    """Compose named transform steps, skipping inactive ones."""
    poses, active = steps_to_poses(steps)
    return compose_chain(poses, active, mode)


def forward_kinematics(
    dh: Union[Array, Iterable[DHRow]],
    tool: Optional[Array] = None,
) -> ChainResult:
    """Forward kinematics of a serial chain in standard DH parameters.

    The link transforms are composed intrinsically in chain order, base to
    tip. A fixed tool transform, when given, is appended as one more link.

    Args:
        dh: (N, 4) array of (a, alpha, d, theta) rows, or DHRow records
        tool: Optional (4, 4) tool-frame transform relative to the last link

    Returns:
        ChainResult whose frames are the base, each joint frame and (when
        given) the tool frame; `final` is the end-effector pose
    """
    if isinstance(dh, (jax.Array, np.ndarray)):
        params = jnp.asarray(dh, dtype=jnp.result_type(float))
    else:
        params = dh_parameters(dh)
    if params.ndim != 2 or params.shape[-1] != 4:
        raise ValueError(f"DH parameters must have shape (N, 4), got {params.shape}")

    links = dh_transform(params[:, 0], params[:, 1], params[:, 2], params[:, 3])
    if tool is not None:
        tool = jnp.asarray(tool, dtype=links.dtype)
        links = jnp.concatenate([links, tool[None]], axis=0)

    return compose_chain(links, mode=INTRINSIC)


def composition_formula(names: Sequence[str], mode: str = INTRINSIC) -> str:
    """Human-readable product for a chain, e.g. "T_final = A * B"."""
    _check_mode(mode)
    if not names:
        return "Identity"
    ordered = list(names) if mode == INTRINSIC else list(reversed(names))
    return "T_final = " + " * ".join(ordered)
