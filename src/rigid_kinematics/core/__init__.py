"""Core records for building kinematic chains.

This module provides the DH link description, named transform steps and the
ordered, identity-preserving collection both are edited in.
"""

from .dh import DHRow, dh_parameters, dh_row_transform, dh_transform, puma560
from .sequence import RecordSequence, new_id
from .steps import TransformStep, new_step, steps_to_poses

__all__ = [
    "DHRow",
    "RecordSequence",
    "TransformStep",
    "dh_parameters",
    "dh_row_transform",
    "dh_transform",
    "new_id",
    "new_step",
    "puma560",
    "steps_to_poses",
]
