"""
JAX-based transforms library for rigid-body kinematics.

This module provides JIT-compilable implementations of:
- SO(3) rotation primitives (so3 module)
- SE(3) homogeneous transforms (se3 module)
- rotation representation conversions (rotation module)
- screw motion extraction and reconstruction (screw module)

All functions are pure, stateless, and accept leading batch dimensions.
"""

from . import so3
from . import se3
from . import rotation
from . import screw

from .screw import ScrewParameters, build_pose, extract_screw

__all__ = [
    "so3",
    "se3",
    "rotation",
    "screw",
    "ScrewParameters",
    "build_pose",
    "extract_screw",
]
