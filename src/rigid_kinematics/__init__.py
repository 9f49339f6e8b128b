"""
Rigid Kinematics: rotation, screw and serial-chain kinematics in JAX.

This library provides pure, JIT-compilable routines for converting between
rotation representations, extracting and rebuilding screw motions, and
composing chains of SE(3) transforms including Denavit-Hartenberg forward
kinematics.
"""

import logging

import jax
jax.config.update("jax_enable_x64", True)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Import core modules
from . import config
from . import transforms
from . import core
from . import chain
from . import io

__version__ = "0.1.0"
__all__ = ["config", "transforms", "core", "chain", "io"]
