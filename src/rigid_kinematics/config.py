"""Shared numerical tolerances.

The same EPSILON drives both the axis-angle singularity test and the screw
pure-translation test, so a rotation reported as zero by one is always
treated as zero by the other.
"""

# Below this the rotation is treated as the identity.
EPSILON = 1e-6

# cos(pitch) below this switches Euler decomposition to the gimbal-lock branch.
GIMBAL_LOCK_THRESHOLD = 1e-10

# Axis reported when no rotation (or translation) direction exists.
DEFAULT_AXIS = (0.0, 0.0, 1.0)
