"""
Numerical constants for frc_geometry.

These are HARD CONSTANTS shared by every geometry type. Thresholds pick the
computational branch (closed form vs. Taylor series); they do not change the
mathematical result for well-conditioned inputs.
"""

import math

# =============================================================================
# Small-angle thresholds (exp/log maps)
# =============================================================================

# Pose2d.exp: |dtheta| below this uses s = 1 - dθ²/6, c = dθ/2
EXP_SMALL_ANGLE = 1e-9

# Pose2d.log: |cos(dθ) - 1| below this uses dθ/2·cot(dθ/2) ≈ 1 - dθ²/12
LOG_SMALL_ANGLE = 1e-9

# Pose3d.exp / Pose3d.log: |θ| below this uses Taylor series for A, B, C
SE3_SMALL_ANGLE = 1e-7

# =============================================================================
# Scalar utilities
# =============================================================================

# apply_deadband: max_magnitude / deadband above this skips the rescale
DEADBAND_RATIO_LIMIT = 1e12

# Angle wrap range used by angle_modulus
ANGLE_MIN = -math.pi
ANGLE_MAX = math.pi

# =============================================================================
# Comparison defaults (see config.ToleranceParams)
# =============================================================================

TRANSLATION_TOLERANCE_DEFAULT = 1e-9  # meters
ROTATION_TOLERANCE_DEFAULT = 1e-9  # radians
TWIST_TOLERANCE_DEFAULT = 1e-9  # per-component

# =============================================================================
# Quaternion algebra
# =============================================================================

# Quaternion.try_inverse: norm² at or below this has no inverse (f64 machine epsilon)
QUATERNION_INVERSE_EPSILON = 2.220446049250313e-16

# Rotation axis norms below this are treated as "no axis" (identity fallback)
AXIS_NORM_EPSILON = 1e-15

# =============================================================================
# Binary layout
# =============================================================================

# Every scalar field is a little-endian IEEE-754 double
STRUCT_BYTE_ORDER = "<"
STRUCT_DOUBLE_CODE = "d"
STRUCT_DOUBLE_SIZE = 8
