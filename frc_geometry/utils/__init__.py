"""
Utility modules for frc_geometry.

Scalar helpers only - no geometry types here.
"""

from frc_geometry.utils.scalar import (
    clamp,
    apply_deadband,
    apply_deadband_no_max,
    input_modulus,
    angle_modulus,
    interpolate,
    is_near,
    is_near_min_max,
)

__all__ = [
    "clamp",
    "apply_deadband",
    "apply_deadband_no_max",
    "input_modulus",
    "angle_modulus",
    "interpolate",
    "is_near",
    "is_near_min_max",
]
