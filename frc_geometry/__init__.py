"""
frc_geometry: planar and spatial pose math for robot motion.

Subpackages:
- geometry/: rotations, translations, transforms, poses, twists
- utils/: scalar helpers (deadband, modulus, interpolation)
"""

from frc_geometry import config
from frc_geometry import constants
from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry import (
    Pose2d,
    Pose3d,
    Quaternion,
    Rotation2d,
    Rotation3d,
    Transform2d,
    Transform3d,
    Translation2d,
    Translation3d,
    Twist2d,
    Twist3d,
)
from frc_geometry.structure import Structure, structure_registry

__version__ = "0.0.1"

__all__ = [
    "config",
    "constants",
    "DEFAULT_TOLERANCES",
    "ToleranceParams",
    "Structure",
    "structure_registry",
    "Pose2d",
    "Pose3d",
    "Quaternion",
    "Rotation2d",
    "Rotation3d",
    "Transform2d",
    "Transform3d",
    "Translation2d",
    "Translation3d",
    "Twist2d",
    "Twist3d",
]
