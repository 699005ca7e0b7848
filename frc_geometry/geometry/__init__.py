"""
Geometry value types for 2D and 3D robot poses.

Conventions:
    - Units: meters and radians
    - All types are immutable (frozen dataclasses); operations return new values
    - Pose/Transform composition is right-multiplication in the body frame
    - 3D orientations are unit quaternions (w, i, j, k), Hamilton product
    - 2D <-> 3D conversion embeds the XY plane (z = 0) with heading as yaw

Modules:
- quaternion: raw quaternion algebra
- so3: rotation matrix / Rodrigues helpers on NumPy arrays
- rotation2d, rotation3d, translation2d, translation3d
- transform2d, transform3d, pose2d, pose3d, twist2d, twist3d
"""

from frc_geometry.geometry.quaternion import Quaternion
from frc_geometry.geometry.rotation2d import Rotation2d
from frc_geometry.geometry.rotation3d import Rotation3d
from frc_geometry.geometry.translation2d import Translation2d
from frc_geometry.geometry.translation3d import Translation3d
from frc_geometry.geometry.twist2d import Twist2d
from frc_geometry.geometry.twist3d import Twist3d
from frc_geometry.geometry.transform2d import Transform2d
from frc_geometry.geometry.transform3d import Transform3d
from frc_geometry.geometry.pose2d import Pose2d
from frc_geometry.geometry.pose3d import Pose3d

__all__ = [
    "Quaternion",
    "Rotation2d",
    "Rotation3d",
    "Translation2d",
    "Translation3d",
    "Twist2d",
    "Twist3d",
    "Transform2d",
    "Transform3d",
    "Pose2d",
    "Pose3d",
]
