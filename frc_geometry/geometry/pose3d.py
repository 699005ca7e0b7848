"""
Pose in 3D space and the SE(3) exponential/logarithm.

Twist3d (u, ω) maps to a transform through the closed-form Rodrigues
expressions (Barfoot 2017, §7.1.4):

    R = I + A·Ω + B·Ω²
    V = I + B·Ω + C·Ω²,   t = V·u

with Ω = skew(ω), θ = |ω|. The inverse map uses V⁻¹ = I - Ω/2 + C'·Ω².
See ``so3`` for the coefficient definitions and small-angle branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple, Union

import numpy as np

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry import so3
from frc_geometry.geometry.rotation3d import Rotation3d
from frc_geometry.geometry.transform3d import Transform3d
from frc_geometry.geometry.translation3d import Translation3d
from frc_geometry.geometry.twist3d import Twist3d
from frc_geometry.structure import Structure

if TYPE_CHECKING:
    from frc_geometry.geometry.pose2d import Pose2d

_TRANSLATION_FIELDS = Translation3d.FIELD_COUNT


@dataclass(frozen=True)
class Pose3d(Structure):
    TYPE = "Pose3d"
    SCHEMA = "Translation3d translation;Rotation3d rotation;"
    FIELD_COUNT = Translation3d.FIELD_COUNT + Rotation3d.FIELD_COUNT

    translation: Translation3d = Translation3d()
    rotation: Rotation3d = Rotation3d()

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> "Pose3d":
        return cls(Translation3d(), Rotation3d.identity())

    @classmethod
    def from_xyz(
        cls,
        x: SupportsFloat,
        y: SupportsFloat,
        z: SupportsFloat,
        rotation: Rotation3d = Rotation3d(),
    ) -> "Pose3d":
        return cls(Translation3d(x, y, z), rotation)

    @classmethod
    def from_2d(cls, pose: "Pose2d") -> "Pose3d":
        """Embed in the z = 0 plane with the heading as yaw."""
        return cls(pose.translation.to_3d(), pose.rotation.to_3d())

    def to_2d(self) -> "Pose2d":
        from frc_geometry.geometry.pose2d import Pose2d

        return Pose2d.from_3d(self)

    @property
    def x(self) -> float:
        return self.translation.x

    @property
    def y(self) -> float:
        return self.translation.y

    @property
    def z(self) -> float:
        return self.translation.z

    @staticmethod
    def rotation_vector_to_matrix(rotation_vector: Sequence[float]) -> np.ndarray:
        """Skew-symmetric matrix [ω]× of a rotation vector."""
        return so3.skew(rotation_vector)

    # =========================================================================
    # Frame algebra
    # =========================================================================

    def transform_by(self, transform: Transform3d) -> "Pose3d":
        return Pose3d(
            self.translation + transform.translation.rotate_by(self.rotation),
            self.rotation + transform.rotation,
        )

    def relative_to(self, other: "Pose3d") -> "Pose3d":
        """This pose expressed in the frame of other."""
        transform = Transform3d.from_poses(other, self)
        return Pose3d(transform.translation, transform.rotation)

    def __add__(self, transform: Transform3d) -> "Pose3d":
        if not isinstance(transform, Transform3d):
            return NotImplemented
        return self.transform_by(transform)

    def __sub__(self, other: Union[Transform3d, "Pose3d"]) -> Union["Pose3d", Transform3d]:
        """
        ``pose - transform`` undoes a transform; ``pose_b - pose_a`` is the
        Transform3d taking pose_a onto pose_b.
        """
        if isinstance(other, Transform3d):
            return self.transform_by(other.inverse())
        if isinstance(other, Pose3d):
            return Transform3d.from_poses(other, self)
        return NotImplemented

    def __mul__(self, scalar: float) -> "Pose3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Pose3d(self.translation * scalar, self.rotation * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Pose3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self * (1.0 / float(scalar))

    # =========================================================================
    # Lie group maps
    # =========================================================================

    def exp(self, twist: Twist3d) -> "Pose3d":
        """
        Pose reached from self by following twist for unit time.

        Args:
            twist: Body-frame twist (dx, dy, dz, rx, ry, rz)

        Returns:
            self composed with exp(twist)
        """
        rotation_vector = twist.rotation_vector()
        R = so3.so3_exp(rotation_vector)
        V = so3.left_jacobian(rotation_vector)
        translation = V @ twist.translation().as_array()

        transform = Transform3d(
            Translation3d.from_array(translation),
            Rotation3d.from_rotation_matrix(R),
        )
        return self.transform_by(transform)

    def log(self, end: "Pose3d") -> Twist3d:
        """
        Twist that carries self onto end (inverse of ``exp``).

        Returns:
            Twist3d with ``self.exp(self.log(end)) ≈ end``
        """
        delta = end.relative_to(self)
        rotation_vector = delta.rotation.get_rotation_vector()
        V_inv = so3.left_jacobian_inverse(rotation_vector)
        u = V_inv @ delta.translation.as_array()

        return Twist3d(
            u[0], u[1], u[2],
            rotation_vector[0], rotation_vector[1], rotation_vector[2],
        )

    def interpolate(self, end: "Pose3d", t: float) -> "Pose3d":
        """Constant-twist blend from self (t<=0) to end (t>=1)."""
        if t <= 0.0:
            return self
        if t >= 1.0:
            return end
        return self.exp(self.log(end) * t)

    # =========================================================================
    # Queries
    # =========================================================================

    def nearest(self, poses: Sequence["Pose3d"]) -> "Pose3d":
        """
        Candidate with the closest translation; orientation is ignored.

        Raises:
            ValueError: If poses is empty
        """
        if not poses:
            raise ValueError("nearest() requires at least one candidate pose")
        return min(poses, key=lambda pose: self.translation.get_distance(pose.translation))

    def is_near(self, other: "Pose3d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return (
            self.translation.is_near(other.translation, params)
            and self.rotation.is_near(other.rotation, params)
        )

    # =========================================================================
    # Binary layout
    # =========================================================================

    def struct_fields(self) -> Tuple[float, ...]:
        return self.translation.struct_fields() + self.rotation.struct_fields()

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Pose3d":
        return cls(
            Translation3d.from_struct_fields(values[:_TRANSLATION_FIELDS]),
            Rotation3d.from_struct_fields(values[_TRANSLATION_FIELDS:]),
        )
