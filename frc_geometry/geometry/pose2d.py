"""
Planar pose (position + heading) and the SE(2) exponential/logarithm.

exp/log treat a Twist2d as constant-curvature motion in the body frame:
    Pose2d.exp(twist)   pose reached by driving twist from self
    Pose2d.log(end)     twist that drives self onto end

Both maps switch to Taylor expansions for near-zero rotation (see
constants.EXP_SMALL_ANGLE / LOG_SMALL_ANGLE). Outside those branches the
coefficients use the half-angle forms 2·sin²(θ/2)/θ and (θ/2)·cot(θ/2),
which equal (1 - cos θ)/θ and -(θ/2·sin θ)/(cos θ - 1) but keep full
precision for small and moderate θ.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple, Union

from frc_geometry import constants
from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.rotation2d import Rotation2d
from frc_geometry.geometry.transform2d import Transform2d
from frc_geometry.geometry.translation2d import Translation2d
from frc_geometry.geometry.twist2d import Twist2d
from frc_geometry.structure import Structure

if TYPE_CHECKING:
    from frc_geometry.geometry.pose3d import Pose3d

_TRANSLATION_FIELDS = Translation2d.FIELD_COUNT


@dataclass(frozen=True)
class Pose2d(Structure):
    TYPE = "Pose2d"
    SCHEMA = "Translation2d translation;Rotation2d rotation;"
    FIELD_COUNT = Translation2d.FIELD_COUNT + Rotation2d.FIELD_COUNT

    translation: Translation2d = Translation2d()
    rotation: Rotation2d = Rotation2d()

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> "Pose2d":
        return cls(Translation2d(), Rotation2d.identity())

    @classmethod
    def from_xy(
        cls,
        x: SupportsFloat,
        y: SupportsFloat,
        rotation: Rotation2d = Rotation2d(),
    ) -> "Pose2d":
        return cls(Translation2d(x, y), rotation)

    @classmethod
    def from_3d(cls, pose: "Pose3d") -> "Pose2d":
        """Project onto the XY plane, keeping yaw."""
        return cls(pose.translation.to_2d(), pose.rotation.to_2d())

    def to_3d(self) -> "Pose3d":
        from frc_geometry.geometry.pose3d import Pose3d

        return Pose3d.from_2d(self)

    @property
    def x(self) -> float:
        return self.translation.x

    @property
    def y(self) -> float:
        return self.translation.y

    # =========================================================================
    # Frame algebra
    # =========================================================================

    def transform_by(self, transform: Transform2d) -> "Pose2d":
        return Pose2d(
            self.translation + transform.translation.rotate_by(self.rotation),
            transform.rotation + self.rotation,
        )

    def relative_to(self, other: "Pose2d") -> "Pose2d":
        """This pose expressed in the frame of other."""
        transform = Transform2d.from_poses(other, self)
        return Pose2d(transform.translation, transform.rotation)

    def __add__(self, other: Union[Transform2d, "Pose2d"]) -> "Pose2d":
        """Apply other in self's frame; a Pose2d operand acts as the equivalent Transform2d."""
        if isinstance(other, Transform2d):
            return self.transform_by(other)
        if isinstance(other, Pose2d):
            return self.transform_by(Transform2d(other.translation, other.rotation))
        return NotImplemented

    def __sub__(self, other: Union[Transform2d, "Pose2d"]) -> "Pose2d":
        if isinstance(other, Transform2d):
            return self.transform_by(other.inverse())
        if isinstance(other, Pose2d):
            return self.relative_to(other)
        return NotImplemented

    def __mul__(self, scalar: float) -> "Pose2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Pose2d(self.translation * scalar, self.rotation * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Pose2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self * (1.0 / float(scalar))

    # =========================================================================
    # Lie group maps
    # =========================================================================

    def exp(self, twist: Twist2d) -> "Pose2d":
        """
        Pose reached from self by following twist along a constant-curvature arc.

        Args:
            twist: Body-frame displacement (dx, dy, dtheta)

        Returns:
            New pose; Pose2d().exp(Twist2d(1, 0, 0)) is (1, 0, 0°)
        """
        dx, dy, dtheta = twist.dx, twist.dy, twist.dtheta
        sin_theta = math.sin(dtheta)
        cos_theta = math.cos(dtheta)

        if abs(dtheta) < constants.EXP_SMALL_ANGLE:
            s = 1.0 - dtheta * dtheta / 6.0
            c = 0.5 * dtheta
        else:
            s = sin_theta / dtheta
            # (1 - cos θ)/θ written as 2·sin²(θ/2)/θ, no cancellation near 0
            half_sin = math.sin(0.5 * dtheta)
            c = 2.0 * half_sin * half_sin / dtheta

        transform = Transform2d(
            Translation2d(dx * s - dy * c, dx * c + dy * s),
            Rotation2d.from_xy(cos_theta, sin_theta),
        )
        return self.transform_by(transform)

    def log(self, end: "Pose2d") -> Twist2d:
        """
        Twist that carries self onto end (inverse of ``exp``).

        Returns:
            Twist2d with ``self.exp(self.log(end)) ≈ end``
        """
        delta = end.relative_to(self)
        dtheta = delta.rotation.radians
        half_dtheta = 0.5 * dtheta
        cos_minus_one = delta.rotation.cos - 1.0

        if abs(cos_minus_one) < constants.LOG_SMALL_ANGLE:
            half_theta_by_tan = 1.0 - dtheta * dtheta / 12.0
        else:
            # -(θ/2 · sin θ)/(cos θ - 1) == (θ/2)·cot(θ/2)
            half_theta_by_tan = half_dtheta / math.tan(half_dtheta)

        translation_part = delta.translation.rotate_by(
            Rotation2d.from_xy(half_theta_by_tan, -half_dtheta)
        ) * math.hypot(half_theta_by_tan, half_dtheta)

        return Twist2d(translation_part.x, translation_part.y, dtheta)

    def interpolate(self, end: "Pose2d", t: float) -> "Pose2d":
        """Constant-twist blend from self (t<=0) to end (t>=1)."""
        if t <= 0.0:
            return self
        if t >= 1.0:
            return end
        return self.exp(self.log(end) * t)

    # =========================================================================
    # Queries
    # =========================================================================

    def nearest(self, poses: Sequence["Pose2d"]) -> "Pose2d":
        """
        Candidate with the closest translation; heading is ignored.

        Raises:
            ValueError: If poses is empty
        """
        if not poses:
            raise ValueError("nearest() requires at least one candidate pose")
        return min(poses, key=lambda pose: self.translation.get_distance(pose.translation))

    def is_near(self, other: "Pose2d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
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
    def from_struct_fields(cls, values: Sequence[float]) -> "Pose2d":
        return cls(
            Translation2d.from_struct_fields(values[:_TRANSLATION_FIELDS]),
            Rotation2d.from_struct_fields(values[_TRANSLATION_FIELDS:]),
        )
