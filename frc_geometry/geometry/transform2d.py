"""
Planar rigid transform: motion from frame A to frame B, expressed in A.

Composition order:
    pose.transform_by(t)  ->  (pose.t + t.t.rotate_by(pose.r), pose.r + t.r)
    t1 + t2               ->  apply t1, then t2 in t1's resulting frame
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.rotation2d import Rotation2d
from frc_geometry.geometry.translation2d import Translation2d
from frc_geometry.structure import Structure

if TYPE_CHECKING:
    from frc_geometry.geometry.pose2d import Pose2d
    from frc_geometry.geometry.transform3d import Transform3d

_TRANSLATION_FIELDS = Translation2d.FIELD_COUNT


@dataclass(frozen=True)
class Transform2d(Structure):
    TYPE = "Transform2d"
    SCHEMA = "Translation2d translation;Rotation2d rotation;"
    FIELD_COUNT = Translation2d.FIELD_COUNT + Rotation2d.FIELD_COUNT

    translation: Translation2d = Translation2d()
    rotation: Rotation2d = Rotation2d()

    @classmethod
    def identity(cls) -> "Transform2d":
        return cls(Translation2d(), Rotation2d.identity())

    @classmethod
    def from_poses(cls, initial: "Pose2d", final: "Pose2d") -> "Transform2d":
        """
        Transform taking initial onto final.

        Satisfies ``initial.transform_by(Transform2d.from_poses(initial, final)) ≈ final``.
        """
        translation = (final.translation - initial.translation).rotate_by(-initial.rotation)
        return cls(translation, final.rotation - initial.rotation)

    @classmethod
    def from_3d(cls, transform: "Transform3d") -> "Transform2d":
        return cls(transform.translation.to_2d(), transform.rotation.to_2d())

    def to_3d(self) -> "Transform3d":
        from frc_geometry.geometry.transform3d import Transform3d

        return Transform3d.from_2d(self)

    def plus(self, other: "Transform2d") -> "Transform2d":
        """Apply self, then other from the frame self lands in."""
        return Transform2d(
            self.translation + other.translation.rotate_by(self.rotation),
            other.rotation + self.rotation,
        )

    def inverse(self) -> "Transform2d":
        return Transform2d(
            (-self.translation).rotate_by(-self.rotation),
            -self.rotation,
        )

    def times(self, scalar: float) -> "Transform2d":
        return Transform2d(self.translation * scalar, self.rotation * scalar)

    def div(self, scalar: float) -> "Transform2d":
        return self.times(1.0 / float(scalar))

    def is_near(self, other: "Transform2d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return (
            self.translation.is_near(other.translation, params)
            and self.rotation.is_near(other.rotation, params)
        )

    def __add__(self, other: "Transform2d") -> "Transform2d":
        if not isinstance(other, Transform2d):
            return NotImplemented
        return self.plus(other)

    def __neg__(self) -> "Transform2d":
        return self.inverse()

    def __mul__(self, scalar: float) -> "Transform2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Transform2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.div(scalar)

    def struct_fields(self) -> Tuple[float, ...]:
        return self.translation.struct_fields() + self.rotation.struct_fields()

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Transform2d":
        return cls(
            Translation2d.from_struct_fields(values[:_TRANSLATION_FIELDS]),
            Rotation2d.from_struct_fields(values[_TRANSLATION_FIELDS:]),
        )
