"""
Rigid transform in 3D: motion from frame A to frame B, expressed in A.

Rotations compose on the right (body frame), the same way translations are
rotated into the current frame:

    pose.transform_by(t)  ->  (pose.t + t.t.rotate_by(pose.r), pose.r + t.r)

where ``r1 + r2`` is the quaternion product q1 ⊗ q2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.rotation3d import Rotation3d
from frc_geometry.geometry.translation3d import Translation3d
from frc_geometry.structure import Structure

if TYPE_CHECKING:
    from frc_geometry.geometry.pose3d import Pose3d
    from frc_geometry.geometry.transform2d import Transform2d

_TRANSLATION_FIELDS = Translation3d.FIELD_COUNT


@dataclass(frozen=True)
class Transform3d(Structure):
    TYPE = "Transform3d"
    SCHEMA = "Translation3d translation;Rotation3d rotation;"
    FIELD_COUNT = Translation3d.FIELD_COUNT + Rotation3d.FIELD_COUNT

    translation: Translation3d = Translation3d()
    rotation: Rotation3d = Rotation3d()

    @classmethod
    def identity(cls) -> "Transform3d":
        return cls(Translation3d(), Rotation3d.identity())

    @classmethod
    def from_poses(cls, initial: "Pose3d", final: "Pose3d") -> "Transform3d":
        """
        Transform taking initial onto final.

        Satisfies ``initial.transform_by(Transform3d.from_poses(initial, final)) ≈ final``.
        """
        translation = (final.translation - initial.translation).rotate_by(-initial.rotation)
        return cls(translation, (-initial.rotation) + final.rotation)

    @classmethod
    def from_2d(cls, transform: "Transform2d") -> "Transform3d":
        return cls(transform.translation.to_3d(), transform.rotation.to_3d())

    def to_2d(self) -> "Transform2d":
        from frc_geometry.geometry.transform2d import Transform2d

        return Transform2d.from_3d(self)

    def plus(self, other: "Transform3d") -> "Transform3d":
        """Apply self, then other from the frame self lands in."""
        return Transform3d(
            self.translation + other.translation.rotate_by(self.rotation),
            self.rotation + other.rotation,
        )

    def inverse(self) -> "Transform3d":
        inverse_rotation = -self.rotation
        return Transform3d((-self.translation).rotate_by(inverse_rotation), inverse_rotation)

    def times(self, scalar: float) -> "Transform3d":
        return Transform3d(self.translation * scalar, self.rotation * scalar)

    def div(self, scalar: float) -> "Transform3d":
        return self.times(1.0 / float(scalar))

    def is_near(self, other: "Transform3d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return (
            self.translation.is_near(other.translation, params)
            and self.rotation.is_near(other.rotation, params)
        )

    def __add__(self, other: "Transform3d") -> "Transform3d":
        if not isinstance(other, Transform3d):
            return NotImplemented
        return self.plus(other)

    def __neg__(self) -> "Transform3d":
        return self.inverse()

    def __mul__(self, scalar: float) -> "Transform3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Transform3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.div(scalar)

    def struct_fields(self) -> Tuple[float, ...]:
        return self.translation.struct_fields() + self.rotation.struct_fields()

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Transform3d":
        return cls(
            Translation3d.from_struct_fields(values[:_TRANSLATION_FIELDS]),
            Rotation3d.from_struct_fields(values[_TRANSLATION_FIELDS:]),
        )
