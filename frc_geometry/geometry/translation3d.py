"""3D displacement vector (meters)."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple

import numpy as np

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.quaternion import Quaternion
from frc_geometry.geometry.rotation3d import Rotation3d
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import interpolate

if TYPE_CHECKING:
    from frc_geometry.geometry.translation2d import Translation2d

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Translation3d(Structure):
    TYPE = "Translation3d"
    SCHEMA = "double x;double y;double z;"
    FIELD_COUNT = 3

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_polar(cls, distance: SupportsFloat, angle: Rotation3d) -> "Translation3d":
        """(distance, 0, 0) rotated by angle."""
        return cls(float(distance), 0.0, 0.0).rotate_by(angle)

    @classmethod
    def from_array(cls, v: Sequence[float]) -> "Translation3d":
        v = np.asarray(v, dtype=float).reshape(-1)
        if len(v) != 3:
            raise ValueError(f"Expected 3D vector, got shape {v.shape}")
        return cls(v[0], v[1], v[2])

    @classmethod
    def from_2d(cls, translation: "Translation2d") -> "Translation3d":
        """Embed in the z = 0 plane."""
        return cls(translation.x, translation.y, 0.0)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_2d(self) -> "Translation2d":
        from frc_geometry.geometry.translation2d import Translation2d

        return Translation2d.from_3d(self)

    def get_distance(self, other: "Translation3d") -> float:
        return math.sqrt(
            (other.x - self.x) ** 2
            + (other.y - self.y) ** 2
            + (other.z - self.z) ** 2
        )

    def get_norm(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def rotate_by(self, rotation: Rotation3d) -> "Translation3d":
        """
        Rotate with the quaternion sandwich q ⊗ (0, x, y, z) ⊗ q⁻¹.

        A degenerate (non-invertible) quaternion leaves the translation unchanged.
        """
        q_inv = rotation.q.try_inverse()
        if q_inv is None:
            logger.debug("Translation3d.rotate_by: rotation quaternion is not invertible")
            return self
        p = Quaternion(0.0, self.x, self.y, self.z)
        rotated = rotation.q * p * q_inv
        return Translation3d(rotated.i, rotated.j, rotated.k)

    def nearest(self, translations: Sequence["Translation3d"]) -> "Translation3d":
        """
        Closest candidate by Euclidean distance; the first one wins on ties.

        Raises:
            ValueError: If translations is empty
        """
        if not translations:
            raise ValueError("nearest() requires at least one candidate translation")
        nearest = translations[0]
        nearest_distance = self.get_distance(nearest)
        for translation in translations[1:]:
            distance = self.get_distance(translation)
            if distance < nearest_distance:
                nearest = translation
                nearest_distance = distance
        return nearest

    def interpolate(self, end: "Translation3d", t: float) -> "Translation3d":
        return Translation3d(
            interpolate(self.x, end.x, t),
            interpolate(self.y, end.y, t),
            interpolate(self.z, end.z, t),
        )

    def is_near(self, other: "Translation3d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return self.get_distance(other) < params.translation_tolerance

    def __add__(self, other: "Translation3d") -> "Translation3d":
        if not isinstance(other, Translation3d):
            return NotImplemented
        return Translation3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Translation3d") -> "Translation3d":
        if not isinstance(other, Translation3d):
            return NotImplemented
        return Translation3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Translation3d":
        return Translation3d(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> "Translation3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Translation3d(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Translation3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self * (1.0 / float(scalar))

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Translation3d":
        return cls(values[0], values[1], values[2])
