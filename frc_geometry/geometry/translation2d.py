"""Planar displacement vector (meters)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple

import numpy as np

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.rotation2d import Rotation2d
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import interpolate

if TYPE_CHECKING:
    from frc_geometry.geometry.translation3d import Translation3d


@dataclass(frozen=True)
class Translation2d(Structure):
    TYPE = "Translation2d"
    SCHEMA = "double x;double y;"
    FIELD_COUNT = 2

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def from_polar(cls, distance: SupportsFloat, angle: Rotation2d) -> "Translation2d":
        """Point at distance along the direction of angle."""
        distance = float(distance)
        return cls(distance * angle.cos, distance * angle.sin)

    @classmethod
    def from_array(cls, v: Sequence[float]) -> "Translation2d":
        v = np.asarray(v, dtype=float).reshape(-1)
        if len(v) != 2:
            raise ValueError(f"Expected 2D vector, got shape {v.shape}")
        return cls(v[0], v[1])

    @classmethod
    def from_3d(cls, translation: "Translation3d") -> "Translation2d":
        """Drop z."""
        return cls(translation.x, translation.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def to_3d(self) -> "Translation3d":
        from frc_geometry.geometry.translation3d import Translation3d

        return Translation3d.from_2d(self)

    def get_distance(self, other: "Translation2d") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def get_norm(self) -> float:
        return math.hypot(self.x, self.y)

    def get_angle(self) -> Rotation2d:
        """Direction of this vector (NaN for the zero vector)."""
        return Rotation2d.from_xy(self.x, self.y)

    def rotate_by(self, rotation: Rotation2d) -> "Translation2d":
        return Translation2d(
            self.x * rotation.cos - self.y * rotation.sin,
            self.x * rotation.sin + self.y * rotation.cos,
        )

    def nearest(self, translations: Sequence["Translation2d"]) -> "Translation2d":
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

    def interpolate(self, end: "Translation2d", t: float) -> "Translation2d":
        return Translation2d(
            interpolate(self.x, end.x, t),
            interpolate(self.y, end.y, t),
        )

    def is_near(self, other: "Translation2d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return self.get_distance(other) < params.translation_tolerance

    def __add__(self, other: "Translation2d") -> "Translation2d":
        if not isinstance(other, Translation2d):
            return NotImplemented
        return Translation2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Translation2d") -> "Translation2d":
        if not isinstance(other, Translation2d):
            return NotImplemented
        return Translation2d(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Translation2d":
        return Translation2d(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Translation2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Translation2d(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Translation2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Translation2d(self.x / scalar, self.y / scalar)

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.x, self.y)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Translation2d":
        return cls(values[0], values[1])
