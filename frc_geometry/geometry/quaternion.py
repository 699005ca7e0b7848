"""
Raw quaternion value (w, i, j, k).

A Quaternion carries no normalization guarantee; Rotation3d is the type that
marks a quaternion as known unit-norm. Multiplication is the Hamilton product.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from frc_geometry import constants
from frc_geometry.structure import Structure


@dataclass(frozen=True)
class Quaternion(Structure):
    """Quaternion w + i·x + j·y + k·z with scalar part first."""

    TYPE = "Quaternion"
    SCHEMA = "double w;double i;double j;double k;"
    FIELD_COUNT = 4

    w: float = 1.0
    i: float = 0.0
    j: float = 0.0
    k: float = 0.0

    def __post_init__(self) -> None:
        for name in ("w", "i", "j", "k"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def from_array(cls, q: Sequence[float]) -> "Quaternion":
        """Build from a 4-element (w, i, j, k) array-like."""
        q = np.asarray(q, dtype=float).reshape(-1)
        if len(q) != 4:
            raise ValueError(f"Expected 4-element quaternion, got {len(q)}")
        return cls(q[0], q[1], q[2], q[3])

    @property
    def vector(self) -> Tuple[float, float, float]:
        """Imaginary part (i, j, k)."""
        return (self.i, self.j, self.k)

    def as_array(self) -> np.ndarray:
        return np.array([self.w, self.i, self.j, self.k], dtype=float)

    def norm_squared(self) -> float:
        return self.w * self.w + self.i * self.i + self.j * self.j + self.k * self.k

    def norm(self) -> float:
        return math.sqrt(self.norm_squared())

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.w, -self.i, -self.j, -self.k)

    def scale(self, s: float) -> "Quaternion":
        return Quaternion(self.w * s, self.i * s, self.j * s, self.k * s)

    def normalize(self) -> "Quaternion":
        """Unit quaternion in the same direction (NaN fields for a zero quaternion)."""
        n = self.norm()
        if n == 0.0:
            return Quaternion(math.nan, math.nan, math.nan, math.nan)
        return self.scale(1.0 / n)

    def try_inverse(self) -> Optional["Quaternion"]:
        """
        Multiplicative inverse, or None when the quaternion is (numerically) zero.
        """
        norm_squared = self.norm_squared()
        if norm_squared <= constants.QUATERNION_INVERSE_EPSILON:
            return None
        return self.conjugate().scale(1.0 / norm_squared)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        w1, x1, y1, z1 = self.w, self.i, self.j, self.k
        w2, x2, y2, z2 = other.w, other.i, other.j, other.k
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.w, -self.i, -self.j, -self.k)

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.w, self.i, self.j, self.k)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Quaternion":
        return cls(values[0], values[1], values[2], values[3])
