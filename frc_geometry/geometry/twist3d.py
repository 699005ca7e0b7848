"""SE(3) twist: translational (dx, dy, dz) and rotation-vector (rx, ry, rz) parts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry.translation3d import Translation3d
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import is_near

if TYPE_CHECKING:
    from frc_geometry.geometry.twist2d import Twist2d


@dataclass(frozen=True)
class Twist3d(Structure):
    TYPE = "Twist3d"
    SCHEMA = "double dx;double dy;double dz;double rx;double ry;double rz;"
    FIELD_COUNT = 6

    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0

    def __post_init__(self) -> None:
        for name in ("dx", "dy", "dz", "rx", "ry", "rz"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def identity(cls) -> "Twist3d":
        return cls()

    @classmethod
    def from_2d(cls, twist: "Twist2d") -> "Twist3d":
        """Planar twist about +z; the out-of-plane components are zero."""
        return cls(twist.dx, twist.dy, 0.0, 0.0, 0.0, twist.dtheta)

    def to_2d(self) -> "Twist2d":
        from frc_geometry.geometry.twist2d import Twist2d

        return Twist2d.from_3d(self)

    def translation(self) -> Translation3d:
        return Translation3d(self.dx, self.dy, self.dz)

    def rotation_vector(self) -> np.ndarray:
        return np.array([self.rx, self.ry, self.rz], dtype=float)

    def is_near(self, other: "Twist3d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        tol = params.twist_tolerance
        return all(
            is_near(a, b, tol) for a, b in zip(self.struct_fields(), other.struct_fields())
        )

    def __mul__(self, scalar: float) -> "Twist3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Twist3d(*(value * scalar for value in self.struct_fields()))

    __rmul__ = __mul__

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.dx, self.dy, self.dz, self.rx, self.ry, self.rz)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Twist3d":
        return cls(*values[:cls.FIELD_COUNT])
