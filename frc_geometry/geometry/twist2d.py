"""Planar twist: displacement along an arc, in the body frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import is_near

if TYPE_CHECKING:
    from frc_geometry.geometry.twist3d import Twist3d


@dataclass(frozen=True)
class Twist2d(Structure):
    """
    (dx, dy, dtheta) tangent vector of SE(2).

    dx/dy in meters along the robot's forward/left axes, dtheta in radians.
    """

    TYPE = "Twist2d"
    SCHEMA = "double dx;double dy;double dtheta;"
    FIELD_COUNT = 3

    dx: float = 0.0
    dy: float = 0.0
    dtheta: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "dx", float(self.dx))
        object.__setattr__(self, "dy", float(self.dy))
        object.__setattr__(self, "dtheta", float(self.dtheta))

    @classmethod
    def identity(cls) -> "Twist2d":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_3d(cls, twist: "Twist3d") -> "Twist2d":
        return cls(twist.dx, twist.dy, twist.rz)

    def to_3d(self) -> "Twist3d":
        from frc_geometry.geometry.twist3d import Twist3d

        return Twist3d.from_2d(self)

    def is_near(self, other: "Twist2d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        tol = params.twist_tolerance
        return (
            is_near(self.dx, other.dx, tol)
            and is_near(self.dy, other.dy, tol)
            and is_near(self.dtheta, other.dtheta, tol)
        )

    def __mul__(self, scalar: float) -> "Twist2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        scalar = float(scalar)
        return Twist2d(self.dx * scalar, self.dy * scalar, self.dtheta * scalar)

    __rmul__ = __mul__

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.dx, self.dy, self.dtheta)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Twist2d":
        return cls(values[0], values[1], values[2])
