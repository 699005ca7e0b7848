"""
Planar orientation.

Rotation2d stores the angle together with its sine and cosine. The three
fields are derived together at construction and never set independently;
composition goes through ``from_xy`` so accumulated floating error in the
(sin, cos) pair is re-normalized by atan2/hypot on every step.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple

from frc_geometry import constants
from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import clamp, is_near_min_max

if TYPE_CHECKING:
    from frc_geometry.geometry.rotation3d import Rotation3d

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rotation2d(Structure):
    """
    A rotation in the plane.

    ``Rotation2d(radians)`` accepts any real angle (no pre-wrapping); sin/cos
    are computed from it.
    """

    TYPE = "Rotation2d"
    SCHEMA = "double value;double sin;double cos;"
    FIELD_COUNT = 3

    radians: float = 0.0
    sin: float = field(init=False)
    cos: float = field(init=False)

    def __post_init__(self) -> None:
        radians = float(self.radians)
        object.__setattr__(self, "radians", radians)
        object.__setattr__(self, "sin", math.sin(radians))
        object.__setattr__(self, "cos", math.cos(radians))

    @classmethod
    def _from_parts(cls, radians: float, sin: float, cos: float) -> "Rotation2d":
        rotation = object.__new__(cls)
        object.__setattr__(rotation, "radians", float(radians))
        object.__setattr__(rotation, "sin", float(sin))
        object.__setattr__(rotation, "cos", float(cos))
        return rotation

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> "Rotation2d":
        return cls._from_parts(0.0, 0.0, 1.0)

    @classmethod
    def from_radians(cls, angle: SupportsFloat) -> "Rotation2d":
        return cls(float(angle))

    @classmethod
    def from_degrees(cls, angle: SupportsFloat) -> "Rotation2d":
        return cls(math.radians(float(angle)))

    @classmethod
    def from_xy(cls, x: SupportsFloat, y: SupportsFloat) -> "Rotation2d":
        """
        Rotation pointing along the direction (x, y).

        The zero vector has no direction: the result carries NaN fields and it
        is the caller's responsibility to avoid it.
        """
        x = float(x)
        y = float(y)
        magnitude = math.hypot(x, y)
        if magnitude == 0.0:
            logger.debug("Rotation2d.from_xy called with a zero vector; result is NaN")
            return cls._from_parts(math.nan, math.nan, math.nan)

        sin = y / magnitude
        cos = x / magnitude
        return cls._from_parts(math.atan2(sin, cos), sin, cos)

    @classmethod
    def from_3d(cls, rotation: "Rotation3d") -> "Rotation2d":
        """Planar rotation from the yaw of a 3D rotation."""
        return cls(rotation.yaw())

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def get_tan(self) -> float:
        """sin/cos; ±inf (sign of sin) when cos is exactly zero."""
        if self.cos == 0.0:
            return math.copysign(math.inf, self.sin)
        return self.sin / self.cos

    def to_3d(self) -> "Rotation3d":
        from frc_geometry.geometry.rotation3d import Rotation3d

        return Rotation3d.from_2d(self)

    # =========================================================================
    # Group operations
    # =========================================================================

    def plus(self, other: "Rotation2d") -> "Rotation2d":
        """Composition via the angle-sum identities."""
        return Rotation2d.from_xy(
            self.cos * other.cos - self.sin * other.sin,
            self.cos * other.sin + self.sin * other.cos,
        )

    def minus(self, other: "Rotation2d") -> "Rotation2d":
        return self.plus(-other)

    def times(self, scalar: float) -> "Rotation2d":
        """Rotation by scalar * angle."""
        return Rotation2d(self.radians * scalar)

    def __add__(self, other: "Rotation2d") -> "Rotation2d":
        if not isinstance(other, Rotation2d):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: "Rotation2d") -> "Rotation2d":
        if not isinstance(other, Rotation2d):
            return NotImplemented
        return self.minus(other)

    def __neg__(self) -> "Rotation2d":
        return Rotation2d(-self.radians)

    def __mul__(self, scalar: float) -> "Rotation2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Rotation2d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(1.0 / float(scalar))

    def interpolate(self, end: "Rotation2d", t: float) -> "Rotation2d":
        """Shortest-rotation blend from self (t=0) to end (t=1)."""
        return self + (end - self) * clamp(t, 0.0, 1.0)

    def is_near(self, other: "Rotation2d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        return is_near_min_max(
            self.radians,
            other.radians,
            params.rotation_tolerance,
            constants.ANGLE_MIN,
            constants.ANGLE_MAX,
        )

    # =========================================================================
    # Binary layout
    # =========================================================================

    def struct_fields(self) -> Tuple[float, ...]:
        return (self.radians, self.sin, self.cos)

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Rotation2d":
        return cls._from_parts(values[0], values[1], values[2])
