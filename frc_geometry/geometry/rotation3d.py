"""
3D orientation stored as a unit quaternion.

Constructors
    - Rotation3d() / Rotation3d.identity()
    - Rotation3d.from_quaternion_unchecked(q)   caller guarantees |q| = 1
    - Rotation3d.from_quaternion(q)             normalizes
    - Rotation3d.from_angles(roll, pitch, yaw)
    - Rotation3d.from_axis_angle(axis, angle)
    - Rotation3d.from_rotation_vector(rvec)
    - Rotation3d.from_rotation_matrix(R)
    - Rotation3d.from_first_last(initial, last)
    - Rotation3d.from_2d(rotation2d)

Operators
    - r1 + r2   Hamilton product q1 ⊗ q2 (order-significant)
    - r1 - r2   q1 ⊗ q2⁻¹
    - -r        inverse
    - r * t     fractional rotation along the shortest arc
    - r / t     r * (1/t)

Euler convention: q = qz(yaw) ⊗ qy(pitch) ⊗ qx(roll), i.e. extrinsic x-y-z
(equivalently intrinsic Z-Y'-X'').
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, SupportsFloat, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from frc_geometry import constants
from frc_geometry.config import DEFAULT_TOLERANCES, ToleranceParams
from frc_geometry.geometry import so3
from frc_geometry.geometry.quaternion import Quaternion
from frc_geometry.structure import Structure
from frc_geometry.utils.scalar import clamp

if TYPE_CHECKING:
    from frc_geometry.geometry.rotation2d import Rotation2d

logger = logging.getLogger(__name__)


def _as_vector3(v: Sequence[float], name: str) -> np.ndarray:
    v = np.asarray(v, dtype=float).reshape(-1)
    if len(v) != 3:
        raise ValueError(f"Expected 3D {name}, got shape {v.shape}")
    return v


@dataclass(frozen=True)
class Rotation3d(Structure):
    """A rotation in 3D space backed by a unit quaternion."""

    TYPE = "Rotation3d"
    SCHEMA = "Quaternion q;"
    FIELD_COUNT = Quaternion.FIELD_COUNT

    q: Quaternion = Quaternion()

    def __post_init__(self) -> None:
        # Constructor and dataclasses.replace both land here; keep |q| = 1
        if self.q.norm_squared() != 1.0:
            object.__setattr__(self, "q", self.q.normalize())

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> "Rotation3d":
        return cls(Quaternion(1.0, 0.0, 0.0, 0.0))

    @classmethod
    def from_quaternion_unchecked(cls, q: Quaternion) -> "Rotation3d":
        """
        Wrap q without normalizing.

        Precondition: q must already be unit-norm. Use ``from_quaternion``
        for raw quaternion data.
        """
        rotation = object.__new__(cls)
        object.__setattr__(rotation, "q", q)
        return rotation

    @classmethod
    def from_quaternion(cls, q: Quaternion) -> "Rotation3d":
        """Normalizing constructor (same as ``Rotation3d(q)``)."""
        return cls(q)

    @classmethod
    def from_angles(
        cls,
        roll: SupportsFloat,
        pitch: SupportsFloat,
        yaw: SupportsFloat,
    ) -> "Rotation3d":
        """Rotation from roll (x), pitch (y) and yaw (z) in radians."""
        x, y, z, w = Rotation.from_euler(
            "xyz", [float(roll), float(pitch), float(yaw)]
        ).as_quat()
        return cls.from_quaternion(Quaternion(w, x, y, z))

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle: SupportsFloat) -> "Rotation3d":
        """
        Rotation of angle radians about axis (need not be unit length).

        A (near-)zero axis has no direction and yields the identity.
        """
        axis = _as_vector3(axis, "axis")
        norm = float(np.linalg.norm(axis))
        if norm < constants.AXIS_NORM_EPSILON:
            logger.debug("Rotation3d.from_axis_angle: zero axis, using identity")
            return cls.identity()

        half = 0.5 * float(angle)
        unit = axis / norm
        s = math.sin(half)
        return cls(Quaternion(math.cos(half), unit[0] * s, unit[1] * s, unit[2] * s))

    @classmethod
    def from_rotation_vector(cls, rvec: Sequence[float]) -> "Rotation3d":
        """Angle = |rvec|, axis = rvec/|rvec|."""
        rvec = _as_vector3(rvec, "rotation vector")
        return cls.from_axis_angle(rvec, float(np.linalg.norm(rvec)))

    @classmethod
    def from_rotation_matrix(cls, matrix: np.ndarray) -> "Rotation3d":
        w, x, y, z = so3.rotmat_to_quat(matrix)
        return cls.from_quaternion(Quaternion(w, x, y, z))

    @classmethod
    def from_first_last(cls, initial: Sequence[float], last: Sequence[float]) -> "Rotation3d":
        """
        Shortest rotation taking direction ``initial`` onto direction ``last``.

        Anti-parallel directions rotate 180° about an axis orthogonal to
        ``initial``. A zero vector has no direction and yields the identity.
        """
        initial = _as_vector3(initial, "vector")
        last = _as_vector3(last, "vector")
        initial_norm = float(np.linalg.norm(initial))
        last_norm = float(np.linalg.norm(last))
        if initial_norm < constants.AXIS_NORM_EPSILON or last_norm < constants.AXIS_NORM_EPSILON:
            logger.debug("Rotation3d.from_first_last: zero vector, using identity")
            return cls.identity()

        u = initial / initial_norm
        v = last / last_norm
        cross = np.cross(u, v)
        dot = float(np.dot(u, v))
        cross_norm = float(np.linalg.norm(cross))

        if cross_norm < constants.AXIS_NORM_EPSILON:
            if dot > 0.0:
                return cls.identity()
            # Any axis orthogonal to u; pair u with its least-aligned basis vector
            basis = np.zeros(3)
            basis[int(np.argmin(np.abs(u)))] = 1.0
            return cls.from_axis_angle(np.cross(u, basis), math.pi)

        return cls.from_axis_angle(cross, math.atan2(cross_norm, dot))

    @classmethod
    def from_2d(cls, rotation: "Rotation2d") -> "Rotation3d":
        """Embed a planar rotation as a yaw about +z."""
        half = 0.5 * rotation.radians
        return cls(Quaternion(math.cos(half), 0.0, 0.0, math.sin(half)))

    # =========================================================================
    # Euler extraction
    # =========================================================================

    def x(self) -> float:
        """Rotation about the x axis (roll)."""
        w, x, y, z = self.q.w, self.q.i, self.q.j, self.q.k
        return math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))

    def y(self) -> float:
        """
        Rotation about the y axis (pitch).

        Saturates to ±π/2 at gimbal lock instead of producing NaN.
        """
        w, x, y, z = self.q.w, self.q.i, self.q.j, self.q.k
        ratio = 2.0 * (w * y - z * x)
        if abs(ratio) >= 1.0:
            return math.copysign(math.pi / 2.0, ratio)
        return math.asin(ratio)

    def z(self) -> float:
        """Rotation about the z axis (yaw)."""
        w, x, y, z = self.q.w, self.q.i, self.q.j, self.q.k
        return math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))

    def roll(self) -> float:
        return self.x()

    def pitch(self) -> float:
        return self.y()

    def yaw(self) -> float:
        return self.z()

    # =========================================================================
    # Axis / angle
    # =========================================================================

    def get_axis(self) -> np.ndarray:
        """
        Unit rotation axis (taken from the w >= 0 hemisphere).

        Returns the zero vector for the identity rotation.
        """
        v = np.array(self.q.vector, dtype=float)
        if self.q.w < 0.0:
            v = -v
        norm = float(np.linalg.norm(v))
        if norm < constants.AXIS_NORM_EPSILON:
            return np.zeros(3, dtype=float)
        return v / norm

    def get_angle(self) -> float:
        """Rotation angle in [0, π]."""
        vector_norm = math.sqrt(self.q.i ** 2 + self.q.j ** 2 + self.q.k ** 2)
        return 2.0 * math.atan2(vector_norm, abs(self.q.w))

    def get_rotation_vector(self) -> np.ndarray:
        """axis * angle, the so(3) tangent of this rotation."""
        return self.get_axis() * self.get_angle()

    def to_matrix(self) -> np.ndarray:
        return so3.quat_to_rotmat(self.q.w, self.q.i, self.q.j, self.q.k)

    def to_2d(self) -> "Rotation2d":
        from frc_geometry.geometry.rotation2d import Rotation2d

        return Rotation2d.from_3d(self)

    # =========================================================================
    # Group operations
    # =========================================================================

    def plus(self, other: "Rotation3d") -> "Rotation3d":
        return Rotation3d(self.q * other.q)

    def minus(self, other: "Rotation3d") -> "Rotation3d":
        return Rotation3d(self.q * other.q.conjugate())

    def inverse(self) -> "Rotation3d":
        return Rotation3d(self.q.conjugate())

    def times(self, scalar: float) -> "Rotation3d":
        """
        Fractional rotation: same axis, angle scaled by scalar.

        The hemisphere with non-negative real part is chosen first so the
        result follows the shortest arc continuously as scalar varies.
        """
        w = clamp(self.q.w, -1.0, 1.0)
        if w >= 0.0:
            axis = (self.q.i, self.q.j, self.q.k)
            angle = 2.0 * scalar * math.acos(w)
        else:
            axis = (-self.q.i, -self.q.j, -self.q.k)
            angle = 2.0 * scalar * math.acos(-w)
        return Rotation3d.from_axis_angle(axis, angle)

    def __add__(self, other: "Rotation3d") -> "Rotation3d":
        if not isinstance(other, Rotation3d):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: "Rotation3d") -> "Rotation3d":
        if not isinstance(other, Rotation3d):
            return NotImplemented
        return self.minus(other)

    def __neg__(self) -> "Rotation3d":
        return self.inverse()

    def __mul__(self, scalar: float) -> "Rotation3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Rotation3d":
        if isinstance(scalar, Structure):
            return NotImplemented
        return self.times(1.0 / float(scalar))

    def interpolate(self, end: "Rotation3d", t: float) -> "Rotation3d":
        """
        Geodesic (slerp) blend from self (t=0) to end (t=1).

        The fractional difference is applied on the left so that t=1 lands
        exactly on ``end`` for the non-commutative product.
        """
        return (end - self) * clamp(t, 0.0, 1.0) + self

    def is_near(self, other: "Rotation3d", params: ToleranceParams = DEFAULT_TOLERANCES) -> bool:
        """Angle between the rotations below the rotation tolerance (q and -q are equal)."""
        return (self - other).get_angle() < params.rotation_tolerance

    # =========================================================================
    # Binary layout
    # =========================================================================

    def struct_fields(self) -> Tuple[float, ...]:
        return self.q.struct_fields()

    @classmethod
    def from_struct_fields(cls, values: Sequence[float]) -> "Rotation3d":
        return cls.from_quaternion(Quaternion.from_struct_fields(values))
