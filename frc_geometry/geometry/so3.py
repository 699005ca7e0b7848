"""
SO(3) / SE(3) helpers on NumPy arrays.

Rotation vectors (rx, ry, rz) live in the so(3) tangent space: direction is
the rotation axis, magnitude the angle in radians. Rotation matrices are
INTERMEDIATE values here; the geometry types store unit quaternions.

Numerical Policy:
    SE3_SMALL_ANGLE = 1e-7 switches the Rodrigues coefficients A, B, C (and
    the inverse-Jacobian coefficient) to their Taylor series through θ⁴.
    This affects the computational path only, not the mathematical result.
    Above the cutoff, B and the inverse-Jacobian coefficient are evaluated
    in half-angle form (2·sin²(θ/2) for 1 - cos θ, (θ/2)·cot(θ/2) for
    A/(2B)) so neither subtracts two nearly equal numbers.

References:
- Barfoot (2017): State Estimation for Robotics
- Sola et al. (2018): A micro Lie theory for state estimation
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from frc_geometry import constants


# =============================================================================
# hat / vee
# =============================================================================


def skew(v: np.ndarray) -> np.ndarray:
    """Skew-symmetric matrix from 3-vector (hat operator)."""
    v = np.asarray(v, dtype=float).reshape(-1)
    if len(v) != 3:
        raise ValueError(f"Expected 3-vector, got shape {v.shape}")
    return np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0]
    ], dtype=float)


def unskew(S: np.ndarray) -> np.ndarray:
    """Extract 3-vector from skew-symmetric matrix (vee operator)."""
    S = np.asarray(S, dtype=float)
    if S.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {S.shape}")
    return np.array([S[2, 1], S[0, 2], S[1, 0]], dtype=float)


# =============================================================================
# Quaternion <-> rotation matrix
# =============================================================================


def quat_to_rotmat(w: float, x: float, y: float, z: float) -> np.ndarray:
    """
    Convert a unit quaternion (w, x, y, z) to a rotation matrix.

    The quaternion is assumed normalized (Rotation3d guarantees it).
    """
    return np.array([
        [1 - 2*(y*y + z*z), 2*(x*y - z*w), 2*(x*z + y*w)],
        [2*(x*y + z*w), 1 - 2*(x*x + z*z), 2*(y*z - x*w)],
        [2*(x*z - y*w), 2*(y*z + x*w), 1 - 2*(x*x + y*y)]
    ], dtype=float)


def rotmat_to_quat(R: np.ndarray) -> Tuple[float, float, float, float]:
    """
    Convert rotation matrix to quaternion (w, x, y, z).

    Uses Shepperd's method for numerical stability.
    """
    R = np.asarray(R, dtype=float)
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    trace = np.trace(R)

    if trace > 0:
        s = math.sqrt(trace + 1.0) * 2  # s = 4 * qw
        w = 0.25 * s
        x = (R[2, 1] - R[1, 2]) / s
        y = (R[0, 2] - R[2, 0]) / s
        z = (R[1, 0] - R[0, 1]) / s
    elif (R[0, 0] > R[1, 1]) and (R[0, 0] > R[2, 2]):
        s = math.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2]) * 2
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = math.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2]) * 2
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = math.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1]) * 2
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    return (float(w), float(x), float(y), float(z))


# =============================================================================
# SE(3) exp / log coefficients
# =============================================================================


def exp_coefficients(theta: float) -> Tuple[float, float, float]:
    """
    Rodrigues coefficients for the SE(3) exponential.

    A = sin(θ)/θ, B = (1 - cos θ)/θ², C = (1 - A)/θ²

    Small angle: Taylor series through θ⁴ (avoids 0/0).
    """
    theta_sq = theta * theta
    if abs(theta) < constants.SE3_SMALL_ANGLE:
        a = 1.0 - theta_sq / 6.0 + theta_sq * theta_sq / 120.0
        b = 0.5 - theta_sq / 24.0 + theta_sq * theta_sq / 720.0
        c = 1.0 / 6.0 - theta_sq / 120.0 + theta_sq * theta_sq / 5040.0
    else:
        a = math.sin(theta) / theta
        half_sin = math.sin(0.5 * theta)
        b = 2.0 * half_sin * half_sin / theta_sq
        c = (1.0 - a) / theta_sq
    return a, b, c


def log_coefficient(theta: float) -> float:
    """
    Coefficient C of the inverse left Jacobian: (1 - A/(2B))/θ².

    Small angle: 1/12 + θ²/720 + θ⁴/30240.
    """
    theta_sq = theta * theta
    if abs(theta) < constants.SE3_SMALL_ANGLE:
        return 1.0 / 12.0 + theta_sq / 720.0 + theta_sq * theta_sq / 30240.0
    # A/(2B) == (θ/2)·cot(θ/2)
    half = 0.5 * theta
    return (1.0 - half / math.tan(half)) / theta_sq


def so3_exp(rotvec: np.ndarray) -> np.ndarray:
    """
    Rotation matrix from rotation vector: R = I + A·Ω + B·Ω².

    This is the exponential map exp: so(3) -> SO(3).
    """
    rotvec = np.asarray(rotvec, dtype=float).reshape(-1)
    omega = skew(rotvec)
    a, b, _ = exp_coefficients(float(np.linalg.norm(rotvec)))
    return np.eye(3, dtype=float) + a * omega + b * (omega @ omega)


def left_jacobian(rotvec: np.ndarray) -> np.ndarray:
    """
    V = I + B·Ω + C·Ω², mapping twist translation to displacement.
    """
    rotvec = np.asarray(rotvec, dtype=float).reshape(-1)
    omega = skew(rotvec)
    _, b, c = exp_coefficients(float(np.linalg.norm(rotvec)))
    return np.eye(3, dtype=float) + b * omega + c * (omega @ omega)


def left_jacobian_inverse(rotvec: np.ndarray) -> np.ndarray:
    """
    V⁻¹ = I - Ω/2 + C·Ω², mapping displacement back to twist translation.
    """
    rotvec = np.asarray(rotvec, dtype=float).reshape(-1)
    omega = skew(rotvec)
    c = log_coefficient(float(np.linalg.norm(rotvec)))
    return np.eye(3, dtype=float) - 0.5 * omega + c * (omega @ omega)
