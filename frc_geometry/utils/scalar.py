"""
Scalar helpers shared by the geometry types and by control-loop callers.

All functions are pure and operate on plain floats.
"""

from __future__ import annotations

import math

from frc_geometry import constants


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def apply_deadband(value: float, deadband: float, max_magnitude: float = 1.0) -> float:
    """
    Zero out |value| <= deadband and rescale the rest.

    Outside the deadband the output is rescaled linearly so that
    ±max_magnitude still maps to ±max_magnitude. If max_magnitude / deadband
    exceeds DEADBAND_RATIO_LIMIT (including deadband == 0) the rescale is
    skipped and the deadband is simply removed from the value.
    """
    if abs(value) <= deadband:
        return 0.0

    if deadband == 0.0 or max_magnitude / deadband > constants.DEADBAND_RATIO_LIMIT:
        if value > 0.0:
            return value - deadband
        return value + deadband

    # Ratio first so value == max_magnitude saturates exactly
    if value > 0.0:
        return max_magnitude * ((value - deadband) / (max_magnitude - deadband))
    return max_magnitude * ((value + deadband) / (max_magnitude - deadband))


def apply_deadband_no_max(value: float, deadband: float) -> float:
    """apply_deadband with a unit max magnitude."""
    return apply_deadband(value, deadband, 1.0)


def input_modulus(value: float, minimum: float, maximum: float) -> float:
    """
    Wrap value into [minimum, maximum).

    Works for inputs any number of periods outside the range. The first floor
    correction lands in [minimum, maximum]; the second folds an exact (or
    rounded) maximum back onto minimum.
    """
    modulus = maximum - minimum

    value -= math.floor((value - minimum) / modulus) * modulus
    value -= (math.floor((value - maximum) / modulus) + 1.0) * modulus
    return value


def angle_modulus(angle: float) -> float:
    """Wrap an angle in radians into [-pi, pi)."""
    return input_modulus(angle, constants.ANGLE_MIN, constants.ANGLE_MAX)


def interpolate(start: float, end: float, t: float) -> float:
    """Linear interpolation with t clamped to [0, 1]."""
    return (end - start) * clamp(t, 0.0, 1.0) + start


def is_near(expected: float, actual: float, tolerance: float) -> bool:
    """True if |expected - actual| < tolerance. A negative tolerance is never near."""
    if tolerance < 0.0:
        return False
    return abs(expected - actual) < tolerance


def is_near_min_max(
    expected: float,
    actual: float,
    tolerance: float,
    minimum: float,
    maximum: float,
) -> bool:
    """
    Tolerance check on a continuous (wrapping) input range.

    The error is wrapped into half the range before comparing, so values on
    either side of the seam (e.g. 179° and -179°) are near each other.
    """
    if tolerance < 0.0:
        return False
    # Max error is exactly halfway between min and max
    error_bound = (maximum - minimum) / 2.0
    error = input_modulus(expected - actual, -error_bound, error_bound)
    return abs(error) < tolerance
