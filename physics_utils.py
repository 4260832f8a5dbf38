# physics_utils.py

import math
from datetime import datetime, timedelta, timezone

import numpy as np

from config import config

J2000 = datetime.fromisoformat(config.Time.J2000_ISO)
ONE_DAY = timedelta(days=1)

class PhysicsError(Exception):
    """Custom exception for physics-related errors, including precondition violations
    such as non-elliptical orbits or non-finite times."""
    pass

def normalize_angle_deg(angle_deg):
    """Wraps an angle in degrees into [0, 360)."""
    angle_deg = angle_deg % 360.0
    if angle_deg < 0:
        angle_deg += 360.0
    return angle_deg

def as_utc(instant: datetime) -> datetime:
    """Returns `instant` as an aware UTC datetime. Naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)

def days_since_j2000(instant: datetime) -> float:
    """
    Real-valued number of days from the J2000 epoch to `instant`.

    Negative before 2000-01-01T12:00:00 UTC; fractional days are kept to the
    microsecond resolution of `datetime`.
    """
    return (as_utc(instant) - J2000) / ONE_DAY

def julian_date(instant: datetime) -> float:
    """Julian Date of `instant`."""
    return config.Time.REFERENCE_EPOCH_JD + days_since_j2000(instant)

def from_days_since_j2000(days: float) -> datetime:
    """Inverse of `days_since_j2000`."""
    if not math.isfinite(days):
        raise PhysicsError(f"Day offset must be finite, got {days}.")
    return J2000 + timedelta(days=days)

def to_display_frame(ecliptic_position, scale=1.0):
    """
    Maps ecliptic coordinates (Z toward the ecliptic north pole) into the
    Y-up display frame: display X = x, display Y = z, display Z = -y.

    Args:
        ecliptic_position (np.ndarray): A `(3,)` position or an `(N, 3)` array of positions.
        scale (float): Uniform scale applied after the permutation (e.g. display units per AU).

    Returns:
        np.ndarray: Array of the same shape in the display frame.
    """
    position = np.asarray(ecliptic_position, dtype=np.float64)
    display = position[..., [0, 2, 1]] * np.array([1.0, 1.0, -1.0])
    return display * scale

def from_display_frame(display_position, scale=1.0):
    """Inverse of `to_display_frame`."""
    position = np.asarray(display_position, dtype=np.float64) / scale
    return position[..., [0, 2, 1]] * np.array([1.0, -1.0, 1.0])
