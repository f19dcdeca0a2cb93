"""
Oblique sweep-area (ground frustum) solver.

The camera looks forward and down at `gimbal_angle` degrees below the horizon
(-90 is nadir). The ground trace of the view is a trapezoid whose near edge
is `base_minor` wide at `d_near` meters ahead of the drone and whose far edge
is `base_major` wide at `d_far` meters ahead.

Angles at or beyond the horizon give meaningless (negative or huge) numbers;
callers keep the gimbal angle within [-90, 0).
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class SweepResult:
    gimbal_angle: float
    base_minor: float
    base_major: float
    d_near: float
    d_far: float
    frontal_distance: float
    frontal_time: float  # seconds, -1 if speed is not positive
    total_distance: Optional[float] = None
    total_time: Optional[float] = None  # seconds


def _near_far(altitude, theta_deg, fov_v_rad):
    off_nadir = math.radians(90 - theta_deg)
    d_near = altitude * math.tan(off_nadir - fov_v_rad / 2)
    d_far = altitude * math.tan(off_nadir + fov_v_rad / 2)
    return d_near, d_far


def _timing(speed_ms, d_near, d_far, frontal_distance, total_distance):
    frontal = frontal_distance if frontal_distance is not None else d_far - d_near
    if speed_ms <= 0:
        return frontal, -1.0, None if total_distance is None else -1.0
    total_time = None if total_distance is None else total_distance / speed_ms
    return frontal, frontal / speed_ms, total_time


def sweep_from_angle(altitude, fov_h, fov_v, gimbal_angle, speed_ms,
                     frontal_distance=None, total_distance=None):
    half_h = math.radians(fov_h) / 2
    theta = abs(gimbal_angle)
    d_near, d_far = _near_far(altitude, theta, math.radians(fov_v))
    base_minor = 2 * d_near * math.tan(half_h)
    base_major = 2 * d_far * math.tan(half_h)

    frontal, frontal_time, total_time = _timing(speed_ms, d_near, d_far, frontal_distance, total_distance)
    return SweepResult(
        gimbal_angle=gimbal_angle,
        base_minor=abs(base_minor),
        base_major=abs(base_major),
        d_near=d_near,
        d_far=d_far,
        frontal_distance=frontal,
        frontal_time=frontal_time,
        total_distance=total_distance,
        total_time=total_time,
    )


def sweep_from_base(altitude, fov_h, fov_v, base_major, speed_ms,
                    frontal_distance=None, total_distance=None):
    """Solve for the gimbal angle that makes the far edge `base_major` meters wide."""
    half_h = math.radians(fov_h) / 2
    fov_v_rad = math.radians(fov_v)
    d_far = base_major / (2 * math.tan(half_h))
    theta = 90 - math.degrees(math.atan2(d_far, altitude) - fov_v_rad / 2)

    d_near, _ = _near_far(altitude, theta, fov_v_rad)
    base_minor = 2 * d_near * math.tan(half_h)

    frontal, frontal_time, total_time = _timing(speed_ms, d_near, d_far, frontal_distance, total_distance)
    return SweepResult(
        gimbal_angle=-theta,
        base_minor=abs(base_minor),
        base_major=abs(base_major),
        d_near=d_near,
        d_far=d_far,
        frontal_distance=frontal,
        frontal_time=frontal_time,
        total_distance=total_distance,
        total_time=total_time,
    )
