"""
Photogrammetry formulas: ground footprint, GSD, motion blur and photo/lane spacing.

All distances are meters except GSD and motion blur, which are centimeters
(per pixel for GSD). Degenerate inputs return sentinel values instead of
raising: -1 for disabled intervals, 0 for GSD.
"""

import math
from dataclasses import dataclass

DISABLED = -1.0


@dataclass
class PhotogrammetryResult:
    footprint_width: float
    footprint_height: float
    gsd: float
    motion_blur_cm: float
    lane_spacing: float
    photo_interval_distance: float
    photo_interval_time: float

    @property
    def is_sharp(self):
        """Motion blur under one pixel of ground resolution."""
        return self.motion_blur_cm < self.gsd


def footprint(altitude, fov_deg):
    return 2 * altitude * math.tan(math.radians(fov_deg) / 2)


def footprint_dimensions(altitude, preset):
    """(width, height) of the nadir footprint; width follows the horizontal FOV."""
    return footprint(altitude, preset.fov_h), footprint(altitude, preset.fov_v)


def calculate_gsd(altitude, sensor_dimension_mm, image_dimension_px, focal_length_mm):
    if focal_length_mm <= 0 or image_dimension_px <= 0:
        return 0.0
    return (sensor_dimension_mm * altitude * 100) / (focal_length_mm * image_dimension_px)


def preset_gsd(altitude, preset):
    """GSD for both sensor axes, reporting the coarser one."""
    gsd_w = calculate_gsd(altitude, preset.sensor_width_mm, preset.image_width_px, preset.focal_length_mm)
    gsd_h = calculate_gsd(altitude, preset.sensor_height_mm, preset.image_height_px, preset.focal_length_mm)
    return max(gsd_w, gsd_h)


def motion_blur_cm(speed_ms, shutter_s):
    return speed_ms * shutter_s * 100


def photo_interval_distance(altitude, preset, forward_overlap):
    if altitude <= 0:
        return DISABLED
    _, height = footprint_dimensions(altitude, preset)
    return height * (1 - forward_overlap / 100)


def lane_spacing(altitude, preset, lateral_overlap):
    if altitude <= 0:
        return DISABLED
    width, _ = footprint_dimensions(altitude, preset)
    return width * (1 - lateral_overlap / 100)


def photo_interval_time(altitude, speed_ms, preset, forward_overlap):
    """Seconds between shots to hold the forward overlap at the given ground speed."""
    if speed_ms <= 0 or altitude <= 0:
        return DISABLED
    return photo_interval_distance(altitude, preset, forward_overlap) / speed_ms


def calculate_mapping_metrics(altitude, speed_ms, preset, forward_overlap, lateral_overlap, shutter_s):
    width, height = footprint_dimensions(altitude, preset)
    return PhotogrammetryResult(
        footprint_width=width,
        footprint_height=height,
        gsd=preset_gsd(altitude, preset),
        motion_blur_cm=motion_blur_cm(speed_ms, shutter_s),
        lane_spacing=lane_spacing(altitude, preset, lateral_overlap),
        photo_interval_distance=photo_interval_distance(altitude, preset, forward_overlap),
        photo_interval_time=photo_interval_time(altitude, speed_ms, preset, forward_overlap),
    )
