import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

import config
from drone_specs import get_preset
from geodesy import centroid, distance, project_points, rotate_points, unproject_points
from models import ActionType, CoveragePattern, FinishAction
from photogrammetry import lane_spacing, photo_interval_distance

logger = logging.getLogger(__name__)


def validate_parameters(settings, preset):
    errors = []
    if settings.altitude <= 0:
        errors.append("Altitude must be greater than zero.")
    elif settings.altitude > preset.max_altitude:
        errors.append("Altitude exceeds drone's max altitude.")
    if settings.speed_ms <= 0:
        errors.append("Speed must be greater than zero.")
    elif settings.speed_ms > preset.max_speed:
        errors.append("Speed exceeds drone's max speed.")
    for label, value in (("Front", settings.forward_overlap), ("Side", settings.lateral_overlap)):
        if not 0 <= value < 100:
            errors.append(f"{label} overlap must be between 0 and 100%.")
    return errors


# ─────────────── Coverage grid ───────────────

def _scan_line_crossings(ring, y):
    """x positions where the horizontal line at y crosses the closed ring, sorted."""
    xs = []
    n = len(ring)
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        if y1 == y2:
            continue
        # Half-open test so a vertex shared by two edges is counted once
        if (y1 <= y < y2) or (y2 <= y < y1):
            xs.append(x1 + (y - y1) * (x2 - x1) / (y2 - y1))
    xs.sort()
    return xs


def _densify_span(x_start, x_end, y, photo_spacing):
    points = [(x_start, y)]
    length = x_end - x_start
    if photo_spacing > config.MIN_LANE_SPACING_M and length > photo_spacing:
        for step in np.arange(photo_spacing, length, photo_spacing):
            if length - step < 1e-9:
                break
            points.append((x_start + step, y))
    points.append((x_end, y))
    return points


def _scan_line_positions(min_y, max_y, spacing, max_lines):
    """
    y of each lane: every `spacing` from min_y + spacing/2, plus one lane
    clamped to max_y - spacing/2 when a strip at the top is left uncovered.
    An area thinner than one lane gets a single lane through its middle.
    """
    ys = []
    y = min_y + spacing / 2
    while y <= max_y:
        if len(ys) >= max_lines:
            logger.warning(f"Scan-line cap of {max_lines} reached; coverage truncated")
            return ys
        ys.append(y)
        y += spacing

    covered = ys[-1] + spacing / 2 if ys else min_y
    if max_y - covered > 1e-6 and len(ys) < max_lines:
        ys.append(max(max_y - spacing / 2, (min_y + max_y) / 2))
    return ys


def _coverage_pass(ring_xy, angle, spacing, photo_spacing, max_lines):
    """Boustrophedon lanes over a polygon in local meters, at `angle` degrees."""
    flat = rotate_points(ring_xy, -angle)
    ring = [tuple(p) for p in flat]
    min_y, max_y = flat[:, 1].min(), flat[:, 1].max()

    lanes = []
    for y in _scan_line_positions(min_y, max_y, spacing, max_lines):
        xs = _scan_line_crossings(ring, y)
        lane = []
        for i in range(0, len(xs) - 1, 2):
            lane.extend(_densify_span(xs[i], xs[i + 1], y, photo_spacing))
        if lane:
            if len(lanes) % 2 == 1:
                lane.reverse()
            lanes.append(lane)

    points = [p for lane in lanes for p in lane]
    if not points:
        return np.empty((0, 2)), 0
    return rotate_points(points, angle), len(lanes)


def generate_grid_path(polygon, settings, rotation_deg=0.0, max_lines=None):
    """
    Cover a survey polygon with a lawnmower path.

    The polygon is treated as closed. Lane spacing follows the lateral
    overlap and photo spacing the forward overlap, both from the camera
    footprint at the settings' altitude. A crosshatch pattern appends a
    second pass at rotation_deg + 90. Degenerate input (fewer than 3
    vertices, lane spacing <= MIN_LANE_SPACING_M, or no lane inside the
    polygon) returns the polygon unchanged.
    """
    polygon = list(polygon)
    if len(polygon) < 3:
        return polygon

    preset = get_preset(settings.drone_model)
    spacing = lane_spacing(settings.altitude, preset, settings.lateral_overlap)
    if spacing <= config.MIN_LANE_SPACING_M:
        logger.warning(f"Lane spacing {spacing:.3f} m is degenerate; keeping drawn polygon")
        return polygon
    photo_spacing = photo_interval_distance(settings.altitude, preset, settings.forward_overlap)
    max_lines = max_lines or config.MAX_SCAN_LINES

    center = centroid(polygon)
    ring_xy = project_points(polygon, center)

    angles = [rotation_deg]
    if settings.pattern == CoveragePattern.CROSSHATCH:
        angles.append(rotation_deg + 90)

    path = []
    for angle in angles:
        xy, lane_count = _coverage_pass(ring_xy, angle, spacing, photo_spacing, max_lines)
        logger.info(f"Coverage pass at {angle:.1f}°: {lane_count} lanes, {len(xy)} points")
        path.extend(unproject_points(xy, center) if len(xy) else [])

    if not path:
        logger.warning("No scan line crosses the polygon; keeping drawn polygon")
        return polygon
    return path


# ─────────────── Route statistics ───────────────

class StayTimeMode(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


@dataclass
class RouteStats:
    total_distance: float = 0.0
    total_time_minutes: float = 0.0
    photo_count: int = 0
    video_count: int = 0

    def __add__(self, other):
        return RouteStats(
            self.total_distance + other.total_distance,
            self.total_time_minutes + other.total_time_minutes,
            self.photo_count + other.photo_count,
            self.video_count + other.video_count,
        )


def _interval_photos(wp, segment_time, segment_distance):
    if wp.photo_time_interval > 0:
        return math.floor(segment_time / wp.photo_time_interval)
    if wp.photo_dist_interval > 0:
        return math.floor(segment_distance / wp.photo_dist_interval)
    return 0


def _route_stats(route, settings, stay_mode, return_speed):
    waypoints = route.waypoints
    if not waypoints:
        return RouteStats()

    default_speed = settings.speed_ms if settings.speed_ms > 0 else config.FALLBACK_SPEED_MS
    stay_factor = 2 if stay_mode == StayTimeMode.DOUBLE else 1

    home = route.home_point.point
    total_distance = distance(home, waypoints[0].point)
    total_seconds = total_distance / default_speed
    photos = 0
    videos = 0
    recording = False

    for i, wp in enumerate(waypoints):
        for action in wp.actions:
            if action.type == ActionType.STAY:
                total_seconds += action.param * stay_factor
            elif action.type == ActionType.PHOTO:
                photos += 1
            elif action.type == ActionType.START_RECORDING:
                recording = True
            elif action.type == ActionType.STOP_RECORDING and recording:
                videos += 1
                recording = False

        if i == len(waypoints) - 1:
            break
        segment = distance(wp.point, waypoints[i + 1].point)
        speed = wp.speed if wp.speed > 0 else default_speed
        segment_time = segment / speed
        total_distance += segment
        total_seconds += segment_time
        photos += _interval_photos(wp, segment_time, segment)

    if recording:
        videos += 1

    if settings.finish_action == FinishAction.RTH:
        leg = distance(waypoints[-1].point, home)
        total_distance += leg
        total_seconds += leg / return_speed

    return RouteStats(total_distance, total_seconds / 60, photos, videos)


def _configured_stay_mode():
    try:
        return StayTimeMode(config.STAY_TIME_MODE)
    except ValueError:
        logger.warning(f"Unknown STAY_TIME_MODE {config.STAY_TIME_MODE!r}; counting stays once")
        return StayTimeMode.SINGLE


def estimate_route_stats(routes, settings, route_id="all", stay_mode=None, return_speed=None):
    """Distance (m), time (min), photo and video counts summed over routes."""
    stay_mode = StayTimeMode(stay_mode) if stay_mode else _configured_stay_mode()
    return_speed = return_speed or config.RTH_SPEED_MS

    selected = routes if route_id == "all" else [r for r in routes if r.id == route_id]
    stats = RouteStats()
    for route in selected:
        stats = stats + _route_stats(route, settings, stay_mode, return_speed)
    return stats
