"""
Route assembly and editing.

Every function returns new Route/Waypoint objects and leaves its inputs
untouched. Edits on a locked route return the route unchanged.
"""

import logging
import uuid
from dataclasses import replace

import config
from flight_calculator import generate_grid_path
from geodesy import bearing
from models import Action, FlightMode, HeadingMode, HomePoint, Route, Waypoint

logger = logging.getLogger(__name__)

NADIR = -90.0


def generate_id():
    return uuid.uuid4().hex


def default_home_point(waypoints):
    first = waypoints[0]
    return HomePoint(first.latitude - config.HOME_OFFSET_DEG, first.longitude)


def update_waypoints_with_bearings(waypoints):
    """Point each waypoint at the next one; the last keeps the final leg's bearing."""
    if len(waypoints) <= 1:
        return list(waypoints)

    updated = []
    for i, wp in enumerate(waypoints):
        if i < len(waypoints) - 1:
            heading = bearing(wp.point, waypoints[i + 1].point)
        else:
            heading = bearing(waypoints[i - 1].point, wp.point)
        updated.append(replace(wp, heading=round(heading, 2)))
    return updated


def apply_heading_mode(waypoints, settings):
    if settings.heading_mode == HeadingMode.AUTO_BEARING:
        return update_waypoints_with_bearings(waypoints)
    if settings.heading_mode == HeadingMode.MANUAL:
        return [replace(wp, heading=settings.heading_manual) for wp in waypoints]
    return [replace(wp, heading=0.0) for wp in waypoints]


def build_waypoints(coords, settings, mapping=False, template=None):
    """Turn ordered points into waypoints with ids 1..n carrying the current settings."""
    base = template or Waypoint(id=0, latitude=0.0, longitude=0.0)
    action = Action.photo() if mapping else settings.action1
    pitch = NADIR if mapping else settings.gimbal_pitch
    waypoints = [
        replace(
            base,
            id=idx + 1,
            latitude=p.lat,
            longitude=p.lng,
            altitude=settings.altitude,
            curve_size=settings.curve_size,
            gimbal_mode=settings.gimbal_mode,
            gimbal_pitch=pitch,
            action1=action,
            altitude_mode=settings.altitude_mode,
            speed=round(settings.speed_ms, 2),
        )
        for idx, p in enumerate(coords)
    ]
    return apply_heading_mode(waypoints, settings)


def create_route(coords, settings, name):
    """Create a route from a drawn path, or from a drawn polygon in mapping mode."""
    coords = list(coords)
    if not coords:
        raise ValueError("A route needs at least one point")
    mapping = settings.flight_mode == FlightMode.MAPPING
    path = generate_grid_path(coords, settings, 0.0) if mapping else coords
    waypoints = build_waypoints(path, settings, mapping=mapping)

    route = Route(
        id=generate_id(),
        name=name,
        waypoints=waypoints,
        home_point=default_home_point(waypoints),
        grid_rotation=0.0 if mapping else None,
        original_polygon=coords if mapping else None,
    )
    logger.info(f"Created route {name!r} with {len(waypoints)} waypoints")
    return route


def regenerate(route, settings, angle=None):
    """
    Rebuild a coverage route's grid at an absolute rotation angle.

    The grid is always derived from the route's original polygon, never from
    its current waypoints, so repeated rotations cannot degrade the shape.
    Routes without a source polygon only record the new angle.
    """
    if route.locked:
        logger.info(f"Route {route.name!r} is locked; skipping regenerate")
        return route

    angle = route.grid_rotation if angle is None else angle
    if not route.is_coverage:
        return replace(route, grid_rotation=angle)

    path = generate_grid_path(route.original_polygon, settings, angle or 0.0)
    template = route.waypoints[0] if route.waypoints else None
    waypoints = build_waypoints(path, settings, mapping=True, template=template)
    return replace(route, waypoints=waypoints, grid_rotation=angle)


def apply_settings_to_routes(routes, settings):
    """Bulk-apply flight settings. Returns (routes, updated_count, locked_count)."""
    updated_routes = []
    updated = locked = 0
    mapping = settings.flight_mode == FlightMode.MAPPING

    for route in routes:
        if route.locked:
            locked += 1
            updated_routes.append(route)
            continue
        updated += 1

        if mapping and route.is_coverage:
            route = regenerate(route, settings)

        waypoints = [
            replace(
                wp,
                altitude=settings.altitude,
                speed=round(settings.speed_ms, 2),
                curve_size=settings.curve_size,
                gimbal_mode=settings.gimbal_mode,
                gimbal_pitch=NADIR if mapping else settings.gimbal_pitch,
                altitude_mode=settings.altitude_mode,
                action1=Action.photo() if mapping else settings.action1,
            )
            for wp in route.waypoints
        ]
        updated_routes.append(replace(route, waypoints=apply_heading_mode(waypoints, settings)))

    if locked:
        logger.info(f"Settings applied to {updated} routes ({locked} locked skipped)")
    return updated_routes, updated, locked


def toggle_lock(route):
    return replace(route, locked=not route.locked)


def _refresh_headings(waypoints, settings):
    if settings is not None and settings.heading_mode == HeadingMode.AUTO_BEARING:
        return update_waypoints_with_bearings(waypoints)
    return waypoints


def reorder_waypoint(route, wp_id, direction, settings=None):
    """Swap a waypoint with its neighbour. Ids travel with the waypoints."""
    if route.locked:
        return route
    index = next((i for i, wp in enumerate(route.waypoints) if wp.id == wp_id), -1)
    if index == -1:
        return route

    waypoints = list(route.waypoints)
    if direction == "up" and index > 0:
        other = index - 1
    elif direction == "down" and index < len(waypoints) - 1:
        other = index + 1
    else:
        return route
    waypoints[index], waypoints[other] = waypoints[other], waypoints[index]
    return replace(route, waypoints=_refresh_headings(waypoints, settings))


def delete_waypoint(route, wp_id, settings=None):
    if route.locked:
        return route
    waypoints = [wp for wp in route.waypoints if wp.id != wp_id]
    return replace(route, waypoints=_refresh_headings(waypoints, settings))


def move_waypoint(route, wp_id, lat, lng, settings=None):
    if route.locked:
        return route
    waypoints = [
        replace(wp, latitude=lat, longitude=lng) if wp.id == wp_id else wp
        for wp in route.waypoints
    ]
    return replace(route, waypoints=_refresh_headings(waypoints, settings))


def update_waypoint(route, wp_id, **fields):
    if route.locked:
        return route
    waypoints = [replace(wp, **fields) if wp.id == wp_id else wp for wp in route.waypoints]
    return replace(route, waypoints=waypoints)


def set_home_point(route, lat, lng):
    return replace(route, home_point=HomePoint(lat, lng))
