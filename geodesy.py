"""
Spherical-earth geodesy and the local tangent-plane projection.

All great-circle math uses a sphere of radius EARTH_RADIUS_M. The local
projection is equirectangular around a center point, which is accurate at
survey-area scale and keeps rotations and spacings metric at any latitude.
"""

import math

import numpy as np

from config import EARTH_RADIUS_M
from models import GeoPoint


def bearing(a, b):
    """Initial bearing from a to b in degrees, [0, 360)."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlon = math.radians(b.lng - a.lng)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def distance(a, b):
    """
    Calculate the great circle distance in meters between two points
    using the haversine formula
    """
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lng - a.lng)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def destination(origin, distance_m, bearing_deg):
    """Point reached travelling distance_m from origin on the given initial bearing."""
    angular = distance_m / EARTH_RADIUS_M
    theta = math.radians(bearing_deg)
    lat1 = math.radians(origin.lat)
    lon1 = math.radians(origin.lng)

    lat2 = math.asin(math.sin(lat1) * math.cos(angular) +
                     math.cos(lat1) * math.sin(angular) * math.cos(theta))
    lon2 = lon1 + math.atan2(math.sin(theta) * math.sin(angular) * math.cos(lat1),
                             math.cos(angular) - math.sin(lat1) * math.sin(lat2))
    return GeoPoint(math.degrees(lat2), math.degrees(lon2))


def path_length(points):
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def centroid(points):
    """Vertex average of a ring; a repeated closing vertex is ignored."""
    pts = list(points)
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return GeoPoint(sum(p.lat for p in pts) / len(pts), sum(p.lng for p in pts) / len(pts))


def to_local(point, center):
    """Project a point to (x, y) meters east/north of center."""
    x = math.radians(point.lng - center.lng) * math.cos(math.radians(center.lat)) * EARTH_RADIUS_M
    y = math.radians(point.lat - center.lat) * EARTH_RADIUS_M
    return x, y


def from_local(xy, center):
    x, y = xy
    lat = center.lat + math.degrees(y / EARTH_RADIUS_M)
    lng = center.lng + math.degrees(x / (EARTH_RADIUS_M * math.cos(math.radians(center.lat))))
    return GeoPoint(lat, lng)


def project_points(points, center):
    """Vectorised to_local: returns an (n, 2) array."""
    lats = np.array([p.lat for p in points], dtype=float)
    lngs = np.array([p.lng for p in points], dtype=float)
    x = np.radians(lngs - center.lng) * np.cos(np.radians(center.lat)) * EARTH_RADIUS_M
    y = np.radians(lats - center.lat) * EARTH_RADIUS_M
    return np.column_stack((x, y))


def unproject_points(xy, center):
    xy = np.asarray(xy, dtype=float).reshape(-1, 2)
    lats = center.lat + np.degrees(xy[:, 1] / EARTH_RADIUS_M)
    lngs = center.lng + np.degrees(xy[:, 0] / (EARTH_RADIUS_M * np.cos(np.radians(center.lat))))
    return [GeoPoint(float(lat), float(lng)) for lat, lng in zip(lats, lngs)]


def rotate_points(xy, angle_deg):
    """Rotate local (x, y) points clockwise about the origin, like a compass heading."""
    xy = np.asarray(xy, dtype=float).reshape(-1, 2)
    theta = np.radians(angle_deg)
    c, s = np.cos(theta), np.sin(theta)
    rotation = np.array([[c, -s], [s, c]])
    return xy @ rotation
