import logging

import folium
import streamlit as st
from folium.plugins import Draw
from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from geodesy import destination, distance
from models import GeoPoint

logger = logging.getLogger(__name__)

CIRCLE_SEGMENTS = 36

BASEMAPS = {
    "OpenStreetMap": "OpenStreetMap",
    "Esri World Imagery": "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
    "Google Satellite": "https://mt1.google.com/vt/lyrs=s&x={x}&y={y}&z={z}",
}


def search_location(query):
    """Search for a location using Nominatim geocoding service"""
    try:
        geolocator = Nominatim(user_agent="flight_mission_planner", timeout=5)
        location = geolocator.geocode(query)
        if location:
            return location.latitude, location.longitude
        return None, None
    except (GeocoderTimedOut, GeocoderServiceError) as e:
        logger.warning(f"Location search failed for {query!r}: {e}")
        st.warning(f"Location search error: {str(e)}. Using current map location.")
        return None, None


def create_map(center, zoom=16, basemap="OpenStreetMap", routes=(), mapping=False):
    """Folium map with drawing controls and the current routes overlaid."""
    tiles = BASEMAPS.get(basemap, "OpenStreetMap")
    m = folium.Map(location=center, zoom_start=zoom, tiles=None)
    folium.TileLayer(tiles, attr="Basemap provided by respective service", name=basemap).add_to(m)

    Draw(
        draw_options={
            "polyline": not mapping,
            "rectangle": mapping,
            "polygon": mapping,
            "circle": mapping,
            "marker": False,
            "circlemarker": False,
        },
        edit_options={"edit": False},
    ).add_to(m)

    for route in routes:
        points = [(wp.latitude, wp.longitude) for wp in route.waypoints]
        if not points:
            continue
        folium.PolyLine(
            points,
            weight=2,
            color="#888888" if route.locked else route.color,
            dash_array="5, 10" if route.locked else None,
            popup=route.name,
        ).add_to(m)
        folium.Marker(
            location=[route.home_point.lat, route.home_point.lng],
            tooltip=f"{route.name} home",
            icon=folium.Icon(color="green", icon="home"),
        ).add_to(m)
        if route.original_polygon:
            folium.Polygon(
                [(p.lat, p.lng) for p in route.original_polygon],
                color=route.color,
                fill=True,
                fill_opacity=0.1,
            ).add_to(m)

    folium.LayerControl().add_to(m)
    return m


def circle_to_polygon(center, radius_m, segments=CIRCLE_SEGMENTS):
    return [destination(center, radius_m, 360.0 * i / segments) for i in range(segments)]


def drawing_to_points(geometry):
    """
    Convert a GeoJSON geometry from the drawing layer to an ordered point list.

    Polygons lose their repeated closing vertex; circles (a Point with a
    radius) become a regular polygon. Unsupported geometries give [].
    """
    if not geometry:
        return []
    kind = geometry.get("type")
    coords = geometry.get("coordinates") or []

    if kind == "Polygon" and coords:
        points = [GeoPoint(c[1], c[0]) for c in coords[0]]
        if len(points) > 1 and points[0] == points[-1]:
            points = points[:-1]
        return points
    if kind == "LineString":
        return [GeoPoint(c[1], c[0]) for c in coords]
    if kind == "Point" and "radius" in geometry:
        return circle_to_polygon(GeoPoint(coords[1], coords[0]), float(geometry["radius"]))
    return []


def calculate_area_bounds(points):
    """Bounds, center and approximate width/height (meters) of a point set"""
    if not points:
        return None
    lats = [p.lat for p in points]
    lons = [p.lng for p in points]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    return {
        "min_lat": min_lat,
        "max_lat": max_lat,
        "min_lon": min_lon,
        "max_lon": max_lon,
        "center_lat": (min_lat + max_lat) / 2,
        "center_lon": (min_lon + max_lon) / 2,
        "width": distance(GeoPoint(min_lat, min_lon), GeoPoint(min_lat, max_lon)),
        "height": distance(GeoPoint(min_lat, min_lon), GeoPoint(max_lat, min_lon)),
    }
