# mission_export.py
import logging
import os
import re
import zipfile
from datetime import datetime

import pandas as pd
from simplekml import Kml

import config
from models import Action, ActionType, AltitudeMode, GimbalMode, Waypoint

logger = logging.getLogger(__name__)

LITCHI_HEADER = [
    "latitude", "longitude", "altitude(m)", "heading(deg)", "curvesize(m)",
    "rotationdir", "gimbalmode", "gimbalpitchangle", "actiontype1", "actionparam1",
    "actiontype2", "actionparam2", "altitudemode", "speed(m/s)", "poi_latitude",
    "poi_longitude", "poi_altitude(m)", "poi_altitudemode",
    "photo_timeinterval", "photo_distinterval",
]


def _action_param_out(action):
    # Litchi stores stay durations in milliseconds
    if action.type == ActionType.STAY:
        return int(round(action.param * 1000))
    return action.param


def _action_in(code, param):
    code = int(code)
    if code == ActionType.STAY:
        return Action.stay(float(param) / 1000)
    try:
        return Action.from_code(code, param)
    except ValueError:
        logger.warning(f"Unsupported Litchi action code {code}; imported as no action")
        return Action.none()


def _mode_in(enum_cls, value, default):
    try:
        return enum_cls(int(value))
    except ValueError:
        logger.warning(f"Unsupported {enum_cls.__name__} value {value}; using {default.name}")
        return default


def route_to_dataframe(route):
    rows = [
        {
            "latitude": wp.latitude,
            "longitude": wp.longitude,
            "altitude(m)": wp.altitude,
            "heading(deg)": wp.heading,
            "curvesize(m)": wp.curve_size,
            "rotationdir": wp.rotation_dir,
            "gimbalmode": int(wp.gimbal_mode),
            "gimbalpitchangle": wp.gimbal_pitch,
            "actiontype1": int(wp.action1.type),
            "actionparam1": _action_param_out(wp.action1),
            "actiontype2": int(wp.action2.type),
            "actionparam2": _action_param_out(wp.action2),
            "altitudemode": int(wp.altitude_mode),
            "speed(m/s)": wp.speed,
            "poi_latitude": wp.poi_latitude,
            "poi_longitude": wp.poi_longitude,
            "poi_altitude(m)": wp.poi_altitude,
            "poi_altitudemode": int(wp.poi_altitude_mode),
            "photo_timeinterval": wp.photo_time_interval,
            "photo_distinterval": wp.photo_dist_interval,
        }
        for wp in route.waypoints
    ]
    return pd.DataFrame(rows, columns=LITCHI_HEADER)


def _normalise(name):
    return re.sub(r"[^a-z0-9]", "", str(name).lower())


def dataframe_to_waypoints(df):
    """Read waypoints from a Litchi-style table, tolerating header spelling."""
    columns = {_normalise(c): c for c in df.columns}

    def column(name, default):
        key = _normalise(name)
        if key in columns:
            return df[columns[key]]
        return pd.Series([default] * len(df), index=df.index)

    lat = pd.to_numeric(column("latitude", None), errors="coerce")
    lon = pd.to_numeric(column("longitude", None), errors="coerce")
    valid = lat.notna() & lon.notna()

    def numbers(name, default):
        return pd.to_numeric(column(name, default), errors="coerce").fillna(default)

    table = pd.DataFrame({
        "altitude": numbers("altitude(m)", config.DEFAULT_ALTITUDE_M),
        "heading": numbers("heading(deg)", 0),
        "curve_size": numbers("curvesize(m)", 0),
        "rotation_dir": numbers("rotationdir", 0),
        "gimbal_mode": numbers("gimbalmode", 0),
        "gimbal_pitch": numbers("gimbalpitchangle", 0),
        "action_type1": numbers("actiontype1", -1),
        "action_param1": numbers("actionparam1", 0),
        "action_type2": numbers("actiontype2", -1),
        "action_param2": numbers("actionparam2", 0),
        "altitude_mode": numbers("altitudemode", 1),
        "speed": numbers("speed(m/s)", 0),
        "poi_latitude": numbers("poi_latitude", 0),
        "poi_longitude": numbers("poi_longitude", 0),
        "poi_altitude": numbers("poi_altitude(m)", 0),
        "poi_altitude_mode": numbers("poi_altitudemode", 0),
        "photo_time_interval": numbers("photo_timeinterval", -1),
        "photo_dist_interval": numbers("photo_distinterval", -1),
    })[valid]

    waypoints = []
    for idx, (i, row) in enumerate(table.iterrows()):
        waypoints.append(Waypoint(
            id=idx + 1,
            latitude=float(lat[i]),
            longitude=float(lon[i]),
            altitude=float(row["altitude"]),
            heading=float(row["heading"]),
            curve_size=float(row["curve_size"]),
            rotation_dir=int(row["rotation_dir"]),
            gimbal_mode=_mode_in(GimbalMode, row["gimbal_mode"], GimbalMode.DISABLED),
            gimbal_pitch=float(row["gimbal_pitch"]),
            action1=_action_in(row["action_type1"], row["action_param1"]),
            action2=_action_in(row["action_type2"], row["action_param2"]),
            altitude_mode=_mode_in(AltitudeMode, row["altitude_mode"], AltitudeMode.MSL),
            speed=float(row["speed"]),
            poi_latitude=float(row["poi_latitude"]),
            poi_longitude=float(row["poi_longitude"]),
            poi_altitude=float(row["poi_altitude"]),
            poi_altitude_mode=_mode_in(AltitudeMode, row["poi_altitude_mode"], AltitudeMode.AGL),
            photo_time_interval=float(row["photo_time_interval"]),
            photo_dist_interval=float(row["photo_dist_interval"]),
        ))
    return waypoints


def create_kmz(route, target):
    """Write a route as KMZ (waypoint pins plus the flight line) to a path or buffer."""
    kml = Kml(name=route.name)
    for wp in route.waypoints:
        kml.newpoint(name=f"WP {wp.id}", coords=[(wp.longitude, wp.latitude, wp.altitude)])
    line = kml.newlinestring(
        name=f"{route.name} Path",
        coords=[(wp.longitude, wp.latitude, wp.altitude) for wp in route.waypoints],
    )
    line.tessellate = 1
    kml.savekmz(target)
    return target


def _safe_name(name):
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "route"


def create_export_zip(routes, export_format="Both"):
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    export_name = f"flight_plan_{timestamp}"
    export_dir = os.path.join(config.EXPORT_DIR, export_name)
    os.makedirs(export_dir, exist_ok=True)

    for route in routes:
        base = _safe_name(route.name)
        if export_format in ["CSV", "Both"]:
            csv_path = os.path.join(export_dir, f"{base}_litchi.csv")
            route_to_dataframe(route).to_csv(csv_path, index=False)

        if export_format in ["KMZ", "Both"]:
            create_kmz(route, os.path.join(export_dir, f"{base}.kmz"))

    zip_path = f"{export_dir}.zip"
    with zipfile.ZipFile(zip_path, "w") as zipf:
        for root, _, files in os.walk(export_dir):
            for file in files:
                full_path = os.path.join(root, file)
                zipf.write(full_path, arcname=os.path.relpath(full_path, export_dir))

    logger.info(f"Exported {len(routes)} routes to {zip_path}")
    return zip_path
