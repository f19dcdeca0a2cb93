import logging
from datetime import datetime
from io import BytesIO

import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

import config
from drone_specs import DRONE_SPECS
from flight_calculator import estimate_route_stats, validate_parameters
from map_utils import BASEMAPS, calculate_area_bounds, create_map, drawing_to_points, search_location
from mission_export import create_export_zip, create_kmz, dataframe_to_waypoints, route_to_dataframe
from models import (
    Action, ActionType, CoveragePattern, FinishAction, FlightMode, FlightSettings, HeadingMode, Route,
)
from photogrammetry import calculate_mapping_metrics
from route_manager import (
    apply_settings_to_routes, create_route, default_home_point, delete_waypoint, generate_id, regenerate,
    reorder_waypoint, toggle_lock,
)
from utils import create_flight_path_plot

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ACTION_LABELS = {
    "None": ActionType.NONE,
    "Take Picture": ActionType.PHOTO,
    "Start Recording": ActionType.START_RECORDING,
    "Stop Recording": ActionType.STOP_RECORDING,
}

st.set_page_config(page_title="Flight Mission Planner", layout="wide")
st.markdown("""
<style>
.block-container {
    padding-top: 0.5rem !important;
    padding-bottom: 1rem !important;
}
.stButton>button {
    background-color: #4c8bf5;
    color: white;
    border-radius: 8px;
    border: none;
    font-weight: 600;
}
.stButton>button:hover {
    background-color: #1a73e8;
}
#MainMenu {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

if "routes" not in st.session_state:
    st.session_state.update({
        "routes": [],
        "map_center": [37.7749, -122.4194],
        "last_drawing": None,
    })


def settings_form():
    with st.expander("🛠️ Flight Settings", expanded=True):
        drone_model = st.selectbox("drone model", list(DRONE_SPECS.keys()))
        altitude = st.number_input("altitude (m)", 5.0, 500.0, config.DEFAULT_ALTITUDE_M)
        speed_kmh = st.number_input("speed (km/h)", 1.0, 80.0, config.DEFAULT_SPEED_KMH)

        flight_mode = st.radio("mode", [FlightMode.STANDARD, FlightMode.MAPPING],
                               format_func=lambda m: "Waypoint path" if m == FlightMode.STANDARD else "Area mapping")
        pattern = CoveragePattern.PARALLEL
        forward = lateral = 0.0
        if flight_mode == FlightMode.MAPPING:
            pattern = st.radio("grid pattern", [CoveragePattern.PARALLEL, CoveragePattern.CROSSHATCH],
                               format_func=lambda p: p.value.title())
            forward = st.slider("front overlap (%)", 0, 95, 80)
            lateral = st.slider("side overlap (%)", 0, 95, 70)

        heading_mode = st.selectbox("heading", list(HeadingMode), format_func=lambda h: h.value.replace("_", " "))
        heading_manual = st.number_input("manual heading (°)", 0.0, 359.9, 0.0) \
            if heading_mode == HeadingMode.MANUAL else 0.0
        gimbal_pitch = st.slider("gimbal pitch (°)", -90, 0, -15)
        action_label = st.selectbox("waypoint action", list(ACTION_LABELS))
        finish_action = st.selectbox("finish action", list(FinishAction),
                                     index=int(FinishAction.RTH),
                                     format_func=lambda f: f.name.replace("_", " ").title())

    return FlightSettings(
        altitude=altitude,
        speed_kmh=speed_kmh,
        heading_mode=heading_mode,
        heading_manual=heading_manual,
        gimbal_pitch=gimbal_pitch,
        action1=Action.from_code(ACTION_LABELS[action_label]),
        finish_action=finish_action,
        flight_mode=flight_mode,
        pattern=pattern,
        forward_overlap=forward,
        lateral_overlap=lateral,
        drone_model=drone_model,
    )


def import_routes(files):
    for file in files:
        try:
            waypoints = dataframe_to_waypoints(pd.read_csv(file))
        except (ValueError, pd.errors.ParserError) as e:
            logger.error(f"Error importing {file.name}: {str(e)}")
            st.error(f"❌ Could not import {file.name}: {str(e)}")
            continue
        if not waypoints:
            st.warning(f"No valid waypoints in {file.name}.")
            continue
        st.session_state.routes.append(Route(
            id=generate_id(),
            name=file.name.rsplit(".", 1)[0],
            waypoints=waypoints,
            home_point=default_home_point(waypoints),
            color="#3388ff",
        ))
        logger.info(f"Imported {len(waypoints)} waypoints from {file.name}")


settings = settings_form()
preset = DRONE_SPECS[settings.drone_model]

planner_tab, routes_tab = st.tabs(["📍 Flight Planner", "🗂️ Routes"])

with planner_tab:
    left, right = st.columns([2, 1], gap="large")

    with left:
        query = st.text_input("search location", "")
        if query:
            lat, lon = search_location(query)
            if lat is not None:
                st.session_state.map_center = [lat, lon]
        basemap = st.selectbox("basemap", list(BASEMAPS))

        try:
            m = create_map(st.session_state.map_center, basemap=basemap,
                           routes=st.session_state.routes,
                           mapping=settings.flight_mode == FlightMode.MAPPING)
            map_output = st_folium(m, height=550, returned_objects=["last_active_drawing"])
        except Exception as e:
            logger.error(f"Error loading map: {str(e)}")
            st.error(f"Error loading map: {str(e)}")
            map_output = {}

        if st.button("🛫 Create Route From Drawing"):
            errors = validate_parameters(settings, preset)
            drawing = (map_output or {}).get("last_active_drawing")
            if errors:
                for e in errors:
                    st.error(e)
            elif not drawing:
                st.warning("Please draw a path or area first.")
            else:
                points = drawing_to_points(drawing.get("geometry"))
                bounds = calculate_area_bounds(points)
                if bounds and settings.flight_mode == FlightMode.MAPPING:
                    st.caption(f"Area ≈ {bounds['width']:.0f} m × {bounds['height']:.0f} m")
                try:
                    route = create_route(points, settings, f"Drawn Route {len(st.session_state.routes) + 1}")
                    st.session_state.routes.append(route)
                    st.success(f"✅ Route created with {len(route.waypoints)} waypoints")
                except ValueError as e:
                    logger.error(f"Error generating route: {str(e)}")
                    st.error(f"❌ Error generating route: {str(e)}")

    with right:
        st.subheader("📊 Mission Summary")
        stats = estimate_route_stats(st.session_state.routes, settings)
        st.metric("distance", f"{stats.total_distance / 1000:.2f} km")
        st.metric("duration", f"{stats.total_time_minutes:.1f} min")
        st.metric("photos / clips", f"{stats.photo_count} / {stats.video_count}")

        if settings.flight_mode == FlightMode.MAPPING:
            metrics = calculate_mapping_metrics(settings.altitude, settings.speed_ms, preset,
                                                settings.forward_overlap, settings.lateral_overlap, 1 / 1000)
            st.info(
                f"GSD {metrics.gsd:.2f} cm/px · lanes every {metrics.lane_spacing:.1f} m · "
                f"photo every {metrics.photo_interval_distance:.1f} m ({metrics.photo_interval_time:.1f} s)"
            )

        if st.button("♻️ Apply Settings To All Routes"):
            routes, updated, locked = apply_settings_to_routes(st.session_state.routes, settings)
            st.session_state.routes = routes
            if locked:
                st.info(f"Settings applied to {updated} routes. ({locked} locked skipped)")
            else:
                st.success(f"Settings applied to all {updated} routes!")

with routes_tab:
    uploads = st.file_uploader("import Litchi CSV", type=["csv"], accept_multiple_files=True)
    if uploads and st.button("⬆️ Import"):
        import_routes(uploads)

    if st.session_state.routes:
        export_format = st.radio("export format", ["Both", "CSV", "KMZ"], horizontal=True)
        if st.button("📦 Export All Routes"):
            try:
                zip_path = create_export_zip(st.session_state.routes, export_format)
            except OSError as e:
                logger.error(f"Export failed: {str(e)}")
                st.error(f"❌ Export failed: {str(e)}")
            else:
                with open(zip_path, "rb") as f:
                    st.download_button("⬇️ Download ZIP", data=f.read(),
                                       file_name=zip_path.rsplit("/", 1)[-1], mime="application/zip")

    for idx, route in enumerate(list(st.session_state.routes)):
        with st.expander(f"{'🔒 ' if route.locked else ''}{route.name} · {len(route.waypoints)} waypoints"):
            route_stats = estimate_route_stats([route], settings)
            st.caption(f"{route_stats.total_distance:.0f} m · {route_stats.total_time_minutes:.1f} min · "
                       f"{route_stats.photo_count} photos")

            c1, c2 = st.columns(2)
            with c1:
                if st.button("🔓 Unlock" if route.locked else "🔒 Lock", key=f"lock_{route.id}"):
                    st.session_state.routes[idx] = toggle_lock(route)
                    st.rerun()
            with c2:
                if st.button("🗑️ Delete", key=f"delete_{route.id}"):
                    st.session_state.routes.pop(idx)
                    st.rerun()

            if route.is_coverage and not route.locked:
                angle = st.slider("grid rotation (°)", 0, 359, int(route.grid_rotation or 0),
                                  key=f"rotation_{route.id}")
                if angle != int(route.grid_rotation or 0):
                    st.session_state.routes[idx] = regenerate(route, settings, angle)
                    st.rerun()

            if route.waypoints and not route.locked:
                wp_id = st.selectbox("waypoint", [wp.id for wp in route.waypoints], key=f"wp_{route.id}")
                e1, e2, e3 = st.columns(3)
                edited = route
                if e1.button("⬆️ Up", key=f"up_{route.id}"):
                    edited = reorder_waypoint(route, wp_id, "up", settings)
                if e2.button("⬇️ Down", key=f"down_{route.id}"):
                    edited = reorder_waypoint(route, wp_id, "down", settings)
                if e3.button("✖️ Remove", key=f"remove_{route.id}"):
                    edited = delete_waypoint(route, wp_id, settings)
                if edited is not route:
                    st.session_state.routes[idx] = edited
                    st.rerun()

            st.plotly_chart(create_flight_path_plot([wp.point for wp in route.waypoints],
                                                    route.original_polygon),
                            use_container_width=True, key=f"plot_{route.id}")

            df = route_to_dataframe(route)
            st.dataframe(df, use_container_width=True)

            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            csv_buff = BytesIO()
            df.to_csv(csv_buff, index=False)
            csv_buff.seek(0)
            kmz_buff = BytesIO()
            create_kmz(route, kmz_buff)
            kmz_buff.seek(0)

            dl1, dl2 = st.columns(2)
            with dl1:
                st.download_button("⬇️ Litchi CSV", data=csv_buff, file_name=f"{route.name}_{ts}.csv",
                                   mime="text/csv", key=f"csv_{route.id}")
            with dl2:
                st.download_button("⬇️ KMZ", data=kmz_buff, file_name=f"{route.name}_{ts}.kmz",
                                   mime="application/vnd.google-earth.kmz", key=f"kmz_{route.id}")
