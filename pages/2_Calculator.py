import logging
import os
import sys

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from drone_specs import DRONE_SPECS
from photogrammetry import calculate_mapping_metrics
from sweep_calculator import sweep_from_angle, sweep_from_base

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

SHUTTER_SPEEDS = {
    "1/30": 1 / 30, "1/60": 1 / 60, "1/100": 1 / 100, "1/120": 1 / 120,
    "1/240": 1 / 240, "1/500": 1 / 500, "1/800": 1 / 800, "1/1000": 1 / 1000,
    "1/1250": 1 / 1250, "1/1600": 1 / 1600, "1/2000": 1 / 2000, "1/8000": 1 / 8000,
}


def sweep_figure(result):
    """Trapezoid of the ground sweep: far edge at the top, near edge below"""
    half_major, half_minor = result.base_major / 2, result.base_minor / 2
    length = result.frontal_distance
    fig = go.Figure(go.Scatter(
        x=[-half_major, half_major, half_minor, -half_minor, -half_major],
        y=[0, 0, length, length, 0],
        fill='toself',
        mode='lines',
        name='Sweep Area',
    ))
    fig.update_layout(
        title="Sweep Area",
        xaxis_title="Width (meters)",
        yaxis_title="Frontal distance (meters)",
        yaxis_autorange="reversed",
        xaxis_scaleanchor="y",
        xaxis_scaleratio=1,
    )
    return fig


st.set_page_config(page_title="Sweep & Photogrammetry Calculator", layout="wide")
st.title("🧮 Sweep & Photogrammetry Calculator")

preset_name = st.selectbox("camera preset", list(DRONE_SPECS.keys()))
preset = DRONE_SPECS[preset_name]
st.caption(preset.notes)

col1, col2 = st.columns(2)
with col1:
    altitude = st.number_input("altitude (m)", 1.0, 500.0, 80.0)
    speed_kmh = st.number_input("speed (km/h)", 0.0, 100.0, 25.0)
    mode = st.radio("solve from", ["gimbal angle", "far base width"])
    if mode == "gimbal angle":
        gimbal_angle = st.slider("gimbal angle (°)", -90.0, -1.0, -90.0)
    else:
        base_major = st.number_input("far base width (m)", 1.0, 5000.0, 100.0)
    frontal = st.number_input("frontal distance (m, 0 = geometric)", 0.0, 100000.0, 0.0)
    total = st.number_input("total survey distance (m, 0 = none)", 0.0, 1000000.0, 0.0)

with col2:
    forward = st.slider("front overlap (%)", 0, 95, 80)
    lateral = st.slider("side overlap (%)", 0, 95, 70)
    shutter_label = st.select_slider("shutter", list(SHUTTER_SPEEDS), value="1/1000")

speed_ms = speed_kmh / 3.6
frontal_distance = frontal or None
total_distance = total or None

try:
    if mode == "gimbal angle":
        sweep = sweep_from_angle(altitude, preset.fov_h, preset.fov_v, gimbal_angle, speed_ms,
                                 frontal_distance, total_distance)
    else:
        sweep = sweep_from_base(altitude, preset.fov_h, preset.fov_v, base_major, speed_ms,
                                frontal_distance, total_distance)
    metrics = calculate_mapping_metrics(altitude, speed_ms, preset, forward, lateral, SHUTTER_SPEEDS[shutter_label])
except (ValueError, ZeroDivisionError) as e:
    logger.error(f"Calculator error: {str(e)}")
    st.error(f"❌ Could not compute: {str(e)}")
    st.stop()

left, right = st.columns(2)
with left:
    st.subheader("Sweep Area")
    st.dataframe(pd.DataFrame([
        ("gimbal angle (°)", f"{sweep.gimbal_angle:.2f}"),
        ("near base (m)", f"{sweep.base_minor:.1f}"),
        ("far base (m)", f"{sweep.base_major:.1f}"),
        ("near distance (m)", f"{sweep.d_near:.1f}"),
        ("far distance (m)", f"{sweep.d_far:.1f}"),
        ("frontal time (min)", f"{sweep.frontal_time / 60:.2f}" if sweep.frontal_time >= 0 else "-"),
        ("total time (min)", f"{sweep.total_time / 60:.2f}" if sweep.total_time and sweep.total_time > 0 else "-"),
    ], columns=["metric", "value"]), use_container_width=True, hide_index=True)
    st.plotly_chart(sweep_figure(sweep), use_container_width=True)

with right:
    st.subheader("Mapping")
    st.dataframe(pd.DataFrame([
        ("footprint (m)", f"{metrics.footprint_width:.1f} × {metrics.footprint_height:.1f}"),
        ("GSD (cm/px)", f"{metrics.gsd:.2f}"),
        ("motion blur (cm)", f"{metrics.motion_blur_cm:.2f}"),
        ("lane spacing (m)", f"{metrics.lane_spacing:.1f}"),
        ("photo spacing (m)", f"{metrics.photo_interval_distance:.1f}"),
        ("photo interval (s)", f"{metrics.photo_interval_time:.1f}" if metrics.photo_interval_time >= 0 else "-"),
    ], columns=["metric", "value"]), use_container_width=True, hide_index=True)
    if metrics.is_sharp:
        st.success("✅ Motion blur is below one pixel of GSD.")
    else:
        st.warning("⚠️ Motion blur exceeds GSD; use a faster shutter or fly slower.")
