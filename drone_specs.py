"""
Camera and flight specifications for supported DJI models
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DronePreset:
    model: str
    fov_h: float  # degrees
    fov_v: float  # degrees
    sensor_width_mm: float
    sensor_height_mm: float
    image_width_px: int
    image_height_px: int
    focal_length_mm: float  # real, not 35mm equivalent
    notes: str = ""
    max_speed: float = 15.0  # m/s
    max_altitude: float = 120.0  # meters


DRONE_SPECS = {
    "DJI Mini 4 Pro / Mini 3 Pro": DronePreset(
        model="DJI Mini 4 Pro / Mini 3 Pro",
        fov_h=82.1, fov_v=49.4, notes='1/1.3" CMOS',
        sensor_width_mm=9.84, sensor_height_mm=7.38,
        image_width_px=8064, image_height_px=6048,  # 48MP
        focal_length_mm=6.72,  # 24mm eq
        max_speed=16.0,
    ),
    "DJI Mini 2 / SE": DronePreset(
        model="DJI Mini 2 / SE",
        fov_h=83.0, fov_v=48.0, notes='1/2.3" CMOS',
        sensor_width_mm=6.17, sensor_height_mm=4.55,
        image_width_px=4000, image_height_px=3000,
        focal_length_mm=4.49,
        max_speed=16.0,
    ),
    "DJI Air 3 (Wide)": DronePreset(
        model="DJI Air 3 (Wide)",
        fov_h=82.0, fov_v=49.0, notes='1/1.3" CMOS',
        sensor_width_mm=9.84, sensor_height_mm=7.38,
        image_width_px=8064, image_height_px=6048,
        focal_length_mm=6.72,
        max_speed=19.0,
    ),
    "DJI Air 3 (Medium Tele)": DronePreset(
        model="DJI Air 3 (Medium Tele)",
        fov_h=35.0, fov_v=20.0, notes='1/1.3" CMOS',
        sensor_width_mm=9.84, sensor_height_mm=7.38,
        image_width_px=8064, image_height_px=6048,
        focal_length_mm=19.6,  # 70mm eq
        max_speed=19.0,
    ),
    "DJI Air 2S": DronePreset(
        model="DJI Air 2S",
        fov_h=88.0, fov_v=56.5, notes='1" CMOS',
        sensor_width_mm=13.2, sensor_height_mm=8.8,
        image_width_px=5472, image_height_px=3648,
        focal_length_mm=8.8,
        max_speed=19.0,
    ),
    "DJI Mavic 3 (Hasselblad)": DronePreset(
        model="DJI Mavic 3 (Hasselblad)",
        fov_h=84.0, fov_v=70.2, notes="4/3 CMOS",
        sensor_width_mm=17.3, sensor_height_mm=13.0,
        image_width_px=5280, image_height_px=3956,
        focal_length_mm=12.29,
        max_speed=21.0,
    ),
    "DJI Mavic 3 Enterprise (Wide)": DronePreset(
        model="DJI Mavic 3 Enterprise (Wide)",
        fov_h=84.0, fov_v=64.0, notes="4/3 CMOS",
        sensor_width_mm=17.3, sensor_height_mm=13.0,
        image_width_px=5280, image_height_px=3956,
        focal_length_mm=12.29,
        max_speed=21.0,
    ),
    "DJI Phantom 4 Pro": DronePreset(
        model="DJI Phantom 4 Pro",
        fov_h=84.0, fov_v=56.0, notes='1" CMOS',
        sensor_width_mm=13.2, sensor_height_mm=8.8,
        image_width_px=5472, image_height_px=3648,
        focal_length_mm=8.8,
        max_speed=20.0,
        max_altitude=500.0,
    ),
    "DJI Matrice 30T (Wide)": DronePreset(
        model="DJI Matrice 30T (Wide)",
        fov_h=71.5, fov_v=53.7, notes='1/2" CMOS',
        sensor_width_mm=6.4, sensor_height_mm=4.8,
        image_width_px=4000, image_height_px=3000,
        focal_length_mm=4.5,
        max_speed=23.0,
        max_altitude=500.0,
    ),
    "DJI Matrice 350 (P1 35mm)": DronePreset(
        model="DJI Matrice 350 (P1 35mm)",
        fov_h=63.5, fov_v=42.3, notes="Full Frame",
        sensor_width_mm=35.9, sensor_height_mm=24.0,
        image_width_px=8192, image_height_px=5460,
        focal_length_mm=35.0,
        max_speed=23.0,
        max_altitude=500.0,
    ),
}

DEFAULT_MODEL = next(iter(DRONE_SPECS))


def get_preset(model):
    """Look up a preset by model name, falling back to the first entry."""
    return DRONE_SPECS.get(model, DRONE_SPECS[DEFAULT_MODEL])
