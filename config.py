import os

from dotenv import load_dotenv

load_dotenv()

# ─────────────── Engine constants ───────────────
EARTH_RADIUS_M = 6371000.0
MIN_LANE_SPACING_M = 0.1

# ─────────────── Config from .env ───────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
RTH_SPEED_MS = float(os.getenv("RTH_SPEED_MS", 10))
FALLBACK_SPEED_MS = float(os.getenv("FALLBACK_SPEED_MS", 5))
MAX_SCAN_LINES = int(os.getenv("MAX_SCAN_LINES", 5000))
STAY_TIME_MODE = os.getenv("STAY_TIME_MODE", "single").lower()
EXPORT_DIR = os.getenv("EXPORT_DIR", "exports")

DEFAULT_ALTITUDE_M = float(os.getenv("DEFAULT_ALTITUDE_M", 30))
DEFAULT_SPEED_KMH = float(os.getenv("DEFAULT_SPEED_KMH", 15))
HOME_OFFSET_DEG = float(os.getenv("HOME_OFFSET_DEG", 0.0001))
