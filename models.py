"""
Mission data model: points, waypoint actions, waypoints, routes and flight settings
"""

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


class ActionType(IntEnum):
    # Values are the Litchi action codes
    NONE = -1
    STAY = 0
    PHOTO = 1
    START_RECORDING = 2
    STOP_RECORDING = 3
    ROTATE = 5


@dataclass(frozen=True)
class Action:
    """A waypoint action. `param` is seconds for STAY and degrees for ROTATE."""
    type: ActionType = ActionType.NONE
    param: float = 0.0

    @classmethod
    def none(cls):
        return cls()

    @classmethod
    def stay(cls, seconds):
        return cls(ActionType.STAY, float(seconds))

    @classmethod
    def photo(cls):
        return cls(ActionType.PHOTO)

    @classmethod
    def start_recording(cls):
        return cls(ActionType.START_RECORDING)

    @classmethod
    def stop_recording(cls):
        return cls(ActionType.STOP_RECORDING)

    @classmethod
    def rotate(cls, degrees):
        return cls(ActionType.ROTATE, float(degrees))

    @classmethod
    def from_code(cls, code, param=0.0):
        try:
            action_type = ActionType(int(code))
        except ValueError:
            raise ValueError(f"Unknown waypoint action code: {code}")
        if action_type in (ActionType.STAY, ActionType.ROTATE):
            return cls(action_type, float(param))
        return cls(action_type)


class HeadingMode(str, Enum):
    AUTO_PATH = "auto_path"
    AUTO_BEARING = "auto_bearing"
    MANUAL = "manual"


class GimbalMode(IntEnum):
    DISABLED = 0
    FOCUS_POI = 1
    INTERPOLATE = 2


class AltitudeMode(IntEnum):
    AGL = 0
    MSL = 1


class FinishAction(IntEnum):
    NONE = 0
    RTH = 1
    LAND = 2
    BACK_TO_START = 3
    REVERSE = 4


class FlightMode(str, Enum):
    STANDARD = "standard"
    MAPPING = "mapping"


class CoveragePattern(str, Enum):
    PARALLEL = "parallel"
    CROSSHATCH = "crosshatch"


@dataclass
class Waypoint:
    id: int
    latitude: float
    longitude: float
    altitude: float = 30.0
    heading: float = 0.0
    curve_size: float = 0.0
    rotation_dir: int = 0
    gimbal_mode: GimbalMode = GimbalMode.DISABLED
    gimbal_pitch: float = 0.0
    action1: Action = field(default_factory=Action)
    action2: Action = field(default_factory=Action)
    altitude_mode: AltitudeMode = AltitudeMode.MSL
    speed: float = 0.0
    poi_latitude: float = 0.0
    poi_longitude: float = 0.0
    poi_altitude: float = 0.0
    poi_altitude_mode: AltitudeMode = AltitudeMode.AGL
    photo_time_interval: float = -1.0
    photo_dist_interval: float = -1.0

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    @property
    def actions(self) -> Tuple[Action, Action]:
        return self.action1, self.action2

    def with_photo_interval(self, seconds=-1.0, meters=-1.0):
        """Return a copy with one photo trigger enabled; the other is disabled."""
        if seconds > 0 and meters > 0:
            raise ValueError("Photo time and distance intervals are mutually exclusive")
        return replace(
            self,
            photo_time_interval=seconds if seconds > 0 else -1.0,
            photo_dist_interval=meters if meters > 0 else -1.0,
        )


@dataclass
class HomePoint:
    lat: float
    lng: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


@dataclass
class Route:
    id: str
    name: str
    waypoints: List[Waypoint]
    home_point: HomePoint
    locked: bool = False
    color: str = "#ff5722"
    grid_rotation: Optional[float] = None
    original_polygon: Optional[Tuple[GeoPoint, ...]] = None

    def __post_init__(self):
        ids = [wp.id for wp in self.waypoints]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Route {self.name!r} has duplicate waypoint ids")

    def __setattr__(self, name, value):
        if name == "original_polygon":
            if getattr(self, "original_polygon", None) is not None:
                raise AttributeError("original_polygon is write-once for a coverage route")
            if value is None:
                return super().__setattr__(name, value)
            value = tuple(GeoPoint(p.lat, p.lng) for p in value)
            if len(value) < 3:
                raise ValueError("A coverage polygon needs at least 3 vertices")
        super().__setattr__(name, value)

    @property
    def is_coverage(self) -> bool:
        return self.original_polygon is not None

    def next_waypoint_id(self) -> int:
        return max((wp.id for wp in self.waypoints), default=0) + 1


@dataclass
class FlightSettings:
    altitude: float = 30.0
    speed_kmh: float = 15.0
    heading_mode: HeadingMode = HeadingMode.AUTO_PATH
    heading_manual: float = 0.0
    gimbal_pitch: float = -15.0
    gimbal_mode: GimbalMode = GimbalMode.INTERPOLATE
    action1: Action = field(default_factory=Action)
    altitude_mode: AltitudeMode = AltitudeMode.MSL
    curve_size: float = 0.2
    finish_action: FinishAction = FinishAction.RTH
    flight_mode: FlightMode = FlightMode.STANDARD
    pattern: CoveragePattern = CoveragePattern.PARALLEL
    photo_time_interval: float = -1.0
    forward_overlap: float = 0.0
    lateral_overlap: float = 0.0
    drone_model: str = "DJI Mini 4 Pro / Mini 3 Pro"

    @property
    def speed_ms(self) -> float:
        return self.speed_kmh / 3.6
