"""Dataclasses describing telemetry input and derived tactical values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

import polyline

from .utils import format_duration

LatLon = Tuple[float, float]


class Tack(str, Enum):
    PORT = "port"
    STARBOARD = "starboard"


class ManeuverKind(str, Enum):
    TACK = "tack"
    GYBE = "gybe"


class ShiftKind(str, Enum):
    LIFT = "lift"
    HEADER = "header"


class FavoredEnd(str, Enum):
    PIN = "pin"
    BOAT = "boat"
    NEUTRAL = "neutral"


class WindPatternKind(str, Enum):
    STABLE = "stable"
    OSCILLATING = "oscillating"
    PERSISTENT_RIGHT = "persistent_right"
    PERSISTENT_LEFT = "persistent_left"
    UNSTABLE = "unstable"


class ShiftPrediction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    STABLE = "stable"


@dataclass(frozen=True, slots=True)
class TelemetrySample:
    """One GPS/wind fix. Optional wind fields are ``None`` when not measured."""

    timestamp: datetime
    lat: float
    lon: float
    sog: float
    cog: float
    hdg: Optional[float] = None
    awa: Optional[float] = None
    aws: Optional[float] = None
    twa: Optional[float] = None
    tws: Optional[float] = None


@dataclass(frozen=True, slots=True)
class VmgResult:
    timestamp: datetime
    vmg: float
    vmg_upwind: float
    vmg_downwind: float
    target_angle: float


@dataclass(frozen=True, slots=True)
class Layline:
    """Projected tack track as an ordered polyline starting at the boat."""

    points: Tuple[LatLon, ...]
    tack: Tack
    heading_deg: float

    def encoded(self, precision: int = 5) -> str:
        """Return the polyline in Google's encoded polyline format."""
        return polyline.encode(list(self.points), precision)


@dataclass(frozen=True, slots=True)
class LaylinePair:
    port: Layline
    starboard: Layline


@dataclass(frozen=True, slots=True)
class ManeuverEvent:
    """A detected wind-side crossing and its efficiency score."""

    timestamp: datetime
    lat: float
    lon: float
    lost_distance_m: float
    time_in_irons_s: float
    efficiency_pct: float
    kind: ManeuverKind = ManeuverKind.TACK
    heading_change_deg: float = 0.0
    speed_loss_kn: float = 0.0


@dataclass(frozen=True, slots=True)
class ManeuverStats:
    """Aggregate maneuver figures for a session."""

    total_maneuvers: int
    tacks: int
    gybes: int
    avg_tack_score: Optional[float]
    avg_tack_time_s: Optional[float]
    best_tack: Optional[ManeuverEvent]


@dataclass(frozen=True, slots=True)
class WindShiftEvent:
    timestamp: datetime
    shift_deg: float
    kind: ShiftKind
    twa_before: Optional[float] = None
    twa_after: Optional[float] = None
    tws_before: Optional[float] = None
    tws_after: Optional[float] = None

    @property
    def magnitude_deg(self) -> float:
        return abs(self.shift_deg)

    @property
    def direction(self) -> str:
        # Signed TWA grows when the wind veers (clockwise) on either tack.
        return "right" if self.shift_deg > 0 else "left"


@dataclass(frozen=True, slots=True)
class WindPattern:
    """Aggregate classification of a session's wind shifts.

    ``next_shift_prediction`` is a heuristic for advisory display only; it is
    not a forecast and its confidence is deliberately capped.
    """

    dominant_pattern: WindPatternKind
    pattern_strength: float
    total_shifts_detected: int
    avg_shift_magnitude: float
    wind_stability_score: float
    is_oscillating: bool
    avg_oscillation_period_min: Optional[float]
    next_shift_prediction: ShiftPrediction
    prediction_confidence: float


@dataclass(frozen=True, slots=True)
class StartLineBias:
    line_heading_deg: float
    bias_deg: float
    favored_end: FavoredEnd


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Summary figures for a telemetry stream."""

    duration_s: float
    distance_km: float
    avg_speed_kn: float
    max_speed_kn: float
    point_count: int

    @property
    def duration_label(self) -> str:
        return format_duration(self.duration_s)


__all__ = [
    "FavoredEnd",
    "LatLon",
    "Layline",
    "LaylinePair",
    "ManeuverEvent",
    "ManeuverKind",
    "ManeuverStats",
    "SessionStats",
    "ShiftKind",
    "ShiftPrediction",
    "StartLineBias",
    "Tack",
    "TelemetrySample",
    "VmgResult",
    "WindPattern",
    "WindPatternKind",
    "WindShiftEvent",
]
